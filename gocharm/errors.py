# Copyright 2026 Canonical Ltd.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
# http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Exceptions raised while building charms.

Two kinds of failure exist. A :class:`ConfigurationError` means the run as a
whole cannot proceed: nothing is built and the process exits with
:data:`gocharm.result.EXIT_FATAL`. Every other error is a :class:`CharmError`,
which is tied to a single charm; the orchestrator records it against that
charm and moves on to the next one.
"""

from __future__ import annotations

import pathlib


class GocharmError(RuntimeError):
    """Base class for all errors raised by gocharm."""


class ConfigurationError(GocharmError):
    """Raised when the run cannot start, for example when no charms are found."""


class CharmError(GocharmError):
    """Base class for errors that only affect a single charm.

    Args:
        path: the root directory of the charm that failed.
        message: a human-readable description of the failure.
    """

    def __init__(self, path: pathlib.Path | str, message: str):
        super().__init__(message)
        self.path = pathlib.Path(path)
        self.message = message

    def __str__(self) -> str:
        return f'{self.path}: {self.message}'


class MetadataError(CharmError):
    """Raised when a charm's metadata.yaml cannot be read."""


class ClassificationError(CharmError):
    """Raised when it cannot be determined whether a charm has Go hooks."""


class BuildError(CharmError):
    """Raised when the Go compiler fails or does not produce the expected binary."""

    def __init__(self, path: pathlib.Path | str, message: str, output: str = ''):
        super().__init__(path, message)
        self.output = output

    def __str__(self) -> str:
        text = super().__str__()
        if self.output:
            text = f'{text}\n{self.output.rstrip()}'
        return text


class CharmTestError(BuildError):
    """Raised when ``go test`` fails for a charm."""


class IntrospectionError(CharmError):
    """Raised when the hooks registered by a charm cannot be discovered."""


class StubError(CharmError):
    """Raised when a hook stub cannot be written."""


class RevisionError(CharmError):
    """Raised when a charm's revision cannot be read or persisted."""
