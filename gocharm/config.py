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

"""Settings for a gocharm run."""

from __future__ import annotations

import dataclasses
import os
import pathlib
from collections.abc import Mapping
from typing import Any

from .discovery import resolve_repository
from .errors import ConfigurationError


@dataclasses.dataclass(frozen=True, kw_only=True)
class Settings:
    """Everything that controls a run.

    Use :meth:`Settings.from_environ` rather than building one by hand, so that
    environment defaults are applied consistently.
    """

    repository: pathlib.Path
    """The charm repository (from ``--repo`` or ``JUJU_REPOSITORY``)."""

    go: str = 'go'
    """The Go toolchain command (from ``--go`` or ``GOCHARM_GO``)."""

    test: bool = False
    """Run ``go test`` for each Go charm instead of building it."""

    verbose: bool = False
    """Log every charm considered, including those that are not Go charms."""

    jobs: int = 1
    """How many charms to process at once (from ``--jobs`` or ``GOCHARM_JOBS``)."""

    environ: Mapping[str, str] = dataclasses.field(default_factory=lambda: dict(os.environ))
    """The environment the Go toolchain's environment is derived from."""

    @classmethod
    def from_environ(
        cls,
        environ: Mapping[str, str] | None = None,
        *,
        repository: os.PathLike[str] | str | None = None,
        go: str | None = None,
        jobs: int | None = None,
        **options: Any,
    ) -> Settings:
        """Create settings from explicit options and the environment.

        Explicitly provided values take precedence over environment variables.

        Raises:
            ConfigurationError: if no repository is configured, or a value in
                the environment is invalid.
        """
        if environ is None:
            environ = os.environ
        environ = dict(environ)
        if jobs is None:
            raw_jobs = environ.get('GOCHARM_JOBS', '1')
            try:
                jobs = int(raw_jobs)
            except ValueError:
                raise ConfigurationError(f'invalid GOCHARM_JOBS value {raw_jobs!r}') from None
        if jobs < 1:
            raise ConfigurationError(f'jobs must be at least 1, not {jobs}')
        return cls(
            repository=resolve_repository(repository, environ),
            go=go or environ.get('GOCHARM_GO') or 'go',
            jobs=jobs,
            environ=environ,
            **options,
        )
