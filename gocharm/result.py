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

"""The outcome of a gocharm run."""

from __future__ import annotations

import dataclasses
import enum
import pathlib

EXIT_OK = 0
EXIT_FAILED = 1
"""At least one charm failed."""
EXIT_FATAL = 2
"""The run could not start at all."""


class Status(enum.Enum):
    """What happened to a single charm."""

    SUCCEEDED = 'succeeded'
    """Built, stubs synchronised, and revision advanced."""

    TESTED = 'tested'
    """Tests passed; nothing was built."""

    SKIPPED = 'skipped'
    """Not a Go charm."""

    FAILED = 'failed'


@dataclasses.dataclass(frozen=True)
class CharmOutcome:
    """The outcome of processing one charm."""

    path: pathlib.Path
    status: Status
    cause: str = ''
    identifier: str | None = None
    hooks: tuple[str, ...] = ()
    conflicts: tuple[pathlib.Path, ...] = ()

    @property
    def ok(self) -> bool:
        return self.status is not Status.FAILED


class RunResult:
    """The outcomes of all charms in a run, in the order they were processed."""

    def __init__(self):
        self._outcomes: list[CharmOutcome] = []

    def record(self, outcome: CharmOutcome):
        self._outcomes.append(outcome)

    @property
    def outcomes(self) -> tuple[CharmOutcome, ...]:
        return tuple(self._outcomes)

    @property
    def succeeded(self) -> list[CharmOutcome]:
        return [o for o in self._outcomes if o.status is Status.SUCCEEDED]

    @property
    def failed(self) -> list[CharmOutcome]:
        return [o for o in self._outcomes if o.status is Status.FAILED]

    @property
    def conflicted(self) -> list[CharmOutcome]:
        """Charms that were processed but have hand-edited stubs."""
        return [o for o in self._outcomes if o.conflicts]

    @property
    def exit_status(self) -> int:
        return EXIT_FAILED if self.failed else EXIT_OK

    def __repr__(self) -> str:
        counts = {s.value: sum(o.status is s for o in self._outcomes) for s in Status}
        return f'<RunResult {counts}>'
