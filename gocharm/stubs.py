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

"""Write the hook stubs that launch the compiled hook binary."""

from __future__ import annotations

import dataclasses
import logging
import pathlib
import shlex
from collections.abc import Iterable

from .builder import RUNHOOK
from .charmdir import CharmDir
from .errors import StubError

logger = logging.getLogger(__name__)

HOOKS_DIR = 'hooks'

_STUB_TEMPLATE = """\
#!/bin/sh
# This file is automatically generated by gocharm.
exec "$CHARM_DIR/bin/{binary}" {hook}
"""


def stub_content(hook: str, binary: str = RUNHOOK) -> str:
    """Return the content gocharm generates for the given hook."""
    return _STUB_TEMPLATE.format(binary=binary, hook=shlex.quote(hook))


@dataclasses.dataclass
class StubReport:
    """What happened to each stub during :func:`sync_stubs`."""

    written: list[pathlib.Path] = dataclasses.field(default_factory=list[pathlib.Path])
    """Stubs that did not exist and were created."""

    unchanged: list[pathlib.Path] = dataclasses.field(default_factory=list[pathlib.Path])
    """Stubs that already had the generated content."""

    conflicts: list[pathlib.Path] = dataclasses.field(default_factory=list[pathlib.Path])
    """Stubs with content that differs from what would be generated; left alone."""


def sync_stubs(
    charm: CharmDir, hooks: Iterable[str], binary: str = RUNHOOK
) -> StubReport:
    """Make sure there is a stub in ``hooks/`` for every hook.

    Missing stubs are created. Existing stubs are never overwritten: if one
    differs from the generated content it is assumed to have been edited by
    the charm author, and it is reported as a conflict instead. Stubs for
    hooks that are not in ``hooks`` are left in place.

    Raises:
        StubError: if a stub cannot be read or written.
    """
    report = StubReport()
    hooks_dir = charm.path / HOOKS_DIR
    try:
        hooks_dir.mkdir(exist_ok=True)
    except OSError as e:
        raise StubError(charm.path, f'cannot create {HOOKS_DIR} directory: {e}') from e

    for hook in sorted(hooks):
        path = hooks_dir / hook
        content = stub_content(hook, binary).encode()
        try:
            existing = path.read_bytes()
        except FileNotFoundError:
            existing = None
        except (OSError, ValueError) as e:
            raise StubError(charm.path, f'cannot read hook stub {path}: {e}') from e

        if existing is None:
            try:
                path.write_bytes(content)
                path.chmod(0o755)
            except (OSError, ValueError) as e:
                raise StubError(charm.path, f'cannot write hook stub {path}: {e}') from e
            logger.debug('Wrote hook stub %s.', path)
            report.written.append(path)
        elif existing == content:
            report.unchanged.append(path)
        else:
            logger.warning('%s has been modified; not overwriting it', path)
            report.conflicts.append(path)
    return report
