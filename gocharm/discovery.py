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

"""Find charms in a repository and decide which ones have Go hooks."""

from __future__ import annotations

import logging
import os
import pathlib
import stat
from collections.abc import Mapping

from .charmdir import METADATA_FILE, CharmDir
from .errors import ClassificationError, ConfigurationError

logger = logging.getLogger(__name__)

REPOSITORY_ENV = 'JUJU_REPOSITORY'

RUNHOOK_PACKAGE = 'runhook'
"""Name of the Go package, under ``src/``, that a charm provides to opt in."""


def resolve_repository(
    explicit: os.PathLike[str] | str | None = None,
    environ: Mapping[str, str] | None = None,
) -> pathlib.Path:
    """Return the charm repository root.

    An explicitly given path wins over the ``JUJU_REPOSITORY`` environment
    variable.

    Raises:
        ConfigurationError: if neither is set.
    """
    if environ is None:
        environ = os.environ
    repo = os.fspath(explicit) if explicit else environ.get(REPOSITORY_ENV, '')
    if not repo:
        raise ConfigurationError(
            f'no charm repo directory specified (use --repo or set {REPOSITORY_ENV})'
        )
    return pathlib.Path(repo)


def find_charms(root: pathlib.Path) -> list[pathlib.Path]:
    """Return the directories of all charms in the repository.

    A charm is any directory at ``<root>/<series>/<name>`` that contains a
    ``metadata.yaml`` file. The result is sorted so that output is the same
    from one run to the next.

    Raises:
        ConfigurationError: if no charms are found.
    """
    paths = sorted(p.parent for p in root.glob(f'*/*/{METADATA_FILE}'))
    if not paths:
        raise ConfigurationError(f'no charms found in {root}')
    logger.debug('Found %d charms in %s.', len(paths), root)
    return paths


def is_go_charm(charm: CharmDir) -> bool:
    """Report whether the charm has hooks written in Go.

    A charm opts in by providing a ``src/runhook`` directory.

    Raises:
        ClassificationError: if the directory cannot be inspected for any
            reason other than it not existing.
    """
    runhook_dir = charm.path / 'src' / RUNHOOK_PACKAGE
    try:
        st = runhook_dir.stat()
    except FileNotFoundError:
        return False
    except OSError as e:
        raise ClassificationError(
            charm.path, f'cannot determine if charm has Go hooks: {e}'
        ) from e
    return stat.S_ISDIR(st.st_mode)
