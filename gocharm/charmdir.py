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

"""Representation of a charm directory on disk."""

from __future__ import annotations

import dataclasses
import logging
import os
import pathlib
import tempfile
from typing import Any, TextIO

import yaml

from .errors import MetadataError, RevisionError

logger = logging.getLogger(__name__)

METADATA_FILE = 'metadata.yaml'
REVISION_FILE = 'revision'

# Use C speedups if available
_safe_loader = getattr(yaml, 'CSafeLoader', yaml.SafeLoader)


def _safe_load(stream: str | TextIO) -> Any:
    return yaml.load(stream, Loader=_safe_loader)  # noqa: S506


@dataclasses.dataclass(frozen=True)
class CharmDir:
    """A charm directory inside a charm repository.

    Charms live at ``<repository>/<series>/<name>``. The series is taken from
    the parent directory, and the name from the charm's ``metadata.yaml``.
    """

    path: pathlib.Path
    name: str
    series: str

    @classmethod
    def read(cls, path: pathlib.Path | str) -> CharmDir:
        """Read the charm at the given path.

        Raises:
            MetadataError: if ``metadata.yaml`` is missing, is not valid YAML,
                or does not declare a name.
        """
        path = pathlib.Path(path)
        meta = _read_metadata(path)
        name = meta.get('name')
        if not isinstance(name, str) or not name:
            raise MetadataError(path, f'{METADATA_FILE} does not declare a charm name')
        return cls(path=path, name=name, series=path.parent.name)

    @property
    def revision(self) -> int:
        """The revision currently recorded on disk.

        The ``revision`` file takes precedence; charms without one may still
        declare a revision in ``metadata.yaml``. Charms with neither are at
        revision 0.
        """
        revision_path = self.path / REVISION_FILE
        try:
            raw: Any = revision_path.read_text()
        except FileNotFoundError:
            try:
                raw = _read_metadata(self.path).get('revision', 0)
            except MetadataError as e:
                raise RevisionError(self.path, e.message) from e
        except OSError as e:
            raise RevisionError(self.path, f'cannot read revision: {e}') from e
        try:
            return int(str(raw).strip())
        except ValueError:
            raise RevisionError(self.path, f'invalid revision {raw!r}') from None

    def set_revision(self, revision: int):
        """Persist the revision atomically.

        The new value is written to a temporary file in the charm directory and
        renamed over the ``revision`` file, so a reader never sees a partial
        write.
        """
        try:
            fd, tmp_name = tempfile.mkstemp(prefix='.revision-', dir=self.path)
        except OSError as e:
            raise RevisionError(self.path, f'cannot write revision: {e}') from e
        try:
            with os.fdopen(fd, 'w') as f:
                f.write(f'{revision}\n')
            os.chmod(tmp_name, 0o644)
            os.replace(tmp_name, self.path / REVISION_FILE)
        except OSError as e:
            pathlib.Path(tmp_name).unlink(missing_ok=True)
            raise RevisionError(self.path, f'cannot write revision: {e}') from e

    def identifier(self, revision: int | None = None) -> str:
        """Return the canonical ``series/name-revision`` identifier."""
        if revision is None:
            revision = self.revision
        return f'{self.series}/{self.name}-{revision}'


def _read_metadata(path: pathlib.Path) -> dict[str, Any]:
    metadata_path = path / METADATA_FILE
    try:
        with metadata_path.open() as f:
            meta = _safe_load(f)
    except OSError as e:
        raise MetadataError(path, f'cannot read {METADATA_FILE}: {e}') from e
    except yaml.YAMLError as e:
        raise MetadataError(path, f'cannot parse {METADATA_FILE}: {e}') from e
    if not isinstance(meta, dict):
        raise MetadataError(path, f'{METADATA_FILE} is not a mapping')
    return meta


def advance_revision(charm: CharmDir) -> int:
    """Increment the charm's on-disk revision by one and return the new value."""
    revision = charm.revision + 1
    charm.set_revision(revision)
    logger.debug('Advanced %s to revision %d.', charm.path, revision)
    return revision
