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

"""The environment that the Go toolchain runs in for a single charm."""

from __future__ import annotations

import contextlib
import logging
import os
import pathlib
import shutil
from collections.abc import Iterator, Mapping

from .charmdir import CharmDir

logger = logging.getLogger(__name__)

TARGET_OS = 'linux'
TARGET_ARCH = 'amd64'

MAIN_DIR = pathlib.Path('src', '_main')
"""Where generated entry points are written, relative to the charm root."""

CACHE_DIR = pathlib.Path('pkg')
"""Where the Go toolchain may leave compiled packages, relative to the charm root."""


class BuildEnvironment(Mapping[str, str]):
    """An immutable set of environment variables for a Go toolchain invocation.

    Setting a variable that is already present replaces its value; there is
    only ever one value per name. The environment is passed explicitly to each
    subprocess and never leaks into ``os.environ`` or into another charm's
    build.
    """

    def __init__(self, variables: Mapping[str, str] | None = None):
        self._variables: dict[str, str] = dict(variables or {})

    @classmethod
    def for_charm(
        cls,
        charm: CharmDir,
        environ: Mapping[str, str] | None = None,
        *,
        cross_compile: bool,
    ) -> BuildEnvironment:
        """Create the environment used to compile the given charm.

        The charm directory is put at the front of ``GOPATH`` so that packages
        inside the charm (``runhook`` and anything it imports from the charm)
        take precedence over the inherited ``GOPATH``.

        Args:
            charm: the charm being built.
            environ: the environment to start from; defaults to ``os.environ``.
            cross_compile: if true, target linux/amd64 with cgo disabled, which
                is what deployed units run; otherwise build for the host so the
                result can be executed locally.
        """
        if environ is None:
            environ = os.environ
        env = cls(environ)
        gopath = [str(charm.path)]
        if environ.get('GOPATH'):
            gopath.append(environ['GOPATH'])
        env = env.with_overrides(GOPATH=os.pathsep.join(gopath), GO111MODULE='off')
        if cross_compile:
            env = env.with_overrides(CGO_ENABLED='0', GOOS=TARGET_OS, GOARCH=TARGET_ARCH)
        return env

    def with_overrides(self, **variables: str) -> BuildEnvironment:
        """Return a copy of this environment with the given variables set."""
        merged = dict(self._variables)
        merged.update(variables)
        return BuildEnvironment(merged)

    def __getitem__(self, key: str) -> str:
        return self._variables[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._variables)

    def __len__(self) -> int:
        return len(self._variables)

    def __repr__(self) -> str:
        go_vars = {k: v for k, v in self._variables.items() if k.startswith(('GO', 'CGO'))}
        return f'{type(self).__name__}({go_vars!r})'


@contextlib.contextmanager
def build_workspace(charm: CharmDir) -> Iterator[pathlib.Path]:
    """Scope the throwaway directories a build creates inside a charm.

    Yields the directory for generated entry points. On exit, whether the
    build succeeded or not, the generated sources and the Go package cache
    are removed from the charm.
    """
    main_dir = charm.path / MAIN_DIR
    try:
        yield main_dir
    finally:
        for path in (main_dir, charm.path / CACHE_DIR):
            if path.exists():
                logger.debug('Removing %s.', path)
                shutil.rmtree(path, ignore_errors=True)
