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

"""Discover which hooks a charm registers.

Registration is observed, never acted upon: the charm's ``RegisterHooks``
function is handed a registry that only records names, so no hook body runs
while the hooks are discovered. The :class:`HookRecorder` is the Python side of
that capability; an :class:`Introspector` is anything that drives a charm's
registration logic into a recorder.
"""

from __future__ import annotations

import logging
import re
import subprocess
import typing
from collections.abc import Iterable, Mapping

from .buildenv import BuildEnvironment
from .builder import HOOKS_MAIN, Builder
from .charmdir import CharmDir
from .errors import CharmError, IntrospectionError

logger = logging.getLogger(__name__)

STOP_HOOK = 'stop'
"""The hook that every charm gets, whether it registers it or not."""

HOOKS_BINARY = 'runhook-hooks'

# Juju hook names are lower case words joined by hyphens.
_HOOK_NAME = re.compile(r'[a-z0-9][a-z0-9-]*')


class HookSet(tuple[str, ...]):
    """A sorted, duplicate-free sequence of hook names that always includes ``stop``."""

    def __new__(cls, names: Iterable[str] = ()) -> HookSet:
        return super().__new__(cls, sorted({*names, STOP_HOOK}))

    def __repr__(self) -> str:
        return f'{type(self).__name__}({list(self)!r})'


class HookRecorder:
    """Collects hook names as a charm registers them.

    Args:
        charm: the charm being introspected, used in error messages.
    """

    def __init__(self, charm: CharmDir):
        self.charm = charm
        self._names: set[str] = set()

    def register(self, name: str):
        """Record that the charm registered a hook with the given name.

        Raises:
            IntrospectionError: if the name is not a valid hook name.
        """
        if not _HOOK_NAME.fullmatch(name):
            raise IntrospectionError(self.charm.path, f'invalid hook name {name!r}')
        self._names.add(name)

    def hooks(self) -> HookSet:
        """Return everything registered so far, plus the ``stop`` hook."""
        return HookSet(self._names)


class Introspector(typing.Protocol):
    """Something that runs a charm's hook registration into a recorder."""

    def __call__(self, charm: CharmDir, recorder: HookRecorder) -> None: ...  # noqa: D102


class BinaryIntrospector:
    """Discover hooks by building and running a local introspection binary.

    The binary is compiled for the host (not cross-compiled) from
    :data:`gocharm.builder.HOOKS_MAIN`, which prints one registered hook name
    per line. It is removed again once its output has been read.

    Args:
        builder: used to compile the introspection binary.
        environ: the environment to base the build environment on.
    """

    def __init__(self, builder: Builder, environ: Mapping[str, str] | None = None):
        self.builder = builder
        self.environ = environ

    def __call__(self, charm: CharmDir, recorder: HookRecorder) -> None:
        env = BuildEnvironment.for_charm(charm, self.environ, cross_compile=False)
        binary = self.builder.build(charm, HOOKS_BINARY, HOOKS_MAIN, env)
        try:
            proc = subprocess.run(
                [str(binary)],
                cwd=charm.path,
                env=dict(env),
                capture_output=True,
                encoding='utf-8',
                check=False,
            )
        except (OSError, UnicodeDecodeError) as e:
            raise IntrospectionError(charm.path, f'cannot run {HOOKS_BINARY}: {e}') from e
        finally:
            binary.unlink(missing_ok=True)
        if proc.returncode != 0:
            raise IntrospectionError(
                charm.path,
                f'{HOOKS_BINARY} exited with status {proc.returncode}: {proc.stderr.strip()}',
            )
        for line in proc.stdout.splitlines():
            if line.strip():
                recorder.register(line.strip())


def discover_hooks(charm: CharmDir, introspector: Introspector) -> HookSet:
    """Return the hooks the charm registers, including ``stop``.

    Raises:
        IntrospectionError: if the hooks cannot be discovered for any reason,
            including a failure to build the introspection binary.
    """
    recorder = HookRecorder(charm)
    try:
        introspector(charm, recorder)
    except IntrospectionError:
        raise
    except CharmError as e:
        raise IntrospectionError(charm.path, e.message) from e
    hooks = recorder.hooks()
    logger.info('Charm %s registers hooks: %s', charm.path, ', '.join(hooks))
    return hooks
