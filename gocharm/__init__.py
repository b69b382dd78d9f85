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

"""Build Juju charms whose hooks are written in Go.

A charm opts in by providing a ``src/runhook`` Go package with a
``RegisterHooks`` function. gocharm compiles that package into a single
linux/amd64 executable, ``bin/runhook``, discovers which hooks it registers,
writes a stub for each one under ``hooks/``, and bumps the charm's revision.

The main entry point is :func:`gocharm.run`; the ``gocharm`` command wraps it.
"""

from __future__ import annotations

__all__ = [  # noqa: RUF022 `__all__` is not sorted
    '__version__',
    'run',
    'process_charm',
    # Charms
    'CharmDir',
    'advance_revision',
    'find_charms',
    'is_go_charm',
    'resolve_repository',
    # Building
    'BuildEnvironment',
    'Builder',
    'build_workspace',
    # Hooks
    'BinaryIntrospector',
    'HookRecorder',
    'HookSet',
    'Introspector',
    'discover_hooks',
    'StubReport',
    'stub_content',
    'sync_stubs',
    # Results and settings
    'CharmOutcome',
    'RunResult',
    'Settings',
    'Status',
    # Errors
    'BuildError',
    'CharmError',
    'CharmTestError',
    'ClassificationError',
    'ConfigurationError',
    'GocharmError',
    'IntrospectionError',
    'MetadataError',
    'RevisionError',
    'StubError',
]

from ._main import process_charm, run
from .buildenv import BuildEnvironment, build_workspace
from .builder import Builder
from .charmdir import CharmDir, advance_revision
from .config import Settings
from .discovery import find_charms, is_go_charm, resolve_repository
from .errors import (
    BuildError,
    CharmError,
    CharmTestError,
    ClassificationError,
    ConfigurationError,
    GocharmError,
    IntrospectionError,
    MetadataError,
    RevisionError,
    StubError,
)
from .introspect import BinaryIntrospector, HookRecorder, HookSet, Introspector, discover_hooks
from .result import CharmOutcome, RunResult, Status
from .stubs import StubReport, stub_content, sync_stubs
from .version import version as __version__
