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

"""Process every charm in a repository."""

from __future__ import annotations

import concurrent.futures
import logging
import pathlib
import sys
from collections.abc import Callable, Iterable, Iterator
from typing import TextIO

from .buildenv import BuildEnvironment, build_workspace
from .builder import RUNHOOK, RUNHOOK_MAIN, Builder
from .charmdir import CharmDir, advance_revision
from .config import Settings
from .discovery import find_charms, is_go_charm
from .errors import CharmError, IntrospectionError
from .introspect import BinaryIntrospector, Introspector, discover_hooks
from .result import CharmOutcome, RunResult, Status
from .stubs import sync_stubs

logger = logging.getLogger(__name__)


def process_charm(
    charm: CharmDir,
    settings: Settings,
    *,
    builder: Builder,
    introspector: Introspector,
) -> CharmOutcome:
    """Build one charm, returning what happened to it.

    Errors that only affect this charm are turned into a failed outcome; they
    never escape. The revision is only advanced when the binary was built,
    the hooks were discovered, and the stubs were written.
    """
    try:
        go_charm = is_go_charm(charm)
    except CharmError as e:
        logger.warning('%s', e)
        return CharmOutcome(charm.path, Status.FAILED, str(e))
    if not go_charm:
        if settings.verbose:
            logger.info('Ignoring non-Go charm %s.', charm.path)
        return CharmOutcome(charm.path, Status.SKIPPED, 'not a Go charm')

    if settings.verbose:
        logger.info('Processing %s.', charm.path)
    try:
        with build_workspace(charm):
            if settings.test:
                env = BuildEnvironment.for_charm(charm, settings.environ, cross_compile=False)
                builder.test(charm, env)
                return CharmOutcome(charm.path, Status.TESTED)

            env = BuildEnvironment.for_charm(charm, settings.environ, cross_compile=True)
            builder.build(charm, RUNHOOK, RUNHOOK_MAIN, env)
            hooks = discover_hooks(charm, introspector)
        report = sync_stubs(charm, hooks)
        revision = advance_revision(charm)
    except IntrospectionError as e:
        logger.error('%s: hooks not discoverable: %s', charm.path, e.message)
        return CharmOutcome(charm.path, Status.FAILED, f'hooks not discoverable: {e.message}')
    except CharmError as e:
        logger.error('failed to compile or test charm: %s', e)
        return CharmOutcome(charm.path, Status.FAILED, str(e))

    return CharmOutcome(
        charm.path,
        Status.SUCCEEDED,
        identifier=charm.identifier(revision),
        hooks=tuple(hooks),
        conflicts=tuple(report.conflicts),
    )


def _read_charm(path: pathlib.Path) -> CharmDir | CharmOutcome:
    try:
        return CharmDir.read(path)
    except CharmError as e:
        logger.error('cannot read charm: %s', e)
        return CharmOutcome(path, Status.FAILED, str(e))


def run(
    settings: Settings,
    *,
    builder: Builder | None = None,
    introspector: Introspector | None = None,
    out: TextIO | None = None,
) -> RunResult:
    """Process all charms in the configured repository.

    One line identifying the new revision is written to ``out`` (default
    stdout) for each charm that was built; everything else is logged.

    Raises:
        ConfigurationError: if there are no charms in the repository.
    """
    if out is None:
        out = sys.stdout
    if builder is None:
        builder = Builder(settings.go)
    if introspector is None:
        introspector = BinaryIntrospector(builder, settings.environ)

    paths = find_charms(settings.repository)
    result = RunResult()
    charms: list[CharmDir] = []
    for path in paths:
        charm = _read_charm(path)
        if isinstance(charm, CharmOutcome):
            result.record(charm)
        else:
            charms.append(charm)

    def process(charm: CharmDir) -> CharmOutcome:
        return process_charm(charm, settings, builder=builder, introspector=introspector)

    for outcome in _map(process, charms, settings.jobs):
        result.record(outcome)
        if outcome.identifier is not None:
            print(outcome.identifier, file=out, flush=True)
    logger.debug('Finished: %r', result)
    return result


def _map(
    fn: Callable[[CharmDir], CharmOutcome], charms: Iterable[CharmDir], jobs: int
) -> Iterator[CharmOutcome]:
    # Outcomes are yielded in the order the charms were given, whatever order
    # they complete in.
    if jobs <= 1:
        yield from map(fn, charms)
        return
    with concurrent.futures.ThreadPoolExecutor(max_workers=jobs) as executor:
        yield from executor.map(fn, charms)
