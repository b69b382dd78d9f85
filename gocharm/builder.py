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

"""Compile a charm's Go hooks with the Go toolchain."""

from __future__ import annotations

import logging
import os
import pathlib
import subprocess
from collections.abc import Mapping, Sequence

from .buildenv import MAIN_DIR
from .charmdir import CharmDir
from .errors import BuildError, CharmTestError

logger = logging.getLogger(__name__)

RUNHOOK = 'runhook'
"""Name of the executable that the hook stubs invoke."""

HOOK_PACKAGE = 'launchpad.net/juju-utils/hook'

RUNHOOK_MAIN = f"""\
// This file is automatically generated. Do not edit.

package main

import (
	"fmt"
	"os"

	runhook "runhook"
	"{HOOK_PACKAGE}"
)

func main() {{
	r := hook.NewRegistry()
	runhook.RegisterHooks(r)
	if err := hook.Main(r); err != nil {{
		fmt.Fprintf(os.Stderr, "runhook: %v\\n", err)
		os.Exit(1)
	}}
}}
"""
"""Entry point of the deployed executable: dispatch to the registered hook."""

HOOKS_MAIN = f"""\
// This file is automatically generated. Do not edit.

package main

import (
	"fmt"

	runhook "runhook"
	"{HOOK_PACKAGE}"
)

func main() {{
	r := hook.NewRegistry()
	runhook.RegisterHooks(r)
	for _, name := range r.RegisteredHooks() {{
		fmt.Println(name)
	}}
}}
"""
"""Entry point that lists the registered hooks without running any of them."""


class Builder:
    """Drive the ``go`` command for a charm.

    Args:
        go: the Go toolchain command; a name looked up on ``PATH`` or a path.
    """

    def __init__(self, go: str = 'go'):
        self.go = go

    def build(
        self,
        charm: CharmDir,
        binary_name: str,
        main_code: str,
        env: Mapping[str, str],
    ) -> pathlib.Path:
        """Build ``main_code`` into ``bin/<binary_name>`` inside the charm.

        The entry point is written to ``src/_main/<binary_name>/main.go`` so
        that it can import the charm's own packages through ``GOPATH``.

        Returns:
            The path of the executable.

        Raises:
            BuildError: if the compiler cannot be run, fails, or does not
                produce the executable.
        """
        main_dir = charm.path / MAIN_DIR / binary_name
        try:
            main_dir.mkdir(parents=True, exist_ok=True)
            (main_dir / 'main.go').write_text(main_code)
        except OSError as e:
            raise BuildError(charm.path, f'cannot write {binary_name} main package: {e}') from e

        binary = charm.path / 'bin' / binary_name
        package = f'{MAIN_DIR.name}/{binary_name}'
        logger.info('Building %s in %s.', binary_name, charm.path)
        self._run(
            charm, [self.go, 'build', '-o', str(binary), package], env, BuildError,
            f'cannot build {binary_name}',
        )
        if not binary.is_file():
            raise BuildError(charm.path, f'expected binary not produced: {binary}')
        return binary

    def test(self, charm: CharmDir, env: Mapping[str, str]):
        """Run ``go test`` over every Go package in the charm.

        Raises:
            CharmTestError: if the tests fail or cannot be run.
        """
        packages = packages_in_dir(charm.path)
        if not packages:
            logger.info('No Go packages to test in %s.', charm.path)
            return
        logger.info('Testing %d packages in %s.', len(packages), charm.path)
        self._run(charm, [self.go, 'test', *packages], env, CharmTestError, 'tests failed')

    def _run(
        self,
        charm: CharmDir,
        args: Sequence[str],
        env: Mapping[str, str],
        error: type[BuildError],
        message: str,
    ):
        logger.debug('Running %s', ' '.join(args))
        try:
            proc = subprocess.run(
                args,
                cwd=charm.path,
                env=dict(env),
                capture_output=True,
                encoding='utf-8',
                errors='replace',
                check=False,
            )
        except OSError as e:
            raise error(charm.path, f'{message}: cannot run {args[0]}: {e}') from e
        if proc.returncode != 0:
            output = proc.stderr or proc.stdout
            raise error(charm.path, f'{message}: exit status {proc.returncode}', output)
        if proc.stdout:
            logger.debug('%s', proc.stdout.rstrip())


def packages_in_dir(path: pathlib.Path) -> list[str]:
    """Return the import paths of the Go packages under ``<path>/src``.

    Generated entry points under ``src/_main`` are not included. The result is
    sorted.
    """
    src = path / 'src'
    packages: set[str] = set()
    for dirpath, dirnames, filenames in os.walk(src):
        rel = pathlib.Path(dirpath).relative_to(src)
        if rel == pathlib.Path('.'):
            dirnames[:] = [d for d in dirnames if d != MAIN_DIR.name]
            continue
        if any(name.endswith('.go') for name in filenames):
            packages.add(rel.as_posix())
    return sorted(packages)
