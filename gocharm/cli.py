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

"""The ``gocharm`` command."""

import logging
import pathlib
from typing import Optional

import typer

from . import _main
from .config import Settings
from .errors import ConfigurationError
from .log import setup_logging
from .result import EXIT_FATAL
from .version import version

logger = logging.getLogger(__name__)

app = typer.Typer(
    name='gocharm',
    help='Build Juju charms whose hooks are written in Go. '
    'Every charm under the repository with a src/runhook package is compiled '
    'into bin/runhook, hook stubs are written, and its revision is bumped.',
    add_completion=False,
)


def _version(value: bool):
    if value:
        typer.echo(version)
        raise typer.Exit()


@app.command()
def build(
    repo: Optional[pathlib.Path] = typer.Option(  # noqa: UP007
        None,
        '--repo',
        help='Charm repo directory (defaults to $JUJU_REPOSITORY).',
        file_okay=False,
    ),
    test: bool = typer.Option(
        False, '--test', help='Run tests instead of building.', is_flag=True
    ),
    verbose: int = typer.Option(
        0, '-v', '--verbose', count=True, help='Print information about charms being built.'
    ),
    jobs: Optional[int] = typer.Option(  # noqa: UP007
        None, '-j', '--jobs', min=1, help='Number of charms to process at once.'
    ),
    go: Optional[str] = typer.Option(  # noqa: UP007
        None, '--go', help='Go toolchain command (defaults to $GOCHARM_GO or "go").'
    ),
    show_version: bool = typer.Option(
        False, '--version', callback=_version, is_eager=True, help='Print the version and exit.'
    ),
):
    """Build the Go charms in a charm repository."""
    setup_logging(verbose)
    try:
        settings = Settings.from_environ(
            repository=repo, go=go, jobs=jobs, test=test, verbose=bool(verbose)
        )
        result = _main.run(settings)
    except ConfigurationError as e:
        logger.critical('%s', e)
        raise typer.Exit(EXIT_FATAL) from None
    raise typer.Exit(result.exit_status)


def main():
    app()


if __name__ == '__main__':
    main()
