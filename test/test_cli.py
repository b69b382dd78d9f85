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

from __future__ import annotations

import pathlib
import typing

import pytest
from typer.testing import CliRunner

from gocharm import __version__
from gocharm.cli import app

from .conftest import FakeScript, make_charm


@pytest.fixture
def runner(monkeypatch: pytest.MonkeyPatch) -> CliRunner:
    monkeypatch.delenv('JUJU_REPOSITORY', raising=False)
    monkeypatch.delenv('GOCHARM_GO', raising=False)
    monkeypatch.delenv('GOCHARM_JOBS', raising=False)
    return CliRunner()


def test_version(runner: CliRunner):
    result = runner.invoke(app, ['--version'])
    assert result.exit_code == 0
    assert result.stdout.strip() == __version__


def test_no_repository(runner: CliRunner):
    result = runner.invoke(app, [])
    assert result.exit_code == 2
    assert 'trusty/' not in result.stdout


def test_no_charms(runner: CliRunner, repo: pathlib.Path):
    result = runner.invoke(app, ['--repo', str(repo)])
    assert result.exit_code == 2


def test_build(
    runner: CliRunner, repo: pathlib.Path, fake_go: typing.Callable[..., FakeScript]
):
    fake_go(['install'])
    charm = make_charm(repo, 'mycharm', revision=1)
    make_charm(repo, 'plain', go=False)
    result = runner.invoke(app, ['-v'], env={'JUJU_REPOSITORY': str(repo)})
    assert result.exit_code == 0, result.output
    assert 'trusty/mycharm-2' in result.stdout.splitlines()
    assert charm.revision == 2


def test_failure_exit_status(
    runner: CliRunner, repo: pathlib.Path, fake_go: typing.Callable[..., FakeScript]
):
    fake_go(build_status=1)
    charm = make_charm(repo, 'mycharm', revision=1)
    result = runner.invoke(app, ['--repo', str(repo), '--jobs', '2'])
    assert result.exit_code == 1
    assert 'trusty/mycharm' not in result.stdout
    assert charm.revision == 1


def test_go_option(runner: CliRunner, repo: pathlib.Path, fake_script: FakeScript):
    fake_script.write('mygo', 'exit 0')
    make_charm(repo, 'mycharm')
    result = runner.invoke(app, ['--repo', str(repo), '--go', 'mygo', '--test'])
    assert result.exit_code == 0, result.output
    assert fake_script.calls() == [['mygo', 'test', 'runhook']]


def test_invalid_jobs(runner: CliRunner, repo: pathlib.Path):
    result = runner.invoke(app, ['--repo', str(repo), '--jobs', '0'])
    assert result.exit_code == 2
