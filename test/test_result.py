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

from gocharm.result import EXIT_FAILED, EXIT_OK, CharmOutcome, RunResult, Status


def test_empty():
    result = RunResult()
    assert result.outcomes == ()
    assert result.exit_status == EXIT_OK


def test_exit_status():
    result = RunResult()
    result.record(CharmOutcome(pathlib.Path('a'), Status.SKIPPED, 'not a Go charm'))
    result.record(CharmOutcome(pathlib.Path('b'), Status.SUCCEEDED, identifier='trusty/b-2'))
    assert result.exit_status == EXIT_OK
    result.record(CharmOutcome(pathlib.Path('c'), Status.FAILED, 'boom'))
    assert result.exit_status == EXIT_FAILED
    assert [o.path.name for o in result.succeeded] == ['b']
    assert [o.path.name for o in result.failed] == ['c']
    assert [o.ok for o in result.outcomes] == [True, True, False]


def test_conflicted():
    result = RunResult()
    conflict = pathlib.Path('b/hooks/install')
    result.record(CharmOutcome(pathlib.Path('a'), Status.SUCCEEDED, identifier='trusty/a-1'))
    result.record(
        CharmOutcome(
            pathlib.Path('b'), Status.SUCCEEDED, identifier='trusty/b-1', conflicts=(conflict,)
        )
    )
    assert [o.path.name for o in result.conflicted] == ['b']
    assert result.exit_status == EXIT_OK


def test_repr():
    result = RunResult()
    result.record(CharmOutcome(pathlib.Path('a'), Status.FAILED, 'boom'))
    assert repr(result) == (
        "<RunResult {'succeeded': 0, 'tested': 0, 'skipped': 0, 'failed': 1}>"
    )
