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

import logging
import os
import pathlib
import shutil
import tempfile
import typing

import pytest

from gocharm.charmdir import CharmDir


class FakeScript:
    """Put fake executables on ``PATH`` that record how they were called."""

    def __init__(self, request: pytest.FixtureRequest):
        fake_script_path = tempfile.mkdtemp('-fake_script')
        self.path = pathlib.Path(fake_script_path)
        old_path = os.environ['PATH']
        os.environ['PATH'] = os.pathsep.join([fake_script_path, old_path])

        def cleanup():
            shutil.rmtree(self.path)
            os.environ['PATH'] = old_path

        request.addfinalizer(cleanup)

    def write(self, name: str, content: str):
        template_args: typing.Dict[str, str] = {
            'name': name,
            'path': self.path.as_posix(),
            'content': content,
        }

        path: pathlib.Path = self.path / name
        with path.open('wt') as f:
            # Before executing the provided script, dump the provided arguments in calls.txt.
            # RS 'record separator' (octal 036 in ASCII), FS 'file separator' (octal 034 in ASCII).
            f.write(
                """#!/bin/sh
{{ printf {name}; printf "\\036%s" "$@"; printf "\\034"; }} >> {path}/calls.txt
{content}""".format_map(template_args)
            )
        path.chmod(0o755)

    def calls(self, clear: bool = False) -> typing.List[typing.List[str]]:
        calls_file: pathlib.Path = self.path / 'calls.txt'
        if not calls_file.exists():
            return []

        with calls_file.open('r+t', newline='\n', encoding='utf8') as f:
            calls = [line.split('\036') for line in f.read().split('\034')[:-1]]
            if clear:
                f.truncate(0)
        return calls


def write_fake_go(
    fake_script: FakeScript,
    hooks: typing.Iterable[str] = (),
    *,
    build_status: int = 0,
    hooks_status: int = 0,
    test_status: int = 0,
    produce: bool = True,
):
    """Install a fake ``go`` command.

    ``go build -o OUT PKG`` writes an executable shell script to OUT (unless
    ``produce`` is false) and leaves a ``pkg`` directory behind, like a real
    GOPATH build may. When PKG is the hook-listing entry point, the executable
    prints the given hook names.
    """
    listing = ''.join(f'echo {hook}\n' for hook in hooks)
    produce_cmd = ':' if produce else 'exit 0'
    fake_script.write(
        'go',
        f"""\
if [ "$1" = test ]; then
  exit {test_status}
fi
if [ {build_status} -ne 0 ]; then
  echo "cannot find package runhook" >&2
  exit {build_status}
fi
{produce_cmd}
out="$3"
mkdir -p "$(dirname "$out")" pkg/linux_amd64
case "$4" in
*/runhook-hooks)
  cat > "$out" <<'HOOKS'
#!/bin/sh
{listing}exit {hooks_status}
HOOKS
  ;;
*)
  printf '#!/bin/sh\\nexit 0\\n' > "$out"
  ;;
esac
chmod +x "$out"
""",
    )


@pytest.fixture
def fake_script(request: pytest.FixtureRequest) -> FakeScript:
    return FakeScript(request)


@pytest.fixture
def fake_go(fake_script: FakeScript):
    """Install a fake ``go`` command; call the result to reconfigure it."""

    def configure(hooks: typing.Iterable[str] = ('config-changed',), **kwargs: typing.Any):
        write_fake_go(fake_script, hooks, **kwargs)
        return fake_script

    configure()
    return configure


@pytest.fixture
def repo(tmp_path: pathlib.Path) -> pathlib.Path:
    root = tmp_path / 'repo'
    root.mkdir()
    return root


def make_charm(
    root: pathlib.Path,
    name: str,
    *,
    series: str = 'trusty',
    revision: int | None = 1,
    go: bool = True,
) -> CharmDir:
    """Create a charm directory under the repository root and return it."""
    path = root / series / name
    path.mkdir(parents=True)
    (path / 'metadata.yaml').write_text(f'name: {name}\nsummary: test charm\n')
    if revision is not None:
        (path / 'revision').write_text(f'{revision}\n')
    if go:
        runhook = path / 'src' / 'runhook'
        runhook.mkdir(parents=True)
        (runhook / 'hooks.go').write_text(
            'package runhook\n\n'
            'import "launchpad.net/juju-utils/hook"\n\n'
            'func RegisterHooks(r *hook.Registry) {}\n'
        )
    return CharmDir.read(path)


@pytest.fixture
def charm_factory(repo: pathlib.Path):
    def factory(name: str = 'mycharm', **kwargs: typing.Any) -> CharmDir:
        return make_charm(repo, name, **kwargs)

    return factory


@pytest.fixture(autouse=True)
def reset_logging():
    logger = logging.getLogger('gocharm')
    handlers, level, propagate = logger.handlers[:], logger.level, logger.propagate
    yield
    logger.handlers[:] = handlers
    logger.setLevel(level)
    logger.propagate = propagate
