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

"""Setup script for gocharm."""

from importlib.util import module_from_spec, spec_from_file_location

from setuptools import find_packages, setup


def _read_me() -> str:
    """Return the README content from the file."""
    with open("README.md", "rt", encoding="utf8") as fh:
        readme = fh.read()
    return readme


def _get_version() -> str:
    """Get the version via gocharm/version.py, without loading gocharm/__init__.py."""
    spec = spec_from_file_location('gocharm.version', 'gocharm/version.py')
    if spec is None:
        raise ModuleNotFoundError('could not find /gocharm/version.py')
    if spec.loader is None:
        raise AttributeError('loader', spec, 'invalid module')
    module = module_from_spec(spec)
    spec.loader.exec_module(module)

    return module.version


setup(
    name="gocharm",
    version=_get_version(),
    description="Build Juju charms with hooks written in Go",
    long_description=_read_me(),
    long_description_content_type="text/markdown",
    license="Apache-2.0",
    packages=find_packages(include=('gocharm', 'gocharm.*')),
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: Apache Software License",
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "Operating System :: MacOS :: MacOS X",
        "Operating System :: POSIX :: Linux",
    ],
    python_requires='>=3.10',
    install_requires=[
        'PyYAML==6.*',
        'rich>=13',
        'typer>=0.9',
    ],
    extras_require={
        'testing': ['pytest'],
    },
    entry_points={
        'console_scripts': ['gocharm = gocharm.cli:main'],
    },
)
