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

"""Set up logging for the command line."""

from __future__ import annotations

import logging
import os

import rich.console
import rich.logging

logger = logging.getLogger('gocharm')


def setup_logging(verbosity: int = 0):
    """Send gocharm's log messages to stderr.

    Warnings and errors are always shown. Each level of verbosity lowers the
    threshold by one level, down to DEBUG. ``LOGLEVEL`` sets the starting
    threshold (default WARNING).
    """
    base_loglevel = int(os.getenv('LOGLEVEL', logging.WARNING))
    verbosity = min(verbosity, 2)
    loglevel = max(base_loglevel - (verbosity * 10), logging.DEBUG)

    # Diagnostics go to stderr so that stdout only carries charm identifiers.
    handler = rich.logging.RichHandler(
        console=rich.console.Console(stderr=True),
        show_time=False,
        show_path=False,
    )
    handler.setFormatter(logging.Formatter('%(message)s'))
    logger.handlers[:] = [handler]
    logger.setLevel(loglevel)
    logger.propagate = False
