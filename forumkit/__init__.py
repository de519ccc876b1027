# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2025-2026 The Forumkit Project Developers

"""Forumkit is a component set for forum and CMS backends.

Forumkit provides a database access layer built around prepared
statements, a declarative form builder with field validation,
dependencies and data processing, and bookkeeping for responsive
screen breakpoints and scroll locking.
"""

__copyright__ = "Copyright (C) 2025-2026 The Forumkit Project Developers"
__credits__ = "The Forumkit Project Developers"
__license__ = "AGPL-3.0-or-later"

from .version import __version__

import sys

if sys.version_info < (3, 8):
    raise RuntimeError("Forumkit requires Python 3.8 or newer")

from .config import create_config, load_config, setup_logging
from .benchmark import Benchmark

__all__ = [
    "__version__",
    "Benchmark",
    "create_config",
    "load_config",
    "setup_logging",
]
