# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2025-2026 The Forumkit Project Developers

"""Forumkit database stuff."""

__copyright__ = "Copyright (C) 2025-2026 The Forumkit Project Developers"
__credits__ = "The Forumkit Project Developers"
__license__ = "AGPL-3.0-or-later"

import peewee as pw

# the application database, initialised with a :class:`Database`
database_proxy = pw.Proxy()

from .database import Database, database_from_config
from .statement import PreparedStatement, FETCH_ASSOC, FETCH_BOTH, FETCH_NUM

__all__ = [
    "database_proxy",
    "database_from_config",
    "Database",
    "PreparedStatement",
    "FETCH_ASSOC",
    "FETCH_BOTH",
    "FETCH_NUM",
]
