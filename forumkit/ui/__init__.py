# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2025-2026 The Forumkit Project Developers

"""Client-side layout helpers."""

__copyright__ = "Copyright (C) 2025-2026 The Forumkit Project Developers"
__credits__ = "The Forumkit Project Developers"
__license__ = "AGPL-3.0-or-later"

from .screen import (
    Document,
    MediaQueryList,
    Screen,
    Viewport,
    media_query_aliases,
    parse_media_query,
)

__all__ = [
    "Document",
    "MediaQueryList",
    "Screen",
    "Viewport",
    "media_query_aliases",
    "parse_media_query",
]
