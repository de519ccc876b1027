# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2025-2026 The Forumkit Project Developers

"""Misc string utilities shared by the form builder and the CLI."""

from __future__ import annotations

import html
import re
from typing import Any


# whitespace plus the zero-width and right-to-left override characters
# that users like to paste into text fields
_trim_chars = r"[\s\u200b\u202e\ufeff]+"
_leading_re = re.compile("^" + _trim_chars)
_trailing_re = re.compile(_trim_chars + "$")


def trim(text: str) -> str:
    """Remove leading and trailing whitespace, including invisible characters.

    Unlike :py:meth:`str.strip` this also removes zero-width spaces,
    byte-order marks and the right-to-left override character.
    """
    text = _leading_re.sub("", text)
    return _trailing_re.sub("", text)


def escape_html(value: Any) -> str:
    """Escape a value for output in html, ``None`` becomes empty."""
    if value is None:
        return ""
    return html.escape(str(value), quote=True)


def html_attributes(attrs: dict[str, Any]) -> str:
    """Render a dict as html attributes, with a leading space if nonempty.

    A value of ``None`` produces a value-less attribute such as
    ``required``.
    """
    parts = []
    for name, value in attrs.items():
        if value is None:
            parts.append(name)
        else:
            parts.append('{}="{}"'.format(name, escape_html(value)))
    if not parts:
        return ""
    return " " + " ".join(parts)
