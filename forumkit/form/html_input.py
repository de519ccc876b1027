# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2025-2026 The Forumkit Project Developers

"""Sanitising the html submitted through wysiwyg editors."""

from __future__ import annotations

import logging
import re

from bs4 import BeautifulSoup, Comment

from forumkit.misc_utils import trim


log = logging.getLogger("form")

# elements removed together with their content
dropped_elements = ["script", "style", "iframe", "object", "embed", "form"]
# elements after which the text content gets a line break
block_elements = ["p", "div", "li", "blockquote", "pre", "h1", "h2", "h3", "h4"]
url_attributes = ("href", "src", "action", "formaction", "xlink:href")

_script_url_re = re.compile(r"^(javascript|vbscript):", re.IGNORECASE)
_invisible_re = re.compile(r"[\s\x00-\x1f]+")


def is_script_url(url: str) -> bool:
    return bool(_script_url_re.match(_invisible_re.sub("", url)))


class HtmlInputProcessor:
    """Cleans up message html and extracts its plain text.

    Elements that can run code or embed other documents are removed,
    as are comments, event handler attributes and ``javascript:`` urls.
    """

    def __init__(self):
        self._html = ""
        self._text = ""
        self._object_type: str | None = None
        self._object_id = 0

    def process(self, html: str, object_type: str, object_id: int = 0):
        """Process the html of a message of the given object type."""
        self._object_type = object_type
        self._object_id = object_id
        soup = BeautifulSoup(html or "", "html.parser")
        removed = 0
        for el in soup.find_all(dropped_elements):
            # nested inside an element that is already gone
            if el.decomposed:
                continue
            el.decompose()
            removed += 1
        for comment in soup.find_all(string=lambda s: isinstance(s, Comment)):
            comment.extract()
        for tag in soup.find_all(True):
            for attr in list(tag.attrs):
                value = tag.attrs[attr]
                if attr.lower().startswith("on"):
                    del tag.attrs[attr]
                    removed += 1
                elif attr.lower() in url_attributes and is_script_url(str(value)):
                    del tag.attrs[attr]
                    removed += 1
        if removed:
            log.debug("Removed %d unsafe elements or attributes", removed)
        self._html = trim(str(soup))
        self._text = self._extract_text(self._html)
        return self

    @staticmethod
    def _extract_text(html: str) -> str:
        soup = BeautifulSoup(html, "html.parser")
        for br in soup.find_all("br"):
            br.replace_with("\n")
        for el in soup.find_all(block_elements):
            el.append("\n")
        lines = [trim(line) for line in soup.get_text().splitlines()]
        return "\n".join(line for line in lines if line)

    def get_html(self) -> str:
        return self._html

    def get_text_content(self) -> str:
        return self._text

    def get_object_type(self) -> str | None:
        return self._object_type

    def get_object_id(self) -> int:
        return self._object_id

    def set_object_id(self, object_id: int):
        """Set the id of the message once it has been saved."""
        self._object_id = object_id
