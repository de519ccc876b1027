# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2025-2026 The Forumkit Project Developers

"""Responsive breakpoints and scroll locking.

A :class:`Viewport` models the browser window as far as layout code
cares: its width, the platform and a few properties of the document.
A :class:`Screen` keeps track of listeners on media queries of that
viewport, and counts how many parties want body scrolling disabled or
have a page overlay open, so that nested dialogs and menus compose.
"""

from __future__ import annotations

import logging
import re
from typing import Callable, NamedTuple
import uuid


log = logging.getLogger("screen")

# named breakpoints used by the stylesheets
media_query_aliases = {
    # smartphone
    "screen-xs": "(max-width: 544px)",
    # tablet (portrait)
    "screen-sm": "(min-width: 545px) and (max-width: 768px)",
    # smartphone + tablet (portrait)
    "screen-sm-down": "(max-width: 768px)",
    # tablet (portrait) + tablet (landscape) + desktop
    "screen-sm-up": "(min-width: 545px)",
    # tablet (portrait) + tablet (landscape)
    "screen-sm-md": "(min-width: 545px) and (max-width: 1024px)",
    # tablet (landscape)
    "screen-md": "(min-width: 769px) and (max-width: 1024px)",
    # smartphone + tablet (portrait) + tablet (landscape)
    "screen-md-down": "(max-width: 1024px)",
    # tablet (landscape) + desktop
    "screen-md-up": "(min-width: 769px)",
    # desktop
    "screen-lg": "(min-width: 1025px)",
    "screen-lg-only": "(min-width: 1025px) and (max-width: 1280px)",
    "screen-lg-down": "(max-width: 1280px)",
    "screen-xl": "(min-width: 1281px)",
}

_feature_re = re.compile(
    r"^\(\s*(min|max)-width\s*:\s*(\d+)\s*px\s*\)$", re.IGNORECASE
)
_and_re = re.compile(r"\s+and\s+", re.IGNORECASE)
_media_types = ("all", "screen")


def parse_media_query(query: str) -> list[tuple[str, int]]:
    """Parse a media query into a list of ``("min"|"max", pixels)`` conditions.

    Only width features joined by ``and``, optionally preceded by the
    ``all`` or ``screen`` media type, are supported.

    Raises:
        ValueError: anything else.
    """
    conditions = []
    for part in _and_re.split(query.strip()):
        if part.lower() in _media_types and not conditions:
            continue
        m = _feature_re.match(part)
        if not m:
            raise ValueError(f"Unsupported media query '{query}'")
        conditions.append((m.group(1).lower(), int(m.group(2))))
    if not conditions:
        raise ValueError(f"Unsupported media query '{query}'")
    return conditions


def serialize_media_query(conditions: list[tuple[str, int]]) -> str:
    return " and ".join(f"({kind}-width: {px}px)" for kind, px in conditions)


class MediaQueryListEvent(NamedTuple):
    media: str
    matches: bool


class MediaQueryList:
    """A media query evaluated against a viewport.

    Like browsers do, :attr:`media` holds the query in its serialized
    form, which need not be the string it was created from.
    """

    def __init__(self, viewport: Viewport, query: str):
        self.viewport = viewport
        self._conditions = parse_media_query(query)
        self.media = serialize_media_query(self._conditions)
        self._listeners: list[Callable[[MediaQueryListEvent], None]] = []
        self._last = self.matches

    @property
    def matches(self) -> bool:
        w = self.viewport.width
        for kind, px in self._conditions:
            if kind == "min" and w < px:
                return False
            if kind == "max" and w > px:
                return False
        return True

    def add_listener(self, listener: Callable[[MediaQueryListEvent], None]):
        self._listeners.append(listener)

    def remove_listener(self, listener):
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _viewport_changed(self):
        now = self.matches
        if now == self._last:
            return
        self._last = now
        event = MediaQueryListEvent(self.media, now)
        for listener in list(self._listeners):
            listener(event)


class Document:
    """The parts of a document that scroll locking touches."""

    def __init__(self):
        self.root_classes: set[str] = set()
        self.body_scroll_top = 0
        self.document_scroll_top = 0
        self.page_container_style: dict[str, str] = {}


class Viewport:
    def __init__(self, width: int = 1280, *, platform: str = "desktop"):
        self.width = width
        self.platform = platform
        self.document = Document()
        self._media_query_lists: list[MediaQueryList] = []

    def match_media(self, query: str) -> MediaQueryList:
        mql = MediaQueryList(self, query)
        self._media_query_lists.append(mql)
        return mql

    def resize(self, width: int):
        """Change the width, notifying media queries whose state changed."""
        log.debug("Viewport resized from %dpx to %dpx", self.width, width)
        self.width = width
        for mql in list(self._media_query_lists):
            mql._viewport_changed()


class _QueryObject:
    def __init__(self, mql: MediaQueryList):
        self.mql = mql
        self.callbacks_match: dict[str, Callable[[], None]] = {}
        self.callbacks_unmatch: dict[str, Callable[[], None]] = {}
        self.callbacks_setup: dict[str, Callable[[], None]] = {}


class Screen:
    """Media query listeners and scroll bookkeeping for one viewport."""

    def __init__(self, viewport: Viewport):
        self.viewport = viewport
        # keyed by the serialized query, so all spellings share one object
        self._mql: dict[str, _QueryObject] = {}
        self._scroll_disable_counter = 0
        self._scroll_offset_from: str | None = None
        self._scroll_top = 0
        self._page_overlay_counter = 0
        self._dialog_container = None

    def on(
        self,
        query: str,
        *,
        match: Callable[[], None] | None = None,
        unmatch: Callable[[], None] | None = None,
        setup: Callable[[], None] | None = None,
    ) -> str:
        """Register callbacks for a media query or one of the aliases.

        Keyword Args:
            match: called whenever the query starts matching.
            unmatch: called whenever the query stops matching.
            setup: called once, the first time the query matches; right
                away if it matches now.  On that first match the setup
                callbacks run instead of the match callbacks.

        Returns:
            An id that removes the callbacks again, see :meth:`remove`.
        """
        key = str(uuid.uuid4())
        query_object = self._get_query_object(query)
        if match is not None:
            query_object.callbacks_match[key] = match
        if unmatch is not None:
            query_object.callbacks_unmatch[key] = unmatch
        if setup is not None:
            if query_object.mql.matches:
                setup()
            else:
                query_object.callbacks_setup[key] = setup
        return key

    def remove(self, query: str, key: str):
        """Remove the callbacks registered for ``query`` under the given id."""
        query_object = self._get_query_object(query)
        query_object.callbacks_match.pop(key, None)
        query_object.callbacks_unmatch.pop(key, None)
        query_object.callbacks_setup.pop(key, None)

    def is_(self, query: str) -> bool:
        """True if the media query currently matches."""
        return self._get_query_object(query).mql.matches

    def scroll_disable(self):
        """Stop the body from scrolling, keeping its current position."""
        if self._scroll_disable_counter == 0:
            doc = self.viewport.document
            self._scroll_top = doc.body_scroll_top
            self._scroll_offset_from = "body"
            if not self._scroll_top:
                self._scroll_top = doc.document_scroll_top
                self._scroll_offset_from = "documentElement"

            # shifting the page makes Mobile Safari snap, moving it does not
            if self.viewport.platform == "ios":
                doc.page_container_style["position"] = "relative"
                doc.page_container_style["top"] = f"-{self._scroll_top}px"
            else:
                doc.page_container_style["margin-top"] = f"-{self._scroll_top}px"

            doc.root_classes.add("disableScrolling")
            log.debug("Scrolling disabled at offset %s", self._scroll_top)
        self._scroll_disable_counter += 1

    def scroll_enable(self):
        """Undo one :meth:`scroll_disable`; the last one restores scrolling."""
        if not self._scroll_disable_counter:
            return
        self._scroll_disable_counter -= 1
        if self._scroll_disable_counter:
            return
        doc = self.viewport.document
        doc.root_classes.discard("disableScrolling")
        if self.viewport.platform == "ios":
            doc.page_container_style.pop("position", None)
            doc.page_container_style.pop("top", None)
        else:
            doc.page_container_style.pop("margin-top", None)
        if self._scroll_top:
            if self._scroll_offset_from == "body":
                doc.body_scroll_top = int(self._scroll_top)
            else:
                doc.document_scroll_top = int(self._scroll_top)
        log.debug("Scrolling enabled")

    def is_scroll_disabled(self) -> bool:
        return self._scroll_disable_counter > 0

    def page_overlay_open(self):
        """Note that a page overlay has been opened."""
        if self._page_overlay_counter == 0:
            self.viewport.document.root_classes.add("pageOverlayActive")
        self._page_overlay_counter += 1

    def page_overlay_close(self):
        """Note that one page overlay has been closed."""
        if not self._page_overlay_counter:
            return
        self._page_overlay_counter -= 1
        if self._page_overlay_counter == 0:
            self.viewport.document.root_classes.discard("pageOverlayActive")

    def page_overlay_is_active(self) -> bool:
        return self._page_overlay_counter > 0

    def set_dialog_container(self, container):
        """Set the element dialogs are placed in."""
        self._dialog_container = container

    def get_dialog_container(self):
        return self._dialog_container

    def _get_query_object(self, query: str) -> _QueryObject:
        if not isinstance(query, str) or query.strip() == "":
            raise TypeError("Expected a non-empty string for parameter 'query'.")
        query = media_query_aliases.get(query, query)
        media = serialize_media_query(parse_media_query(query))

        query_object = self._mql.get(media)
        if query_object is None:
            query_object = _QueryObject(self.viewport.match_media(query))
            query_object.mql.add_listener(self._mql_change)
            self._mql[media] = query_object
        return query_object

    def _mql_change(self, event: MediaQueryListEvent):
        query_object = self._get_query_object(event.media)
        if event.matches:
            if query_object.callbacks_setup:
                callbacks = list(query_object.callbacks_setup.values())
                # setup callbacks only ever run once
                query_object.callbacks_setup = {}
                for callback in callbacks:
                    callback()
            else:
                for callback in list(query_object.callbacks_match.values()):
                    callback()
        else:
            for callback in list(query_object.callbacks_unmatch.values()):
                callback()
