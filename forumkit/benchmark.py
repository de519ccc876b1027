# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2025-2026 The Forumkit Project Developers

"""Timing of SQL queries and other expensive operations."""

from __future__ import annotations

import logging
import time
from typing import Any


log = logging.getLogger("benchmark")


class Benchmark:
    """Records how long things take.

    Items are started and stopped in a stack-like fashion: :meth:`stop`
    finishes the most recently started item that has not been stopped.
    """

    TYPE_SQL_QUERY = 1
    TYPE_OTHER = 0

    def __init__(self):
        self._start_time = time.perf_counter()
        self._items: list[dict[str, Any]] = []
        self._open: list[int] = []
        self._query_count = 0
        self._query_time = 0.0

    def start(self, text: str, type: int = TYPE_OTHER) -> int:
        """Start timing something, returns the index of the new item."""
        self._items.append(
            {"text": text, "type": type, "before": time.perf_counter(), "use": None}
        )
        index = len(self._items) - 1
        self._open.append(index)
        if type == self.TYPE_SQL_QUERY:
            self._query_count += 1
        return index

    def stop(self, index: int | None = None) -> float:
        """Stop timing an item and return its duration in seconds.

        Args:
            index: which item to stop, by default the most recent open one.

        Raises:
            RuntimeError: nothing is being timed.
        """
        if not self._open:
            raise RuntimeError("No benchmark item has been started")
        if index is None:
            index = self._open.pop()
        else:
            self._open.remove(index)
        item = self._items[index]
        item["after"] = time.perf_counter()
        item["use"] = item["after"] - item["before"]
        if item["type"] == self.TYPE_SQL_QUERY:
            self._query_time += item["use"]
        log.debug("%.6fs: %s", item["use"], item["text"])
        return item["use"]

    def get_items(self) -> list[dict[str, Any]]:
        return list(self._items)

    def get_query_count(self) -> int:
        return self._query_count

    def get_query_execution_time(self) -> float:
        return self._query_time

    def get_execution_time(self) -> float:
        return time.perf_counter() - self._start_time
