# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2025-2026 The Forumkit Project Developers

"""Prepared statements on top of DB-API cursors."""

from __future__ import annotations

import functools
import logging
import sqlite3
from typing import Any, Sequence

import peewee as pw
import pymysql

from forumkit.benchmark import Benchmark
from forumkit.exceptions import (
    DatabaseQueryException,
    DatabaseQueryExecutionException,
    SystemException,
)


log = logging.getLogger("DB")

# errors the drivers (or peewee on their behalf) raise
DRIVER_ERRORS = (sqlite3.Error, pymysql.err.Error, pw.PeeweeException)

# fetch styles
FETCH_ASSOC = 2
FETCH_NUM = 3
FETCH_BOTH = 4


def _error_info(e: Exception) -> tuple[int, str]:
    """Extract an error number and description from a driver exception."""
    if isinstance(e, pymysql.err.Error) and len(e.args) >= 2:
        if isinstance(e.args[0], int):
            return (e.args[0], str(e.args[1]))
    # sqlite_errorcode only exists on Python >= 3.11, 1 is SQLITE_ERROR
    code = getattr(e, "sqlite_errorcode", None)
    return (code if code is not None else 1, str(e))


class PreparedStatement:
    """A prepared statement wrapping a cursor of a :class:`Database`.

    Attributes not defined here are delegated to the cursor, so for
    example ``statement.fetchmany(3)`` works.  Errors raised by the
    driver are turned into :class:`DatabaseQueryException`.

    The query uses ``?`` placeholders; ``driver_query`` is the same query
    in the paramstyle of the driver, which is what actually gets executed.
    """

    def __init__(self, database, cursor, query: str = "", *, driver_query=None):
        self.database = database
        self._cursor = cursor
        self._closed = False
        self.query = query
        self._driver_query = query if driver_query is None else driver_query
        self.parameters: Sequence[Any] | dict[str, Any] = []
        self._error = (0, "")

    def __getattr__(self, name):
        if name.startswith("__"):
            raise AttributeError(name)
        cursor = self.__dict__.get("_cursor")
        if cursor is None or not hasattr(cursor, name):
            raise SystemException(f"unknown method '{name}'")
        attr = getattr(cursor, name)
        if not callable(attr):
            return attr

        @functools.wraps(attr)
        def delegate(*args, **kwargs):
            try:
                return attr(*args, **kwargs)
            except DRIVER_ERRORS as e:
                self._error = _error_info(e)
                raise DatabaseQueryException(
                    f"Could call '{name}' on '{self.query}'"
                ) from e

        return delegate

    def execute(self, parameters: Sequence[Any] | dict[str, Any] = ()):
        """Execute the statement with the given parameters.

        Raises:
            DatabaseQueryExecutionException: the driver refused.
        """
        self.parameters = parameters
        self.database.increment_query_count()
        if self._closed:
            self._cursor = self.database.cursor()
            self._closed = False
        if isinstance(parameters, dict):
            params = parameters
        else:
            params = tuple(parameters)

        benchmark = self.database.benchmark
        if benchmark:
            benchmark.start(self.query, Benchmark.TYPE_SQL_QUERY)
        try:
            self._cursor.execute(self._driver_query, params)
        except DRIVER_ERRORS as e:
            self._error = _error_info(e)
            log.debug("Statement failed: %s: %s", self.query, e)
            raise DatabaseQueryExecutionException(
                f"Could not execute statement '{self.query}'", parameters
            ) from e
        finally:
            if benchmark:
                benchmark.stop()
        self._error = (0, "")
        self.database.statement_executed(self._cursor)

    def _column_names(self) -> list[str]:
        if not self._cursor.description:
            return []
        return [d[0] for d in self._cursor.description]

    def fetch(self, type: int = FETCH_ASSOC):
        """Fetch the next row in the given style, ``None`` if there are no more."""
        if self._closed:
            return None
        try:
            row = self._cursor.fetchone()
        except DRIVER_ERRORS as e:
            self._error = _error_info(e)
            raise DatabaseQueryException(f"Could not fetch from '{self.query}'") from e
        if row is None:
            return None
        if type == FETCH_NUM:
            return tuple(row)
        names = self._column_names()
        if type == FETCH_ASSOC:
            return dict(zip(names, row))
        if type == FETCH_BOTH:
            both: dict[Any, Any] = dict(zip(names, row))
            both.update(enumerate(row))
            return both
        raise ValueError(f"Unknown fetch type {type}")

    def fetch_array(self, type: int | None = None):
        """Fetch the next row, by default as a dict keyed by column name.

        Returns:
            The row or ``None`` if the result set has been exhausted.
        """
        if type is None:
            type = FETCH_ASSOC
        return self.fetch(type)

    def fetch_single_row(self, type: int | None = None):
        """Fetch the next row and close the cursor.

        It is not possible to fetch further rows afterwards, but the
        statement can be executed again.
        """
        row = self.fetch_array(type)
        self.close_cursor()
        return row

    def fetch_column(self, column_number: int = 0):
        """One column of the next row, or ``None`` if there are no more rows."""
        row = self.fetch(FETCH_NUM)
        if row is None:
            return None
        return row[column_number]

    def fetch_single_column(self, column_number: int = 0):
        """One column of the next row, closing the cursor afterwards."""
        column = self.fetch_column(column_number)
        self.close_cursor()
        return column

    def fetch_object(self, class_name):
        """Fetch the next row as ``class_name(None, row)``, or ``None``."""
        row = self.fetch_array()
        if row is None:
            return None
        return class_name(None, row)

    def fetch_objects(self, class_name, key_property: str | None = None):
        """Fetch all remaining rows as objects.

        Args:
            class_name: class to construct, typically a
                :class:`forumkit.data.DatabaseObject`.
            key_property: if given, return a dict keyed by this attribute
                of the objects instead of a list.
        """
        objects: Any = [] if key_property is None else {}
        while True:
            obj = self.fetch_object(class_name)
            if obj is None:
                break
            if key_property is None:
                objects.append(obj)
            else:
                objects[getattr(obj, key_property)] = obj
        return objects

    def fetch_map(self, key_column: str, value_column: str, unique_key: bool = True):
        """Map one column of all rows onto another.

        Args:
            key_column: name of the key column.
            value_column: name of the value column.
            unique_key: if False, each key maps to a list of all the values
                fetched for it.  Otherwise later rows overwrite earlier ones.
        """
        result: dict[Any, Any] = {}
        while True:
            row = self.fetch_array()
            if row is None:
                break
            key = row[key_column]
            value = row[value_column]
            if unique_key:
                result[key] = value
            else:
                result.setdefault(key, []).append(value)
        return result

    def fetch_list(self, column: str) -> list[Any]:
        """A flat list of the values of one column of all rows.

        See :meth:`fetch_all` to get the whole rows.

        Raises:
            ValueError: no such column in the result.
        """
        result = []
        while True:
            row = self.fetch_array()
            if row is None:
                break
            if column not in row:
                raise ValueError(
                    f"The requested column '{column}' is not contained"
                    " in the result rows."
                )
            result.append(row[column])
        return result

    def fetch_all(self, type: int | None = None) -> list[Any]:
        rows = []
        while True:
            row = self.fetch_array(type)
            if row is None:
                break
            rows.append(row)
        return rows

    def close_cursor(self):
        if not self._closed:
            self._cursor.close()
            self._closed = True

    def get_affected_rows(self) -> int:
        """Number of rows affected by the last INSERT, UPDATE or DELETE.

        Raises:
            DatabaseQueryException: the driver cannot tell us.
        """
        try:
            return self._cursor.rowcount
        except DRIVER_ERRORS as e:
            raise DatabaseQueryException(
                f"Could fetch affected rows for '{self.query}'"
            ) from e

    def get_error_number(self) -> int:
        """The number of the last error, 0 if there was none."""
        return self._error[0]

    def get_error_desc(self) -> str:
        """The description of the last error, empty if there was none."""
        return self._error[1]

    def get_sql_query(self) -> str:
        return self.query

    def get_sql_parameters(self):
        return self.parameters
