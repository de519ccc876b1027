# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2025-2026 The Forumkit Project Developers

"""Objects backed by a single database row."""

from __future__ import annotations

from typing import Any

from forumkit.db import database_proxy


class DatabaseObject:
    """A row of a database table.

    Subclasses set :attr:`database_table_name` and, if the primary key
    is not called ``<table>ID``, :attr:`database_table_index_name`.
    Columns are available as attributes; unknown columns are ``None``.

    Args:
        object_id: primary key of a row to load from the database.
        row: column values, used instead of loading.
        obj: another object of the same table whose data is copied.
    """

    database_table_name = ""
    database_table_index_name = ""

    def __init__(self, object_id=None, row: dict[str, Any] | None = None, obj=None):
        if object_id is not None:
            stmt = database_proxy.prepare_statement(
                "SELECT * FROM {} WHERE {} = ?".format(
                    self.get_database_table_name(),
                    self.get_database_table_index_name(),
                )
            )
            stmt.execute([object_id])
            row = stmt.fetch_single_row()
            if row is None:
                row = {}
        elif obj is not None:
            row = obj.get_data()
        self._data: dict[str, Any] = dict(row) if row else {}

    def __getattr__(self, name):
        if name.startswith("__"):
            raise AttributeError(name)
        return self.__dict__.get("_data", {}).get(name)

    def __contains__(self, name):
        return name in self._data

    def __repr__(self):
        return "{}({!r})".format(type(self).__name__, self.get_object_id())

    def get_data(self) -> dict[str, Any]:
        return self._data

    def get_object_id(self):
        return self._data.get(self.get_database_table_index_name())

    @classmethod
    def get_database_table_name(cls) -> str:
        if not cls.database_table_name:
            raise RuntimeError(f"{cls.__name__} has no database table")
        return cls.database_table_name

    @classmethod
    def get_database_table_index_name(cls) -> str:
        if cls.database_table_index_name:
            return cls.database_table_index_name
        return cls.get_database_table_name() + "ID"
