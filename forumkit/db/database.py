# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2025-2026 The Forumkit Project Developers

from __future__ import annotations

from contextlib import closing, contextmanager
import logging
from pathlib import Path
from typing import Any

import peewee as pw
import pymysql

from forumkit.benchmark import Benchmark
from forumkit.exceptions import DatabaseQueryException, DatabaseTransactionException
from . import database_proxy
from .statement import DRIVER_ERRORS, PreparedStatement


log = logging.getLogger("DB")


def convert_placeholders(query: str, param: str) -> str:
    """Replace unquoted ``?`` placeholders by the driver's paramstyle.

    For the "format" paramstyle, literal percent signs are doubled as
    the driver interpolates the whole query string.
    """
    if param == "?":
        return query
    out = []
    quote = None
    for c in query:
        if c == "%" and param == "%s":
            out.append("%%")
            continue
        if quote:
            if c == quote:
                quote = None
        elif c in ("'", '"', "`"):
            quote = c
        elif c == "?":
            out.append(param)
            continue
        out.append(c)
    return "".join(out)


class Database:
    """A connection to the Forumkit database.

    If a ``db_name`` is given we connect to a MySQL (or MariaDB) server,
    creating the database if needed, otherwise a SQLite file is used.
    Statements are prepared with ``?`` placeholders regardless of the
    backend.  The new database becomes the one behind
    :data:`forumkit.db.database_proxy`.
    """

    def __init__(
        self,
        sqlite_file: Path | str = "forumkit.db",
        *,
        db_name: str | None = None,
        db_host: str = "127.0.0.1",
        db_port: int = 3306,
        db_username: str | None = None,
        db_password: str | None = None,
        benchmark: bool = False,
    ):
        if db_name:
            log.info(f"Connecting to MySQL database: {db_name}...")
            self._db = self.connect_mysql(
                db_name, db_host, db_port, db_username, db_password
            )
        else:
            log.info(f"Connecting to SQLite: {sqlite_file}...")
            self._db = self.connect_sqlite(sqlite_file)
        self._db.connect(reuse_if_open=True)
        log.info("Database connected.")
        self.benchmark = Benchmark() if benchmark else None
        self._query_count = 0
        self._active_transactions = 0
        self._last_cursor = None
        database_proxy.initialize(self)

    def connect_mysql(self, db_name, db_host, db_port, db_username, db_password):
        mysql_connection = pymysql.connect(
            host=db_host,
            port=db_port,
            user=db_username,
            password=db_password,
        )
        with mysql_connection.cursor() as cur:
            cur.execute(f"CREATE DATABASE IF NOT EXISTS `{db_name}`;")
        mysql_connection.close()

        return pw.MySQLDatabase(
            db_name,
            host=db_host,
            port=db_port,
            user=db_username,
            password=db_password,
        )

    def connect_sqlite(self, sqlite_file):
        db = pw.SqliteDatabase(None)
        # can't handle pathlib?
        db.init(str(sqlite_file))
        return db

    @property
    def is_mysql(self) -> bool:
        return isinstance(self._db, pw.MySQLDatabase)

    def connection(self):
        """The underlying DB-API connection, reconnecting if needed."""
        return self._db.connection()

    def cursor(self):
        return self.connection().cursor()

    def close(self):
        if self._active_transactions:
            log.warning(
                "Closing database with %d open transaction(s)",
                self._active_transactions,
            )
            self._active_transactions = 0
        self._db.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()

    # Statements

    def handle_limit_parameter(
        self, query: str, limit: int = 0, offset: int = 0
    ) -> str:
        """Append a LIMIT clause to the query if a positive limit is given."""
        limit = int(limit)
        offset = int(offset)
        if limit < 0 or offset < 0:
            raise ValueError(f"limit={limit} and offset={offset} cannot be negative")
        if limit:
            query += f" LIMIT {limit}"
            if offset:
                query += f" OFFSET {offset}"
        return query

    def prepare_statement(
        self, query: str, limit: int = 0, offset: int = 0
    ) -> PreparedStatement:
        """Prepare a statement for execution.

        Args:
            query: SQL using ``?`` for its parameters.
            limit: maximum number of rows, zero means no limit.
            offset: number of rows to skip, only used with a limit.

        Raises:
            DatabaseQueryException: we could not get a cursor.
        """
        query = self.handle_limit_parameter(query, limit, offset)
        try:
            cursor = self.cursor()
        except DRIVER_ERRORS as e:
            raise DatabaseQueryException(
                f"Could not prepare statement '{query}'"
            ) from e
        return PreparedStatement(
            self,
            cursor,
            query,
            driver_query=convert_placeholders(query, self._db.param),
        )

    def increment_query_count(self):
        self._query_count += 1

    def get_query_count(self) -> int:
        return self._query_count

    def statement_executed(self, cursor):
        """Remember the cursor of the most recent successful execution."""
        self._last_cursor = cursor

    def get_insert_id(self) -> int | None:
        """The row id generated by the most recent INSERT, if any."""
        if self._last_cursor is None:
            return None
        return self._db.last_insert_id(self._last_cursor)

    def get_version(self) -> str:
        if self.is_mysql:
            stmt = self.prepare_statement("SELECT VERSION()")
        else:
            stmt = self.prepare_statement("SELECT sqlite_version()")
        stmt.execute()
        return str(stmt.fetch_single_column())

    # Transactions

    def _execute_raw(self, sql: str):
        with closing(self.cursor()) as cur:
            cur.execute(sql)

    def get_active_transactions(self) -> int:
        return self._active_transactions

    def begin_transaction(self):
        """Start a transaction, or a savepoint inside an active one."""
        if self._active_transactions == 0:
            sql = "BEGIN"
        else:
            sql = f"SAVEPOINT level{self._active_transactions}"
        try:
            self._execute_raw(sql)
        except DRIVER_ERRORS as e:
            raise DatabaseTransactionException(f"Could not {sql}") from e
        self._active_transactions += 1
        log.debug("%s (depth %d)", sql, self._active_transactions)

    def commit_transaction(self):
        if self._active_transactions == 0:
            raise DatabaseTransactionException("No active transaction to commit")
        if self._active_transactions == 1:
            sql = "COMMIT"
        else:
            sql = f"RELEASE SAVEPOINT level{self._active_transactions - 1}"
        try:
            self._execute_raw(sql)
        except DRIVER_ERRORS as e:
            raise DatabaseTransactionException(f"Could not {sql}") from e
        self._active_transactions -= 1
        log.debug(sql)

    def rollback_transaction(self):
        if self._active_transactions == 0:
            raise DatabaseTransactionException("No active transaction to roll back")
        if self._active_transactions == 1:
            sql = "ROLLBACK"
        else:
            sql = f"ROLLBACK TO SAVEPOINT level{self._active_transactions - 1}"
        try:
            self._execute_raw(sql)
        except DRIVER_ERRORS as e:
            raise DatabaseTransactionException(f"Could not {sql}") from e
        self._active_transactions -= 1
        log.debug(sql)

    @contextmanager
    def transaction(self):
        """Run a block in a transaction, rolling back if it raises."""
        self.begin_transaction()
        try:
            yield self
        except BaseException:
            self.rollback_transaction()
            raise
        self.commit_transaction()


def database_from_config(cfg: dict[str, Any]) -> Database:
    """Make a database from the ``[database]`` table of a config dict."""
    d = cfg["database"]
    return Database(
        d.get("sqlite_file", "forumkit.db"),
        db_name=d.get("db_name"),
        db_host=d.get("db_host", "127.0.0.1"),
        db_port=d.get("db_port", 3306),
        db_username=d.get("db_username"),
        db_password=d.get("db_password"),
        benchmark=cfg.get("benchmark", False),
    )
