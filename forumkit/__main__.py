#!/usr/bin/env python3

# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2025-2026 The Forumkit Project Developers

"""Command line tool for Forumkit installations."""

__copyright__ = "Copyright (C) 2025-2026 The Forumkit Project Developers"
__credits__ = "The Forumkit Project Developers"
__license__ = "AGPL-3.0-or-later"

import argparse
import logging
from pathlib import Path
import sys

from forumkit import __version__
from forumkit import create_config, load_config, setup_logging
from forumkit.db import database_from_config
from forumkit.exceptions import DatabaseException, ForumkitConfigError
from forumkit.ui import Screen, Viewport, media_query_aliases


instructions = """Overview:

  1. Run '%(prog)s init' - creates a forumkit.toml config file.

  2. Edit the config file to point at your database.

  3. Run '%(prog)s query "SELECT ..."' to try the connection.
"""


def check_non_negative(arg):
    if int(arg) < 0:
        raise argparse.ArgumentTypeError("must be non-negative")
    return int(arg)


def run_query(args):
    cfg = load_config(args.config)
    setup_logging(cfg["LogLevel"])
    if args.benchmark:
        cfg["benchmark"] = True
    with database_from_config(cfg) as db:
        stmt = db.prepare_statement(args.sql, args.limit, args.offset)
        stmt.execute(args.params)
        if args.map:
            for k, v in stmt.fetch_map(*args.map).items():
                print(f"{k}\t{v}")
        elif stmt.description:
            print("\t".join(d[0] for d in stmt.description))
            for row in stmt.fetch_all():
                print("\t".join("" if v is None else str(v) for v in row.values()))
        else:
            print(f"{stmt.get_affected_rows()} row(s) affected")
            insert_id = db.get_insert_id()
            if insert_id:
                print(f"Last insert id: {insert_id}")
        if db.benchmark:
            print(
                "{} queries in {:.6f}s".format(
                    db.benchmark.get_query_count(),
                    db.benchmark.get_query_execution_time(),
                ),
                file=sys.stderr,
            )


def show_breakpoints(args):
    screen = Screen(Viewport(args.width, platform=args.platform))
    for alias, query in media_query_aliases.items():
        if screen.is_(alias):
            print(f"{alias}\t{query}")


def get_parser():
    parser = argparse.ArgumentParser(
        epilog="Use '%(prog)s <subcommand> -h' for detailed help.\n\n"
        + instructions,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--version", action="version", version="%(prog)s " + __version__
    )
    sub = parser.add_subparsers(
        dest="command", description="Perform various Forumkit-related tasks."
    )

    spI = sub.add_parser(
        "init",
        help="Create a config file",
        description="Write a default forumkit.toml for you to edit.",
    )
    spI.add_argument(
        "dir",
        nargs="?",
        help="The directory to use. If omitted, use the current directory.",
    )
    spI.add_argument(
        "--db-name",
        metavar="NAME",
        help="Use this MySQL database instead of SQLite.",
    )
    spI.add_argument(
        "--sqlite-file",
        metavar="FILE",
        help="Where to keep the SQLite database.",
    )
    spI.add_argument(
        "--log-level",
        choices=["debug", "info", "warning", "error", "critical"],
    )

    spQ = sub.add_parser(
        "query",
        help="Run an SQL statement",
        description="""
          Run an SQL statement against the configured database and print
          the result as tab-separated rows.  Use ? for parameters.
        """,
    )
    spQ.add_argument("sql", help="The statement, e.g., 'SELECT * FROM t WHERE x = ?'")
    spQ.add_argument("params", nargs="*", help="Values for the ? placeholders.")
    spQ.add_argument(
        "--config",
        metavar="PATH",
        help="Config file or directory containing it, default current directory.",
    )
    spQ.add_argument("--limit", type=check_non_negative, default=0)
    spQ.add_argument("--offset", type=check_non_negative, default=0)
    spQ.add_argument(
        "--map",
        nargs=2,
        metavar=("KEY", "VALUE"),
        help="Print one column of the rows keyed by another.",
    )
    spQ.add_argument(
        "--benchmark",
        action="store_true",
        help="Report the query count and time on stderr.",
    )

    spS = sub.add_parser(
        "screen",
        help="Show matching breakpoints",
        description="List the named screen breakpoints matching a viewport width.",
    )
    spS.add_argument("width", type=check_non_negative, help="Width in pixels.")
    spS.add_argument("--platform", default="desktop", help='E.g., "ios".')
    return parser


def main():
    parser = get_parser()
    args = parser.parse_args()

    if args.command == "init":
        cfgfile = create_config(
            Path(args.dir) if args.dir else Path("."),
            db_name=args.db_name,
            sqlite_file=args.sqlite_file,
            log_level=args.log_level,
        )
        print(f"Config written to {cfgfile}")
    elif args.command == "query":
        try:
            run_query(args)
        except (DatabaseException, ForumkitConfigError) as e:
            logging.getLogger("forumkit").error(e)
            sys.exit(1)
    elif args.command == "screen":
        show_breakpoints(args)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
