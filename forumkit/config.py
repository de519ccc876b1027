# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2025-2026 The Forumkit Project Developers

"""Configuration files and logging setup."""

from __future__ import annotations

from copy import deepcopy
import logging
from pathlib import Path
import sys
from typing import Any

if sys.version_info >= (3, 9):
    from importlib import resources
else:
    import importlib_resources as resources

if sys.version_info < (3, 11):
    import tomli as tomllib
else:
    import tomllib
import tomlkit

import forumkit
from forumkit.exceptions import ForumkitConfigError


config_filename = "forumkit.toml"

log_format = "%(asctime)s %(levelname)5.5s:%(name)s\t%(message)s"
log_datefmt = "%b%d %H:%M:%S %Z"
valid_log_levels = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

default_config: dict[str, Any] = {
    "LogLevel": "info",
    "benchmark": False,
    "database": {
        "db_name": None,
        "db_host": "127.0.0.1",
        "db_port": 3306,
        "db_username": "",
        "db_password": "",
        "sqlite_file": "forumkit.db",
    },
}


def create_config(
    dur: Path | str = Path("."),
    *,
    db_name: str | None = None,
    sqlite_file: str | None = None,
    log_level: str | None = None,
    benchmark: bool | None = None,
) -> Path:
    """Create a default configuration file.

    The packaged template is edited with tomlkit so that its comments
    survive in the written file.

    Args:
        dur: directory in which to put the file.

    Keyword Args:
        db_name: the name of a MySQL database, SQLite is used if omitted.
        sqlite_file: where to keep the SQLite database.
        log_level: e.g., "debug" or "info".
        benchmark: whether to time every SQL query.

    Returns:
        The path of the new file.

    Raises:
        FileExistsError: file is already there.
    """
    cfgfile = Path(dur) / config_filename
    if cfgfile.exists():
        raise FileExistsError(f"Config already exists in {cfgfile}")
    template = (resources.files(forumkit) / config_filename).read_text()
    doc = tomlkit.parse(template)
    if log_level:
        doc["LogLevel"] = log_level.lower()
    if benchmark is not None:
        doc["benchmark"] = benchmark
    if db_name:
        doc["database"]["db_name"] = db_name
    if sqlite_file:
        doc["database"]["sqlite_file"] = sqlite_file
    with open(cfgfile, "w") as fh:
        fh.write(tomlkit.dumps(doc))
    return cfgfile


def _merge(defaults: dict[str, Any], cfg: dict[str, Any]) -> dict[str, Any]:
    merged = deepcopy(defaults)
    for k, v in cfg.items():
        if isinstance(v, dict) and isinstance(merged.get(k), dict):
            merged[k] = _merge(merged[k], v)
        else:
            merged[k] = v
    return merged


def load_config(fname: Path | str | None = None) -> dict[str, Any]:
    """Load a configuration file, filling in defaults for anything missing.

    Args:
        fname: a toml file or a directory containing ``forumkit.toml``.
            If omitted, the current directory is searched.

    Returns:
        The configuration as a dict.  If no file is found, the defaults
        are returned and a warning is logged.

    Raises:
        ForumkitConfigError: the file is not valid toml or has a
            nonsense log level.
    """
    log = logging.getLogger("config")
    fname = Path(fname) if fname is not None else Path(".")
    if fname.is_dir():
        fname = fname / config_filename
    try:
        with open(fname, "rb") as f:
            cfg = tomllib.load(f)
        log.debug("Configuration loaded from %s", fname)
    except FileNotFoundError:
        log.warning("Cannot find %s, using defaults", fname)
        cfg = {}
    except tomllib.TOMLDecodeError as e:
        raise ForumkitConfigError(f"Cannot parse {fname}: {e}") from e
    cfg = _merge(default_config, cfg)
    if str(cfg["LogLevel"]).upper() not in valid_log_levels:
        raise ForumkitConfigError(f'Invalid LogLevel "{cfg["LogLevel"]}"')
    return cfg


def setup_logging(level: str = "info", *, logfile=None, logconsole: bool = True):
    """Configure the root logger.

    Args:
        level: a log level name such as "debug" or "info".

    Keyword Args:
        logfile: write the log here, if given.
        logconsole: also echo the log to stderr.
    """
    logging.basicConfig(format=log_format, datefmt=log_datefmt, filename=logfile)
    if logconsole and logfile:
        h = logging.StreamHandler()
        h.setFormatter(logging.Formatter(log_format, datefmt=log_datefmt))
        logging.getLogger().addHandler(h)
    logging.getLogger().setLevel(level.upper())
