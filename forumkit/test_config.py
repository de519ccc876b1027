# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2025-2026 The Forumkit Project Developers

import logging
from pathlib import Path
from pytest import raises
import sys

if sys.version_info < (3, 11):
    import tomli as tomllib
else:
    import tomllib

from forumkit import create_config, load_config, setup_logging
from forumkit.exceptions import ForumkitConfigError


def test_config_create(tmpdir):
    f = create_config(tmpdir)
    assert f == Path(tmpdir) / "forumkit.toml"
    assert f.exists()


def test_config_exists(tmpdir):
    create_config(tmpdir)
    raises(FileExistsError, lambda: create_config(tmpdir))


def test_config_keeps_comments(tmpdir):
    f = create_config(tmpdir)
    with open(f) as fh:
        txt = fh.read()
    assert "# If db_name is set we connect to MySQL" in txt


def test_config_create_options(tmpdir):
    f = create_config(
        tmpdir, db_name="forum", sqlite_file="x.db", log_level="DEBUG", benchmark=True
    )
    with open(f, "rb") as fh:
        cfg = tomllib.load(fh)
    assert cfg["LogLevel"] == "debug"
    assert cfg["benchmark"] is True
    assert cfg["database"]["db_name"] == "forum"
    assert cfg["database"]["sqlite_file"] == "x.db"


def test_config_load_dir_or_file(tmpdir):
    f = create_config(tmpdir, sqlite_file="y.db")
    cfg = load_config(tmpdir)
    assert cfg["database"]["sqlite_file"] == "y.db"
    assert cfg == load_config(f)


def test_config_load_fills_defaults(tmpdir):
    f = Path(tmpdir) / "forumkit.toml"
    with open(f, "w") as fh:
        fh.write('[database]\ndb_port = 3307\n')
    cfg = load_config(f)
    assert cfg["LogLevel"] == "info"
    assert cfg["benchmark"] is False
    assert cfg["database"]["db_port"] == 3307
    assert cfg["database"]["db_host"] == "127.0.0.1"
    assert cfg["database"]["db_name"] is None


def test_config_load_missing(tmpdir, caplog):
    with caplog.at_level(logging.WARNING):
        cfg = load_config(tmpdir)
    assert cfg["database"]["sqlite_file"] == "forumkit.db"
    assert "using defaults" in caplog.text


def test_config_load_invalid_toml(tmpdir):
    f = Path(tmpdir) / "forumkit.toml"
    with open(f, "w") as fh:
        fh.write("LogLevel = \n")
    raises(ForumkitConfigError, lambda: load_config(f))


def test_config_load_invalid_log_level(tmpdir):
    f = Path(tmpdir) / "forumkit.toml"
    with open(f, "w") as fh:
        fh.write('LogLevel = "chatty"\n')
    with raises(ForumkitConfigError, match="chatty"):
        load_config(f)


def test_setup_logging_level():
    setup_logging("warning")
    assert logging.getLogger().level == logging.WARNING
    setup_logging("debug")
    assert logging.getLogger().level == logging.DEBUG
