"""
Unit tests for main.py
"""

import sqlite3
from unittest import mock

import pytest

from sqlite3dump.main import USAGE, build_parser, main


@pytest.fixture(autouse=True)
def no_logging_setup():
    """Keep the CLI from reconfiguring the root logger during tests."""
    with mock.patch("sqlite3dump.main.setup_logging") as setup:
        yield setup


@pytest.fixture
def db_file(tmp_path):
    path = tmp_path / "app.db"
    conn = sqlite3.connect(path)
    conn.execute("CREATE TABLE t(id INTEGER PRIMARY KEY, name TEXT)")
    conn.execute("INSERT INTO t VALUES (1, 'a')")
    conn.commit()
    conn.close()
    return path


class TestBuildParser:
    """Tests for argument parsing."""

    def test_defaults_do_not_override_config(self):
        args = build_parser().parse_args(["app.db"])
        assert args.database == "app.db"
        assert args.migration is None
        assert args.drop_if_exists is None
        assert args.wrap_with_transaction is None
        assert args.include_data is None

    def test_flags(self):
        args = build_parser().parse_args(
            ["app.db", "--migration", "--drop-if-exists", "--no-transaction", "--data"]
        )
        assert args.migration is True
        assert args.drop_if_exists is True
        assert args.wrap_with_transaction is False
        assert args.include_data is True


class TestMain:
    """Tests for the CLI entry point."""

    def test_dump_to_stdout(self, db_file, capsys):
        main([str(db_file)])
        captured = capsys.readouterr()

        assert captured.out == (
            "BEGIN TRANSACTION;\n"
            "CREATE TABLE t(id INTEGER PRIMARY KEY, name TEXT);\n"
            "COMMIT;\n"
        )
        assert captured.err.strip() == "dumped app.db"

    def test_flags_reach_dumper(self, db_file, capsys):
        main([str(db_file), "--migration", "--data", "--no-transaction"])
        captured = capsys.readouterr()

        assert captured.out == "INSERT INTO \"t\"(\"id\",\"name\") VALUES(1,'a');\n"

    def test_config_file(self, db_file, tmp_path, capsys):
        config = tmp_path / "config.yaml"
        config.write_text("dump:\n  wrap_with_transaction: false\n  include_data: true\n")

        main([str(db_file), "-c", str(config)])
        captured = capsys.readouterr()

        assert captured.out == (
            "CREATE TABLE t(id INTEGER PRIMARY KEY, name TEXT);\n"
            "INSERT INTO \"t\" VALUES(1,'a');\n"
        )

    def test_cli_flags_override_config(self, db_file, tmp_path, capsys):
        config = tmp_path / "config.yaml"
        config.write_text("dump:\n  migration: false\n")

        main([str(db_file), "-c", str(config), "--migration"])
        assert capsys.readouterr().out == "BEGIN TRANSACTION;\nCOMMIT;\n"

    def test_missing_database_is_not_an_error(self, tmp_path, capsys):
        main([str(tmp_path / "missing.db")])
        captured = capsys.readouterr()

        assert captured.out == ""
        assert "dumped missing.db" in captured.err

    def test_invalid_database(self, tmp_path, capsys):
        path = tmp_path / "garbage.db"
        path.write_bytes(b"x" * 1024)

        with pytest.raises(SystemExit) as exc_info:
            main([str(path)])
        captured = capsys.readouterr()

        assert exc_info.value.code == 1
        assert USAGE in captured.err

    def test_missing_config_file(self, db_file, tmp_path, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main([str(db_file), "-c", str(tmp_path / "nope.yaml")])

        assert exc_info.value.code == 1
        assert "not found" in capsys.readouterr().err

    def test_unknown_config_key(self, db_file, tmp_path, capsys):
        config = tmp_path / "config.yaml"
        config.write_text("dump:\n  compress: true\n")

        with pytest.raises(SystemExit) as exc_info:
            main([str(db_file), "-c", str(config)])

        assert exc_info.value.code == 1
        assert "compress" in capsys.readouterr().err

    def test_unparseable_env_setting(self, db_file, tmp_path, capsys, monkeypatch):
        monkeypatch.setenv("DUMP_MIGRATION", "n")
        config = tmp_path / "config.yaml"
        config.write_text("dump:\n  migration: ${DUMP_MIGRATION}\n")

        with pytest.raises(SystemExit) as exc_info:
            main([str(db_file), "-c", str(config)])

        captured = capsys.readouterr()
        assert exc_info.value.code == 1
        assert captured.out == ""
        assert "migration" in captured.err

    def test_usage_error(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main([])
        assert exc_info.value.code == 2

    def test_verbose_sets_debug(self, db_file, no_logging_setup):
        main([str(db_file), "-v"])
        no_logging_setup.assert_called_once_with({"level": "DEBUG"})
