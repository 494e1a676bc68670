"""
Tests for vercollate.sqlite module.

Tests the SQLite adapters including:
- version_compare argument validation
- Optional comparison switches passed positionally
- Collation ordering for each profile
- Registration on a connection
"""

from __future__ import annotations

import sqlite3

import pytest

from vercollate.exceptions import (
    ArgumentCountError,
    ArgumentTypeError,
    UnknownOperatorError,
)
from vercollate.logging import DefaultLogger
from vercollate.sqlite import (
    SqliteArguments,
    connect,
    make_collation,
    register_version_extensions,
    version_compare_function,
)
from vercollate.versioning import BUILTIN_PROFILES, CollationProfile, ComparisonConfig


def _scalar(conn: sqlite3.Connection, sql: str, params: tuple = ()):
    return conn.execute(sql, params).fetchone()[0]


def _ordered(conn: sqlite3.Connection, versions: list[str], collation: str) -> list[str]:
    conn.execute("CREATE TABLE IF NOT EXISTS pkgs (v TEXT)")
    conn.execute("DELETE FROM pkgs")
    conn.executemany("INSERT INTO pkgs VALUES (?)", [(v,) for v in versions])
    rows = conn.execute(f"SELECT v FROM pkgs ORDER BY v COLLATE {collation}")
    return [row[0] for row in rows]


class TestVersionCompareFunction:
    """Tests for the Python side of version_compare."""

    def test_basic_operators(self):
        assert version_compare_function("1.0", "<", "1.1") == 1
        assert version_compare_function("1.0", ">", "1.1") == 0
        assert version_compare_function("1.0", "=", "1.0") == 1
        assert version_compare_function("1.0", "<=", "1.0") == 1

    def test_options_positional(self):
        """Test epoch, delim_precedence, comp_remaining, remainder_precedence."""
        assert version_compare_function("1.0~rc1", "<", "1.0") == 0
        assert version_compare_function("1.0~rc1", "<", "1.0", 1, 1, 1, 0) == 1
        assert version_compare_function("1.0~rc1", "<", "1.0", 0, 0, 1) == 1

    def test_null_options_are_false(self):
        assert version_compare_function("1:1.0", ">", "2.0", None) == 0
        assert version_compare_function("1:1.0", ">", "2.0", 1) == 1

    def test_arguments_past_options_ignored(self):
        assert version_compare_function("1.0", "<", "1.1", 0, 0, 0, 0, "junk") == 1

    def test_too_few_arguments(self):
        with pytest.raises(ArgumentCountError):
            version_compare_function("1.0", "<")
        with pytest.raises(ArgumentCountError):
            version_compare_function()

    def test_unknown_operator(self):
        with pytest.raises(UnknownOperatorError):
            version_compare_function("1.0", "!=", "2.0")

    def test_non_text_version(self):
        with pytest.raises(ArgumentTypeError):
            version_compare_function(1, "<", "2.0")
        with pytest.raises(ArgumentTypeError):
            version_compare_function("1.0", "<", None)

    def test_non_text_operator(self):
        with pytest.raises(ArgumentTypeError):
            version_compare_function("1.0", 1, "2.0")

    @pytest.mark.parametrize("option", ["yes", 1.5, b"\x01"])
    def test_bad_option_type(self, option):
        with pytest.raises(ArgumentTypeError):
            version_compare_function("1.0", "<", "2.0", option)


class TestSqliteArguments:
    """Tests for the SqliteArguments reader."""

    def test_count_and_text(self):
        args = SqliteArguments(("1.0", "<", "2.0"))
        assert args.count == 3
        assert args.text(2) == "2.0"

    def test_optional_flag(self):
        args = SqliteArguments(("a", "<", "b", None, 0, 2, True))
        assert args.optional_flag(3) is False
        assert args.optional_flag(4) is False
        assert args.optional_flag(5) is True
        assert args.optional_flag(6) is True


class TestSqlFunction:
    """Tests for version_compare called from SQL."""

    def test_select(self, sqlite_conn):
        assert _scalar(sqlite_conn, "SELECT version_compare('1.0', '<', '1.1')") == 1
        assert _scalar(sqlite_conn, "SELECT version_compare('1.0', '>=', '1.1')") == 0

    def test_select_with_options(self, sqlite_conn):
        sql = "SELECT version_compare(?, '>', ?, ?)"
        assert _scalar(sqlite_conn, sql, ("1:1.0", "2.0", 1)) == 1
        assert _scalar(sqlite_conn, sql, ("1:1.0", "2.0", None)) == 0

    def test_where_clause(self, sqlite_conn):
        sqlite_conn.execute("CREATE TABLE pkgs (name TEXT, v TEXT)")
        sqlite_conn.executemany(
            "INSERT INTO pkgs VALUES (?, ?)",
            [("a", "1.2.3"), ("b", "1.10.0"), ("c", "0.9")],
        )
        rows = sqlite_conn.execute(
            "SELECT name FROM pkgs WHERE version_compare(v, '>=', '1.2.3') "
            "ORDER BY name"
        ).fetchall()
        assert [r[0] for r in rows] == ["a", "b"]

    @pytest.mark.parametrize(
        "sql",
        [
            "SELECT version_compare('1.0', '<')",
            "SELECT version_compare('1.0', '!=', '2.0')",
            "SELECT version_compare(1, '<', '2.0')",
            "SELECT version_compare('1.0', '<', '2.0', 'true')",
        ],
    )
    def test_errors_reported_to_sql(self, sqlite_conn, sql):
        """Test that argument errors surface as statement errors."""
        with pytest.raises(sqlite3.OperationalError):
            sqlite_conn.execute(sql).fetchone()

    def test_connection_usable_after_error(self, sqlite_conn):
        with pytest.raises(sqlite3.OperationalError):
            sqlite_conn.execute("SELECT version_compare('1.0')").fetchone()
        assert _scalar(sqlite_conn, "SELECT version_compare('2', '>', '1')") == 1


class TestCollations:
    """Tests for the version collations."""

    def test_generic(self, sqlite_conn):
        assert _ordered(sqlite_conn, ["1.10", "1.9", "1.2"], "version") == [
            "1.2",
            "1.9",
            "1.10",
        ]

    def test_arch(self, sqlite_conn):
        versions = ["1.0^git1", "1.0", "1.0~rc1", "1:0.5"]
        assert _ordered(sqlite_conn, versions, "version_arch") == [
            "1.0~rc1",
            "1.0",
            "1.0^git1",
            "1:0.5",
        ]

    def test_dpkg(self, sqlite_conn):
        assert _ordered(sqlite_conn, ["2.0", "1:0.9", "1.5"], "version_dpkg") == [
            "1.5",
            "2.0",
            "1:0.9",
        ]

    def test_rhel(self, sqlite_conn):
        versions = ["1.2", "1.0~beta", "1.0"]
        assert _ordered(sqlite_conn, versions, "version_rhel") == [
            "1.0~beta",
            "1.0",
            "1.2",
        ]

    def test_make_collation(self):
        collate = make_collation(BUILTIN_PROFILES["arch"])
        assert collate("1.0~rc1", "1.0") < 0
        assert collate("1.0", "1.0") == 0


class FakeConnection:
    """Records registration calls instead of talking to SQLite."""

    def __init__(self) -> None:
        self.functions: dict[str, tuple] = {}
        self.collations: dict[str, object] = {}

    def create_function(self, name, narg, func, deterministic=False):
        self.functions[name] = (narg, func, deterministic)

    def create_collation(self, name, func):
        self.collations[name] = func


class TestRegistration:
    """Tests for register_version_extensions and connect."""

    def test_registers_function_and_collations(self):
        conn = FakeConnection()
        register_version_extensions(conn)

        assert conn.functions["version_compare"][0] == -1
        assert conn.functions["version_compare"][2] is True
        assert set(conn.collations) == {
            "version",
            "version_arch",
            "version_dpkg",
            "version_rhel",
        }

    def test_registers_custom_profiles(self):
        custom = CollationProfile(
            name="loose", config=ComparisonConfig(compare_remainder=True)
        )
        profiles = dict(BUILTIN_PROFILES, loose=custom)
        conn = connect(profiles=profiles)
        try:
            assert _ordered(conn, ["1.0", "1.0~rc1"], "version_loose") == [
                "1.0~rc1",
                "1.0",
            ]
        finally:
            conn.close()

    def test_verbose_logging(self, capsys):
        register_version_extensions(FakeConnection(), logger=DefaultLogger(verbose=True))
        out = capsys.readouterr().out
        assert "[SQLITE] Registered function version_compare" in out
        assert "[SQLITE] Registered collation version_dpkg" in out

    def test_silent_by_default(self, capsys):
        register_version_extensions(FakeConnection())
        assert capsys.readouterr().out == ""

    def test_connect_file_database(self, tmp_test_dir):
        db = tmp_test_dir / "pkgs.db"
        conn = connect(str(db))
        try:
            assert _scalar(conn, "SELECT version_compare('1.0', '=', '1.0')") == 1
        finally:
            conn.close()
        assert db.exists()
