"""SQLite integration for vercollate.

Public API:

- register_version_extensions: Register the function and collations on a
  connection
- connect: Open a connection with everything registered
- version_compare_function: The scalar function itself
- make_collation: Build a collation callable for a profile

Example:
    Sort a column by Debian version order:

        from vercollate.sqlite import connect

        conn = connect()
        conn.execute("CREATE TABLE pkgs (v TEXT)")
        conn.executemany("INSERT INTO pkgs VALUES (?)", [("1:0.9",), ("2.0",)])
        rows = conn.execute(
            "SELECT v FROM pkgs ORDER BY v COLLATE version_dpkg"
        ).fetchall()
        # [('2.0',), ('1:0.9',)]

"""

from .extensions import (
    FUNCTION_NAME,
    ArgumentReader,
    SqliteArguments,
    connect,
    evaluate_call,
    make_collation,
    register_version_extensions,
    version_compare_function,
)

__all__ = [
    "FUNCTION_NAME",
    "ArgumentReader",
    "SqliteArguments",
    "connect",
    "evaluate_call",
    "make_collation",
    "register_version_extensions",
    "version_compare_function",
]
