# Copyright 2025 Roger Cibrian
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""SQLite function and collations for version ordering.

This module bridges SQLite's calling conventions to the comparison core:

- ``version_compare(left, op, right[, epoch, delim_precedence,
  comp_remaining, remainder_precedence])``: scalar function returning 1 or 0.
- ``version``, ``version_arch``, ``version_dpkg``, ``version_rhel``:
  collations, one per profile.

Argument access goes through the ArgumentReader protocol, so the core never
sees SQLite's value representation.

Example:
    Register on an existing connection:
        ```python
        import sqlite3
        from vercollate.sqlite import register_version_extensions

        conn = sqlite3.connect(":memory:")
        register_version_extensions(conn)
        conn.execute("SELECT version_compare('1.0', '<', '1.1')").fetchone()
        # (1,)
        conn.execute(
            "SELECT v FROM pkgs ORDER BY v COLLATE version_dpkg"
        )
        ```

Note:
    Exceptions raised by the scalar function are reported by sqlite3 as
    ``sqlite3.OperationalError`` on the statement; the process is not
    affected.
"""

from __future__ import annotations

from collections.abc import Mapping
import sqlite3
from typing import Any, Callable, Protocol

from vercollate.exceptions import (
    ArgumentCountError,
    ArgumentTypeError,
    UnknownOperatorError,
)
from vercollate.logging import Logger, get_global_logger
from vercollate.versioning import (
    BUILTIN_PROFILES,
    OPERATORS,
    CollationProfile,
    ComparisonConfig,
    evaluate,
    version_compare,
)

__all__ = [
    "ArgumentReader",
    "FUNCTION_NAME",
    "SqliteArguments",
    "connect",
    "evaluate_call",
    "make_collation",
    "register_version_extensions",
    "version_compare_function",
]

FUNCTION_NAME = "version_compare"

# Positions of the optional flags, in calling order.
_OPTION_FIELDS = (
    "epoch",
    "delimiter_precedence",
    "compare_remainder",
    "remainder_precedence",
)
_FIRST_OPTION = 3

_USAGE_ERROR = "Must provide two version strings and an operator to compare."
_OPTION_ERROR = (
    "Options for epoch, delim_precedence, comp_remaining, and "
    "remainder_precedence must be true, false, or null."
)


class ArgumentReader(Protocol):
    """Read typed arguments from a host-engine function call."""

    @property
    def count(self) -> int:
        """Number of arguments passed to the function."""
        ...

    def text(self, index: int) -> str:
        """Return argument ``index`` as text.

        Raises:
            ArgumentTypeError: If the argument is not text.
        """
        ...

    def optional_flag(self, index: int) -> bool:
        """Return argument ``index`` as a flag, treating NULL as False.

        Raises:
            ArgumentTypeError: If the argument is neither integer nor NULL.
        """
        ...


class SqliteArguments:
    """ArgumentReader over the values sqlite3 passes to a Python function.

    sqlite3 hands over TEXT as ``str``, INTEGER (including TRUE/FALSE) as
    ``int``, REAL as ``float``, BLOB as ``bytes`` and NULL as ``None``.
    """

    def __init__(self, values: tuple[Any, ...]) -> None:
        self._values = values

    @property
    def count(self) -> int:
        return len(self._values)

    def text(self, index: int) -> str:
        value = self._values[index]
        if not isinstance(value, str):
            raise ArgumentTypeError(_USAGE_ERROR)
        return value

    def optional_flag(self, index: int) -> bool:
        value = self._values[index]
        if value is None:
            return False
        if not isinstance(value, int):
            raise ArgumentTypeError(_OPTION_ERROR)
        return bool(value)


def _read_config(args: ArgumentReader) -> ComparisonConfig:
    flags: dict[str, bool] = {}
    last = min(args.count, _FIRST_OPTION + len(_OPTION_FIELDS))
    for index in range(_FIRST_OPTION, last):
        flags[_OPTION_FIELDS[index - _FIRST_OPTION]] = args.optional_flag(index)
    return ComparisonConfig(**flags)


def evaluate_call(args: ArgumentReader) -> bool:
    """Validate a ``version_compare`` call and evaluate it.

    Args:
        args: Arguments of the call, in SQL order.

    Returns:
        True if ``left <op> right`` holds.

    Raises:
        ArgumentCountError: Fewer than three arguments.
        ArgumentTypeError: A version or the operator is not text, or an
            option is neither integer nor NULL.
        UnknownOperatorError: The operator is not one of <, <=, =, >=, >.

    """
    if args.count < 3:
        raise ArgumentCountError(_USAGE_ERROR)

    left = args.text(0)
    op = args.text(1)
    right = args.text(2)

    if op not in OPERATORS:
        raise UnknownOperatorError(
            "Unknown compare operator. Must provide one of the "
            "following: (<, <=, =, >=, >)"
        )

    config = _read_config(args)
    return evaluate(version_compare(left, right, config), op)


def version_compare_function(*values: Any) -> int:
    """SQLite entry point for ``version_compare``.

    Returns:
        1 if the comparison holds, otherwise 0.
    """
    return int(evaluate_call(SqliteArguments(values)))


def make_collation(profile: CollationProfile) -> Callable[[str, str], int]:
    """Bind version_compare to a profile as a two-argument collation."""
    config = profile.config

    def _collate(left: str, right: str) -> int:
        return version_compare(left, right, config)

    _collate.__name__ = f"collate_{profile.collation_name}"
    return _collate


def register_version_extensions(
    connection: Any,
    profiles: Mapping[str, CollationProfile] | None = None,
    logger: Logger | None = None,
) -> None:
    """Register ``version_compare`` and one collation per profile.

    Args:
        connection: A ``sqlite3.Connection``, or any object offering the
            same ``create_function`` and ``create_collation`` methods.
        profiles: Profiles to register as collations. Default is
            BUILTIN_PROFILES.
        logger: Logger for registration messages. Default is the global
            logger.

    """
    if logger is None:
        logger = get_global_logger()
    if profiles is None:
        profiles = BUILTIN_PROFILES

    connection.create_function(
        FUNCTION_NAME, -1, version_compare_function, deterministic=True
    )
    logger.verbose("SQLITE", f"Registered function {FUNCTION_NAME}")

    for profile in profiles.values():
        connection.create_collation(profile.collation_name, make_collation(profile))
        logger.verbose("SQLITE", f"Registered collation {profile.collation_name}")
        logger.debug("SQLITE", f"  {profile.collation_name}: {profile.config}")


def connect(
    database: str = ":memory:",
    profiles: Mapping[str, CollationProfile] | None = None,
    logger: Logger | None = None,
) -> sqlite3.Connection:
    """Open a SQLite connection with the version extensions registered.

    Args:
        database: Database path. Default is an in-memory database.
        profiles: Profiles to register. Default is BUILTIN_PROFILES.
        logger: Logger for registration messages.

    Returns:
        An open ``sqlite3.Connection``. The caller is responsible for
            closing it.

    """
    if logger is None:
        logger = get_global_logger()
    logger.verbose("SQLITE", f"Opening database: {database}")
    conn = sqlite3.connect(database)
    register_version_extensions(conn, profiles, logger)
    return conn
