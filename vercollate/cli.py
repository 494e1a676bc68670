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

"""Command-line interface for vercollate.

Commands:

    compare: Compare two versions with an operator
    sort: Sort versions with a profile
    profiles: List available collation profiles
    query: Run SQL with the version function and collations registered

Example:
    Compare Debian versions:
        ```bash
        $ vercollate compare 1:1.0 '>' 2.0 --profile dpkg
        ```

    Sort Arch versions from stdin:
        ```bash
        $ printf '1.0\\n1.0~rc1\\n1.0^git1\\n' | vercollate sort --profile arch
        ```

    Query a database:
        ```bash
        $ vercollate query "SELECT v FROM pkgs ORDER BY v COLLATE version_rhel" \\
            --database packages.db
        ```

Exit Codes:

- 0: Success (for compare: the comparison holds)
- 1: Error (for compare: the comparison does not hold)
- 2: compare only, invalid input

Note:
    The compare exit codes follow ``dpkg --compare-versions`` so the
    command can be used directly in shell conditionals.

"""

from __future__ import annotations

import argparse
from collections.abc import Mapping
from dataclasses import replace
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path
import sqlite3
import sys
import traceback

from vercollate.config import load_profiles
from vercollate.exceptions import ConfigError, VercollateError
from vercollate.logging import get_logger, set_global_logger
from vercollate.sqlite import connect
from vercollate.versioning import (
    BUILTIN_PROFILES,
    OPERATORS,
    CollationProfile,
    evaluate,
    get_profile,
    version_compare,
    version_sort_key,
)

_COMPARE_ERROR = 2


def _load_available_profiles(args: argparse.Namespace) -> Mapping[str, CollationProfile]:
    if args.profiles_file is None:
        return BUILTIN_PROFILES
    return load_profiles(Path(args.profiles_file))


def _configure_logger(args: argparse.Namespace) -> None:
    set_global_logger(get_logger(verbose=args.verbose, debug=args.debug))


def _report_error(args: argparse.Namespace, err: Exception) -> None:
    print(f"Error: {err}", file=sys.stderr)
    if args.verbose or args.debug:
        traceback.print_exc()


def _flag_label(enabled: bool) -> str:
    return "yes" if enabled else "no"


def cmd_compare(args: argparse.Namespace) -> int:
    """Handler for 'vercollate compare' command.

    Compares LEFT and RIGHT under the selected profile, with any explicit
    switches turned on in addition.

    Args:
        args: Parsed command-line arguments.

    Returns:
        0 if the comparison holds, 1 if it does not, 2 on invalid input.

    """
    _configure_logger(args)

    if args.operator not in OPERATORS:
        print(
            f"Error: Unknown compare operator {args.operator!r}. Must provide "
            "one of the following: (<, <=, =, >=, >)",
            file=sys.stderr,
        )
        return _COMPARE_ERROR

    try:
        profiles = _load_available_profiles(args)
        profile = get_profile(args.profile, profiles)
    except VercollateError as err:
        _report_error(args, err)
        return _COMPARE_ERROR

    config = profile.config
    overrides = {
        name: True
        for name in (
            "epoch",
            "delimiter_precedence",
            "compare_remainder",
            "remainder_precedence",
        )
        if getattr(args, name)
    }
    if overrides:
        config = replace(config, **overrides)

    result = version_compare(args.left, args.right, config)
    holds = evaluate(result, args.operator)

    print(f"{args.left} {args.operator} {args.right}: {str(holds).lower()}")
    if args.verbose or args.debug:
        print(f"Profile: {profile.name}")
        print(f"Result:  {result}")
    if args.debug:
        print(f"Config:  {config}")

    return 0 if holds else 1


def cmd_sort(args: argparse.Namespace) -> int:
    """Handler for 'vercollate sort' command.

    Sorts the given versions, or stdin lines when none are given, and prints
    one version per line.
    """
    _configure_logger(args)

    try:
        profiles = _load_available_profiles(args)
        profile = get_profile(args.profile, profiles)
    except VercollateError as err:
        _report_error(args, err)
        return 1

    versions = list(args.versions)
    if not versions:
        versions = [line.rstrip("\r\n") for line in sys.stdin if line.strip()]

    for v in sorted(versions, key=version_sort_key(profile), reverse=args.reverse):
        print(v)
    return 0


def cmd_profiles(args: argparse.Namespace) -> int:
    """Handler for 'vercollate profiles' command."""
    _configure_logger(args)

    try:
        profiles = _load_available_profiles(args)
    except ConfigError as err:
        _report_error(args, err)
        return 1

    print("=" * 70)
    print("COLLATION PROFILES")
    print("=" * 70)
    print(
        f"{'Profile':<14}{'Collation':<22}{'Epoch':<7}{'Delim':<7}"
        f"{'Rem.':<6}{'Rem.Prec':<9}"
    )
    for profile in profiles.values():
        c = profile.config
        print(
            f"{profile.name:<14}{profile.collation_name:<22}"
            f"{_flag_label(c.epoch):<7}{_flag_label(c.delimiter_precedence):<7}"
            f"{_flag_label(c.compare_remainder):<6}"
            f"{_flag_label(c.remainder_precedence):<9}"
        )
        if args.verbose and profile.description:
            print(f"{'':<14}{profile.description}")
    print("=" * 70)
    return 0


def cmd_query(args: argparse.Namespace) -> int:
    """Handler for 'vercollate query' command.

    Runs a SQL statement with ``version_compare`` and the version collations
    registered and prints each row tab-separated.
    """
    _configure_logger(args)

    try:
        profiles = _load_available_profiles(args)
    except ConfigError as err:
        _report_error(args, err)
        return 1

    try:
        conn = connect(args.database, profiles=profiles)
    except sqlite3.Error as err:
        _report_error(args, err)
        return 1

    try:
        cursor = conn.execute(args.sql)
        for row in cursor:
            print("\t".join("NULL" if col is None else str(col) for col in row))
        conn.commit()
    except sqlite3.Error as err:
        _report_error(args, err)
        return 1
    finally:
        conn.close()
    return 0


def _add_common_flags(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--profiles-file",
        default=None,
        help="YAML file with additional collation profiles",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show progress and high-level status updates",
    )
    parser.add_argument(
        "-d",
        "--debug",
        action="store_true",
        help="Show detailed debugging output (implies --verbose)",
    )


def _package_version() -> str:
    try:
        return version("vercollate")
    except PackageNotFoundError:
        from vercollate import __version__

        return __version__


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the vercollate CLI."""
    parser = argparse.ArgumentParser(
        prog="vercollate",
        description="vercollate - package version ordering for the shell and SQLite",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"vercollate {_package_version()}",
    )

    subparsers = parser.add_subparsers(
        dest="command",
        help="Available commands",
        required=True,
    )

    # 'compare' command
    parser_compare = subparsers.add_parser(
        "compare",
        help="Compare two versions with an operator",
        description="Exit 0 if LEFT OP RIGHT holds, 1 if it does not, 2 on invalid input.",
    )
    parser_compare.add_argument("left", help="Left version string")
    parser_compare.add_argument("operator", help="One of <, <=, =, >=, >")
    parser_compare.add_argument("right", help="Right version string")
    parser_compare.add_argument(
        "--profile",
        default="generic",
        help="Profile or collation name (default: generic)",
    )
    parser_compare.add_argument(
        "--epoch",
        action="store_true",
        help="Enable epoch-aware comparison",
    )
    parser_compare.add_argument(
        "--delimiter-precedence",
        action="store_true",
        help="Let differing delimiters break ties (~ < - < ^ < . < :)",
    )
    parser_compare.add_argument(
        "--compare-remainder",
        action="store_true",
        help="Apply ~, -, ^ rules to trailing content",
    )
    parser_compare.add_argument(
        "--remainder-precedence",
        action="store_true",
        help="Prefer length over value when the last compared character is a digit",
    )
    _add_common_flags(parser_compare)
    parser_compare.set_defaults(func=cmd_compare)

    # 'sort' command
    parser_sort = subparsers.add_parser(
        "sort",
        help="Sort versions with a profile",
        description="Sort versions given as arguments, or read one per line from stdin.",
    )
    parser_sort.add_argument("versions", nargs="*", help="Versions to sort")
    parser_sort.add_argument(
        "--profile",
        default="generic",
        help="Profile or collation name (default: generic)",
    )
    parser_sort.add_argument(
        "-r",
        "--reverse",
        action="store_true",
        help="Sort newest first",
    )
    _add_common_flags(parser_sort)
    parser_sort.set_defaults(func=cmd_sort)

    # 'profiles' command
    parser_profiles = subparsers.add_parser(
        "profiles",
        help="List available collation profiles",
        description="Show the built-in profiles and any loaded from --profiles-file.",
    )
    _add_common_flags(parser_profiles)
    parser_profiles.set_defaults(func=cmd_profiles)

    # 'query' command
    parser_query = subparsers.add_parser(
        "query",
        help="Run SQL with version_compare and the version collations",
        description="Execute a SQL statement on a SQLite database with the extensions registered.",
    )
    parser_query.add_argument("sql", help="SQL statement to execute")
    parser_query.add_argument(
        "--database",
        default=":memory:",
        help="SQLite database path (default: in-memory)",
    )
    _add_common_flags(parser_query)
    parser_query.set_defaults(func=cmd_query)

    return parser


def main(argv: list[str] | None = None) -> None:
    """Main entry point for the vercollate CLI.

    This function is registered as the 'vercollate' console script in
    pyproject.toml.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    exit_code = args.func(args)
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
