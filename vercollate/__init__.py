"""
vercollate - package version ordering

A Python library and CLI that orders software-package version strings with
one configurable algorithm, and exposes it to SQLite as a scalar function
and a family of collations.

vercollate provides:
  - A byte-wise version comparator with four independent switches
  - Built-in profiles for generic, Arch, Debian (dpkg) and RHEL (rpm) versions
  - Custom profiles loaded from YAML
  - SQLite ``version_compare`` function and ``version*`` collations
  - A command-line tool for comparing, sorting and querying

Quick Start
-----------
Compare two Debian versions:

    $ vercollate compare 1:1.0 '>' 2.0 --profile dpkg

Sort a column in SQLite:

    $ vercollate query "SELECT v FROM pkgs ORDER BY v COLLATE version_arch" \\
        --database packages.db

For full CLI documentation:

    $ vercollate --help

Package Structure
-----------------
cli : module
    Command-line interface with argparse.
versioning : package
    Comparison core, profiles and operator evaluation.
sqlite : package
    SQLite function and collation adapters.
config : package
    YAML profile loading.
logging : module
    Logger protocol used by library modules.
exceptions : module
    Exception hierarchy.

Public API
----------
    from vercollate.versioning import ComparisonConfig, version_compare
    from vercollate.versioning import get_profile, version_sort_key
    from vercollate.sqlite import connect, register_version_extensions
    from vercollate.config import load_profiles

Project Information
-------------------
License: Apache-2.0
"""

__version__ = "0.1.0"
__license__ = "Apache-2.0"
__description__ = "Package version ordering for Python and SQLite"

from vercollate.config import load_profiles
from vercollate.sqlite import connect, register_version_extensions
from vercollate.versioning import (
    ComparisonConfig,
    CollationProfile,
    compare_with_operator,
    get_profile,
    version_compare,
    version_sort_key,
)

__all__ = [
    "__version__",
    "__license__",
    "__description__",
    "CollationProfile",
    "ComparisonConfig",
    "compare_with_operator",
    "connect",
    "get_profile",
    "load_profiles",
    "register_version_extensions",
    "version_compare",
    "version_sort_key",
]
