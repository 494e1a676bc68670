"""
Version comparison core for vercollate.

This package implements one byte-wise comparison algorithm for package
version strings and parameterizes it into the conventions of several
packaging ecosystems. Versions are never parsed into numeric fields and
never validated: any byte sequence is accepted.

Modules
-------
compare : module
    The comparison algorithm and its ComparisonConfig switches.
profiles : module
    The named collation profiles (generic, arch, dpkg, rhel).
predicate : module
    Evaluation of comparison operators (<, <=, =, >=, >).

Public API
----------
ComparisonConfig : dataclass
    The four comparison switches.
CollationProfile : dataclass
    A name bound to a fixed ComparisonConfig.
BUILTIN_PROFILES : mapping
    The four built-in profiles keyed by name.
get_profile : function
    Look up a profile by profile or collation name.
version_compare : function
    Compare two version strings, returning a signed int.
version_sort_key : function
    Build a sort key from a config or profile.
evaluate : function
    Map a comparison result and operator to a bool.
compare_with_operator : function
    Compare two versions and evaluate an operator in one call.

Comparison Rules
----------------
1. **Epoch** (optional): text before the first ":". A version with an epoch
   sorts above one without; two epochs compare by colon position.
2. **Segments**: characters between delimiters (~ - ^ . :). The first
   character difference inside a segment decides, once the segment closes.
   A plain character always sorts above a delimiter at the same position.
3. **Delimiter precedence** (optional): ~ < - < ^ < . < : breaks ties
   between differing delimiters.
4. **Remainder** (optional): when one version is a prefix of the other, a
   following "~" sorts the longer one lower, "^" sorts it higher, and "-"
   leaves them equal. Otherwise the length decides.

Examples
--------
Generic ordering:

    >>> from vercollate.versioning import version_compare
    >>> version_compare("1.0", "1.1") < 0
    True
    >>> version_compare("1.0.0", "1.0") > 0
    True

Pre- and post-release markers:

    >>> from vercollate.versioning import get_profile
    >>> arch = get_profile("arch").config
    >>> version_compare("1.0~rc1", "1.0", arch) < 0
    True
    >>> version_compare("1.0^git1", "1.0", arch) > 0
    True

Notes
-----
- Comparison is pure and stateless; it is safe to call from many threads
- Digit runs are compared character by character, not by magnitude
"""

from .compare import (
    DEFAULT_CONFIG,
    ComparisonConfig,
    VersionString,
    compare_epoch,
    delimiter_rank,
    version_compare,
    version_sort_key,
)
from .predicate import OPERATORS, Operator, compare_with_operator, evaluate
from .profiles import BUILTIN_PROFILES, GENERIC_PROFILE, CollationProfile, get_profile

__all__ = [
    "BUILTIN_PROFILES",
    "DEFAULT_CONFIG",
    "GENERIC_PROFILE",
    "OPERATORS",
    "CollationProfile",
    "ComparisonConfig",
    "Operator",
    "VersionString",
    "compare_epoch",
    "compare_with_operator",
    "delimiter_rank",
    "evaluate",
    "get_profile",
    "version_compare",
    "version_sort_key",
]
