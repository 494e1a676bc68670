"""
Custom collation profiles loaded from YAML.

The four built-in profiles cover generic, Arch, Debian and RHEL ordering.
Sites with their own conventions can describe extra profiles in a YAML file;
each entry starts from a base profile's switches and overrides some of them.

File Format
-----------
    apiVersion: vercollate/v1
    profiles:
      pacman_loose:
        base: arch                  # optional, default: generic
        remainder_precedence: false
        description: Arch ordering without the digit heuristic

Merge Behavior
--------------
Each profile entry is merged over its base profile's switches with "last
wins" semantics:
  - **Switches**: Overwritten (epoch, delimiter_precedence,
    compare_remainder, remainder_precedence)
  - **description**: Overwritten; inherited from the base when absent

Functions
---------
load_profiles : function
    Load a profile file and return built-ins plus the file's profiles.

Private Helpers
---------------
_load_yaml_file : Load YAML with error handling
_deep_merge_dicts : Recursive dict merging
_build_profile : Validate one entry and build a CollationProfile

Error Handling
--------------
- ConfigError: Missing file, YAML syntax, invalid structure or field types,
  unknown base profile, redefinition of a built-in profile
- All errors are chained with "from err" for better debugging

Examples
--------
    >>> from pathlib import Path
    >>> from vercollate.config import load_profiles
    >>> profiles = load_profiles(Path("profiles.yaml"))
    >>> profiles["pacman_loose"].collation_name
    'version_pacman_loose'
"""

from __future__ import annotations

from dataclasses import asdict
from pathlib import Path
import re
from typing import Any

import yaml

from vercollate.exceptions import ConfigError
from vercollate.logging import Logger, get_global_logger
from vercollate.versioning import (
    BUILTIN_PROFILES,
    CollationProfile,
    ComparisonConfig,
    get_profile,
)

SUPPORTED_API_VERSIONS = {"vercollate/v1"}

_SWITCHES = (
    "epoch",
    "delimiter_precedence",
    "compare_remainder",
    "remainder_precedence",
)
_ALLOWED_KEYS = set(_SWITCHES) | {"base", "description"}

# Collation names end up in SQL, keep them to plain identifiers.
_PROFILE_NAME = re.compile(r"^[a-z][a-z0-9_]*$")

# -------------------------------
# YAML helpers
# -------------------------------


def _load_yaml_file(p: Path) -> Any:
    """
    Load a YAML file and return the parsed Python object.

    Raises:
      ConfigError - when the file does not exist, cannot be parsed, or is empty
    """
    if not p.exists():
        raise ConfigError(f"Profile file not found: {p}")
    try:
        with p.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as err:
        raise ConfigError(f"Error parsing YAML: {p}: {err}") from err
    if data is None:
        raise ConfigError(f"YAML file is empty: {p}")
    return data


# -------------------------------
# Merge logic
# -------------------------------


def _deep_merge_dicts(base: dict[str, Any], overlay: dict[str, Any]) -> dict[str, Any]:
    """
    Deep-merge two dicts with "overlay wins".

    This function does not mutate inputs; returns a new dict.
    """
    result: dict[str, Any] = dict(base)
    for k, v in overlay.items():
        if k in result and isinstance(result[k], dict) and isinstance(v, dict):
            result[k] = _deep_merge_dicts(result[k], v)
        else:
            result[k] = v
    return result


# -------------------------------
# Profile construction
# -------------------------------


def _build_profile(
    name: Any, entry: Any, known: dict[str, CollationProfile]
) -> CollationProfile:
    """Validate one profile entry and merge it over its base."""
    if not isinstance(name, str) or not _PROFILE_NAME.match(name):
        raise ConfigError(
            f"Invalid profile name {name!r}: use lowercase letters, digits "
            "and underscores, starting with a letter"
        )
    if name in BUILTIN_PROFILES:
        raise ConfigError(f"Profile {name!r} is built in and cannot be redefined")
    if entry is None:
        entry = {}
    if not isinstance(entry, dict):
        raise ConfigError(f"Profile {name!r} must be a mapping")

    unknown = set(entry) - _ALLOWED_KEYS
    if unknown:
        raise ConfigError(
            f"Profile {name!r} has unknown field(s): {', '.join(sorted(unknown))}"
        )

    base_name = entry.get("base", "generic")
    if not isinstance(base_name, str):
        raise ConfigError(f"Profile {name!r}: 'base' must be a string")
    try:
        base = get_profile(base_name, known)
    except ConfigError as err:
        raise ConfigError(f"Profile {name!r}: {err}") from err

    overrides: dict[str, Any] = {}
    for switch in _SWITCHES:
        if switch not in entry:
            continue
        value = entry[switch]
        if not isinstance(value, bool):
            raise ConfigError(
                f"Profile {name!r}: '{switch}' must be true or false, "
                f"got {value!r}"
            )
        overrides[switch] = value

    description = entry.get("description", base.description)
    if not isinstance(description, str):
        raise ConfigError(f"Profile {name!r}: 'description' must be a string")

    flags = _deep_merge_dicts(asdict(base.config), overrides)
    return CollationProfile(
        name=name, config=ComparisonConfig(**flags), description=description
    )


# -------------------------------
# Public API
# -------------------------------


def load_profiles(
    path: Path,
    *,
    logger: Logger | None = None,
) -> dict[str, CollationProfile]:
    """
    Load custom profiles from a YAML file.

    Steps
      1) Read the YAML file.
      2) Check apiVersion (if present) and the 'profiles' mapping.
      3) Build each profile over its base, in file order. A profile may use
         any built-in or any profile defined earlier in the file as base.

    Returns
      A new dict of the built-in profiles followed by the file's profiles,
      keyed by profile name.

    Raises
      ConfigError on any problem with the file or its entries.
    """
    if logger is None:
        logger = get_global_logger()

    path = path.resolve()
    logger.verbose("CONFIG", f"Loading profiles: {path}")

    data = _load_yaml_file(path)
    if not isinstance(data, dict):
        raise ConfigError(f"Top-level YAML must be a mapping (dict): {path}")

    api_version = data.get("apiVersion")
    if api_version is not None and api_version not in SUPPORTED_API_VERSIONS:
        raise ConfigError(
            f"Unsupported apiVersion {api_version!r} in {path} "
            f"(supported: {', '.join(sorted(SUPPORTED_API_VERSIONS))})"
        )

    entries = data.get("profiles")
    if entries is None:
        raise ConfigError(f"Missing required field 'profiles' in {path}")
    if not isinstance(entries, dict):
        raise ConfigError(f"'profiles' must be a mapping in {path}")

    profiles: dict[str, CollationProfile] = dict(BUILTIN_PROFILES)
    for name, entry in entries.items():
        profile = _build_profile(name, entry, profiles)
        profiles[profile.name] = profile
        logger.verbose("CONFIG", f"Loaded profile {profile.name}")
        logger.debug("CONFIG", f"  {profile.name}: {profile.config}")

    logger.verbose(
        "CONFIG",
        f"{len(profiles) - len(BUILTIN_PROFILES)} custom profile(s) loaded",
    )
    return profiles
