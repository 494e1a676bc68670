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

"""Named collation profiles.

Each profile binds a name to a fixed ComparisonConfig. The built-in set
covers the four packaging conventions vercollate knows about:

| profile | collation    | epoch | delim. precedence | remainder | remainder precedence |
|---------|--------------|-------|-------------------|-----------|----------------------|
| generic | version      | no    | no                | no        | no                   |
| arch    | version_arch | yes   | no                | yes       | yes                  |
| dpkg    | version_dpkg | yes   | yes               | no        | no                   |
| rhel    | version_rhel | yes   | yes               | yes       | no                   |

Additional profiles can be loaded from YAML (see vercollate.config).
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType

from vercollate.exceptions import ConfigError
from vercollate.versioning.compare import ComparisonConfig

__all__ = [
    "BUILTIN_PROFILES",
    "CollationProfile",
    "GENERIC_PROFILE",
    "get_profile",
]


@dataclass(frozen=True)
class CollationProfile:
    """A named, fixed comparison configuration.

    Attributes:
        name: Profile name (e.g., "dpkg").
        config: Comparison switches applied by this profile.
        description: Human-readable summary shown by the CLI.

    """

    name: str
    config: ComparisonConfig
    description: str = ""

    @property
    def collation_name(self) -> str:
        """SQL collation name ("version" or "version_<name>")."""
        if self.name == "generic":
            return "version"
        return f"version_{self.name}"


GENERIC_PROFILE = CollationProfile(
    name="generic",
    config=ComparisonConfig(),
    description="Plain segment-wise ordering; extra content sorts by length",
)

BUILTIN_PROFILES: Mapping[str, CollationProfile] = MappingProxyType(
    {
        "generic": GENERIC_PROFILE,
        "arch": CollationProfile(
            name="arch",
            config=ComparisonConfig(
                epoch=True, compare_remainder=True, remainder_precedence=True
            ),
            description="Arch Linux (pacman/vercmp) package versions",
        ),
        "dpkg": CollationProfile(
            name="dpkg",
            config=ComparisonConfig(epoch=True, delimiter_precedence=True),
            description="Debian (dpkg) package versions",
        ),
        "rhel": CollationProfile(
            name="rhel",
            config=ComparisonConfig(
                epoch=True, delimiter_precedence=True, compare_remainder=True
            ),
            description="RHEL (rpm) package versions",
        ),
    }
)


def get_profile(
    name: str, profiles: Mapping[str, CollationProfile] | None = None
) -> CollationProfile:
    """Look up a profile by profile name or SQL collation name.

    Args:
        name: Profile name ("dpkg") or collation name ("version_dpkg").
            Matching is case-insensitive.
        profiles: Profiles to search. Default is BUILTIN_PROFILES.

    Returns:
        The matching CollationProfile.

    Raises:
        ConfigError: If no profile matches.

    """
    if profiles is None:
        profiles = BUILTIN_PROFILES

    key = name.strip().lower()
    if key in profiles:
        return profiles[key]
    for profile in profiles.values():
        if profile.collation_name == key:
            return profile

    available = ", ".join(sorted(profiles))
    raise ConfigError(f"Unknown profile {name!r}. Available profiles: {available}")
