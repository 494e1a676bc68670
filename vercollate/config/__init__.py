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

"""Configuration loading for vercollate.

Custom collation profiles are described in YAML and merged over the
built-in ones (generic, arch, dpkg, rhel).

Public API:

- load_profiles: Load a profile file and return all available profiles

Example:
    Basic usage:

        from pathlib import Path
        from vercollate.config import load_profiles
        from vercollate.sqlite import connect

        profiles = load_profiles(Path("profiles.yaml"))
        conn = connect(profiles=profiles)

"""

from .loader import load_profiles

__all__ = ["load_profiles"]
