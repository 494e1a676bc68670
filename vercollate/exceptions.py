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

"""Exception hierarchy for vercollate.

The comparison core never raises: any two byte sequences under any
configuration produce a result. Errors only come from the edges:

- ConfigError: Profile files and profile lookups
- FunctionArgumentError: Arguments passed to the SQL ``version_compare``
  function (ArgumentCountError, ArgumentTypeError, UnknownOperatorError)

All exceptions inherit from VercollateError, allowing users to catch all
vercollate errors with a single except clause if needed.

Example:
    Catching argument errors:
        ```python
        from vercollate.exceptions import FunctionArgumentError
        from vercollate.sqlite import version_compare_function

        try:
            version_compare_function("1.0", "!=", "2.0")
        except FunctionArgumentError as e:
            print(f"Bad arguments: {e}")
        ```
"""

from __future__ import annotations

__all__ = [
    "VercollateError",
    "ConfigError",
    "FunctionArgumentError",
    "ArgumentCountError",
    "ArgumentTypeError",
    "UnknownOperatorError",
]


class VercollateError(Exception):
    """Base exception for all vercollate errors."""

    pass


class ConfigError(VercollateError):
    """Raised for configuration-related errors.

    This exception is raised when there are problems with:

    - YAML parsing (syntax errors, invalid structure)
    - Unknown or badly typed profile fields
    - Unknown profile or collation names
    - Missing profile files
    """

    pass


class FunctionArgumentError(VercollateError):
    """Base class for invalid arguments to the scalar comparison function.

    These are deterministic input-validation failures. They are reported
    once to the caller and never retried.
    """

    pass


class ArgumentCountError(FunctionArgumentError):
    """Raised when fewer than three arguments are given."""

    pass


class ArgumentTypeError(FunctionArgumentError):
    """Raised when a version, the operator, or an option has the wrong type."""

    pass


class UnknownOperatorError(FunctionArgumentError):
    """Raised when the operator is not one of <, <=, =, >=, >."""

    pass
