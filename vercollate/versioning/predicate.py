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

"""Turn a three-way comparison result into a boolean predicate."""

from __future__ import annotations

from typing import Literal

from vercollate.exceptions import UnknownOperatorError
from vercollate.versioning.compare import (
    ComparisonConfig,
    VersionString,
    version_compare,
)

Operator = Literal["<", "<=", "=", ">=", ">"]

OPERATORS: frozenset[str] = frozenset({"<", "<=", "=", ">=", ">"})


def evaluate(result: int, op: str) -> bool:
    """Evaluate ``result <op> 0``.

    Args:
        result: Signed comparison result (only the sign is used).
        op: One of "<", "<=", "=", ">=", ">".

    Returns:
        True if the operator holds for the result.

    Raises:
        UnknownOperatorError: If op is not a recognized operator.

    """
    if op not in OPERATORS:
        raise UnknownOperatorError(
            f"Unknown compare operator {op!r}. Must provide one of the "
            "following: (<, <=, =, >=, >)"
        )

    if result < 0:
        return op in ("<", "<=")
    if result > 0:
        return op in (">", ">=")
    return op in ("=", "<=", ">=")


def compare_with_operator(
    left: VersionString,
    op: str,
    right: VersionString,
    config: ComparisonConfig | None = None,
) -> bool:
    """Return True if ``left <op> right`` holds under config.

    Example:
        ```python
        compare_with_operator("1.0~rc1", "<", "1.0", get_profile("rhel").config)
        # True
        ```
    """
    return evaluate(version_compare(left, right, config), op)
