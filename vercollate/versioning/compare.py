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

"""Core version comparison for vercollate.

This module is format-agnostic and does not parse versions into numeric
fields. Two version strings are scanned byte by byte, segment by segment,
and a single set of switches (ComparisonConfig) decides how epochs,
delimiters, and trailing content affect the order.

Delimiters rank as follows (0 means "not a delimiter"):

    ~ (1) < - (2) < ^ (3) < . (4) < : (5)

Example:
    Compare with the default (generic) switches:
        ```python
        from vercollate.versioning import ComparisonConfig, version_compare

        version_compare("1.0", "1.1")  # negative
        version_compare("1.0~rc1", "1.0", ComparisonConfig(compare_remainder=True))
        # negative: a trailing "~" marks a pre-release
        ```

Note:
    The result is a signed int whose sign carries the order. Magnitude is
    not normalized: when both sides carry an epoch, the raw difference in
    the colon positions is returned as-is.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import cmp_to_key
from typing import Any, Callable, Union

VersionString = Union[str, bytes]

_TILDE = ord("~")
_HYPHEN = ord("-")
_CARET = ord("^")
_COLON = ord(":")

_DELIMITER_RANK: dict[int, int] = {
    _TILDE: 1,
    _HYPHEN: 2,
    _CARET: 3,
    ord("."): 4,
    _COLON: 5,
}

_DIGITS = frozenset(b"0123456789")


@dataclass(frozen=True)
class ComparisonConfig:
    """Switches that turn the comparison core into a packaging convention.

    Attributes:
        epoch: Honour an epoch prefix (text before the first ":"). A version
            with an epoch always sorts above one without.
        delimiter_precedence: Delimiters of different rank break ties
            directly, even when segment content is equal.
        compare_remainder: Resolve trailing content past the shorter string
            with the pre/post-release rules instead of plain length.
        remainder_precedence: When resolving the remainder, ignore the
            segment value difference if the last compared character was a
            digit and fall back to the length difference.

    """

    epoch: bool = False
    delimiter_precedence: bool = False
    compare_remainder: bool = False
    remainder_precedence: bool = False


DEFAULT_CONFIG = ComparisonConfig()


def _as_bytes(value: VersionString) -> bytes:
    if isinstance(value, str):
        return value.encode("utf-8")
    return bytes(value)


def delimiter_rank(char: int | str) -> int:
    """Return the delimiter rank of a single character, 0 if not a delimiter.

    Accepts either a byte value (as produced by indexing ``bytes``) or a
    one-character string.
    """
    if isinstance(char, str):
        if len(char) != 1:
            return 0
        char = ord(char)
    return _DELIMITER_RANK.get(char, 0)


def compare_epoch(left: VersionString, right: VersionString) -> int:
    """Compare the epoch prefixes of two versions.

    Returns:
        The difference of the colon positions if both versions have an
            epoch, 1 if only the left has one, -1 if only the right has one,
            and 0 if neither has one.

    """
    left_epoch = _as_bytes(left).find(b":")
    right_epoch = _as_bytes(right).find(b":")

    if left_epoch != -1 and right_epoch != -1:
        return left_epoch - right_epoch
    if left_epoch != -1:
        return 1
    if right_epoch != -1:
        return -1
    return 0


def _scan_segments(
    left: bytes, right: bytes, delimiter_precedence: bool
) -> tuple[int | None, int]:
    """Walk the shared prefix of both versions.

    Returns (result, first_diff). ``result`` is set when the scan decided
    the order on its own; otherwise it is None and ``first_diff`` holds the
    first character difference of the segment still open at the end.
    """
    first_diff = 0
    for i in range(min(len(left), len(right))):
        left_rank = _DELIMITER_RANK.get(left[i], 0)
        right_rank = _DELIMITER_RANK.get(right[i], 0)

        # Inside a segment: remember only the first difference.
        if left_rank == 0 and right_rank == 0:
            if first_diff == 0:
                first_diff = left[i] - right[i]
            continue
        if left_rank == 0:
            return 1, first_diff
        if right_rank == 0:
            return -1, first_diff

        # Both sides closed the segment.
        if first_diff != 0:
            return first_diff, first_diff

        if delimiter_precedence and left_rank != right_rank:
            return left_rank - right_rank, first_diff

    return None, first_diff


def _resolve_remainder(
    left: bytes,
    right: bytes,
    first_diff: int,
    config: ComparisonConfig,
) -> int:
    """Order two versions whose shared prefix left one side exhausted.

    A trailing "~" on the longer side marks a pre-release (sorts lower), a
    trailing "^" marks a post-release (sorts higher), and a trailing "-"
    leaves the two equal. Anything else falls back to the pending segment
    difference and finally to the length difference.
    """
    length_diff = len(left) - len(right)
    if not config.compare_remainder:
        return length_diff

    pos = min(len(left), len(right))
    if len(left) == pos:
        longer, shorter, sign = right, left, 1
    else:
        longer, shorter, sign = left, right, -1

    extra = longer[pos]
    if extra == _TILDE:
        return sign
    if extra == _HYPHEN:
        return 0
    if extra == _CARET:
        return -sign
    if first_diff != 0 and (
        not config.remainder_precedence or shorter[pos - 1] not in _DIGITS
    ):
        return first_diff

    return length_diff


def version_compare(
    left: VersionString,
    right: VersionString,
    config: ComparisonConfig | None = None,
) -> int:
    """Compare two version strings.

    Args:
        left: Left version. ``str`` values are compared as UTF-8 bytes.
        right: Right version.
        config: Comparison switches. Default is ComparisonConfig() (the
            generic profile).

    Returns:
        A negative int if left sorts before right, 0 if they are equal, and
            a positive int if left sorts after right.

    Example:
        Debian-style epochs:
            ```python
            from vercollate.versioning import get_profile, version_compare

            dpkg = get_profile("dpkg").config
            version_compare("1:1.0", "2.0", dpkg)  # positive
            ```

    """
    if config is None:
        config = DEFAULT_CONFIG

    left_bytes = _as_bytes(left)
    right_bytes = _as_bytes(right)

    if not left_bytes and not right_bytes:
        return 0
    if not left_bytes:
        return -1
    if not right_bytes:
        return 1
    if left_bytes == right_bytes:
        return 0

    if config.epoch:
        epoch_diff = compare_epoch(left_bytes, right_bytes)
        if epoch_diff != 0:
            return epoch_diff

    result, first_diff = _scan_segments(
        left_bytes, right_bytes, config.delimiter_precedence
    )
    if result is not None:
        return result

    if len(left_bytes) == len(right_bytes):
        return first_diff

    return _resolve_remainder(left_bytes, right_bytes, first_diff, config)


def version_sort_key(config: Any = None) -> Callable[[VersionString], Any]:
    """Build a ``sorted()`` key that orders versions with version_compare.

    Args:
        config: A ComparisonConfig, or any object with a ``config``
            attribute holding one (such as a CollationProfile). Default is
            the generic configuration.

    Returns:
        A key function suitable for ``sorted(..., key=...)``.

    Example:
        Sort Arch package versions:
            ```python
            from vercollate.versioning import get_profile, version_sort_key

            sorted(["1.0", "1.0~rc1", "1.0^git1"],
                   key=version_sort_key(get_profile("arch")))
            # ['1.0~rc1', '1.0', '1.0^git1']
            ```

    """
    if config is not None and not isinstance(config, ComparisonConfig):
        config = config.config

    def _cmp(left: VersionString, right: VersionString) -> int:
        return version_compare(left, right, config)

    return cmp_to_key(_cmp)
