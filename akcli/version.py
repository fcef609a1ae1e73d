"""Application version and semantic version comparison."""

from __future__ import annotations

import re
from enum import IntEnum
from typing import NamedTuple

VERSION = "1.5.4"

_SEMVER_RE = re.compile(
    r"^v?([0-9]+)(\.[0-9]+)?(\.[0-9]+)?"
    r"(-([0-9A-Za-z\-]+(\.[0-9A-Za-z\-]+)*))?"
    r"(\+([0-9A-Za-z\-]+(\.[0-9A-Za-z\-]+)*))?$"
)


class Comparison(IntEnum):
    """Result of comparing a left version with a right version."""

    GREATER = -1
    EQUALS = 0
    SMALLER = 1
    ERROR = 2


class _Version(NamedTuple):
    major: int
    minor: int
    patch: int
    prerelease: str


def _parse(text: str) -> _Version | None:
    match = _SEMVER_RE.match(text)
    if match is None:
        return None
    major = int(match.group(1))
    minor = int(match.group(2)[1:]) if match.group(2) else 0
    patch = int(match.group(3)[1:]) if match.group(3) else 0
    return _Version(major, minor, patch, match.group(5) or "")


def _compare_identifier(left: str, right: str) -> int:
    left_num, right_num = left.isdigit(), right.isdigit()
    if left_num and right_num:
        a, b = int(left), int(right)
        return (a > b) - (a < b)
    if left_num:
        return -1
    if right_num:
        return 1
    return (left > right) - (left < right)


def _compare_prerelease(left: str, right: str) -> int:
    if left == right:
        return 0
    if not left:
        return 1
    if not right:
        return -1
    left_parts, right_parts = left.split("."), right.split(".")
    for a, b in zip(left_parts, right_parts):
        result = _compare_identifier(a, b)
        if result:
            return result
    return (len(left_parts) > len(right_parts)) - (len(left_parts) < len(right_parts))


def _cmp(left: _Version, right: _Version) -> int:
    core_left = (left.major, left.minor, left.patch)
    core_right = (right.major, right.minor, right.patch)
    if core_left != core_right:
        return -1 if core_left < core_right else 1
    return _compare_prerelease(left.prerelease, right.prerelease)


def compare(left: str, right: str) -> Comparison:
    """Compare two versions.

    SMALLER if left < right, GREATER if left > right, EQUALS if they match,
    ERROR if either cannot be parsed.
    """
    left_version = _parse(left)
    if left_version is None:
        return Comparison.ERROR
    right_version = _parse(right)
    if right_version is None:
        return Comparison.ERROR
    result = _cmp(left_version, right_version)
    if result < 0:
        return Comparison.SMALLER
    if result > 0:
        return Comparison.GREATER
    return Comparison.EQUALS