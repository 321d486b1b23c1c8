"""The tool's version and checks against a build file's required version."""

from __future__ import annotations

import re

from shuriken.util import warning

VERSION = "1.9.0.git"

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


class IncompatibleVersionError(Exception):
    """Raised when a build file requires a newer version than this one."""


def _atoi(text: str) -> int:
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else 0


def parse_version(version: str) -> tuple[int, int]:
    """Return the (major, minor) components of a version string."""
    major_text, dot, rest = version.partition(".")
    major = _atoi(major_text)
    if not dot:
        return major, 0
    return major, _atoi(rest.partition(".")[0])


def check_ninja_version(required_version: str) -> None:
    """Warn if the build file is older; raise if it needs a newer version."""
    bin_major, bin_minor = parse_version(VERSION)
    file_major, file_minor = parse_version(required_version)

    if bin_major > file_major:
        warning(
            f"ninja executable version ({VERSION}) greater than build file "
            f"ninja_required_version ({required_version}); "
            "versions may be incompatible."
        )
        return

    if (bin_major == file_major and bin_minor < file_minor) or bin_major < file_major:
        raise IncompatibleVersionError(
            f"ninja version ({VERSION}) incompatible with build file "
            f"ninja_required_version version ({required_version})."
        )