"""Path canonicalization, escaping, terminal output and small system helpers."""

from __future__ import annotations

import os
import re
import sys
from typing import TextIO

_PROGRAM = "shuriken"

_MAX_PATH_COMPONENTS = 60
_SLASH_BITS_WIDTH = 64

_COLOR_RED = "\x1b[31m"
_COLOR_GREEN = "\x1b[32m"
_COLOR_YELLOW = "\x1b[33m"
_COLOR_DEFAULT = "\x1b[39m"

_SHELL_SAFE = frozenset(
    "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789_+-./"
)
_WIN32_UNSAFE = frozenset(' "')

_ANSI_CSI = re.compile(r"\x1b(?:\[[^A-Za-z]*[A-Za-z]?)?")


class CanonicalizeError(ValueError):
    """Raised when a path cannot be canonicalized."""


class FatalError(Exception):
    """Raised by :func:`fatal` after the message has been printed."""

    exit_code = 1


def _supports_color(stream: TextIO) -> bool:
    isatty = getattr(stream, "isatty", None)
    if isatty is None or not isatty():
        return False
    return os.environ.get("TERM") != "dumb"


def _emit(stream: TextIO, color: str, label: str, msg: str) -> None:
    colored = _supports_color(stream)
    parts = []
    if colored:
        parts.append(color)
    parts.append(f"{_PROGRAM}: {label}{msg}")
    if colored:
        parts.append(_COLOR_DEFAULT)
    parts.append("\n")
    stream.write("".join(parts))
    stream.flush()


def fatal(msg: str) -> None:
    """Print a fatal message to stderr and raise :class:`FatalError`."""
    _emit(sys.stderr, _COLOR_RED, "fatal: ", msg)
    raise FatalError(msg)


def warning(msg: str) -> None:
    """Print a warning message to stderr."""
    _emit(sys.stderr, _COLOR_YELLOW, "warning: ", msg)


def error(msg: str) -> None:
    """Print an error message to stderr."""
    _emit(sys.stderr, _COLOR_RED, "error: ", msg)


def success(msg: str) -> None:
    """Print a success message to stdout."""
    _emit(sys.stdout, _COLOR_GREEN, "", msg)


def canonicalize_path(path: str, windows: bool | None = None) -> tuple[str, int]:
    """Canonicalize ``path`` like "foo/../bar.h" into "bar.h".

    Returns the canonical path and the slash bits: bit *n* is set when the
    *n*-th separator of the result was a backslash (only on Windows).
    """
    if windows is None:
        windows = os.name == "nt"
    if not path:
        raise CanonicalizeError("empty path")

    seps = "/\\" if windows else "/"
    prefix = ""
    if path[0] in seps:
        if windows and len(path) > 1 and path[1] in seps:
            prefix = path[:2]
        else:
            prefix = path[0]

    pattern = re.compile(f"([^{re.escape(seps)}]+)([{re.escape(seps)}]|\\Z)")
    pieces: list[str] = []
    stack: list[int] = []
    for match in pattern.finditer(path, len(prefix)):
        token = match.group(1)
        # The terminator stands for the end of the string; it is dropped below.
        sep = match.group(2) or "\0"
        if token == ".":
            continue
        if token == "..":
            if stack:
                del pieces[stack.pop():]
            else:
                pieces.append(".." + sep)
            continue
        if len(stack) == _MAX_PATH_COMPONENTS:
            fatal(f"path has too many components : {path}")
        stack.append(len(pieces))
        pieces.append(token + sep)

    joined = prefix + "".join(pieces)
    if not joined:
        return ".", 0
    result = joined[:-1]

    if not windows:
        return result, 0

    bits = 0
    position = 0
    for ch in result:
        if ch == "\\" and position < _SLASH_BITS_WIDTH:
            bits |= 1 << position
        if ch in "/\\":
            position += 1
    return result.replace("\\", "/"), bits


def shell_escape(text: str) -> str:
    """Quote ``text`` for a POSIX shell, leaving safe strings untouched."""
    if all(ch in _SHELL_SAFE for ch in text):
        return text
    return "'" + text.replace("'", "'\\''") + "'"


def win32_escape(text: str) -> str:
    """Quote ``text`` the way CommandLineToArgvW() expects."""
    if not any(ch in _WIN32_UNSAFE for ch in text):
        return text
    out = ['"']
    backslashes = 0
    for ch in text:
        if ch == "\\":
            backslashes += 1
        elif ch == '"':
            out.append("\\" * (backslashes + 1))
            backslashes = 0
        else:
            backslashes = 0
        out.append(ch)
    out.append("\\" * backslashes)
    out.append('"')
    return "".join(out)


def read_file(path: str | os.PathLike) -> bytes:
    """Return the whole contents of ``path``; raises OSError on failure."""
    with open(path, "rb") as f:
        return f.read()


def is_latin_alpha(c: str) -> bool:
    """True for ASCII letters only, independent of locale."""
    return "a" <= c <= "z" or "A" <= c <= "Z"


def strip_ansi_escape_codes(text: str) -> str:
    """Remove ANSI CSI escape sequences (and stray escape characters)."""
    return _ANSI_CSI.sub("", text)


def processor_count() -> int:
    """Number of processors this process may run on; 0 if unknown."""
    affinity = getattr(os, "sched_getaffinity", None)
    if affinity is not None:
        try:
            return len(affinity(0))
        except OSError:
            pass
    return os.cpu_count() or 0


def load_average() -> float:
    """One-minute load average, or a negative value when unavailable."""
    try:
        return os.getloadavg()[0]
    except (OSError, AttributeError):
        return -0.0


def elide_middle(text: str, width: int) -> str:
    """Replace the middle of ``text`` with "..." if it is longer than ``width``."""
    if len(text) <= width:
        return text
    elide = max(0, (width - 3) // 2)
    tail = text[len(text) - elide:] if elide else ""
    return text[:elide] + "..." + tail


def truncate(path: str | os.PathLike, size: int) -> None:
    """Truncate the file at ``path`` to ``size`` bytes; raises OSError."""
    if os.name == "nt":
        with open(path, "ab"):
            pass
    os.truncate(path, size)