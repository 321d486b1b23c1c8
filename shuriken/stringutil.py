"""String splitting, joining, ASCII case folding, hashing and depfile escaping."""

from __future__ import annotations

from collections.abc import Iterable

_MURMUR_SEED = 0xDECAFBAD
_MURMUR_M = 0x5BD1E995
_MURMUR_R = 24
_MASK32 = 0xFFFFFFFF


def split_string_piece(text: str, sep: str) -> list[str]:
    """Split ``text`` at every ``sep``; empty pieces are kept."""
    return text.split(sep)


def join_string_piece(parts: Iterable[str], sep: str) -> str:
    """Join ``parts`` with ``sep`` between them."""
    return sep.join(parts)


def to_lower_ascii(c: str) -> str:
    """Lower-case a single character if it is an ASCII capital letter."""
    if "A" <= c <= "Z":
        return chr(ord(c) + (ord("a") - ord("A")))
    return c


def equals_case_insensitive_ascii(a: str, b: str) -> bool:
    """Compare two strings, ignoring the case of ASCII letters only."""
    if len(a) != len(b):
        return False
    return all(to_lower_ascii(x) == to_lower_ascii(y) for x, y in zip(a, b))


def murmur_hash2(data: bytes | str) -> int:
    """32-bit MurmurHash2 of ``data`` (strings are hashed as UTF-8)."""
    if isinstance(data, str):
        data = data.encode("utf-8")
    length = len(data)
    h = (_MURMUR_SEED ^ length) & _MASK32
    body = length - length % 4
    for offset in range(0, body, 4):
        k = int.from_bytes(data[offset:offset + 4], "little")
        k = (k * _MURMUR_M) & _MASK32
        k ^= k >> _MURMUR_R
        k = (k * _MURMUR_M) & _MASK32
        h = (h * _MURMUR_M) & _MASK32
        h ^= k
    tail = data[body:]
    if tail:
        if len(tail) >= 3:
            h ^= tail[2] << 16
        if len(tail) >= 2:
            h ^= tail[1] << 8
        h ^= tail[0]
        h = (h * _MURMUR_M) & _MASK32
    h ^= h >> 13
    h = (h * _MURMUR_M) & _MASK32
    h ^= h >> 15
    return h


def escape_for_depfile(path: str) -> str:
    """Escape spaces for a depfile; single backslashes are left alone."""
    return path.replace(" ", "\\ ")