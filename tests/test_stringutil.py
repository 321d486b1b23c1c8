import pytest

from shuriken.stringutil import (
    equals_case_insensitive_ascii,
    escape_for_depfile,
    join_string_piece,
    murmur_hash2,
    split_string_piece,
    to_lower_ascii,
)


@pytest.mark.parametrize(
    "text, expected",
    [
        ("a:b:c", ["a", "b", "c"]),
        ("", [""]),
        ("a", ["a"]),
        (":", ["", ""]),
        (":a:b:c:", ["", "a", "b", "c", ""]),
    ],
)
def test_split_string_piece(text, expected):
    assert split_string_piece(text, ":") == expected


def test_join_string_piece():
    parts = split_string_piece("a:b:c", ":")
    assert join_string_piece(parts, ":") == "a:b:c"
    assert join_string_piece(parts, "/") == "a/b/c"


def test_join_empty_piece():
    assert join_string_piece(split_string_piece("", ":"), ":") == ""


def test_join_empty_list():
    assert join_string_piece([], ":") == ""


def test_join_single():
    assert join_string_piece(split_string_piece("a", ":"), ":") == "a"


def test_join_round_trip_with_edges():
    assert join_string_piece(split_string_piece(":a:b:c:", ":"), ":") == ":a:b:c:"


@pytest.mark.parametrize(
    "c, expected",
    [("A", "a"), ("Z", "z"), ("a", "a"), ("z", "z"), ("/", "/"), ("1", "1")],
)
def test_to_lower_ascii(c, expected):
    assert to_lower_ascii(c) == expected


@pytest.mark.parametrize(
    "a, b", [("abc", "abc"), ("abc", "ABC"), ("abc", "aBc"), ("AbC", "aBc"), ("", "")]
)
def test_equals_case_insensitive_true(a, b):
    assert equals_case_insensitive_ascii(a, b) is True


@pytest.mark.parametrize("a, b", [("a", "ac"), ("/", "\\"), ("1", "10")])
def test_equals_case_insensitive_false(a, b):
    assert equals_case_insensitive_ascii(a, b) is False


def test_escape_for_depfile_spaces_in_filename():
    assert escape_for_depfile("sub\\some sdk\\foo.h") == "sub\\some\\ sdk\\foo.h"


def test_murmur_str_and_bytes_agree():
    assert murmur_hash2("foo/bar.h") == murmur_hash2(b"foo/bar.h")


@pytest.mark.parametrize("data", [b"", b"a", b"ab", b"abc", b"abcd", b"abcdefg"])
def test_murmur_fits_32_bits_and_is_stable(data):
    value = murmur_hash2(data)
    assert 0 <= value <= 0xFFFFFFFF
    assert murmur_hash2(bytes(data)) == value


def test_murmur_distinguishes_inputs():
    hashes = {murmur_hash2(s) for s in ["a", "b", "ab", "ba", "abcd", "abce"]}
    assert len(hashes) == 6