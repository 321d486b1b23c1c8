import pytest

from shuriken.version import (
    VERSION,
    IncompatibleVersionError,
    check_ninja_version,
    parse_version,
)


def test_parse_own_version():
    assert parse_version(VERSION) == (1, 9)


@pytest.mark.parametrize(
    "text, expected",
    [("2", (2, 0)), ("2.3", (2, 3)), ("4.5.6", (4, 5)), ("", (0, 0)), ("x.y", (0, 0))],
)
def test_parse_version(text, expected):
    assert parse_version(text) == expected


def test_same_version_is_silent(capsys):
    check_ninja_version("1.9")
    assert capsys.readouterr().err == ""


def test_older_minor_is_silent(capsys):
    check_ninja_version("1.3")
    assert capsys.readouterr().err == ""


def test_older_major_warns(capsys):
    check_ninja_version("0.1")
    err = capsys.readouterr().err
    assert "versions may be incompatible" in err
    assert "(0.1)" in err


@pytest.mark.parametrize("required", ["1.10", "2.0", "3"])
def test_newer_version_raises(required):
    with pytest.raises(IncompatibleVersionError) as info:
        check_ninja_version(required)
    assert required in str(info.value)