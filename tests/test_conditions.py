import pytest

from atlaskit.errors.conditions import (
    MapCond,
    cond_and,
    cond_eq,
    cond_has_prefix,
    cond_has_suffix,
    cond_not,
    cond_or,
    cond_re_match,
)


def test_map_cond_str():
    assert str(MapCond(lambda err: True)) == "MapCond"


@pytest.mark.parametrize("message, expected", [("foo", True), ("bar", False)])
def test_cond_eq(message, expected):
    assert cond_eq("foo")(Exception(message)) is expected


@pytest.mark.parametrize(
    "message, expected",
    [
        ("foobar", True),
        ("foogazbar", True),
        ("foo", False),
        ("foo-bar", False),
        ("bar", False),
    ],
)
def test_cond_re_match(message, expected):
    assert cond_re_match(r"^foo[^-]*bar$")(Exception(message)) is expected


def test_cond_re_match_invalid_pattern_never_matches():
    assert cond_re_match("(")(Exception("(")) is False


@pytest.mark.parametrize("message, expected", [("zfoo", True), ("foobar", False)])
def test_cond_has_suffix(message, expected):
    assert cond_has_suffix("foo")(Exception(message)) is expected


@pytest.mark.parametrize("message, expected", [("fooz", True), ("barfoo", False)])
def test_cond_has_prefix(message, expected):
    assert cond_has_prefix("foo")(Exception(message)) is expected


@pytest.mark.parametrize(
    "message, expected",
    [
        ("foobar", False),
        ("foogazbar", False),
        ("foo", True),
        ("foo-bar", True),
        ("bar", True),
    ],
)
def test_cond_not(message, expected):
    assert cond_not(cond_re_match(r"^foo[^-]*bar$"))(Exception(message)) is expected


@pytest.mark.parametrize(
    "message, expected", [("zfoo", False), ("foobar", False), ("barfoo", True)]
)
def test_cond_and(message, expected):
    cond = cond_and(cond_has_suffix("foo"), cond_has_prefix("bar"))
    assert cond(Exception(message)) is expected


@pytest.mark.parametrize(
    "message, expected", [("zfoo", True), ("foobar", False), ("baro", True)]
)
def test_cond_or(message, expected):
    cond = cond_or(cond_has_suffix("foo"), cond_has_prefix("bar"))
    assert cond(Exception(message)) is expected


def test_empty_and_or():
    assert cond_and()(Exception("x")) is True
    assert cond_or()(Exception("x")) is False