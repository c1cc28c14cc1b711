import pytest

from aktext.view import (
    compare,
    is_one_of,
    is_one_of_ignoring_case,
    iter_split_view,
    lines,
    split_view,
    split_view_if,
    to_int,
    to_uint,
)


SPLIT_CASES = [
    ("a,b,c", ","),
    (",a,,b,", ","),
    ("no separators", ","),
    ("one::two::::three", "::"),
    (",,,", ","),
]


@pytest.mark.parametrize("text, sep", SPLIT_CASES)
def test_split_view_keep_empty_round_trips(text, sep):
    assert sep.join(split_view(text, sep, True)) == text


@pytest.mark.parametrize("text, sep", SPLIT_CASES)
def test_split_view_drops_empty_parts(text, sep):
    parts = split_view(text, sep)
    assert all(parts)
    assert parts == [p for p in split_view(text, sep, True) if p]


@pytest.mark.parametrize("text, sep", SPLIT_CASES)
def test_iter_split_view_matches_list(text, sep):
    assert list(iter_split_view(text, sep, True)) == split_view(text, sep, True)


def test_split_view_empty_string_gives_nothing():
    assert split_view("", ",", True) == []


def test_split_view_empty_separator_raises():
    with pytest.raises(ValueError):
        split_view("abc", "")


@pytest.mark.parametrize("text", ["a b  c", " x ", "plain", "   "])
def test_split_view_if_agrees_with_single_char_split(text):
    for keep in (False, True):
        assert split_view_if(text, lambda ch: ch == " ", keep) == split_view(text, " ", keep)


def test_split_view_if_empty():
    assert split_view_if("", lambda ch: True, True) == []


def test_lines_all_line_endings():
    assert lines("a\r\nb\rc\nd") == ["a", "b", "c", "d"]


def test_lines_final_ending_adds_no_line():
    assert lines("a\n") == ["a"]
    assert lines("a\r\n") == ["a"]


def test_lines_keeps_blank_lines():
    assert lines("\n\n") == ["", ""]


def test_lines_empty():
    assert lines("") == []


def test_lines_without_cr_only_splits_newlines():
    assert lines("a\r\nb", consider_cr=False) == ["a\r", "b"]
    assert lines("a\n", consider_cr=False) == ["a", ""]


def test_compare_handles_missing():
    assert compare(None, None) == 0
    assert compare(None, "") == -1
    assert compare("", None) == 1


@pytest.mark.parametrize("a, b", [("a", "b"), ("foo", "foobar"), ("abc", "abd"), ("x", "x")])
def test_compare_is_antisymmetric_and_ordered(a, b):
    assert compare(a, b) == -compare(b, a)
    assert compare(a, b) == (a > b) - (a < b)


def test_compare_shorter_prefix_first():
    assert compare("foo", "foobar") == -1
    assert compare("foobar", "foobar") == 0


def test_to_int():
    assert to_int("42") == 42
    assert to_int(" -7 ") == -7
    assert to_int("2147483647") == 2147483647
    assert to_int("2147483648") is None
    assert to_int("abc") is None


def test_to_uint():
    assert to_uint("4294967295") == 4294967295
    assert to_uint("4294967296") is None
    assert to_uint("-1") is None


def test_is_one_of():
    assert is_one_of("GET", "POST", "GET")
    assert not is_one_of("get", "POST", "GET")
    assert not is_one_of("GET")


def test_is_one_of_ignoring_case():
    assert is_one_of_ignoring_case("get", "POST", "GET")
    assert not is_one_of_ignoring_case("gets", "GET")