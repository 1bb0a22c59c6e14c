import pytest

from chnative.word_matcher import WordMatcher


def _check_match(haystack: str, needle: str) -> bool:
    matcher = WordMatcher(needle)
    return any(matcher.match(char) for char in haystack)


@pytest.mark.parametrize(
    ("haystack", "needle", "expected"),
    [
        ("select * from test", "select", True),
        ("select * from test", "*", True),
        ("select * from test", "elect", True),
        ("select * from test", "zelect", False),
        ("select * from test", "sElEct", True),
    ],
)
def test_word_matcher(haystack, needle, expected):
    assert _check_match(haystack, needle) is expected


def test_match_resets_after_full_word():
    matcher = WordMatcher("in")
    results = [matcher.match(char) for char in "inin"]
    assert results == [False, True, False, True]


def test_mismatch_resets_position():
    matcher = WordMatcher("and")
    results = [matcher.match(char) for char in "anxd"]
    assert results == [False, False, False, False]


def test_empty_needle_rejected():
    with pytest.raises(ValueError):
        WordMatcher("")