"""A small automaton that spots a single word in a stream of characters."""

from __future__ import annotations


def _upper(char: str) -> str:
    """Upper-case a single character, keeping it a single character."""
    upper = char.upper()
    return upper if len(upper) == 1 else char


class WordMatcher:
    """Match one word, case-insensitively, fed one character at a time."""

    def __init__(self, needle: str) -> None:
        if not needle:
            raise ValueError("needle must not be empty")
        self._word = [_upper(char) for char in needle]
        self._position = 0

    def match(self, char: str) -> bool:
        """Feed one character; return True when it completes the word."""
        if self._word[self._position] == _upper(char):
            if self._position == len(self._word) - 1:
                self._position = 0
                return True
            self._position += 1
        else:
            self._position = 0
        return False