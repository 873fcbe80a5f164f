"""Character predicates used by word and subword scanning."""

from __future__ import annotations

DIGITS = frozenset("0123456789")
HEX_DIGITS = frozenset("0123456789abcdefABCDEF")
UPPERS = frozenset("ABCDEFGHIJKLMNOPQRSTUVWXYZÉÈÊÀÓÒŽŠ")
WORD_CHARS = frozenset(
    "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz-_"
)


def is_word_char(chars: str, extra: str | None = None) -> bool:
    """True when every character of ``chars`` belongs to a word.

    The empty string is never a word character, which is what stops scans
    at document edges. A character from ``extra`` settles the answer
    immediately.
    """

    if not chars:
        return False
    for char in chars:
        if extra and char in extra:
            return True
        if char not in WORD_CHARS:
            return False
    return True


def is_hex_digit(char: str) -> bool:
    return len(char) == 1 and char in HEX_DIGITS


def is_hex_string(text: str) -> bool:
    return all(char in HEX_DIGITS for char in text)


def is_upper(char: str) -> bool:
    return len(char) == 1 and char in UPPERS


def is_digit(char: str) -> bool:
    return len(char) == 1 and char in DIGITS


def is_underscore(char: str) -> bool:
    return char == "_"


def is_hyphen(char: str) -> bool:
    return char == "-"


__all__ = [
    "is_word_char",
    "is_hex_digit",
    "is_hex_string",
    "is_upper",
    "is_digit",
    "is_underscore",
    "is_hyphen",
]
