"""Subword boundary search and separator skipping.

A word splits into subwords wherever :func:`is_subword_breakpoint` holds:
at a lower-to-upper hump, and wherever a run of digits, underscores, or
hyphens starts or ends. ``fooBar_2x`` therefore walks as ``foo|Bar|_|2|x``.
Words written as ``#`` followed by hex digits are colour literals and are
crossed in one step.
"""

from __future__ import annotations

from subword_engine.buffer import Position, TextDocument

from .classify import is_digit, is_hex_string, is_hyphen, is_underscore, is_upper
from .errors import InvariantViolation
from .words import extend_to_word

SEPARATOR_RUN_CHARS = " \t|&"
HEX_LITERAL_PREFIX = "#"


def is_subword_breakpoint(word: str, index: int) -> bool:
    """Whether a subword boundary sits between ``word[index-1]`` and ``word[index]``."""

    if index <= 0 or index >= len(word):
        raise InvariantViolation(
            "breakpoint index outside word", detail={"word": word, "index": index}
        )
    prev_char = word[index - 1]
    next_char = word[index]
    return (
        (not is_upper(prev_char) and is_upper(next_char))
        or is_digit(prev_char) != is_digit(next_char)
        or is_underscore(prev_char) != is_underscore(next_char)
        or is_hyphen(prev_char) != is_hyphen(next_char)
    )


def character_left_of_offset(document: TextDocument, offset: int) -> str:
    char = document.char_range(offset - 1, offset)
    if len(char) != 1 and offset > 0:
        raise InvariantViolation(
            "expected a single character", detail={"offset": offset, "char": char}
        )
    return char


def character_right_of_offset(document: TextDocument, offset: int) -> str:
    return document.char_range(offset, offset + 1)


def previous_character(document: TextDocument, position: Position) -> str:
    offset = document.offset_at(position)
    if offset == 0:
        return ""
    return document.char_range(offset - 1, offset)


def skip_left(document: TextDocument, position: Position) -> Position:
    """Step over one separator, or a whole run of one repeated blank/pipe/amp."""

    offset = document.offset_at(position)
    first_char = character_left_of_offset(document, offset)
    if not first_char:
        return position
    if first_char not in SEPARATOR_RUN_CHARS:
        return document.position_at(offset - 1)
    offset -= 1
    while character_left_of_offset(document, offset) == first_char:
        offset -= 1
    return document.position_at(offset)


def skip_right(document: TextDocument, position: Position) -> Position:
    offset = document.offset_at(position)
    first_char = character_right_of_offset(document, offset)
    if not first_char:
        return position
    if first_char not in SEPARATOR_RUN_CHARS:
        return document.position_at(offset + 1)
    offset += 1
    while character_right_of_offset(document, offset) == first_char:
        offset += 1
    return document.position_at(offset)


def _is_hex_literal(document: TextDocument, start: Position, word: str) -> bool:
    return previous_character(document, start) == HEX_LITERAL_PREFIX and is_hex_string(
        word
    )


def move_position_subword_left(
    document: TextDocument, position: Position, extra: str | None = None
) -> Position:
    position = document.validate_position(position)
    word_range = extend_to_word(document, position, extra)
    if word_range.start == position:
        return skip_left(document, position)

    word = document.get_text(word_range)
    if _is_hex_literal(document, word_range.start, word):
        return word_range.start

    start_offset = document.offset_at(word_range.start)
    for index in range(document.offset_at(position) - 1 - start_offset, 0, -1):
        if is_subword_breakpoint(word, index):
            return document.position_at(start_offset + index)
    return word_range.start


def move_position_subword_right(
    document: TextDocument, position: Position, extra: str | None = None
) -> Position:
    position = document.validate_position(position)
    word_range = extend_to_word(document, position, extra)
    if word_range.end == position:
        return skip_right(document, position)

    word = document.get_text(word_range)
    if _is_hex_literal(document, word_range.start, word):
        return word_range.end

    start_offset = document.offset_at(word_range.start)
    for index in range(document.offset_at(position) + 1 - start_offset, len(word)):
        if is_subword_breakpoint(word, index):
            return document.position_at(start_offset + index)
    return word_range.end


def move_position_subword(
    document: TextDocument,
    position: Position,
    direction: int,
    extra: str | None = None,
) -> Position:
    if direction == -1:
        return move_position_subword_left(document, position, extra)
    if direction == 1:
        return move_position_subword_right(document, position, extra)
    raise InvariantViolation(
        "direction must be +1 or -1", detail={"direction": direction}
    )


__all__ = [
    "SEPARATOR_RUN_CHARS",
    "is_subword_breakpoint",
    "character_left_of_offset",
    "character_right_of_offset",
    "previous_character",
    "skip_left",
    "skip_right",
    "move_position_subword_left",
    "move_position_subword_right",
    "move_position_subword",
]
