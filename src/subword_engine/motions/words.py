"""Locate the edges of the word surrounding a position."""

from __future__ import annotations

from subword_engine.buffer import Position, Range, TextDocument

from .classify import is_word_char
from .errors import InvariantViolation


def find_word_edge(
    document: TextDocument,
    position: Position,
    direction: int,
    extra: str | None = None,
) -> Position:
    """Walk from ``position`` in ``direction`` (+1/-1) while crossing word chars.

    Scanning never leaves the current line; the returned position is the
    last one still inside the word.
    """

    if direction not in (1, -1):
        raise InvariantViolation(
            "direction must be +1 or -1", detail={"direction": direction}
        )
    position = document.validate_position(position)
    line = document.get_line(position.line)
    column = position.character
    while True:
        if direction < 0 and column == 0:
            break
        if direction < 0:
            crossed = line[column - 1 : column]
        else:
            crossed = line[column : column + 1]
        if not is_word_char(crossed, extra):
            break
        column += direction
    return Position(position.line, column)


def find_beginning_of_word(
    document: TextDocument, position: Position, extra: str | None = None
) -> Position:
    return find_word_edge(document, position, -1, extra)


def find_end_of_word(
    document: TextDocument, position: Position, extra: str | None = None
) -> Position:
    return find_word_edge(document, position, 1, extra)


def extend_to_word(
    document: TextDocument, position: Position, extra: str | None = None
) -> Range:
    return Range(
        find_beginning_of_word(document, position, extra),
        find_end_of_word(document, position, extra),
    )


__all__ = [
    "find_word_edge",
    "find_beginning_of_word",
    "find_end_of_word",
    "extend_to_word",
]
