"""Validation helpers shared across buffer services."""

from __future__ import annotations

from typing import Sequence

from .document import TextDocument
from .state import Position, Selection
from .sync import BufferValidationError, TextEdit


def ensure_position(document: TextDocument, position: Position) -> Position:
    if position.line < 0 or position.line >= document.line_count:
        raise BufferValidationError("Line out of range", position=position)
    line = document.get_line(position.line)
    if position.character < 0 or position.character > len(line):
        raise BufferValidationError("Character out of range", position=position)
    return position


def ensure_selections(
    document: TextDocument, selections: Sequence[Selection]
) -> tuple[Selection, ...]:
    if not selections:
        raise BufferValidationError("At least one selection is required")
    for selection in selections:
        ensure_position(document, selection.anchor)
        ensure_position(document, selection.active)
    return tuple(selections)


def ensure_disjoint(document: TextDocument, edits: Sequence[TextEdit]) -> None:
    """Reject batches whose edit ranges overlap (touching ranges are fine)."""

    spans = sorted(
        (document.offset_at(edit.range.start), document.offset_at(edit.range.end))
        for edit in edits
    )
    for (_, previous_end), (start, _) in zip(spans, spans[1:]):
        if start < previous_end:
            raise BufferValidationError("Overlapping edit ranges are not allowed")
