"""Apply subword motions to every selection of an editor at once."""

from __future__ import annotations

from typing import Iterable, List, Sequence

from subword_engine.buffer import EditorAdapter, Range, Selection, TextEdit
from subword_engine.motions import move_position_subword

LEFT = -1
RIGHT = 1


def move_subword(
    editor: EditorAdapter,
    direction: int,
    *,
    extend: bool,
    extra: str | None = None,
) -> tuple[Selection, ...]:
    """Move (or extend) every selection's active end to the next subword boundary.

    All new positions are computed before the editor is touched, so a failing
    computation leaves the selection set as it was.
    """

    document = editor.document
    updated: List[Selection] = []
    for selection in editor.get_selections():
        active = move_position_subword(document, selection.active, direction, extra)
        anchor = selection.anchor if extend else active
        updated.append(Selection(anchor=anchor, active=active))
    editor.set_selections(updated)
    return tuple(updated)


def delete_subword(
    editor: EditorAdapter, direction: int, *, extra: str | None = None
) -> list[str]:
    """Delete the subword next to each caret, or the selected text if any.

    The caret-only check covers the whole selection set: as soon as one
    selection is non-empty, carets delete nothing.
    """

    selections = editor.get_selections()
    if all(selection.is_empty for selection in selections):
        selections = move_subword(editor, direction, extend=True, extra=extra)

    document = editor.document
    ranges = _merge_ranges(
        document.offset_at, (s.range for s in selections if not s.is_empty)
    )
    deleted = [document.get_text(text_range) for text_range in ranges]
    if ranges:
        label = "delete_subword_left" if direction == LEFT else "delete_subword_right"
        editor.apply_edits([TextEdit(text_range) for text_range in ranges], label=label)
    return deleted


def drop_selections(editor: EditorAdapter) -> tuple[Selection, ...]:
    carets = tuple(Selection.caret(s.active) for s in editor.get_selections())
    editor.set_selections(carets)
    return carets


def _merge_ranges(offset_at, ranges: Iterable[Range]) -> Sequence[Range]:
    # Two carets in the same word extend over overlapping spans; delete once.
    merged: List[Range] = []
    for text_range in sorted(ranges, key=lambda r: offset_at(r.start)):
        if merged and offset_at(text_range.start) < offset_at(merged[-1].end):
            last = merged[-1]
            merged[-1] = Range(last.start, max(last.end, text_range.end))
        else:
            merged.append(text_range)
    return merged


__all__ = ["LEFT", "RIGHT", "move_subword", "delete_subword", "drop_selections"]
