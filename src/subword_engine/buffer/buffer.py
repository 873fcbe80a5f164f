"""In-memory editor host: document snapshots, selections, edits, and undo."""

from __future__ import annotations

from contextlib import AbstractContextManager
from dataclasses import dataclass
from typing import Callable, ContextManager, List, Optional, Sequence

from subword_engine.runtime import telemetry

from .document import TextDocument
from .state import Position, Range, Selection
from .sync import BufferMirror, SelectionListener, TextEdit
from .undo import UndoEntry, UndoTimeline
from .validation import ensure_disjoint, ensure_position, ensure_selections


@dataclass(slots=True)
class BufferDelta:
    version: int
    text: str
    selections: tuple[Selection, ...]
    label: str


class Buffer:
    """Reference ``EditorAdapter`` used by the dispatcher, tests, and demo host."""

    def __init__(
        self,
        *,
        name: str = "default",
        document: Optional[TextDocument] = None,
        selections: Optional[Sequence[Selection]] = None,
        undo: Optional[UndoTimeline] = None,
    ) -> None:
        self.name = name
        self._document = document or TextDocument()
        self._selections: tuple[Selection, ...] = ensure_selections(
            self._document, selections or (Selection.caret(Position(0, 0)),)
        )
        self.undo_timeline = undo or UndoTimeline()
        self._listeners: List[SelectionListener] = []

    @classmethod
    def from_text(
        cls,
        text: str,
        *,
        name: str = "default",
        selections: Optional[Sequence[Selection]] = None,
    ) -> "Buffer":
        return cls(
            name=name, document=TextDocument.from_text(text), selections=selections
        )

    @property
    def document(self) -> TextDocument:
        return self._document

    @property
    def text(self) -> str:
        return self._document.text

    def get_text(self, text_range: Range) -> str:
        ensure_position(self._document, text_range.start)
        ensure_position(self._document, text_range.end)
        return self._document.get_text(text_range)

    def offset_at(self, position: Position) -> int:
        return self._document.offset_at(position)

    def position_at(self, offset: int) -> Position:
        return self._document.position_at(offset)

    def get_selections(self) -> tuple[Selection, ...]:
        return self._selections

    def set_selections(self, selections: Sequence[Selection]) -> None:
        updated = ensure_selections(self._document, selections)
        if updated == self._selections:
            return
        self._selections = updated
        self._notify_selection_listeners()

    def set_carets(self, *offsets: int) -> None:
        """Convenience for hosts and tests: one caret per absolute offset."""

        self.set_selections(
            [Selection.caret(self._document.position_at(o)) for o in offsets]
        )

    def on_selection_changed(self, listener: SelectionListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def apply_edits(
        self, edits: Sequence[TextEdit], *, label: str = "edit"
    ) -> BufferDelta:
        document = self._document
        for edit in edits:
            ensure_position(document, edit.range.start)
            ensure_position(document, edit.range.end)
        ensure_disjoint(document, edits)

        spans = sorted(
            (
                document.offset_at(edit.range.start),
                document.offset_at(edit.range.end),
                edit.replacement,
            )
            for edit in edits
        )
        before_text = document.text
        after_text = _splice(before_text, spans)
        if after_text == before_text:
            return self._delta(label)

        with Transaction(self, label) as tx:
            selections_before = self._selections
            self._document = document.replace_text(after_text)
            self._selections = tuple(
                Selection(
                    anchor=self._document.position_at(
                        _remap_offset(document.offset_at(s.anchor), spans)
                    ),
                    active=self._document.position_at(
                        _remap_offset(document.offset_at(s.active), spans)
                    ),
                )
                for s in selections_before
            )
            tx.commit(before_text, after_text, selections_before, self._selections)

        if self._selections != selections_before:
            self._notify_selection_listeners()
        return self._delta(label)

    def insert_text(self, text: str) -> BufferDelta:
        """Replace every selection with ``text``, leaving carets after it."""

        edits = [TextEdit(selection.range, text) for selection in self._selections]
        return self.apply_edits(edits, label="insert_text")

    def undo(self) -> bool:
        entry = self.undo_timeline.undo()
        if entry is None:
            return False
        self._restore(entry.before_text, entry.selections_before, label="undo")
        return True

    def redo(self) -> bool:
        entry = self.undo_timeline.redo()
        if entry is None:
            return False
        self._restore(entry.after_text, entry.selections_after, label="redo")
        return True

    def mirror(self, *, attributes: Optional[dict[str, str]] = None) -> BufferMirror:
        return BufferMirror(
            text=self._document.text,
            selections=self._selections,
            version=self._document.version,
            attributes=dict(attributes or {}),
        )

    def _restore(
        self, text: str, selections: tuple[Selection, ...], *, label: str
    ) -> None:
        with telemetry.span(
            f"buffer::{label}", component="buffer", metadata={"buffer": self.name}
        ):
            self._document = self._document.replace_text(text)
            changed = selections != self._selections
            self._selections = selections
        if changed:
            self._notify_selection_listeners()

    def _notify_selection_listeners(self) -> None:
        for listener in list(self._listeners):
            listener(self._selections)

    def _delta(self, label: str) -> BufferDelta:
        return BufferDelta(
            version=self._document.version,
            text=self._document.text,
            selections=self._selections,
            label=label,
        )


class Transaction(AbstractContextManager["Transaction"]):
    def __init__(self, buffer: Buffer, label: str) -> None:
        self.buffer = buffer
        self.label = label
        self._span_cm: Optional[ContextManager[object]] = None

    def __enter__(self) -> "Transaction":
        self._span_cm = telemetry.span(
            name=f"buffer::{self.label}",
            component="buffer",
            metadata={"buffer": self.buffer.name},
        )
        self._span_cm.__enter__()
        return self

    def commit(
        self,
        before_text: str,
        after_text: str,
        selections_before: tuple[Selection, ...],
        selections_after: tuple[Selection, ...],
    ) -> None:
        entry = UndoEntry(
            label=self.label,
            before_text=before_text,
            after_text=after_text,
            selections_before=selections_before,
            selections_after=selections_after,
        )
        self.buffer.undo_timeline.push(entry)

    def __exit__(self, exc_type, exc, tb) -> bool:
        if self._span_cm is not None:
            self._span_cm.__exit__(exc_type, exc, tb)
        return False


def _splice(text: str, spans: Sequence[tuple[int, int, str]]) -> str:
    pieces: List[str] = []
    cursor = 0
    for start, end, replacement in spans:
        pieces.append(text[cursor:start])
        pieces.append(replacement)
        cursor = end
    pieces.append(text[cursor:])
    return "".join(pieces)


def _remap_offset(offset: int, spans: Sequence[tuple[int, int, str]]) -> int:
    shift = 0
    for start, end, replacement in spans:
        if offset < start:
            break
        if offset <= end:
            return start + shift + len(replacement)
        shift += len(replacement) - (end - start)
    return offset + shift
