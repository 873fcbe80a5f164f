"""Adapter boundary types for hosts that own the real editor widget."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Protocol, Sequence

from .document import TextDocument
from .state import Position, Range, Selection

SelectionListener = Callable[[tuple[Selection, ...]], None]


@dataclass(frozen=True, slots=True)
class TextEdit:
    """Replace ``range`` with ``replacement``; an empty replacement deletes."""

    range: Range
    replacement: str = ""


@dataclass(slots=True)
class BufferMirror:
    """Host-friendly snapshot describing the current buffer state."""

    text: str
    selections: tuple[Selection, ...]
    version: int = 0
    attributes: dict[str, str] = field(default_factory=dict)


class EditorAdapter(Protocol):
    """What the subword commands need from an editing host."""

    @property
    def document(self) -> TextDocument:
        """Immutable snapshot of the current text."""
        ...

    def get_text(self, text_range: Range) -> str:
        ...

    def offset_at(self, position: Position) -> int:
        ...

    def position_at(self, offset: int) -> Position:
        ...

    def get_selections(self) -> tuple[Selection, ...]:
        ...

    def set_selections(self, selections: Sequence[Selection]) -> None:
        """Replace every selection at once; listeners see only the final set."""
        ...

    def apply_edits(self, edits: Sequence[TextEdit], *, label: str = "edit") -> None:
        """Apply a batch of edits computed against one snapshot, atomically."""
        ...

    def on_selection_changed(self, listener: SelectionListener) -> Callable[[], None]:
        """Register ``listener``; the returned callable unsubscribes it."""
        ...


class BufferValidationError(RuntimeError):
    """Raised when hosts or callers provide out-of-bounds or malformed input."""

    def __init__(self, message: str, *, position: Position | None = None) -> None:
        super().__init__(message)
        self.position = position


__all__ = [
    "BufferMirror",
    "BufferValidationError",
    "EditorAdapter",
    "SelectionListener",
    "TextEdit",
]
