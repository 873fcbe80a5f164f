"""Text snapshots, selection value types, and the in-memory editor host."""

from .buffer import Buffer, BufferDelta, Transaction
from .document import TextDocument
from .state import Position, Range, Selection
from .sync import (
    BufferMirror,
    BufferValidationError,
    EditorAdapter,
    SelectionListener,
    TextEdit,
)
from .undo import UndoEntry, UndoTimeline
from .validation import ensure_disjoint, ensure_position, ensure_selections

__all__ = [
    "Buffer",
    "BufferDelta",
    "BufferMirror",
    "BufferValidationError",
    "EditorAdapter",
    "Position",
    "Range",
    "Selection",
    "SelectionListener",
    "TextDocument",
    "TextEdit",
    "Transaction",
    "UndoEntry",
    "UndoTimeline",
    "ensure_disjoint",
    "ensure_position",
    "ensure_selections",
]
