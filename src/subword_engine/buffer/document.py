"""Immutable text snapshots with offset/position conversion."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Sequence

from .state import Position, Range


@dataclass(frozen=True, slots=True)
class TextDocument:
    """Snapshot of a buffer built on a simple list-of-lines model.

    Lines are separated by a single ``\\n``; offsets count that newline as
    one character. Every edit produces a new snapshot with a bumped
    ``version`` so a scan never observes a half-applied change.
    """

    _lines: tuple[str, ...] = ("",)
    version: int = 0
    _line_starts: tuple[int, ...] = field(init=False, repr=False, compare=False)
    _text: str = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        starts: List[int] = []
        running = 0
        for line in self._lines:
            starts.append(running)
            running += len(line) + 1
        object.__setattr__(self, "_line_starts", tuple(starts))
        object.__setattr__(self, "_text", "\n".join(self._lines))

    @classmethod
    def from_text(cls, text: str, *, version: int = 0) -> "TextDocument":
        return cls(_lines=tuple(text.split("\n")), version=version)

    def replace_text(self, text: str) -> "TextDocument":
        """Return a new snapshot holding ``text`` with the version bumped."""

        return TextDocument.from_text(text, version=self.version + 1)

    def snapshot(self) -> Sequence[str]:
        return self._lines

    @property
    def text(self) -> str:
        return self._text

    @property
    def length(self) -> int:
        return self._line_starts[-1] + len(self._lines[-1])

    @property
    def line_count(self) -> int:
        return len(self._lines)

    def get_line(self, index: int) -> str:
        return self._lines[index]

    def validate_position(self, position: Position) -> Position:
        """Clamp ``position`` into the document, like hosts do for stale carets."""

        line = max(0, min(position.line, self.line_count - 1))
        character = max(0, min(position.character, len(self._lines[line])))
        if line != position.line or character != position.character:
            return Position(line, character)
        return position

    def offset_at(self, position: Position) -> int:
        position = self.validate_position(position)
        return self._line_starts[position.line] + position.character

    def position_at(self, offset: int) -> Position:
        offset = max(0, min(offset, self.length))
        # Binary search for the last line starting at or before ``offset``.
        low, high = 0, len(self._line_starts) - 1
        while low < high:
            mid = (low + high + 1) // 2
            if self._line_starts[mid] <= offset:
                low = mid
            else:
                high = mid - 1
        return Position(low, offset - self._line_starts[low])

    def get_text(self, text_range: Range | None = None) -> str:
        if text_range is None:
            return self.text
        start = self.offset_at(text_range.start)
        end = self.offset_at(text_range.end)
        return self._text[start:end]

    def char_range(self, start_offset: int, end_offset: int) -> str:
        """Text between two absolute offsets, clamped to the document."""

        start = max(0, min(start_offset, self.length))
        end = max(0, min(end_offset, self.length))
        return self._text[start:end]


__all__ = ["TextDocument"]
