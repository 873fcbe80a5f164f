"""Position, range, and selection value types shared by every layer."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True, order=True)
class Position:
    """Zero-based (line, character) locator into a document snapshot."""

    line: int
    character: int

    def is_before(self, other: "Position") -> bool:
        return self < other

    def is_after(self, other: "Position") -> bool:
        return self > other

    def is_equal(self, other: "Position") -> bool:
        return self == other

    def is_before_or_equal(self, other: "Position") -> bool:
        return self.is_before(other) or self.is_equal(other)

    def is_after_or_equal(self, other: "Position") -> bool:
        return self.is_after(other) or self.is_equal(other)

    def translate(self, line_delta: int = 0, character_delta: int = 0) -> "Position":
        return Position(self.line + line_delta, self.character + character_delta)


@dataclass(frozen=True, slots=True)
class Range:
    """Contiguous span between two positions; ``start <= end`` always holds."""

    start: Position
    end: Position

    def __post_init__(self) -> None:
        if self.end < self.start:
            start, end = self.end, self.start
            object.__setattr__(self, "start", start)
            object.__setattr__(self, "end", end)

    @property
    def is_empty(self) -> bool:
        return self.start == self.end

    def contains(self, position: Position) -> bool:
        return self.start <= position <= self.end


@dataclass(frozen=True, slots=True)
class Selection:
    """Anchor/active pair; ``active`` is the end that moves when extending."""

    anchor: Position
    active: Position

    @classmethod
    def caret(cls, position: Position) -> "Selection":
        return cls(anchor=position, active=position)

    @property
    def is_empty(self) -> bool:
        return self.anchor == self.active

    @property
    def is_inverted(self) -> bool:
        return self.active.is_before(self.anchor)

    @property
    def is_non_inverted(self) -> bool:
        return self.active.is_after(self.anchor)

    @property
    def start(self) -> Position:
        return min(self.anchor, self.active)

    @property
    def end(self) -> Position:
        return max(self.anchor, self.active)

    @property
    def range(self) -> Range:
        return Range(self.start, self.end)


__all__ = ["Position", "Range", "Selection"]
