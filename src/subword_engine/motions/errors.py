"""Error kinds raised by the motion layer."""

from __future__ import annotations


class InvariantViolation(AssertionError):
    """A motion computation reached a state that indicates a logic defect.

    Expected boundary conditions (document edges, carets outside any word)
    never raise; they resolve to a well-defined position instead.
    """

    def __init__(self, message: str, *, detail: dict[str, object] | None = None):
        super().__init__(message)
        self.detail = dict(detail or {})


__all__ = ["InvariantViolation"]
