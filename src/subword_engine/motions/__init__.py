"""Pure position computations: classification, word edges, subword motions."""

from .classify import (
    is_digit,
    is_hex_digit,
    is_hex_string,
    is_hyphen,
    is_underscore,
    is_upper,
    is_word_char,
)
from .errors import InvariantViolation
from .subword import (
    is_subword_breakpoint,
    move_position_subword,
    move_position_subword_left,
    move_position_subword_right,
    skip_left,
    skip_right,
)
from .words import extend_to_word, find_word_edge

__all__ = [
    "InvariantViolation",
    "extend_to_word",
    "find_word_edge",
    "is_digit",
    "is_hex_digit",
    "is_hex_string",
    "is_hyphen",
    "is_subword_breakpoint",
    "is_underscore",
    "is_upper",
    "is_word_char",
    "move_position_subword",
    "move_position_subword_left",
    "move_position_subword_right",
    "skip_left",
    "skip_right",
]
