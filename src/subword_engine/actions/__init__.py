"""Editing verbs built on the motion layer."""

from .cursor_ops import LEFT, RIGHT, delete_subword, drop_selections, move_subword
from .subword import COMMAND_PREFIX, COMMANDS, command_id

__all__ = [
    "LEFT",
    "RIGHT",
    "COMMANDS",
    "COMMAND_PREFIX",
    "command_id",
    "delete_subword",
    "drop_selections",
    "move_subword",
]
