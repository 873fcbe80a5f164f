"""The seven subword commands exposed to editing hosts."""

from __future__ import annotations

from typing import Callable, Dict

from subword_engine.commands.base import CommandContext, CommandResult

from . import cursor_ops
from .cursor_ops import LEFT, RIGHT

COMMAND_PREFIX = "subword"

CommandHandler = Callable[[CommandContext, object], CommandResult]


def _extra(context: CommandContext) -> str | None:
    return context.word_chars or None


def _move(context: CommandContext, direction: int, *, extend: bool) -> CommandResult:
    selections = cursor_ops.move_subword(
        context.editor, direction, extend=extend, extra=_extra(context)
    )
    context.bus.emit(
        "subword.move",
        {"direction": direction, "extend": extend, "selections": selections},
    )
    return CommandResult(
        consumed=True, status="subword_extend" if extend else "subword_move"
    )


def _delete(context: CommandContext, direction: int) -> CommandResult:
    deleted = cursor_ops.delete_subword(
        context.editor, direction, extra=_extra(context)
    )
    context.bus.emit("subword.delete", {"direction": direction, "deleted": deleted})
    return CommandResult(
        consumed=True, status="subword_delete", message="".join(deleted)
    )


def move_subword_left_extend(context: CommandContext, match) -> CommandResult:
    del match
    return _move(context, LEFT, extend=True)


def move_subword_right_extend(context: CommandContext, match) -> CommandResult:
    del match
    return _move(context, RIGHT, extend=True)


def move_subword_left_no_extend(context: CommandContext, match) -> CommandResult:
    del match
    return _move(context, LEFT, extend=False)


def move_subword_right_no_extend(context: CommandContext, match) -> CommandResult:
    del match
    return _move(context, RIGHT, extend=False)


def delete_subword_left(context: CommandContext, match) -> CommandResult:
    del match
    return _delete(context, LEFT)


def delete_subword_right(context: CommandContext, match) -> CommandResult:
    del match
    return _delete(context, RIGHT)


def drop_selections(context: CommandContext, match) -> CommandResult:
    del match
    carets = cursor_ops.drop_selections(context.editor)
    context.bus.emit("subword.drop", {"selections": carets})
    return CommandResult(consumed=True, status="drop_selections")


COMMANDS: Dict[str, CommandHandler] = {
    "moveSubwordLeftExtend": move_subword_left_extend,
    "moveSubwordRightExtend": move_subword_right_extend,
    "moveSubwordLeftNoExtend": move_subword_left_no_extend,
    "moveSubwordRightNoExtend": move_subword_right_no_extend,
    "deleteSubwordLeft": delete_subword_left,
    "deleteSubwordRight": delete_subword_right,
    "dropSelections": drop_selections,
}


def command_id(name: str) -> str:
    return f"{COMMAND_PREFIX}.{name}"


__all__ = [
    "COMMANDS",
    "COMMAND_PREFIX",
    "command_id",
    "move_subword_left_extend",
    "move_subword_right_extend",
    "move_subword_left_no_extend",
    "move_subword_right_no_extend",
    "delete_subword_left",
    "delete_subword_right",
    "drop_selections",
]
