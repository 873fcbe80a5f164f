"""Command context types; the dispatcher lives in ``commands.dispatcher``."""

from .base import CommandBus, CommandContext, CommandResult, KeyInput

__all__ = ["CommandBus", "CommandContext", "CommandResult", "KeyInput"]
