"""Subword-aware cursor navigation and editing for text buffers."""

__all__ = [
    "actions",
    "adapters",
    "buffer",
    "commands",
    "keymaps",
    "motions",
    "runtime",
]

__version__ = "0.1.0"
