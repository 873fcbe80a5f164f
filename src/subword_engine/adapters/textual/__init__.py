"""Textual host for the subword commands."""

from .controller import TextualSubwordAdapter, TextualUIHooks, render_buffer

__all__ = ["TextualSubwordAdapter", "TextualUIHooks", "render_buffer"]
