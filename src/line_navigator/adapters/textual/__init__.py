"""Textual bindings for the line navigator."""

from .controller import TextualNavigatorAdapter, TextualUIHooks, split_textual_key

__all__ = ["TextualNavigatorAdapter", "TextualUIHooks", "split_textual_key"]
