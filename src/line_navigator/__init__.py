"""Run-boundary cursor navigation and line scrolling for editor hosts."""

from line_navigator.host import Direction, EditorHost, Position, ScrollInfo
from line_navigator.navigation import (
    CharClass,
    classify,
    navigate_left,
    navigate_right,
    scroll_line_down,
    scroll_line_up,
)

__all__ = [
    "CharClass",
    "Direction",
    "EditorHost",
    "Position",
    "ScrollInfo",
    "classify",
    "navigate_left",
    "navigate_right",
    "scroll_line_down",
    "scroll_line_up",
]

__version__ = "0.1.0"
