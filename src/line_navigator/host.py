"""Host-editor boundary consumed by the navigation core."""

from __future__ import annotations

from enum import Enum
from typing import Callable, NamedTuple, Protocol, runtime_checkable


class Position(NamedTuple):
    """Cursor location as ``(line, column)``."""

    line: int
    column: int


class ScrollInfo(NamedTuple):
    """Viewport scroll snapshot, in pixels (or cells for terminal hosts)."""

    top: float
    client_height: float


class Direction(str, Enum):
    LEFT = "left"
    RIGHT = "right"


@runtime_checkable
class EditorHost(Protocol):
    """Primitives a host editor exposes to the navigator and scroller.

    Bounds are the host's business: ``set_cursor`` and
    ``move_cursor_one_character`` clamp at the buffer edges, and
    ``get_line_text`` raises the host's own error for a bad index.
    ``move_cursor_one_character`` wraps across line ends and must be
    reversible (right then left lands where it started).
    """

    def get_cursor(self) -> Position:
        ...

    def set_cursor(self, position: Position) -> None:
        ...

    def get_line_text(self, line: int) -> str:
        ...

    def line_count(self) -> int:
        ...

    def move_cursor_one_character(self, direction: Direction) -> None:
        ...

    def get_viewport_scroll(self) -> ScrollInfo:
        ...

    def set_viewport_scroll(self, top: float) -> None:
        ...

    def get_line_height(self, line: int) -> float:
        ...


def step_position(
    position: Position,
    direction: Direction,
    *,
    line_length: Callable[[int], int],
    line_count: int,
) -> Position:
    """One-character move that wraps at line ends and stops at buffer edges."""

    line, column = position
    if direction is Direction.LEFT:
        if column > 0:
            return Position(line, column - 1)
        if line > 0:
            return Position(line - 1, line_length(line - 1))
        return position

    if column < line_length(line):
        return Position(line, column + 1)
    if line < line_count - 1:
        return Position(line + 1, 0)
    return position


__all__ = ["Direction", "EditorHost", "Position", "ScrollInfo", "step_position"]
