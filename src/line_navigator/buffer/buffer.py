"""In-memory editor host implementing the ``EditorHost`` primitives."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from line_navigator.host import Direction, Position, ScrollInfo, step_position

from .document import BufferDocument
from .state import BufferState, Viewport
from .validation import clamp_position, ensure_line


@dataclass(slots=True)
class BufferMirror:
    """Host-friendly snapshot for rendering layers."""

    text: str
    cursor: Position
    scroll_top: float
    attributes: dict[str, str] = field(default_factory=dict)


class Buffer:
    """Plain-text editing surface with a cursor and a scrollable viewport."""

    def __init__(
        self,
        *,
        name: str = "default",
        document: Optional[BufferDocument] = None,
        state: Optional[BufferState] = None,
        viewport: Optional[Viewport] = None,
    ) -> None:
        self.name = name
        self.document = document or BufferDocument()
        self.state = state or BufferState()
        self.viewport = viewport or Viewport()

    @classmethod
    def from_text(
        cls,
        text: str,
        *,
        name: str = "default",
        cursor: tuple[int, int] = (0, 0),
        viewport: Optional[Viewport] = None,
    ) -> "Buffer":
        buffer = cls(
            name=name, document=BufferDocument.from_text(text), viewport=viewport
        )
        buffer.set_cursor(Position(*cursor))
        return buffer

    def mirror(self, *, attributes: Optional[dict[str, str]] = None) -> BufferMirror:
        return BufferMirror(
            text=self.document.text(),
            cursor=self.state.cursor,
            scroll_top=self.viewport.top,
            attributes=dict(attributes or {}),
        )

    # -- EditorHost ---------------------------------------------------------
    def get_cursor(self) -> Position:
        return self.state.cursor

    def set_cursor(self, position: Position) -> None:
        self.state.cursor = clamp_position(self.document, *position)

    def get_line_text(self, line: int) -> str:
        return self.document.get_line(ensure_line(self.document, line))

    def line_count(self) -> int:
        return self.document.line_count

    def move_cursor_one_character(self, direction: Direction) -> None:
        self.state.cursor = step_position(
            self.state.cursor,
            direction,
            line_length=lambda line: len(self.document.get_line(line)),
            line_count=self.document.line_count,
        )

    def get_viewport_scroll(self) -> ScrollInfo:
        return ScrollInfo(
            top=self.viewport.top, client_height=self.viewport.client_height
        )

    def set_viewport_scroll(self, top: float) -> None:
        limit = self.viewport.max_top(self.document.line_count)
        self.viewport.top = max(0.0, min(float(top), limit))

    def get_line_height(self, line: int) -> float:
        return self.viewport.height_of(ensure_line(self.document, line))


__all__ = ["Buffer", "BufferMirror"]
