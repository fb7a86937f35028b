"""Cursor and viewport state for the in-memory host."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict

from line_navigator.host import Position


@dataclass(slots=True)
class BufferState:
    cursor: Position = Position(0, 0)


@dataclass(slots=True)
class Viewport:
    """Scroll offset plus a line-height model.

    Every line is ``line_height`` tall unless listed in ``line_heights``.
    """

    client_height: float = 240.0
    line_height: float = 16.0
    line_heights: Dict[int, float] = field(default_factory=dict)
    top: float = 0.0

    def height_of(self, line: int) -> float:
        return self.line_heights.get(line, self.line_height)

    def content_height(self, line_count: int) -> float:
        return sum(self.height_of(line) for line in range(line_count))

    def max_top(self, line_count: int) -> float:
        return max(0.0, self.content_height(line_count) - self.client_height)


__all__ = ["BufferState", "Viewport"]
