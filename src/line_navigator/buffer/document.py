"""Line storage backing the in-memory editor host."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Sequence


@dataclass(slots=True)
class BufferDocument:
    """Text kept as a list of lines without their terminators.

    A document always holds at least one (possibly empty) line, and a trailing
    newline in the source text yields a final empty line, the way editors show
    it.
    """

    _lines: List[str] = field(default_factory=lambda: [""])

    @classmethod
    def from_text(cls, text: str) -> "BufferDocument":
        lines = text.split("\n")
        return cls(_lines=[line.rstrip("\r") for line in lines])

    @classmethod
    def from_lines(cls, lines: Iterable[str]) -> "BufferDocument":
        collected = list(lines)
        return cls(_lines=collected or [""])

    def snapshot(self) -> Sequence[str]:
        return tuple(self._lines)

    def text(self) -> str:
        return "\n".join(self._lines)

    @property
    def line_count(self) -> int:
        return len(self._lines)

    def get_line(self, index: int) -> str:
        return self._lines[index]


__all__ = ["BufferDocument"]
