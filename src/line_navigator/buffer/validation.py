"""Bounds helpers shared by the in-memory host."""

from __future__ import annotations

from line_navigator.host import Position

from .document import BufferDocument


class BufferValidationError(RuntimeError):
    """Raised when a caller asks for a line the document does not have."""

    def __init__(self, message: str, *, line: int | None = None) -> None:
        super().__init__(message)
        self.line = line


def ensure_line(document: BufferDocument, line: int) -> int:
    if line < 0 or line >= document.line_count:
        raise BufferValidationError(
            f"Line {line} out of range (0..{document.line_count - 1})", line=line
        )
    return line


def clamp_position(document: BufferDocument, line: int, column: int) -> Position:
    line = max(0, min(line, document.line_count - 1))
    column = max(0, min(column, len(document.get_line(line))))
    return Position(line, column)


__all__ = ["BufferValidationError", "clamp_position", "ensure_line"]
