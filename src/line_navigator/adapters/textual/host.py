"""``EditorHost`` implementation over a Textual ``TextArea``."""

from __future__ import annotations

from line_navigator.host import Direction, Position, ScrollInfo, step_position

try:  # pragma: no cover - imported only when the Textual adapter is used
    from textual.widgets import TextArea
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use line_navigator.adapters.textual"
    ) from exc


class TextAreaHost:
    """Exposes a ``TextArea`` through the navigator's host primitives.

    Terminal rows are one cell tall, so scroll offsets and line heights are
    measured in cells. Soft-wrapped lines still report a height of one.
    """

    def __init__(self, text_area: TextArea) -> None:
        self.text_area = text_area

    def get_cursor(self) -> Position:
        line, column = self.text_area.cursor_location
        return Position(line, column)

    def set_cursor(self, position: Position) -> None:
        document = self.text_area.document
        line = max(0, min(position.line, document.line_count - 1))
        column = max(0, min(position.column, len(document.get_line(line))))
        self.text_area.cursor_location = (line, column)

    def get_line_text(self, line: int) -> str:
        return self.text_area.document.get_line(line)

    def line_count(self) -> int:
        return self.text_area.document.line_count

    def move_cursor_one_character(self, direction: Direction) -> None:
        document = self.text_area.document
        target = step_position(
            self.get_cursor(),
            direction,
            line_length=lambda line: len(document.get_line(line)),
            line_count=document.line_count,
        )
        self.text_area.cursor_location = tuple(target)

    def get_viewport_scroll(self) -> ScrollInfo:
        return ScrollInfo(
            top=float(self.text_area.scroll_offset.y),
            client_height=float(self.text_area.scrollable_content_region.height),
        )

    def set_viewport_scroll(self, top: float) -> None:
        self.text_area.scroll_to(y=max(0, round(top)), animate=False)

    def get_line_height(self, line: int) -> float:
        del line
        return 1.0


__all__ = ["TextAreaHost"]
