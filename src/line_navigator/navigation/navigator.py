"""Run-boundary cursor navigation over an ``EditorHost``.

Both scans commit to the first character class they meet and stop at the
first transition to a different class. Whitespace never ends a run on its
own. Blank lines (and line ends) are skipped going right until real content
has been crossed; going left they are always skipped.

The forward scan classifies before it moves and lands on the first character
of the next run. The backward scan moves before it classifies, so on a stop it
steps back right once and lands just after the boundary.
"""

from __future__ import annotations

from typing import Optional

from line_navigator.config import DEFAULT_CONFIG, NavigatorConfig
from line_navigator.host import Direction, EditorHost, Position
from line_navigator.runtime import telemetry

from .classifier import CharClass, sample_at
from .scan import ScanState

LOGGER_NAME = "line_navigator.navigation"


class _LineCache:
    """Keeps the text of the last visited line between scan steps."""

    __slots__ = ("_host", "_line", "_text")

    def __init__(self, host: EditorHost) -> None:
        self._host = host
        self._line = -1
        self._text = ""

    def text_for(self, line: int) -> str:
        if line != self._line:
            self._text = self._host.get_line_text(line)
            self._line = line
        return self._text


def _stops_forward(
    char_class: CharClass, state: ScanState, *, empty_ends_word_run: bool
) -> bool:
    if char_class is CharClass.WHITESPACE:
        return False
    if char_class is CharClass.EMPTY:
        return state.seen(CharClass.DELIMITER, CharClass.WORD_CHAR)
    if char_class is CharClass.DELIMITER:
        return state.seen(CharClass.WORD_CHAR, CharClass.WHITESPACE)
    if state.seen(CharClass.DELIMITER, CharClass.WHITESPACE):
        return True
    return empty_ends_word_run and state.seen(CharClass.EMPTY)


def _stops_backward(char_class: CharClass, state: ScanState) -> bool:
    if char_class is CharClass.WHITESPACE:
        return state.seen(CharClass.WORD_CHAR, CharClass.DELIMITER)
    if char_class is CharClass.EMPTY:
        return False
    if char_class is CharClass.DELIMITER:
        return state.seen(CharClass.WORD_CHAR)
    return state.seen(CharClass.DELIMITER)


def remaining_positions(host: EditorHost, start: Position, direction: Direction) -> int:
    """Number of cursor positions between ``start`` and the buffer edge.

    Every line contributes its characters plus one end-of-line slot.
    """

    line_total = host.line_count()
    if direction is Direction.RIGHT:
        count = len(host.get_line_text(start.line)) - start.column
        for line in range(start.line + 1, line_total):
            count += len(host.get_line_text(line)) + 1
        return max(count, 0)

    count = start.column
    for line in range(0, start.line):
        count += len(host.get_line_text(line)) + 1
    return max(count, 0)


def _step_budget(
    host: EditorHost, start: Position, direction: Direction, config: NavigatorConfig
) -> int:
    budget = remaining_positions(host, start, direction) + 1
    if config.max_scan_steps is not None:
        budget = min(budget, config.max_scan_steps)
    return budget


def navigate_right(editor: EditorHost, *, config: Optional[NavigatorConfig] = None) -> None:
    """Move the cursor right to the start of the next character run."""

    config = config or DEFAULT_CONFIG
    start = editor.get_cursor()
    with telemetry.span(
        "navigation::navigate_right",
        logger_name=LOGGER_NAME,
        component="navigation",
        metadata={"line": start.line, "column": start.column},
    ) as handle:
        state = ScanState()
        lines = _LineCache(editor)
        budget = _step_budget(editor, start, Direction.RIGHT, config)
        reason = "budget"

        while state.steps < budget:
            position = editor.get_cursor()
            sample = sample_at(lines.text_for(position.line), position.column)
            char_class = state.observe(sample)
            if _stops_forward(
                char_class, state, empty_ends_word_run=config.empty_ends_word_run
            ):
                reason = f"boundary:{char_class.value}"
                break
            editor.move_cursor_one_character(Direction.RIGHT)
            if editor.get_cursor() == position:
                reason = "buffer_end"
                break

        handle.add_metadata("stop", reason)
        handle.add_metadata("steps", state.steps)
        _record_stop("navigate_right", reason, state, editor.get_cursor())


def navigate_left(editor: EditorHost, *, config: Optional[NavigatorConfig] = None) -> None:
    """Move the cursor left to just after the previous run boundary."""

    config = config or DEFAULT_CONFIG
    start = editor.get_cursor()
    with telemetry.span(
        "navigation::navigate_left",
        logger_name=LOGGER_NAME,
        component="navigation",
        metadata={"line": start.line, "column": start.column},
    ) as handle:
        state = ScanState()
        lines = _LineCache(editor)
        budget = _step_budget(editor, start, Direction.LEFT, config)
        reason = "budget"

        while state.steps < budget:
            previous = editor.get_cursor()
            editor.move_cursor_one_character(Direction.LEFT)
            position = editor.get_cursor()
            if position == previous:
                reason = "buffer_start"
                break
            sample = sample_at(lines.text_for(position.line), position.column)
            char_class = state.observe(sample)
            if _stops_backward(char_class, state):
                editor.move_cursor_one_character(Direction.RIGHT)
                reason = f"boundary:{char_class.value}"
                break

        handle.add_metadata("stop", reason)
        handle.add_metadata("steps", state.steps)
        _record_stop("navigate_left", reason, state, editor.get_cursor())


def _record_stop(
    operation: str, reason: str, state: ScanState, landed: Position
) -> None:
    telemetry.record_event(
        f"navigation.{operation}",
        level="debug",
        data={
            "reason": reason,
            "line": landed.line,
            "column": landed.column,
            **{char_class.value: count for char_class, count in state.counts.items()},
        },
        logger_name=LOGGER_NAME,
    )


__all__ = ["navigate_left", "navigate_right", "remaining_positions"]
