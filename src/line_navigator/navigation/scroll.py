"""One-line viewport scrolling with cursor snapping."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

from line_navigator.config import DEFAULT_CONFIG, NavigatorConfig
from line_navigator.host import EditorHost, Position
from line_navigator.runtime import telemetry

LOGGER_NAME = "line_navigator.scroll"


@dataclass(frozen=True, slots=True)
class ScrollPlan:
    """Viewport offset to apply and, optionally, where the cursor must go."""

    top: float
    cursor: Optional[Position] = None


def round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def plan_scroll_down(cursor_line: int, scroll_top: float, line_height: float) -> ScrollPlan:
    """Shift down one line; pull the cursor below the new top edge if needed."""

    first_visible = round_half_up(scroll_top / line_height)
    target = None
    if first_visible >= cursor_line:
        target = Position(first_visible + 1, 0)
    return ScrollPlan(top=scroll_top + line_height, cursor=target)


def plan_scroll_up(
    cursor_line: int,
    scroll_top: float,
    client_height: float,
    line_height: float,
    *,
    margin: int = 3,
) -> ScrollPlan:
    """Shift up one line; keep the cursor ``margin`` lines above the bottom."""

    last_visible = round_half_up((scroll_top + client_height) / line_height)
    target = None
    if last_visible < cursor_line + margin:
        target = Position(last_visible - margin, 0)
    return ScrollPlan(top=scroll_top - line_height, cursor=target)


def _apply(editor: EditorHost, plan: ScrollPlan) -> None:
    editor.set_viewport_scroll(plan.top)
    if plan.cursor is not None:
        editor.set_cursor(plan.cursor)


def _sampled_height(editor: EditorHost, line: int, operation: str) -> Optional[float]:
    height = editor.get_line_height(line)
    if height <= 0:
        telemetry.record_event(
            f"scroll.{operation}.skipped",
            level="warning",
            data={"line": line, "line_height": height},
            logger_name=LOGGER_NAME,
        )
        return None
    return height


def scroll_line_down(editor: EditorHost, *, config: Optional[NavigatorConfig] = None) -> None:
    del config
    cursor = editor.get_cursor()
    with telemetry.span(
        "scroll::scroll_line_down",
        logger_name=LOGGER_NAME,
        component="scroll",
        metadata={"line": cursor.line},
    ) as handle:
        height = _sampled_height(editor, cursor.line, "scroll_line_down")
        if height is None:
            return
        scroll = editor.get_viewport_scroll()
        plan = plan_scroll_down(cursor.line, scroll.top, height)
        handle.add_metadata("top", plan.top)
        handle.add_metadata("snap", plan.cursor)
        _apply(editor, plan)


def scroll_line_up(editor: EditorHost, *, config: Optional[NavigatorConfig] = None) -> None:
    config = config or DEFAULT_CONFIG
    cursor = editor.get_cursor()
    with telemetry.span(
        "scroll::scroll_line_up",
        logger_name=LOGGER_NAME,
        component="scroll",
        metadata={"line": cursor.line},
    ) as handle:
        height = _sampled_height(editor, cursor.line, "scroll_line_up")
        if height is None:
            return
        scroll = editor.get_viewport_scroll()
        plan = plan_scroll_up(
            cursor.line,
            scroll.top,
            scroll.client_height,
            height,
            margin=config.scroll_margin,
        )
        handle.add_metadata("top", plan.top)
        handle.add_metadata("snap", plan.cursor)
        _apply(editor, plan)


__all__ = [
    "ScrollPlan",
    "plan_scroll_down",
    "plan_scroll_up",
    "round_half_up",
    "scroll_line_down",
    "scroll_line_up",
]
