"""Character classification, run-boundary navigation, and line scrolling."""

from .classifier import CharClass, classify, sample_at
from .navigator import navigate_left, navigate_right, remaining_positions
from .scan import ScanState
from .scroll import (
    ScrollPlan,
    plan_scroll_down,
    plan_scroll_up,
    round_half_up,
    scroll_line_down,
    scroll_line_up,
)

__all__ = [
    "CharClass",
    "ScanState",
    "ScrollPlan",
    "classify",
    "navigate_left",
    "navigate_right",
    "plan_scroll_down",
    "plan_scroll_up",
    "remaining_positions",
    "round_half_up",
    "sample_at",
    "scroll_line_down",
    "scroll_line_up",
]
