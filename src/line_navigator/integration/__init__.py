"""Host integration for the navigator feature."""

from .feature import (
    FEATURE_KEY,
    KEYMAP_NAME,
    LineNavigatorFeature,
    attached_feature,
    create_session,
    set_line_navigator,
)

__all__ = [
    "FEATURE_KEY",
    "KEYMAP_NAME",
    "LineNavigatorFeature",
    "attached_feature",
    "create_session",
    "set_line_navigator",
]
