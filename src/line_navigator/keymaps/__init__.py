"""Named keymaps, resolution, and default bindings."""

from .models import Binding, KeySequence, KeyStroke
from .registry import KeymapConflictError, KeymapRegistry, RegistryStats
from .resolver import KeymapResolver, ResolutionResult
from .defaults import DEFAULT_KEYMAP, load_default_keymap

__all__ = [
    "Binding",
    "DEFAULT_KEYMAP",
    "KeySequence",
    "KeyStroke",
    "KeymapConflictError",
    "KeymapRegistry",
    "KeymapResolver",
    "RegistryStats",
    "ResolutionResult",
    "load_default_keymap",
]
