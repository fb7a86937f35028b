"""In-memory host used by sessions, adapters, and tests."""

from .buffer import Buffer, BufferMirror
from .document import BufferDocument
from .state import BufferState, Viewport
from .validation import BufferValidationError, clamp_position, ensure_line

__all__ = [
    "Buffer",
    "BufferDocument",
    "BufferMirror",
    "BufferState",
    "BufferValidationError",
    "Viewport",
    "clamp_position",
    "ensure_line",
]
