"""Line model: buffer storage, cursor state, and undo history."""

from .buffer import Buffer, BufferDelta, Transaction
from .document import BufferDocument
from .state import BufferState, Cursor
from .sync import BufferMirror, BufferValidationError, EditableBuffer, LineSource
from .undo import UndoEntry, EditHistory
from .validation import ensure_cursor, ensure_row

__all__ = [
    "BufferDocument",
    "BufferState",
    "Cursor",
    "EditHistory",
    "UndoEntry",
    "Buffer",
    "BufferDelta",
    "Transaction",
    "BufferMirror",
    "BufferValidationError",
    "EditableBuffer",
    "LineSource",
    "ensure_cursor",
    "ensure_row",
]
