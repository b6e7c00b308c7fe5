"""Textual host adapter; the app module needs the ``textual`` package."""

from .controller import (
    JADE_EVENTS,
    TextualJadeAdapter,
    TextualUIHooks,
    normalize_textual_key,
)

__all__ = [
    "TextualJadeAdapter",
    "TextualUIHooks",
    "JADE_EVENTS",
    "normalize_textual_key",
]
