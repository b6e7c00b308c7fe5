"""The Jade major mode and the context its actions run against."""

from .context import KeyInput, ModeBus, ModeContext, ModeResult
from .jade_mode import JADE_MODE_NAME, JadeMode

__all__ = [
    "KeyInput",
    "ModeBus",
    "ModeContext",
    "ModeResult",
    "JadeMode",
    "JADE_MODE_NAME",
]
