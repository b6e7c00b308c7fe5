"""Structural editing support for the Jade language."""

__all__ = [
    "actions",
    "adapters",
    "buffer",
    "config",
    "engine",
    "keymaps",
    "modes",
    "registration",
    "runtime",
]

__version__ = "0.1.0"
