"""Lookup of the engine operation an action was registered with."""

from __future__ import annotations

from typing import Callable

from jade_mode.keymaps import ResolutionMatch


def bound_operation(match: ResolutionMatch) -> Callable[..., object]:
    operation = match.action.metadata.get("operation")
    if not callable(operation):
        raise RuntimeError(f"Action '{match.action.id}' has no bound operation")
    return operation
