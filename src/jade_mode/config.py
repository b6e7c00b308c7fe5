"""Mode settings: indentation unit and file association."""

from __future__ import annotations

import os
import re
from dataclasses import dataclass
from pathlib import PurePath
from typing import Mapping, Optional

ENV_PREFIX = "JADE_MODE_"
DEFAULT_INDENT_OFFSET = 4
DEFAULT_FILE_PATTERNS: tuple[str, ...] = (r"\.jade\Z",)


@dataclass(frozen=True, slots=True)
class JadeModeSettings:
    """Customisable knobs for the mode."""

    indent_offset: int = DEFAULT_INDENT_OFFSET
    file_patterns: tuple[str, ...] = DEFAULT_FILE_PATTERNS

    def __post_init__(self) -> None:
        if self.indent_offset <= 0:
            raise ValueError("indent_offset must be positive")
        for pattern in self.file_patterns:
            re.compile(pattern)

    def matches_file(self, path: str | os.PathLike[str]) -> bool:
        """True when ``path`` should open in this mode."""

        name = PurePath(path).name
        return any(re.search(pattern, name) for pattern in self.file_patterns)


def load_settings(environ: Optional[Mapping[str, str]] = None) -> JadeModeSettings:
    env = os.environ if environ is None else environ
    raw = env.get(f"{ENV_PREFIX}INDENT_OFFSET")
    if raw is None or not raw.strip():
        return JadeModeSettings()
    try:
        offset = int(raw)
    except ValueError as exc:
        raise ValueError(
            f"{ENV_PREFIX}INDENT_OFFSET must be an integer, got {raw!r}"
        ) from exc
    return JadeModeSettings(indent_offset=offset)


__all__ = [
    "DEFAULT_INDENT_OFFSET",
    "DEFAULT_FILE_PATTERNS",
    "JadeModeSettings",
    "load_settings",
]
