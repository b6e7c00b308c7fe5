"""Line storage backing a jade_mode buffer."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Sequence


@dataclass(slots=True)
class BufferDocument:
    """Versioned list-of-lines text storage.

    Lines never contain ``\\n``; the buffer text is the lines joined with
    ``\\n``, so a trailing newline shows up as a final empty line. Every
    edit returns a new document with ``version`` bumped by one.
    """

    _lines: List[str] = field(default_factory=lambda: [""])
    version: int = 0
    dirty: bool = False

    @classmethod
    def from_text(cls, text: str) -> "BufferDocument":
        return cls(_lines=text.split("\n"))

    def snapshot(self) -> Sequence[str]:
        return tuple(self._lines)

    @property
    def text(self) -> str:
        return "\n".join(self._lines)

    def replace(self, *, lines: Iterable[str]) -> "BufferDocument":
        """Return a new, dirty document holding ``lines``."""

        new_lines = list(lines) or [""]
        return BufferDocument(_lines=new_lines, version=self.version + 1, dirty=True)

    @property
    def line_count(self) -> int:
        return len(self._lines)

    def get_line(self, index: int) -> str:
        return self._lines[index]

    def line_offset(self, row: int) -> int:
        """Character offset of the first column of ``row`` in ``text``."""

        return sum(len(line) + 1 for line in self._lines[:row])
