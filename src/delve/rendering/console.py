from __future__ import annotations

import logging
import textwrap
from enum import Enum
from typing import List, Optional, Tuple

from ..colors import BLACK, Color, WHITE

logger = logging.getLogger(__name__)


class Align(Enum):
    LEFT = "left"
    CENTER = "center"


class Console:
    """Off-screen character grid: one glyph, foreground and background per cell.

    Drawing outside the console is clipped silently, as terminal consoles do.
    Presenting the buffer is left to a backend (see :mod:`delve.app`).
    """

    def __init__(self, width: int, height: int) -> None:
        if width <= 0 or height <= 0:
            raise ValueError("Console width/height must be > 0")
        self.width = width
        self.height = height
        self.default_fg: Color = WHITE
        self.default_bg: Color = BLACK
        self._chars: List[List[str]] = []
        self._fg: List[List[Color]] = []
        self._bg: List[List[Color]] = []
        self.clear()

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def clear(self) -> None:
        self._chars = [[" "] * self.width for _ in range(self.height)]
        self._fg = [[self.default_fg] * self.width for _ in range(self.height)]
        self._bg = [[self.default_bg] * self.width for _ in range(self.height)]

    def put_char(self, x: int, y: int, char: str, fg: Optional[Color] = None) -> None:
        if not self.in_bounds(x, y):
            return
        self._chars[y][x] = char
        self._fg[y][x] = fg or self.default_fg

    def set_char_background(self, x: int, y: int, color: Color) -> None:
        if self.in_bounds(x, y):
            self._bg[y][x] = color

    def char_at(self, x: int, y: int) -> str:
        return self._chars[y][x]

    def fg_at(self, x: int, y: int) -> Color:
        return self._fg[y][x]

    def bg_at(self, x: int, y: int) -> Color:
        return self._bg[y][x]

    def cells(self):
        """Yield ``(x, y, char, fg, bg)`` for every cell, row by row."""
        for y in range(self.height):
            for x in range(self.width):
                yield x, y, self._chars[y][x], self._fg[y][x], self._bg[y][x]

    def rect(self, x: int, y: int, width: int, height: int, bg: Color) -> None:
        for cy in range(y, y + height):
            for cx in range(x, x + width):
                self.set_char_background(cx, cy, bg)

    def print_ex(self, x: int, y: int, text: str, fg: Optional[Color] = None, align: Align = Align.LEFT) -> None:
        if align is Align.CENTER:
            x -= len(text) // 2
        for offset, ch in enumerate(text):
            self.put_char(x + offset, y, ch, fg)

    @staticmethod
    def wrap(text: str, width: int) -> List[str]:
        lines: List[str] = []
        for paragraph in text.split("\n"):
            lines.extend(textwrap.wrap(paragraph, width) or [""])
        return lines

    def get_height_rect(self, width: int, text: str) -> int:
        return len(self.wrap(text, width))

    def print_rect(self, x: int, y: int, width: int, text: str, fg: Optional[Color] = None) -> int:
        """Print word-wrapped ``text`` and return the number of rows used."""
        lines = self.wrap(text, width)
        for row, line in enumerate(lines):
            self.print_ex(x, y + row, line, fg)
        return len(lines)

    def blit(self, dest: "Console", src_rect: Tuple[int, int, int, int], dest_xy: Tuple[int, int]) -> None:
        """Copy the ``(x, y, w, h)`` region of this console onto ``dest`` at ``dest_xy``."""
        sx, sy, w, h = src_rect
        dx, dy = dest_xy
        for y in range(h):
            for x in range(w):
                if not self.in_bounds(sx + x, sy + y) or not dest.in_bounds(dx + x, dy + y):
                    continue
                dest._chars[dy + y][dx + x] = self._chars[sy + y][sx + x]
                dest._fg[dy + y][dx + x] = self._fg[sy + y][sx + x]
                dest._bg[dy + y][dx + x] = self._bg[sy + y][sx + x]

    def to_text(self) -> str:
        return "\n".join("".join(row).rstrip() for row in self._chars)

    def __repr__(self) -> str:
        return f"Console({self.width}x{self.height})"
