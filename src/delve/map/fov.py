from __future__ import annotations

import logging
from typing import FrozenSet, List, Set, Tuple

from .tiles import GameMap

logger = logging.getLogger(__name__)

Coord = Tuple[int, int]


def bresenham_line(x0: int, y0: int, x1: int, y1: int) -> List[Coord]:
    """
    Bresenham's line algorithm. Returns the list of points from (x0, y0) to (x1, y1) inclusive.
    """
    points: List[Coord] = []

    dx = abs(x1 - x0)
    dy = -abs(y1 - y0)
    sx = 1 if x0 < x1 else -1
    sy = 1 if y0 < y1 else -1
    err = dx + dy

    x, y = x0, y0
    while True:
        points.append((x, y))
        if x == x1 and y == y1:
            break
        e2 = 2 * err
        if e2 >= dy:
            err += dy
            x += sx
        if e2 <= dx:
            err += dx
            y += sy

    return points


class FovMap:
    """
    Visibility oracle over a transparency grid.

    Feed it opacity with :meth:`set` (or build it with :meth:`from_game_map`),
    call :meth:`compute_fov` from an origin, then query :meth:`is_in_fov`.
    Results are a snapshot: they only change on the next compute.
    """

    def __init__(self, width: int, height: int) -> None:
        if width <= 0 or height <= 0:
            raise ValueError("FovMap width/height must be > 0")
        self.width = width
        self.height = height
        self._transparent: List[List[bool]] = [[True] * height for _ in range(width)]
        self._visible: Set[Coord] = set()

    @classmethod
    def from_game_map(cls, game_map: GameMap) -> "FovMap":
        fov = cls(game_map.width, game_map.height)
        for x, y in game_map.coords():
            tile = game_map.tiles[x][y]
            fov.set(x, y, transparent=not tile.block_sight)
        return fov

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def set(self, x: int, y: int, transparent: bool) -> None:
        if not self.in_bounds(x, y):
            raise IndexError("Tile out of bounds")
        self._transparent[x][y] = bool(transparent)

    def is_transparent(self, x: int, y: int) -> bool:
        return self.in_bounds(x, y) and self._transparent[x][y]

    def _line_clear(self, x0: int, y0: int, x1: int, y1: int, light_walls: bool) -> bool:
        line = bresenham_line(x0, y0, x1, y1)
        # Origin is skipped; the target may be opaque only when walls are lit.
        end_index = len(line) - (1 if light_walls else 0)
        for x, y in line[1:end_index]:
            if not self._transparent[x][y]:
                return False
        return True

    def compute_fov(self, x: int, y: int, radius: int = 0, light_walls: bool = True) -> None:
        """
        Recompute visible cells from (x, y).

        A radius of 0 means unlimited. Cells are within range when their
        Euclidean distance to the origin is at most ``radius``. The origin is
        always visible.
        """
        if not self.in_bounds(x, y):
            raise ValueError("Origin out of bounds")
        if radius < 0:
            raise ValueError("radius must be >= 0")

        if radius == 0:
            min_x, max_x, min_y, max_y = 0, self.width - 1, 0, self.height - 1
        else:
            min_x = max(0, x - radius)
            max_x = min(self.width - 1, x + radius)
            min_y = max(0, y - radius)
            max_y = min(self.height - 1, y + radius)

        visible: Set[Coord] = {(x, y)}
        r2 = radius * radius
        for cy in range(min_y, max_y + 1):
            for cx in range(min_x, max_x + 1):
                if (cx, cy) == (x, y):
                    continue
                if radius and (cx - x) ** 2 + (cy - y) ** 2 > r2:
                    continue
                if not light_walls and not self._transparent[cx][cy]:
                    continue
                if self._line_clear(x, y, cx, cy, light_walls):
                    visible.add((cx, cy))

        self._visible = visible
        logger.debug("FOV from (%d,%d) radius %d -> %d visible cells", x, y, radius, len(visible))

    def is_in_fov(self, x: int, y: int) -> bool:
        return (x, y) in self._visible

    def visible_cells(self) -> FrozenSet[Coord]:
        return frozenset(self._visible)

    def __repr__(self) -> str:
        return f"FovMap({self.width}x{self.height}, visible={len(self._visible)})"
