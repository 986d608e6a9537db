from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Iterator, List, Sequence, Tuple

logger = logging.getLogger(__name__)

Coord = Tuple[int, int]


@dataclass
class Tile:
    """Terrain state of a single map cell."""

    blocked: bool
    block_sight: bool
    explored: bool = False

    @classmethod
    def empty(cls) -> "Tile":
        return cls(blocked=False, block_sight=False)

    @classmethod
    def wall(cls) -> "Tile":
        return cls(blocked=True, block_sight=True)

    def mark_explored(self) -> None:
        # Exploration is never forgotten.
        self.explored = True


class GameMap:
    """Fixed-size grid of tiles addressed as (x, y).

    Tiles are stored column-major (``tiles[x][y]``). Any access outside
    ``0 <= x < width`` and ``0 <= y < height`` raises ``IndexError``; the map
    border is always wall, so such an access is a caller bug.
    """

    def __init__(self, width: int, height: int, fill_walls: bool = True) -> None:
        if width <= 0 or height <= 0:
            raise ValueError("Invalid map size")
        self.width = width
        self.height = height
        make = Tile.wall if fill_walls else Tile.empty
        self.tiles: List[List[Tile]] = [[make() for _ in range(height)] for _ in range(width)]

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def tile(self, x: int, y: int) -> Tile:
        if not self.in_bounds(x, y):
            raise IndexError(f"Tile ({x}, {y}) outside {self.width}x{self.height} map")
        return self.tiles[x][y]

    def __getitem__(self, pos: Coord) -> Tile:
        return self.tile(*pos)

    def __setitem__(self, pos: Coord, tile: Tile) -> None:
        x, y = pos
        if not self.in_bounds(x, y):
            raise IndexError(f"Tile ({x}, {y}) outside {self.width}x{self.height} map")
        self.tiles[x][y] = tile

    def coords(self) -> Iterator[Coord]:
        for y in range(self.height):
            for x in range(self.width):
                yield x, y

    def is_wall(self, x: int, y: int) -> bool:
        return self.tile(x, y).blocked

    def neighbors4(self, x: int, y: int) -> Iterator[Coord]:
        for dx, dy in ((1, 0), (-1, 0), (0, 1), (0, -1)):
            nx, ny = x + dx, y + dy
            if self.in_bounds(nx, ny):
                yield nx, ny

    @classmethod
    def from_ascii(cls, rows: Sequence[str], wall_chars: Iterable[str] = ("#",)) -> "GameMap":
        """Build a map from ASCII rows for tests/tools; wall chars are walls, anything else is floor."""
        if not rows:
            raise ValueError("rows must not be empty")
        width = len(rows[0])
        for r in rows:
            if len(r) != width:
                raise ValueError("All rows must be same width")
        game_map = cls(width, len(rows), fill_walls=False)
        wall_set = set(wall_chars)
        for y, row in enumerate(rows):
            for x, ch in enumerate(row):
                if ch in wall_set:
                    game_map[x, y] = Tile.wall()
        return game_map

    def __repr__(self) -> str:
        return f"GameMap({self.width}x{self.height})"


class Rect:
    """Axis-aligned room rectangle used during generation."""

    def __init__(self, x: int, y: int, w: int, h: int) -> None:
        self.x1 = x
        self.y1 = y
        self.x2 = x + w
        self.y2 = y + h

    def center(self) -> Coord:
        return (self.x1 + self.x2) // 2, (self.y1 + self.y2) // 2

    def intersects(self, other: "Rect") -> bool:
        # Inclusive comparison keeps a wall between neighbouring rooms.
        return (
            self.x1 <= other.x2
            and self.x2 >= other.x1
            and self.y1 <= other.y2
            and self.y2 >= other.y1
        )

    def interior(self) -> Iterator[Coord]:
        for x in range(self.x1 + 1, self.x2):
            for y in range(self.y1 + 1, self.y2):
                yield x, y

    def __repr__(self) -> str:
        return f"Rect({self.x1},{self.y1})-({self.x2},{self.y2})"
