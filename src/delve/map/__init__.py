from .tiles import GameMap, Rect, Tile
from .fov import FovMap

__all__ = ["Tile", "GameMap", "Rect", "FovMap"]
