from .generator import DungeonGenerator, GeneratedLevel

__all__ = ["DungeonGenerator", "GeneratedLevel"]
