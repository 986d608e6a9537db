from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple

from ..colors import Color
from .components import AiKind, Fighter, ItemKind

logger = logging.getLogger(__name__)


@dataclass(eq=False)
class Entity:
    """A positioned actor or object on the map.

    Capabilities are optional: only entities with a ``fighter`` take part in
    combat, only those with an ``ai`` act on their own, and only those with
    an ``item`` can be picked up.
    """

    x: int
    y: int
    char: str
    color: Color
    name: str
    blocks_motion: bool = False
    is_alive: bool = True
    fighter: Optional[Fighter] = None
    ai: Optional[AiKind] = None
    item: Optional[ItemKind] = None

    @property
    def pos(self) -> Tuple[int, int]:
        return (self.x, self.y)

    def set_pos(self, x: int, y: int) -> None:
        self.x = x
        self.y = y

    def distance_to(self, other: "Entity") -> float:
        return math.hypot(other.x - self.x, other.y - self.y)

    def __repr__(self) -> str:
        hp = f" hp={self.fighter.hp}/{self.fighter.max_hp}" if self.fighter else ""
        return f"Entity({self.name}@{self.x},{self.y}{hp})"


class EntityStore:
    """Ordered entity collection with an explicit handle to the player.

    The player is stored first so it takes part in index-ordered iteration,
    but callers reach it through :attr:`player`, never through index 0.
    """

    def __init__(self, player: Entity) -> None:
        self.player = player
        self._entities: List[Entity] = [player]

    def __len__(self) -> int:
        return len(self._entities)

    def __iter__(self) -> Iterator[Entity]:
        return iter(self._entities)

    def __getitem__(self, index: int) -> Entity:
        return self._entities[index]

    def add(self, entity: Entity) -> int:
        self._entities.append(entity)
        return len(self._entities) - 1

    def index_of(self, entity: Entity) -> int:
        for idx, candidate in enumerate(self._entities):
            if candidate is entity:
                return idx
        raise ValueError(f"{entity!r} is not in the store")

    def remove(self, entity: Entity) -> None:
        """Remove ``entity`` keeping the relative order of the others."""
        if entity is self.player:
            raise ValueError("the player cannot be removed")
        del self._entities[self.index_of(entity)]

    def pair(self, first: int, second: int) -> Tuple[Entity, Entity]:
        """Return the two distinct entities at ``first`` and ``second``.

        Equal indices mean an entity would act on itself, which is a logic
        error and raises ``ValueError``.
        """
        if first == second:
            raise ValueError(f"cannot pair entity {first} with itself")
        return self._entities[first], self._entities[second]

    def at(self, x: int, y: int) -> Iterator[Entity]:
        return (e for e in self._entities if e.x == x and e.y == y)

    def blocking_at(self, x: int, y: int) -> Optional[Entity]:
        return next((e for e in self.at(x, y) if e.blocks_motion), None)
