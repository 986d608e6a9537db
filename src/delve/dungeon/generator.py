from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from ..config import DungeonSettings, ItemTemplate, MonsterTemplate
from ..engine.movement import is_blocked
from ..entities import EntityStore
from ..entities.factory import make_item, make_monster
from ..map import GameMap, Rect, Tile

logger = logging.getLogger(__name__)


@dataclass
class GeneratedLevel:
    game_map: GameMap
    spawn: Tuple[int, int]
    rooms: List[Rect] = field(default_factory=list)


class DungeonGenerator:
    """Rooms + corridors generator.

    Up to ``max_rooms`` random rectangles are tried; each one that does not
    touch an accepted room is carved out and joined to the previously
    accepted room with an L-shaped corridor whose elbow is picked by a coin
    flip. Every carved cell is therefore reachable from the first room, whose
    center is the player spawn. Rejected rooms are not retried, so a map may
    end up with fewer rooms than ``max_rooms``.
    """

    def __init__(
        self,
        settings: DungeonSettings,
        rng: Optional[random.Random] = None,
        monsters: Sequence[MonsterTemplate] = (),
        items: Sequence[ItemTemplate] = (),
    ) -> None:
        if settings.max_rooms < 1:
            raise ValueError("max_rooms must be >= 1")
        self.settings = settings
        self.rng = rng or random.Random()
        self.monsters = list(monsters)
        self.items = list(items)

    def generate(self, entities: EntityStore) -> GeneratedLevel:
        """Carve a new map, move the player to the spawn and populate rooms."""
        s = self.settings
        rng = self.rng
        game_map = GameMap(s.width, s.height, fill_walls=True)
        rooms: List[Rect] = []

        for _ in range(s.max_rooms):
            w = rng.randint(s.room_min_size, s.room_max_size)
            h = rng.randint(s.room_min_size, s.room_max_size)
            x = rng.randint(0, s.width - w - 1)
            y = rng.randint(0, s.height - h - 1)
            new_room = Rect(x, y, w, h)
            if any(new_room.intersects(other) for other in rooms):
                continue

            self._carve_room(game_map, new_room)
            new_x, new_y = new_room.center()
            if not rooms:
                entities.player.set_pos(new_x, new_y)
            else:
                prev_x, prev_y = rooms[-1].center()
                if rng.random() < 0.5:
                    self._carve_h_tunnel(game_map, prev_x, new_x, prev_y)
                    self._carve_v_tunnel(game_map, prev_y, new_y, new_x)
                else:
                    self._carve_v_tunnel(game_map, prev_y, new_y, prev_x)
                    self._carve_h_tunnel(game_map, prev_x, new_x, new_y)
            self._place_objects(new_room, game_map, entities)
            rooms.append(new_room)

        spawn = rooms[0].center()
        logger.debug(
            "DungeonGenerator: %d rooms, %d entities, spawn at %s",
            len(rooms),
            len(entities),
            spawn,
        )
        return GeneratedLevel(game_map=game_map, spawn=spawn, rooms=rooms)

    def choose_monster(self, roll: float) -> MonsterTemplate:
        """Pick a monster template by cumulative chance for ``roll`` in [0, 1)."""
        cumulative = 0.0
        for template in self.monsters:
            cumulative += template.chance
            if roll < cumulative:
                return template
        return self.monsters[-1]

    def _random_interior_cell(self, room: Rect) -> Tuple[int, int]:
        x = self.rng.randint(room.x1 + 1, room.x2 - 1)
        y = self.rng.randint(room.y1 + 1, room.y2 - 1)
        return x, y

    def _place_objects(self, room: Rect, game_map: GameMap, entities: EntityStore) -> None:
        rng = self.rng
        if self.monsters:
            for _ in range(rng.randint(0, self.settings.max_room_monsters)):
                x, y = self._random_interior_cell(room)
                if not is_blocked(x, y, game_map, entities):
                    template = self.choose_monster(rng.random())
                    entities.add(make_monster(template, x, y))

        if self.items:
            for _ in range(rng.randint(0, self.settings.max_room_items)):
                x, y = self._random_interior_cell(room)
                if not is_blocked(x, y, game_map, entities):
                    entities.add(make_item(rng.choice(self.items), x, y))

    @staticmethod
    def _carve_room(game_map: GameMap, room: Rect) -> None:
        for x, y in room.interior():
            game_map[x, y] = Tile.empty()

    @staticmethod
    def _carve_h_tunnel(game_map: GameMap, x1: int, x2: int, y: int) -> None:
        for x in range(min(x1, x2), max(x1, x2) + 1):
            game_map[x, y] = Tile.empty()

    @staticmethod
    def _carve_v_tunnel(game_map: GameMap, y1: int, y2: int, x: int) -> None:
        for y in range(min(y1, y2), max(y1, y2) + 1):
            game_map[x, y] = Tile.empty()
