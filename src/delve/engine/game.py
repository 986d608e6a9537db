from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Optional

from ..colors import RED
from ..config import GameConfig
from ..dungeon import DungeonGenerator
from ..entities import Entity, EntityStore
from ..entities.factory import make_player
from ..map import FovMap, GameMap
from .inventory import Inventory
from .messages import MessageLog

logger = logging.getLogger(__name__)

DEFAULT_HEAL_AMOUNT = 4


@dataclass
class Game:
    """Everything one dungeon level needs: terrain, actors, log and inventory."""

    map: GameMap
    entities: EntityStore
    fov: FovMap
    messages: MessageLog
    inventory: Inventory
    torch_radius: int = 10
    light_walls: bool = True
    heal_amount: int = DEFAULT_HEAL_AMOUNT

    @property
    def player(self) -> Entity:
        return self.entities.player

    def compute_fov(self) -> None:
        """Recompute the player's view and remember every tile now in sight."""
        player = self.entities.player
        self.fov.compute_fov(player.x, player.y, self.torch_radius, self.light_walls)
        for x, y in self.fov.visible_cells():
            self.map.tile(x, y).mark_explored()


def new_game(config: GameConfig, seed: Optional[int] = None) -> Game:
    """Generate a fresh level and the aggregate around it."""
    rng = random.Random(seed)
    entities = EntityStore(make_player(config.player))
    generator = DungeonGenerator(config.dungeon, rng, monsters=config.monsters, items=config.items)
    level = generator.generate(entities)
    heal_amount = next((t.amount for t in config.items if t.kind == "heal"), DEFAULT_HEAL_AMOUNT)
    game = Game(
        map=level.game_map,
        entities=entities,
        fov=FovMap.from_game_map(level.game_map),
        messages=MessageLog(),
        inventory=Inventory(capacity=config.inventory_capacity),
        torch_radius=config.fov.torch_radius,
        light_walls=config.fov.light_walls,
        heal_amount=heal_amount,
    )
    game.messages.add("Welcome stranger! Prepare to perish in the dungeon.", RED)
    logger.info(
        "New game (seed=%s): %d rooms, %d entities, player at %s",
        seed,
        len(level.rooms),
        len(entities),
        level.spawn,
    )
    return game
