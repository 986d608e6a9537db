from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING, Optional

from ..entities import Entity, EntityStore
from ..map import GameMap
from .combat import attack

if TYPE_CHECKING:  # pragma: no cover
    from .game import Game

logger = logging.getLogger(__name__)


def is_blocked(x: int, y: int, game_map: GameMap, entities: EntityStore) -> bool:
    """True if the tile is blocked or a motion-blocking entity stands on it."""
    if game_map.tile(x, y).blocked:
        return True
    return entities.blocking_at(x, y) is not None


def move_by(entity: Entity, dx: int, dy: int, game_map: GameMap, entities: EntityStore) -> bool:
    """Step ``entity`` by (dx, dy) unless the target cell is blocked.

    Returns whether the entity moved; a refused step leaves no other trace.
    """
    x, y = entity.x + dx, entity.y + dy
    if is_blocked(x, y, game_map, entities):
        logger.debug("Blocked move of %s to (%d, %d)", entity.name, x, y)
        return False
    entity.set_pos(x, y)
    return True


def move_towards(entity: Entity, target_x: int, target_y: int, game_map: GameMap, entities: EntityStore) -> bool:
    """Take one normalised step toward (target_x, target_y)."""
    dx = target_x - entity.x
    dy = target_y - entity.y
    distance = math.sqrt(dx ** 2 + dy ** 2)
    if distance == 0:
        return False
    step_x = int(round(dx / distance))
    step_y = int(round(dy / distance))
    return move_by(entity, step_x, step_y, game_map, entities)


def fighter_index_at(x: int, y: int, entities: EntityStore) -> Optional[int]:
    for idx, candidate in enumerate(entities):
        if candidate.pos == (x, y) and candidate.fighter is not None:
            return idx
    return None


def player_move_or_attack(entity: Entity, dx: int, dy: int, game: "Game") -> None:
    """Attack whatever fighter occupies the destination, otherwise move there."""
    x, y = entity.x + dx, entity.y + dy
    target_index = fighter_index_at(x, y, game.entities)
    if target_index is None:
        move_by(entity, dx, dy, game.map, game.entities)
        return
    attacker, target = game.entities.pair(game.entities.index_of(entity), target_index)
    attack(attacker, target, game)
