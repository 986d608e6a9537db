from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from .combat import attack
from .movement import move_towards

if TYPE_CHECKING:  # pragma: no cover
    from .game import Game

logger = logging.getLogger(__name__)

ATTACK_RANGE = 2.0


def ai_take_turn(monster_index: int, game: "Game") -> None:
    """Basic chase-and-attack behaviour for the entity at ``monster_index``.

    Monsters have no senses of their own: a monster acts only while its cell
    is inside the player's field of view. It closes in until adjacent, then
    attacks a living player. There is no pathfinding, so a wall in the way
    simply stalls it.
    """
    entities = game.entities
    monster = entities[monster_index]
    player = entities.player
    if not game.fov.is_in_fov(monster.x, monster.y):
        return
    if monster.distance_to(player) >= ATTACK_RANGE:
        move_towards(monster, player.x, player.y, game.map, entities)
    elif player.fighter is not None and player.fighter.hp > 0:
        monster, target = entities.pair(monster_index, entities.index_of(player))
        attack(monster, target, game)
