from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable, Dict

from ..colors import ORANGE, RED, WHITE
from ..entities import DeathPolicy, Entity
from ..entities.factory import CORPSE_CHAR, CORPSE_COLOR

if TYPE_CHECKING:  # pragma: no cover
    from .game import Game

logger = logging.getLogger(__name__)


def player_death(player: Entity, game: "Game") -> None:
    # No game-over state: the corpse glyph and the message are the signal.
    game.messages.add("You died!", RED)
    player.char = CORPSE_CHAR
    player.color = CORPSE_COLOR
    logger.info("Player died at %s", player.pos)


def monster_death(monster: Entity, game: "Game") -> None:
    game.messages.add(f"{monster.name} is dead!", ORANGE)
    monster.char = CORPSE_CHAR
    monster.color = CORPSE_COLOR
    monster.blocks_motion = False
    monster.fighter = None
    monster.ai = None
    monster.name = f"remains of {monster.name}"
    logger.debug("Monster died at %s", monster.pos)


_DEATH_POLICIES: Dict[DeathPolicy, Callable[[Entity, "Game"], None]] = {
    DeathPolicy.PLAYER: player_death,
    DeathPolicy.MONSTER: monster_death,
}


def take_damage(entity: Entity, amount: int, game: "Game") -> None:
    """Subtract ``amount`` hit points and resolve death.

    The death policy runs once, on the transition to dead; damage dealt to an
    entity that is already dead only lowers its hit points.
    """
    fighter = entity.fighter
    if fighter is None:
        return
    if amount > 0:
        fighter.hp -= amount
    if fighter.hp <= 0 and entity.is_alive:
        entity.is_alive = False
        _DEATH_POLICIES[fighter.on_death](entity, game)


def attack(attacker: Entity, target: Entity, game: "Game") -> int:
    """Resolve one melee attack and return the damage dealt."""
    power = attacker.fighter.power if attacker.fighter else 0
    defense = target.fighter.defense if target.fighter else 0
    damage = power - defense
    if damage > 0:
        game.messages.add(f"{attacker.name} attacks {target.name} for {damage} hit points.", WHITE)
        take_damage(target, damage, game)
        return damage
    game.messages.add(f"{attacker.name} attacks {target.name} but it has no effect!", WHITE)
    return 0


def heal(entity: Entity, amount: int) -> None:
    fighter = entity.fighter
    if fighter is None:
        return
    fighter.hp = min(fighter.hp + amount, fighter.max_hp)
