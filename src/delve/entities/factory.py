from __future__ import annotations

from ..colors import DARK_RED
from ..config import ItemTemplate, MonsterTemplate, PlayerTemplate
from .components import AiKind, DeathPolicy, Fighter, ItemKind
from .entity import Entity

CORPSE_CHAR = "%"
CORPSE_COLOR = DARK_RED


def make_player(template: PlayerTemplate, x: int = 0, y: int = 0) -> Entity:
    return Entity(
        x=x,
        y=y,
        char=template.char,
        color=template.color,
        name=template.name,
        blocks_motion=True,
        fighter=Fighter.fresh(template.max_hp, template.defense, template.power, DeathPolicy.PLAYER),
    )


def make_monster(template: MonsterTemplate, x: int, y: int) -> Entity:
    return Entity(
        x=x,
        y=y,
        char=template.char,
        color=template.color,
        name=template.name,
        blocks_motion=True,
        fighter=Fighter.fresh(template.max_hp, template.defense, template.power, DeathPolicy.MONSTER),
        ai=AiKind.BASIC,
    )


def make_item(template: ItemTemplate, x: int, y: int) -> Entity:
    return Entity(
        x=x,
        y=y,
        char=template.char,
        color=template.color,
        name=template.name,
        blocks_motion=False,
        item=ItemKind(template.kind),
    )
