from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class DeathPolicy(Enum):
    """What happens to a fighter when its hit points run out."""

    PLAYER = "player"
    MONSTER = "monster"


class AiKind(Enum):
    BASIC = "basic"


class ItemKind(Enum):
    HEAL = "heal"


@dataclass
class Fighter:
    """Combat capability attachable to an entity.

    ``hp`` may dip below zero before death processing; healing never takes it
    above ``max_hp``.
    """

    max_hp: int
    hp: int
    defense: int
    power: int
    on_death: DeathPolicy

    @classmethod
    def fresh(cls, max_hp: int, defense: int, power: int, on_death: DeathPolicy) -> "Fighter":
        return cls(max_hp=max_hp, hp=max_hp, defense=defense, power=power, on_death=on_death)
