from __future__ import annotations

import logging
import string
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, List, Optional

from ..colors import GREEN, LIGHT_VIOLET, RED
from ..entities import Entity, ItemKind
from .combat import heal

if TYPE_CHECKING:  # pragma: no cover
    from .game import Game

logger = logging.getLogger(__name__)

MAX_CAPACITY = len(string.ascii_lowercase)


@dataclass
class InventoryItem:
    """An item carried by the player; it has no map position."""

    name: str
    kind: ItemKind

    @classmethod
    def from_entity(cls, entity: Entity) -> "InventoryItem":
        if entity.item is None:
            raise ValueError(f"{entity!r} is not an item")
        return cls(name=entity.name, kind=entity.item)


@dataclass
class Inventory:
    """
    Player inventory; one entry per picked-up item, selectable by letter.
    """

    capacity: int = MAX_CAPACITY
    items: List[InventoryItem] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not 0 <= self.capacity <= MAX_CAPACITY:
            raise ValueError(f"capacity must be between 0 and {MAX_CAPACITY}")

    @property
    def is_full(self) -> bool:
        return len(self.items) >= self.capacity

    def add(self, item: InventoryItem) -> bool:
        if self.is_full:
            logger.debug("Inventory full: cannot add %s", item.name)
            return False
        self.items.append(item)
        logger.debug("Added %s to inventory", item.name)
        return True

    def consume(self, index: int) -> None:
        del self.items[index]

    def __len__(self) -> int:
        return len(self.items)


def pick_item_up(entity: Entity, game: "Game") -> bool:
    """Move an item entity from the map into the inventory.

    Returns True when the item was taken. A full inventory leaves the item
    where it lies.
    """
    if game.inventory.is_full:
        game.messages.add(f"The inventory is full, cannot pick up {entity.name}.", RED)
        return False
    game.entities.remove(entity)
    game.inventory.add(InventoryItem.from_entity(entity))
    game.messages.add(f"You picked up a {entity.name}!", GREEN)
    return True


def pick_up_at_player(game: "Game") -> bool:
    player = game.entities.player
    item = next(
        (e for e in game.entities.at(*player.pos) if e is not player and e.item is not None),
        None,
    )
    if item is None:
        game.messages.add("There is nothing here to pick up.")
        return False
    return pick_item_up(item, game)


def cast_heal(game: "Game") -> bool:
    player = game.entities.player
    fighter = player.fighter
    if fighter is None or fighter.hp >= fighter.max_hp:
        game.messages.add("You are already at full health.", RED)
        return False
    game.messages.add("Your wounds start to feel better!", LIGHT_VIOLET)
    heal(player, game.heal_amount)
    return True


_ITEM_EFFECTS = {
    ItemKind.HEAL: cast_heal,
}


def use_item(index: int, game: "Game") -> bool:
    """Apply the inventory entry at ``index``; the entry is removed only if the effect happened."""
    entry = game.inventory.items[index]
    used = _ITEM_EFFECTS[entry.kind](game)
    if used:
        game.inventory.consume(index)
        logger.info("Used %s", entry.name)
    return used


def inventory_menu_options(inventory: Inventory) -> List[str]:
    if not inventory.items:
        return ["Inventory is empty."]
    options = []
    for letter, entry in zip(string.ascii_lowercase, inventory.items):
        options.append(f"({letter}) {entry.name}")
    return options


def menu_index(char: str, inventory: Inventory) -> Optional[int]:
    """Map a menu letter to an inventory index, or None if it selects nothing."""
    if len(char) != 1 or char not in string.ascii_lowercase:
        return None
    index = string.ascii_lowercase.index(char)
    return index if index < len(inventory.items) else None
