from .components import AiKind, DeathPolicy, Fighter, ItemKind
from .entity import Entity, EntityStore

__all__ = ["AiKind", "DeathPolicy", "Fighter", "ItemKind", "Entity", "EntityStore"]
