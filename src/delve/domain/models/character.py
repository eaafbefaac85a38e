from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple

from delve.domain.models.item import Armor, Item, Weapon
from delve.domain.models.position import ORIGIN, Position
from delve.domain.models.progression import ExperiencePoints, ExperienceThreshold, Level
from delve.domain.models.stats import BaseStats, CombatStats


class CharacterClass(str, Enum):
    WARRIOR = "warrior"
    MAGE = "mage"
    ROGUE = "rogue"

    @classmethod
    def normalize(cls, value: "str | CharacterClass | None") -> Optional["CharacterClass"]:
        raw = str(getattr(value, "value", value) or "").strip().lower()
        for member in cls:
            if member.value == raw:
                return member
        return None


@dataclass(frozen=True)
class Equipment:
    weapon: Optional[Weapon] = None
    armor: Optional[Armor] = None

    def holds(self, item: Item) -> bool:
        return any(slot is not None and slot.id == item.id for slot in (self.weapon, self.armor))


@dataclass(frozen=True)
class Character:
    id: str
    name: str
    character_class: CharacterClass
    stats: BaseStats
    combat: CombatStats
    level: int = 1
    experience: int = 0
    experience_to_next_level: int = 100
    position: Position = ORIGIN
    gold: int = 0
    inventory: Tuple[Item, ...] = ()
    equipped: Equipment = field(default_factory=Equipment)

    def __post_init__(self) -> None:
        Level(self.level)
        ExperiencePoints(self.experience)
        ExperienceThreshold(self.experience_to_next_level)
        if int(self.gold) < 0:
            raise ValueError("Gold cannot be negative")
        if not isinstance(self.inventory, tuple):
            object.__setattr__(self, "inventory", tuple(self.inventory))

    @property
    def is_defeated(self) -> bool:
        return self.combat.health <= 0

    def count_of(self, item_id: str) -> int:
        return sum(1 for item in self.inventory if item.id == item_id)


def without_one(inventory: Tuple[Item, ...], item_id: str) -> Tuple[Item, ...]:
    """Drop the first entry with ``item_id``; later duplicates stay in order."""
    for index, item in enumerate(inventory):
        if item.id == item_id:
            return inventory[:index] + inventory[index + 1 :]
    return inventory
