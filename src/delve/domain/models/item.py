from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ItemKind(str, Enum):
    WEAPON = "weapon"
    ARMOR = "armor"
    POTION = "potion"
    SCROLL = "scroll"


class Rarity(str, Enum):
    COMMON = "common"
    RARE = "rare"
    EPIC = "epic"
    LEGENDARY = "legendary"


class DamageType(str, Enum):
    PHYSICAL = "physical"
    MAGICAL = "magical"


@dataclass(frozen=True)
class Item:
    id: str
    name: str
    kind: ItemKind
    rarity: Rarity = Rarity.COMMON
    description: str = ""
    value: int = 0


@dataclass(frozen=True)
class Weapon(Item):
    kind: ItemKind = ItemKind.WEAPON
    damage: int = 0
    # Not used by combat resolution yet.
    attack_speed: float = 1.0
    damage_type: DamageType = DamageType.PHYSICAL


@dataclass(frozen=True)
class Armor(Item):
    kind: ItemKind = ItemKind.ARMOR
    defense: int = 0
    resistance: int = 0
