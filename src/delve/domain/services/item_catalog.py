from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Optional, Tuple

from delve.domain.models.item import Armor, DamageType, Item, ItemKind, Rarity, Weapon


HEALTH_POTION_ID = "potion_health"
MANA_POTION_ID = "potion_mana"
STARTER_WEAPON_ID = "sword_1"


WEAPONS: Tuple[Weapon, ...] = (
    Weapon(
        id="sword_1",
        name="Rusty Sword",
        rarity=Rarity.COMMON,
        description="A beginner's old blade.",
        value=50,
        damage=8,
        attack_speed=1.2,
        damage_type=DamageType.PHYSICAL,
    ),
    Weapon(
        id="staff_1",
        name="Staff of Fire",
        rarity=Rarity.RARE,
        description="A magic staff smouldering with fire.",
        value=200,
        damage=15,
        attack_speed=0.8,
        damage_type=DamageType.MAGICAL,
    ),
    Weapon(
        id="dagger_1",
        name="Shadow Dagger",
        rarity=Rarity.EPIC,
        description="A quick dagger for strikes from hiding.",
        value=350,
        damage=12,
        attack_speed=2.0,
        damage_type=DamageType.PHYSICAL,
    ),
    Weapon(
        id="sword_legendary",
        name="Sword of Dusk",
        rarity=Rarity.LEGENDARY,
        description="The legendary sword of ancient heroes.",
        value=1000,
        damage=35,
        attack_speed=1.5,
        damage_type=DamageType.PHYSICAL,
    ),
)

ARMORS: Tuple[Armor, ...] = (
    Armor(
        id="armor_1",
        name="Leather Armor",
        rarity=Rarity.COMMON,
        description="Simple leather protection.",
        value=80,
        defense=5,
        resistance=2,
    ),
    Armor(
        id="armor_2",
        name="Steel Cuirass",
        rarity=Rarity.RARE,
        description="Sturdy steel plate.",
        value=250,
        defense=15,
        resistance=8,
    ),
    Armor(
        id="armor_legendary",
        name="Dragon Armor",
        rarity=Rarity.LEGENDARY,
        description="Legendary armour forged from dragon scale.",
        value=1500,
        defense=40,
        resistance=25,
    ),
)

POTIONS: Tuple[Item, ...] = (
    Item(
        id=HEALTH_POTION_ID,
        name="Health Potion",
        kind=ItemKind.POTION,
        rarity=Rarity.COMMON,
        description="Restores 50 HP.",
        value=25,
    ),
    Item(
        id=MANA_POTION_ID,
        name="Mana Potion",
        kind=ItemKind.POTION,
        rarity=Rarity.COMMON,
        description="Restores 30 mana.",
        value=30,
    ),
)


@dataclass(frozen=True)
class ItemCatalog:
    weapons: Sequence[Weapon] = WEAPONS
    armors: Sequence[Armor] = ARMORS
    potions: Sequence[Item] = POTIONS
    _by_id: Mapping[str, Item] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        index = {item.id: item for item in (*self.weapons, *self.armors, *self.potions)}
        object.__setattr__(self, "_by_id", index)

    @property
    def equipment(self) -> Tuple[Item, ...]:
        return (*self.weapons, *self.armors)

    def get(self, item_id: str) -> Optional[Item]:
        return self._by_id.get(str(item_id))

    def require(self, item_id: str) -> Item:
        item = self.get(item_id)
        if item is None:
            raise KeyError(f"Unknown item id: {item_id}")
        return item


DEFAULT_ITEM_CATALOG = ItemCatalog()
