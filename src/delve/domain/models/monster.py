from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Tuple

from delve.domain.models.item import Item
from delve.domain.models.position import ORIGIN, Position


class MonsterType(str, Enum):
    UNDEAD = "undead"
    DEMON = "demon"
    BEAST = "beast"


@dataclass(frozen=True)
class MonsterTemplate:
    key: str
    name: str
    monster_type: MonsterType
    base_health: int
    base_damage: int
    base_defense: int
    experience: int
    gold_drop: int


@dataclass(frozen=True)
class Monster:
    id: str
    name: str
    monster_type: MonsterType
    level: int
    health: int
    max_health: int
    damage: int
    defense: int
    experience: int
    gold_drop: int
    position: Position = ORIGIN
    loot_table: Tuple[Item, ...] = ()
    is_alive: bool = True

    def __post_init__(self) -> None:
        if not 0 <= int(self.health) <= int(self.max_health):
            raise ValueError("Monster health must be within [0, max_health]")
        if not isinstance(self.loot_table, tuple):
            object.__setattr__(self, "loot_table", tuple(self.loot_table))

    def occupies(self, position: Position) -> bool:
        return self.is_alive and self.position == position

    def wounded(self, amount: int) -> "Monster":
        remaining = max(0, self.health - int(amount))
        return replace(self, health=remaining, is_alive=self.is_alive and remaining > 0)


def level_multiplier(level: int) -> float:
    return 1 + (int(level) - 1) * 0.3
