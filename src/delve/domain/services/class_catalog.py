from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

from delve.domain.models.character import CharacterClass


@dataclass(frozen=True)
class ClassBonus:
    strength: int
    dexterity: int
    intelligence: int
    vitality: int
    health_multiplier: int
    mana_multiplier: int


CLASS_BONUSES: Mapping[CharacterClass, ClassBonus] = {
    CharacterClass.WARRIOR: ClassBonus(10, 5, 2, 12, health_multiplier=15, mana_multiplier=5),
    CharacterClass.MAGE: ClassBonus(2, 5, 12, 5, health_multiplier=8, mana_multiplier=15),
    CharacterClass.ROGUE: ClassBonus(5, 12, 5, 8, health_multiplier=10, mana_multiplier=10),
}

CLASS_LABELS: Mapping[CharacterClass, str] = {
    CharacterClass.WARRIOR: "Warrior",
    CharacterClass.MAGE: "Mage",
    CharacterClass.ROGUE: "Rogue",
}
