from __future__ import annotations

import uuid
from dataclasses import replace
from typing import Optional, Tuple

from delve.application.dtos import Rejected, Rejection
from delve.application.services.balance_tables import (
    LEVEL_UP_DAMAGE_GAIN,
    LEVEL_UP_DEFENSE_GAIN,
    LEVEL_UP_MAX_HEALTH_GAIN,
    LEVEL_UP_MAX_MANA_GAIN,
    LEVEL_UP_STAT_GAIN,
    STARTING_DAMAGE_BONUS,
    STARTING_EXPERIENCE_TO_NEXT_LEVEL,
    STARTING_GOLD,
    next_experience_threshold,
)
from delve.domain.models.character import Character, CharacterClass
from delve.domain.models.item import Armor, Weapon
from delve.domain.models.position import ORIGIN
from delve.domain.models.stats import BaseStats, CombatStats
from delve.domain.services.class_catalog import CLASS_BONUSES
from delve.domain.services.item_catalog import DEFAULT_ITEM_CATALOG, STARTER_WEAPON_ID, ItemCatalog


class ProgressionService:
    def __init__(self, catalog: ItemCatalog = DEFAULT_ITEM_CATALOG) -> None:
        self.catalog = catalog

    def create_character(
        self,
        name: str,
        character_class: "CharacterClass | str",
        *,
        character_id: Optional[str] = None,
    ) -> "Character | Rejected":
        clean_name = str(name or "").strip()
        if not clean_name:
            return Rejected(Rejection.INVALID_NAME, "A hero needs a name.")
        resolved = CharacterClass.normalize(character_class)
        if resolved is None:
            return Rejected(Rejection.INVALID_CLASS, f"Unknown class: {character_class}")

        bonus = CLASS_BONUSES[resolved]
        max_health = bonus.vitality * bonus.health_multiplier
        max_mana = bonus.intelligence * bonus.mana_multiplier
        starter = self.catalog.get(STARTER_WEAPON_ID)
        return Character(
            id=character_id or uuid.uuid4().hex,
            name=clean_name,
            character_class=resolved,
            stats=BaseStats(
                strength=bonus.strength,
                dexterity=bonus.dexterity,
                intelligence=bonus.intelligence,
                vitality=bonus.vitality,
            ),
            combat=CombatStats(
                health=max_health,
                max_health=max_health,
                mana=max_mana,
                max_mana=max_mana,
                damage=bonus.strength + STARTING_DAMAGE_BONUS,
                defense=bonus.vitality,
            ),
            level=1,
            experience=0,
            experience_to_next_level=STARTING_EXPERIENCE_TO_NEXT_LEVEL,
            position=ORIGIN,
            gold=STARTING_GOLD,
            inventory=(starter,) if starter is not None else (),
        )

    @staticmethod
    def apply_level_up(character: Character, carried_experience: int) -> Character:
        """One level-up transition: stats, thresholds and a full heal at once."""
        combat = character.combat
        max_health = combat.max_health + LEVEL_UP_MAX_HEALTH_GAIN
        max_mana = combat.max_mana + LEVEL_UP_MAX_MANA_GAIN
        return replace(
            character,
            level=character.level + 1,
            experience=max(0, int(carried_experience)),
            experience_to_next_level=next_experience_threshold(character.experience_to_next_level),
            stats=character.stats.grown(LEVEL_UP_STAT_GAIN),
            combat=CombatStats(
                health=max_health,
                max_health=max_health,
                mana=max_mana,
                max_mana=max_mana,
                damage=combat.damage + LEVEL_UP_DAMAGE_GAIN,
                defense=combat.defense + LEVEL_UP_DEFENSE_GAIN,
            ),
        )

    def gain_experience(self, character: Character, amount: int) -> Tuple[Character, bool]:
        # At most one level per gain; surplus beyond the next threshold is kept as experience.
        total = character.experience + max(0, int(amount))
        threshold = character.experience_to_next_level
        if total >= threshold:
            return self.apply_level_up(character, total - threshold), True
        return replace(character, experience=total), False

    @staticmethod
    def with_weapon(character: Character, weapon: Weapon) -> Character:
        return replace(
            character,
            equipped=replace(character.equipped, weapon=weapon),
            combat=replace(character.combat, damage=character.stats.strength + weapon.damage),
        )

    @staticmethod
    def with_armor(character: Character, armor: Armor) -> Character:
        return replace(
            character,
            equipped=replace(character.equipped, armor=armor),
            combat=replace(character.combat, defense=character.stats.vitality + armor.defense),
        )
