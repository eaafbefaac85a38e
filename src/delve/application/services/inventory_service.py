from __future__ import annotations

from dataclasses import replace
from typing import Callable, Dict, Optional

from delve.application.dtos import Rejected, Rejection
from delve.application.services.balance_tables import HEALTH_POTION_RESTORE, MANA_POTION_RESTORE
from delve.application.services.progression_service import ProgressionService
from delve.domain.models.character import Character, without_one
from delve.domain.models.item import Armor, Item, ItemKind, Weapon
from delve.domain.services.item_catalog import HEALTH_POTION_ID, MANA_POTION_ID


def _restore_health(character: Character) -> Character:
    combat = character.combat
    return replace(character, combat=combat.with_health(combat.health + HEALTH_POTION_RESTORE))


def _restore_mana(character: Character) -> Character:
    combat = character.combat
    return replace(character, combat=combat.with_mana(combat.mana + MANA_POTION_RESTORE))


class InventoryService:
    _POTION_EFFECTS: Dict[str, Callable[[Character], Character]] = {
        HEALTH_POTION_ID: _restore_health,
        MANA_POTION_ID: _restore_mana,
    }

    def __init__(self, progression: Optional[ProgressionService] = None) -> None:
        self.progression = progression or ProgressionService()

    @staticmethod
    def is_equipped(character: Character, item: Item) -> bool:
        return character.equipped.holds(item)

    def equip(self, character: Character, item: Item) -> Character:
        """Put a held weapon or armour into its slot; potions are drunk instead.

        Damage and defense are recomputed from base stats plus the new item,
        so swapping gear never stacks bonuses. The item stays in inventory.
        """
        if character.count_of(item.id) <= 0:
            return character
        if item.kind == ItemKind.POTION:
            return self.consume(character, item.id)
        if isinstance(item, Weapon):
            return self.progression.with_weapon(character, item)
        if isinstance(item, Armor):
            return self.progression.with_armor(character, item)
        return character

    def consume(self, character: Character, potion_id: str) -> Character:
        effect = self._POTION_EFFECTS.get(str(potion_id))
        if effect is None or character.count_of(potion_id) <= 0:
            return character
        refreshed = effect(character)
        return replace(refreshed, inventory=without_one(refreshed.inventory, potion_id))

    def sell(self, character: Character, item: Item) -> "Character | Rejected":
        if self.is_equipped(character, item):
            return Rejected(Rejection.ITEM_EQUIPPED, f"You cannot sell equipped {item.name}.")
        if character.count_of(item.id) <= 0:
            return Rejected(Rejection.ITEM_NOT_HELD, f"You do not carry {item.name}.")
        return replace(
            character,
            gold=character.gold + item.value,
            inventory=without_one(character.inventory, item.id),
        )
