"""Functional entry points over the default services.

Every call takes snapshots and returns new ones; nothing is mutated.
"""
from __future__ import annotations

import random
from typing import Optional, Sequence, Tuple

from delve.application.dtos import AttackResult, DungeonLayout, MoveResult, Rejected, TurnInResult
from delve.application.services.balance_tables import DUNGEON_SIZE, MONSTER_COUNT
from delve.application.services.combat_service import CombatEngine
from delve.application.services.dungeon_generator import DungeonGenerator
from delve.application.services.inventory_service import InventoryService
from delve.application.services.monster_factory import MonsterFactory
from delve.application.services.movement_service import MovementResolver
from delve.application.services.quest_service import QuestTracker
from delve.domain.models.character import Character
from delve.domain.models.dungeon import DungeonGrid
from delve.domain.models.item import Item
from delve.domain.models.monster import Monster
from delve.domain.models.quest import Quest


_MONSTERS = MonsterFactory()
_MOVEMENT = MovementResolver()
_COMBAT = CombatEngine()
_INVENTORY = InventoryService()
_QUESTS = QuestTracker()


def generate_dungeon(
    size: int = DUNGEON_SIZE,
    player_level: int = 1,
    monster_count: int = MONSTER_COUNT,
    *,
    rng: Optional[random.Random] = None,
) -> Tuple[DungeonGrid, Tuple[Monster, ...]]:
    layout: DungeonLayout = DungeonGenerator(monster_factory=_MONSTERS, rng=rng).generate(size, player_level, monster_count)
    return layout.grid, layout.monsters


def move(
    character: Character,
    dx: int,
    dy: int,
    grid: DungeonGrid,
    monsters: Sequence[Monster],
    *,
    in_combat: bool = False,
) -> MoveResult:
    return _MOVEMENT.move(character, dx, dy, grid, monsters, in_combat=in_combat)


def attack(character: Character, monster: Monster) -> AttackResult:
    return _COMBAT.attack(character, monster)


def equip(character: Character, item: Item) -> Character:
    return _INVENTORY.equip(character, item)


def consume(character: Character, item_id: str) -> Character:
    return _INVENTORY.consume(character, item_id)


def sell(character: Character, item: Item) -> "Character | Rejected":
    return _INVENTORY.sell(character, item)


def recompute_quests(quests: Sequence[Quest], character: Character) -> Tuple[Quest, ...]:
    return _QUESTS.recompute(quests, character)


def turn_in(quests: Sequence[Quest], character: Character, quest_id: str) -> "TurnInResult | Rejected":
    return _QUESTS.turn_in(quests, character, quest_id)
