from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

from delve.domain.models.character import Character
from delve.domain.models.dungeon import DungeonGrid
from delve.domain.models.item import Item
from delve.domain.models.monster import Monster
from delve.domain.models.quest import Quest


class CombatOutcome(str, Enum):
    ONGOING = "ongoing"
    VICTORY = "victory"
    DEFEAT = "defeat"


class Rejection(str, Enum):
    IN_COMBAT = "in_combat"
    OUT_OF_BOUNDS = "out_of_bounds"
    BLOCKED = "blocked"
    COMBAT_RESOLVING = "combat_resolving"
    NOT_IN_COMBAT = "not_in_combat"
    MONSTER_DEFEATED = "monster_defeated"
    CHARACTER_DEFEATED = "character_defeated"
    ITEM_EQUIPPED = "item_equipped"
    ITEM_NOT_HELD = "item_not_held"
    NOT_EQUIPPABLE = "not_equippable"
    UNKNOWN_POTION = "unknown_potion"
    UNKNOWN_QUEST = "unknown_quest"
    QUEST_INCOMPLETE = "quest_incomplete"
    REWARDS_CLAIMED = "rewards_claimed"
    INVALID_NAME = "invalid_name"
    INVALID_CLASS = "invalid_class"
    NO_CHARACTER = "no_character"
    UNKNOWN_COMMAND = "unknown_command"


@dataclass(frozen=True)
class Rejected:
    reason: Rejection
    message: str = ""


@dataclass(frozen=True)
class DungeonLayout:
    grid: DungeonGrid
    monsters: Tuple[Monster, ...]


@dataclass(frozen=True)
class MoveResult:
    character: Character
    grid: DungeonGrid
    combat_started: Optional[Monster] = None
    rejection: Optional[Rejection] = None

    @property
    def moved(self) -> bool:
        return self.rejection is None and self.combat_started is None


@dataclass(frozen=True)
class AttackResult:
    character: Character
    monster: Monster
    log: Tuple[str, ...] = ()
    outcome: CombatOutcome = CombatOutcome.ONGOING
    player_damage: int = 0
    monster_damage: int = 0
    loot: Tuple[Item, ...] = ()
    leveled_up: bool = False
    rejection: Optional[Rejection] = None


@dataclass(frozen=True)
class TurnInResult:
    character: Character
    quests: Tuple[Quest, ...]
    leveled_up: bool = False


@dataclass
class ActionResult:
    messages: List[str] = field(default_factory=list)
    game_over: bool = False
    rejection: Optional[Rejection] = None

    @property
    def ok(self) -> bool:
        return self.rejection is None
