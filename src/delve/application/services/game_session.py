from __future__ import annotations

import logging
import time
from dataclasses import dataclass, replace
from typing import Callable, List, Optional, Tuple

from delve.application.dtos import ActionResult, Rejected, Rejection
from delve.application.services.balance_tables import COMBAT_RESOLUTION_DELAY_S, DUNGEON_SIZE, MONSTER_COUNT
from delve.application.services.combat_service import CombatEncounter, CombatEngine, CombatPhase
from delve.application.services.dungeon_generator import DungeonGenerator
from delve.application.services.event_bus import EventBus
from delve.application.services.inventory_service import InventoryService
from delve.application.services.monster_factory import MonsterFactory
from delve.application.services.movement_service import MovementResolver
from delve.application.services.progression_service import ProgressionService
from delve.application.services.quest_service import QuestTracker, register_kill_tracking
from delve.application.services.seed_policy import dungeon_rng
from delve.domain.events import CharacterDefeated, CombatStarted, LevelUpAppliedEvent, MonsterSlain, QuestCompleted
from delve.domain.models.character import Character
from delve.domain.models.dungeon import DungeonGrid
from delve.domain.models.item import Item, ItemKind
from delve.domain.models.monster import Monster
from delve.domain.models.position import ORIGIN
from delve.domain.models.quest import Quest
from delve.domain.models.snapshot import GameSnapshot
from delve.domain.repositories import DEFAULT_SAVE_SLOT, SaveSlotRepository
from delve.domain.services.quest_catalog import initial_quests


logger = logging.getLogger(__name__)

DIRECTIONS = {
    "w": (0, -1),
    "s": (0, 1),
    "a": (-1, 0),
    "d": (1, 0),
}


@dataclass(frozen=True)
class SessionConfig:
    dungeon_size: int = DUNGEON_SIZE
    monster_count: int = MONSTER_COUNT
    save_slot: str = DEFAULT_SAVE_SLOT
    seed: Optional[int] = None
    track_kills: bool = False
    combat_resolution_delay_s: float = COMBAT_RESOLUTION_DELAY_S


class GameSession:
    """One player's run: a save slot, the live dungeon and the combat state.

    The services do the rule work on immutable snapshots; the session only
    swaps in the snapshots they return, persists ``{character, quests}`` and
    publishes domain events.
    """

    def __init__(
        self,
        repository: SaveSlotRepository,
        config: Optional[SessionConfig] = None,
        event_bus: Optional[EventBus] = None,
        clock: Callable[[], float] = time.monotonic,
        monster_factory: Optional[MonsterFactory] = None,
    ) -> None:
        self.repository = repository
        self.config = config or SessionConfig()
        self.event_bus = event_bus or EventBus()
        self.progression = ProgressionService()
        self.movement = MovementResolver()
        self.combat = CombatEngine(self.progression)
        self.inventory = InventoryService(self.progression)
        self.quest_tracker = QuestTracker(self.progression)
        self.generator = DungeonGenerator(monster_factory=monster_factory or MonsterFactory())
        self.encounter = CombatEncounter(clock=clock, resolution_delay_s=self.config.combat_resolution_delay_s)
        self.character: Optional[Character] = None
        self.quests: Tuple[Quest, ...] = initial_quests()
        self.grid: Optional[DungeonGrid] = None
        self.monsters: Tuple[Monster, ...] = ()
        self._entries = 0
        if self.config.track_kills:
            register_kill_tracking(self.event_bus, self)

    @property
    def has_character(self) -> bool:
        return self.character is not None

    @property
    def is_game_over(self) -> bool:
        return self.character is not None and self.character.is_defeated

    def load(self) -> bool:
        snapshot = self.repository.load(self.config.save_slot)
        if snapshot is None:
            self.character = None
            self.quests = initial_quests()
            return False
        self.character = snapshot.character
        self.quests = snapshot.quests or initial_quests()
        self.encounter.reset()
        if self.character.is_defeated:
            self.encounter.mark_defeated()
        logger.info("Loaded save", extra={"slot": self.config.save_slot, "character_id": self.character.id})
        return True

    def start_new_game(self, name: str, character_class: str) -> ActionResult:
        created = self.progression.create_character(name, character_class)
        if isinstance(created, Rejected):
            return ActionResult(messages=[created.message], rejection=created.reason)
        self.repository.delete(self.config.save_slot)
        self.character = None
        self.quests = initial_quests()
        self.encounter.reset()
        self._commit(created)
        self.enter_dungeon()
        return ActionResult(messages=[f"{created.name} the {created.character_class.value} descends."])

    def abandon(self) -> None:
        self.repository.delete(self.config.save_slot)
        self.character = None
        self.quests = initial_quests()
        self.grid = None
        self.monsters = ()
        self.encounter.reset()

    def enter_dungeon(self) -> ActionResult:
        """Generate a fresh dungeon and put the character on the origin."""
        if self.character is None:
            return ActionResult(messages=["Create a character first."], rejection=Rejection.NO_CHARACTER)
        phase = self.encounter.phase
        if phase == CombatPhase.DEFEATED:
            return ActionResult(messages=["You have fallen."], rejection=Rejection.CHARACTER_DEFEATED, game_over=True)
        if phase == CombatPhase.RESOLVING:
            return ActionResult(messages=["The fight is still settling."], rejection=Rejection.COMBAT_RESOLVING)
        if phase == CombatPhase.IN_COMBAT:
            return ActionResult(messages=["There is no escape from this fight."], rejection=Rejection.IN_COMBAT)
        rng = dungeon_rng(self.config.seed, entry=self._entries, player_level=self.character.level)
        self._entries += 1
        layout = self.generator.generate(
            self.config.dungeon_size,
            self.character.level,
            self.config.monster_count,
            rng=rng,
        )
        self.grid = layout.grid
        self.monsters = layout.monsters
        if self.character.position != ORIGIN:
            self._commit(replace(self.character, position=ORIGIN))
        return ActionResult(messages=[f"A new dungeon opens before you ({len(self.monsters)} monsters lurk)."])

    def move(self, dx: int, dy: int) -> ActionResult:
        if self.character is None or self.grid is None:
            return ActionResult(messages=["There is nowhere to go."], rejection=Rejection.NO_CHARACTER)
        result = self.movement.move(
            self.character,
            dx,
            dy,
            self.grid,
            self.monsters,
            in_combat=self.encounter.blocks_movement,
        )
        if result.rejection is not None:
            return ActionResult(rejection=result.rejection, game_over=self.is_game_over)
        if result.combat_started is not None:
            monster = result.combat_started
            opening = self.combat.opening_line(monster)
            self.encounter.engage(monster, opening)
            self.event_bus.publish(
                CombatStarted(
                    character_id=self.character.id,
                    monster_id=monster.id,
                    monster_name=monster.name,
                    monster_level=monster.level,
                )
            )
            return ActionResult(messages=[opening])
        self.grid = result.grid
        self._commit(result.character)
        return ActionResult()

    def step(self, direction: str) -> ActionResult:
        delta = DIRECTIONS.get(str(direction or "").strip().lower())
        if delta is None:
            return ActionResult(messages=[f"Unknown direction: {direction}"], rejection=Rejection.UNKNOWN_COMMAND)
        return self.move(*delta)

    def attack(self) -> ActionResult:
        if self.character is None:
            return ActionResult(rejection=Rejection.NO_CHARACTER)
        phase = self.encounter.phase
        if phase == CombatPhase.RESOLVING:
            return ActionResult(messages=["The fight is over."], rejection=Rejection.COMBAT_RESOLVING)
        if phase == CombatPhase.DEFEATED:
            return ActionResult(messages=["You have fallen."], rejection=Rejection.CHARACTER_DEFEATED, game_over=True)
        if not self.encounter.accepts_attack:
            return ActionResult(messages=["There is nothing to attack."], rejection=Rejection.NOT_IN_COMBAT)

        before = self.character
        result = self.combat.attack(before, self.encounter.monster)
        if result.rejection is not None:
            return ActionResult(rejection=result.rejection, game_over=self.is_game_over)

        self.encounter.record(result)
        self.monsters = tuple(result.monster if row.id == result.monster.id else row for row in self.monsters)
        events: List[object] = []
        if not result.monster.is_alive:
            events.append(
                MonsterSlain(
                    monster_id=result.monster.id,
                    monster_name=result.monster.name,
                    by_character_id=before.id,
                    experience=result.monster.experience,
                    gold=result.monster.gold_drop,
                )
            )
        if result.leveled_up:
            events.append(self._level_up_event(before, result.character))
        if result.character.is_defeated:
            events.append(CharacterDefeated(character_id=before.id, killed_by=result.monster.name))
        self._commit(result.character)
        self.event_bus.publish_all(events)
        return ActionResult(messages=list(result.log), game_over=self.is_game_over)

    def equip(self, item: Item) -> ActionResult:
        if self.character is None:
            return ActionResult(rejection=Rejection.NO_CHARACTER)
        updated = self.inventory.equip(self.character, item)
        if updated is self.character:
            return ActionResult(messages=[f"{item.name} cannot be equipped."], rejection=Rejection.NOT_EQUIPPABLE)
        self._commit(updated)
        verb = "Used" if item.kind == ItemKind.POTION else "Equipped"
        return ActionResult(messages=[f"{verb} {item.name}."])

    def consume(self, item_id: str) -> ActionResult:
        if self.character is None:
            return ActionResult(rejection=Rejection.NO_CHARACTER)
        updated = self.inventory.consume(self.character, item_id)
        if updated is self.character:
            return ActionResult(messages=["Nothing happens."], rejection=Rejection.UNKNOWN_POTION)
        self._commit(updated)
        return ActionResult(messages=["You feel restored."])

    def sell(self, item: Item) -> ActionResult:
        if self.character is None:
            return ActionResult(rejection=Rejection.NO_CHARACTER)
        outcome = self.inventory.sell(self.character, item)
        if isinstance(outcome, Rejected):
            return ActionResult(messages=[outcome.message], rejection=outcome.reason)
        self._commit(outcome)
        return ActionResult(messages=[f"Sold {item.name} for {item.value} gold."])

    def advance_quest(self, quest_id: str, amount: int = 1) -> None:
        if self.character is None:
            return
        self.quests = self.quest_tracker.advance_objective(self.quests, quest_id, amount)
        self._commit(self.character)

    def turn_in(self, quest_id: str) -> ActionResult:
        if self.character is None:
            return ActionResult(rejection=Rejection.NO_CHARACTER)
        before = self.character
        outcome = self.quest_tracker.turn_in(self.quests, before, quest_id)
        if isinstance(outcome, Rejected):
            return ActionResult(messages=[outcome.message], rejection=outcome.reason)
        self.quests = outcome.quests
        self._commit(outcome.character)
        messages = ["Quest rewards claimed."]
        if outcome.leveled_up:
            self.event_bus.publish(self._level_up_event(before, outcome.character))
            messages.append(f"Level up! You are now level {outcome.character.level}!")
        return ActionResult(messages=messages)

    @staticmethod
    def _level_up_event(before: Character, after: Character) -> LevelUpAppliedEvent:
        return LevelUpAppliedEvent(
            character_id=after.id,
            from_level=before.level,
            to_level=after.level,
            hp_gain=after.combat.max_health - before.combat.max_health,
        )

    def _commit(self, character: Character) -> None:
        """Adopt a new character snapshot, refresh quests and persist."""
        previous_quests = self.quests
        self.character = character
        self.quests = self.quest_tracker.recompute(self.quests, character)
        self.repository.save(GameSnapshot(character=character, quests=self.quests), self.config.save_slot)
        for quest in self.quest_tracker.newly_completed(previous_quests, self.quests):
            self.event_bus.publish(QuestCompleted(quest_id=quest.id, character_id=character.id))
