from __future__ import annotations

import logging
from dataclasses import replace
from typing import TYPE_CHECKING, List, Optional, Sequence, Tuple

from delve.application.dtos import Rejected, Rejection, TurnInResult
from delve.application.services.event_bus import EventBus
from delve.application.services.progression_service import ProgressionService
from delve.domain.events import MonsterSlain
from delve.domain.models.character import Character
from delve.domain.models.quest import ObjectiveBinding, Quest, QuestKind, QuestObjective

if TYPE_CHECKING:
    from delve.application.services.game_session import GameSession


logger = logging.getLogger(__name__)


def _recompute_objective(objective: QuestObjective, character: Character) -> QuestObjective:
    if objective.binding == ObjectiveBinding.CHARACTER_LEVEL:
        current = character.level
    else:
        current = objective.current
    return replace(objective, current=current, completed=current >= objective.target)


class QuestTracker:
    def __init__(self, progression: Optional[ProgressionService] = None) -> None:
        self.progression = progression or ProgressionService()

    def recompute(self, quests: Sequence[Quest], character: Character) -> Tuple[Quest, ...]:
        """Refresh objective progress from the character.

        Completed or inactive quests are left exactly as they are. When no
        quest changes, the input tuple itself is returned.
        """
        original = tuple(quests)
        updated = tuple(
            quest.with_objectives(tuple(_recompute_objective(obj, character) for obj in quest.objectives))
            if quest.is_tracking
            else quest
            for quest in original
        )
        return original if updated == original else updated

    @staticmethod
    def advance_objective(quests: Sequence[Quest], quest_id: str, amount: int = 1) -> Tuple[Quest, ...]:
        """Bump counter objectives of one tracking quest; completion is settled by ``recompute``."""
        updated: List[Quest] = []
        for quest in quests:
            if quest.id != quest_id or not quest.is_tracking:
                updated.append(quest)
                continue
            objectives = tuple(
                replace(objective, current=objective.current + int(amount))
                if objective.binding == ObjectiveBinding.COUNTER
                else objective
                for objective in quest.objectives
            )
            updated.append(replace(quest, objectives=objectives))
        return tuple(updated)

    @staticmethod
    def newly_completed(before: Sequence[Quest], after: Sequence[Quest]) -> List[Quest]:
        finished_before = {quest.id for quest in before if quest.is_completed}
        return [quest for quest in after if quest.is_completed and quest.id not in finished_before]

    def turn_in(
        self,
        quests: Sequence[Quest],
        character: Character,
        quest_id: str,
    ) -> "TurnInResult | Rejected":
        quest = next((row for row in quests if row.id == quest_id), None)
        if quest is None:
            return Rejected(Rejection.UNKNOWN_QUEST, f"No quest named {quest_id}.")
        if not quest.is_completed:
            return Rejected(Rejection.QUEST_INCOMPLETE, f"{quest.title} is not finished yet.")
        if quest.rewards_claimed:
            return Rejected(Rejection.REWARDS_CLAIMED, f"{quest.title} has already been rewarded.")

        rewards = quest.rewards
        rewarded, leveled_up = self.progression.gain_experience(character, rewards.experience)
        rewarded = replace(
            rewarded,
            gold=rewarded.gold + rewards.gold,
            inventory=rewarded.inventory + tuple(rewards.items),
        )
        claimed = tuple(replace(row, rewards_claimed=True) if row.id == quest_id else row for row in quests)
        return TurnInResult(character=rewarded, quests=claimed, leveled_up=leveled_up)


def register_kill_tracking(event_bus: EventBus, session: "GameSession") -> None:
    """Count every slain monster toward kill quests."""

    def _on_monster_slain(event: MonsterSlain) -> None:
        kill_quests = [quest.id for quest in session.quests if quest.kind == QuestKind.KILL and quest.is_tracking]
        if not kill_quests:
            return
        logger.debug("Advancing kill quests", extra={"monster_id": event.monster_id, "quests": kill_quests})
        for quest_id in kill_quests:
            session.advance_quest(quest_id)

    event_bus.subscribe(MonsterSlain, _on_monster_slain, priority=20)
