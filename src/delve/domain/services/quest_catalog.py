from __future__ import annotations

from typing import Tuple

from delve.domain.models.quest import ObjectiveBinding, Quest, QuestKind, QuestObjective, QuestRewards
from delve.domain.services.item_catalog import DEFAULT_ITEM_CATALOG


CLEANSE_QUEST_ID = "quest_1"
GATHER_STRENGTH_QUEST_ID = "quest_2"


def initial_quests() -> Tuple[Quest, ...]:
    return (
        Quest(
            id=CLEANSE_QUEST_ID,
            title="Cleanse the Dungeon",
            description="Destroy 5 monsters in the dungeon.",
            kind=QuestKind.KILL,
            objectives=(QuestObjective(description="Slay monsters", target=5),),
            rewards=QuestRewards(experience=100, gold=50),
        ),
        Quest(
            id=GATHER_STRENGTH_QUEST_ID,
            title="Gathering Strength",
            description="Reach level 3.",
            kind=QuestKind.EXPLORE,
            objectives=(
                QuestObjective(
                    description="Reach level 3",
                    target=3,
                    current=1,
                    binding=ObjectiveBinding.CHARACTER_LEVEL,
                ),
            ),
            rewards=QuestRewards(
                experience=200,
                gold=100,
                items=(DEFAULT_ITEM_CATALOG.require("staff_1"),),
            ),
        ),
    )
