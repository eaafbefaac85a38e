from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Tuple

from delve.domain.models.item import Item


class QuestKind(str, Enum):
    KILL = "kill"
    COLLECT = "collect"
    EXPLORE = "explore"


class ObjectiveBinding(str, Enum):
    # Progress is pushed in by the caller.
    COUNTER = "counter"
    # Progress mirrors the character's level.
    CHARACTER_LEVEL = "character_level"


@dataclass(frozen=True)
class QuestObjective:
    description: str
    target: int
    current: int = 0
    completed: bool = False
    binding: ObjectiveBinding = ObjectiveBinding.COUNTER


@dataclass(frozen=True)
class QuestRewards:
    experience: int = 0
    gold: int = 0
    items: Tuple[Item, ...] = ()


@dataclass(frozen=True)
class Quest:
    id: str
    title: str
    description: str
    kind: QuestKind
    objectives: Tuple[QuestObjective, ...]
    rewards: QuestRewards = field(default_factory=QuestRewards)
    is_active: bool = True
    is_completed: bool = False
    rewards_claimed: bool = False

    def __post_init__(self) -> None:
        if not isinstance(self.objectives, tuple):
            object.__setattr__(self, "objectives", tuple(self.objectives))

    @property
    def is_tracking(self) -> bool:
        return self.is_active and not self.is_completed

    def with_objectives(self, objectives: Tuple[QuestObjective, ...]) -> "Quest":
        # Completion is one-way: a completed quest stays completed.
        done = self.is_completed or all(objective.completed for objective in objectives)
        return replace(self, objectives=tuple(objectives), is_completed=done)
