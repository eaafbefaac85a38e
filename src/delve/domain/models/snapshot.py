from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from delve.domain.models.character import Character
from delve.domain.models.quest import Quest


@dataclass(frozen=True)
class GameSnapshot:
    character: Character
    quests: Tuple[Quest, ...] = ()
