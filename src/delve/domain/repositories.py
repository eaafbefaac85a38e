from abc import ABC, abstractmethod
from typing import Optional

from delve.domain.models.snapshot import GameSnapshot


DEFAULT_SAVE_SLOT = "delve_save"


class SaveSlotRepository(ABC):
    """Key-value store for the persisted ``{character, quests}`` record."""

    @abstractmethod
    def load(self, slot: str = DEFAULT_SAVE_SLOT) -> Optional[GameSnapshot]:
        raise NotImplementedError

    @abstractmethod
    def save(self, snapshot: GameSnapshot, slot: str = DEFAULT_SAVE_SLOT) -> None:
        raise NotImplementedError

    @abstractmethod
    def delete(self, slot: str = DEFAULT_SAVE_SLOT) -> None:
        raise NotImplementedError

    def exists(self, slot: str = DEFAULT_SAVE_SLOT) -> bool:
        return self.load(slot) is not None
