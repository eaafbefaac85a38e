from __future__ import annotations

import json
import logging
from typing import Dict, Optional

from delve.application.mappers.snapshot_mapper import snapshot_from_payload, snapshot_to_payload
from delve.domain.models.snapshot import GameSnapshot
from delve.domain.repositories import DEFAULT_SAVE_SLOT, SaveSlotRepository


logger = logging.getLogger(__name__)


class InMemorySaveSlotRepository(SaveSlotRepository):
    """Keeps serialised payloads so loads never alias live objects."""

    def __init__(self, payloads: Optional[Dict[str, str]] = None) -> None:
        self._payloads: Dict[str, str] = dict(payloads or {})

    def load(self, slot: str = DEFAULT_SAVE_SLOT) -> Optional[GameSnapshot]:
        raw = self._payloads.get(str(slot))
        if raw is None:
            return None
        try:
            return snapshot_from_payload(json.loads(raw))
        except (KeyError, TypeError, ValueError):
            logger.exception("Failed to load save", extra={"slot": slot})
            return None

    def save(self, snapshot: GameSnapshot, slot: str = DEFAULT_SAVE_SLOT) -> None:
        self._payloads[str(slot)] = json.dumps(snapshot_to_payload(snapshot), sort_keys=True)

    def delete(self, slot: str = DEFAULT_SAVE_SLOT) -> None:
        self._payloads.pop(str(slot), None)

    def raw_payload(self, slot: str = DEFAULT_SAVE_SLOT) -> Optional[str]:
        return self._payloads.get(str(slot))
