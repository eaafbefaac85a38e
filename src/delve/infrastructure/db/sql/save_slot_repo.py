from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import text
from sqlalchemy.orm import sessionmaker

from delve.application.mappers.snapshot_mapper import snapshot_from_payload, snapshot_to_payload
from delve.domain.models.snapshot import GameSnapshot
from delve.domain.repositories import DEFAULT_SAVE_SLOT, SaveSlotRepository
from .connection import create_session_factory


logger = logging.getLogger(__name__)

_CREATE_TABLE = """
    CREATE TABLE IF NOT EXISTS save_slot (
        slot_key VARCHAR(64) NOT NULL PRIMARY KEY,
        payload_json TEXT NOT NULL,
        updated_at VARCHAR(40) NOT NULL
    )
"""

_UPSERT_MYSQL = """
    INSERT INTO save_slot (slot_key, payload_json, updated_at)
    VALUES (:slot_key, :payload_json, :updated_at)
    ON DUPLICATE KEY UPDATE
        payload_json = VALUES(payload_json),
        updated_at = VALUES(updated_at)
"""

_UPSERT_DEFAULT = """
    INSERT INTO save_slot (slot_key, payload_json, updated_at)
    VALUES (:slot_key, :payload_json, :updated_at)
    ON CONFLICT (slot_key) DO UPDATE SET
        payload_json = excluded.payload_json,
        updated_at = excluded.updated_at
"""


class SqlSaveSlotRepository(SaveSlotRepository):
    def __init__(self, session_factory: Optional[sessionmaker] = None) -> None:
        self._session_factory = session_factory or create_session_factory()
        self._schema_ready = False

    def _ensure_schema(self, session) -> None:
        if self._schema_ready:
            return
        session.execute(text(_CREATE_TABLE))
        self._schema_ready = True

    def load(self, slot: str = DEFAULT_SAVE_SLOT) -> Optional[GameSnapshot]:
        with self._session_factory.begin() as session:
            self._ensure_schema(session)
            row = session.execute(
                text("SELECT payload_json FROM save_slot WHERE slot_key = :slot_key"),
                {"slot_key": str(slot)},
            ).first()
        if row is None:
            return None
        try:
            return snapshot_from_payload(json.loads(row.payload_json))
        except (KeyError, TypeError, ValueError):
            logger.exception("Failed to load save", extra={"slot": slot})
            return None

    def save(self, snapshot: GameSnapshot, slot: str = DEFAULT_SAVE_SLOT) -> None:
        payload = json.dumps(snapshot_to_payload(snapshot), sort_keys=True)
        with self._session_factory.begin() as session:
            self._ensure_schema(session)
            dialect = session.get_bind().dialect.name
            statement = _UPSERT_MYSQL if dialect == "mysql" else _UPSERT_DEFAULT
            session.execute(
                text(statement),
                {
                    "slot_key": str(slot),
                    "payload_json": payload,
                    "updated_at": datetime.now(timezone.utc).isoformat(),
                },
            )

    def delete(self, slot: str = DEFAULT_SAVE_SLOT) -> None:
        with self._session_factory.begin() as session:
            self._ensure_schema(session)
            session.execute(text("DELETE FROM save_slot WHERE slot_key = :slot_key"), {"slot_key": str(slot)})
