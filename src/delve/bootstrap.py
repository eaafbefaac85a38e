import logging
import os
from typing import Callable, Optional

from delve.application.services.balance_tables import COMBAT_RESOLUTION_DELAY_S, DUNGEON_SIZE, MONSTER_COUNT
from delve.application.services.event_bus import EventBus
from delve.application.services.game_session import GameSession, SessionConfig
from delve.domain.repositories import DEFAULT_SAVE_SLOT, SaveSlotRepository
from delve.infrastructure.inmemory.inmemory_save_slot_repo import InMemorySaveSlotRepository


logger = logging.getLogger(__name__)

_TRUTHY = {"1", "true", "yes", "on"}


def _env_int(name: str, default: Optional[int], *, minimum: int = 0) -> Optional[int]:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("Ignoring non-integer setting", extra={"setting": name, "value": raw})
        return default
    if value < minimum:
        logger.warning("Ignoring out-of-range setting", extra={"setting": name, "value": raw})
        return default
    return value


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return max(0.0, float(raw))
    except ValueError:
        logger.warning("Ignoring non-numeric setting", extra={"setting": name, "value": raw})
        return default


def load_session_config() -> SessionConfig:
    return SessionConfig(
        dungeon_size=_env_int("DELVE_DUNGEON_SIZE", DUNGEON_SIZE, minimum=1),
        monster_count=_env_int("DELVE_MONSTER_COUNT", MONSTER_COUNT),
        save_slot=(os.getenv("DELVE_SAVE_SLOT") or DEFAULT_SAVE_SLOT).strip() or DEFAULT_SAVE_SLOT,
        seed=_env_int("DELVE_SEED", None),
        track_kills=os.getenv("DELVE_TRACK_KILLS", "0").strip().lower() in _TRUTHY,
        combat_resolution_delay_s=_env_float("DELVE_COMBAT_DELAY_S", COMBAT_RESOLUTION_DELAY_S),
    )


def _build_sql_repository(database_url: str) -> SaveSlotRepository:
    from delve.infrastructure.db.sql.connection import create_session_factory
    from delve.infrastructure.db.sql.save_slot_repo import SqlSaveSlotRepository

    repository = SqlSaveSlotRepository(create_session_factory(database_url))
    # Probe early so a dead database falls back before the game starts.
    try:
        repository.load("__probe__")
    except Exception as exc:
        raise RuntimeError(f"Save database probe failed: {exc}") from exc
    return repository


def create_repository() -> SaveSlotRepository:
    database_url = os.getenv("DELVE_DATABASE_URL")
    if database_url:
        try:
            return _build_sql_repository(database_url)
        except Exception as exc:
            logger.warning("Save database unavailable, falling back to in-memory", extra={"reason": str(exc)})
    return InMemorySaveSlotRepository()


def create_game_session(
    repository: Optional[SaveSlotRepository] = None,
    config: Optional[SessionConfig] = None,
    clock: Optional[Callable[[], float]] = None,
) -> GameSession:
    kwargs = {"clock": clock} if clock is not None else {}
    session = GameSession(
        repository or create_repository(),
        config=config or load_session_config(),
        event_bus=EventBus(),
        **kwargs,
    )
    session.load()
    return session
