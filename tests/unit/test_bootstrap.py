import os
import sys
from pathlib import Path
import tempfile
import unittest
from unittest import mock

sys.path.insert(0, str(Path(__file__).resolve().parents[2] / "src"))

from delve import bootstrap
from delve.application.services.game_session import SessionConfig
from delve.domain.repositories import DEFAULT_SAVE_SLOT
from delve.infrastructure.db.sql.save_slot_repo import SqlSaveSlotRepository
from delve.infrastructure.inmemory.inmemory_save_slot_repo import InMemorySaveSlotRepository


class LoadSessionConfigTests(unittest.TestCase):
    def test_defaults_without_environment(self) -> None:
        with mock.patch.dict(os.environ, {}, clear=True):
            config = bootstrap.load_session_config()

        self.assertEqual(SessionConfig(), config)
        self.assertEqual(DEFAULT_SAVE_SLOT, config.save_slot)
        self.assertIsNone(config.seed)
        self.assertFalse(config.track_kills)

    def test_environment_overrides(self) -> None:
        env = {
            "DELVE_DUNGEON_SIZE": "10",
            "DELVE_MONSTER_COUNT": "3",
            "DELVE_SAVE_SLOT": "slot-2",
            "DELVE_SEED": "42",
            "DELVE_TRACK_KILLS": "yes",
            "DELVE_COMBAT_DELAY_S": "0.5",
        }
        with mock.patch.dict(os.environ, env, clear=True):
            config = bootstrap.load_session_config()

        self.assertEqual(
            SessionConfig(
                dungeon_size=10,
                monster_count=3,
                save_slot="slot-2",
                seed=42,
                track_kills=True,
                combat_resolution_delay_s=0.5,
            ),
            config,
        )

    def test_bad_numbers_fall_back_with_warning(self) -> None:
        with mock.patch.dict(os.environ, {"DELVE_DUNGEON_SIZE": "huge", "DELVE_MONSTER_COUNT": "-2"}, clear=True):
            with self.assertLogs("delve.bootstrap", level="WARNING") as captured:
                config = bootstrap.load_session_config()

        self.assertEqual(8, config.dungeon_size)
        self.assertEqual(5, config.monster_count)
        self.assertEqual(2, len(captured.records))


class CreateRepositoryTests(unittest.TestCase):
    def test_without_database_url_uses_memory(self) -> None:
        with mock.patch.dict(os.environ, {}, clear=True):
            repository = bootstrap.create_repository()

        self.assertIsInstance(repository, InMemorySaveSlotRepository)

    def test_sqlite_url_builds_sql_repository(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            url = f"sqlite:///{Path(tmp) / 'delve.db'}"
            with mock.patch.dict(os.environ, {"DELVE_DATABASE_URL": url}, clear=True):
                repository = bootstrap.create_repository()
            self.assertIsInstance(repository, SqlSaveSlotRepository)
            repository._session_factory.kw["bind"].dispose()

    def test_unusable_database_falls_back_to_memory(self) -> None:
        with mock.patch.dict(os.environ, {"DELVE_DATABASE_URL": "nosuchdialect://nowhere"}, clear=True):
            with self.assertLogs("delve.bootstrap", level="WARNING"):
                repository = bootstrap.create_repository()

        self.assertIsInstance(repository, InMemorySaveSlotRepository)


class CreateGameSessionTests(unittest.TestCase):
    def test_session_loads_existing_save(self) -> None:
        repository = InMemorySaveSlotRepository()
        first = bootstrap.create_game_session(repository=repository, config=SessionConfig(seed=1))
        first.start_new_game("Ayla", "mage")

        second = bootstrap.create_game_session(repository=repository, config=SessionConfig(seed=1))

        self.assertTrue(second.has_character)
        self.assertEqual(first.character, second.character)


if __name__ == "__main__":
    unittest.main()
