import io
import sys
from pathlib import Path
import unittest

from rich.console import Console

sys.path.insert(0, str(Path(__file__).resolve().parents[2] / "src"))

from delve.application.services.game_session import SessionConfig
from delve.application.services.monster_factory import MonsterFactory
from delve.bootstrap import create_game_session
from delve.domain.models.dungeon import DungeonGrid, DungeonTile
from delve.domain.models.monster import Monster, MonsterType
from delve.domain.models.position import Position
from delve.domain.services.monster_catalog import MONSTER_TEMPLATES
from delve.infrastructure.inmemory.inmemory_save_slot_repo import InMemorySaveSlotRepository
from delve.presentation.game_loop import render_map, run_game_loop


def _scripted(*answers):
    queue = list(answers)
    return lambda _prompt="": queue.pop(0)


def _console():
    return Console(file=io.StringIO(), width=120, color_system=None)


class CliFlowTests(unittest.TestCase):
    def setUp(self) -> None:
        self.repository = InMemorySaveSlotRepository()
        self.session = create_game_session(
            repository=self.repository,
            config=SessionConfig(seed=3, combat_resolution_delay_s=0),
        )

    def _arena(self, monster):
        self.session.start_new_game("Ayla", "warrior")
        self.session.grid = DungeonGrid(
            rows=tuple(
                tuple(DungeonTile(x=x, y=y, revealed=(x, y) == (0, 0)) for x in range(3))
                for y in range(3)
            )
        )
        self.session.monsters = (monster,)

    def test_character_creation_and_quit_flow(self) -> None:
        console = _console()
        read = _scripted("Ayla", "1", "help", "inv", "equip 1", "quests", "dance", "quit")

        run_game_loop(self.session, console=console, read=read)

        transcript = console.file.getvalue()
        self.assertIn("Ayla the warrior descends.", transcript)
        self.assertIn("Equipped Rusty Sword.", transcript)
        self.assertIn("Cleanse the Dungeon", transcript)
        self.assertIn("Unknown command", transcript)
        self.assertIn("Goodbye.", transcript)
        self.assertEqual("Ayla", self.repository.load().character.name)

    def test_quit_during_creation(self) -> None:
        console = _console()

        run_game_loop(self.session, console=console, read=_scripted("Ayla", "quit"))

        self.assertIn("Goodbye.", console.file.getvalue())
        self.assertFalse(self.session.has_character)

    def test_creation_retries_after_invalid_class(self) -> None:
        console = _console()

        run_game_loop(self.session, console=console, read=_scripted("Ayla", "bard", "Ayla", "mage", "quit"))

        self.assertIn("Unknown class: bard", console.file.getvalue())
        self.assertEqual("mage", self.session.character.character_class.value)

    def test_fight_and_walk_over_the_remains(self) -> None:
        self._arena(MonsterFactory().scale(MONSTER_TEMPLATES["skeleton"], 1, position=Position(1, 0)))
        console = _console()

        run_game_loop(self.session, console=console, read=_scripted("d", "attack", "attack", "f", "d", "quit"))

        transcript = console.file.getvalue()
        self.assertIn("You encounter Skeleton! (Level 1)", transcript)
        self.assertIn("Skeleton is defeated!", transcript)
        self.assertEqual(Position(1, 0), self.session.character.position)
        self.assertEqual(".@.", render_map(self.session)[0])

    def test_defeat_shows_game_over(self) -> None:
        ogre = Monster(
            id="ogre_1",
            name="Ogre",
            monster_type=MonsterType.BEAST,
            level=1,
            health=500,
            max_health=500,
            damage=500,
            defense=0,
            experience=10,
            gold_drop=5,
            position=Position(1, 0),
        )
        self._arena(ogre)
        console = _console()

        run_game_loop(self.session, console=console, read=_scripted("d", "attack", "attack", "quit"))

        transcript = console.file.getvalue()
        self.assertIn("You have fallen! Game over.", transcript)
        self.assertTrue(self.repository.load().character.is_defeated)


if __name__ == "__main__":
    unittest.main()
