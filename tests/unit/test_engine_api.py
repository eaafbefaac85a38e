import random
import sys
from pathlib import Path
import unittest
from dataclasses import replace

sys.path.insert(0, str(Path(__file__).resolve().parents[2] / "src"))

from delve.application import dtos, engine
from delve.application.contract import (
    COMMAND_INTENTS,
    CONTRACT_DTO_TYPES,
    CONTRACT_VERSION,
    QUERY_INTENTS,
    SESSION_INTENTS,
)
from delve.application.dtos import CombatOutcome
from delve.application.services.game_session import GameSession
from delve.application.services.monster_factory import MonsterFactory
from delve.application.services.progression_service import ProgressionService
from delve.domain.models.position import ORIGIN
from delve.domain.services.monster_catalog import MONSTER_TEMPLATES
from delve.domain.services.quest_catalog import initial_quests


class ApplicationContractTests(unittest.TestCase):
    def test_contract_version_uses_semver(self) -> None:
        self.assertRegex(CONTRACT_VERSION, r"^\d+\.\d+\.\d+$")

    def test_engine_implements_declared_intents(self) -> None:
        for name in COMMAND_INTENTS + QUERY_INTENTS:
            self.assertTrue(callable(getattr(engine, name, None)), f"Missing engine intent: {name}")

    def test_session_implements_declared_intents(self) -> None:
        for name in SESSION_INTENTS:
            self.assertTrue(hasattr(GameSession, name), f"Missing session intent: {name}")

    def test_declared_dto_types_exist(self) -> None:
        for dto_name in CONTRACT_DTO_TYPES:
            self.assertTrue(hasattr(dtos, dto_name), f"Missing contract DTO: {dto_name}")


class EngineApiTests(unittest.TestCase):
    def setUp(self) -> None:
        self.hero = ProgressionService().create_character("Ayla", "warrior", character_id="hero-1")

    def test_generate_dungeon_is_reproducible(self) -> None:
        first_grid, first_monsters = engine.generate_dungeon(8, 1, 5, rng=random.Random(3))
        second_grid, second_monsters = engine.generate_dungeon(8, 1, 5, rng=random.Random(3))

        self.assertEqual(first_grid, second_grid)
        self.assertEqual(
            [replace(monster, id="") for monster in first_monsters],
            [replace(monster, id="") for monster in second_monsters],
        )
        self.assertEqual(8, first_grid.size)
        self.assertEqual(5, len(first_monsters))
        self.assertTrue(first_grid.tile_at(ORIGIN).revealed)

    def test_monster_ids_stay_unique_across_dungeons(self) -> None:
        ids = []
        for seed in range(4):
            _grid, monsters = engine.generate_dungeon(6, 1, 5, rng=random.Random(seed))
            ids.extend(monster.id for monster in monsters)

        self.assertEqual(20, len(ids))
        self.assertEqual(len(ids), len(set(ids)))

    def test_fight_a_skeleton_until_it_falls(self) -> None:
        monster = MonsterFactory().scale(MONSTER_TEMPLATES["skeleton"], 1)
        hero = self.hero
        result = None
        for _ in range(10):
            result = engine.attack(hero, monster)
            hero, monster = result.character, result.monster
            if result.outcome != CombatOutcome.ONGOING:
                break

        self.assertEqual(CombatOutcome.VICTORY, result.outcome)
        self.assertEqual(monster.experience, hero.experience)
        self.assertEqual(engine.attack(hero, monster).rejection, dtos.Rejection.MONSTER_DEFEATED)

    def test_functional_calls_do_not_mutate_inputs(self) -> None:
        grid, monsters = engine.generate_dungeon(4, 1, 0, rng=random.Random(1))
        quests = initial_quests()

        engine.move(self.hero, 0, 0, grid, monsters)
        engine.equip(self.hero, self.hero.inventory[0])
        engine.sell(self.hero, self.hero.inventory[0])
        engine.recompute_quests(quests, self.hero)

        self.assertIsNone(self.hero.equipped.weapon)
        self.assertEqual(100, self.hero.gold)
        self.assertEqual(1, len(self.hero.inventory))
        self.assertEqual(initial_quests(), quests)

    def test_turn_in_through_engine(self) -> None:
        result = engine.turn_in(initial_quests(), self.hero, "quest_1")

        self.assertEqual(dtos.Rejection.QUEST_INCOMPLETE, result.reason)


if __name__ == "__main__":
    unittest.main()
