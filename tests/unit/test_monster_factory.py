import math
import random
import sys
from pathlib import Path
import unittest

sys.path.insert(0, str(Path(__file__).resolve().parents[2] / "src"))

from delve.application.services.monster_factory import MonsterFactory
from delve.domain.models.item import ItemKind
from delve.domain.models.monster import level_multiplier
from delve.domain.models.position import Position
from delve.domain.services.item_catalog import DEFAULT_ITEM_CATALOG
from delve.domain.services.monster_catalog import MONSTER_TEMPLATES


class ScriptedRandom:
    """Replays fixed ``random()`` values and picks ``choice`` indices in order."""

    def __init__(self, values, picks=()):
        self._values = list(values)
        self._picks = list(picks)

    def random(self):
        return self._values.pop(0)

    def choice(self, seq):
        index = self._picks.pop(0) if self._picks else 0
        return list(seq)[index]


class MonsterFactoryTests(unittest.TestCase):
    def test_scaled_stats_follow_level_multiplier(self) -> None:
        factory = MonsterFactory(rng=random.Random(1))
        for template in MONSTER_TEMPLATES.values():
            for level in range(1, 8):
                monster = factory.scale(template, level)
                multiplier = level_multiplier(level)
                self.assertEqual(math.floor(template.base_health * multiplier), monster.max_health)
                self.assertEqual(math.floor(template.base_damage * multiplier), monster.damage)
                self.assertEqual(math.floor(template.base_defense * multiplier), monster.defense)
                self.assertEqual(math.floor(template.experience * multiplier), monster.experience)
                self.assertEqual(math.floor(template.gold_drop * multiplier), monster.gold_drop)
                self.assertEqual(monster.max_health, monster.health)
                self.assertTrue(monster.is_alive)
                self.assertEqual(level, monster.level)

    def test_level_one_monster_uses_base_values(self) -> None:
        factory = MonsterFactory()
        zombie = factory.scale(MONSTER_TEMPLATES["zombie"], 1)

        self.assertEqual((50, 8, 3, 25, 15), (zombie.max_health, zombie.damage, zombie.defense, zombie.experience, zombie.gold_drop))

    def test_level_two_dragon_is_scaled_and_floored(self) -> None:
        factory = MonsterFactory()
        dragon = factory.scale(MONSTER_TEMPLATES["dragon"], 2)

        self.assertEqual(260, dragon.max_health)
        self.assertEqual(32, dragon.damage)
        self.assertEqual(19, dragon.defense)

    def test_low_rolls_drop_potion_and_equipment(self) -> None:
        factory = MonsterFactory(rng=ScriptedRandom([0.05, 0.01], picks=[0, 1, 2]))

        monster = factory.create(2)

        self.assertEqual(2, len(monster.loot_table))
        self.assertEqual(ItemKind.POTION, monster.loot_table[0].kind)
        self.assertEqual(DEFAULT_ITEM_CATALOG.equipment[2].id, monster.loot_table[1].id)

    def test_high_rolls_drop_nothing(self) -> None:
        factory = MonsterFactory(rng=ScriptedRandom([0.95, 0.95]))

        monster = factory.create(1)

        self.assertEqual((), monster.loot_table)

    def test_drop_thresholds_are_thirty_and_ten_percent(self) -> None:
        just_inside = MonsterFactory(rng=ScriptedRandom([0.299, 0.099]))
        just_outside = MonsterFactory(rng=ScriptedRandom([0.3, 0.1]))

        self.assertEqual(2, len(just_inside.roll_loot()))
        self.assertEqual(0, len(just_outside.roll_loot()))

    def test_ids_are_unique_per_spawn(self) -> None:
        factory = MonsterFactory(rng=random.Random(7))

        ids = {factory.create(1).id for _ in range(50)}

        self.assertEqual(50, len(ids))

    def test_create_keeps_requested_position(self) -> None:
        factory = MonsterFactory(rng=random.Random(3))

        monster = factory.create(1, position=Position(4, 2))

        self.assertEqual(Position(4, 2), monster.position)

    def test_seeded_factories_produce_identical_monsters(self) -> None:
        first = MonsterFactory(rng=random.Random(99))
        second = MonsterFactory(rng=random.Random(99))

        self.assertEqual([first.create(2) for _ in range(5)], [second.create(2) for _ in range(5)])

    def test_empty_template_table_is_refused(self) -> None:
        with self.assertRaises(ValueError):
            MonsterFactory(templates={})


if __name__ == "__main__":
    unittest.main()
