from __future__ import annotations

from collections.abc import Mapping

from delve.domain.models.monster import MonsterTemplate, MonsterType


MONSTER_TEMPLATES: Mapping[str, MonsterTemplate] = {
    "skeleton": MonsterTemplate("skeleton", "Skeleton", MonsterType.UNDEAD, 30, 5, 2, 15, 10),
    "zombie": MonsterTemplate("zombie", "Zombie", MonsterType.UNDEAD, 50, 8, 3, 25, 15),
    "demon": MonsterTemplate("demon", "Demon", MonsterType.DEMON, 80, 12, 5, 50, 30),
    "dragon": MonsterTemplate("dragon", "Dragon", MonsterType.BEAST, 200, 25, 15, 150, 100),
    "imp": MonsterTemplate("imp", "Imp", MonsterType.DEMON, 40, 10, 2, 20, 12),
}
