from __future__ import annotations

import itertools
import math
import random
from collections.abc import Mapping
from typing import List, Optional, Tuple

from delve.application.services.balance_tables import EQUIPMENT_DROP_CHANCE, POTION_DROP_CHANCE
from delve.domain.models.item import Item
from delve.domain.models.monster import Monster, MonsterTemplate, level_multiplier
from delve.domain.models.position import ORIGIN, Position
from delve.domain.services.item_catalog import DEFAULT_ITEM_CATALOG, ItemCatalog
from delve.domain.services.monster_catalog import MONSTER_TEMPLATES


class MonsterFactory:
    """Builds level-scaled monsters from templates, rolling loot up front.

    Loot is fixed when the monster is created; killing it later only hands
    over whatever ``loot_table`` already holds.
    """

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        catalog: ItemCatalog = DEFAULT_ITEM_CATALOG,
        templates: Mapping[str, MonsterTemplate] = MONSTER_TEMPLATES,
    ) -> None:
        if not templates:
            raise ValueError("MonsterFactory needs at least one template")
        self.rng = rng or random.Random()
        self.catalog = catalog
        self.templates = dict(templates)
        self._sequence = itertools.count(1)

    def pick_template(self, rng: Optional[random.Random] = None) -> MonsterTemplate:
        rng = rng or self.rng
        return rng.choice(list(self.templates.values()))

    def roll_loot(self, rng: Optional[random.Random] = None) -> Tuple[Item, ...]:
        rng = rng or self.rng
        loot: List[Item] = []
        if self.catalog.potions and rng.random() < POTION_DROP_CHANCE:
            loot.append(rng.choice(list(self.catalog.potions)))
        equipment = self.catalog.equipment
        if equipment and rng.random() < EQUIPMENT_DROP_CHANCE:
            loot.append(rng.choice(list(equipment)))
        return tuple(loot)

    def scale(
        self,
        template: MonsterTemplate,
        level: int,
        *,
        position: Position = ORIGIN,
        loot: Tuple[Item, ...] = (),
    ) -> Monster:
        level = max(1, int(level))
        multiplier = level_multiplier(level)
        health = math.floor(template.base_health * multiplier)
        return Monster(
            id=f"{template.key}_{next(self._sequence)}",
            name=template.name,
            monster_type=template.monster_type,
            level=level,
            health=health,
            max_health=health,
            damage=math.floor(template.base_damage * multiplier),
            defense=math.floor(template.base_defense * multiplier),
            experience=math.floor(template.experience * multiplier),
            gold_drop=math.floor(template.gold_drop * multiplier),
            position=position,
            loot_table=tuple(loot),
        )

    def create(
        self,
        level: int,
        *,
        position: Position = ORIGIN,
        rng: Optional[random.Random] = None,
    ) -> Monster:
        rng = rng or self.rng
        template = self.pick_template(rng)
        loot = self.roll_loot(rng)
        return self.scale(template, level, position=position, loot=loot)
