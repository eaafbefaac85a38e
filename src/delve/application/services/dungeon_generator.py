from __future__ import annotations

import logging
import random
from dataclasses import replace
from typing import List, Optional

from delve.application.dtos import DungeonLayout
from delve.application.services.balance_tables import DUNGEON_SIZE, MONSTER_COUNT, WALL_CHANCE
from delve.application.services.monster_factory import MonsterFactory
from delve.domain.models.dungeon import DungeonGrid, DungeonTile, TileType
from delve.domain.models.monster import Monster
from delve.domain.models.position import ORIGIN, Position


logger = logging.getLogger(__name__)


class DungeonGenerator:
    def __init__(
        self,
        monster_factory: Optional[MonsterFactory] = None,
        rng: Optional[random.Random] = None,
        wall_chance: float = WALL_CHANCE,
    ) -> None:
        self.rng = rng or random.Random()
        self.monster_factory = monster_factory or MonsterFactory(rng=self.rng)
        self.wall_chance = float(wall_chance)

    def build_grid(self, size: int = DUNGEON_SIZE, rng: Optional[random.Random] = None) -> DungeonGrid:
        rng = rng or self.rng
        size = max(1, int(size))
        rows = []
        for y in range(size):
            row = []
            for x in range(size):
                is_origin = x == ORIGIN.x and y == ORIGIN.y
                # One draw per cell, origin included.
                is_wall = rng.random() < self.wall_chance and not is_origin
                row.append(
                    DungeonTile(
                        x=x,
                        y=y,
                        tile_type=TileType.WALL if is_wall else TileType.FLOOR,
                        revealed=is_origin,
                    )
                )
            rows.append(tuple(row))
        return DungeonGrid(rows=tuple(rows))

    def place_monsters(
        self,
        grid: DungeonGrid,
        player_level: int,
        monster_count: int = MONSTER_COUNT,
        *,
        unique_positions: bool = False,
        rng: Optional[random.Random] = None,
    ) -> List[Monster]:
        """Spawn monsters on random walkable cells other than the origin.

        Two monsters may share a cell unless ``unique_positions`` is set.
        """
        rng = rng or self.rng
        candidates = [tile.position for tile in grid.tiles() if tile.walkable and tile.position != ORIGIN]
        monsters: List[Monster] = []
        for _ in range(max(0, int(monster_count))):
            monster = self.monster_factory.create(player_level, rng=rng)
            if not candidates:
                logger.warning(
                    "No free walkable cell left for monster placement",
                    extra={"grid_size": grid.size, "placed": len(monsters)},
                )
                break
            position: Position = rng.choice(candidates)
            if unique_positions:
                candidates.remove(position)
            monsters.append(replace(monster, position=position))
        return monsters

    def generate(
        self,
        size: int = DUNGEON_SIZE,
        player_level: int = 1,
        monster_count: int = MONSTER_COUNT,
        *,
        unique_positions: bool = False,
        rng: Optional[random.Random] = None,
    ) -> DungeonLayout:
        rng = rng or self.rng
        grid = self.build_grid(size, rng=rng)
        monsters = self.place_monsters(
            grid,
            player_level,
            monster_count,
            unique_positions=unique_positions,
            rng=rng,
        )
        return DungeonLayout(grid=grid, monsters=tuple(monsters))
