from __future__ import annotations

from dataclasses import replace
from typing import Optional, Sequence

from delve.application.dtos import MoveResult, Rejection
from delve.application.services.balance_tables import REVEAL_RADIUS
from delve.domain.models.character import Character
from delve.domain.models.dungeon import DungeonGrid
from delve.domain.models.monster import Monster
from delve.domain.models.position import Position


def monster_at(monsters: Sequence[Monster], position: Position) -> Optional[Monster]:
    for monster in monsters:
        if monster.occupies(position):
            return monster
    return None


class MovementResolver:
    def __init__(self, reveal_radius: int = REVEAL_RADIUS) -> None:
        self.reveal_radius = int(reveal_radius)

    def move(
        self,
        character: Character,
        dx: int,
        dy: int,
        grid: DungeonGrid,
        monsters: Sequence[Monster],
        *,
        in_combat: bool = False,
    ) -> MoveResult:
        """Resolve one step.

        Rejected steps hand back the very same ``character`` and ``grid``
        objects. Stepping into a living monster starts combat instead of
        moving.
        """
        if in_combat:
            return MoveResult(character=character, grid=grid, rejection=Rejection.IN_COMBAT)

        target = character.position.offset(dx, dy)
        tile = grid.tile_at(target)
        if tile is None:
            return MoveResult(character=character, grid=grid, rejection=Rejection.OUT_OF_BOUNDS)
        if not tile.walkable:
            return MoveResult(character=character, grid=grid, rejection=Rejection.BLOCKED)

        opponent = monster_at(monsters, target)
        if opponent is not None:
            return MoveResult(character=character, grid=grid, combat_started=opponent)

        moved = replace(character, position=target)
        return MoveResult(character=moved, grid=grid.reveal_around(target, self.reveal_radius))
