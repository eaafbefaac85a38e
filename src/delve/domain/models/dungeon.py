from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Iterator, Optional, Tuple

from delve.domain.models.position import Position


class TileType(str, Enum):
    FLOOR = "floor"
    WALL = "wall"
    # Reserved; generation never produces these yet.
    DOOR = "door"
    STAIRS = "stairs"
    CHEST = "chest"


@dataclass(frozen=True)
class DungeonTile:
    x: int
    y: int
    tile_type: TileType = TileType.FLOOR
    revealed: bool = False

    @property
    def walkable(self) -> bool:
        return self.tile_type != TileType.WALL

    @property
    def position(self) -> Position:
        return Position(self.x, self.y)


@dataclass(frozen=True)
class DungeonGrid:
    """Square grid of tiles addressed as ``rows[y][x]``."""

    rows: Tuple[Tuple[DungeonTile, ...], ...]

    @property
    def size(self) -> int:
        return len(self.rows)

    def in_bounds(self, position: Position) -> bool:
        return 0 <= position.x < self.size and 0 <= position.y < self.size

    def tile_at(self, position: Position) -> Optional[DungeonTile]:
        if not self.in_bounds(position):
            return None
        return self.rows[position.y][position.x]

    def tiles(self) -> Iterator[DungeonTile]:
        for row in self.rows:
            yield from row

    def revealed_positions(self) -> frozenset[Position]:
        return frozenset(tile.position for tile in self.tiles() if tile.revealed)

    def reveal_around(self, center: Position, radius: int = 1) -> "DungeonGrid":
        """Return a grid with every tile within Chebyshev ``radius`` revealed.

        Revealing is an OR with the existing flag, so tiles never hide again.
        """
        return DungeonGrid(
            rows=tuple(
                tuple(
                    tile
                    if tile.revealed or tile.position.chebyshev(center) > radius
                    else replace(tile, revealed=True)
                    for tile in row
                )
                for row in self.rows
            )
        )
