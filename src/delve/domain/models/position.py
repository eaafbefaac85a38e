from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Position:
    x: int = 0
    y: int = 0

    def offset(self, dx: int, dy: int) -> "Position":
        return Position(self.x + int(dx), self.y + int(dy))

    def chebyshev(self, other: "Position") -> int:
        return max(abs(self.x - other.x), abs(self.y - other.y))


ORIGIN = Position(0, 0)
