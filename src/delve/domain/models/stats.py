from __future__ import annotations

from dataclasses import dataclass, replace


@dataclass(frozen=True)
class BaseStats:
    strength: int = 0
    dexterity: int = 0
    intelligence: int = 0
    vitality: int = 0

    def __post_init__(self) -> None:
        for name in ("strength", "dexterity", "intelligence", "vitality"):
            if int(getattr(self, name)) < 0:
                raise ValueError(f"{name} cannot be negative")

    def grown(self, amount: int) -> "BaseStats":
        return BaseStats(
            strength=self.strength + amount,
            dexterity=self.dexterity + amount,
            intelligence=self.intelligence + amount,
            vitality=self.vitality + amount,
        )


@dataclass(frozen=True)
class CombatStats:
    """Derived combat numbers for the player character.

    ``health`` and ``mana`` are always kept inside ``[0, max]``; use the
    ``with_*`` helpers rather than constructing out-of-range values.
    """

    health: int
    max_health: int
    mana: int
    max_mana: int
    damage: int
    defense: int

    def __post_init__(self) -> None:
        if not 0 <= int(self.health) <= int(self.max_health):
            raise ValueError("health must be within [0, max_health]")
        if not 0 <= int(self.mana) <= int(self.max_mana):
            raise ValueError("mana must be within [0, max_mana]")

    def with_health(self, value: int) -> "CombatStats":
        return replace(self, health=max(0, min(self.max_health, int(value))))

    def with_mana(self, value: int) -> "CombatStats":
        return replace(self, mana=max(0, min(self.max_mana, int(value))))


def applied_damage(attack: int, defense: int) -> int:
    """Damage dealt by one blow; never lower than 1."""
    return max(1, int(attack) - int(defense))
