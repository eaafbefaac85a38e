import time
from dataclasses import replace
from enum import Enum
from typing import Callable, List, Optional

from delve.application.dtos import AttackResult, CombatOutcome, Rejection
from delve.application.services.balance_tables import COMBAT_RESOLUTION_DELAY_S
from delve.application.services.progression_service import ProgressionService
from delve.domain.models.character import Character
from delve.domain.models.monster import Monster
from delve.domain.models.stats import applied_damage


class CombatEngine:
    def __init__(self, progression: Optional[ProgressionService] = None) -> None:
        self.progression = progression or ProgressionService()

    @staticmethod
    def opening_line(monster: Monster) -> str:
        return f"You encounter {monster.name}! (Level {monster.level})"

    def attack(self, character: Character, monster: Monster) -> AttackResult:
        """Resolve one simultaneous exchange of blows.

        The monster only strikes back if it survives the player's hit.
        """
        if character.is_defeated:
            return AttackResult(
                character=character,
                monster=monster,
                outcome=CombatOutcome.DEFEAT,
                rejection=Rejection.CHARACTER_DEFEATED,
            )
        if not monster.is_alive:
            return AttackResult(
                character=character,
                monster=monster,
                outcome=CombatOutcome.VICTORY,
                rejection=Rejection.MONSTER_DEFEATED,
            )

        player_damage = applied_damage(character.combat.damage, monster.defense)
        monster_damage = applied_damage(monster.damage, character.combat.defense)
        log: List[str] = [f"You deal {player_damage} damage!"]
        struck = monster.wounded(player_damage)

        if not struck.is_alive:
            return self._resolve_victory(character, struck, player_damage, log)

        log.append(f"{monster.name} deals {monster_damage} damage!")
        wounded = replace(character, combat=character.combat.with_health(character.combat.health - monster_damage))
        outcome = CombatOutcome.ONGOING
        if wounded.is_defeated:
            log.append("You have fallen!")
            outcome = CombatOutcome.DEFEAT
        return AttackResult(
            character=wounded,
            monster=struck,
            log=tuple(log),
            outcome=outcome,
            player_damage=player_damage,
            monster_damage=monster_damage,
        )

    def _resolve_victory(
        self,
        character: Character,
        monster: Monster,
        player_damage: int,
        log: List[str],
    ) -> AttackResult:
        log.append(f"{monster.name} is defeated!")
        log.append(f"+{monster.experience} experience, +{monster.gold_drop} gold")

        rewarded, leveled_up = self.progression.gain_experience(character, monster.experience)
        if leveled_up:
            log.append(f"Level up! You are now level {rewarded.level}!")
        for item in monster.loot_table:
            log.append(f"Looted: {item.name}")
        rewarded = replace(
            rewarded,
            gold=rewarded.gold + monster.gold_drop,
            inventory=rewarded.inventory + monster.loot_table,
        )
        return AttackResult(
            character=rewarded,
            monster=monster,
            log=tuple(log),
            outcome=CombatOutcome.VICTORY,
            player_damage=player_damage,
            loot=monster.loot_table,
            leveled_up=leveled_up,
        )


class CombatPhase(str, Enum):
    IDLE = "idle"
    IN_COMBAT = "in_combat"
    RESOLVING = "resolving"
    DEFEATED = "defeated"


class CombatEncounter:
    """Idle -> in_combat -> (resolving -> idle | defeated).

    ``resolving`` is the display delay after a kill. It lapses lazily: the
    phase is re-read against the clock whenever it is asked for.
    """

    def __init__(
        self,
        clock: Callable[[], float] = time.monotonic,
        resolution_delay_s: float = COMBAT_RESOLUTION_DELAY_S,
    ) -> None:
        self.clock = clock
        self.resolution_delay_s = max(0.0, float(resolution_delay_s))
        self._phase = CombatPhase.IDLE
        self._resolve_at: Optional[float] = None
        self.monster: Optional[Monster] = None
        self.log: List[str] = []

    @property
    def phase(self) -> CombatPhase:
        if self._phase == CombatPhase.RESOLVING and self._resolve_at is not None and self.clock() >= self._resolve_at:
            self._phase = CombatPhase.IDLE
            self._resolve_at = None
            self.monster = None
            self.log = []
        return self._phase

    @property
    def blocks_movement(self) -> bool:
        return self.phase != CombatPhase.IDLE

    @property
    def accepts_attack(self) -> bool:
        return self.phase == CombatPhase.IN_COMBAT and self.monster is not None

    def engage(self, monster: Monster, opening_line: str) -> None:
        self._phase = CombatPhase.IN_COMBAT
        self._resolve_at = None
        self.monster = monster
        self.log = [opening_line]

    def record(self, result: AttackResult) -> None:
        self.monster = result.monster
        self.log.extend(result.log)
        if result.outcome == CombatOutcome.VICTORY:
            self._phase = CombatPhase.RESOLVING
            self._resolve_at = self.clock() + self.resolution_delay_s
        elif result.outcome == CombatOutcome.DEFEAT:
            self.mark_defeated()

    def mark_defeated(self) -> None:
        self._phase = CombatPhase.DEFEATED
        self._resolve_at = None

    def reset(self) -> None:
        self._phase = CombatPhase.IDLE
        self._resolve_at = None
        self.monster = None
        self.log = []
