from __future__ import annotations


DUNGEON_SIZE = 8
MONSTER_COUNT = 5
WALL_CHANCE = 0.15
REVEAL_RADIUS = 1

POTION_DROP_CHANCE = 0.30
EQUIPMENT_DROP_CHANCE = 0.10

STARTING_GOLD = 100
STARTING_EXPERIENCE_TO_NEXT_LEVEL = 100
STARTING_DAMAGE_BONUS = 5

LEVEL_UP_THRESHOLD_GROWTH = 1.5
LEVEL_UP_STAT_GAIN = 2
LEVEL_UP_MAX_HEALTH_GAIN = 20
LEVEL_UP_MAX_MANA_GAIN = 10
LEVEL_UP_DAMAGE_GAIN = 3
LEVEL_UP_DEFENSE_GAIN = 2

HEALTH_POTION_RESTORE = 50
MANA_POTION_RESTORE = 30

COMBAT_RESOLUTION_DELAY_S = 2.0


def next_experience_threshold(current_threshold: int) -> int:
    return int(current_threshold * LEVEL_UP_THRESHOLD_GROWTH)
