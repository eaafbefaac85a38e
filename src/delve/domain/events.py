from dataclasses import dataclass


@dataclass
class CombatStarted:
    character_id: str
    monster_id: str
    monster_name: str
    monster_level: int


@dataclass
class MonsterSlain:
    monster_id: str
    monster_name: str
    by_character_id: str
    experience: int
    gold: int


@dataclass
class LevelUpAppliedEvent:
    character_id: str
    from_level: int
    to_level: int
    hp_gain: int


@dataclass
class CharacterDefeated:
    character_id: str
    killed_by: str


@dataclass
class QuestCompleted:
    quest_id: str
    character_id: str
