from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

from delve.domain.models.character import Character, CharacterClass, Equipment
from delve.domain.models.item import Armor, DamageType, Item, ItemKind, Rarity, Weapon
from delve.domain.models.position import Position
from delve.domain.models.quest import ObjectiveBinding, Quest, QuestKind, QuestObjective, QuestRewards
from delve.domain.models.snapshot import GameSnapshot
from delve.domain.models.stats import BaseStats, CombatStats


SNAPSHOT_FORMAT_VERSION = 1


def item_to_dict(item: Item) -> Dict[str, Any]:
    payload: Dict[str, Any] = {
        "id": item.id,
        "name": item.name,
        "kind": item.kind.value,
        "rarity": item.rarity.value,
        "description": item.description,
        "value": int(item.value),
    }
    if isinstance(item, Weapon):
        payload.update(
            damage=int(item.damage),
            attack_speed=float(item.attack_speed),
            damage_type=item.damage_type.value,
        )
    elif isinstance(item, Armor):
        payload.update(defense=int(item.defense), resistance=int(item.resistance))
    return payload


def item_from_dict(payload: Mapping[str, Any]) -> Item:
    common = {
        "id": str(payload["id"]),
        "name": str(payload.get("name", payload["id"])),
        "rarity": Rarity(payload.get("rarity", Rarity.COMMON.value)),
        "description": str(payload.get("description", "")),
        "value": int(payload.get("value", 0)),
    }
    kind = ItemKind(payload.get("kind", ItemKind.POTION.value))
    if kind == ItemKind.WEAPON:
        return Weapon(
            **common,
            damage=int(payload.get("damage", 0)),
            attack_speed=float(payload.get("attack_speed", 1.0)),
            damage_type=DamageType(payload.get("damage_type", DamageType.PHYSICAL.value)),
        )
    if kind == ItemKind.ARMOR:
        return Armor(
            **common,
            defense=int(payload.get("defense", 0)),
            resistance=int(payload.get("resistance", 0)),
        )
    return Item(kind=kind, **common)


def _optional_item(payload: Optional[Mapping[str, Any]]) -> Optional[Item]:
    return item_from_dict(payload) if payload else None


def character_to_dict(character: Character) -> Dict[str, Any]:
    return {
        "id": character.id,
        "name": character.name,
        "class": character.character_class.value,
        "level": character.level,
        "experience": character.experience,
        "experience_to_next_level": character.experience_to_next_level,
        "stats": {
            "strength": character.stats.strength,
            "dexterity": character.stats.dexterity,
            "intelligence": character.stats.intelligence,
            "vitality": character.stats.vitality,
        },
        "combat": {
            "health": character.combat.health,
            "max_health": character.combat.max_health,
            "mana": character.combat.mana,
            "max_mana": character.combat.max_mana,
            "damage": character.combat.damage,
            "defense": character.combat.defense,
        },
        "position": {"x": character.position.x, "y": character.position.y},
        "gold": character.gold,
        "inventory": [item_to_dict(item) for item in character.inventory],
        "equipped": {
            "weapon": item_to_dict(character.equipped.weapon) if character.equipped.weapon else None,
            "armor": item_to_dict(character.equipped.armor) if character.equipped.armor else None,
        },
    }


def character_from_dict(payload: Mapping[str, Any]) -> Character:
    character_class = CharacterClass.normalize(payload.get("class"))
    if character_class is None:
        raise ValueError(f"Unknown character class in save: {payload.get('class')!r}")
    stats = payload.get("stats") or {}
    combat = payload.get("combat") or {}
    position = payload.get("position") or {}
    equipped = payload.get("equipped") or {}
    weapon = _optional_item(equipped.get("weapon"))
    armor = _optional_item(equipped.get("armor"))
    return Character(
        id=str(payload["id"]),
        name=str(payload["name"]),
        character_class=character_class,
        stats=BaseStats(**{key: int(stats.get(key, 0)) for key in ("strength", "dexterity", "intelligence", "vitality")}),
        combat=CombatStats(
            **{
                key: int(combat.get(key, 0))
                for key in ("health", "max_health", "mana", "max_mana", "damage", "defense")
            }
        ),
        level=int(payload.get("level", 1)),
        experience=int(payload.get("experience", 0)),
        experience_to_next_level=int(payload.get("experience_to_next_level", 100)),
        position=Position(int(position.get("x", 0)), int(position.get("y", 0))),
        gold=int(payload.get("gold", 0)),
        inventory=tuple(item_from_dict(row) for row in payload.get("inventory") or ()),
        equipped=Equipment(
            weapon=weapon if isinstance(weapon, Weapon) else None,
            armor=armor if isinstance(armor, Armor) else None,
        ),
    )


def quest_to_dict(quest: Quest) -> Dict[str, Any]:
    return {
        "id": quest.id,
        "title": quest.title,
        "description": quest.description,
        "type": quest.kind.value,
        "objectives": [
            {
                "description": objective.description,
                "current": objective.current,
                "target": objective.target,
                "completed": objective.completed,
                "binding": objective.binding.value,
            }
            for objective in quest.objectives
        ],
        "rewards": {
            "experience": quest.rewards.experience,
            "gold": quest.rewards.gold,
            "items": [item_to_dict(item) for item in quest.rewards.items],
        },
        "is_active": quest.is_active,
        "is_completed": quest.is_completed,
        "rewards_claimed": quest.rewards_claimed,
    }


def quest_from_dict(payload: Mapping[str, Any]) -> Quest:
    rewards = payload.get("rewards") or {}
    return Quest(
        id=str(payload["id"]),
        title=str(payload.get("title", payload["id"])),
        description=str(payload.get("description", "")),
        kind=QuestKind(payload.get("type", QuestKind.KILL.value)),
        objectives=tuple(
            QuestObjective(
                description=str(row.get("description", "")),
                target=int(row.get("target", 1)),
                current=int(row.get("current", 0)),
                completed=bool(row.get("completed", False)),
                binding=ObjectiveBinding(row.get("binding", ObjectiveBinding.COUNTER.value)),
            )
            for row in payload.get("objectives") or ()
        ),
        rewards=QuestRewards(
            experience=int(rewards.get("experience", 0)),
            gold=int(rewards.get("gold", 0)),
            items=tuple(item_from_dict(row) for row in rewards.get("items") or ()),
        ),
        is_active=bool(payload.get("is_active", True)),
        is_completed=bool(payload.get("is_completed", False)),
        rewards_claimed=bool(payload.get("rewards_claimed", False)),
    )


def snapshot_to_payload(snapshot: GameSnapshot) -> Dict[str, Any]:
    return {
        "version": SNAPSHOT_FORMAT_VERSION,
        "character": character_to_dict(snapshot.character),
        "quests": [quest_to_dict(quest) for quest in snapshot.quests],
    }


def snapshot_from_payload(payload: Mapping[str, Any]) -> GameSnapshot:
    return GameSnapshot(
        character=character_from_dict(payload["character"]),
        quests=tuple(quest_from_dict(row) for row in payload.get("quests") or ()),
    )
