CONTRACT_VERSION = "1.0.0"

COMMAND_INTENTS = (
    "generate_dungeon",
    "move",
    "attack",
    "equip",
    "consume",
    "sell",
    "turn_in",
)

QUERY_INTENTS = ("recompute_quests",)

SESSION_INTENTS = (
    "load",
    "start_new_game",
    "abandon",
    "enter_dungeon",
    "move",
    "step",
    "attack",
    "equip",
    "consume",
    "sell",
    "turn_in",
)

CONTRACT_DTO_TYPES = (
    "MoveResult",
    "AttackResult",
    "Rejected",
    "TurnInResult",
    "ActionResult",
    "DungeonLayout",
)
