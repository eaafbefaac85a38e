from typing import Callable, List, Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from delve.application.dtos import ActionResult
from delve.application.services.combat_service import CombatPhase
from delve.application.services.game_session import DIRECTIONS, GameSession
from delve.domain.models.character import CharacterClass
from delve.domain.models.position import Position
from delve.domain.services.class_catalog import CLASS_LABELS


_BORDER_STATUS = "yellow"
_BORDER_COMBAT = "red"
_BORDER_QUEST = "magenta"

_HELP_LINES = (
    "w/a/s/d        move north/west/south/east",
    "attack         strike the monster you are fighting",
    "inv            list your inventory",
    "equip N        equip item N (potions are drunk)",
    "use N          drink potion N",
    "sell N         sell item N",
    "quests         show the quest log",
    "turnin ID      claim rewards for a finished quest",
    "enter          leave for a fresh dungeon",
    "new            abandon this hero and start over",
    "quit           save and leave",
)


def _print_messages(console: Console, result: ActionResult) -> None:
    for line in result.messages:
        console.print(line)


def render_map(session: GameSession) -> List[str]:
    if session.grid is None or session.character is None:
        return []
    here = session.character.position
    lines = []
    for row in session.grid.rows:
        cells = []
        for tile in row:
            if tile.position == here:
                cells.append("@")
            elif not tile.revealed:
                cells.append(" ")
            elif not tile.walkable:
                cells.append("#")
            elif any(monster.occupies(tile.position) for monster in session.monsters):
                cells.append("M")
            else:
                cells.append(".")
        lines.append("".join(cells))
    return lines


def render_status(console: Console, session: GameSession) -> None:
    character = session.character
    if character is None:
        return
    header = Table.grid(padding=(0, 1))
    header.add_column(style="bold yellow", justify="right")
    header.add_column(style="white")
    header.add_row("Hero", f"{character.name} the {CLASS_LABELS[character.character_class]}")
    header.add_row("Level", f"{character.level} ({character.experience}/{character.experience_to_next_level} xp)")
    header.add_row("HP", f"{character.combat.health}/{character.combat.max_health}")
    header.add_row("Mana", f"{character.combat.mana}/{character.combat.max_mana}")
    header.add_row("Attack", f"{character.combat.damage} dmg / {character.combat.defense} def")
    header.add_row("Gold", str(character.gold))
    header.add_row("Map", "\n".join(render_map(session)))
    console.print(Panel.fit(header, title="[bold yellow]Delve[/bold yellow]", border_style=_BORDER_STATUS))

    encounter = session.encounter
    if encounter.phase != CombatPhase.IDLE and encounter.monster is not None:
        monster = encounter.monster
        body = "\n".join([f"{monster.name} HP {monster.health}/{monster.max_health}", *encounter.log[-6:]])
        console.print(Panel.fit(body, title="[bold red]Combat[/bold red]", border_style=_BORDER_COMBAT))


def render_inventory(console: Console, session: GameSession) -> None:
    character = session.character
    if character is None or not character.inventory:
        console.print("Your pack is empty.")
        return
    table = Table(show_header=True, header_style="bold yellow")
    table.add_column("#", justify="right")
    table.add_column("Item")
    table.add_column("Kind")
    table.add_column("Value", justify="right")
    table.add_column("")
    for index, item in enumerate(character.inventory, start=1):
        marker = "equipped" if character.equipped.holds(item) else ""
        table.add_row(str(index), item.name, item.kind.value, str(item.value), marker)
    console.print(table)


def render_quests(console: Console, session: GameSession) -> None:
    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("ID")
    table.add_column("Quest")
    table.add_column("Progress")
    table.add_column("Status")
    for quest in session.quests:
        progress = ", ".join(f"{obj.description} {obj.current}/{obj.target}" for obj in quest.objectives)
        if quest.rewards_claimed:
            status = "rewarded"
        elif quest.is_completed:
            status = "complete"
        else:
            status = "active" if quest.is_active else "inactive"
        table.add_row(quest.id, quest.title, progress, status)
    console.print(Panel.fit(table, title="[bold magenta]Quests[/bold magenta]", border_style=_BORDER_QUEST))


def run_character_creation(session: GameSession, console: Console, read: Callable[[str], str] = input) -> bool:
    console.print("[bold yellow]A new hero steps forward.[/bold yellow]")
    classes = list(CharacterClass)
    while True:
        name = read("Name: ").strip()
        for index, option in enumerate(classes, start=1):
            console.print(f"{index}. {CLASS_LABELS[option]}")
        choice = read("Class: ").strip().lower()
        if choice.isdigit() and 1 <= int(choice) <= len(classes):
            choice = classes[int(choice) - 1].value
        if choice in {"quit", "q"}:
            return False
        result = session.start_new_game(name, choice)
        _print_messages(console, result)
        if result.ok:
            return True


def _pick_item(session: GameSession, argument: str):
    character = session.character
    if character is None or not argument.isdigit():
        return None
    index = int(argument) - 1
    if 0 <= index < len(character.inventory):
        return character.inventory[index]
    return None


def run_game_loop(
    session: GameSession,
    console: Optional[Console] = None,
    read: Callable[[str], str] = input,
) -> None:
    console = console or Console()
    if not session.has_character and not run_character_creation(session, console, read):
        console.print("Goodbye.")
        return
    if session.grid is None:
        _print_messages(console, session.enter_dungeon())

    while True:
        render_status(console, session)
        if session.is_game_over:
            console.print("[bold red]You have fallen! Game over.[/bold red] Type 'new' to start again or 'quit'.")
        raw = read("> ").strip()
        command, _, argument = raw.partition(" ")
        command = command.lower()
        argument = argument.strip()

        if command in {"quit", "q", "exit"}:
            console.print("Goodbye.")
            return
        if command == "new":
            session.abandon()
            if not run_character_creation(session, console, read):
                console.print("Goodbye.")
                return
            continue
        if session.is_game_over:
            continue

        if command in DIRECTIONS:
            result = session.step(command)
            if result.rejection is not None and not result.messages:
                console.print("You cannot go that way.")
            _print_messages(console, result)
        elif command in {"attack", "f"}:
            _print_messages(console, session.attack())
        elif command in {"inv", "i"}:
            render_inventory(console, session)
        elif command in {"equip", "use", "sell"}:
            item = _pick_item(session, argument)
            if item is None:
                console.print("Pick an item number from 'inv'.")
                continue
            if command == "equip":
                _print_messages(console, session.equip(item))
            elif command == "use":
                _print_messages(console, session.consume(item.id))
            else:
                _print_messages(console, session.sell(item))
        elif command == "quests":
            render_quests(console, session)
        elif command == "turnin":
            _print_messages(console, session.turn_in(argument))
        elif command == "enter":
            if session.encounter.blocks_movement:
                console.print("Finish the fight first.")
            else:
                _print_messages(console, session.enter_dungeon())
        elif command == "help":
            console.print("\n".join(_HELP_LINES))
        else:
            console.print("Unknown command. Type 'help'.")
