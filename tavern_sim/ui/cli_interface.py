"""
User interface module for the simulator.

Provides console-based user interface components for interacting with the
tavern: menus built as rich tables, answered through prompt_toolkit prompts.
"""

from __future__ import annotations

from typing import Any

from prompt_toolkit import ANSI, PromptSession
from rich.table import Table

from ..combat.adventure import InitiativeEntry
from ..core.character_creation import ATTRIBUTES, STARTING_CLASSES, format_modifier
from ..core.constants import CharacterClass
from ..core.content import AdventureRecord, CharacterRecord, MonsterRecord
from ..core.utils import ccapture, cerror, cprint, crule

# one session keeps history
session: PromptSession = PromptSession(erase_when_done=True)


class PlayerInterface:
    """
    Command-line interface of the tavern.

    Provides Rich table-based menus for picking adventures, characters and
    monsters. Uses prompt_toolkit for interactive input with numeric
    shortcuts and 'q' to go back.
    """

    def __init__(self) -> None:
        """Initialize the PlayerInterface with no configuration needed."""

    # ============================================================================
    # GENERIC PROMPTS
    # ============================================================================

    def choose_option(
        self,
        title: str,
        options: list[str],
        exit_entry: str | None = "Back",
    ) -> int | None:
        """Choose one entry of a numbered menu.

        Args:
            title (str): The title of the menu table.
            options (list[str]): The entries of the menu.
            exit_entry (str | None, optional): Text for exit option. Defaults to "Back".

        Returns:
            int | None: The 0-based index of the entry, or None for exit.

        """
        table = Table(title=title, pad_edge=False)
        table.add_column("#", style="cyan", no_wrap=True)
        table.add_column("Option", style="bold")
        for i, option in enumerate(options, 1):
            table.add_row(str(i), option)
        if exit_entry:
            table.add_row()
            table.add_row("q", exit_entry)
        return self._ask_index(ccapture(table), len(options), exit_entry is not None)

    def ask_text(self, question: str, allow_empty: bool = False) -> str:
        """Keep asking until the user types something, unless allow_empty."""
        while True:
            answer = session.prompt(ANSI(ccapture(question))).strip()
            if answer or allow_empty:
                return answer

    def ask_integer(self, question: str, low: int, high: int) -> int:
        """Keep asking until the user types a number between low and high."""
        while True:
            answer = session.prompt(ANSI(ccapture(f"{question} [{low}..{high}]: ")))
            value = self.get_digit_choice(answer.strip())
            if low <= value <= high:
                return value

    def wait(self, message: str = "Press ENTER to continue...") -> None:
        session.prompt(ANSI(ccapture(message)))

    # ============================================================================
    # TAVERN MENUS
    # ============================================================================

    def choose_adventure(self, adventures: list[AdventureRecord]) -> AdventureRecord | None:
        """Choose an adventure to undertake.

        Args:
            adventures (list[AdventureRecord]): The available adventures.

        Returns:
            AdventureRecord | None: The selected adventure, or None for exit.

        """
        if not adventures:
            return None
        table = Table(title="Adventures", pad_edge=False)
        table.add_column("#", style="cyan", no_wrap=True)
        table.add_column("Name", style="bold")
        table.add_column("Encounters", justify="right")
        for i, adventure in enumerate(adventures, 1):
            table.add_row(str(i), adventure.name, str(adventure.number_of_encounters))
        table.add_row()
        table.add_row("q", "Back", "")
        index = self._ask_index(ccapture(table), len(adventures), True)
        return None if index is None else adventures[index]

    def choose_character(
        self,
        characters: list[CharacterRecord],
        party: list[str],
    ) -> CharacterRecord | None:
        """Choose a character to join the party.

        Args:
            characters (list[CharacterRecord]): The roster.
            party (list[str]): Names of the characters already in the party,
                shown dimmed.

        Returns:
            CharacterRecord | None: The selected character, or None for exit.

        """
        table = self.character_table(characters, party)
        table.add_row()
        table.add_row("q", "Back", "", "", "")
        index = self._ask_index(ccapture(table), len(characters), True)
        return None if index is None else characters[index]

    def choose_starting_class(self) -> CharacterClass:
        """Asks for one of the classes a new character may start with."""
        names = ", ".join(c.value for c in STARTING_CLASSES)
        while True:
            answer = self.ask_text(f"-> Enter the character’s initial class [{names}]: ")
            try:
                chosen = CharacterClass.parse(answer)
            except ValueError:
                chosen = None
            if chosen in STARTING_CLASSES:
                return chosen
            cerror("Invalid input. Please enter a valid class.")

    def choose_monster(self, monsters: list[MonsterRecord]) -> MonsterRecord | None:
        """Choose a monster from the catalog."""
        table = Table(title="Monsters", pad_edge=False)
        table.add_column("#", style="cyan", no_wrap=True)
        table.add_column("Name", style="bold")
        table.add_column("Challenge")
        table.add_column("HP", justify="right")
        table.add_column("Damage", justify="right")
        for i, monster in enumerate(monsters, 1):
            table.add_row(
                str(i),
                monster.name,
                f"[{monster.challenge.color}]{monster.challenge}[/]",
                str(monster.hit_points),
                f"{monster.damage_dice} {monster.damage_type}",
            )
        table.add_row()
        table.add_row("q", "Back", "", "", "")
        index = self._ask_index(ccapture(table), len(monsters), True)
        return None if index is None else monsters[index]

    # ============================================================================
    # DISPLAY
    # ============================================================================

    @staticmethod
    def character_table(
        characters: list[CharacterRecord], party: list[str] | None = None
    ) -> Table:
        """Builds the roster table."""
        party = party or []
        table = Table(title="Characters", pad_edge=False)
        table.add_column("#", style="cyan", no_wrap=True)
        table.add_column("Name", style="bold")
        table.add_column("Player")
        table.add_column("Class")
        table.add_column("Level", justify="right")
        for i, character in enumerate(characters, 1):
            name = character.name
            if name in party:
                name = f"[dim]{name}[/]"
            table.add_row(
                str(i),
                name,
                character.player,
                character.character_class.colored_name,
                str(character.level),
            )
        return table

    def show_characters(self, characters: list[CharacterRecord]) -> None:
        cprint(self.character_table(characters))

    def show_character(self, character: CharacterRecord) -> None:
        """Shows the sheet of a single character."""
        table = Table(title=character.name, show_header=False, pad_edge=False)
        table.add_column("Field", style="cyan")
        table.add_column("Value", style="bold")
        table.add_row("Player", character.player)
        table.add_row("Class", character.character_class.colored_name)
        table.add_row("Level", str(character.level))
        table.add_row("XP", str(character.xp))
        for attribute in ATTRIBUTES:
            table.add_row(attribute.capitalize(), format_modifier(getattr(character, attribute)))
        cprint(table)

    def show_rolls(self, rolls: dict[str, tuple[int, int]]) -> None:
        for attribute, (first, second) in rolls.items():
            label = f"{attribute.capitalize()}:".ljust(9)
            cprint(f"{label}You rolled {first + second} ({first} and {second}).")

    def show_initiative(self, entries: list[InitiativeEntry]) -> None:
        table = Table(title="Initiative", pad_edge=False)
        table.add_column("🎲", justify="right", style="yellow")
        table.add_column("Name", style="bold")
        for entry in entries:
            table.add_row(str(entry.initiative), entry.name)
        cprint(table)

    def show_status(self, round_number: int, lines: list[str]) -> None:
        crule(f"Round {round_number}", style="cyan")
        cprint("[bold]Party:[/]")
        for line in lines:
            cprint(f"  - {line}")

    def show_lines(self, lines: list[str], style: str | None = None) -> None:
        for line in lines:
            if line:
                cprint(line, style=style)

    # ============================================================================
    # INPUT PARSING
    # ============================================================================

    def _ask_index(self, table: str, count: int, allow_exit: bool) -> int | None:
        prompt = "\n" + table + "\nChoice > "
        while True:
            # Prompt the user for input.
            answer = session.prompt(ANSI(prompt)).strip()
            # Keep asking until the user provides a valid input.
            if not answer:
                continue
            index = self.get_digit_choice(answer) - 1
            if 0 <= index < count:
                return index
            if allow_exit and answer.lower() == "q":
                return None

    @staticmethod
    def get_digit_choice(answer: Any) -> int:
        """
        Convert a numeric string input to its integer value.

        Args:
            answer (Any): User input to parse.

        Returns:
            int: The integer value, or -1 if invalid input.

        """
        if isinstance(answer, str) and answer.isdigit():
            return int(answer)
        return -1
