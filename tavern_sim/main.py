"""
Main entry point for the tavern combat simulator.

Loads the character roster, the monster catalog and the adventures from the
data directory, then lets the user create, list and delete characters,
author adventures and play them with a party of 3 to 5 characters.
Character progress is written back to the roster at the end of every
adventure.

The data directory is taken from the TAVERN_SIM_DATA environment variable,
and defaults to ./data.
"""

import os
from pathlib import Path

from .combat.adventure import Adventure
from .combat.battle_manager import BattleManager, BattleState
from .combat.encounter_builder import AdventureBuilder, EncounterBuilder
from .core.character_creation import (
    format_modifier,
    is_valid_character_name,
    new_character,
    roll_attributes,
    title_case,
)
from .core.constants import DATA_DIR_ENV, MAX_LEVEL, MAX_PARTY_SIZE, MIN_PARTY_SIZE
from .core.content import ContentRepository
from .core.dice import RandomRollSource
from .core.errors import GameException, PersistenceError
from .core.logging import get_logger, setup_logging
from .core.utils import cerror, cprint, crule
from .ui.cli_interface import PlayerInterface

logger = get_logger(__name__)

MAX_ENCOUNTERS = 4

MENU_OPTIONS = [
    "Create character",
    "List characters",
    "Create adventure",
    "Start adventure",
]


def data_directory() -> Path:
    return Path(os.environ.get(DATA_DIR_ENV, "data"))


def list_characters(repo: ContentRepository, ui: PlayerInterface) -> None:
    cprint("\nTavern keeper: “Lads! They want to see you!”\n“Who piques your interest?”\n")
    player = ui.ask_text("-> Enter the name of the Player to filter (ENTER for all): ", allow_empty=True)
    characters = repo.characters_by_player(player)
    if not characters:
        cerror("There isn't a player with that name!")
        return
    cprint("\nYou watch as all adventurers get up from their chairs and approach you.")
    chosen = ui.choose_character(characters, [])
    if chosen is None:
        return
    cprint(f"\nTavern keeper: “Hey {chosen.name} get here; the boss wants to see you!”\n")
    ui.show_character(chosen)
    while True:
        answer = ui.ask_text(
            f"\n[Enter name to delete, or press enter to cancel]\nDo you want to delete {chosen.name}? ",
            allow_empty=True,
        )
        if not answer:
            cprint("\nTavern keeper: “I see you have changed your mind. Come back whenever you want.”")
            return
        if answer == chosen.name:
            cprint(f"\nTavern keeper: “I’m sorry kiddo, but you have to leave.”\n\nCharacter {chosen.name} left the Guild.")
            repo.delete_character(chosen.name)
            return
        cerror("That is not the name of the character.")


def create_character(
    repo: ContentRepository, ui: PlayerInterface, dice: RandomRollSource | None = None
) -> None:
    cprint("\nTavern keeper: “Oh, so you are new to this land.”\n“What’s your name?”\n")
    name = title_case(ui.ask_text("-> Enter your name: "))
    if not is_valid_character_name(name) or repo.character_exists(name):
        cerror("Tavern keeper: “I’m sorry, but that name doesn't meet the requirements”")
        return
    cprint(f"\nTavern keeper: “Hello, {name}, be welcome.”\n“And now, if I may break the fourth wall, who is your Player?”\n")
    player = ui.ask_text("-> Enter the player’s name: ")
    cprint("\n\nTavern keeper: “I see, I see...”\n“Now, are you an experienced adventurer?”\n")
    level = ui.ask_integer("-> Enter the character’s level", 1, MAX_LEVEL)
    cprint(f"\nTavern keeper: “Oh, so you are level {level}!”\n“Great, let me get a closer look at you...”\n\nGenerating your stats...\n")
    rolls = roll_attributes(dice or RandomRollSource())
    ui.show_rolls(rolls)
    starting_class = ui.choose_starting_class()
    character = new_character(name, player, level, rolls, starting_class)
    cprint(
        "\nYour stats are:\n"
        + "\n".join(
            f"  - {key.capitalize()}: {format_modifier(getattr(character, key))}"
            for key in ("body", "mind", "spirit")
        )
    )
    repo.add_character(character)
    cprint(
        "\nTavern keeper: “Any decent party needs one of those.”\n"
        f"“I guess that means you’re a {character.character_class} by now, nice!”\n"
        f"\nThe new character {character.name} has been created."
    )


def author_encounter(
    repo: ContentRepository, ui: PlayerInterface, builder: EncounterBuilder, total: int
) -> None:
    """Lets the user fill one encounter until they continue with it non-empty."""
    catalog = list(repo.monsters.values())
    while True:
        crule(f"Encounter {builder.number} / {total}", style="yellow")
        for group in builder.monsters:
            cprint(f"  {group.quantity} x {group.name} ({group.challenge})")
        choice = ui.choose_option(
            "Encounter", ["Add monster", "Remove monster", "Continue"], exit_entry=None
        )
        if choice == 0:
            monster = ui.choose_monster(catalog)
            if monster is None:
                continue
            quantity = ui.ask_integer("-> How many", 1, 99)
            try:
                builder.add_monster(monster.reference, quantity)
            except GameException as e:
                cerror(e)
        elif choice == 1:
            if builder.is_empty():
                cerror("There are no monsters in this encounter.")
                continue
            labels = [f"{g.quantity} x {g.name} ({g.challenge})" for g in builder.monsters]
            index = ui.choose_option("Remove", labels)
            if index is not None:
                removed = builder.remove_monster(index)
                cprint(f"{removed.quantity} {removed.name} were removed from the encounter.")
        elif builder.is_empty():
            cerror("You can't continue without adding at least one monster to the encounter.")
        else:
            return


def create_adventure(repo: ContentRepository, ui: PlayerInterface) -> None:
    cprint("\nTavern keeper: “Planning an adventure? Good luck with that!”")
    name = ui.ask_text("\n-> Name your adventure: ")
    if repo.adventure_exists(name):
        cerror("An adventure with that name already exists.")
        return
    cprint(
        f"\nTavern keeper: “You plan to undertake {name}, really?”\n"
        "“How long will that take?”\n"
    )
    count = ui.ask_integer("-> How many encounters do you want", 1, MAX_ENCOUNTERS)
    builder = AdventureBuilder(name, count)
    for encounter in builder.encounters:
        author_encounter(repo, ui, encounter, count)
    try:
        repo.save_adventure(builder.to_record())
    except PersistenceError as e:
        cerror(e)
        return
    cprint(f"\nThe new adventure {name} has been created.")


def assemble_party(
    repo: ContentRepository, ui: PlayerInterface, manager: BattleManager
) -> bool:
    roster = list(repo.characters.values())
    size = ui.ask_integer(
        "\n-> Choose a number of characters",
        MIN_PARTY_SIZE,
        min(MAX_PARTY_SIZE, len(roster)),
    )
    cprint(f"\nTavern keeper: “Great, {size} it is.”\n“Who among these lads shall join you?”")
    while len(manager.adventure.party) < size:
        party = [c.name for c in manager.adventure.party]
        cprint(f"Your party ({len(party)} / {size}): {', '.join(party) or 'empty'}")
        record = ui.choose_character(roster, party)
        if record is None:
            return False
        try:
            manager.add_character(record)
        except GameException as e:
            cerror(e)
    return True


def play_adventure(manager: BattleManager, ui: PlayerInterface) -> None:
    """Runs every encounter until the adventure is won or the party wiped."""
    adventure = manager.adventure
    for number in range(1, adventure.number_of_encounters + 1):
        crule(f"Starting encounter {number}", style="bold red")
        crule("Preparation stage", style="bold green")
        ui.show_lines(manager.prepare_party())
        initiative = manager.start_encounter(number)
        # Listed after the roll so duplicated names already carry their number.
        for monster in adventure.monsters_in_encounter(number):
            cprint(f"  - [{monster.rank.color}]{monster.name}[/] ({monster.rank})")
        ui.show_initiative(initiative)

        crule("Combat stage", style="bold red")
        ui.show_status(manager.round, manager.party_status())
        for outcome in manager.run_encounter():
            ui.show_lines(outcome.lines)
            if outcome.state is BattleState.ROUND_BOUNDARY:
                ui.show_status(outcome.round, manager.party_status())

        if manager.state is BattleState.PARTY_WIPED:
            return

        crule("Short rest", style="bold green")
        cprint("All enemies are defeated.")
        report = manager.rest_phase()
        ui.show_lines(report.xp_lines, style="yellow")
        ui.show_lines(report.rest_lines)
        if manager.state is BattleState.ADVENTURE_WON:
            return
        ui.wait()


def start_adventure(repo: ContentRepository, ui: PlayerInterface) -> None:
    if not repo.adventures:
        cerror("There are no adventures available.")
        return
    if len(repo.characters) < MIN_PARTY_SIZE:
        cerror(f"There must be at least {MIN_PARTY_SIZE} characters to start an adventure.")
        return
    cprint("\n\nTavern keeper: “So, you are looking to go on an adventure?”\n“Where do you fancy going?”\n")
    record = ui.choose_adventure(list(repo.adventures.values()))
    if record is None:
        return
    try:
        adventure = Adventure.from_record(record, repo.get_monster)
    except GameException as e:
        cerror(e)
        return
    cprint(f"\nTavern keeper: “{record.name} it is”\n“And how many people shall join you?”")
    manager = BattleManager(adventure)
    if not assemble_party(repo, ui, manager):
        return

    cprint("\nTavern keeper: “Great, good luck on your adventure lads!”\n")
    cprint(f"The “{record.name}” will start soon...\n")
    try:
        play_adventure(manager, ui)
    finally:
        repo.update_characters(manager.party_records())


def main() -> int:
    setup_logging()
    crule("Tavern Combat Simulator", style="bold green")
    cprint("\nWelcome to the tavern, adventurer. Loading data...", style="bold blue")
    try:
        repo = ContentRepository(data_directory())
    except PersistenceError as e:
        logger.error("Couldn't load the data files: %s", e)
        return 1
    ui = PlayerInterface()
    actions = [create_character, list_characters, create_adventure, start_adventure]
    while True:
        choice = ui.choose_option("The Tavern", MENU_OPTIONS, exit_entry="Exit")
        if choice is None:
            cprint("\nTavern keeper: “Are you leaving already? See you soon, adventurer.”")
            return 0
        try:
            actions[choice](repo, ui)
        except PersistenceError as e:
            logger.error("%s", e)


if __name__ == "__main__":
    raise SystemExit(main())
