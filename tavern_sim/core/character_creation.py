"""
Character creation rules.

New characters roll 2d6 for each of body, mind and spirit; the sum of the
two dice is turned into the attribute through a small modifier table. A
character may start above level 1, in which case it starts with the matching
experience and already evolved into the class its level grants.
"""

import re

from .constants import (
    CHAMPION_LEVEL,
    MAX_LEVEL,
    PALADIN_LEVEL,
    WARRIOR_LEVEL,
    CharacterClass,
    xp_for_level,
)
from .content import CharacterRecord
from .dice import RollSource, roll

ATTRIBUTES = ("body", "mind", "spirit")

# Classes a new character can pick; the others are only reached by evolving.
STARTING_CLASSES = (
    CharacterClass.ADVENTURER,
    CharacterClass.CLERIC,
    CharacterClass.MAGE,
)

CHARACTER_NAME_PATTERN = re.compile(r"^[a-zA-ZÀ-ÿ\s]+$")


def attribute_modifier(first: int, second: int) -> int:
    """
    Turns two d6 rolls into an attribute value.

    Args:
        first (int): The first die.
        second (int): The second die.

    Returns:
        int: -1 for a total of 2, +1 for 6 to 9, +2 for 10 and 11, +3 for 12,
            0 otherwise.

    """
    total = first + second
    if total == 2:
        return -1
    if 6 <= total <= 9:
        return 1
    if total in (10, 11):
        return 2
    if total == 12:
        return 3
    return 0


def roll_attributes(dice: RollSource) -> dict[str, tuple[int, int]]:
    """Rolls two d6 per attribute, in body, mind, spirit order."""
    return {attribute: (roll(dice, 6), roll(dice, 6)) for attribute in ATTRIBUTES}


def class_for_level(starting_class: CharacterClass, level: int) -> CharacterClass:
    """
    Returns the class a new character of the given level starts with.

    Raises:
        ValueError: If the class cannot be picked by a new character.

    """
    if starting_class not in STARTING_CLASSES:
        raise ValueError(f"{starting_class} is not a starting class")
    if starting_class is CharacterClass.ADVENTURER:
        if level >= CHAMPION_LEVEL:
            return CharacterClass.CHAMPION
        if level >= WARRIOR_LEVEL:
            return CharacterClass.WARRIOR
    if starting_class is CharacterClass.CLERIC and level >= PALADIN_LEVEL:
        return CharacterClass.PALADIN
    return starting_class


def title_case(name: str) -> str:
    """'sir  borin' -> 'Sir Borin'."""
    return " ".join(word.capitalize() for word in name.split())


def is_valid_character_name(name: str) -> bool:
    """Names hold letters, accented letters included, and spaces only."""
    return bool(name.strip()) and CHARACTER_NAME_PATTERN.match(name) is not None


def format_modifier(value: int) -> str:
    return f"+{value}" if value >= 0 else str(value)


def new_character(
    name: str,
    player: str,
    level: int,
    rolls: dict[str, tuple[int, int]],
    starting_class: CharacterClass,
) -> CharacterRecord:
    """
    Builds the roster entry of a freshly created character.

    Args:
        name (str): The character name, title cased on the way in.
        player (str): The owner of the character.
        level (int): The starting level, from 1 to MAX_LEVEL.
        rolls (dict[str, tuple[int, int]]): The two d6 of each attribute.
        starting_class (CharacterClass): The class picked by the player.

    Returns:
        CharacterRecord: The new character, evolved as its level allows.

    Raises:
        ValueError: If the name or the level is not acceptable.

    """
    if not is_valid_character_name(name):
        raise ValueError(f"Invalid character name: '{name}'")
    if not 1 <= level <= MAX_LEVEL:
        raise ValueError(f"Level must be between 1 and {MAX_LEVEL}, got {level}")
    attributes = {key: attribute_modifier(*rolls[key]) for key in ATTRIBUTES}
    return CharacterRecord(
        name=title_case(name),
        player=player.strip(),
        xp=xp_for_level(level),
        character_class=class_for_level(starting_class, level),
        **attributes,
    )
