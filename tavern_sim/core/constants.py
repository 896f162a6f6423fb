"""
Constants and enumerations for the combat engine.

Defines the character classes, monster ranks and damage types used throughout
the simulator, together with the leveling rules and party size limits.
"""

from enum import Enum

from typing_extensions import Self

# Leveling rules.
MAX_LEVEL = 10
XP_PER_LEVEL = 100

# Party composition limits when starting an adventure.
MIN_PARTY_SIZE = 3
MAX_PARTY_SIZE = 5

# Levels at which a lineage evolves into its next class.
WARRIOR_LEVEL = 4
CHAMPION_LEVEL = 8
PALADIN_LEVEL = 5

# Environment variable pointing at the JSON data directory.
DATA_DIR_ENV = "TAVERN_SIM_DATA"

# Environment variable overriding the log level (name or number).
LOG_LEVEL_ENV = "TAVERN_SIM_LOG_LEVEL"


class NiceEnum(Enum):
    """An enumeration that provides a nicer string representation."""

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, value: str) -> Self:
        """
        Looks up a member by its value, ignoring case and surrounding blanks.

        Args:
            value (str): The textual value, e.g. "warrior" or "Boss".

        Returns:
            Self: The matching member.

        Raises:
            ValueError: If no member matches.

        """
        wanted = value.strip().lower()
        for member in cls:
            if member.value.lower() == wanted:
                return member
        raise ValueError(f"'{value}' is not a valid {cls.__name__}")


class CharacterClass(NiceEnum):
    """The class tag of a player character."""

    ADVENTURER = "Adventurer"
    WARRIOR = "Warrior"
    CHAMPION = "Champion"
    CLERIC = "Cleric"
    PALADIN = "Paladin"
    MAGE = "Mage"

    @property
    def color(self) -> str:
        """Returns the color string associated with this class."""
        return {
            CharacterClass.ADVENTURER: "bold white",
            CharacterClass.WARRIOR: "bold yellow",
            CharacterClass.CHAMPION: "bold magenta",
            CharacterClass.CLERIC: "bold cyan",
            CharacterClass.PALADIN: "bold blue",
            CharacterClass.MAGE: "bold green",
        }.get(self, "dim white")

    @property
    def colored_name(self) -> str:
        return self.colorize(self.value)

    def colorize(self, message: str) -> str:
        """Applies class color formatting to a message."""
        return f"[{self.color}]{message}[/]"


class MonsterRank(NiceEnum):
    """The challenge rank of a monster."""

    MINION = "Minion"
    LIEUTENANT = "Lieutenant"
    BOSS = "Boss"

    @property
    def color(self) -> str:
        """Returns the color string associated with this rank."""
        return {
            MonsterRank.MINION: "red",
            MonsterRank.LIEUTENANT: "bold red",
            MonsterRank.BOSS: "bold red reverse",
        }.get(self, "dim white")


class DamageType(NiceEnum):
    """Defines the types of damage that can be inflicted."""

    PHYSICAL = "Physical"
    MAGICAL = "Magical"
    PSYCHICAL = "Psychical"


def level_for_xp(xp: int) -> int:
    """
    Computes the level matching an amount of experience points.

    Args:
        xp (int): The total experience points.

    Returns:
        int: The level, from 1 to MAX_LEVEL.

    """
    if xp < XP_PER_LEVEL:
        return 1
    return min(MAX_LEVEL, xp // XP_PER_LEVEL + 1)


def xp_for_level(level: int) -> int:
    """Returns the minimum experience points needed to reach a level."""
    return (max(1, min(level, MAX_LEVEL)) - 1) * XP_PER_LEVEL
