"""
Dice module for the combat engine.

Every random draw in the engine goes through a RollSource, so callers can
inject a seeded or scripted source when they need reproducible battles.
"""

import random
import re
from typing import Protocol, runtime_checkable


@runtime_checkable
class RollSource(Protocol):
    """Anything able to draw a uniform integer in an inclusive range."""

    def between(self, low: int, high: int) -> int:
        """Returns a uniform integer N such that low <= N <= high."""
        ...


class RandomRollSource:
    """RollSource backed by the standard pseudo-random generator."""

    def __init__(self, seed: int | None = None) -> None:
        self._random = random.Random(seed)

    def between(self, low: int, high: int) -> int:
        if low > high:
            raise ValueError(f"Empty roll range [{low}, {high}]")
        return self._random.randint(low, high)


def roll(source: RollSource, sides: int) -> int:
    """
    Rolls a single die.

    Args:
        source (RollSource): The source of randomness.
        sides (int): The number of faces of the die.

    Returns:
        int: The value rolled, between 1 and sides.

    """
    if sides < 1:
        raise ValueError(f"A die needs at least one face, got {sides}")
    return source.between(1, sides)


DAMAGE_DICE_PATTERN = re.compile(r"^\s*1?d(\d+)\s*$", re.IGNORECASE)


def parse_damage_dice(token: str) -> int:
    """
    Parses a catalog damage dice token into its number of faces.

    Args:
        token (str): A token like "d8" or "1d8".

    Returns:
        int: The number of faces.

    Raises:
        ValueError: If the token is not a single die.

    """
    match = DAMAGE_DICE_PATTERN.match(token or "")
    if not match or int(match.group(1)) < 1:
        raise ValueError(f"Invalid damage dice: '{token}'")
    return int(match.group(1))
