"""
Base combat entity shared by characters and monsters.

Keeps the state every participant in a battle has (name, hit points and
initiative) and the clamping rules applied to hit points.
"""

from collections.abc import Iterable, Mapping
from enum import Enum
from typing import Any


class Side(Enum):
    """Which side of the battle an entity fights on."""

    PARTY = "party"
    MONSTERS = "monsters"


class CombatEntity:
    """
    Anything that can take turns in a battle.

    Attributes:
        name (str):
            The display name of the entity.
        hit_points (int):
            Current hit points, never below 0.
        initiative (int):
            The initiative rolled for the current encounter.

    """

    side: Side

    def __init__(self, name: str, hit_points: int) -> None:
        self.name = name
        self.hit_points = max(0, hit_points)
        self.initiative = 0

    def is_alive(self) -> bool:
        return self.hit_points > 0

    def get_initiative(self) -> int:
        return self.initiative

    def lose_hit_points(self, amount: int) -> int:
        """
        Removes hit points, clamping at 0.

        Args:
            amount (int): The damage to apply. Negative values count as 0.

        Returns:
            int: The hit points actually lost.

        """
        lost = min(self.hit_points, max(0, amount))
        self.hit_points -= lost
        return lost

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}({self.name!r}, hp={self.hit_points}, "
            f"initiative={self.initiative})"
        )


def require_exhaustive(table: Mapping[Any, Any], tags: Iterable[Enum], what: str) -> None:
    """
    Checks that a behaviour table has an entry for every tag.

    Args:
        table (Mapping): The dispatch table.
        tags (Iterable[Enum]): The enumeration the table must cover.
        what (str): What the table dispatches, for the error message.

    Raises:
        TypeError: If some tag has no entry.

    """
    missing = [tag for tag in tags if tag not in table]
    if missing:
        names = ", ".join(str(tag) for tag in missing)
        raise TypeError(f"No {what} defined for: {names}")
