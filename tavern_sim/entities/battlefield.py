"""
The battlefield handle passed into every ability resolution.

Abilities that affect more than their direct target (party heals, buffs,
area attacks) read the party and the current encounter's monsters from here
instead of keeping their own references.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from ..core.dice import RollSource, roll

if TYPE_CHECKING:
    from .character import PlayerCharacter
    from .monster import Monster


@dataclass
class Battlefield:
    """The party, the monsters of the current encounter and the dice."""

    dice: RollSource
    party: list[PlayerCharacter] = field(default_factory=list)
    monsters: list[Monster] = field(default_factory=list)

    def roll(self, sides: int) -> int:
        """Rolls a single die with the given number of faces."""
        return roll(self.dice, sides)

    def living_characters(self) -> list[PlayerCharacter]:
        return [c for c in self.party if c.is_alive()]

    def living_monsters(self) -> list[Monster]:
        return [m for m in self.monsters if m.is_alive()]

    def most_wounded_ally(self) -> PlayerCharacter | None:
        """
        Returns the living party member with the lowest share of its max hit
        points, the first one in party order on ties.
        """
        living = self.living_characters()
        if not living:
            return None
        return min(living, key=lambda c: c.hit_points / c.max_hit_points)
