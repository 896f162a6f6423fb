"""
Shared fixtures: roll sources that make battles reproducible.
"""

import pytest

from tavern_sim.core.constants import CharacterClass
from tavern_sim.entities.battlefield import Battlefield
from tavern_sim.entities.character import PlayerCharacter


class ScriptedRollSource:
    """
    Returns the scripted values in order, clamped into the requested range.

    Once the script is exhausted it returns the default, or the low end of the
    range when there is no default.
    """

    def __init__(self, values=(), default=None):
        self.values = list(values)
        self.default = default
        self.requests = []

    def between(self, low, high):
        self.requests.append((low, high))
        if self.values:
            value = self.values.pop(0)
        elif self.default is not None:
            value = self.default
        else:
            value = low
        return max(low, min(high, value))


class FixedRollSource(ScriptedRollSource):
    """Always rolls the same value."""

    def __init__(self, value):
        super().__init__(default=value)


@pytest.fixture
def scripted():
    """Factory for scripted roll sources."""
    return ScriptedRollSource


@pytest.fixture
def fixed():
    """Factory for fixed roll sources."""
    return FixedRollSource


@pytest.fixture
def make_character():
    """Factory for player characters with sensible default attributes."""

    def _make(
        name="Hero",
        character_class=CharacterClass.ADVENTURER,
        body=1,
        mind=1,
        spirit=1,
        xp=0,
    ):
        return PlayerCharacter(
            name=name,
            body=body,
            mind=mind,
            spirit=spirit,
            xp=xp,
            character_class=character_class,
            player="Tester",
        )

    return _make


@pytest.fixture
def make_field():
    """Factory for battlefields over the given roll source."""

    def _make(dice, party=None, monsters=None):
        return Battlefield(dice=dice, party=party or [], monsters=monsters or [])

    return _make
