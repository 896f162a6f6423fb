"""
Authoring of adventures.

Monsters are referenced in the catalog form "Name (Challenge)". An
EncounterBuilder checks the references and the one-boss rule as monsters
are added, so an encounter never holds an invalid set.
"""

from __future__ import annotations

import re

from catchery import log_debug

from ..core.constants import MonsterRank
from ..core.content import AdventureRecord, AuthoredMonster, EncounterRecord
from ..core.errors import MalformedMonsterReference, TooManyBosses

MONSTER_REFERENCE_PATTERN = re.compile(r"^(.*)\s\(([^)]+)\)$")


def parse_monster_reference(reference: str) -> tuple[str, MonsterRank]:
    """
    Splits a "Name (Challenge)" reference.

    Args:
        reference (str): The reference, e.g. "Goblin (Minion)".

    Returns:
        tuple[str, MonsterRank]: The monster name and its rank.

    Raises:
        MalformedMonsterReference: If the reference is not in that form or
            the challenge is not a rank.

    """
    match = MONSTER_REFERENCE_PATTERN.match(reference.strip())
    if not match or not match.group(1).strip():
        raise MalformedMonsterReference(reference)
    try:
        rank = MonsterRank.parse(match.group(2))
    except ValueError as e:
        raise MalformedMonsterReference(reference) from e
    return match.group(1).strip(), rank


class EncounterBuilder:
    """
    Accumulates the monsters of one encounter.

    Attributes:
        number (int):
            The encounter number, from 1.
        monsters (list[AuthoredMonster]):
            The monster groups, in the order they were first added.

    """

    def __init__(self, number: int) -> None:
        self.number = number
        self.monsters: list[AuthoredMonster] = []

    def add_monster(self, reference: str, quantity: int = 1) -> AuthoredMonster:
        """
        Adds monsters to the encounter. Re-adding a monster already present
        increases its quantity.

        Args:
            reference (str): The "Name (Challenge)" reference.
            quantity (int): How many to add.

        Returns:
            AuthoredMonster: The group holding the monster.

        Raises:
            MalformedMonsterReference: If the reference cannot be parsed.
            TooManyBosses: If the encounter would hold more than one Boss.
            ValueError: If quantity is not positive.

        """
        if quantity < 1:
            raise ValueError(f"Quantity must be positive, got {quantity}")
        name, rank = parse_monster_reference(reference)
        existing = self._find(name, rank)
        if rank is MonsterRank.BOSS:
            bosses = sum(m.quantity for m in self.monsters if m.challenge is rank)
            if bosses + quantity > 1:
                raise TooManyBosses()
        if existing is not None:
            existing.quantity += quantity
            log_debug(f"Encounter {self.number}: {name} x{existing.quantity}")
            return existing
        group = AuthoredMonster(name=name, challenge=rank, quantity=quantity)
        self.monsters.append(group)
        log_debug(f"Encounter {self.number}: {name} x{quantity}")
        return group

    def remove_monster(self, index: int) -> AuthoredMonster:
        """
        Removes a monster group by its position.

        Raises:
            IndexError: If there is no group at that position.

        """
        if not 0 <= index < len(self.monsters):
            raise IndexError(f"No monster group at position {index}")
        return self.monsters.pop(index)

    def is_empty(self) -> bool:
        return not self.monsters

    def to_record(self) -> EncounterRecord:
        return EncounterRecord(
            number=self.number,
            monsters=[group.model_copy() for group in self.monsters],
        )

    def _find(self, name: str, rank: MonsterRank) -> AuthoredMonster | None:
        for group in self.monsters:
            if group.name == name and group.challenge is rank:
                return group
        return None


class AdventureBuilder:
    """Holds one EncounterBuilder per encounter of a new adventure."""

    def __init__(self, name: str, encounter_count: int) -> None:
        if encounter_count < 1:
            raise ValueError(f"An adventure needs at least one encounter, got {encounter_count}")
        self.name = name
        self.encounters = [EncounterBuilder(n) for n in range(1, encounter_count + 1)]

    def encounter(self, number: int) -> EncounterBuilder:
        """
        Returns the builder of an encounter, numbered from 1.

        Raises:
            IndexError: If the adventure has no such encounter.

        """
        if not 1 <= number <= len(self.encounters):
            raise IndexError(f"No encounter number {number}")
        return self.encounters[number - 1]

    def to_record(self) -> AdventureRecord:
        """
        Exports the adventure.

        Raises:
            ValueError: If some encounter has no monsters.

        """
        empty = [e.number for e in self.encounters if e.is_empty()]
        if empty:
            raise ValueError(
                "You can't continue without adding at least one monster to "
                f"encounter(s) {', '.join(map(str, empty))}"
            )
        return AdventureRecord(
            name=self.name,
            number_of_encounters=len(self.encounters),
            encounters=[e.to_record() for e in self.encounters],
        )
