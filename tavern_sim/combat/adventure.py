"""
The adventure aggregate.

Owns the party, every monster of the adventure tagged with its encounter, and
the initiative order the scheduler rotates over.
"""

from __future__ import annotations

from collections import Counter, deque
from collections.abc import Callable, Iterable

from catchery import log_debug
from pydantic import BaseModel

from ..core.constants import MonsterRank
from ..core.content import AdventureRecord, MonsterRecord
from ..core.dice import RandomRollSource, RollSource
from ..core.errors import DuplicatePartyMember
from ..entities.base import CombatEntity, Side
from ..entities.battlefield import Battlefield
from ..entities.character import PlayerCharacter
from ..entities.monster import Monster


class InitiativeEntry(BaseModel):
    """One row of the initiative order."""

    name: str
    initiative: int


def make_names_unique(monsters: list[Monster]) -> None:
    """
    Ensure the monster names of one encounter are unique by appending numbers.

    Only duplicated names get a number, so ["Goblin", "Goblin", "Orc"]
    becomes ["Goblin (1)", "Goblin (2)", "Orc"].

    Args:
        monsters (list[Monster]): The monsters to rename in place.

    """
    name_counts = Counter(monster.name for monster in monsters)
    seen: Counter[str] = Counter()
    for monster in monsters:
        base = monster.name
        if name_counts[base] > 1:
            seen[base] += 1
            monster.name = f"{base} ({seen[base]})"


class Adventure:
    """
    An adventure being played.

    Attributes:
        name (str):
            The adventure name.
        number_of_encounters (int):
            How many encounters the adventure has.
        dice (RollSource):
            The source of every roll made during the adventure.
        party (list[PlayerCharacter]):
            The party, in the order characters joined.
        monsters (list[Monster]):
            Every monster of the adventure, tagged with its encounter.
        current_encounter (int):
            The encounter being fought, 0 before the first one starts.

    """

    def __init__(
        self,
        name: str,
        number_of_encounters: int,
        dice: RollSource | None = None,
    ) -> None:
        self.name = name
        self.number_of_encounters = number_of_encounters
        self.dice: RollSource = dice or RandomRollSource()
        self.party: list[PlayerCharacter] = []
        self.monsters: list[Monster] = []
        self.current_encounter = 0
        # Entities in insertion order; the initiative order is sorted from it.
        self._entries: list[CombatEntity] = []
        self._order: list[CombatEntity] = []
        self._party_seeded = False

    @classmethod
    def from_record(
        cls,
        record: AdventureRecord,
        monster_lookup: Callable[[str], MonsterRecord],
        dice: RollSource | None = None,
    ) -> Adventure:
        """
        Builds the monsters of every encounter of an authored adventure.

        Args:
            record (AdventureRecord):
                The authored adventure.
            monster_lookup (Callable[[str], MonsterRecord]):
                Catalog lookup by monster name. It raises UnknownMonster
                for names missing from the catalog.
            dice (RollSource | None):
                The roll source, a fresh RandomRollSource if None.

        Returns:
            Adventure: The adventure, with no party yet.

        """
        adventure = cls(record.name, record.number_of_encounters, dice)
        for encounter in record.encounters:
            for authored in encounter.monsters:
                adventure.insert_monsters(
                    monster_lookup(authored.name),
                    authored.quantity,
                    encounter.number,
                    authored.challenge,
                )
        return adventure

    # ============================================================================
    # ROSTER
    # ============================================================================

    def insert_monsters(
        self,
        record: MonsterRecord,
        quantity: int,
        encounter: int,
        rank: MonsterRank | None = None,
    ) -> list[Monster]:
        """Adds quantity fresh copies of a catalog monster to an encounter."""
        created = [
            Monster.from_record(record, encounter, rank) for _ in range(quantity)
        ]
        self.monsters.extend(created)
        return created

    def add_character(self, character: PlayerCharacter) -> None:
        """
        Adds a character to the party.

        Raises:
            DuplicatePartyMember: If a character with the same name is
                already in the party.

        """
        if any(member.name == character.name for member in self.party):
            raise DuplicatePartyMember(character.name)
        self.party.append(character)

    def monsters_in_encounter(self, encounter: int) -> list[Monster]:
        return [m for m in self.monsters if m.encounter == encounter]

    def field(self) -> Battlefield:
        """The battlefield of the current encounter."""
        return Battlefield(
            dice=self.dice,
            party=self.party,
            monsters=self.monsters_in_encounter(self.current_encounter),
        )

    # ============================================================================
    # PHASES
    # ============================================================================

    def prepare_party(self) -> list[str]:
        """Every party member uses its preparation ability, in party order."""
        field = self.field()
        return [character.prepare(field) for character in self.party]

    def start_encounter(self, encounter: int) -> list[InitiativeEntry]:
        """
        Swaps the monsters of the given encounter into the initiative order
        and rolls initiative for everyone in it.

        The party is seeded into the order on the first encounter only and
        stays there for the rest of the adventure.

        Args:
            encounter (int): The encounter number, from 1.

        Returns:
            list[InitiativeEntry]: The initiative order, highest first.

        Raises:
            ValueError: If the encounter number is out of range.

        """
        if not 1 <= encounter <= self.number_of_encounters:
            raise ValueError(
                f"Encounter {encounter} is not between 1 and "
                f"{self.number_of_encounters}"
            )
        self.current_encounter = encounter
        if not self._party_seeded:
            self._entries.extend(self.party)
            self._party_seeded = True
        monsters = self.monsters_in_encounter(encounter)
        make_names_unique(monsters)
        self._entries = [e for e in self._entries if e.side is Side.PARTY]
        self._entries.extend(monsters)
        for entity in self._entries:
            entity.roll_initiative(self.dice)
        # sorted() is stable, so ties keep insertion order.
        self._order = sorted(self._entries, key=lambda e: -e.get_initiative())
        log_debug(
            f"Encounter {encounter} initiative: "
            + ", ".join(f"{e.name}={e.get_initiative()}" for e in self._order)
        )
        return self.initiative_order

    @property
    def initiative_order(self) -> list[InitiativeEntry]:
        return [
            InitiativeEntry(name=entity.name, initiative=entity.get_initiative())
            for entity in self._order
        ]

    def battle_queue(self) -> deque[CombatEntity]:
        """
        A rotation over the initiative order, highest initiative first.

        The queue holds the same entity objects as the aggregate.
        """
        return deque(self._order)

    def alive_entities(self) -> int:
        """Number of living entities in the initiative order."""
        return sum(1 for entity in self._order if entity.is_alive())

    @staticmethod
    def all_monsters_dead(entities: Iterable[CombatEntity]) -> bool:
        return not any(
            e.is_alive() for e in entities if e.side is Side.MONSTERS
        )

    @staticmethod
    def all_characters_dead(entities: Iterable[CombatEntity]) -> bool:
        return not any(e.is_alive() for e in entities if e.side is Side.PARTY)

    def encounter_experience(self) -> int:
        """Total xp of the monsters in the current initiative order, dead or alive."""
        return sum(m.xp for m in self._order if isinstance(m, Monster))

    def award_experience(self) -> list[str]:
        """Every party member, fallen or not, gains the encounter xp."""
        xp = self.encounter_experience()
        return [character.add_experience(xp) for character in self.party]

    def rest_phase(self) -> list[str]:
        field = self.field()
        return [character.rest(field) for character in self.party]

    def status_lines(self) -> list[str]:
        """Party status lines, names padded to the same width."""
        width = max((len(c.name) for c in self.party), default=0)
        return [character.status_line(width) for character in self.party]
