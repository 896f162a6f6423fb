"""
The combat scheduler.

BattleManager rotates the battle queue of one encounter, one action per
step, and reports how the battle moves through its states. The end of a
battle is a state transition carried by the returned TurnOutcome, never an
exception.
"""

from __future__ import annotations

from collections import deque
from collections.abc import Iterator

from catchery import log_debug, log_warning
from pydantic import BaseModel, Field

from ..core.constants import NiceEnum
from ..core.content import CharacterRecord
from ..core.errors import BattleNotInProgress
from ..entities.base import CombatEntity, Side
from ..entities.character import PlayerCharacter
from ..entities.monster import Monster
from .adventure import Adventure, InitiativeEntry


class BattleState(NiceEnum):
    """The states of the scheduler."""

    IDLE = "Idle"
    ROUND_IN_PROGRESS = "Round in progress"
    ROUND_BOUNDARY = "Round boundary"
    ENCOUNTER_CLEARED = "Encounter cleared"
    ADVENTURE_WON = "Adventure won"
    PARTY_WIPED = "Party wiped"

    @property
    def is_fighting(self) -> bool:
        return self in (BattleState.ROUND_IN_PROGRESS, BattleState.ROUND_BOUNDARY)


class BattleSignal(NiceEnum):
    """Raised by target selection when one side has no one left standing."""

    NO_LIVING_MONSTERS = "No living monsters"
    NO_LIVING_CHARACTERS = "No living characters"

    @property
    def message(self) -> str:
        if self is BattleSignal.NO_LIVING_MONSTERS:
            return (
                "All monsters in this encounter are defeated!\n"
                "Onwards to the next challenge! Good luck!"
            )
        return (
            "Tavern keeper: “Lad, wake up. Yes, your party fell unconscious.”\n"
            "“Don’t worry, you are safe back at the Tavern.”"
        )


class TurnOutcome(BaseModel):
    """What happened in one step of the battle."""

    state: BattleState
    round: int
    acted: int
    actor: str | None = None
    lines: list[str] = Field(default_factory=list)
    signal: BattleSignal | None = None

    @property
    def narrative(self) -> str:
        return "\n".join(self.lines)


class RestReport(BaseModel):
    """Narratives of the rest phase."""

    xp_lines: list[str] = Field(default_factory=list)
    rest_lines: list[str] = Field(default_factory=list)


class BattleManager:
    """
    Drives the battles of an adventure.

    Attributes:
        adventure (Adventure):
            The aggregate owning the party, the monsters and the initiative.
        state (BattleState):
            The current state of the scheduler.
        round (int):
            The current round of the encounter, from 1.
        acted (int):
            How many living entities acted in the current round.

    """

    def __init__(self, adventure: Adventure) -> None:
        self.adventure = adventure
        self.state = BattleState.IDLE
        self.round = 1
        self.acted = 0
        self._queue: deque[CombatEntity] = deque()
        self._rested = True

    # ============================================================================
    # SETUP
    # ============================================================================

    def add_character(self, record: CharacterRecord) -> PlayerCharacter:
        """
        Builds the combat instance of a roster character and adds it to the
        party.

        Raises:
            DuplicatePartyMember: If the character is already in the party.

        """
        character = PlayerCharacter.from_record(record)
        self.adventure.add_character(character)
        return character

    def prepare_party(self) -> list[str]:
        """Runs the preparation phase, returning one narrative per member."""
        return self.adventure.prepare_party()

    def start_encounter(self, encounter: int) -> list[InitiativeEntry]:
        """
        Rolls initiative for the given encounter and opens its first round.

        Args:
            encounter (int): The encounter number, from 1.

        Returns:
            list[InitiativeEntry]: The initiative order, highest first.

        """
        order = self.adventure.start_encounter(encounter)
        self._queue = self.adventure.battle_queue()
        self.state = BattleState.ROUND_IN_PROGRESS
        self.round = 1
        self.acted = 0
        self._rested = False
        return order

    # ============================================================================
    # TARGETING
    # ============================================================================

    def select_monster_target(self) -> Monster | None:
        """The living monster with the fewest hit points, first one on ties."""
        living = [
            m
            for m in self.adventure.monsters_in_encounter(self.adventure.current_encounter)
            if m.is_alive()
        ]
        if not living:
            return None
        return min(living, key=lambda monster: monster.hit_points)

    def select_character_target(self) -> PlayerCharacter | None:
        """A uniformly random living party member."""
        living = [c for c in self.adventure.party if c.is_alive()]
        if not living:
            return None
        return living[self.adventure.dice.between(0, len(living) - 1)]

    # ============================================================================
    # TURN LOOP
    # ============================================================================

    def step(self) -> TurnOutcome:
        """
        Lets the entity at the front of the battle queue act.

        Returns:
            TurnOutcome: The narrative of the action and the resulting state.

        Raises:
            BattleNotInProgress: If no encounter is being fought.

        """
        if not self.state.is_fighting:
            log_warning(
                f"Cannot step the battle while it is {self.state}",
                {"adventure": self.adventure.name, "state": str(self.state)},
            )
            raise BattleNotInProgress(f"There is no battle in progress ({self.state})")
        self.state = BattleState.ROUND_IN_PROGRESS

        if not self._queue:
            # Nobody on the field: there is no party left to carry on.
            return self._finish(BattleSignal.NO_LIVING_CHARACTERS, [], None)
        entity = self._queue.popleft()
        lines: list[str] = []
        if entity.is_alive():
            if entity.side is Side.PARTY:
                target = self.select_monster_target()
                signal = BattleSignal.NO_LIVING_MONSTERS
            else:
                target = self.select_character_target()
                signal = BattleSignal.NO_LIVING_CHARACTERS
            if target is None:
                self._queue.appendleft(entity)
                return self._finish(signal, lines, entity.name)
            lines.append(entity.attack(target, self.adventure.field()))
            self.acted += 1
        self._queue.append(entity)

        if self.acted > 0 and self.acted >= self.adventure.alive_entities():
            lines.append(f"End of round {self.round}.")
            if self.adventure.all_monsters_dead(self._queue):
                return self._finish(BattleSignal.NO_LIVING_MONSTERS, lines, entity.name)
            if self.adventure.all_characters_dead(self._queue):
                return self._finish(BattleSignal.NO_LIVING_CHARACTERS, lines, entity.name)
            self.acted = 0
            self.round += 1
            self.state = BattleState.ROUND_BOUNDARY

        return TurnOutcome(
            state=self.state,
            round=self.round,
            acted=self.acted,
            actor=entity.name,
            lines=[line for line in lines if line],
        )

    def _finish(
        self, signal: BattleSignal, lines: list[str], actor: str | None
    ) -> TurnOutcome:
        """Moves to the terminal state matching a target selection failure."""
        if signal is BattleSignal.NO_LIVING_CHARACTERS:
            self.state = BattleState.PARTY_WIPED
            lines.append(signal.message)
        elif self.is_last_encounter():
            self.state = BattleState.ADVENTURE_WON
            lines.append(
                f"Congratulations! Your party completed “{self.adventure.name}”"
            )
        else:
            self.state = BattleState.ENCOUNTER_CLEARED
            lines.append(signal.message)
        log_debug(
            f"Encounter {self.adventure.current_encounter} ended on round "
            f"{self.round}: {self.state}"
        )
        return TurnOutcome(
            state=self.state,
            round=self.round,
            acted=self.acted,
            actor=actor,
            lines=[line for line in lines if line],
            signal=signal,
        )

    def run_encounter(self) -> Iterator[TurnOutcome]:
        """Steps the battle until the encounter is over, yielding every outcome."""
        while self.state.is_fighting:
            yield self.step()

    def is_last_encounter(self) -> bool:
        return self.adventure.current_encounter == self.adventure.number_of_encounters

    # ============================================================================
    # AFTER THE BATTLE
    # ============================================================================

    def rest_phase(self) -> RestReport:
        """
        Awards the encounter xp and lets every party member rest.

        Returns:
            RestReport: The xp and rest narratives.

        Raises:
            BattleNotInProgress: If the encounter was not won, or the party
                already rested after it.

        """
        won = self.state in (BattleState.ENCOUNTER_CLEARED, BattleState.ADVENTURE_WON)
        if not won or self._rested:
            raise BattleNotInProgress(
                f"The party can only rest once after a victory ({self.state})"
            )
        self._rested = True
        return RestReport(
            xp_lines=self.adventure.award_experience(),
            rest_lines=self.adventure.rest_phase(),
        )

    def party_status(self) -> list[str]:
        return self.adventure.status_lines()

    def party_records(self) -> list[CharacterRecord]:
        """The current xp and class of every party member, ready to persist."""
        return [character.to_record() for character in self.adventure.party]
