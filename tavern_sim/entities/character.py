"""
Player character combat entity.

A PlayerCharacter is built fresh from a roster record for every adventure.
Its class tag selects its behaviour from CLASS_BEHAVIOURS and advances along
the evolution chain as experience is gained.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING

from catchery import log_debug

from ..core.constants import (
    CHAMPION_LEVEL,
    PALADIN_LEVEL,
    WARRIOR_LEVEL,
    CharacterClass,
    DamageType,
    level_for_xp,
)
from ..core.content import CharacterRecord
from ..core.dice import RollSource, roll
from .base import CombatEntity, Side
from .character_behaviours import CLASS_BEHAVIOURS, ClassBehaviour

if TYPE_CHECKING:
    from .battlefield import Battlefield
    from .monster import Monster

# Class -> (level needed, class evolved into). The chain only moves forward.
EVOLUTIONS: dict[CharacterClass, tuple[int, CharacterClass]] = {
    CharacterClass.ADVENTURER: (WARRIOR_LEVEL, CharacterClass.WARRIOR),
    CharacterClass.WARRIOR: (CHAMPION_LEVEL, CharacterClass.CHAMPION),
    CharacterClass.CLERIC: (PALADIN_LEVEL, CharacterClass.PALADIN),
}


@dataclass
class Attributes:
    """Body, mind and spirit of a character."""

    body: int
    mind: int
    spirit: int


class PlayerCharacter(CombatEntity):
    """
    A party member in combat.

    Attributes:
        player (str):
            The player owning the character.
        base_stats (Attributes):
            The attributes as stored in the roster, never buffed.
        stats (Attributes):
            The attributes used in combat, buffed by preparation abilities.
        xp (int):
            Total experience points.
        level (int):
            The level derived from xp.
        character_class (CharacterClass):
            The current class tag.
        max_hit_points (int):
            Max hit points, fixed for the whole adventure.
        shield (int):
            Damage absorbed before hit points. Only the Mage recharges it.

    """

    side = Side.PARTY

    def __init__(
        self,
        name: str,
        body: int,
        mind: int,
        spirit: int,
        xp: int = 0,
        character_class: CharacterClass = CharacterClass.ADVENTURER,
        player: str = "",
    ) -> None:
        self.player = player
        self.base_stats = Attributes(body=body, mind=mind, spirit=spirit)
        self.stats = replace(self.base_stats)
        self.xp = xp
        self.level = level_for_xp(xp)
        self.character_class = character_class
        self.shield = 0
        self.max_hit_points = max(1, self.behaviour.hit_points(self))
        super().__init__(name, self.max_hit_points)

    @classmethod
    def from_record(cls, record: CharacterRecord) -> PlayerCharacter:
        """Builds the combat instance of a roster character."""
        return cls(
            name=record.name,
            body=record.body,
            mind=record.mind,
            spirit=record.spirit,
            xp=record.xp,
            character_class=record.character_class,
            player=record.player,
        )

    def to_record(self) -> CharacterRecord:
        """Returns the roster record reflecting the current xp and class."""
        return CharacterRecord(
            name=self.name,
            player=self.player,
            xp=self.xp,
            body=self.base_stats.body,
            mind=self.base_stats.mind,
            spirit=self.base_stats.spirit,
            character_class=self.character_class,
        )

    @property
    def behaviour(self) -> ClassBehaviour:
        return CLASS_BEHAVIOURS[self.character_class]

    @property
    def hit_points_and_max(self) -> str:
        return f"{self.hit_points} / {self.max_hit_points}"

    # ============================================================================
    # COMBAT
    # ============================================================================

    def attack(self, target: Monster, field: Battlefield) -> str:
        """
        Resolves this character's turn.

        Args:
            target (Monster):
                The monster selected by the scheduler.
            field (Battlefield):
                The party and monsters, for abilities reaching further.

        Returns:
            str: The narrative of the action.

        """
        return self.behaviour.attack(self, target, field)

    def take_damage(self, amount: int, damage_type: DamageType) -> str:
        """
        Applies incoming damage after the class defenses.

        Args:
            amount (int):
                The raw damage.
            damage_type (DamageType):
                The type of the damage.

        Returns:
            str: A narrative line if the character fell, else an empty string.

        """
        was_alive = self.is_alive()
        adjusted = self.behaviour.adjust_damage(self, max(0, amount), damage_type)
        lost = self.lose_hit_points(adjusted)
        log_debug(
            f"{self.name} takes {lost} {damage_type.value} damage "
            f"(base: {amount}, adjusted: {adjusted}, remaining HP: {self.hit_points})"
        )
        if was_alive and not self.is_alive():
            return f"{self.name} falls unconscious."
        return ""

    def heal(self, amount: int) -> int:
        """
        Restores hit points, up to max_hit_points.

        Returns:
            int: The hit points actually restored.

        """
        healed = min(max(0, amount), self.max_hit_points - self.hit_points)
        self.hit_points += healed
        return healed

    def roll_initiative(self, dice: RollSource) -> int:
        behaviour = self.behaviour
        bonus = getattr(self.stats, behaviour.initiative_stat)
        self.initiative = roll(dice, behaviour.initiative_die) + bonus
        return self.initiative

    def prepare(self, field: Battlefield) -> str:
        """Uses the class preparation ability at the start of an encounter."""
        return self.behaviour.prepare(self, field)

    def rest(self, field: Battlefield) -> str:
        """Uses the class recovery ability once an encounter is cleared."""
        return self.behaviour.rest(self, field)

    # ============================================================================
    # PROGRESSION
    # ============================================================================

    def add_experience(self, amount: int) -> str:
        """
        Grants experience, then levels up and evolves as needed.

        Args:
            amount (int): The experience gained.

        Returns:
            str: The narrative of the gain, level up and evolutions.

        """
        self.xp += amount
        summary = f"{self.name} gains {amount} xp."
        new_level = level_for_xp(self.xp)
        if new_level > self.level:
            self.level = new_level
            summary += f" {self.name} levels up. They are now lvl {self.level}!"
        return "\n".join([summary, *self.evolve()])

    def evolve(self) -> list[str]:
        """
        Follows the evolution chain as far as the current level allows.

        Returns:
            list[str]: One narrative line per evolution.

        """
        messages = []
        step = EVOLUTIONS.get(self.character_class)
        while step is not None and self.level >= step[0]:
            self.character_class = step[1]
            messages.append(f"{self.name} evolves to {self.character_class.value}!")
            step = EVOLUTIONS.get(self.character_class)
        return messages

    def status_line(self, name_width: int = 0) -> str:
        line = f"{self.name.ljust(name_width)}    {self.hit_points_and_max} hit points"
        if self.character_class is CharacterClass.MAGE:
            line += f" (Shield: {self.shield})"
        return line
