"""
Monster combat entity and its per-rank attack table.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

from catchery import log_debug

from ..core.constants import DamageType, MonsterRank
from ..core.content import MonsterRecord
from ..core.dice import RollSource, roll
from .base import CombatEntity, Side, require_exhaustive

if TYPE_CHECKING:
    from .battlefield import Battlefield
    from .character import PlayerCharacter


class Monster(CombatEntity):
    """
    A monster of one encounter.

    Attributes:
        rank (MonsterRank):
            The challenge rank, which selects the attack pattern.
        encounter (int):
            The encounter the monster belongs to, from 1.
        xp (int):
            The experience awarded for the encounter it is part of.
        base_initiative (int):
            Added to a roll of the damage die to get the initiative.
        damage_dice (int):
            Faces of the damage die.
        damage_type (DamageType):
            The type of damage dealt.

    """

    side = Side.MONSTERS

    def __init__(
        self,
        name: str,
        rank: MonsterRank,
        encounter: int,
        xp: int,
        hit_points: int,
        base_initiative: int,
        damage_dice: int,
        damage_type: DamageType,
    ) -> None:
        super().__init__(name, hit_points)
        self.rank = rank
        self.encounter = encounter
        self.xp = xp
        self.max_hit_points = hit_points
        self.base_initiative = base_initiative
        self.damage_dice = damage_dice
        self.damage_type = damage_type

    @classmethod
    def from_record(
        cls,
        record: MonsterRecord,
        encounter: int,
        rank: MonsterRank | None = None,
    ) -> Monster:
        """
        Builds a monster from its catalog entry.

        Args:
            record (MonsterRecord): The catalog entry.
            encounter (int): The encounter it fights in.
            rank (MonsterRank | None): The authored rank, defaults to the
                catalog one.

        """
        return cls(
            name=record.name,
            rank=rank or record.challenge,
            encounter=encounter,
            xp=record.xp,
            hit_points=record.hit_points,
            base_initiative=record.initiative,
            damage_dice=record.dice_faces,
            damage_type=record.damage_type,
        )

    def attack(self, target: PlayerCharacter, field: Battlefield) -> str:
        return RANK_ATTACKS[self.rank](self, target, field)

    def take_damage(self, amount: int, damage_type: DamageType) -> str:
        was_alive = self.is_alive()
        lost = self.lose_hit_points(amount)
        log_debug(
            f"{self.name} takes {lost} {damage_type.value} damage "
            f"(remaining HP: {self.hit_points})"
        )
        if was_alive and not self.is_alive():
            return f"{self.name} dies."
        return ""

    def roll_initiative(self, dice: RollSource) -> int:
        self.initiative = self.base_initiative + roll(dice, self.damage_dice)
        return self.initiative


def _strike(monster: Monster, target: PlayerCharacter, field: Battlefield) -> str:
    """A single damage die that always lands."""
    kind = monster.damage_type.value.lower()
    damage = field.roll(monster.damage_dice)
    fallen = target.take_damage(damage, monster.damage_type)
    lines = (
        f"{monster.name} attacks {target.name}.",
        f"Hits and deals {damage} {kind} damage.",
        fallen,
    )
    return "\n".join(line for line in lines if line)


def _boss_strike(monster: Monster, target: PlayerCharacter, field: Battlefield) -> str:
    """d10 to hit: 1 misses, 10 doubles the damage die."""
    kind = monster.damage_type.value.lower()
    header = f"{monster.name} attacks {target.name}."
    check = field.roll(10)
    if check == 1:
        return f"{header}\nFails and deals 0 {kind} damage."
    damage = field.roll(monster.damage_dice)
    if check == 10:
        damage *= 2
        outcome = f"Critical hit and deals {damage} {kind} damage."
    else:
        outcome = f"Hits and deals {damage} {kind} damage."
    fallen = target.take_damage(damage, monster.damage_type)
    return "\n".join(line for line in (header, outcome, fallen) if line)


MonsterAttackFn = Callable[[Monster, "PlayerCharacter", "Battlefield"], str]

RANK_ATTACKS: dict[MonsterRank, MonsterAttackFn] = {
    MonsterRank.MINION: _strike,
    MonsterRank.LIEUTENANT: _strike,
    MonsterRank.BOSS: _boss_strike,
}

require_exhaustive(RANK_ATTACKS, MonsterRank, "monster attack")
