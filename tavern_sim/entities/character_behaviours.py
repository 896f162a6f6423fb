"""
Per-class behaviour table for player characters.

Each character class maps to a ClassBehaviour bundling how it attacks, how it
takes damage, how it rolls initiative, what it does in the preparation and
rest phases, and how its max hit points are derived. PlayerCharacter only
holds state and looks its behaviour up here by class tag.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from ..core.constants import CharacterClass, DamageType
from .base import require_exhaustive

if TYPE_CHECKING:
    from .battlefield import Battlefield
    from .character import PlayerCharacter
    from .monster import Monster

AttackFn = Callable[["PlayerCharacter", "Monster", "Battlefield"], str]
DamageFn = Callable[["PlayerCharacter", int, DamageType], int]
AbilityFn = Callable[["PlayerCharacter", "Battlefield"], str]
HitPointsFn = Callable[["PlayerCharacter"], int]


@dataclass(frozen=True)
class ClassBehaviour:
    """
    The behaviour of one character class.

    Attributes:
        attack (AttackFn):
            Resolves the character's turn against the selected monster.
        adjust_damage (DamageFn):
            Turns incoming damage into the hit points actually lost.
        initiative_die (int):
            The die rolled for initiative.
        initiative_stat (str):
            The attribute added to the initiative roll.
        prepare (AbilityFn):
            The ability used at the start of every encounter.
        rest (AbilityFn):
            The ability used once an encounter is cleared.
        hit_points (HitPointsFn):
            Computes the max hit points.
        damage_type (DamageType):
            The type of damage the class deals with its attacks.

    """

    attack: AttackFn
    adjust_damage: DamageFn
    initiative_die: int
    initiative_stat: str
    prepare: AbilityFn
    rest: AbilityFn
    hit_points: HitPointsFn
    damage_type: DamageType


def _join(*lines: str) -> str:
    """Joins narrative lines, dropping empty ones."""
    return "\n".join(line for line in lines if line)


# ============================================================================
# ATTACKS
# ============================================================================


def _sword_slash(actor: PlayerCharacter, target: Monster, field: Battlefield) -> str:
    """d10 to hit: 1 misses, 10 doubles a d6 + body damage roll."""
    kind = actor.behaviour.damage_type
    header = f"{actor.name} attacks {target.name}."
    check = field.roll(10)
    if check == 1:
        return _join(header, f"Fails and deals 0 {kind.value.lower()} damage.")
    damage = field.roll(6) + actor.stats.body
    if check == 10:
        damage *= 2
        outcome = f"Critical hit and deals {damage} {kind.value.lower()} damage."
    else:
        outcome = f"Hits and deals {damage} {kind.value.lower()} damage."
    return _join(header, outcome, target.take_damage(damage, kind))


def _improved_sword_slash(
    actor: PlayerCharacter, target: Monster, field: Battlefield
) -> str:
    """The d10 to hit doubles as the damage roll, plus body."""
    kind = actor.behaviour.damage_type
    header = f"{actor.name} attacks {target.name}."
    check = field.roll(10)
    if check == 1:
        return _join(header, f"Fails and deals 0 {kind.value.lower()} damage.")
    damage = check + actor.stats.body
    outcome = f"Hits and deals {damage} {kind.value.lower()} damage."
    return _join(header, outcome, target.take_damage(damage, kind))


def _needs_healing(character: PlayerCharacter | None) -> bool:
    return (
        character is not None
        and character.hit_points <= character.max_hit_points // 2
    )


def _cleric_attack(actor: PlayerCharacter, target: Monster, field: Battlefield) -> str:
    wounded = field.most_wounded_ally()
    if _needs_healing(wounded):
        return _prayer_of_healing(actor, wounded, field)
    damage = field.roll(4) + actor.stats.spirit
    return _join(
        f"{actor.name} uses Not On My Watch. {target.name} takes {damage} "
        f"psychical damage.",
        target.take_damage(damage, DamageType.PSYCHICAL),
    )


def _paladin_attack(actor: PlayerCharacter, target: Monster, field: Battlefield) -> str:
    if _needs_healing(field.most_wounded_ally()):
        return _prayer_of_mass_healing(actor, field)
    damage = field.roll(8) + actor.stats.spirit
    return _join(
        f"{actor.name} attacks {target.name} with Not On My Watch.",
        f"{target.name} takes {damage} psychical damage.",
        target.take_damage(damage, DamageType.PSYCHICAL),
    )


def _mage_attack(actor: PlayerCharacter, target: Monster, field: Battlefield) -> str:
    """Fireball against three or more living monsters, else Arcane Missile."""
    living = field.living_monsters()
    if not living:
        return ""
    if len(living) >= 3:
        damage = field.roll(4) + actor.stats.mind
        names = ", ".join(monster.name for monster in living)
        deaths = [monster.take_damage(damage, DamageType.PSYCHICAL) for monster in living]
        return _join(
            f"{actor.name} attacks {names} with Fireball.",
            f"They take {damage} psychical damage.",
            *deaths,
        )
    # The sturdiest monster is the one worth the missile, first one on ties.
    strongest = max(living, key=lambda monster: monster.hit_points)
    damage = field.roll(6) + actor.stats.mind
    return _join(
        f"{actor.name} uses Arcane Missile.",
        f"{strongest.name} takes {damage} psychical damage.",
        strongest.take_damage(damage, DamageType.PSYCHICAL),
    )


# ============================================================================
# HEALING
# ============================================================================


def _prayer_of_healing(
    actor: PlayerCharacter, target: PlayerCharacter, field: Battlefield
) -> str:
    healing = field.roll(10) + actor.stats.mind
    target.heal(healing)
    return (
        f"{actor.name} uses Prayer of Healing. {target.name} is healed for "
        f"{healing} points."
    )


def _prayer_of_mass_healing(actor: PlayerCharacter, field: Battlefield) -> str:
    healing = field.roll(10) + actor.stats.mind
    for character in field.party:
        character.heal(healing)
    return (
        f"{actor.name} uses Prayer of Mass Healing. All party members are "
        f"healed for {healing} points."
    )


# ============================================================================
# DAMAGE INTAKE
# ============================================================================


def _full_damage(actor: PlayerCharacter, amount: int, damage_type: DamageType) -> int:
    return amount


def _halve_foreign_damage(
    actor: PlayerCharacter, amount: int, damage_type: DamageType
) -> int:
    """Damage of any type but the character's own is halved."""
    if damage_type is actor.behaviour.damage_type:
        return amount
    return amount // 2


def _halve_psychical_damage(
    actor: PlayerCharacter, amount: int, damage_type: DamageType
) -> int:
    if damage_type is DamageType.PSYCHICAL:
        return amount // 2
    return amount


def _absorb_with_shield(
    actor: PlayerCharacter, amount: int, damage_type: DamageType
) -> int:
    """The shield soaks damage first; only the remainder reaches hit points."""
    amount = max(0, amount)
    absorbed = min(actor.shield, amount)
    actor.shield -= absorbed
    return amount - absorbed


# ============================================================================
# PREPARATION PHASE
# ============================================================================


def _self_motivated(actor: PlayerCharacter, field: Battlefield) -> str:
    actor.stats.spirit += 1
    return f"{actor.name} uses Self-Motivated. Their spirit increases in +1."


def _motivational_speech(actor: PlayerCharacter, field: Battlefield) -> str:
    for character in _party_with(actor, field):
        character.stats.spirit += 1
    return (
        f"{actor.name} uses Motivational Speech. Everyone's Spirit increases in +1."
    )


def _prayer_of_good_luck(actor: PlayerCharacter, field: Battlefield) -> str:
    for character in _party_with(actor, field):
        character.stats.mind += 1
    return (
        f"{actor.name} uses Prayer of Good Luck. Their mind and the mind of "
        f"their party increases by +1."
    )


def _blessing_of_good_luck(actor: PlayerCharacter, field: Battlefield) -> str:
    increase = field.roll(3)
    for character in _party_with(actor, field):
        character.stats.mind += increase
    return (
        f"{actor.name} uses Blessing of Good Luck. Their mind and the mind of "
        f"their party increases by +{increase}."
    )


def _mage_shield(actor: PlayerCharacter, field: Battlefield) -> str:
    actor.shield = max(0, (field.roll(6) + actor.stats.mind) * actor.level)
    return f"{actor.name} uses Mage Shield. Shield recharges to {actor.shield}."


def _party_with(actor: PlayerCharacter, field: Battlefield) -> list[PlayerCharacter]:
    """The party, with the actor counted exactly once even if missing from it."""
    if any(character is actor for character in field.party):
        return list(field.party)
    return [actor, *field.party]


# ============================================================================
# REST PHASE
# ============================================================================


def _bandage_time(actor: PlayerCharacter, field: Battlefield) -> str:
    if not actor.is_alive():
        return f"{actor.name} is unconscious."
    healing = field.roll(8) + actor.stats.mind
    actor.heal(healing)
    return f"{actor.name} uses Bandage Time. Heals {healing} hit points."


def _improved_bandage_time(actor: PlayerCharacter, field: Battlefield) -> str:
    healed = actor.heal(actor.max_hit_points)
    return f"{actor.name} uses Improved Bandage Time. Heals {healed} hit points."


def _prayer_of_self_healing(actor: PlayerCharacter, field: Battlefield) -> str:
    healing = field.roll(10) + actor.stats.mind
    actor.heal(healing)
    return (
        f"{actor.name} uses Prayer of Self-Healing. They are healed for "
        f"{healing} points."
    )


def _read_a_book(actor: PlayerCharacter, field: Battlefield) -> str:
    return f"{actor.name} is reading a book."


# ============================================================================
# HIT POINTS
# ============================================================================


def _standard_hit_points(actor: PlayerCharacter) -> int:
    return (10 + actor.stats.body) * actor.level


def _champion_hit_points(actor: PlayerCharacter) -> int:
    return _standard_hit_points(actor) + actor.stats.body * actor.level


CLASS_BEHAVIOURS: dict[CharacterClass, ClassBehaviour] = {
    CharacterClass.ADVENTURER: ClassBehaviour(
        attack=_sword_slash,
        adjust_damage=_full_damage,
        initiative_die=12,
        initiative_stat="spirit",
        prepare=_self_motivated,
        rest=_bandage_time,
        hit_points=_standard_hit_points,
        damage_type=DamageType.PHYSICAL,
    ),
    CharacterClass.WARRIOR: ClassBehaviour(
        attack=_improved_sword_slash,
        adjust_damage=_halve_foreign_damage,
        initiative_die=12,
        initiative_stat="spirit",
        prepare=_self_motivated,
        rest=_bandage_time,
        hit_points=_standard_hit_points,
        damage_type=DamageType.PHYSICAL,
    ),
    CharacterClass.CHAMPION: ClassBehaviour(
        attack=_improved_sword_slash,
        adjust_damage=_halve_foreign_damage,
        initiative_die=12,
        initiative_stat="spirit",
        prepare=_motivational_speech,
        rest=_improved_bandage_time,
        hit_points=_champion_hit_points,
        damage_type=DamageType.PHYSICAL,
    ),
    CharacterClass.CLERIC: ClassBehaviour(
        attack=_cleric_attack,
        adjust_damage=_full_damage,
        initiative_die=10,
        initiative_stat="spirit",
        prepare=_prayer_of_good_luck,
        rest=_prayer_of_self_healing,
        hit_points=_standard_hit_points,
        damage_type=DamageType.PSYCHICAL,
    ),
    CharacterClass.PALADIN: ClassBehaviour(
        attack=_paladin_attack,
        adjust_damage=_halve_psychical_damage,
        initiative_die=10,
        initiative_stat="spirit",
        prepare=_blessing_of_good_luck,
        rest=_prayer_of_mass_healing,
        hit_points=_standard_hit_points,
        damage_type=DamageType.PSYCHICAL,
    ),
    CharacterClass.MAGE: ClassBehaviour(
        attack=_mage_attack,
        adjust_damage=_absorb_with_shield,
        initiative_die=20,
        initiative_stat="mind",
        prepare=_mage_shield,
        rest=_read_a_book,
        hit_points=_standard_hit_points,
        damage_type=DamageType.PSYCHICAL,
    ),
}

require_exhaustive(CLASS_BEHAVIOURS, CharacterClass, "class behaviour")
