"""
Tests for the battle scheduler.
"""

import pytest

from tavern_sim.combat.adventure import Adventure
from tavern_sim.combat.battle_manager import (
    BattleManager,
    BattleSignal,
    BattleState,
)
from tavern_sim.core.constants import CharacterClass, MonsterRank
from tavern_sim.core.content import CharacterRecord, MonsterRecord
from tavern_sim.core.errors import BattleNotInProgress, DuplicatePartyMember


def monster_record(name="Goblin", challenge="Minion", xp=10, hit_points=1, initiative=0, dice="d4"):
    return MonsterRecord(
        name=name,
        challenge=challenge,
        experience=xp,
        hitPoints=hit_points,
        initiative=initiative,
        damageDice=dice,
        damageType="Physical",
    )


def make_manager(dice, party, encounters=1):
    adventure = Adventure("Goblin Warrens", encounters, dice)
    for character in party:
        adventure.add_character(character)
    return BattleManager(adventure)


@pytest.fixture
def adventurers(make_character):
    return [make_character(name=name) for name in ("Jinx", "Borin", "Ilsa")]


def test_single_minion_adventure_is_won(fixed, adventurers):
    manager = make_manager(fixed(5), adventurers)
    manager.adventure.insert_monsters(monster_record(hit_points=1, xp=10), 1, encounter=1)
    manager.start_encounter(1)

    outcomes = list(manager.run_encounter())

    assert manager.state is BattleState.ADVENTURE_WON
    assert outcomes[-1].signal is BattleSignal.NO_LIVING_MONSTERS
    assert outcomes[-1].lines[-1] == "Congratulations! Your party completed “Goblin Warrens”"
    assert "Goblin dies." in outcomes[0].narrative

    report = manager.rest_phase()

    assert report.xp_lines == ["Jinx gains 10 xp.", "Borin gains 10 xp.", "Ilsa gains 10 xp."]
    for record in manager.party_records():
        assert record.xp == 10
        assert record.level == 1
        assert record.character_class is CharacterClass.ADVENTURER


def test_rest_phase_only_once(fixed, adventurers):
    manager = make_manager(fixed(5), adventurers)
    manager.adventure.insert_monsters(monster_record(), 1, encounter=1)
    manager.start_encounter(1)
    list(manager.run_encounter())
    manager.rest_phase()

    with pytest.raises(BattleNotInProgress):
        manager.rest_phase()


def test_stepping_a_finished_battle_raises(fixed, adventurers):
    manager = make_manager(fixed(5), adventurers)
    manager.adventure.insert_monsters(monster_record(), 1, encounter=1)

    with pytest.raises(BattleNotInProgress):
        manager.step()

    manager.start_encounter(1)
    list(manager.run_encounter())
    with pytest.raises(BattleNotInProgress):
        manager.step()


def test_cleared_encounter_leads_to_the_next(fixed, adventurers):
    manager = make_manager(fixed(5), adventurers, encounters=2)
    manager.adventure.insert_monsters(monster_record("Goblin"), 1, encounter=1)
    manager.adventure.insert_monsters(monster_record("Rat", xp=5), 1, encounter=2)

    manager.start_encounter(1)
    last = list(manager.run_encounter())[-1]
    assert last.state is BattleState.ENCOUNTER_CLEARED
    assert last.lines[-1].startswith("All monsters in this encounter are defeated!")
    assert manager.rest_phase().xp_lines[0] == "Jinx gains 10 xp."

    manager.start_encounter(2)
    assert manager.state is BattleState.ROUND_IN_PROGRESS
    assert manager.round == 1
    list(manager.run_encounter())
    assert manager.state is BattleState.ADVENTURE_WON
    manager.rest_phase()
    assert [c.xp for c in manager.adventure.party] == [15, 15, 15]


def test_round_boundaries_follow_living_entities(fixed, adventurers):
    # Every roll is a 1: all attacks miss and nobody ever falls.
    manager = make_manager(fixed(1), adventurers)
    manager.adventure.insert_monsters(
        monster_record("Ogre", "Boss", hit_points=50, dice="d10"), 1, encounter=1
    )
    manager.start_encounter(1)

    outcomes = [manager.step() for _ in range(12)]

    boundaries = [i for i, o in enumerate(outcomes) if o.state is BattleState.ROUND_BOUNDARY]
    assert boundaries == [3, 7, 11]
    assert [outcomes[i].round for i in boundaries] == [2, 3, 4]
    assert all(outcomes[i].acted == 0 for i in boundaries)
    assert outcomes[3].lines[-1] == "End of round 1."
    assert [o.acted for o in outcomes[:3]] == [1, 2, 3]
    assert all("Fails and deals 0" in o.narrative for o in outcomes)


def test_fallen_entities_do_not_act(fixed, make_character):
    jinx = make_character(name="Jinx")
    borin = make_character(name="Borin")
    manager = make_manager(fixed(1), [jinx, borin])
    manager.adventure.insert_monsters(
        monster_record("Ogre", "Boss", hit_points=50, dice="d10"), 1, encounter=1
    )
    manager.start_encounter(1)
    borin.lose_hit_points(100)

    first = manager.step()
    second = manager.step()
    third = manager.step()

    assert first.actor == "Jinx"
    assert second.actor == "Borin"
    assert second.lines == []
    assert third.actor == "Ogre"
    assert third.state is BattleState.ROUND_BOUNDARY
    assert "Jinx" in third.narrative


def test_party_wiped(fixed, make_character):
    frail = make_character(name="Jinx", body=-9, spirit=0)
    manager = make_manager(fixed(6), [frail])
    manager.adventure.insert_monsters(
        monster_record("Goblin", hit_points=50, initiative=10, dice="d6"), 1, encounter=1
    )
    manager.start_encounter(1)

    outcome = manager.step()

    assert manager.state is BattleState.PARTY_WIPED
    assert outcome.signal is BattleSignal.NO_LIVING_CHARACTERS
    assert outcome.lines[0].endswith("Jinx falls unconscious.")
    assert "End of round 1." in outcome.lines
    assert outcome.lines[-1] == BattleSignal.NO_LIVING_CHARACTERS.message
    with pytest.raises(BattleNotInProgress):
        manager.rest_phase()


def test_monster_target_is_the_weakest(fixed, adventurers):
    manager = make_manager(fixed(1), adventurers)
    first, second, third = manager.adventure.insert_monsters(
        monster_record(hit_points=9), 3, encounter=1
    )
    manager.start_encounter(1)
    first.lose_hit_points(2)
    second.lose_hit_points(2)

    assert manager.select_monster_target() is first
    first.lose_hit_points(10)
    assert manager.select_monster_target() is second
    second.lose_hit_points(10)
    third.lose_hit_points(10)
    assert manager.select_monster_target() is None


def test_character_target_is_drawn_among_the_living(scripted, adventurers):
    dice = scripted([1, 0])
    manager = make_manager(dice, adventurers)
    adventurers[0].lose_hit_points(100)

    assert manager.select_character_target() is adventurers[2]
    assert manager.select_character_target() is adventurers[1]
    assert dice.requests == [(0, 1), (0, 1)]

    for character in adventurers:
        character.lose_hit_points(100)
    assert manager.select_character_target() is None


def test_add_character_from_record(fixed):
    manager = make_manager(fixed(1), [])
    record = CharacterRecord(
        name="Morwen", player="Laia", xp=250, body=0, mind=3, spirit=0, character_class="Mage"
    )

    character = manager.add_character(record)

    assert character.level == 3
    assert character.character_class is CharacterClass.MAGE
    with pytest.raises(DuplicatePartyMember):
        manager.add_character(record)


def test_prepare_party_and_status(fixed, make_character):
    mage = make_character(name="Morwen", character_class=CharacterClass.MAGE, mind=2)
    manager = make_manager(fixed(3), [make_character(name="Jinx"), mage])

    lines = manager.prepare_party()

    assert lines == [
        "Jinx uses Self-Motivated. Their spirit increases in +1.",
        "Morwen uses Mage Shield. Shield recharges to 5.",
    ]
    assert manager.party_status()[1].endswith("(Shield: 5)")


def test_boss_rank_comes_from_the_encounter(fixed, adventurers):
    manager = make_manager(fixed(1), adventurers)
    (ogre,) = manager.adventure.insert_monsters(
        monster_record("Ogre", "Minion"), 1, encounter=1, rank=MonsterRank.BOSS
    )
    assert ogre.rank is MonsterRank.BOSS


def test_empty_battlefield_ends_with_the_party_wiped(fixed):
    manager = make_manager(fixed(1), [])
    manager.start_encounter(1)

    outcome = manager.step()

    assert outcome.state is BattleState.PARTY_WIPED
    assert outcome.signal is BattleSignal.NO_LIVING_CHARACTERS
    assert outcome.actor is None
    assert outcome.lines == [BattleSignal.NO_LIVING_CHARACTERS.message]
