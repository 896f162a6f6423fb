"""
Tests for experience, leveling and class evolution.
"""

from tavern_sim.core.constants import CharacterClass
from tavern_sim.entities.character import EVOLUTIONS


def test_gain_without_level_up(make_character):
    hero = make_character(name="Jinx")

    assert hero.add_experience(10) == "Jinx gains 10 xp."
    assert hero.xp == 10
    assert hero.level == 1
    assert hero.character_class is CharacterClass.ADVENTURER


def test_level_up_is_narrated(make_character):
    hero = make_character(name="Jinx", xp=90)

    assert hero.add_experience(20) == "Jinx gains 20 xp. Jinx levels up. They are now lvl 2!"
    assert hero.level == 2


def test_adventurer_evolves_to_warrior(make_character):
    hero = make_character(name="Jinx", xp=290)

    narrative = hero.add_experience(10)

    assert narrative.splitlines() == [
        "Jinx gains 10 xp. Jinx levels up. They are now lvl 4!",
        "Jinx evolves to Warrior!",
    ]
    assert hero.character_class is CharacterClass.WARRIOR


def test_evolution_fires_once(make_character):
    hero = make_character(name="Jinx", xp=290)
    hero.add_experience(10)

    narrative = hero.add_experience(50)

    assert narrative == "Jinx gains 50 xp."
    assert hero.character_class is CharacterClass.WARRIOR


def test_big_gain_walks_the_whole_chain(make_character):
    hero = make_character(name="Jinx")

    narrative = hero.add_experience(800)

    assert narrative.splitlines()[1:] == [
        "Jinx evolves to Warrior!",
        "Jinx evolves to Champion!",
    ]
    assert hero.character_class is CharacterClass.CHAMPION


def test_champion_and_paladin_are_final(make_character):
    champion = make_character(character_class=CharacterClass.CHAMPION, xp=700)
    paladin = make_character(character_class=CharacterClass.PALADIN, xp=400)

    for character in (champion, paladin):
        klass = character.character_class
        narrative = character.add_experience(500)
        assert "evolves" not in narrative
        assert character.character_class is klass
        assert character.level == 10


def test_cleric_evolves_to_paladin(make_character):
    cleric = make_character(name="Ilsa", character_class=CharacterClass.CLERIC, xp=350)

    narrative = cleric.add_experience(50)

    assert narrative.splitlines()[-1] == "Ilsa evolves to Paladin!"
    assert cleric.character_class is CharacterClass.PALADIN


def test_mage_never_evolves(make_character):
    mage = make_character(character_class=CharacterClass.MAGE)

    narrative = mage.add_experience(2000)

    assert mage.level == 10
    assert "evolves" not in narrative
    assert mage.character_class is CharacterClass.MAGE


def test_max_hit_points_are_fixed_for_the_adventure(make_character):
    hero = make_character(body=1)
    before = hero.max_hit_points

    hero.add_experience(300)

    assert hero.max_hit_points == before


def test_evolution_chain_only_moves_forward():
    for source, (level, target) in EVOLUTIONS.items():
        assert target not in EVOLUTIONS or EVOLUTIONS[target][0] > level
        assert source is not target


def test_record_keeps_the_evolved_class(make_character):
    hero = make_character(name="Jinx", xp=290)
    hero.add_experience(10)

    record = hero.to_record()

    assert record.xp == 300
    assert record.character_class is CharacterClass.WARRIOR
