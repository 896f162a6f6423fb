"""
Tests for the JSON content repository.
"""

import json

import pytest
from pydantic import ValidationError

from tavern_sim.core.constants import CharacterClass, DamageType, MonsterRank
from tavern_sim.core.content import (
    AdventureRecord,
    AuthoredMonster,
    CharacterRecord,
    ContentRepository,
    EncounterRecord,
    MonsterRecord,
)
from tavern_sim.core.errors import PersistenceError, UnknownMonster

CHARACTERS = [
    {"name": "Jinx", "player": "Maria", "xp": 0, "body": 1, "mind": 0, "spirit": 2, "class": "Adventurer"},
    {"name": "Ilsa", "player": "Laia", "xp": 140, "body": 0, "mind": 2, "spirit": 1, "class": "cleric"},
]

MONSTERS = [
    {"name": "Goblin", "challenge": "Minion", "experience": 10, "hitPoints": 9, "initiative": 6, "damageDice": "d6", "damageType": "Physical"},
    {"name": "Mind Flayer", "challenge": "Boss", "experience": 150, "hitPoints": 80, "initiative": 7, "damageDice": "d12", "damageType": "Psychical"},
]

ADVENTURES = [
    {
        "adventure": {
            "name": "Goblin Warrens",
            "numberOfEncounters": 1,
            "encounters": [
                {"number": 1, "monsters": [{"name": "Goblin", "challenge": "Minion", "quantity": 2}]}
            ],
        }
    }
]


@pytest.fixture
def data_dir(tmp_path):
    (tmp_path / "characters.json").write_text(json.dumps(CHARACTERS), encoding="utf-8")
    (tmp_path / "monsters.json").write_text(json.dumps(MONSTERS), encoding="utf-8")
    (tmp_path / "adventures.json").write_text(json.dumps(ADVENTURES), encoding="utf-8")
    return tmp_path


@pytest.fixture
def repo(data_dir):
    return ContentRepository(data_dir)


def test_loads_every_collection(repo):
    assert list(repo.characters) == ["Jinx", "Ilsa"]
    assert repo.get_character("Ilsa").character_class is CharacterClass.CLERIC
    assert repo.get_character("Ilsa").level == 2

    goblin = repo.get_monster("Goblin")
    assert goblin.challenge is MonsterRank.MINION
    assert goblin.hit_points == 9
    assert goblin.dice_faces == 6
    assert goblin.damage_type is DamageType.PHYSICAL
    assert goblin.reference == "Goblin (Minion)"

    adventure = repo.get_adventure("Goblin Warrens")
    assert adventure.number_of_encounters == 1
    assert adventure.encounter(1).monsters[0].quantity == 2
    assert adventure.encounter(2) is None


def test_unknown_monster_raises(repo):
    with pytest.raises(UnknownMonster):
        repo.get_monster("Dragon")


def test_adventure_names_ignore_case(repo):
    assert repo.adventure_exists("goblin warrens")
    assert not repo.adventure_exists("Dragon Lair")


def test_characters_by_player(repo):
    assert [c.name for c in repo.characters_by_player("lai")] == ["Ilsa"]
    assert len(repo.characters_by_player("")) == 2


def test_save_adventure_appends_and_persists(repo, data_dir):
    record = AdventureRecord(
        name="Dragon Lair",
        number_of_encounters=1,
        encounters=[
            EncounterRecord(
                number=1,
                monsters=[AuthoredMonster(name="Mind Flayer", challenge=MonsterRank.BOSS, quantity=1)],
            )
        ],
    )
    repo.save_adventure(record)

    stored = json.loads((data_dir / "adventures.json").read_text(encoding="utf-8"))
    assert [entry["adventure"]["name"] for entry in stored] == ["Goblin Warrens", "Dragon Lair"]
    assert stored[1]["adventure"]["numberOfEncounters"] == 1

    reloaded = ContentRepository(data_dir)
    assert reloaded.get_adventure("Dragon Lair").encounters[0].monsters[0].challenge is MonsterRank.BOSS


def test_save_adventure_rejects_duplicates(repo):
    duplicate = AdventureRecord(name="GOBLIN WARRENS", number_of_encounters=1)
    with pytest.raises(PersistenceError):
        repo.save_adventure(duplicate)


def test_update_characters_writes_xp_and_class(repo, data_dir):
    updated = repo.get_character("Jinx").model_copy(
        update={"xp": 310, "character_class": CharacterClass.WARRIOR}
    )
    repo.update_characters([updated])

    stored = json.loads((data_dir / "characters.json").read_text(encoding="utf-8"))
    assert stored[0]["xp"] == 310
    assert stored[0]["class"] == "Warrior"
    assert stored[1]["class"] == "Cleric"


def test_update_characters_skips_unknown_characters(repo, mocker):
    warn = mocker.patch("tavern_sim.core.content.log_warning")
    stranger = CharacterRecord(
        name="Stranger", player="Nobody", xp=0, body=0, mind=0, spirit=0, character_class=CharacterClass.MAGE
    )
    repo.update_characters([stranger])

    warn.assert_called_once()
    assert repo.get_character("Stranger") is None


def test_missing_file_raises_persistence_error(tmp_path):
    with pytest.raises(PersistenceError):
        ContentRepository(tmp_path)


def test_malformed_json_raises_persistence_error(data_dir):
    (data_dir / "monsters.json").write_text("{not json", encoding="utf-8")
    with pytest.raises(PersistenceError):
        ContentRepository(data_dir)


def test_monster_record_rejects_bad_dice():
    entry = dict(MONSTERS[0], damageDice="2d6")
    with pytest.raises(ValidationError):
        MonsterRecord(**entry)


def test_character_record_rejects_unknown_class():
    entry = dict(CHARACTERS[0], **{"class": "Bard"})
    with pytest.raises(ValidationError):
        CharacterRecord(**entry)


def test_add_character_appends_and_persists(repo, data_dir):
    newcomer = CharacterRecord(
        name="Morwen", player="Laia", xp=200, body=0, mind=2, spirit=1, character_class=CharacterClass.MAGE
    )
    repo.add_character(newcomer)

    stored = json.loads((data_dir / "characters.json").read_text(encoding="utf-8"))
    assert [c["name"] for c in stored] == ["Jinx", "Ilsa", "Morwen"]
    assert stored[2]["class"] == "Mage"
    assert ContentRepository(data_dir).get_character("Morwen").level == 3


def test_add_character_rejects_names_ignoring_case(repo):
    duplicate = CharacterRecord(
        name="JINX", player="Other", xp=0, body=0, mind=0, spirit=0, character_class=CharacterClass.ADVENTURER
    )
    with pytest.raises(PersistenceError):
        repo.add_character(duplicate)
    assert list(repo.characters) == ["Jinx", "Ilsa"]


def test_delete_character_persists(repo, data_dir):
    removed = repo.delete_character("Jinx")

    assert removed.name == "Jinx"
    stored = json.loads((data_dir / "characters.json").read_text(encoding="utf-8"))
    assert [c["name"] for c in stored] == ["Ilsa"]


def test_delete_unknown_character_warns(repo, data_dir, mocker):
    warn = mocker.patch("tavern_sim.core.content.log_warning")
    before = (data_dir / "characters.json").read_text(encoding="utf-8")

    assert repo.delete_character("Stranger") is None

    warn.assert_called_once()
    assert (data_dir / "characters.json").read_text(encoding="utf-8") == before
