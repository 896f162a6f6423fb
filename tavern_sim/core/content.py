"""
Content repository for the simulator.

Loads the character roster, the monster catalog and the authored adventures
from JSON files in a data directory, and writes character progress back.
"""

import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

from catchery import log_warning
from pydantic import BaseModel, ConfigDict, Field, field_validator

from .constants import CharacterClass, DamageType, MonsterRank, level_for_xp
from .dice import parse_damage_dice
from .errors import PersistenceError, UnknownMonster
from .utils import cprint

CHARACTERS_FILE = "characters.json"
MONSTERS_FILE = "monsters.json"
ADVENTURES_FILE = "adventures.json"


class CharacterRecord(BaseModel):
    """A persisted player character, as stored in the roster."""

    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(description="The character name, unique in the roster.")
    player: str = Field(description="The name of the player owning it.")
    xp: int = Field(default=0, ge=0, description="Total experience points.")
    body: int = Field(description="Body attribute.")
    mind: int = Field(description="Mind attribute.")
    spirit: int = Field(description="Spirit attribute.")
    character_class: CharacterClass = Field(
        alias="class",
        description="The class tag of the character.",
    )

    @field_validator("character_class", mode="before")
    @classmethod
    def _parse_class(cls, value: Any) -> Any:
        if isinstance(value, str):
            return CharacterClass.parse(value)
        return value

    @property
    def level(self) -> int:
        return level_for_xp(self.xp)


class MonsterRecord(BaseModel):
    """A monster catalog entry."""

    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(description="The monster name.")
    challenge: MonsterRank = Field(description="The challenge rank.")
    xp: int = Field(alias="experience", ge=0, description="XP awarded.")
    hit_points: int = Field(alias="hitPoints", gt=0, description="Hit points.")
    initiative: int = Field(description="Base initiative.")
    damage_dice: str = Field(alias="damageDice", description="Damage die, e.g. 'd8'.")
    damage_type: DamageType = Field(alias="damageType", description="Damage type.")

    @field_validator("challenge", mode="before")
    @classmethod
    def _parse_challenge(cls, value: Any) -> Any:
        if isinstance(value, str):
            return MonsterRank.parse(value)
        return value

    @field_validator("damage_type", mode="before")
    @classmethod
    def _parse_damage_type(cls, value: Any) -> Any:
        if isinstance(value, str):
            return DamageType.parse(value)
        return value

    @field_validator("damage_dice")
    @classmethod
    def _check_damage_dice(cls, value: str) -> str:
        parse_damage_dice(value)
        return value.strip().lower()

    @property
    def dice_faces(self) -> int:
        """The number of faces of the damage die."""
        return parse_damage_dice(self.damage_dice)

    @property
    def reference(self) -> str:
        """The catalog reference, in the 'Name (Challenge)' form."""
        return f"{self.name} ({self.challenge.value})"


class AuthoredMonster(BaseModel):
    """A group of identical monsters placed in an encounter."""

    name: str
    challenge: MonsterRank
    quantity: int = Field(gt=0)

    @field_validator("challenge", mode="before")
    @classmethod
    def _parse_challenge(cls, value: Any) -> Any:
        if isinstance(value, str):
            return MonsterRank.parse(value)
        return value


class EncounterRecord(BaseModel):
    """One encounter of an adventure, numbered from 1."""

    number: int = Field(gt=0)
    monsters: list[AuthoredMonster] = Field(default_factory=list)


class AdventureRecord(BaseModel):
    """An authored adventure."""

    model_config = ConfigDict(populate_by_name=True)

    name: str
    number_of_encounters: int = Field(alias="numberOfEncounters", gt=0)
    encounters: list[EncounterRecord] = Field(default_factory=list)

    def encounter(self, number: int) -> EncounterRecord | None:
        """Returns the encounter with the given number, if authored."""
        for encounter in self.encounters:
            if encounter.number == number:
                return encounter
        return None


class ContentRepository:
    """
    File-backed access to the character roster, the monster catalog and the
    adventures. Collections are loaded eagerly and kept in insertion order.
    """

    characters: dict[str, CharacterRecord]
    monsters: dict[str, MonsterRecord]
    adventures: dict[str, AdventureRecord]

    def __init__(self, data_dir: Path) -> None:
        """
        Initialize the ContentRepository.

        Args:
            data_dir (Path):
                The directory containing the data files to load.

        """
        self.data_dir = Path(data_dir)
        self.reload()

    def reload(self) -> None:
        """(Re)load all JSON assets from disk."""
        self.characters = _load_json_file(
            self.data_dir / CHARACTERS_FILE,
            self._load_characters,
            "characters",
        )
        self.monsters = _load_json_file(
            self.data_dir / MONSTERS_FILE,
            self._load_monsters,
            "monsters",
        )
        self.adventures = _load_json_file(
            self.data_dir / ADVENTURES_FILE,
            self._load_adventures,
            "adventures",
        )

    def get_character(self, name: str) -> CharacterRecord | None:
        """Get a character by name, or None if not found."""
        return self.characters.get(name)

    def get_monster(self, name: str) -> MonsterRecord:
        """
        Get a monster from the catalog.

        Args:
            name (str): The monster name.

        Returns:
            MonsterRecord: The catalog entry.

        Raises:
            UnknownMonster: If the catalog has no such monster.

        """
        record = self.monsters.get(name)
        if record is None:
            raise UnknownMonster(name)
        return record

    def get_adventure(self, name: str) -> AdventureRecord | None:
        """Get an adventure by name, or None if not found."""
        return self.adventures.get(name)

    def adventure_exists(self, name: str) -> bool:
        """Adventure names are compared ignoring case."""
        return any(existing.lower() == name.lower() for existing in self.adventures)

    def characters_by_player(self, player: str) -> list[CharacterRecord]:
        """Returns the characters whose player name contains the given text."""
        wanted = player.strip().lower()
        return [c for c in self.characters.values() if wanted in c.player.lower()]

    def save_adventure(self, adventure: AdventureRecord) -> None:
        """
        Appends a new adventure and writes the adventures file.

        Args:
            adventure (AdventureRecord): The adventure to store.

        Raises:
            PersistenceError: If an adventure with the same name exists.

        """
        if self.adventure_exists(adventure.name):
            raise PersistenceError(
                f"An adventure named '{adventure.name}' already exists."
            )
        self.adventures[adventure.name] = adventure
        _write_json_file(
            self.data_dir / ADVENTURES_FILE,
            [
                {"adventure": a.model_dump(mode="json", by_alias=True)}
                for a in self.adventures.values()
            ],
        )

    def character_exists(self, name: str) -> bool:
        """Character names are compared ignoring case."""
        return any(existing.lower() == name.lower() for existing in self.characters)

    def add_character(self, character: CharacterRecord) -> None:
        """
        Appends a new character to the roster and writes the characters file.

        Raises:
            PersistenceError: If a character with the same name exists.

        """
        if self.character_exists(character.name):
            raise PersistenceError(
                f"A character named '{character.name}' already exists."
            )
        self.characters[character.name] = character
        self._write_characters()

    def delete_character(self, name: str) -> CharacterRecord | None:
        """
        Removes a character from the roster and writes the characters file.

        Args:
            name (str): The exact name of the character.

        Returns:
            CharacterRecord | None: The removed character, or None (with a
                warning) when the roster has no such character.

        """
        removed = self.characters.pop(name, None)
        if removed is None:
            log_warning(
                f"Character '{name}' is not in the roster, nothing deleted",
                {"character": name, "context": "delete_character"},
            )
            return None
        self._write_characters()
        return removed

    def update_characters(self, records: list[CharacterRecord]) -> None:
        """
        Writes back the experience and class of the given characters.

        Characters missing from the roster are skipped with a warning.

        Args:
            records (list[CharacterRecord]): The up-to-date characters.

        """
        for record in records:
            stored = self.characters.get(record.name)
            if stored is None:
                log_warning(
                    f"Character '{record.name}' is not in the roster, not saved",
                    {"character": record.name, "context": "update_characters"},
                )
                continue
            self.characters[record.name] = stored.model_copy(
                update={"xp": record.xp, "character_class": record.character_class}
            )
        self._write_characters()

    def _write_characters(self) -> None:
        _write_json_file(
            self.data_dir / CHARACTERS_FILE,
            [
                c.model_dump(mode="json", by_alias=True)
                for c in self.characters.values()
            ],
        )

    @staticmethod
    def _load_characters(data: list[dict]) -> dict[str, CharacterRecord]:
        """
        Load characters from JSON data.

        Raises:
            ValueError: If duplicate character names are found.

        """
        characters: dict[str, CharacterRecord] = {}
        for entry in data:
            character = CharacterRecord(**entry)
            if character.name in characters:
                raise ValueError(f"Duplicate character name: {character.name}")
            characters[character.name] = character
        return characters

    @staticmethod
    def _load_monsters(data: list[dict]) -> dict[str, MonsterRecord]:
        """
        Load the monster catalog from JSON data.

        Raises:
            ValueError: If duplicate monster names are found.

        """
        monsters: dict[str, MonsterRecord] = {}
        for entry in data:
            monster = MonsterRecord(**entry)
            if monster.name in monsters:
                raise ValueError(f"Duplicate monster name: {monster.name}")
            monsters[monster.name] = monster
        return monsters

    @staticmethod
    def _load_adventures(data: list[dict]) -> dict[str, AdventureRecord]:
        """Load adventures, each wrapped in an {"adventure": ...} object."""
        adventures: dict[str, AdventureRecord] = {}
        for entry in data:
            adventure = AdventureRecord(**entry.get("adventure", entry))
            if adventure.name in adventures:
                raise ValueError(f"Duplicate adventure name: {adventure.name}")
            adventures[adventure.name] = adventure
        return adventures


def _load_json_file(
    filepath: Path,
    loader_func: Callable[[list[dict]], dict[str, Any]],
    description: str,
) -> dict[str, Any]:
    """Helper to load and validate JSON files."""
    try:
        if not filepath.exists():
            raise FileNotFoundError(f"File not found: {filepath}")
        if not filepath.is_file():
            raise ValueError(f"Not a file: {filepath}")
        with open(filepath, encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, list):
            raise ValueError(f"Expected list in {filepath}, got {type(data).__name__}")
        if not data:
            log_warning(
                f"No {description} found in {filepath.name}",
                {"file": str(filepath), "context": "content_loading"},
            )
        return loader_func(data)
    except (json.JSONDecodeError, OSError, ValueError) as e:
        raise PersistenceError(f"File {filepath} raised an error: {e}") from e


def _write_json_file(filepath: Path, data: list[dict]) -> None:
    """Helper to write a JSON list, pretty printed."""
    try:
        with open(filepath, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False)
    except OSError as e:
        raise PersistenceError(f"Couldn't write {filepath}: {e}") from e
    cprint(f"  Saved {filepath.name}", style="dim")
