"""
Core module of the tavern combat simulator.

Contains the game constants, the roll source, the error taxonomy, logging
setup, console helpers and the JSON content repository.
"""

from .constants import (
    CHAMPION_LEVEL,
    DATA_DIR_ENV,
    LOG_LEVEL_ENV,
    MAX_LEVEL,
    MAX_PARTY_SIZE,
    MIN_PARTY_SIZE,
    PALADIN_LEVEL,
    WARRIOR_LEVEL,
    XP_PER_LEVEL,
    CharacterClass,
    DamageType,
    MonsterRank,
    NiceEnum,
    level_for_xp,
    xp_for_level,
)
from .content import (
    AdventureRecord,
    AuthoredMonster,
    CharacterRecord,
    ContentRepository,
    EncounterRecord,
    MonsterRecord,
)
from .character_creation import (
    STARTING_CLASSES,
    attribute_modifier,
    class_for_level,
    is_valid_character_name,
    new_character,
    roll_attributes,
)
from .dice import RandomRollSource, RollSource, parse_damage_dice, roll
from .errors import (
    BattleNotInProgress,
    DuplicatePartyMember,
    GameException,
    MalformedMonsterReference,
    PersistenceError,
    TooManyBosses,
    UnknownMonster,
)
from .logging import get_logger, setup_logging
from .utils import ccapture, cerror, cprint, crule

__all__ = [
    "CHAMPION_LEVEL",
    "DATA_DIR_ENV",
    "LOG_LEVEL_ENV",
    "MAX_LEVEL",
    "MAX_PARTY_SIZE",
    "MIN_PARTY_SIZE",
    "PALADIN_LEVEL",
    "WARRIOR_LEVEL",
    "XP_PER_LEVEL",
    "CharacterClass",
    "DamageType",
    "MonsterRank",
    "NiceEnum",
    "level_for_xp",
    "xp_for_level",
    "AdventureRecord",
    "AuthoredMonster",
    "CharacterRecord",
    "ContentRepository",
    "EncounterRecord",
    "MonsterRecord",
    "STARTING_CLASSES",
    "attribute_modifier",
    "class_for_level",
    "is_valid_character_name",
    "new_character",
    "roll_attributes",
    "RandomRollSource",
    "RollSource",
    "parse_damage_dice",
    "roll",
    "BattleNotInProgress",
    "DuplicatePartyMember",
    "GameException",
    "MalformedMonsterReference",
    "PersistenceError",
    "TooManyBosses",
    "UnknownMonster",
    "get_logger",
    "setup_logging",
    "ccapture",
    "cerror",
    "cprint",
    "crule",
]
