"""
Combat flow: the adventure aggregate, the battle scheduler and adventure
authoring.
"""

from .adventure import Adventure, InitiativeEntry, make_names_unique
from .battle_manager import (
    BattleManager,
    BattleSignal,
    BattleState,
    RestReport,
    TurnOutcome,
)
from .encounter_builder import (
    AdventureBuilder,
    EncounterBuilder,
    parse_monster_reference,
)

__all__ = [
    "Adventure",
    "InitiativeEntry",
    "make_names_unique",
    "BattleManager",
    "BattleSignal",
    "BattleState",
    "RestReport",
    "TurnOutcome",
    "AdventureBuilder",
    "EncounterBuilder",
    "parse_monster_reference",
]
