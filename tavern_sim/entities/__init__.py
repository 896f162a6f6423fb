"""
Combat entities: player characters, monsters and the battlefield they share.
"""

from .base import CombatEntity, Side, require_exhaustive
from .battlefield import Battlefield
from .character import EVOLUTIONS, Attributes, PlayerCharacter
from .character_behaviours import CLASS_BEHAVIOURS, ClassBehaviour
from .monster import RANK_ATTACKS, Monster

__all__ = [
    "CombatEntity",
    "Side",
    "require_exhaustive",
    "Battlefield",
    "EVOLUTIONS",
    "Attributes",
    "PlayerCharacter",
    "CLASS_BEHAVIOURS",
    "ClassBehaviour",
    "RANK_ATTACKS",
    "Monster",
]
