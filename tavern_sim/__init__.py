"""
Tavern combat simulator.

A turn-based party versus monsters combat engine for a tavern text
adventure: character classes with their evolution chain, monster ranks, the
initiative-ordered battle scheduler and the JSON content it plays from.
"""

__version__ = "0.1.0"
