"""
Error taxonomy of the combat engine.

All of these are expected, caller-visible conditions: the presentation layer
shows their message and carries on. Normal battle termination is not an
error and is reported through BattleState instead.
"""


class GameException(Exception):
    """Base class for every recoverable game condition."""


class DuplicatePartyMember(GameException):
    """A character already in the party was added again."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Character {name} is already in the party!")
        self.name = name


class TooManyBosses(GameException):
    """An encounter would hold more than one Boss."""

    def __init__(self) -> None:
        super().__init__("You can't have more than one boss in an encounter")


class MalformedMonsterReference(GameException):
    """A monster reference is not in the 'Name (Challenge)' form."""

    def __init__(self, reference: str) -> None:
        super().__init__(f"Invalid monster format name: {reference}")
        self.reference = reference


class UnknownMonster(GameException):
    """An authored monster has no entry in the monster catalog."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Monster '{name}' is not in the catalog")
        self.name = name


class PersistenceError(GameException):
    """A data file could not be read, parsed or written."""


class BattleNotInProgress(GameException):
    """The battle was stepped without an encounter being fought."""
