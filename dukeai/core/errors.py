from __future__ import annotations


class RulesInvariantError(AssertionError):
    """A caller broke a precondition of the rules engine."""


class OutOfBoundsError(RulesInvariantError):
    pass


class IllegalMoveError(RulesInvariantError):
    pass


class TileDefinitionError(RulesInvariantError):
    pass


def require(condition: bool, message: str, error: type = RulesInvariantError) -> None:
    if not condition:
        raise error(message)
