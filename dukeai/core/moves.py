"""Moves as requested by a player and as recorded for undo."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple, Union

from .geometry import Coordinates
from .tile import Owner, PlacedTile


class DukeOffset(Enum):
    """Where a new tile lands relative to its owner's duke, in board directions."""

    TOP = (0, -1)
    BOTTOM = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

    @property
    def delta(self) -> Tuple[int, int]:
        return self.value

    def apply(self, duke: Coordinates) -> Coordinates:
        return duke.shifted(*self.value)


class MoveKind(Enum):
    """Classification of an action from one cell to another."""

    MOVEMENT = "movement"
    STRIKE = "strike"
    INVALID = "invalid"


@dataclass(frozen=True)
class PullAndPlay:
    offset: DukeOffset


@dataclass(frozen=True)
class PlaceNewTile:
    offset: DukeOffset


@dataclass(frozen=True)
class ApplyNonCommandTileAction:
    src: Coordinates
    dst: Coordinates


GameMove = Union[PullAndPlay, PlaceNewTile, ApplyNonCommandTileAction]
BoardMove = Union[PlaceNewTile, ApplyNonCommandTileAction]


@dataclass(frozen=True)
class PossiblePlacement:
    offset: DukeOffset
    owner: Owner

    def to_game_move(self) -> PullAndPlay:
        return PullAndPlay(self.offset)


@dataclass(frozen=True, eq=False)
class PossibleTileAction:
    """A tile action together with a snapshot of what it captures, if anything."""

    src: Coordinates
    dst: Coordinates
    capturing: Optional[PlacedTile] = None

    def to_game_move(self) -> ApplyNonCommandTileAction:
        return ApplyNonCommandTileAction(self.src, self.dst)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PossibleTileAction):
            return NotImplemented
        return self.src == other.src and self.dst == other.dst and self.capturing == other.capturing

    def __hash__(self) -> int:
        return hash((self.src, self.dst))


PossibleMove = Union[PossiblePlacement, PossibleTileAction]
