"""Rules engine for the Duke tile game."""

from .bag import DiscardBag, TileBag
from .board import Board
from .errors import IllegalMoveError, OutOfBoundsError, RulesInvariantError, TileDefinitionError
from .game_board import BOARD_SIZE, DukeInitialLocation, FootmenSetup, GameBoard
from .geometry import Coordinates
from .moves import (
    ApplyNonCommandTileAction,
    DukeOffset,
    MoveKind,
    PlaceNewTile,
    PossibleMove,
    PossiblePlacement,
    PossibleTileAction,
    PullAndPlay,
)
from .offset import (
    FourWaySymmetric,
    HorizontalOffset,
    HorizontalSymmetricOffset,
    Offsets,
    VerticalOffset,
)
from .state import TIE_THRESHOLD, CanPullNewTileResult, GameResult, GameState
from .tile import CurrentSide, Owner, PlacedTile, Tile, TileAction, TileSide
from .units import STARTING_BAG, UNITS, build_tile, starting_tiles

__all__ = [
    "Board",
    "Coordinates",
    "BOARD_SIZE",
    "TIE_THRESHOLD",
    "STARTING_BAG",
    "UNITS",
    "build_tile",
    "starting_tiles",
    "RulesInvariantError",
    "OutOfBoundsError",
    "IllegalMoveError",
    "TileDefinitionError",
    "HorizontalOffset",
    "VerticalOffset",
    "Offsets",
    "HorizontalSymmetricOffset",
    "FourWaySymmetric",
    "TileAction",
    "TileSide",
    "Tile",
    "CurrentSide",
    "Owner",
    "PlacedTile",
    "TileBag",
    "DiscardBag",
    "DukeOffset",
    "MoveKind",
    "PullAndPlay",
    "PlaceNewTile",
    "ApplyNonCommandTileAction",
    "PossibleMove",
    "PossiblePlacement",
    "PossibleTileAction",
    "DukeInitialLocation",
    "FootmenSetup",
    "GameBoard",
    "CanPullNewTileResult",
    "GameResult",
    "GameState",
]
