from __future__ import annotations

import logging
from enum import Enum
from typing import Dict, Iterator, List, Optional, Sequence, Tuple

import numpy as np

from .bag import DiscardBag, TileBag
from .errors import IllegalMoveError, require
from .game_board import GameBoard, LegalMove, Setup
from .geometry import Coordinates
from .moves import (
    ApplyNonCommandTileAction,
    DukeOffset,
    GameMove,
    PlaceNewTile,
    PossibleMove,
    PossiblePlacement,
    PossibleTileAction,
    PullAndPlay,
)
from .tile import CurrentSide, Owner, PlacedTile, Tile

logger = logging.getLogger(__name__)

TIE_THRESHOLD = 10


class GameResult(Enum):
    ONGOING = "ongoing"
    TIE = "tie"
    TOP_PLAYER_WON = "top_player_won"
    BOTTOM_PLAYER_WON = "bottom_player_won"

    @staticmethod
    def won(owner: Owner) -> "GameResult":
        return GameResult.TOP_PLAYER_WON if owner is Owner.TOP_PLAYER else GameResult.BOTTOM_PLAYER_WON

    @property
    def winner(self) -> Optional[Owner]:
        if self is GameResult.TOP_PLAYER_WON:
            return Owner.TOP_PLAYER
        if self is GameResult.BOTTOM_PLAYER_WON:
            return Owner.BOTTOM_PLAYER
        return None

    @property
    def is_over(self) -> bool:
        return self is not GameResult.ONGOING


class CanPullNewTileResult(Enum):
    EMPTY_BAG = "empty_bag"
    NO_SPACE_NEAR_DUKE = "no_space_near_duke"
    DUKE_ALWAYS_IN_GUARD = "duke_always_in_guard"
    OK = "ok"


class GameState:
    """Turn-sequenced game: board, bags, discards and the pending pulled tile.

    Every mutation goes through :meth:`make_a_move`, which returns the descriptor
    :meth:`undo` needs to rewind it exactly. Illegal requests raise
    :class:`~dukeai.core.errors.IllegalMoveError`; callers are expected to
    consult :meth:`can_make_a_move` first.
    """

    def __init__(
        self,
        board: GameBoard,
        bags: Dict[Owner, TileBag],
        current_player_turn: Owner = Owner.TOP_PLAYER,
        discards: Optional[Dict[Owner, DiscardBag]] = None,
    ) -> None:
        self._board = board
        self._bags = bags
        self._discards = discards if discards is not None else {owner: DiscardBag() for owner in Owner}
        self.current_player_turn = current_player_turn
        self.pulled_tile: Optional[Tile] = None
        self._moves_without_progress: List[int] = [0]

    @classmethod
    def new(
        cls,
        base_bag: Sequence[Tile],
        top_setup: Optional[Setup] = None,
        bottom_setup: Optional[Setup] = None,
    ) -> "GameState":
        setups = {}
        if top_setup is not None:
            setups["top_setup"] = top_setup
        if bottom_setup is not None:
            setups["bottom_setup"] = bottom_setup
        board = GameBoard.setup(**setups)
        bags = {owner: TileBag(base_bag) for owner in Owner}
        return cls(board, bags)

    @classmethod
    def from_board(
        cls,
        board: GameBoard,
        current_player_turn: Owner = Owner.TOP_PLAYER,
        bag: Sequence[Tile] = (),
    ) -> "GameState":
        return cls(board, {owner: TileBag(bag) for owner in Owner}, current_player_turn)

    def clone(self) -> "GameState":
        other = GameState(
            self._board.clone(),
            {owner: bag.copy() for owner, bag in self._bags.items()},
            self.current_player_turn,
            {owner: discard.copy() for owner, discard in self._discards.items()},
        )
        other.pulled_tile = self.pulled_tile
        other._moves_without_progress = list(self._moves_without_progress)
        return other

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------
    @property
    def board(self) -> GameBoard:
        return self._board

    def bag_for(self, owner: Owner) -> TileBag:
        return self._bags[owner]

    def discard_for(self, owner: Owner) -> DiscardBag:
        return self._discards[owner]

    def duke_coordinate(self, owner: Owner) -> Optional[Coordinates]:
        return self._board.duke_coordinates(owner)

    def tiles_for_owner(self, owner: Owner) -> List[Tuple[Coordinates, PlacedTile]]:
        return self._board.tiles_for(owner)

    def get_legal_moves(self, src: Coordinates) -> List[LegalMove]:
        return self._board.get_legal_moves(src)

    def is_guard(self, owner: Owner) -> bool:
        return self._board.is_guard(owner)

    @property
    def moves_without_progress(self) -> int:
        return self._moves_without_progress[-1]

    # ------------------------------------------------------------------
    # Bag protocol
    # ------------------------------------------------------------------
    def can_pull_tile_from_bag(self) -> CanPullNewTileResult:
        owner = self.current_player_turn
        if self._bags[owner].is_empty():
            return CanPullNewTileResult.EMPTY_BAG
        if not self._board.has_space_near_duke(owner):
            return CanPullNewTileResult.NO_SPACE_NEAR_DUKE
        if not any(self._board.is_valid_placement(owner, offset) for offset in DukeOffset):
            return CanPullNewTileResult.DUKE_ALWAYS_IN_GUARD
        return CanPullNewTileResult.OK

    def can_pull_tile_from_bag_bool(self) -> bool:
        return self.pulled_tile is None and self.can_pull_tile_from_bag() is CanPullNewTileResult.OK

    def pull_tile_from_bag(self, rng: np.random.Generator) -> Tile:
        require(self.pulled_tile is None, "A pulled tile is already awaiting placement", IllegalMoveError)
        result = self.can_pull_tile_from_bag()
        require(result is CanPullNewTileResult.OK, f"Can't pull a tile: {result.name}", IllegalMoveError)
        tile = self._bags[self.current_player_turn].pull(rng)
        self.pulled_tile = tile
        return tile

    # ------------------------------------------------------------------
    # Moves
    # ------------------------------------------------------------------
    def can_make_a_move(self, move: GameMove) -> bool:
        owner = self.current_player_turn
        if isinstance(move, PullAndPlay):
            return (
                self.pulled_tile is None
                and self.can_pull_tile_from_bag() is CanPullNewTileResult.OK
                and self._board.is_valid_placement(owner, move.offset)
            )
        if isinstance(move, PlaceNewTile):
            return self.pulled_tile is not None and self._board.is_valid_placement(owner, move.offset)
        if isinstance(move, ApplyNonCommandTileAction):
            if self.pulled_tile is not None:
                return False
            if not (self._board.is_in_bounds(move.src) and self._board.is_in_bounds(move.dst)):
                return False
            mover = self._board.get(move.src)
            return mover is not None and mover.owner is owner and self._board.can_move(move.src, move.dst)
        return False

    def make_a_move(self, move: GameMove, rng: Optional[np.random.Generator] = None) -> PossibleMove:
        """Apply ``move`` for the player to move and return its undo descriptor."""
        owner = self.current_player_turn
        if isinstance(move, PullAndPlay):
            require(rng is not None, "Pulling a tile needs a random generator", IllegalMoveError)
            require(
                self._board.is_valid_placement(owner, move.offset),
                f"Invalid placement {move.offset.name} for {owner.name}",
                IllegalMoveError,
            )
            self.pull_tile_from_bag(rng)
            return self.make_a_move(PlaceNewTile(move.offset), rng)

        if isinstance(move, PlaceNewTile):
            require(self.pulled_tile is not None, "No pulled tile awaiting placement", IllegalMoveError)
            self._board.make_a_move(move, owner, self.pulled_tile)
            self.pulled_tile = None
            self._moves_without_progress.append(0)
            self.current_player_turn = owner.next_player()
            return PossiblePlacement(move.offset, owner)

        if isinstance(move, ApplyNonCommandTileAction):
            require(self.pulled_tile is None, "A pulled tile must be placed first", IllegalMoveError)
            mover = self._board.get(move.src)
            require(
                mover is not None and mover.owner is owner,
                f"{owner.name} has no tile at {move.src}",
                IllegalMoveError,
            )
            require(
                self._board.can_move(move.src, move.dst),
                f"Illegal move {move.src} -> {move.dst}",
                IllegalMoveError,
            )
            target = self._board.get(move.dst)
            capturing = target.copy() if target is not None else None
            captured = self._board.make_a_move(move, owner)
            if captured is not None:
                self._discards[captured.owner].add(captured.tile)
                logger.debug("%s captured %s at %s", owner.name, captured.tile.name, move.dst)
                self._moves_without_progress.append(0)
            else:
                self._moves_without_progress[-1] += 1
            require(not self._board.is_guard(owner), f"{owner.name} left its duke in guard")
            self.current_player_turn = owner.next_player()
            return PossibleTileAction(move.src, move.dst, capturing)

        raise IllegalMoveError(f"Unsupported game move {move!r}")

    def play(self, move: PossibleMove, rng: Optional[np.random.Generator] = None) -> PossibleMove:
        """Apply a move taken from the valid move listing."""
        if isinstance(move, PossiblePlacement) and self.pulled_tile is not None:
            return self.make_a_move(PlaceNewTile(move.offset), rng)
        return self.make_a_move(move.to_game_move(), rng)

    def undo(self, move: PossibleMove) -> None:
        require(self.pulled_tile is None, "Can't undo while a pulled tile awaits placement")
        self.current_player_turn = self.current_player_turn.next_player()

        if isinstance(move, PossiblePlacement):
            require(move.owner is self.current_player_turn, f"Undoing {move.owner.name}'s placement out of turn")
            self._pop_progress_frame()
            removed = self._board.undo(move)
            require(
                removed.owner is move.owner and removed.current_side is CurrentSide.INITIAL,
                f"Undid an unexpected tile {removed!r}",
            )
            self._bags[move.owner].push(removed.tile)
            return

        if move.capturing is not None:
            self._pop_progress_frame()
            discarded = self._discards[move.capturing.owner].pop()
            require(
                discarded is not None and discarded.name == move.capturing.tile.name,
                f"Discard pile out of sync undoing {move.src} -> {move.dst}",
            )
        else:
            require(self._moves_without_progress[-1] > 0, "No-progress counter underflow")
            self._moves_without_progress[-1] -= 1
        self._board.undo(move)

    def _pop_progress_frame(self) -> None:
        require(len(self._moves_without_progress) > 1, "No-progress frames underflow")
        self._moves_without_progress.pop()

    # ------------------------------------------------------------------
    # Enumeration
    # ------------------------------------------------------------------
    def _placements_for(self, owner: Owner) -> Iterator[PossiblePlacement]:
        awaiting = owner is self.current_player_turn and self.pulled_tile is not None
        if not awaiting and self._bags[owner].is_empty():
            return
        for offset in DukeOffset:
            if self._board.is_valid_placement(owner, offset):
                yield PossiblePlacement(offset, owner)

    def _iter_valid_game_moves(self, owner: Owner) -> Iterator[PossibleMove]:
        if owner is self.current_player_turn and self.pulled_tile is not None:
            yield from self._placements_for(owner)
            return
        for c, _ in self._board.tiles_for(owner):
            for dst, _ in self._board.get_legal_moves(c):
                target = self._board.get(dst)
                yield PossibleTileAction(c, dst, target.copy() if target is not None else None)
        yield from self._placements_for(owner)

    def all_valid_game_moves_for(self, owner: Owner) -> List[PossibleMove]:
        return list(self._iter_valid_game_moves(owner))

    def all_valid_game_moves_for_current_player(self) -> List[PossibleMove]:
        return self.all_valid_game_moves_for(self.current_player_turn)

    def has_valid_move(self, owner: Owner) -> bool:
        return next(self._iter_valid_game_moves(owner), None) is not None

    def get_random_move_for_current_player(
        self,
        rng: np.random.Generator,
        place_probability: float = 0.5,
    ) -> Optional[PossibleMove]:
        """Sample a move, choosing a placement with ``place_probability`` when one exists."""
        moves = self.all_valid_game_moves_for_current_player()
        if not moves:
            return None
        placements = [m for m in moves if isinstance(m, PossiblePlacement)]
        actions = [m for m in moves if isinstance(m, PossibleTileAction)]
        if placements and (not actions or rng.random() < place_probability):
            pool = placements
        else:
            pool = actions
        return pool[int(rng.integers(len(pool)))]

    # ------------------------------------------------------------------
    # Outcome
    # ------------------------------------------------------------------
    def is_tie(self) -> bool:
        return self._moves_without_progress[-1] >= TIE_THRESHOLD

    def game_result(self) -> GameResult:
        if self.is_tie():
            return GameResult.TIE
        if not self.has_valid_move(self.current_player_turn):
            return GameResult.won(self.current_player_turn.next_player())
        return GameResult.ONGOING

    def is_over(self) -> bool:
        return self.game_result().is_over

    def winner(self) -> Optional[Owner]:
        return self.game_result().winner

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, GameState):
            return NotImplemented
        return (
            self.current_player_turn is other.current_player_turn
            and self.pulled_tile == other.pulled_tile
            and self._moves_without_progress == other._moves_without_progress
            and self._board == other._board
            and self._bags == other._bags
            and self._discards == other._discards
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return (
            f"GameState(turn={self.current_player_turn.name}, "
            f"no_progress={self.moves_without_progress}, pulled={self.pulled_tile})\n{self._board.as_string()}"
        )
