from __future__ import annotations

from enum import Enum
from typing import List, Optional, Set, Tuple

from .board import Board
from .errors import IllegalMoveError, require
from .geometry import Coordinates
from .moves import (
    ApplyNonCommandTileAction,
    BoardMove,
    DukeOffset,
    MoveKind,
    PlaceNewTile,
    PossibleMove,
    PossiblePlacement,
    PossibleTileAction,
)
from .offset import Offsets
from .tile import Owner, PlacedTile, Tile, TileAction, direction_between
from .units import duke, footman, is_duke

BOARD_SIZE = 6

LegalMove = Tuple[Coordinates, TileAction]

# Stand-in occupant when testing whether a placement would expose the duke.
_BLOCKER = footman()


class DukeInitialLocation(Enum):
    LEFT = "left"
    RIGHT = "right"


class FootmenSetup(Enum):
    # Both footmen beside the duke.
    SIDES = "sides"
    # One footman in front of the duke, one to its owner's left.
    LEFT = "left"
    # One footman in front of the duke, one to its owner's right.
    RIGHT = "right"


Setup = Tuple[DukeInitialLocation, FootmenSetup]


class GameBoard:
    """The 6x6 playing surface and every rule that only depends on it."""

    def __init__(self, board: Optional[Board[PlacedTile]] = None) -> None:
        self._board: Board[PlacedTile] = board if board is not None else Board.square(BOARD_SIZE)

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------
    @classmethod
    def setup(
        cls,
        top_setup: Setup = (DukeInitialLocation.LEFT, FootmenSetup.LEFT),
        bottom_setup: Setup = (DukeInitialLocation.RIGHT, FootmenSetup.RIGHT),
        duke_tile: Optional[Tile] = None,
        footman_tile: Optional[Tile] = None,
    ) -> "GameBoard":
        duke_tile = duke_tile or duke()
        footman_tile = footman_tile or footman()
        result = cls()
        last_row = result.height - 1

        top_x = 3 if top_setup[0] is DukeInitialLocation.LEFT else 2
        result.place(Coordinates(top_x, 0), PlacedTile(Owner.TOP_PLAYER, duke_tile))
        if top_setup[1] is FootmenSetup.SIDES:
            top_footmen = (Coordinates(top_x + 1, 0), Coordinates(top_x - 1, 0))
        elif top_setup[1] is FootmenSetup.LEFT:
            top_footmen = (Coordinates(top_x + 1, 0), Coordinates(top_x, 1))
        else:
            top_footmen = (Coordinates(top_x - 1, 0), Coordinates(top_x, 1))
        for c in top_footmen:
            result.place(c, PlacedTile(Owner.TOP_PLAYER, footman_tile))

        bottom_x = 2 if bottom_setup[0] is DukeInitialLocation.LEFT else 3
        result.place(Coordinates(bottom_x, last_row), PlacedTile(Owner.BOTTOM_PLAYER, duke_tile))
        if bottom_setup[1] is FootmenSetup.SIDES:
            bottom_footmen = (Coordinates(bottom_x + 1, last_row), Coordinates(bottom_x - 1, last_row))
        elif bottom_setup[1] is FootmenSetup.LEFT:
            bottom_footmen = (Coordinates(bottom_x - 1, last_row), Coordinates(bottom_x, last_row - 1))
        else:
            bottom_footmen = (Coordinates(bottom_x + 1, last_row), Coordinates(bottom_x, last_row - 1))
        for c in bottom_footmen:
            result.place(c, PlacedTile(Owner.BOTTOM_PLAYER, footman_tile))
        return result

    def clone(self) -> "GameBoard":
        return GameBoard(self._board.copy(PlacedTile.copy))

    # ------------------------------------------------------------------
    # Raw access
    # ------------------------------------------------------------------
    @property
    def width(self) -> int:
        return self._board.width

    @property
    def height(self) -> int:
        return self._board.height

    @property
    def board(self) -> Board[PlacedTile]:
        return self._board

    def is_in_bounds(self, c: Coordinates) -> bool:
        return self._board.is_in_bounds(c)

    def get(self, c: Coordinates) -> Optional[PlacedTile]:
        return self._board.get(c)

    def is_empty(self, c: Coordinates) -> bool:
        return self._board.is_empty(c)

    def place(self, c: Coordinates, tile: PlacedTile) -> None:
        require(self._board.is_empty(c), f"Can't place {tile.tile.name} on occupied {c}")
        self._board.put(c, tile)

    def tiles_for(self, owner: Owner) -> List[Tuple[Coordinates, PlacedTile]]:
        return [(c, t) for c, t in self._board.active_coordinates() if t.owner is owner]

    def duke_coordinates(self, owner: Owner) -> Optional[Coordinates]:
        return self._board.find(lambda t: t.owner is owner and is_duke(t.tile))

    # ------------------------------------------------------------------
    # Geometry
    # ------------------------------------------------------------------
    def to_absolute_coordinate(self, src: Coordinates, offset: Offsets, center: int) -> Optional[Coordinates]:
        """Board cell reached from ``src`` by a grid ``offset`` whose unit sits on row ``center``."""
        dst = Coordinates(src.x + offset.x.delta, src.y + int(offset.y) - center)
        return dst if self.is_in_bounds(dst) else None

    def _ray(self, start: Coordinates, direction: Tuple[int, int]) -> List[Coordinates]:
        cells = []
        c = start
        while self.is_in_bounds(c):
            cells.append(c)
            c = c.shifted(*direction)
        return cells

    def target_coordinates(
        self,
        src: Coordinates,
        offset: Offsets,
        action: TileAction,
        center: int,
    ) -> List[Coordinates]:
        dx = offset.x.delta
        dy = int(offset.y) - center
        if action is TileAction.SLIDE:
            return self._ray(src.shifted(dx, dy), (dx, dy))
        if action is TileAction.JUMP_SLIDE:
            reach = max(abs(dx), abs(dy))
            direction = (dx // reach, dy // reach)
            return self._ray(src.shifted(dx, dy), direction)
        dst = self.to_absolute_coordinate(src, offset, center)
        return [dst] if dst is not None else []

    # ------------------------------------------------------------------
    # Legality
    # ------------------------------------------------------------------
    def unobstructed(self, src: Coordinates, dst: Coordinates) -> bool:
        return all(self._board.is_empty(c) for c in src.linear_path_to(dst))

    def can_apply_action(self, src: Coordinates, dst: Coordinates, action: TileAction) -> bool:
        mover = self._board.get(src)
        if mover is None:
            return False
        target = self._board.get(dst)
        if target is not None and target.same_team(mover):
            return False

        if action in (TileAction.MOVE, TileAction.SLIDE):
            return self.unobstructed(src, dst)
        if action is TileAction.JUMP:
            return True
        if action is TileAction.JUMP_SLIDE:
            direction = direction_between(src, dst)
            if direction is None:
                return False
            reach = mover.get_current_side().jump_slide_reach(direction)
            if reach is None:
                return False
            # Only the part of the ray past the landing cell has to be clear.
            return all(self._board.is_empty(c) for c in src.linear_path_to(dst)[reach - 1:])
        if action is TileAction.STRIKE:
            return target is not None
        return False

    def can_apply(self, src: Coordinates, dst: Coordinates) -> MoveKind:
        if src == dst or not self.is_in_bounds(src) or not self.is_in_bounds(dst):
            return MoveKind.INVALID
        mover = self._board.get(src)
        if mover is None:
            return MoveKind.INVALID
        action = mover.get_action_from_coordinates(src, dst)
        if action is None or not action.is_executable:
            return MoveKind.INVALID
        if not self.can_apply_action(src, dst, action):
            return MoveKind.INVALID
        return MoveKind.STRIKE if action is TileAction.STRIKE else MoveKind.MOVEMENT

    def can_move(self, src: Coordinates, dst: Coordinates) -> bool:
        """Whether the tile at ``src`` may legally go to ``dst``, self-guard included."""
        kind = self.can_apply(src, dst)
        if kind is MoveKind.INVALID:
            return False
        return not self._leaves_in_guard(src, dst, kind)

    def is_guard(self, owner: Owner) -> bool:
        duke_at = self.duke_coordinates(owner)
        if duke_at is None:
            return False
        opponent = owner.next_player()
        # can_apply is the guard-ignoring reachability test, so no recursion here.
        return any(
            self.can_apply(c, duke_at) is not MoveKind.INVALID for c, _ in self.tiles_for(opponent)
        )

    def _leaves_in_guard(self, src: Coordinates, dst: Coordinates, kind: MoveKind) -> bool:
        mover = self._board.get(src)
        simulated = self.clone()
        simulated._apply(src, dst, kind)
        return simulated.is_guard(mover.owner)

    def get_legal_moves_aux(self, src: Coordinates, check_for_guard: bool) -> List[LegalMove]:
        placed = self._board.get(src)
        if placed is None:
            return []
        side = placed.get_current_side()
        center = int(side.center_offset())
        moves: List[LegalMove] = []
        seen: Set[Coordinates] = set()
        for offset, action in side.actions():
            if not action.is_executable:
                continue
            for dst in self.target_coordinates(src, offset, action, center):
                if dst in seen or not self.can_apply_action(src, dst, action):
                    continue
                if check_for_guard:
                    kind = MoveKind.STRIKE if action is TileAction.STRIKE else MoveKind.MOVEMENT
                    if self._leaves_in_guard(src, dst, kind):
                        continue
                seen.add(dst)
                moves.append((dst, action))
        return moves

    def get_legal_moves(self, src: Coordinates) -> List[LegalMove]:
        return self.get_legal_moves_aux(src, check_for_guard=True)

    def get_legal_moves_ignoring_guard(self, src: Coordinates) -> List[LegalMove]:
        return self.get_legal_moves_aux(src, check_for_guard=False)

    def placement_coordinates(self, owner: Owner, offset: DukeOffset) -> Optional[Coordinates]:
        duke_at = self.duke_coordinates(owner)
        if duke_at is None:
            return None
        target = offset.apply(duke_at)
        return target if self.is_in_bounds(target) else None

    def has_space_near_duke(self, owner: Owner) -> bool:
        for offset in DukeOffset:
            target = self.placement_coordinates(owner, offset)
            if target is not None and self._board.is_empty(target):
                return True
        return False

    def is_valid_placement(self, owner: Owner, offset: DukeOffset, tile: Optional[Tile] = None) -> bool:
        target = self.placement_coordinates(owner, offset)
        if target is None or self._board.is_occupied(target):
            return False
        simulated = self.clone()
        simulated._board.put(target, PlacedTile(owner, tile or _BLOCKER))
        return not simulated.is_guard(owner)

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------
    def _apply(self, src: Coordinates, dst: Coordinates, kind: MoveKind) -> Optional[PlacedTile]:
        mover = self._board.get(src)
        mover.flip()
        if kind is MoveKind.STRIKE:
            return self._board.remove(dst)
        return self._board.mv(src, dst)

    def make_a_move(self, move: BoardMove, owner: Owner, tile: Optional[Tile] = None) -> Optional[PlacedTile]:
        """Apply ``move`` for ``owner`` and return the captured tile, if any."""
        if isinstance(move, PlaceNewTile):
            require(tile is not None, "Placing requires a tile", IllegalMoveError)
            require(
                self.is_valid_placement(owner, move.offset, tile),
                f"Invalid placement {move.offset.name} for {owner.name}",
                IllegalMoveError,
            )
            self.place(self.placement_coordinates(owner, move.offset), PlacedTile(owner, tile))
            return None
        if isinstance(move, ApplyNonCommandTileAction):
            kind = self.can_apply(move.src, move.dst)
            require(kind is not MoveKind.INVALID, f"Invalid action {move.src} -> {move.dst}", IllegalMoveError)
            return self._apply(move.src, move.dst, kind)
        raise IllegalMoveError(f"Unsupported board move {move!r}")

    def undo(self, move: PossibleMove) -> Optional[PlacedTile]:
        """Reverse ``move``; a reversed placement hands back the removed tile."""
        if isinstance(move, PossiblePlacement):
            target = self.placement_coordinates(move.owner, move.offset)
            require(target is not None, f"No duke to undo placement {move.offset.name} against")
            removed = self._board.remove(target)
            require(removed is not None, f"Nothing to undo at {target}")
            return removed

        if self._board.is_empty(move.dst):
            require(move.capturing is not None, f"Strike undo at {move.dst} without a captured tile")
            mover = self._board.get(move.src)
            require(mover is not None, f"No striker at {move.src} to undo")
            mover.flip()
            self._board.put(move.dst, move.capturing.copy())
            return None

        mover = self._board.remove(move.dst)
        mover.flip()
        self._board.put(move.src, mover)
        if move.capturing is not None:
            self._board.put(move.dst, move.capturing.copy())
        return None

    def possible_moves_for(self, owner: Owner) -> List[PossibleTileAction]:
        result = []
        for c, _ in self.tiles_for(owner):
            for dst, _ in self.get_legal_moves(c):
                captured = self._board.get(dst)
                result.append(PossibleTileAction(c, dst, captured.copy() if captured is not None else None))
        return result

    # ------------------------------------------------------------------
    # Display / comparison
    # ------------------------------------------------------------------
    def as_string(self) -> str:
        """One character per cell, top row first; lower case is the initial side."""
        lines = []
        for row in self._board.rows():
            lines.append("".join(t.single_char_token() if t is not None else "." for t in row))
        return "\n".join(lines)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, GameBoard):
            return NotImplemented
        return self._board == other._board

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"GameBoard(\n{self.as_string()}\n)"
