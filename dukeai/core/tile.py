from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from functools import cached_property
from typing import Dict, List, Optional, Sequence, Tuple

from .board import Board
from .errors import TileDefinitionError, require
from .geometry import Coordinates
from .offset import (
    GRID_CENTER,
    GRID_SIDE,
    OffsetGroup,
    Offsets,
    VerticalOffset,
    expand,
)


class TileAction(Enum):
    UNIT = "unit"
    MOVE = "move"
    JUMP = "jump"
    SLIDE = "slide"
    COMMAND = "command"
    JUMP_SLIDE = "jump_slide"
    STRIKE = "strike"

    @property
    def is_executable(self) -> bool:
        return self not in (TileAction.UNIT, TileAction.COMMAND)


def direction_between(src: Coordinates, dst: Coordinates) -> Optional[Tuple[int, int]]:
    """Unit step from ``src`` toward ``dst`` if they share a row, column or diagonal."""
    if src == dst or not src.is_linear_to(dst):
        return None
    dx, dy = dst.x - src.x, dst.y - src.y
    return (dx > 0) - (dx < 0), (dy > 0) - (dy < 0)


def _grid_cell(x: int, y: int) -> Optional[Coordinates]:
    if 0 <= x < GRID_SIDE and 0 <= y < GRID_SIDE:
        return Coordinates(x, y)
    return None


class TileSide:
    """One face of a tile: a validated 5x5 grid of actions around the unit."""

    SIDE = GRID_SIDE

    def __init__(self, entries: Sequence[Tuple[OffsetGroup, TileAction]]) -> None:
        mapping: Dict[Offsets, TileAction] = {}
        for group, action in entries:
            for offset in expand(group):
                if offset in mapping:
                    existing = mapping[offset]
                    if TileAction.COMMAND in (existing, action) and existing != action:
                        raise TileDefinitionError(
                            f"Command and non-Command actions both claim {offset}"
                        )
                    raise TileDefinitionError(f"{offset} already holds {existing.name}, got {action.name}")
                mapping[offset] = action
        if TileAction.UNIT not in mapping.values():
            require(
                Offsets.center() not in mapping,
                "No Unit given and the center is already taken",
                TileDefinitionError,
            )
            mapping[Offsets.center()] = TileAction.UNIT
        self._verify_actions(mapping)
        self._board: Board[TileAction] = Board.square(self.SIDE)
        for offset, action in mapping.items():
            self._board.put(offset.to_coordinates(), action)

    @classmethod
    def _from_board(cls, board: Board[TileAction]) -> "TileSide":
        side = cls.__new__(cls)
        side._board = board
        return side

    @staticmethod
    def _verify_actions(mapping: Dict[Offsets, TileAction]) -> None:
        units = [offset for offset, action in mapping.items() if action is TileAction.UNIT]
        require(len(units) == 1, f"Expected exactly one Unit, found {len(units)}", TileDefinitionError)
        unit = units[0]
        require(unit.x.is_centered(), "The unit should always be horizontally centered", TileDefinitionError)

        for offset, action in mapping.items():
            if action is TileAction.JUMP:
                require(not offset.is_near(unit), f"Jump at {offset} near the unit should be a move", TileDefinitionError)
            elif action is TileAction.JUMP_SLIDE:
                require(not offset.is_near(unit), f"Jump slide at {offset} is near the unit", TileDefinitionError)
                require(offset.is_linear_from(unit), f"Jump slide at {offset} isn't on a line", TileDefinitionError)
            elif action is TileAction.SLIDE:
                require(offset.is_near(unit), f"Slide at {offset} should be near the unit", TileDefinitionError)
                beyond = _grid_cell(2 * int(offset.x) - int(unit.x), 2 * int(offset.y) - int(unit.y))
                require(
                    beyond is None or Offsets.from_coordinates(beyond) not in mapping,
                    f"Nothing may follow the slide at {offset}",
                    TileDefinitionError,
                )
            elif action is TileAction.MOVE:
                require(offset.is_linear_from(unit), f"Move at {offset} can't be L shaped", TileDefinitionError)

    @property
    def board(self) -> Board[TileAction]:
        return self._board

    def actions(self) -> List[Tuple[Offsets, TileAction]]:
        return [(Offsets.from_coordinates(c), action) for c, action in self._board.active_coordinates()]

    def center_offset(self) -> VerticalOffset:
        for y in range(self.SIDE):
            if self._board.get(Coordinates(GRID_CENTER, y)) is TileAction.UNIT:
                return VerticalOffset(y)
        raise TileDefinitionError("No Unit action found in the center column")

    def unit_cell(self) -> Coordinates:
        return Coordinates(GRID_CENTER, int(self.center_offset()))

    def jump_slide_reach(self, direction: Tuple[int, int]) -> Optional[int]:
        """Steps from the unit to the jump slide cell along ``direction``, if any."""
        unit = self.unit_cell()
        for step in range(2, self.SIDE):
            cell = _grid_cell(unit.x + direction[0] * step, unit.y + direction[1] * step)
            if cell is None:
                return None
            if self._board.get(cell) is TileAction.JUMP_SLIDE:
                return step
        return None

    def get_action_from_coordinates(self, src: Coordinates, dst: Coordinates) -> Optional[TileAction]:
        """Which action, if any, would take this side's unit from ``src`` to ``dst``.

        A slide next to the unit covers the whole ray in its direction, a jump slide
        covers the ray from its own cell outward. Anything else must fit in the grid.
        """
        if src == dst:
            return None
        unit = self.unit_cell()
        direction = direction_between(src, dst)
        if direction is not None:
            near = _grid_cell(unit.x + direction[0], unit.y + direction[1])
            if near is not None and self._board.get(near) is TileAction.SLIDE:
                return TileAction.SLIDE
            reach = self.jump_slide_reach(direction)
            distance = max(abs(dst.x - src.x), abs(dst.y - src.y))
            if reach is not None and distance >= reach:
                return TileAction.JUMP_SLIDE

        cell = _grid_cell(unit.x + dst.x - src.x, unit.y + dst.y - src.y)
        if cell is None:
            return None
        return self._board.get(cell)

    def flip_vertical(self) -> "TileSide":
        return TileSide._from_board(self._board.flip_vertical())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TileSide):
            return NotImplemented
        return self._board == other._board

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        cells = ", ".join(f"{o.x.name}/{o.y.name}={a.name}" for o, a in self.actions())
        return f"TileSide({cells})"


@dataclass(frozen=True, eq=False)
class Tile:
    name: str
    side_a: TileSide
    side_b: TileSide

    @cached_property
    def mirrored(self) -> "Tile":
        return self.flip_vertical()

    def flip_vertical(self) -> "Tile":
        return Tile(self.name, self.side_a.flip_vertical(), self.side_b.flip_vertical())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Tile):
            return NotImplemented
        return self.name == other.name and self.side_a == other.side_a and self.side_b == other.side_b

    def __hash__(self) -> int:
        return hash(self.name)

    def __repr__(self) -> str:
        return f"Tile({self.name})"


class CurrentSide(Enum):
    INITIAL = "initial"
    FLIPPED = "flipped"

    def flip(self) -> "CurrentSide":
        return CurrentSide.FLIPPED if self is CurrentSide.INITIAL else CurrentSide.INITIAL


class Owner(Enum):
    TOP_PLAYER = "top"
    BOTTOM_PLAYER = "bottom"

    def next_player(self) -> "Owner":
        return Owner.BOTTOM_PLAYER if self is Owner.TOP_PLAYER else Owner.TOP_PLAYER

    def same_team(self, other: "Owner") -> bool:
        return self is other

    def different_team(self, other: "Owner") -> bool:
        return self is not other


@dataclass(eq=False)
class PlacedTile:
    """A tile on the board.

    Tiles are authored from the bottom player's point of view; the top player's
    tiles are read through the vertically mirrored copy.
    """

    owner: Owner
    tile: Tile
    current_side: CurrentSide = field(default=CurrentSide.INITIAL)

    @property
    def oriented_tile(self) -> Tile:
        return self.tile.mirrored if self.owner is Owner.TOP_PLAYER else self.tile

    def get_current_side(self) -> TileSide:
        oriented = self.oriented_tile
        return oriented.side_a if self.current_side is CurrentSide.INITIAL else oriented.side_b

    def flip(self) -> None:
        self.current_side = self.current_side.flip()

    def flipped(self) -> "PlacedTile":
        clone = self.copy()
        clone.flip()
        return clone

    def copy(self) -> "PlacedTile":
        return PlacedTile(self.owner, self.tile, self.current_side)

    def same_team(self, other: "PlacedTile") -> bool:
        return self.owner is other.owner

    def different_team(self, other: "PlacedTile") -> bool:
        return not self.same_team(other)

    def get_action_from_coordinates(self, src: Coordinates, dst: Coordinates) -> Optional[TileAction]:
        return self.get_current_side().get_action_from_coordinates(src, dst)

    def single_char_token(self) -> str:
        c = self.tile.name[0]
        return c.lower() if self.current_side is CurrentSide.INITIAL else c.upper()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PlacedTile):
            return NotImplemented
        return self.owner is other.owner and self.current_side is other.current_side and self.tile == other.tile

    __hash__ = None  # type: ignore[assignment]
