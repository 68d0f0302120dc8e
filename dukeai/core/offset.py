"""Relative geometry of a tile's 5x5 action grid.

Offsets are expressed from the point of view of the player who owns the tile,
with the unit in the middle of the grid. ``Top`` is the owner's forward
direction.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Tuple, Union

from .geometry import Coordinates

GRID_SIDE = 5
GRID_CENTER = GRID_SIDE // 2


class HorizontalOffset(IntEnum):
    FAR_LEFT = 0
    LEFT = 1
    CENTER = 2
    RIGHT = 3
    FAR_RIGHT = 4

    @property
    def delta(self) -> int:
        return int(self) - GRID_CENTER

    def flipped(self) -> "HorizontalOffset":
        return HorizontalOffset(GRID_SIDE - 1 - int(self))

    def distance_from_center(self) -> int:
        return abs(self.delta)

    def is_centered(self) -> bool:
        return self is HorizontalOffset.CENTER

    def offsets(self) -> Tuple["Offsets", ...]:
        return (Offsets(self, VerticalOffset.CENTER),)


class VerticalOffset(IntEnum):
    FAR_TOP = 0
    TOP = 1
    CENTER = 2
    BOTTOM = 3
    FAR_BOTTOM = 4

    @property
    def delta(self) -> int:
        return int(self) - GRID_CENTER

    def flipped(self) -> "VerticalOffset":
        return VerticalOffset(GRID_SIDE - 1 - int(self))

    def distance_from_center(self) -> int:
        return abs(self.delta)

    def is_centered(self) -> bool:
        return self is VerticalOffset.CENTER

    def offsets(self) -> Tuple["Offsets", ...]:
        return (Offsets(HorizontalOffset.CENTER, self),)


@dataclass(frozen=True)
class Offsets:
    x: HorizontalOffset
    y: VerticalOffset

    @staticmethod
    def center() -> "Offsets":
        return Offsets(HorizontalOffset.CENTER, VerticalOffset.CENTER)

    @staticmethod
    def from_coordinates(c: Coordinates) -> "Offsets":
        return Offsets(HorizontalOffset(c.x), VerticalOffset(c.y))

    def to_coordinates(self) -> Coordinates:
        return Coordinates(int(self.x), int(self.y))

    def offsets(self) -> Tuple["Offsets", ...]:
        return (self,)

    def vertical_flipped(self) -> "Offsets":
        return Offsets(self.x, self.y.flipped())

    def horizontal_flipped(self) -> "Offsets":
        return Offsets(self.x.flipped(), self.y)

    def is_near(self, other: "Offsets") -> bool:
        dx = abs(int(self.x) - int(other.x))
        dy = abs(int(self.y) - int(other.y))
        return self != other and dx <= 1 and dy <= 1

    def is_linear_from(self, other: "Offsets") -> bool:
        return self.to_coordinates().is_linear_to(other.to_coordinates())

    def __repr__(self) -> str:
        return f"Offsets({self.x.name}, {self.y.name})"


class HorizontalSymmetricOffset(Enum):
    """Both mirrored columns, either next to the unit or two cells away."""

    NEAR = "near"
    FAR = "far"

    def columns(self) -> Tuple[HorizontalOffset, HorizontalOffset]:
        if self is HorizontalSymmetricOffset.NEAR:
            return (HorizontalOffset.LEFT, HorizontalOffset.RIGHT)
        return (HorizontalOffset.FAR_LEFT, HorizontalOffset.FAR_RIGHT)

    def on_row(self, row: VerticalOffset) -> Tuple[Offsets, ...]:
        return tuple(Offsets(column, row) for column in self.columns())

    def offsets(self) -> Tuple[Offsets, ...]:
        return self.on_row(VerticalOffset.CENTER)


class FourWaySymmetric(Enum):
    NEAR_STRAIGHT = "near_straight"
    FAR_STRAIGHT = "far_straight"
    NEAR_DIAGONAL = "near_diagonal"
    FAR_DIAGONAL = "far_diagonal"

    def offsets(self) -> Tuple[Offsets, ...]:
        h, v = HorizontalOffset, VerticalOffset
        if self is FourWaySymmetric.NEAR_STRAIGHT:
            cells = ((h.CENTER, v.TOP), (h.CENTER, v.BOTTOM), (h.LEFT, v.CENTER), (h.RIGHT, v.CENTER))
        elif self is FourWaySymmetric.FAR_STRAIGHT:
            cells = (
                (h.CENTER, v.FAR_TOP),
                (h.CENTER, v.FAR_BOTTOM),
                (h.FAR_LEFT, v.CENTER),
                (h.FAR_RIGHT, v.CENTER),
            )
        elif self is FourWaySymmetric.NEAR_DIAGONAL:
            cells = ((h.LEFT, v.TOP), (h.RIGHT, v.TOP), (h.LEFT, v.BOTTOM), (h.RIGHT, v.BOTTOM))
        else:
            cells = (
                (h.FAR_LEFT, v.FAR_TOP),
                (h.FAR_RIGHT, v.FAR_TOP),
                (h.FAR_LEFT, v.FAR_BOTTOM),
                (h.FAR_RIGHT, v.FAR_BOTTOM),
            )
        return tuple(Offsets(x, y) for x, y in cells)


OffsetGroup = Union[
    Offsets,
    HorizontalOffset,
    VerticalOffset,
    HorizontalSymmetricOffset,
    FourWaySymmetric,
    Tuple[HorizontalSymmetricOffset, VerticalOffset],
]


def expand(group: OffsetGroup) -> Tuple[Offsets, ...]:
    """Return the concrete grid cells described by an offset group."""
    if isinstance(group, tuple):
        symmetric, row = group
        return symmetric.on_row(row)
    return group.offsets()
