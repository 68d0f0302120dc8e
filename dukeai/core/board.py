from __future__ import annotations

from typing import Callable, Generic, Iterator, List, Optional, Tuple, TypeVar

import numpy as np

from .errors import OutOfBoundsError, require
from .geometry import Coordinates

A = TypeVar("A")


class Board(Generic[A]):
    """Fixed size grid of optional occupants.

    Cells are stored in a numpy object array indexed ``[y, x]``; ``None`` marks an
    empty cell. Every coordinate argument is bounds checked.
    """

    def __init__(self, width: int, height: int) -> None:
        self.width = width
        self.height = height
        self._cells = np.full((height, width), None, dtype=object)

    @classmethod
    def square(cls, side: int) -> "Board[A]":
        return cls(side, side)

    def is_in_bounds(self, c: Coordinates) -> bool:
        return 0 <= c.x < self.width and 0 <= c.y < self.height

    def is_out_of_bounds(self, c: Coordinates) -> bool:
        return not self.is_in_bounds(c)

    def _verify_bounds(self, c: Coordinates) -> None:
        require(self.is_in_bounds(c), f"Coordinate {c} is out of bounds", OutOfBoundsError)

    def _place(self, c: Coordinates, a: Optional[A]) -> Optional[A]:
        self._verify_bounds(c)
        previous = self._cells[c.y, c.x]
        self._cells[c.y, c.x] = a
        return previous

    def put(self, c: Coordinates, a: A) -> Optional[A]:
        return self._place(c, a)

    def get(self, c: Coordinates) -> Optional[A]:
        self._verify_bounds(c)
        return self._cells[c.y, c.x]

    def remove(self, c: Coordinates) -> Optional[A]:
        return self._place(c, None)

    def is_occupied(self, c: Coordinates) -> bool:
        return self.get(c) is not None

    def is_empty(self, c: Coordinates) -> bool:
        return self.get(c) is None

    def mv(self, src: Coordinates, dst: Coordinates) -> Optional[A]:
        """Move the occupant of ``src`` to ``dst``, returning whatever ``dst`` held."""
        moved = self.remove(src)
        require(moved is not None, f"Cannot move from empty coordinate {src}")
        return self.put(dst, moved)

    def coordinates(self) -> List[Coordinates]:
        return [Coordinates(x, y) for x in range(self.width) for y in range(self.height)]

    def active_coordinates(self) -> List[Tuple[Coordinates, A]]:
        return [(c, self._cells[c.y, c.x]) for c in self.coordinates() if self._cells[c.y, c.x] is not None]

    def find(self, predicate: Callable[[A], bool]) -> Optional[Coordinates]:
        for c, a in self.active_coordinates():
            if predicate(a):
                return c
        return None

    def rows(self) -> List[List[Optional[A]]]:
        return self._cells.tolist()

    def __iter__(self) -> Iterator[Tuple[Coordinates, A]]:
        return iter(self.active_coordinates())

    def flip_vertical(self) -> "Board[A]":
        flipped: Board[A] = Board(self.width, self.height)
        flipped._cells = np.flipud(self._cells).copy()
        return flipped

    def copy(self, copy_item: Optional[Callable[[A], A]] = None) -> "Board[A]":
        clone: Board[A] = Board(self.width, self.height)
        if copy_item is None:
            clone._cells = self._cells.copy()
        else:
            for c, a in self.active_coordinates():
                clone._cells[c.y, c.x] = copy_item(a)
        return clone

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return (
            self.width == other.width
            and self.height == other.height
            and self.rows() == other.rows()
        )

    def __repr__(self) -> str:
        return f"Board({self.width}x{self.height}, occupied={len(self.active_coordinates())})"
