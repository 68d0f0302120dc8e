from __future__ import annotations

from dataclasses import dataclass
from typing import List

from .errors import require


def _step(delta: int) -> int:
    return 0 if delta == 0 else (1 if delta > 0 else -1)


@dataclass(frozen=True, order=True)
class Coordinates:
    x: int
    y: int

    def is_linear_to(self, dst: "Coordinates") -> bool:
        return self.x == dst.x or self.y == dst.y or abs(self.x - dst.x) == abs(self.y - dst.y)

    def linear_path_to(self, dst: "Coordinates") -> List["Coordinates"]:
        """Cells strictly between ``self`` and ``dst``, ordered from ``self``.

        Raises if ``dst`` is ``self`` or isn't on a row, column or diagonal.
        """
        require(self != dst, f"Can't take linear path from {dst} to itself")
        require(self.is_linear_to(dst), f"{self} isn't linear to {dst}")
        dx = _step(dst.x - self.x)
        dy = _step(dst.y - self.y)
        distance = max(abs(dst.x - self.x), abs(dst.y - self.y))
        return [Coordinates(self.x + dx * i, self.y + dy * i) for i in range(1, distance)]

    def shifted(self, dx: int, dy: int) -> "Coordinates":
        return Coordinates(self.x + dx, self.y + dy)

    def __str__(self) -> str:
        return f"({self.x},{self.y})"
