from __future__ import annotations

from collections import Counter
from typing import Iterable, Iterator, List, Optional

import numpy as np

from .tile import Tile


class TileBag:
    """Unordered supply of tiles a player can still bring into play."""

    def __init__(self, tiles: Optional[Iterable[Tile]] = None) -> None:
        self._tiles: List[Tile] = list(tiles or [])

    def pull(self, rng: np.random.Generator) -> Optional[Tile]:
        if not self._tiles:
            return None
        index = int(rng.integers(len(self._tiles)))
        return self._tiles.pop(index)

    def push(self, tile: Tile) -> None:
        self._tiles.append(tile)

    def is_empty(self) -> bool:
        return not self._tiles

    def copy(self) -> "TileBag":
        return TileBag(self._tiles)

    def names(self) -> Counter:
        return Counter(tile.name for tile in self._tiles)

    def __len__(self) -> int:
        return len(self._tiles)

    def __iter__(self) -> Iterator[Tile]:
        return iter(self._tiles)

    def __eq__(self, other: object) -> bool:
        # Undo puts tiles back at the end, so only the contents matter.
        if not isinstance(other, TileBag):
            return NotImplemented
        return self.names() == other.names()

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"TileBag({dict(self.names())})"


class DiscardBag:
    """Tiles a player has lost, most recent last."""

    def __init__(self, tiles: Optional[Iterable[Tile]] = None) -> None:
        self._tiles: List[Tile] = list(tiles or [])

    def add(self, tile: Tile) -> None:
        self._tiles.append(tile)

    def pop(self) -> Optional[Tile]:
        return self._tiles.pop() if self._tiles else None

    def copy(self) -> "DiscardBag":
        return DiscardBag(self._tiles)

    def __len__(self) -> int:
        return len(self._tiles)

    def __iter__(self) -> Iterator[Tile]:
        return iter(self._tiles)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DiscardBag):
            return NotImplemented
        return [t.name for t in self._tiles] == [t.name for t in other._tiles]

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"DiscardBag({[t.name for t in self._tiles]})"
