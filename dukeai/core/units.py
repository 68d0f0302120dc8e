"""The tile roster.

Every tile is authored from the bottom player's point of view, ``Top`` being
forward. Side A is the face a tile shows when it enters the board.
"""

from __future__ import annotations

from typing import Callable, Dict, List

from .offset import (
    FourWaySymmetric,
    HorizontalSymmetricOffset,
    HorizontalOffset,
    Offsets,
    VerticalOffset,
)
from .tile import Tile, TileAction, TileSide

DUKE = "Duke"

H = HorizontalOffset
V = VerticalOffset
SYM = HorizontalSymmetricOffset
FOUR = FourWaySymmetric

MOVE = TileAction.MOVE
JUMP = TileAction.JUMP
SLIDE = TileAction.SLIDE
STRIKE = TileAction.STRIKE
COMMAND = TileAction.COMMAND
JUMP_SLIDE = TileAction.JUMP_SLIDE
UNIT = TileAction.UNIT


def duke() -> Tile:
    return Tile(
        DUKE,
        TileSide([(SYM.NEAR, SLIDE)]),
        TileSide([(V.TOP, SLIDE), (V.BOTTOM, SLIDE)]),
    )


def footman() -> Tile:
    return Tile(
        "Footman",
        TileSide([(FOUR.NEAR_STRAIGHT, MOVE)]),
        TileSide([(FOUR.NEAR_DIAGONAL, MOVE), (V.FAR_TOP, MOVE)]),
    )


def bowman() -> Tile:
    return Tile(
        "Bowman",
        TileSide([(V.TOP, MOVE), (V.FAR_BOTTOM, JUMP), (SYM.NEAR, MOVE), (SYM.FAR, JUMP)]),
        TileSide(
            [
                (V.TOP, MOVE),
                (V.FAR_TOP, STRIKE),
                ((SYM.NEAR, V.TOP), STRIKE),
                ((SYM.NEAR, V.BOTTOM), MOVE),
            ]
        ),
    )


def dragoon() -> Tile:
    return Tile(
        "Dragoon",
        TileSide([(SYM.NEAR, MOVE), ((SYM.FAR, V.FAR_TOP), STRIKE), (V.FAR_TOP, STRIKE)]),
        TileSide(
            [
                (V.TOP, MOVE),
                (V.FAR_TOP, MOVE),
                ((SYM.NEAR, V.FAR_TOP), JUMP),
                ((SYM.NEAR, V.BOTTOM), SLIDE),
            ]
        ),
    )


def assassin() -> Tile:
    return Tile(
        "Assassin",
        TileSide([((SYM.FAR, V.FAR_BOTTOM), JUMP_SLIDE), (V.FAR_TOP, JUMP_SLIDE)]),
        TileSide([((SYM.FAR, V.FAR_TOP), JUMP_SLIDE), (V.FAR_BOTTOM, JUMP_SLIDE)]),
    )


def champion() -> Tile:
    return Tile(
        "Champion",
        TileSide([(FOUR.NEAR_STRAIGHT, MOVE), (FOUR.FAR_STRAIGHT, JUMP)]),
        TileSide([(FOUR.NEAR_STRAIGHT, STRIKE), (FOUR.FAR_STRAIGHT, JUMP)]),
    )


def general() -> Tile:
    return Tile(
        "General",
        TileSide(
            [
                (V.TOP, MOVE),
                (V.BOTTOM, MOVE),
                (SYM.FAR, MOVE),
                ((SYM.NEAR, V.FAR_TOP), JUMP),
            ]
        ),
        TileSide(
            [
                (V.TOP, MOVE),
                (SYM.FAR, MOVE),
                ((SYM.NEAR, V.FAR_TOP), JUMP),
                (SYM.NEAR, COMMAND),
                (V.BOTTOM, COMMAND),
                ((SYM.NEAR, V.BOTTOM), COMMAND),
            ]
        ),
    )


def marshall() -> Tile:
    return Tile(
        "Marshall",
        TileSide(
            [
                ((SYM.FAR, V.FAR_TOP), JUMP),
                (SYM.NEAR, SLIDE),
                (V.FAR_BOTTOM, JUMP),
            ]
        ),
        TileSide(
            [
                (SYM.NEAR, MOVE),
                (SYM.FAR, MOVE),
                ((SYM.NEAR, V.BOTTOM), MOVE),
                (V.TOP, COMMAND),
                ((SYM.NEAR, V.TOP), COMMAND),
            ]
        ),
    )


def priest() -> Tile:
    return Tile(
        "Priest",
        TileSide([(FOUR.NEAR_DIAGONAL, SLIDE)]),
        TileSide([(FOUR.NEAR_DIAGONAL, MOVE), (FOUR.FAR_DIAGONAL, JUMP)]),
    )


def longbowman() -> Tile:
    # The unit sits one row below the grid center on both faces.
    unit = Offsets(H.CENTER, V.BOTTOM)
    return Tile(
        "Longbowman",
        TileSide([(unit, UNIT), (V.CENTER, MOVE), (V.FAR_BOTTOM, MOVE), ((SYM.NEAR, V.BOTTOM), MOVE)]),
        TileSide([(unit, UNIT), ((SYM.NEAR, V.FAR_BOTTOM), MOVE), (V.TOP, STRIKE), (V.FAR_TOP, STRIKE)]),
    )


def knight() -> Tile:
    return Tile(
        "Knight",
        TileSide(
            [
                (SYM.NEAR, MOVE),
                (V.BOTTOM, MOVE),
                (V.FAR_BOTTOM, MOVE),
                ((SYM.NEAR, V.FAR_TOP), JUMP),
            ]
        ),
        TileSide([(V.TOP, SLIDE), ((SYM.NEAR, V.BOTTOM), MOVE), ((SYM.FAR, V.FAR_BOTTOM), MOVE)]),
    )


def pikeman() -> Tile:
    return Tile(
        "Pikeman",
        TileSide([((SYM.NEAR, V.TOP), MOVE), ((SYM.FAR, V.FAR_TOP), MOVE)]),
        TileSide(
            [
                (V.TOP, MOVE),
                (V.BOTTOM, MOVE),
                (V.FAR_BOTTOM, MOVE),
                ((SYM.NEAR, V.FAR_TOP), STRIKE),
            ]
        ),
    )


def wizard() -> Tile:
    return Tile(
        "Wizard",
        TileSide([(FOUR.NEAR_STRAIGHT, MOVE), (FOUR.NEAR_DIAGONAL, MOVE)]),
        TileSide([(FOUR.FAR_STRAIGHT, JUMP), (FOUR.FAR_DIAGONAL, JUMP)]),
    )


UNITS: Dict[str, Callable[[], Tile]] = {
    "duke": duke,
    "footman": footman,
    "bowman": bowman,
    "dragoon": dragoon,
    "assassin": assassin,
    "champion": champion,
    "general": general,
    "marshall": marshall,
    "priest": priest,
    "longbowman": longbowman,
    "knight": knight,
    "pikeman": pikeman,
    "wizard": wizard,
}

STARTING_BAG = (
    "footman",
    "pikeman",
    "pikeman",
    "pikeman",
    "knight",
    "bowman",
    "longbowman",
    "champion",
    "wizard",
    "general",
    "marshall",
    "priest",
    "dragoon",
    "assassin",
)


def build_tile(name: str) -> Tile:
    try:
        factory = UNITS[name.lower()]
    except KeyError as exc:
        raise KeyError(f"Unknown unit '{name}'. Known units: {sorted(UNITS)}") from exc
    return factory()


def starting_tiles(names=STARTING_BAG) -> List[Tile]:
    # One Tile object per name so identical names share their mirrored cache.
    cache: Dict[str, Tile] = {}
    tiles = []
    for name in names:
        key = name.lower()
        if key not in cache:
            cache[key] = build_tile(key)
        tiles.append(cache[key])
    return tiles


def is_duke(tile: Tile) -> bool:
    return tile.name == DUKE
