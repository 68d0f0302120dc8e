import pytest

from dukeai.core import (
    UNITS,
    Coordinates,
    CurrentSide,
    FourWaySymmetric,
    HorizontalOffset,
    HorizontalSymmetricOffset,
    Offsets,
    Owner,
    PlacedTile,
    TileAction,
    TileDefinitionError,
    TileSide,
    VerticalOffset,
    build_tile,
)
from dukeai.core.offset import expand
from dukeai.core.units import duke, footman, longbowman


def test_offset_flip_and_delta() -> None:
    assert VerticalOffset.FAR_TOP.flipped() is VerticalOffset.FAR_BOTTOM
    assert HorizontalOffset.LEFT.flipped() is HorizontalOffset.RIGHT
    assert VerticalOffset.TOP.delta == -1
    assert HorizontalOffset.FAR_RIGHT.distance_from_center() == 2
    assert Offsets.center().vertical_flipped() == Offsets.center()


def test_offset_nearness() -> None:
    center = Offsets.center()
    assert Offsets(HorizontalOffset.LEFT, VerticalOffset.TOP).is_near(center)
    assert not Offsets(HorizontalOffset.FAR_LEFT, VerticalOffset.TOP).is_near(center)
    assert not center.is_near(center)


def test_symmetric_groups_expand() -> None:
    assert set(expand(HorizontalSymmetricOffset.NEAR)) == {
        Offsets(HorizontalOffset.LEFT, VerticalOffset.CENTER),
        Offsets(HorizontalOffset.RIGHT, VerticalOffset.CENTER),
    }
    assert set(expand((HorizontalSymmetricOffset.FAR, VerticalOffset.FAR_TOP))) == {
        Offsets(HorizontalOffset.FAR_LEFT, VerticalOffset.FAR_TOP),
        Offsets(HorizontalOffset.FAR_RIGHT, VerticalOffset.FAR_TOP),
    }
    assert len(expand(FourWaySymmetric.NEAR_DIAGONAL)) == 4
    assert expand(VerticalOffset.TOP) == (Offsets(HorizontalOffset.CENTER, VerticalOffset.TOP),)


def test_side_inserts_center_unit() -> None:
    side = TileSide([(FourWaySymmetric.NEAR_STRAIGHT, TileAction.MOVE)])
    assert side.center_offset() is VerticalOffset.CENTER
    assert (Offsets.center(), TileAction.UNIT) in side.actions()
    assert len(side.actions()) == 5


@pytest.mark.parametrize(
    "entries",
    [
        [(FourWaySymmetric.NEAR_STRAIGHT, TileAction.JUMP)],
        [(FourWaySymmetric.FAR_STRAIGHT, TileAction.SLIDE)],
        [(VerticalOffset.TOP, TileAction.SLIDE), (VerticalOffset.FAR_TOP, TileAction.STRIKE)],
        [(Offsets(HorizontalOffset.LEFT, VerticalOffset.FAR_TOP), TileAction.MOVE)],
        [(VerticalOffset.TOP, TileAction.MOVE), (VerticalOffset.TOP, TileAction.STRIKE)],
        [(VerticalOffset.TOP, TileAction.MOVE), (VerticalOffset.TOP, TileAction.COMMAND)],
        [(HorizontalOffset.LEFT, TileAction.UNIT)],
        [(Offsets.center(), TileAction.UNIT), (VerticalOffset.TOP, TileAction.UNIT)],
        [(FourWaySymmetric.NEAR_DIAGONAL, TileAction.JUMP_SLIDE)],
    ],
)
def test_invalid_sides_rejected(entries) -> None:
    with pytest.raises(TileDefinitionError):
        TileSide(entries)


def test_whole_roster_is_valid() -> None:
    for name in UNITS:
        tile = build_tile(name)
        for side in (tile.side_a, tile.side_b):
            units = [a for _, a in side.actions() if a is TileAction.UNIT]
            assert len(units) == 1


def test_unknown_unit() -> None:
    with pytest.raises(KeyError):
        build_tile("dragon")


def test_duke_slide_has_unlimited_reach() -> None:
    side = duke().side_a
    src = Coordinates(2, 4)
    assert side.get_action_from_coordinates(src, Coordinates(5, 4)) is TileAction.SLIDE
    assert side.get_action_from_coordinates(src, Coordinates(0, 4)) is TileAction.SLIDE
    assert side.get_action_from_coordinates(src, Coordinates(2, 0)) is None
    assert side.get_action_from_coordinates(src, src) is None


def test_lookup_beyond_grid_is_none() -> None:
    side = footman().side_a
    assert side.get_action_from_coordinates(Coordinates(0, 0), Coordinates(5, 5)) is None
    assert side.get_action_from_coordinates(Coordinates(0, 0), Coordinates(0, 4)) is None


def test_off_center_unit() -> None:
    side = longbowman().side_a
    assert side.center_offset() is VerticalOffset.BOTTOM
    src = Coordinates(2, 3)
    assert side.get_action_from_coordinates(src, Coordinates(2, 2)) is TileAction.MOVE
    assert side.get_action_from_coordinates(src, Coordinates(2, 4)) is TileAction.MOVE
    assert side.get_action_from_coordinates(src, Coordinates(1, 3)) is TileAction.MOVE
    assert side.get_action_from_coordinates(src, Coordinates(2, 1)) is None


def test_top_player_reads_mirrored_tile() -> None:
    tile = footman()
    top = PlacedTile(Owner.TOP_PLAYER, tile)
    bottom = PlacedTile(Owner.BOTTOM_PLAYER, tile)
    top.flip()
    bottom.flip()
    src = Coordinates(2, 2)
    # Side B reaches two cells forward.
    assert bottom.get_action_from_coordinates(src, Coordinates(2, 0)) is TileAction.MOVE
    assert top.get_action_from_coordinates(src, Coordinates(2, 4)) is TileAction.MOVE
    assert top.get_action_from_coordinates(src, Coordinates(2, 0)) is None
    assert top.oriented_tile is PlacedTile(Owner.TOP_PLAYER, tile).oriented_tile


def test_placed_tile_flip_and_copy() -> None:
    placed = PlacedTile(Owner.BOTTOM_PLAYER, duke())
    assert placed.single_char_token() == "d"
    clone = placed.copy()
    placed.flip()
    assert placed.current_side is CurrentSide.FLIPPED
    assert placed.single_char_token() == "D"
    assert clone.current_side is CurrentSide.INITIAL
    assert clone != placed
    assert clone.tile is placed.tile


def test_tile_equality_ignores_mirror_cache() -> None:
    a = footman()
    b = footman()
    _ = a.mirrored
    assert a == b
    assert a.flip_vertical() != a
