import pytest

from dukeai.core import (
    ApplyNonCommandTileAction,
    Coordinates,
    CurrentSide,
    DukeOffset,
    GameBoard,
    IllegalMoveError,
    MoveKind,
    Owner,
    PlaceNewTile,
    PlacedTile,
    PossiblePlacement,
    PossibleTileAction,
    TileAction,
)
from dukeai.core.units import assassin, champion, duke, footman

TOP = Owner.TOP_PLAYER
BOTTOM = Owner.BOTTOM_PLAYER


def place(board: GameBoard, x: int, y: int, tile, owner: Owner, flipped: bool = False) -> PlacedTile:
    placed = PlacedTile(owner, tile)
    if flipped:
        placed.flip()
    board.place(Coordinates(x, y), placed)
    return placed


def targets(board: GameBoard, x: int, y: int):
    return {dst for dst, _ in board.get_legal_moves(Coordinates(x, y))}


def test_footman_basic_moves() -> None:
    board = GameBoard()
    place(board, 2, 4, footman(), BOTTOM)
    moves = board.get_legal_moves(Coordinates(2, 4))
    assert {dst for dst, _ in moves} == {
        Coordinates(3, 4),
        Coordinates(2, 5),
        Coordinates(1, 4),
        Coordinates(2, 3),
    }
    assert all(action is TileAction.MOVE for _, action in moves)


def test_duke_slides_to_both_edges() -> None:
    board = GameBoard()
    place(board, 2, 4, duke(), BOTTOM)
    moves = board.get_legal_moves(Coordinates(2, 4))
    assert {dst for dst, _ in moves} == {
        Coordinates(0, 4),
        Coordinates(1, 4),
        Coordinates(3, 4),
        Coordinates(4, 4),
        Coordinates(5, 4),
    }
    assert all(action is TileAction.SLIDE for _, action in moves)


def test_slide_stops_at_blockers() -> None:
    board = GameBoard()
    place(board, 0, 4, duke(), BOTTOM)
    place(board, 3, 4, footman(), BOTTOM)
    place(board, 0, 0, footman(), TOP)
    assert targets(board, 0, 4) == {Coordinates(1, 4), Coordinates(2, 4)}

    board = GameBoard()
    place(board, 0, 4, duke(), BOTTOM)
    place(board, 3, 4, footman(), TOP)
    reach = {dst for dst, _ in board.get_legal_moves_ignoring_guard(Coordinates(0, 4))}
    assert reach == {Coordinates(1, 4), Coordinates(2, 4), Coordinates(3, 4)}
    # The enemy footman guards (2,4).
    assert targets(board, 0, 4) == {Coordinates(1, 4), Coordinates(3, 4)}


def test_pinned_footman_has_no_moves() -> None:
    board = GameBoard()
    place(board, 0, 0, duke(), TOP)
    place(board, 2, 2, footman(), TOP)
    place(board, 0, 1, footman(), BOTTOM)
    assert board.is_guard(TOP)
    assert board.get_legal_moves(Coordinates(2, 2)) == []
    assert board.get_legal_moves_ignoring_guard(Coordinates(2, 2)) != []


def test_duke_avoids_attacked_cells() -> None:
    board = GameBoard()
    place(board, 0, 0, duke(), TOP)
    place(board, 3, 1, footman(), BOTTOM)
    assert targets(board, 0, 0) == {
        Coordinates(1, 0),
        Coordinates(2, 0),
        Coordinates(4, 0),
        Coordinates(5, 0),
    }


def test_guard_without_duke_is_false() -> None:
    board = GameBoard()
    place(board, 2, 2, footman(), TOP)
    place(board, 2, 3, footman(), BOTTOM)
    assert not board.is_guard(TOP)
    assert not board.is_guard(BOTTOM)


def test_jump_ignores_path() -> None:
    board = GameBoard()
    place(board, 2, 4, champion(), BOTTOM)
    place(board, 2, 3, footman(), BOTTOM)
    assert Coordinates(2, 2) in targets(board, 2, 4)
    assert board.can_apply(Coordinates(2, 4), Coordinates(2, 2)) is MoveKind.MOVEMENT


def test_jump_slide_skips_first_cells_then_slides() -> None:
    board = GameBoard()
    place(board, 2, 5, assassin(), BOTTOM)
    place(board, 2, 4, footman(), BOTTOM)
    place(board, 2, 1, footman(), TOP)
    assert targets(board, 2, 5) == {Coordinates(2, 3), Coordinates(2, 2), Coordinates(2, 1)}
    assert board.can_apply(Coordinates(2, 5), Coordinates(2, 0)) is MoveKind.INVALID


def test_strike_classification() -> None:
    board = GameBoard()
    place(board, 2, 3, champion(), BOTTOM, flipped=True)
    place(board, 2, 2, footman(), TOP)
    assert board.can_apply(Coordinates(2, 3), Coordinates(2, 2)) is MoveKind.STRIKE
    # Strikes need a victim.
    assert board.can_apply(Coordinates(2, 3), Coordinates(1, 3)) is MoveKind.INVALID
    assert board.can_apply(Coordinates(2, 3), Coordinates(2, 3)) is MoveKind.INVALID


def test_strike_keeps_mover_in_place_and_undo_restores() -> None:
    board = GameBoard()
    place(board, 2, 3, champion(), BOTTOM, flipped=True)
    place(board, 2, 2, footman(), TOP)
    before = board.clone()

    captured = board.make_a_move(ApplyNonCommandTileAction(Coordinates(2, 3), Coordinates(2, 2)), BOTTOM)
    assert captured is not None and captured.owner is TOP
    assert board.is_empty(Coordinates(2, 2))
    assert board.get(Coordinates(2, 3)).current_side is CurrentSide.INITIAL

    board.undo(PossibleTileAction(Coordinates(2, 3), Coordinates(2, 2), captured.copy()))
    assert board == before


def test_movement_capture_and_undo() -> None:
    board = GameBoard()
    place(board, 2, 3, footman(), BOTTOM)
    place(board, 2, 2, footman(), TOP)
    before = board.clone()
    victim = board.get(Coordinates(2, 2)).copy()

    captured = board.make_a_move(ApplyNonCommandTileAction(Coordinates(2, 3), Coordinates(2, 2)), BOTTOM)
    assert captured == victim
    assert board.get(Coordinates(2, 2)).owner is BOTTOM
    assert board.get(Coordinates(2, 2)).current_side is CurrentSide.FLIPPED

    board.undo(PossibleTileAction(Coordinates(2, 3), Coordinates(2, 2), victim))
    assert board == before


def test_invalid_action_is_fatal() -> None:
    board = GameBoard()
    place(board, 2, 3, footman(), BOTTOM)
    with pytest.raises(IllegalMoveError):
        board.make_a_move(ApplyNonCommandTileAction(Coordinates(2, 3), Coordinates(4, 3)), BOTTOM)


def test_placement_next_to_duke_and_undo() -> None:
    board = GameBoard()
    place(board, 2, 5, duke(), BOTTOM)
    before = board.clone()
    assert board.is_valid_placement(BOTTOM, DukeOffset.TOP)
    assert not board.is_valid_placement(BOTTOM, DukeOffset.BOTTOM)

    board.make_a_move(PlaceNewTile(DukeOffset.TOP), BOTTOM, footman())
    assert board.get(Coordinates(2, 4)).tile.name == "Footman"
    assert not board.is_valid_placement(BOTTOM, DukeOffset.TOP)

    removed = board.undo(PossiblePlacement(DukeOffset.TOP, BOTTOM))
    assert removed.tile.name == "Footman"
    assert board == before


def test_placement_must_not_leave_duke_in_guard() -> None:
    board = GameBoard()
    place(board, 0, 0, duke(), TOP)
    place(board, 0, 5, duke(), BOTTOM, flipped=True)
    assert board.is_guard(TOP)
    assert board.is_valid_placement(TOP, DukeOffset.BOTTOM)
    assert not board.is_valid_placement(TOP, DukeOffset.RIGHT)
    with pytest.raises(IllegalMoveError):
        board.make_a_move(PlaceNewTile(DukeOffset.RIGHT), TOP, footman())


def test_standard_setup() -> None:
    board = GameBoard.setup()
    assert board.as_string().splitlines() == [
        "...df.",
        "...f..",
        "......",
        "......",
        "...f..",
        "...df.",
    ]
    assert board.duke_coordinates(TOP) == Coordinates(3, 0)
    assert board.duke_coordinates(BOTTOM) == Coordinates(3, 5)
    assert len(board.tiles_for(TOP)) == 3
    assert not board.is_guard(TOP)
    assert not board.is_guard(BOTTOM)


def test_clone_is_independent() -> None:
    board = GameBoard.setup()
    clone = board.clone()
    clone.get(Coordinates(3, 0)).flip()
    assert clone != board
    assert board.get(Coordinates(3, 0)).current_side is CurrentSide.INITIAL
