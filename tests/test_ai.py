import numpy as np
import pytest

from dukeai.ai import (
    GreedyPlayer,
    HeuristicAlphaBetaPlayer,
    HeuristicEvaluator,
    Heuristics,
    Profiler,
    RandomPlayer,
    SearchConfig,
    build_player,
)
from dukeai.core import (
    Coordinates,
    GameBoard,
    GameResult,
    GameState,
    Owner,
    PlacedTile,
    PossibleTileAction,
    starting_tiles,
)
from dukeai.core.units import duke, footman

TOP = Owner.TOP_PLAYER
BOTTOM = Owner.BOTTOM_PLAYER

WINNING_MOVE = PossibleTileAction(Coordinates(5, 5), Coordinates(0, 5), None)


def win_in_one_state() -> GameState:
    board = GameBoard()
    board.place(Coordinates(0, 0), PlacedTile(TOP, duke()))
    board.place(Coordinates(1, 0), PlacedTile(TOP, footman()))
    board.place(Coordinates(5, 5), PlacedTile(BOTTOM, duke()))
    board.place(Coordinates(4, 4), PlacedTile(BOTTOM, footman()))
    return GameState.from_board(board, current_player_turn=BOTTOM)


def test_random_player_picks_a_valid_move() -> None:
    rng = np.random.default_rng(0)
    state = GameState.new(starting_tiles())
    move = RandomPlayer().get_next_move(rng, state)
    assert move in state.all_valid_game_moves_for_current_player()


def test_players_refuse_finished_games() -> None:
    rng = np.random.default_rng(0)
    state = win_in_one_state()
    state.make_a_move(WINNING_MOVE.to_game_move())
    assert state.game_result() is GameResult.BOTTOM_PLAYER_WON
    for player in (RandomPlayer(), GreedyPlayer(HeuristicEvaluator()), HeuristicAlphaBetaPlayer(HeuristicEvaluator(), 1)):
        with pytest.raises(ValueError):
            player.get_next_move(rng, state)


@pytest.mark.parametrize("depth", [1, 2])
def test_alpha_beta_finds_win_in_one(depth: int) -> None:
    rng = np.random.default_rng(7)
    state = win_in_one_state()
    before = state.clone()
    player = HeuristicAlphaBetaPlayer(HeuristicEvaluator(), depth)
    move = player.get_next_move(rng, state)
    assert move == WINNING_MOVE
    assert state == before
    assert player.last_stats is not None
    assert player.last_stats.best_value == float("inf")
    assert player.last_stats.nodes > 0


def test_greedy_finds_win_in_one() -> None:
    rng = np.random.default_rng(8)
    move = GreedyPlayer(HeuristicEvaluator()).get_next_move(rng, win_in_one_state())
    assert move == WINNING_MOVE


def test_play_next_move_applies_the_move() -> None:
    rng = np.random.default_rng(9)
    state = win_in_one_state()
    player = HeuristicAlphaBetaPlayer(HeuristicEvaluator(), 1)
    undo = player.play_next_move(rng, state)
    assert state.current_player_turn is TOP
    assert state.winner() is BOTTOM
    state.undo(undo)
    assert state == win_in_one_state()


def test_symmetric_opening_evaluates_to_zero() -> None:
    state = GameState.new(starting_tiles())
    evaluator = HeuristicEvaluator()
    assert evaluator.evaluate(state) == 0
    assert evaluator.cheap_evaluate(state) == 0
    for heuristic in Heuristics:
        assert heuristic.difference(TOP, state) == 0


def test_heuristic_values() -> None:
    state = win_in_one_state()
    assert Heuristics.TOTAL_TILES_ON_BOARD.evaluate_for_owner(TOP, state) == 20
    assert Heuristics.DISCARDED_UNITS.evaluate_for_owner(TOP, state) == 0
    # Duke at (5,5) slides along row 5 only.
    assert Heuristics.DUKE_MOVEMENT_OPTIONS.evaluate_for_owner(BOTTOM, state) == 5
    assert Heuristics.TOTAL_MOVEMENT_OPTIONS.approx_evaluate_for_owner(BOTTOM, state) >= 5


def test_discards_count_against_owner() -> None:
    board = GameBoard()
    board.place(Coordinates(0, 0), PlacedTile(TOP, duke()))
    board.place(Coordinates(2, 2), PlacedTile(TOP, footman()))
    board.place(Coordinates(5, 5), PlacedTile(BOTTOM, duke()))
    board.place(Coordinates(2, 3), PlacedTile(BOTTOM, footman()))
    state = GameState.from_board(board, current_player_turn=BOTTOM)
    state.make_a_move(PossibleTileAction(Coordinates(2, 3), Coordinates(2, 2)).to_game_move())
    assert Heuristics.DISCARDED_UNITS.evaluate_for_owner(TOP, state) == -5
    assert Heuristics.DISCARDED_UNITS.difference(BOTTOM, state) == 5
    assert Heuristics.TOTAL_TILES_ON_BOARD.difference(BOTTOM, state) == 10


def test_evaluator_from_names() -> None:
    evaluator = HeuristicEvaluator.from_names(["discarded_units", "TOTAL_TILES_ON_BOARD"], {"discarded_units": 2})
    assert evaluator.heuristics == (Heuristics.DISCARDED_UNITS, Heuristics.TOTAL_TILES_ON_BOARD)
    assert evaluator.weights[Heuristics.DISCARDED_UNITS] == 2.0
    with pytest.raises(ValueError):
        HeuristicEvaluator.from_names(["luck"])
    with pytest.raises(ValueError):
        HeuristicEvaluator([])


def test_build_player() -> None:
    assert isinstance(build_player({"type": "random"}), RandomPlayer)
    assert isinstance(build_player({"type": "greedy", "heuristics": ["total_tiles_on_board"]}), GreedyPlayer)
    player = build_player({"type": "alpha_beta", "max_depth": 3})
    assert isinstance(player, HeuristicAlphaBetaPlayer)
    assert player.max_depth == 3
    with pytest.raises(ValueError):
        build_player({"type": "oracle"})


def test_search_config_validation() -> None:
    with pytest.raises(ValueError):
        HeuristicAlphaBetaPlayer(HeuristicEvaluator(), config=SearchConfig(max_depth=0))


def test_profiler_collects_search_spans() -> None:
    rng = np.random.default_rng(4)
    profiler = Profiler()
    player = HeuristicAlphaBetaPlayer(HeuristicEvaluator(), 1, profiler=profiler)
    player.get_next_move(rng, win_in_one_state())
    report = profiler.report()
    assert {"generate_moves", "play", "undo", "order_moves"} <= set(report)
    assert report["play"]["calls"] >= 1
    profiler.reset()
    assert profiler.report() == {}


def test_depth_override_leaves_shared_config_alone() -> None:
    config = SearchConfig(max_depth=2, order_moves=False)
    shallow = HeuristicAlphaBetaPlayer(HeuristicEvaluator(), 1, config=config)
    deep = HeuristicAlphaBetaPlayer(HeuristicEvaluator(), 3, config=config)
    assert shallow.max_depth == 1
    assert deep.max_depth == 3
    assert config.max_depth == 2
    assert not deep.config.order_moves
