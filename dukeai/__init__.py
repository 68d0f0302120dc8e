"""Duke AI core package."""

from . import ai, core, evaluation
from .ai import (
    ArtificialPlayer,
    GreedyPlayer,
    HeuristicAlphaBetaPlayer,
    HeuristicEvaluator,
    Heuristics,
    Profiler,
    RandomPlayer,
    SearchConfig,
    SearchStats,
    build_player,
)
from .core import (
    CanPullNewTileResult,
    Coordinates,
    GameBoard,
    GameResult,
    GameState,
    Owner,
    starting_tiles,
)
from .evaluation import EvaluationResult, MatchConfig, evaluate_players, play_game

__all__ = [
    "ai",
    "core",
    "evaluation",
    "Coordinates",
    "GameBoard",
    "GameState",
    "GameResult",
    "CanPullNewTileResult",
    "Owner",
    "starting_tiles",
    "ArtificialPlayer",
    "RandomPlayer",
    "GreedyPlayer",
    "HeuristicAlphaBetaPlayer",
    "HeuristicEvaluator",
    "Heuristics",
    "Profiler",
    "SearchConfig",
    "SearchStats",
    "build_player",
    "EvaluationResult",
    "MatchConfig",
    "evaluate_players",
    "play_game",
]
