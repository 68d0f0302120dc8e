"""Computer players and board heuristics."""

from .alpha_beta import HeuristicAlphaBetaPlayer, SearchConfig, SearchStats
from .factory import build_player
from .heuristics import DEFAULT_HEURISTICS, HeuristicEvaluator, Heuristics
from .player import ArtificialPlayer, GreedyPlayer, RandomPlayer
from .profiling import Profiler

__all__ = [
    "ArtificialPlayer",
    "RandomPlayer",
    "GreedyPlayer",
    "HeuristicAlphaBetaPlayer",
    "SearchConfig",
    "SearchStats",
    "Heuristics",
    "HeuristicEvaluator",
    "DEFAULT_HEURISTICS",
    "Profiler",
    "build_player",
]
