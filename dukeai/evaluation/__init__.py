"""Evaluation helpers for Duke AI players."""

from .match import EvaluationResult, MatchConfig, evaluate_players, evaluate_with_config, play_game

__all__ = ["EvaluationResult", "MatchConfig", "evaluate_players", "evaluate_with_config", "play_game"]
