from __future__ import annotations

import logging
from typing import List

import numpy as np

from dukeai.core import GameResult, GameState, PossibleMove

from .heuristics import HeuristicEvaluator

logger = logging.getLogger(__name__)


def split_rng(rng: np.random.Generator) -> np.random.Generator:
    return np.random.default_rng(int(rng.integers(2**63)))


def choose(rng: np.random.Generator, moves: List[PossibleMove]) -> PossibleMove:
    return moves[int(rng.integers(len(moves)))]


class ArtificialPlayer:
    """Base class for computer players."""

    name = "player"

    def get_next_move(self, rng: np.random.Generator, state: GameState) -> PossibleMove:
        """Pick a move for the player to move without touching ``state``."""
        raise NotImplementedError

    def play_next_move(self, rng: np.random.Generator, state: GameState) -> PossibleMove:
        move = self.get_next_move(rng, state)
        return state.play(move, rng)


class RandomPlayer(ArtificialPlayer):
    """Uniformly random among all valid moves."""

    name = "random"

    def get_next_move(self, rng: np.random.Generator, state: GameState) -> PossibleMove:
        moves = state.all_valid_game_moves_for_current_player()
        if not moves:
            raise ValueError("No legal moves available")
        return choose(rng, moves)


class GreedyPlayer(ArtificialPlayer):
    """One ply lookahead scored by a heuristic evaluator."""

    name = "greedy"

    def __init__(self, evaluator: HeuristicEvaluator) -> None:
        self.evaluator = evaluator

    def get_next_move(self, rng: np.random.Generator, state: GameState) -> PossibleMove:
        root = state.clone()
        owner = root.current_player_turn
        moves = root.all_valid_game_moves_for_current_player()
        if not moves:
            raise ValueError("No legal moves available")

        search_rng = split_rng(rng)
        best_score = float("-inf")
        best_moves: List[PossibleMove] = []
        for move in moves:
            undo = root.play(move, search_rng)
            result = root.game_result()
            if result is GameResult.TIE:
                score = 0.0
            elif result.winner is not None:
                score = float("inf") if result.winner is owner else float("-inf")
            else:
                # The opponent is to move now.
                score = -self.evaluator.evaluate(root)
            root.undo(undo)

            if score > best_score:
                best_score = score
                best_moves = [move]
            elif score == best_score:
                best_moves.append(move)

        logger.debug("greedy %s: %d candidates scoring %.1f", owner.name, len(best_moves), best_score)
        return choose(rng, best_moves)
