from __future__ import annotations

import logging
import time
from dataclasses import dataclass, replace
from typing import List, Optional, Tuple

import numpy as np

from dukeai.core import GameState, PossibleMove

from .heuristics import HeuristicEvaluator
from .player import ArtificialPlayer, choose, split_rng
from .profiling import Profiler, span

logger = logging.getLogger(__name__)

INF = float("inf")

# Root values closer than this count as equally good.
TIE_EPSILON = 1e-9


@dataclass
class SearchConfig:
    max_depth: int = 2
    order_moves: bool = True


@dataclass
class SearchStats:
    """Aggregated statistics from a single search."""

    nodes: int
    depth: int
    root_moves: int
    best_value: float
    candidates: int
    elapsed_ms: float


class HeuristicAlphaBetaPlayer(ArtificialPlayer):
    """Depth bounded negamax with alpha-beta pruning.

    The search plays and undoes moves on a private clone of the state. Leaves are
    scored with the evaluator from the point of view of the player to move;
    decided positions score +/- infinity. Root children are sorted with the cheap
    evaluator, and ties between equally good root moves are broken at random.
    """

    name = "alpha_beta"

    def __init__(
        self,
        evaluator: HeuristicEvaluator,
        max_depth: Optional[int] = None,
        *,
        config: Optional[SearchConfig] = None,
        profiler: Optional[Profiler] = None,
    ) -> None:
        self.evaluator = evaluator
        self.config = config or SearchConfig()
        if max_depth is not None:
            self.config = replace(self.config, max_depth=max_depth)
        if self.config.max_depth < 1:
            raise ValueError("max_depth must be at least 1")
        self.profiler = profiler
        self.last_stats: Optional[SearchStats] = None
        self._nodes = 0

    @property
    def max_depth(self) -> int:
        return self.config.max_depth

    def get_next_move(self, rng: np.random.Generator, state: GameState) -> PossibleMove:
        start = time.monotonic()
        self._nodes = 0
        root = state.clone()
        search_rng = split_rng(rng)

        with span(self.profiler, "generate_moves"):
            moves = root.all_valid_game_moves_for_current_player()
        if not moves:
            raise ValueError("No legal moves available")

        if self.config.order_moves:
            moves = self._order_moves(root, moves, search_rng)

        best_value = -INF
        best_moves: List[PossibleMove] = []
        for move in moves:
            value = self._search_root_child(root, move, best_value, search_rng)
            if value > best_value + TIE_EPSILON or not best_moves:
                best_value = value
                best_moves = [move]
            elif value == best_value or abs(value - best_value) < TIE_EPSILON:
                best_moves.append(move)

        chosen = choose(rng, best_moves)
        self.last_stats = SearchStats(
            nodes=self._nodes,
            depth=self.max_depth,
            root_moves=len(moves),
            best_value=best_value,
            candidates=len(best_moves),
            elapsed_ms=(time.monotonic() - start) * 1000.0,
        )
        logger.debug(
            "alpha-beta depth=%d nodes=%d value=%.2f candidates=%d %.1fms",
            self.max_depth,
            self._nodes,
            best_value,
            len(best_moves),
            self.last_stats.elapsed_ms,
        )
        return chosen

    def _search_root_child(
        self,
        root: GameState,
        move: PossibleMove,
        best_value: float,
        rng: np.random.Generator,
    ) -> float:
        # Values at or above best_value - epsilon must come back exact, so the
        # window only prunes moves that are strictly worse.
        if best_value in (INF, -INF):
            beta = INF
        else:
            beta = -(best_value - TIE_EPSILON)
        with span(self.profiler, "play"):
            undo = root.play(move, rng)
        try:
            return -self._negamax(root, self.max_depth - 1, -INF, beta, rng)
        finally:
            with span(self.profiler, "undo"):
                root.undo(undo)

    def _negamax(
        self,
        state: GameState,
        depth: int,
        alpha: float,
        beta: float,
        rng: np.random.Generator,
    ) -> float:
        self._nodes += 1
        if state.is_tie():
            return 0.0
        with span(self.profiler, "generate_moves"):
            moves = state.all_valid_game_moves_for_current_player()
        if not moves:
            # The player to move has lost.
            return -INF
        if depth <= 0:
            with span(self.profiler, "evaluate"):
                return self.evaluator.evaluate(state)

        best = -INF
        for move in moves:
            with span(self.profiler, "play"):
                undo = state.play(move, rng)
            value = -self._negamax(state, depth - 1, -beta, -alpha, rng)
            with span(self.profiler, "undo"):
                state.undo(undo)
            if value > best:
                best = value
            if value > alpha:
                alpha = value
            if alpha >= beta:
                break
        return best

    def _order_moves(
        self,
        state: GameState,
        moves: List[PossibleMove],
        rng: np.random.Generator,
    ) -> List[PossibleMove]:
        """Best first by the cheap evaluator, shuffled first so equal scores vary."""
        shuffled = [moves[i] for i in rng.permutation(len(moves))]
        scored: List[Tuple[float, int, PossibleMove]] = []
        with span(self.profiler, "order_moves"):
            for index, move in enumerate(shuffled):
                undo = state.play(move, rng)
                # The opponent is to move after ``move``.
                score = -self.evaluator.cheap_evaluate(state)
                state.undo(undo)
                scored.append((score, index, move))
        scored.sort(key=lambda item: (-item[0], item[1]))
        return [move for _, _, move in scored]
