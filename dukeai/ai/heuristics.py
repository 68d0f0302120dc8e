from __future__ import annotations

from enum import Enum
from typing import Dict, Iterable, Optional, Sequence

from dukeai.core import GameState, Owner


class Heuristics(Enum):
    """Board features scored for one player.

    The ``approx`` variants skip the self-guard filter, which makes them cheap
    enough for move ordering.
    """

    DUKE_MOVEMENT_OPTIONS = "duke_movement_options"
    TOTAL_TILES_ON_BOARD = "total_tiles_on_board"
    TOTAL_MOVEMENT_OPTIONS = "total_movement_options"
    DISCARDED_UNITS = "discarded_units"

    def evaluate_for_owner(self, owner: Owner, state: GameState) -> float:
        board = state.board
        if self is Heuristics.DUKE_MOVEMENT_OPTIONS:
            duke = state.duke_coordinate(owner)
            return 0.0 if duke is None else float(len(board.get_legal_moves(duke)))
        if self is Heuristics.TOTAL_MOVEMENT_OPTIONS:
            return float(len(state.all_valid_game_moves_for(owner)))
        return self._static_score(owner, state)

    def approx_evaluate_for_owner(self, owner: Owner, state: GameState) -> float:
        board = state.board
        if self is Heuristics.DUKE_MOVEMENT_OPTIONS:
            duke = state.duke_coordinate(owner)
            return 0.0 if duke is None else float(len(board.get_legal_moves_ignoring_guard(duke)))
        if self is Heuristics.TOTAL_MOVEMENT_OPTIONS:
            return float(sum(len(board.get_legal_moves_ignoring_guard(c)) for c, _ in board.tiles_for(owner)))
        return self._static_score(owner, state)

    def _static_score(self, owner: Owner, state: GameState) -> float:
        if self is Heuristics.TOTAL_TILES_ON_BOARD:
            return 10.0 * len(state.tiles_for_owner(owner))
        if self is Heuristics.DISCARDED_UNITS:
            return -5.0 * len(state.discard_for(owner))
        raise ValueError(f"{self.name} has no static score")

    def difference(self, owner: Owner, state: GameState) -> float:
        return self.evaluate_for_owner(owner, state) - self.evaluate_for_owner(owner.next_player(), state)

    def approx_difference(self, owner: Owner, state: GameState) -> float:
        return self.approx_evaluate_for_owner(owner, state) - self.approx_evaluate_for_owner(
            owner.next_player(), state
        )


DEFAULT_HEURISTICS = (
    Heuristics.DUKE_MOVEMENT_OPTIONS,
    Heuristics.TOTAL_TILES_ON_BOARD,
    Heuristics.TOTAL_MOVEMENT_OPTIONS,
    Heuristics.DISCARDED_UNITS,
)


class HeuristicEvaluator:
    """Weighted sum of heuristic differences, seen from the player to move."""

    def __init__(
        self,
        heuristics: Sequence[Heuristics] = DEFAULT_HEURISTICS,
        weights: Optional[Dict[Heuristics, float]] = None,
    ) -> None:
        if not heuristics:
            raise ValueError("At least one heuristic is required")
        self.heuristics = tuple(heuristics)
        self.weights = {h: 1.0 for h in self.heuristics}
        if weights:
            self.weights.update(weights)

    @classmethod
    def from_names(cls, names: Iterable[str], weights: Optional[Dict[str, float]] = None) -> "HeuristicEvaluator":
        heuristics = [Heuristics(name.lower()) for name in names]
        parsed = {Heuristics(k.lower()): float(v) for k, v in (weights or {}).items()}
        return cls(heuristics, parsed)

    def evaluate(self, state: GameState) -> float:
        owner = state.current_player_turn
        return sum(self.weights[h] * h.difference(owner, state) for h in self.heuristics)

    def cheap_evaluate(self, state: GameState) -> float:
        owner = state.current_player_turn
        return sum(self.weights[h] * h.approx_difference(owner, state) for h in self.heuristics)
