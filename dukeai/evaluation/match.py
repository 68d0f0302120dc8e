from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Tuple

import numpy as np
from tqdm import tqdm

from dukeai.ai import ArtificialPlayer
from dukeai.core import GameResult, GameState, Owner, starting_tiles

logger = logging.getLogger(__name__)


@dataclass
class MatchConfig:
    episodes: int = 4
    max_turns: int = 200
    seed: Optional[int] = None
    progress: bool = False


@dataclass
class EvaluationResult:
    games_played: int
    top_wins: int
    bottom_wins: int
    ties: int
    unfinished: int
    average_length: float
    lengths: List[int] = field(default_factory=list)

    def winrate_top(self) -> float:
        return self.top_wins / max(1, self.games_played)

    def winrate_bottom(self) -> float:
        return self.bottom_wins / max(1, self.games_played)

    def as_dict(self) -> Dict[str, float]:
        return {
            "games_played": self.games_played,
            "top_wins": self.top_wins,
            "bottom_wins": self.bottom_wins,
            "ties": self.ties,
            "unfinished": self.unfinished,
            "average_length": self.average_length,
            "winrate_top": self.winrate_top(),
            "winrate_bottom": self.winrate_bottom(),
        }


def default_state() -> GameState:
    return GameState.new(starting_tiles())


def play_game(
    top: ArtificialPlayer,
    bottom: ArtificialPlayer,
    state: GameState,
    rng: np.random.Generator,
    max_turns: int = 200,
) -> Tuple[GameResult, int]:
    """Let two players alternate on ``state`` until the game ends or ``max_turns`` pass."""
    players = {Owner.TOP_PLAYER: top, Owner.BOTTOM_PLAYER: bottom}
    turns = 0
    result = state.game_result()
    while not result.is_over and turns < max_turns:
        players[state.current_player_turn].play_next_move(rng, state)
        turns += 1
        result = state.game_result()
    logger.debug("game finished after %d turns: %s", turns, result.value)
    return result, turns


def evaluate_players(
    top: ArtificialPlayer,
    bottom: ArtificialPlayer,
    *,
    episodes: int,
    seed: Optional[int] = None,
    max_turns: int = 200,
    state_factory: Optional[Callable[[], GameState]] = None,
    progress: bool = False,
) -> EvaluationResult:
    state_factory = state_factory or default_state
    rng = np.random.default_rng(seed)

    top_wins = 0
    bottom_wins = 0
    ties = 0
    unfinished = 0
    lengths: List[int] = []

    for _ in tqdm(range(episodes), desc="games", disable=not progress):
        result, turns = play_game(top, bottom, state_factory(), rng, max_turns)
        lengths.append(turns)
        if result is GameResult.TOP_PLAYER_WON:
            top_wins += 1
        elif result is GameResult.BOTTOM_PLAYER_WON:
            bottom_wins += 1
        elif result is GameResult.TIE:
            ties += 1
        else:
            unfinished += 1

    average_length = sum(lengths) / max(1, episodes)
    return EvaluationResult(
        games_played=episodes,
        top_wins=top_wins,
        bottom_wins=bottom_wins,
        ties=ties,
        unfinished=unfinished,
        average_length=average_length,
        lengths=lengths,
    )


def evaluate_with_config(
    top: ArtificialPlayer,
    bottom: ArtificialPlayer,
    config: MatchConfig,
    state_factory: Optional[Callable[[], GameState]] = None,
) -> EvaluationResult:
    return evaluate_players(
        top,
        bottom,
        episodes=config.episodes,
        seed=config.seed,
        max_turns=config.max_turns,
        state_factory=state_factory,
        progress=config.progress,
    )
