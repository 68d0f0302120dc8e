"""Build players from plain config mappings, e.g. a YAML section.

Example::

    top:
      type: alpha_beta
      max_depth: 2
      heuristics: [duke_movement_options, total_tiles_on_board]
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Mapping, Optional

from .alpha_beta import HeuristicAlphaBetaPlayer, SearchConfig
from .heuristics import DEFAULT_HEURISTICS, HeuristicEvaluator
from .player import ArtificialPlayer, GreedyPlayer, RandomPlayer
from .profiling import Profiler

logger = logging.getLogger(__name__)


def _evaluator(cfg: Mapping[str, Any]) -> HeuristicEvaluator:
    names = cfg.get("heuristics") or [h.value for h in DEFAULT_HEURISTICS]
    return HeuristicEvaluator.from_names(names, cfg.get("weights"))


def _random(cfg: Mapping[str, Any], profiler: Optional[Profiler]) -> ArtificialPlayer:
    return RandomPlayer()


def _greedy(cfg: Mapping[str, Any], profiler: Optional[Profiler]) -> ArtificialPlayer:
    return GreedyPlayer(_evaluator(cfg))


def _alpha_beta(cfg: Mapping[str, Any], profiler: Optional[Profiler]) -> ArtificialPlayer:
    config = SearchConfig(
        max_depth=int(cfg.get("max_depth", SearchConfig.max_depth)),
        order_moves=bool(cfg.get("order_moves", SearchConfig.order_moves)),
    )
    return HeuristicAlphaBetaPlayer(_evaluator(cfg), config=config, profiler=profiler)


PLAYER_BUILDERS: Dict[str, Callable[[Mapping[str, Any], Optional[Profiler]], ArtificialPlayer]] = {
    "random": _random,
    "greedy": _greedy,
    "alpha_beta": _alpha_beta,
}


def build_player(cfg: Mapping[str, Any], profiler: Optional[Profiler] = None) -> ArtificialPlayer:
    kind = str(cfg.get("type", "random")).lower()
    try:
        builder = PLAYER_BUILDERS[kind]
    except KeyError as exc:
        raise ValueError(f"Unknown player type '{kind}'. Expected one of {sorted(PLAYER_BUILDERS)}") from exc
    player = builder(cfg, profiler)
    logger.debug("built %s player from %s", kind, dict(cfg))
    return player
