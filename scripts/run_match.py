#!/usr/bin/env python3
"""Play a series of AI-vs-AI games and print a JSON summary."""

import argparse
import json
import logging
from pathlib import Path
from typing import List

import yaml

from dukeai.ai import Profiler, build_player
from dukeai.core import DukeInitialLocation, FootmenSetup, GameState, starting_tiles
from dukeai.evaluation import MatchConfig, evaluate_with_config


def _setup(cfg: dict, default: tuple) -> tuple:
    if not cfg:
        return default
    return (
        DukeInitialLocation(cfg.get("duke", default[0].value)),
        FootmenSetup(cfg.get("footmen", default[1].value)),
    )


def main() -> None:
    parser = argparse.ArgumentParser()
    parser.add_argument("--config", type=str, default="configs/match.yaml")
    parser.add_argument("--episodes", type=int)
    parser.add_argument("--max-turns", type=int)
    parser.add_argument("--seed", type=int)
    parser.add_argument("--top", help="Player type for the top seat (random, greedy, alpha_beta)")
    parser.add_argument("--bottom", help="Player type for the bottom seat")
    parser.add_argument("--depth", type=int, help="Search depth for alpha_beta players")
    parser.add_argument("--show-board", action="store_true")
    parser.add_argument("--profile", action="store_true")
    parser.add_argument("--verbose", action="store_true")
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    cfg = {}
    if args.config:
        cfg_path = Path(args.config)
        if cfg_path.exists():
            cfg = yaml.safe_load(cfg_path.read_text()) or {}

    match = MatchConfig(**cfg.get("match", {}))
    if args.episodes is not None:
        match.episodes = args.episodes
    if args.max_turns is not None:
        match.max_turns = args.max_turns
    if args.seed is not None:
        match.seed = args.seed

    top_cfg = dict(cfg.get("top", {"type": "random"}))
    bottom_cfg = dict(cfg.get("bottom", {"type": "random"}))
    if args.top:
        top_cfg["type"] = args.top
    if args.bottom:
        bottom_cfg["type"] = args.bottom
    if args.depth is not None:
        top_cfg["max_depth"] = args.depth
        bottom_cfg["max_depth"] = args.depth

    profiler = Profiler() if args.profile else None
    top = build_player(top_cfg, profiler)
    bottom = build_player(bottom_cfg, profiler)

    board_cfg = cfg.get("board", {})
    top_setup = _setup(board_cfg.get("top"), (DukeInitialLocation.LEFT, FootmenSetup.LEFT))
    bottom_setup = _setup(board_cfg.get("bottom"), (DukeInitialLocation.RIGHT, FootmenSetup.RIGHT))
    bag = cfg.get("bag")
    tiles = starting_tiles(bag) if bag else starting_tiles()

    games: List[GameState] = []

    def new_game() -> GameState:
        state = GameState.new(tiles, top_setup, bottom_setup)
        games.append(state)
        return state

    match.progress = True
    result = evaluate_with_config(top, bottom, match, state_factory=new_game)
    if args.show_board:
        for episode, (state, turns) in enumerate(zip(games, result.lengths)):
            print(f"# game {episode}: {state.game_result().value} after {turns} turns")
            print(state.board.as_string())

    summary = result.as_dict()
    summary["top"] = top_cfg
    summary["bottom"] = bottom_cfg
    if profiler is not None:
        summary["profile"] = profiler.report()
    print(json.dumps(summary, indent=2))


if __name__ == "__main__":
    main()
