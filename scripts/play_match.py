#!/usr/bin/env python3
"""Play automated Lines of Action games, with optional logging & replay."""

import argparse
import json
import logging
from pathlib import Path
from typing import Dict, Optional

import numpy as np

from loa import Board, EngineConfig, MachinePlayer, Move, RandomPlayer, load_config, play_match
from loa.core import DEFAULT_MOVE_LIMIT
from loa.players import Player


def build_player(kind: str, config: EngineConfig, seed: Optional[int]) -> Player:
    if kind == "random":
        return RandomPlayer(np.random.default_rng(seed))
    return MachinePlayer(config.build_engine(seed))


def replay_logged_game(log_path: Path, *, game_index: int = 0, verbose: bool = True) -> Dict[str, object]:
    data = json.loads(log_path.read_text())
    entry = data["games"][game_index]
    board = Board(move_limit=data.get("metadata", {}).get("move_limit", DEFAULT_MOVE_LIMIT))
    if verbose:
        print(board)
    for text in entry["moves"]:
        board.make_move(Move.parse(text))
        if verbose:
            print(f"{board.turn.opposite.full_name} plays {text}")
            print(board)
    summary = {
        "result": board.result.value,
        "moves": board.moves_made,
        "board": str(board),
    }
    if verbose:
        print(f"Result: {summary['result']}")
    return summary


def main() -> None:
    parser = argparse.ArgumentParser(description="Play automated Lines of Action games.")
    parser.add_argument("--config", type=str, default="configs/default.yaml")
    parser.add_argument("--games", type=int, default=1)
    parser.add_argument("--white", choices=["machine", "random"], default="machine")
    parser.add_argument("--black", choices=["machine", "random"], default="random")
    parser.add_argument("--move-limit", type=int)
    parser.add_argument("--depth", type=int, help="Search at this fixed depth")
    parser.add_argument("--seed", type=int)
    parser.add_argument("--log-file", type=str)
    parser.add_argument("--replay-log", type=str, help="Replay a logged game and exit")
    parser.add_argument("--replay-quiet", action="store_true")
    parser.add_argument("--log-level", default="WARNING")
    args = parser.parse_args()

    logging.basicConfig(level=getattr(logging, args.log_level.upper()), format="%(levelname)s %(name)s: %(message)s")

    if args.replay_log:
        summary = replay_logged_game(Path(args.replay_log), verbose=not args.replay_quiet)
        if args.replay_quiet:
            print(json.dumps(summary, indent=2))
        return

    cfg_path = Path(args.config)
    config = load_config(cfg_path) if cfg_path.exists() else EngineConfig()
    if args.move_limit is not None:
        config.move_limit = args.move_limit
    if args.depth is not None:
        config.search.fixed_depth = args.depth
    seed = args.seed if args.seed is not None else config.seed

    white = build_player(args.white, config, seed)
    black = build_player(args.black, config, None if seed is None else seed + 1)
    result = play_match(white, black, games=args.games, move_limit=config.move_limit, seed=seed)

    output = {
        "games": result.games_played,
        "white_wins": result.white_wins,
        "black_wins": result.black_wins,
        "draws": result.draws,
        "average_length": result.average_length,
        "white_winrate": result.winrate_white(),
        "black_winrate": result.winrate_black(),
    }
    print(json.dumps(output, indent=2))

    if args.log_file:
        log_data = {
            "metadata": {
                "white": args.white,
                "black": args.black,
                "move_limit": config.move_limit,
                "seed": seed,
            },
            "games": [
                {"result": record.result.value, "moves": [str(move) for move in record.moves]}
                for record in result.records
            ],
        }
        path = Path(args.log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(log_data, indent=2))


if __name__ == "__main__":
    main()
