"""CLI command to pit two NoGo agents against each other."""

from __future__ import annotations

import argparse
import logging
from typing import Optional

from arena.match import ArenaConfig, MatchRunner, parse_agent_spec


def parse_args(argv: Optional[list] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run a NoGo match series between two agents.")
    parser.add_argument("--black", type=str, default="mcts N=200", help='Black agent spec, e.g. "mcts N=500"')
    parser.add_argument("--white", type=str, default="random", help='White agent spec, e.g. "random"')
    parser.add_argument("--games", type=int, default=None, help="Number of games (overrides config)")
    parser.add_argument("--seed", type=int, default=None, help="Base seed (overrides config)")
    parser.add_argument("--config", type=str, default=None, help="Path to arena config JSON")
    parser.add_argument("--log-level", type=str, default="INFO", help="Python logging level")
    return parser.parse_args(argv)


def main(argv: Optional[list] = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.INFO))
    logger = logging.getLogger("nogo.arena")

    config = ArenaConfig.from_json(args.config) if args.config else ArenaConfig()
    if args.games is not None:
        config.games = args.games
    if args.seed is not None:
        config.base_seed = args.seed

    runner = MatchRunner(config)
    records = runner.run_games_from_specs(
        black_spec=parse_agent_spec(args.black),
        white_spec=parse_agent_spec(args.white),
        n_games=config.games,
    )
    summary = runner.summarize(records)
    logger.info(
        "Arena finished | black=%s white=%s B:%d W:%d avg_plies=%.1f",
        args.black,
        args.white,
        summary["black_wins"],
        summary["white_wins"],
        summary["avg_plies"],
    )
    print(
        f"games={summary['games']} black_wins={summary['black_wins']} "
        f"white_wins={summary['white_wins']} avg_plies={summary['avg_plies']:.1f}"
    )


if __name__ == "__main__":
    main()
