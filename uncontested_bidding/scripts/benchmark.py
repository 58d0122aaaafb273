"""Benchmark auctions between baseline bots."""

from __future__ import annotations

import argparse
import logging
import random
import time
from typing import List, Sequence

from ..bots.arena import Arena
from ..bots.heuristic_bot import HeuristicBot
from ..bots.pass_bot import PassBot
from ..bots.random_bot import RandomBot
from ..engine.game import UncontestedBiddingGame
from ..engine.rules import load_config

BOTS = {"random": RandomBot, "pass": PassBot, "heuristic": HeuristicBot}


def build_bots(names: Sequence[str], seed: int) -> List:
    """Instantiate the named bots; random bots draw from generators derived from ``seed``."""

    bots = []
    for index, name in enumerate(names):
        if BOTS[name] is RandomBot:
            bots.append(RandomBot(rng=random.Random(seed * 2 + index)))
        else:
            bots.append(BOTS[name]())
    return bots


def main(argv: list[str] | None = None) -> None:
    """Play sampled auctions and report throughput and mean returns."""

    parser = argparse.ArgumentParser()
    parser.add_argument("--episodes", type=int, default=100)
    parser.add_argument("--config", default=None, help="YAML file of presets")
    parser.add_argument("--preset", default="default")
    parser.add_argument("--subgame", choices=["", "2NT"], default=None)
    parser.add_argument("--relative-scoring", action="store_true")
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--bots", nargs=2, choices=sorted(BOTS), default=["heuristic", "heuristic"])
    parser.add_argument("--verbose", action="store_true")
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    overrides = {}
    if args.subgame is not None:
        overrides["subgame"] = args.subgame
    if args.relative_scoring:
        overrides["relative_scoring"] = True
    if args.seed is not None:
        overrides["rng_seed"] = args.seed
    game = UncontestedBiddingGame.new(load_config(args.config, preset=args.preset), **overrides)
    bots = build_bots(args.bots, game.rng_seed)
    arena = Arena(game=game)
    start = time.perf_counter()
    result = arena.run(bots, episodes=args.episodes)
    duration = time.perf_counter() - start
    print(f"Played {args.episodes} auctions in {duration:.2f}s")
    print(f"Mean score: {result.mean_score:.1f}")
    if result.mean_relative is not None:
        print(f"Mean relative score: {result.mean_relative:.1f}")


if __name__ == "__main__":
    main()
