#!/usr/bin/env python3
"""
Chill Flap: guide the flyer through the pipe gaps.
Space / Up / Click / Tap = start, flap, restart | Esc = Quit
"""

import argparse
import logging
import random

from .constants import DB_FILE, MUSIC_FILE, SCREEN_HEIGHT, SCREEN_WIDTH
from .data_models import GameConfig
from .game_loop import GameLoop
from .score_store import SqliteScoreStore


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="chillflap", description=__doc__.strip().splitlines()[0])
    parser.add_argument("--width", type=int, default=SCREEN_WIDTH, help="window width in pixels")
    parser.add_argument("--height", type=int, default=SCREEN_HEIGHT, help="window height in pixels")
    parser.add_argument("--db", default=DB_FILE, help="sqlite file holding the high score")
    parser.add_argument("--music", default=MUSIC_FILE, help="looping ambient track")
    parser.add_argument("--seed", type=int, default=None, help="seed for a repeatable pipe layout")
    parser.add_argument("--log-level", default="INFO",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(level=args.log_level,
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    # Imported late so --help works without a display
    from .client import FlappyClient

    config = GameConfig(screen_width=args.width, screen_height=args.height)
    with SqliteScoreStore(args.db) as store:
        loop = GameLoop(score_store=store, config=config, rng=random.Random(args.seed))
        logging.getLogger(__name__).info("High score on record: %d", loop.high_score)
        FlappyClient(loop, music_file=args.music).run()


if __name__ == "__main__":
    main()
