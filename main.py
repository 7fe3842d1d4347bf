# main.py
import argparse
import logging

from rich.logging import RichHandler
from rich.traceback import install

from controller import GameController
from scheduler import AsyncioScheduler
from settings import DEFAULT_OPTIONS, GameSettings
from tui import GameUI

install(show_locals=False)


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Rock Paper Scissors against the clock")
    parser.add_argument("--timer", type=int, default=DEFAULT_OPTIONS["timer_duration_seconds"],
                        help="seconds per round")
    parser.add_argument("--winning-score", type=int, default=DEFAULT_OPTIONS["winning_score"],
                        help="wins needed to take the game")
    parser.add_argument("--mute", action="store_true", help="start with sound off")
    parser.add_argument("--log-level", default="WARNING",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return parser.parse_args(argv)


def configure_logging(level: str):
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
    )


def main(argv=None):
    args = parse_args(argv)
    configure_logging(args.log_level)

    settings = GameSettings.from_options({
        "sound_enabled": not args.mute,
        "timer_duration_seconds": args.timer,
        "winning_score": args.winning_score,
    })
    game_controller = GameController(settings=settings, scheduler=AsyncioScheduler())
    ui = GameUI(game_controller)
    ui.run()


if __name__ == "__main__":
    main()
