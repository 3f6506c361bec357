from __future__ import annotations

import argparse
import logging
import sys

from . import __version__
from .config import load_config
from .exceptions import ConfigError


def _setup_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    logging.basicConfig(
        level=level,
        format="[%(asctime)s] %(levelname)s %(name)s: %(message)s",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dungeon-descent",
        description="Dungeon Descent - a turn-based dungeon crawler",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("--gui", action="store_true", help="Play in an Arcade window (default)")
    mode.add_argument("--headless", action="store_true", help="Play in the terminal")
    parser.add_argument("--config", default=None, help="YAML file overriding the default config")
    parser.add_argument("--seed", type=int, default=None, help="Seed for a reproducible run")
    parser.add_argument("--depth", type=int, default=None, help="Depth to start on")
    parser.add_argument(
        "--script",
        default=None,
        help="Headless only: play this string of w/a/s/d moves instead of reading stdin",
    )
    parser.add_argument("-v", "--verbose", action="count", default=0, help="Increase log verbosity (-v, -vv)")
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    _setup_logging(args.verbose)

    try:
        config = load_config(args.config).with_overrides(seed=args.seed, start_depth=args.depth)
    except ConfigError as exc:
        parser.error(str(exc))

    if args.headless or args.script is not None:
        from .app.console import run_headless

        return run_headless(config, script=args.script)

    from .app.arcade_app import run_gui

    return run_gui(config)


if __name__ == "__main__":
    sys.exit(main())
