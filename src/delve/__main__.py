from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from . import __version__
from .app import run_auto, run_gui, run_headless
from .config import load_config
from .exceptions import ConfigError
from .input import parse_key
from .logging_config import configure_logging

logger = logging.getLogger(__name__)


def _setup_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    configure_logging(default_level=level)


def _parse_keys(value: str) -> List[str]:
    keys = [k.strip() for k in value.split(",") if k.strip()]
    for key in keys:
        try:
            parse_key(key)
        except ValueError as exc:
            raise argparse.ArgumentTypeError(str(exc)) from exc
    return keys


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="delve",
        description="Delve - a small turn-based dungeon crawler",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("--gui", action="store_true", help="Force GUI mode (Arcade)")
    mode.add_argument("--headless", action="store_true", help="Force headless mode (console)")
    parser.add_argument("--seed", type=int, default=None, help="Seed for dungeon generation")
    parser.add_argument("--config", default=None, help="Path to a YAML config override")
    parser.add_argument(
        "--keys",
        type=_parse_keys,
        default=[],
        help="Comma-separated keys to replay headless, e.g. up,up,g,i,a",
    )
    parser.add_argument("--max-steps", type=int, default=None, help="Stop after N steps (headless)")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="Increase log verbosity (-v, -vv)")

    args = parser.parse_args(argv)
    _setup_logging(args.verbose)

    try:
        config = load_config(args.config)
    except ConfigError as exc:
        logger.error("%s", exc)
        return 2

    # Honor CLI over env vars
    if args.gui:
        return run_gui(config, seed=args.seed)
    if args.headless:
        return run_headless(config, seed=args.seed, keys=args.keys, max_steps=args.max_steps)
    return run_auto(config, seed=args.seed, keys=args.keys, max_steps=args.max_steps)


if __name__ == "__main__":
    sys.exit(main())
