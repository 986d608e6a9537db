from __future__ import annotations

import logging
import os
from typing import Optional, Sequence

from ..config import GameConfig
from ..engine.game import new_game
from ..engine.turns import Engine, run_loop
from ..input import ScriptedInput
from ..rendering import Renderer

logger = logging.getLogger(__name__)

ENV_HEADLESS = "DELVE_HEADLESS"


def _arcade_available() -> bool:
    try:
        import arcade  # noqa: F401
        return True
    except ImportError:
        return False


def run_headless(
    config: GameConfig,
    seed: Optional[int] = None,
    keys: Sequence[str] = (),
    max_steps: Optional[int] = None,
) -> int:
    """Replay ``keys`` against a fresh game and print the final frame.

    The last rendered console is printed as plain text, followed by the
    message log, one message per line.
    """
    game = new_game(config, seed=seed)
    engine = Engine(game)
    renderer = Renderer(config.screen, game.map.width, game.map.height)
    steps = run_loop(engine, ScriptedInput.from_keys(keys), renderer.render_all, max_steps=max_steps)
    logger.info("Headless run finished after %d steps (turn %d)", steps, engine.turn)
    print(renderer.root.to_text())
    print()
    for text in game.messages.texts():
        print(text)
    return 0


def run_gui(config: GameConfig, seed: Optional[int] = None) -> int:
    """Open the arcade window, or fall back to headless when arcade is missing."""
    if not _arcade_available():
        logger.warning("Arcade not available; falling back to headless mode")
        return run_headless(config, seed=seed)

    from .arcade_app import run as run_window

    try:
        logger.info("Launching Arcade window")
        run_window(config, seed=seed)
        logger.info("Arcade loop finished")
        return 0
    except Exception:
        logger.exception("Unhandled exception in GUI loop; exiting with code 1")
        return 1


def run_auto(
    config: GameConfig,
    seed: Optional[int] = None,
    keys: Sequence[str] = (),
    max_steps: Optional[int] = None,
) -> int:
    """Run the GUI unless keys are scripted or DELVE_HEADLESS=1 is set."""
    if keys or max_steps is not None or os.getenv(ENV_HEADLESS) == "1":
        return run_headless(config, seed=seed, keys=keys, max_steps=max_steps)
    return run_gui(config, seed=seed)


__all__ = ["run_auto", "run_gui", "run_headless"]
