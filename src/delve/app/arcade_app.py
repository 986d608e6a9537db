from __future__ import annotations

import logging
from collections import deque
from typing import Deque, Optional

try:
    import arcade  # type: ignore
except ImportError:  # pragma: no cover - optional for test envs
    arcade = None

from ..config import GameConfig
from ..engine.game import new_game
from ..engine.turns import Engine, PlayerAction
from ..input import InputEvent, KeyCode, KeyEvent, PointerEvent
from ..rendering import Renderer

logger = logging.getLogger(__name__)

CELL_WIDTH = 12
CELL_HEIGHT = 12
FONT_SIZE = 9
TITLE = "Delve"


def _translate_key(symbol: int, modifiers: int) -> Optional[KeyEvent]:
    alt = bool(modifiers & arcade.key.MOD_ALT)
    special = {
        arcade.key.UP: KeyCode.UP,
        arcade.key.DOWN: KeyCode.DOWN,
        arcade.key.LEFT: KeyCode.LEFT,
        arcade.key.RIGHT: KeyCode.RIGHT,
        arcade.key.ENTER: KeyCode.ENTER,
        arcade.key.NUM_ENTER: KeyCode.ENTER,
        arcade.key.ESCAPE: KeyCode.ESCAPE,
    }
    code = special.get(symbol)
    if code is not None:
        return KeyEvent(code, alt=alt)
    if arcade.key.A <= symbol <= arcade.key.Z:
        return KeyEvent(KeyCode.TEXT, text=chr(symbol), alt=alt)
    return None


class ConsoleWindow(arcade.Window if arcade is not None else object):  # pragma: no cover - needs a display
    """Arcade window that presents the root console and feeds the engine.

    Input is queued by the arcade callbacks and drained one event per
    update, so a turn is at most one key press.
    """

    def __init__(self, config: GameConfig, engine: Engine) -> None:
        if arcade is None:
            raise RuntimeError("Arcade package is not installed; cannot create window")
        screen = config.screen
        super().__init__(
            screen.width * CELL_WIDTH,
            screen.height * CELL_HEIGHT,
            title=TITLE,
            update_rate=1 / screen.fps,
        )
        arcade.set_background_color(arcade.color.BLACK)
        self.engine = engine
        engine.display = self
        self.renderer = Renderer(screen, engine.game.map.width, engine.game.map.height)
        self._events: Deque[InputEvent] = deque()
        logger.info("Arcade window initialized (%dx%d)", self.width, self.height)

    def toggle_fullscreen(self) -> None:
        self.set_fullscreen(not self.fullscreen)

    def on_key_press(self, symbol: int, modifiers: int) -> None:
        event = _translate_key(symbol, modifiers)
        if event is not None:
            self._events.append(event)

    def on_mouse_motion(self, x: int, y: int, dx: int, dy: int) -> None:
        rows = self.renderer.root.height
        self._events.append(PointerEvent(int(x // CELL_WIDTH), rows - 1 - int(y // CELL_HEIGHT)))

    def on_update(self, delta_time: float) -> None:
        event = self._events.popleft() if self._events else None
        if self.engine.step(event) is PlayerAction.EXIT:
            logger.info("Exit requested; closing window")
            self.close()

    def on_draw(self) -> None:
        self.clear()
        root = self.renderer.render_all(self.engine)
        for x, y, char, fg, bg in root.cells():
            left = x * CELL_WIDTH
            bottom = (root.height - 1 - y) * CELL_HEIGHT
            if bg != root.default_bg:
                arcade.draw_lbwh_rectangle_filled(left, bottom, CELL_WIDTH, CELL_HEIGHT, bg)
            if char != " ":
                arcade.draw_text(
                    char,
                    left + CELL_WIDTH / 2,
                    bottom + CELL_HEIGHT / 2,
                    fg,
                    font_size=FONT_SIZE,
                    anchor_x="center",
                    anchor_y="center",
                )


def run(config: GameConfig, seed: Optional[int] = None) -> None:  # pragma: no cover - manual usage
    """Create a fresh game and run the window until it is closed."""
    if arcade is None:
        raise RuntimeError("Arcade is not installed. Please install 'arcade' to run the app.")
    engine = Engine(new_game(config, seed=seed))
    ConsoleWindow(config, engine)
    arcade.run()
