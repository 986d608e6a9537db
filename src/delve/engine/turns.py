from __future__ import annotations

import logging
from enum import Enum, auto
from typing import Callable, Dict, Optional, Protocol, Tuple

from ..input import InputEvent, InputSource, KeyCode, KeyEvent, PointerEvent
from .ai import ai_take_turn
from .game import Game
from .inventory import menu_index, pick_up_at_player, use_item
from .movement import player_move_or_attack

logger = logging.getLogger(__name__)

INVENTORY_HEADER = "Press the key next to an item to use it, or any other to cancel."

_DIRECTIONS: Dict[KeyCode, Tuple[int, int]] = {
    KeyCode.UP: (0, -1),
    KeyCode.DOWN: (0, 1),
    KeyCode.LEFT: (-1, 0),
    KeyCode.RIGHT: (1, 0),
}


class PlayerAction(Enum):
    TOOK_TURN = auto()
    DIDNT_TAKE_TURN = auto()
    EXIT = auto()


class Display(Protocol):
    """The bits of the window the turn loop may poke at."""

    def toggle_fullscreen(self) -> None:  # pragma: no cover - interface
        ...


class Engine:
    """Sequences player input, the player's action and the monsters' replies.

    One call to :meth:`step` is one pass of the main loop: refresh what the
    player can see, dispatch one input event, and if that cost a turn let
    every AI-driven entity act in ascending index order.
    """

    def __init__(self, game: Game, display: Optional[Display] = None) -> None:
        self.game = game
        self.display = display
        self.mouse: Tuple[int, int] = (0, 0)
        self.inventory_open = False
        self.turn = 0
        self._fov_origin: Optional[Tuple[int, int]] = None

    def refresh_visibility(self) -> bool:
        """Recompute FOV if the player moved since the last recompute."""
        pos = self.game.player.pos
        if pos == self._fov_origin:
            return False
        self.game.compute_fov()
        self._fov_origin = pos
        return True

    def step(self, event: Optional[InputEvent]) -> PlayerAction:
        self.refresh_visibility()
        action = self.handle_keys(event)
        if self.game.player.is_alive and action is not PlayerAction.DIDNT_TAKE_TURN:
            self.turn += 1
            self.run_ai_turns()
        return action

    def run_ai_turns(self) -> None:
        entities = self.game.entities
        for idx in range(len(entities)):
            if entities[idx].ai is not None:
                ai_take_turn(idx, self.game)

    def handle_keys(self, event: Optional[InputEvent]) -> PlayerAction:
        if isinstance(event, PointerEvent):
            self.mouse = (event.cx, event.cy)
            return PlayerAction.DIDNT_TAKE_TURN
        if not isinstance(event, KeyEvent):
            return PlayerAction.DIDNT_TAKE_TURN

        if event.code is KeyCode.ENTER and event.alt:
            if self.display is not None:
                self.display.toggle_fullscreen()
            return PlayerAction.DIDNT_TAKE_TURN
        if event.code is KeyCode.ESCAPE:
            if self.inventory_open:
                self.inventory_open = False
                return PlayerAction.DIDNT_TAKE_TURN
            return PlayerAction.EXIT
        if self.inventory_open:
            return self._choose_from_inventory(event)
        if not self.game.player.is_alive:
            return PlayerAction.DIDNT_TAKE_TURN

        direction = _DIRECTIONS.get(event.code)
        if direction is not None:
            player_move_or_attack(self.game.player, *direction, self.game)
            return PlayerAction.TOOK_TURN
        if event.code is KeyCode.TEXT and event.text == "g":
            pick_up_at_player(self.game)
            return PlayerAction.DIDNT_TAKE_TURN
        if event.code is KeyCode.TEXT and event.text == "i":
            self.inventory_open = True
            return PlayerAction.TOOK_TURN
        return PlayerAction.DIDNT_TAKE_TURN

    def _choose_from_inventory(self, event: KeyEvent) -> PlayerAction:
        self.inventory_open = False
        index = menu_index(event.text, self.game.inventory) if event.code is KeyCode.TEXT else None
        if index is None:
            return PlayerAction.DIDNT_TAKE_TURN
        if use_item(index, self.game):
            return PlayerAction.TOOK_TURN
        return PlayerAction.DIDNT_TAKE_TURN


def run_loop(
    engine: Engine,
    source: InputSource,
    render: Optional[Callable[[Engine], None]] = None,
    max_steps: Optional[int] = None,
) -> int:
    """Drive ``engine`` from ``source`` until exit, exhaustion or ``max_steps``.

    Returns the number of steps taken.
    """
    steps = 0
    while not source.closed:
        if max_steps is not None and steps >= max_steps:
            break
        engine.refresh_visibility()
        if render is not None:
            render(engine)
        action = engine.step(source.poll())
        steps += 1
        if action is PlayerAction.EXIT:
            logger.info("Exit requested after %d steps", steps)
            break
    engine.refresh_visibility()
    if render is not None:
        render(engine)
    return steps
