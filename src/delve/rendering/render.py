from __future__ import annotations

import logging
from typing import TYPE_CHECKING, List

from .. import colors
from ..colors import Color
from ..config import ScreenSettings
from ..engine.inventory import inventory_menu_options
from ..engine.turns import INVENTORY_HEADER
from ..entities import Entity
from ..map import FovMap
from .console import Align, Console

if TYPE_CHECKING:  # pragma: no cover
    from ..engine.turns import Engine

logger = logging.getLogger(__name__)


def render_bar(
    panel: Console,
    x: int,
    y: int,
    total_width: int,
    name: str,
    value: int,
    maximum: int,
    bar_color: Color,
    back_color: Color,
) -> None:
    """Draw a ``name: value/maximum`` gauge filled in proportion to value."""
    bar_width = int(value / maximum * total_width) if maximum > 0 else 0
    panel.rect(x, y, total_width, 1, back_color)
    if bar_width > 0:
        panel.rect(x, y, min(bar_width, total_width), 1, bar_color)
    panel.print_ex(x + total_width // 2, y, f"{name}: {value}/{maximum}", colors.WHITE, Align.CENTER)


def names_under_mouse(mouse: tuple, entities, fov: FovMap) -> str:
    x, y = mouse
    names = [e.name for e in entities if e.pos == (x, y) and fov.is_in_fov(e.x, e.y)]
    return ", ".join(names)


class Renderer:
    """Draws the game state into a root console the size of the screen.

    The map goes to its own off-screen console and the status panel to
    another; both are blitted onto :attr:`root`, which a backend presents.
    """

    def __init__(self, screen: ScreenSettings, map_width: int, map_height: int) -> None:
        self.screen = screen
        self.root = Console(screen.width, screen.height)
        self.con = Console(map_width, map_height)
        self.panel = Console(screen.width, screen.panel_height)

    def render_all(self, engine: "Engine") -> Console:
        engine.refresh_visibility()
        game = engine.game
        self.root.clear()
        self._render_map(engine)
        self.con.blit(self.root, (0, 0, self.con.width, self.con.height), (0, 0))
        self._render_panel(engine)
        self.panel.blit(self.root, (0, 0, self.panel.width, self.panel.height), (0, self.screen.panel_y))
        if engine.inventory_open:
            self._render_menu(INVENTORY_HEADER, inventory_menu_options(game.inventory))
        return self.root

    def _render_map(self, engine: "Engine") -> None:
        game = engine.game
        con = self.con
        con.clear()
        for x, y in game.map.coords():
            tile = game.map.tiles[x][y]
            if not tile.explored:
                continue
            visible = game.fov.is_in_fov(x, y)
            wall = tile.block_sight
            if visible:
                color = colors.LIGHT_WALL if wall else colors.LIGHT_GROUND
            else:
                color = colors.DARK_WALL if wall else colors.DARK_GROUND
            con.set_char_background(x, y, color)

        to_draw: List[Entity] = [e for e in game.entities if game.fov.is_in_fov(e.x, e.y)]
        # Blocking actors are drawn last so they sit on top of items and corpses.
        to_draw.sort(key=lambda e: e.blocks_motion)
        for entity in to_draw:
            con.put_char(entity.x, entity.y, entity.char, entity.color)

    def _render_panel(self, engine: "Engine") -> None:
        game = engine.game
        screen = self.screen
        panel = self.panel
        panel.clear()

        fighter = game.player.fighter
        hp = fighter.hp if fighter else 0
        max_hp = fighter.max_hp if fighter else 0
        render_bar(panel, 1, 1, screen.bar_width, "HP", hp, max_hp, colors.LIGHT_RED, colors.DARKER_RED)

        panel.print_ex(1, 0, names_under_mouse(engine.mouse, game.entities, game.fov), colors.LIGHT_GREY)

        for row, line, color in game.messages.visible_lines(screen.msg_width, screen.msg_height):
            panel.print_ex(screen.msg_x, row, line, color)

    def _render_menu(self, header: str, options: List[str]) -> None:
        width = self.screen.inventory_width
        header_height = self.root.get_height_rect(width, header)
        height = header_height + len(options)
        window = Console(width, height)
        window.print_rect(0, 0, width, header, colors.WHITE)
        for row, text in enumerate(options):
            window.print_ex(0, header_height + row, text, colors.WHITE)
        x = self.screen.width // 2 - width // 2
        y = self.screen.height // 2 - height // 2
        window.blit(self.root, (0, 0, width, height), (x, y))
