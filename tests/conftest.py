import sys
from pathlib import Path

import pytest

# Ensure 'src' is on sys.path for test imports without installing the package
ROOT = Path(__file__).resolve().parents[1]
src = ROOT / "src"
if str(src) not in sys.path:
    sys.path.insert(0, str(src))

from delve.config import ItemTemplate, MonsterTemplate, PlayerTemplate  # noqa: E402
from delve.engine.game import Game  # noqa: E402
from delve.engine.inventory import Inventory  # noqa: E402
from delve.engine.messages import MessageLog  # noqa: E402
from delve.entities import EntityStore  # noqa: E402
from delve.entities.factory import make_item, make_monster, make_player  # noqa: E402
from delve.map import FovMap, GameMap  # noqa: E402

ROOM = [
    "##########",
    "#........#",
    "#........#",
    "#........#",
    "##########",
]


@pytest.fixture
def make_game():
    """Build a Game around an ASCII map with the player at ``player_at``."""

    def _make(rows=ROOM, player_at=(1, 1), torch_radius=10, light_walls=True):
        game_map = GameMap.from_ascii(rows)
        entities = EntityStore(make_player(PlayerTemplate(), *player_at))
        return Game(
            map=game_map,
            entities=entities,
            fov=FovMap.from_game_map(game_map),
            messages=MessageLog(),
            inventory=Inventory(),
            torch_radius=torch_radius,
            light_walls=light_walls,
        )

    return _make


@pytest.fixture
def make_orc():
    def _make(x, y, name="Orc"):
        template = MonsterTemplate(
            name=name, char="o", color="DESATURATED_GREEN", max_hp=10, defense=0, power=3, chance=0.8
        )
        return make_monster(template, x, y)

    return _make


@pytest.fixture
def make_potion():
    def _make(x, y):
        return make_item(ItemTemplate(name="Potion of Healing", char="!", color="VIOLET"), x, y)

    return _make
