import random
from collections import deque
from itertools import combinations

import pytest
from pydantic import ValidationError

from delve.config import DungeonSettings, GameConfig, PlayerTemplate, load_defaults
from delve.dungeon import DungeonGenerator
from delve.engine.game import new_game
from delve.engine.movement import is_blocked
from delve.entities import EntityStore
from delve.entities.factory import make_player

SEEDS = [0, 1, 7, 42, 1234, 99999]


@pytest.fixture(scope="module")
def config():
    return GameConfig.model_validate(load_defaults())


def generate(config, seed):
    entities = EntityStore(make_player(PlayerTemplate()))
    generator = DungeonGenerator(config.dungeon, random.Random(seed), config.monsters, config.items)
    return generator.generate(entities), entities


def reachable_from(game_map, start):
    seen = {start}
    queue = deque([start])
    while queue:
        x, y = queue.popleft()
        for nx, ny in game_map.neighbors4(x, y):
            if (nx, ny) not in seen and not game_map.tile(nx, ny).blocked:
                seen.add((nx, ny))
                queue.append((nx, ny))
    return seen


@pytest.mark.parametrize("seed", SEEDS)
def test_every_floor_cell_is_reachable_from_spawn(config, seed):
    level, _ = generate(config, seed)
    floor = {(x, y) for x, y in level.game_map.coords() if not level.game_map.tile(x, y).blocked}
    assert level.spawn in floor
    assert reachable_from(level.game_map, level.spawn) == floor


@pytest.mark.parametrize("seed", SEEDS)
def test_rooms_do_not_touch_and_fit_the_map(config, seed):
    level, _ = generate(config, seed)
    settings = config.dungeon
    assert 1 <= len(level.rooms) <= settings.max_rooms
    for a, b in combinations(level.rooms, 2):
        assert not a.intersects(b)
    for room in level.rooms:
        assert room.x1 >= 0 and room.y1 >= 0
        assert room.x2 <= settings.width - 1 and room.y2 <= settings.height - 1


@pytest.mark.parametrize("seed", SEEDS)
def test_border_is_wall(config, seed):
    level, _ = generate(config, seed)
    game_map = level.game_map
    for x in range(game_map.width):
        assert game_map.is_wall(x, 0)
        assert game_map.is_wall(x, game_map.height - 1)
    for y in range(game_map.height):
        assert game_map.is_wall(0, y)
        assert game_map.is_wall(game_map.width - 1, y)


@pytest.mark.parametrize("seed", SEEDS)
def test_player_spawns_in_first_room_center(config, seed):
    level, entities = generate(config, seed)
    assert level.spawn == level.rooms[0].center()
    assert entities.player.pos == level.spawn
    assert entities[0] is entities.player


@pytest.mark.parametrize("seed", SEEDS)
def test_objects_are_placed_on_open_cells(config, seed):
    level, entities = generate(config, seed)
    blocking_cells = set()
    for entity in list(entities)[1:]:
        assert not level.game_map.tile(entity.x, entity.y).blocked
        assert entity.pos != entities.player.pos
        assert any((entity.x, entity.y) in set(room.interior()) for room in level.rooms)
        if entity.blocks_motion:
            assert entity.pos not in blocking_cells
            blocking_cells.add(entity.pos)


def test_same_seed_same_level(config):
    a, ents_a = generate(config, 2024)
    b, ents_b = generate(config, 2024)
    tiles_a = [(x, y, a.game_map.tile(x, y).blocked) for x, y in a.game_map.coords()]
    tiles_b = [(x, y, b.game_map.tile(x, y).blocked) for x, y in b.game_map.coords()]
    assert tiles_a == tiles_b
    assert [(e.name, e.pos) for e in ents_a] == [(e.name, e.pos) for e in ents_b]


def test_populates_monsters_and_items(config):
    names = set()
    for seed in SEEDS:
        _, entities = generate(config, seed)
        names.update(e.name for e in entities)
    assert {"Orc", "Troll", "Potion of Healing"} <= names


def test_choose_monster_uses_cumulative_chance(config):
    generator = DungeonGenerator(config.dungeon, random.Random(0), config.monsters)
    assert generator.choose_monster(0.0).name == "Orc"
    assert generator.choose_monster(0.79).name == "Orc"
    assert generator.choose_monster(0.8).name == "Troll"
    assert generator.choose_monster(0.999).name == "Troll"


def test_without_templates_only_the_player_exists(config):
    entities = EntityStore(make_player(PlayerTemplate()))
    DungeonGenerator(config.dungeon, random.Random(3)).generate(entities)
    assert len(entities) == 1


def test_is_blocked_reports_walls_and_blockers(config):
    level, entities = generate(config, 5)
    assert is_blocked(0, 0, level.game_map, entities)
    assert is_blocked(*entities.player.pos, level.game_map, entities)


def test_zero_rooms_rejected():
    with pytest.raises(ValidationError):
        DungeonSettings(max_rooms=0)


def test_new_game_is_reproducible(config):
    a = new_game(config, seed=11)
    b = new_game(config, seed=11)
    assert a.player.pos == b.player.pos
    assert [(e.name, e.pos) for e in a.entities] == [(e.name, e.pos) for e in b.entities]
    assert a.messages.texts() == ["Welcome stranger! Prepare to perish in the dungeon."]
    assert a.heal_amount == 4
    assert a.inventory.capacity == 26
