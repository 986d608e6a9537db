import pytest

from delve.map import FovMap, GameMap
from delve.map.fov import bresenham_line


def open_fov(width, height):
    return FovMap.from_game_map(GameMap.from_ascii(["." * width] * height))


def test_bresenham_includes_endpoints():
    line = bresenham_line(0, 0, 4, 2)
    assert line[0] == (0, 0)
    assert line[-1] == (4, 2)
    assert len(line) == 5


def test_radius_is_euclidean():
    fov = open_fov(7, 7)
    fov.compute_fov(3, 3, radius=3)
    assert fov.is_in_fov(3, 3)
    assert fov.is_in_fov(3, 0)
    assert fov.is_in_fov(6, 3)
    assert fov.is_in_fov(5, 5)  # distance ~2.83
    assert not fov.is_in_fov(0, 0)  # distance ~4.24


def test_radius_zero_is_unlimited():
    fov = open_fov(30, 1)
    fov.compute_fov(0, 0, radius=0)
    assert fov.is_in_fov(29, 0)
    assert len(fov.visible_cells()) == 30


def test_wall_blocks_sight_and_is_lit():
    rows = ["..#...."] * 5
    fov = FovMap.from_game_map(GameMap.from_ascii(rows))
    fov.compute_fov(1, 2, radius=10, light_walls=True)
    assert fov.is_in_fov(2, 2)
    assert not fov.is_in_fov(4, 2)


def test_unlit_walls_are_not_visible():
    rows = ["..#...."] * 5
    fov = FovMap.from_game_map(GameMap.from_ascii(rows))
    fov.compute_fov(1, 2, radius=10, light_walls=False)
    assert not fov.is_in_fov(2, 2)
    assert fov.is_in_fov(0, 2)


def test_results_are_a_snapshot():
    fov = open_fov(5, 5)
    fov.compute_fov(0, 0, radius=1)
    before = fov.visible_cells()
    fov.set(1, 0, transparent=False)
    assert fov.visible_cells() == before
    assert not fov.is_transparent(1, 0)


def test_invalid_arguments():
    fov = open_fov(3, 3)
    with pytest.raises(ValueError):
        fov.compute_fov(5, 5)
    with pytest.raises(ValueError):
        fov.compute_fov(1, 1, radius=-1)
    with pytest.raises(IndexError):
        fov.set(3, 0, transparent=True)
