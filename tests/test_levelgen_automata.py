import random

from delve.levelgen.automata import ca_step, noise_fill, seal_border
from delve.levelgen.grid import allocate
from delve.levelgen.tiles import FLOOR, WALL
from levelgen_test_utils import border_cells


def test_all_wall_is_stable():
    g = allocate(WALL, 7)
    out = ca_step(g)
    assert all(c == WALL for row in out for c in row)


def test_all_floor_loses_only_corners():
    out = ca_step(allocate(FLOOR, 5))
    for x, y in ((0, 0), (4, 0), (0, 4), (4, 4)):
        assert out[y][x] == WALL
    assert out[0][2] == FLOOR
    assert out[2][2] == FLOOR


def test_lone_floor_cell_fills_in():
    g = allocate(WALL, 5)
    g[2][2] = FLOOR
    out = ca_step(g)
    assert out[2][2] == WALL


def test_ca_step_does_not_mutate_input():
    g = noise_fill(12, 0.45, random.Random(7))
    snapshot = [row[:] for row in g]
    ca_step(g)
    assert g == snapshot


def test_noise_fill_extremes_and_determinism():
    assert all(c == FLOOR for row in noise_fill(6, 0.0, random.Random(1)) for c in row)
    assert all(c == WALL for row in noise_fill(6, 1.0, random.Random(1)) for c in row)
    assert noise_fill(10, 0.45, random.Random(3)) == noise_fill(10, 0.45, random.Random(3))


def test_seal_border():
    g = allocate(FLOOR, 6)
    seal_border(g)
    assert all(c == WALL for c in border_cells(g))
    assert g[2][3] == FLOOR
