import random

from delve.levelgen.grid import (
    allocate,
    border_is_sealed,
    carve_organic,
    carve_rectangle,
    count_floor,
    render_ascii,
)
from delve.levelgen.tiles import FLOOR, WALL
from levelgen_test_utils import border_cells, grid_from


def test_allocate_rows_are_independent():
    g = allocate(WALL, 5)
    assert len(g) == 5 and all(len(row) == 5 for row in g)
    g[0][0] = FLOOR
    assert g[1][0] == WALL
    assert g[0][1] == WALL
    assert count_floor(g) == 1


def test_allocate_any_fill_value():
    g = allocate(-1, 3)
    assert g == [[-1, -1, -1], [-1, -1, -1], [-1, -1, -1]]


def test_carve_rectangle_centered():
    g = allocate(WALL, 11)
    center = carve_rectangle(g, 5, 5, 3, 3)
    assert center == (5, 5)
    assert count_floor(g) == 9
    for y in range(4, 7):
        for x in range(4, 7):
            assert g[y][x] == FLOOR


def test_carve_rectangle_clamps_to_interior():
    g = allocate(WALL, 10)
    # requested 4x4 at (1,1) would spill over the border; only 2x2 survives
    center = carve_rectangle(g, 1, 1, 4, 4)
    assert center == (1, 1)
    assert count_floor(g) == 4
    assert border_is_sealed(g)

    g = allocate(WALL, 10)
    center = carve_rectangle(g, 8, 8, 3, 3)
    assert center == (7, 7)
    assert count_floor(g) == 4
    assert border_is_sealed(g)


def test_carve_rectangle_collapsed_returns_none():
    g = allocate(WALL, 10)
    assert carve_rectangle(g, 0, 0, 3, 3) is None
    assert carve_rectangle(g, 5, 5, 1, 4) is None
    assert count_floor(g) == 0


def test_carve_organic_center_always_carved():
    rng = random.Random(3)
    for _ in range(20):
        g = allocate(WALL, 15)
        assert carve_organic(g, 7, 7, 3, rng) == (7, 7)
        assert g[7][7] == FLOOR
        # never beyond the jittered maximum radius
        for y, row in enumerate(g):
            for x, cell in enumerate(row):
                if cell == FLOOR:
                    assert (x - 7) ** 2 + (y - 7) ** 2 < 3.75**2


def test_carve_organic_leaves_border_alone():
    g = allocate(WALL, 8)
    carve_organic(g, 1, 1, 3, random.Random(1))
    assert all(c == WALL for c in border_cells(g))
    assert g[1][1] == FLOOR


def test_carve_organic_zero_radius_carves_nothing():
    g = allocate(WALL, 8)
    assert carve_organic(g, 4, 4, 0, random.Random(1)) is None
    assert count_floor(g) == 0


def test_carve_organic_silhouette_varies_with_stream():
    shapes = set()
    for seed in range(10):
        g = allocate(WALL, 21)
        carve_organic(g, 10, 10, 6, random.Random(seed))
        shapes.add(tuple(tuple(row) for row in g))
    assert len(shapes) > 1


def test_border_is_sealed_detects_breach():
    g = grid_from(["#####", "#...#", "#...#", "#...#", "#####"])
    assert border_is_sealed(g)
    g[2][4] = FLOOR
    assert not border_is_sealed(g)


def test_render_ascii_marks_endpoints():
    g = grid_from(["####", "#..#", "#..#", "####"])
    out = render_ascii(g, (1, 1), (2, 2))
    assert out.splitlines() == ["####", "#S.#", "#.E#", "####"]
