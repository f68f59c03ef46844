"""Cellular automata cave smoothing (classic 4/5 rule)."""
from __future__ import annotations

import random

from .grid import allocate
from .tiles import FLOOR, WALL, Grid

CA_WALL_THRESHOLD = 4


def noise_fill(dimension: int, fill_probability: float, rng: random.Random) -> Grid:
    """Fresh grid where each cell is WALL with probability ``fill_probability``."""
    return [[WALL if rng.random() < fill_probability else FLOOR for _ in range(dimension)] for _ in range(dimension)]


def ca_step(grid: Grid) -> Grid:
    """One smoothing pass; returns a new grid and leaves ``grid`` untouched.

    A cell becomes WALL when more than CA_WALL_THRESHOLD of its 8 neighbors are
    walls, out-of-bounds neighbors counting as walls; otherwise FLOOR.
    """
    rows, cols = len(grid), len(grid[0])
    out = allocate(WALL, rows)
    for y in range(rows):
        for x in range(cols):
            walls = 0
            for dy in (-1, 0, 1):
                ny = y + dy
                for dx in (-1, 0, 1):
                    if dx == 0 and dy == 0:
                        continue
                    nx = x + dx
                    if ny < 0 or ny >= rows or nx < 0 or nx >= cols or grid[ny][nx] == WALL:
                        walls += 1
            out[y][x] = WALL if walls > CA_WALL_THRESHOLD else FLOOR
    return out


def seal_border(grid: Grid) -> None:
    """Force the outer ring to WALL in place."""
    last = len(grid) - 1
    for i in range(len(grid)):
        grid[0][i] = WALL
        grid[last][i] = WALL
        grid[i][0] = WALL
        grid[i][last] = WALL


__all__ = ["CA_WALL_THRESHOLD", "noise_fill", "ca_step", "seal_border"]
