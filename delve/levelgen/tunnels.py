"""Random-walk corridor carving between room/clearing centers.

Strategy:
  * Shuffle the centers into a random visiting order.
  * Trunk pass: walk from each center to the next one in the order, in runs
    of random length; each run picks a vertical-first or horizontal-first
    preference toward the target. No branches, no loops.
  * Flourish pass: walk the same pairs again, this time carving dead-end
    stubs (``branch_chance``) and teleporting the walk head to a random
    center (``loop_chance``) so the corridor graph gains cycles.
The walker carves in place and promises nothing on its own; callers must
still validate connectivity.
"""
from __future__ import annotations

import random
from typing import Optional, Sequence

from .config import WalkerSettings
from .grid import in_interior
from .tiles import CARDINALS, FLOOR, Coordinate, Grid


def _sign(v: int) -> int:
    return (v > 0) - (v < 0)


def _walk(
    grid: Grid,
    start: Coordinate,
    target: Coordinate,
    walker: WalkerSettings,
    rng: random.Random,
    centers: Sequence[Coordinate],
    flourish: bool,
    max_steps: int,
) -> int:
    """Carve from ``start`` toward ``target``; returns the number of steps taken."""
    x, y = start
    tx, ty = target
    if in_interior(grid, x, y):
        grid[y][x] = FLOOR
    steps = 0
    while (x, y) != (tx, ty) and steps < max_steps:
        run = rng.randint(walker.min_segment, walker.max_segment)
        vertical_first = rng.random() < 0.5
        for _ in range(run):
            if (x, y) == (tx, ty):
                break
            dx, dy = _sign(tx - x), _sign(ty - y)
            if (vertical_first and dy) or not dx:
                nx, ny = x, y + dy
            else:
                nx, ny = x + dx, y
            steps += 1
            if not in_interior(grid, nx, ny):
                break
            x, y = nx, ny
            grid[y][x] = FLOOR
            if not flourish:
                continue
            if rng.random() < walker.branch_chance:
                bdx, bdy = rng.choice(CARDINALS)
                if in_interior(grid, x + bdx, y + bdy):
                    grid[y + bdy][x + bdx] = FLOOR
            if len(centers) > 2 and rng.random() < walker.loop_chance:
                x, y = rng.choice(centers)
                break
    return steps


def connect(
    grid: Grid, centers: Sequence[Coordinate], walker: WalkerSettings, rng: Optional[random.Random] = None
) -> None:
    """Carve corridors linking ``centers`` (mutates ``grid``)."""
    if rng is None:
        rng = random.Random()
    order = list(centers)
    rng.shuffle(order)
    max_steps = 4 * len(grid) * len(grid)
    for flourish in (False, True):
        for current, target in zip(order, order[1:]):
            _walk(grid, current, target, walker, rng, order, flourish, max_steps)


__all__ = ["connect"]
