"""Point selection helpers: padded spawn points, random floor, far exit tiles."""
from __future__ import annotations

import math
import random
from typing import Optional

from .grid import iter_floor
from .tiles import Coordinate, Grid


def fit_margin(dimension: int, margin: int) -> int:
    """Shrink ``margin`` on small grids so at least half of each side stays usable."""
    return max(0, min(margin, dimension // 4))


def padded_point(dimension: int, margin: int, rng: random.Random) -> Coordinate:
    """Uniform point at least ``margin`` cells from every edge.

    When the margin leaves no room the span collapses to a single column/row.
    """
    span = max(1, dimension - 2 * margin)
    return (margin + rng.randrange(span), margin + rng.randrange(span))


def pick_random_floor(grid: Grid, rng: random.Random) -> Optional[Coordinate]:
    floors = list(iter_floor(grid))
    if not floors:
        return None
    return rng.choice(floors)


def pick_far_floor(
    grid: Grid, reference: Coordinate, min_distance: float, rng: random.Random
) -> Optional[Coordinate]:
    """Pick a random floor cell at Euclidean distance >= ``min_distance`` from ``reference``.

    Returns None when no floor cell is far enough; callers treat that as a
    failed attempt instead of falling back to ``reference``.
    """
    rx, ry = reference
    candidates = [
        (x, y) for x, y in iter_floor(grid) if math.sqrt((x - rx) ** 2 + (y - ry) ** 2) >= min_distance
    ]
    if not candidates:
        return None
    return candidates[rng.randrange(len(candidates))]


__all__ = ["fit_margin", "padded_point", "pick_random_floor", "pick_far_floor"]
