"""Voronoi region partitioning with Lloyd relaxation, plus seed layouts.

Regions are computed with squared Euclidean distance; ties go to the lowest
seed index (first seed scanned wins).
"""
from __future__ import annotations

import math
import random
from typing import List, Optional, Sequence

from .grid import allocate
from .tiles import UNASSIGNED, Coordinate, RegionMap


def _nearest_seed(x: int, y: int, seeds: Sequence[Coordinate]) -> int:
    best = 0
    best_dist = None
    for i, (sx, sy) in enumerate(seeds):
        d = (sx - x) * (sx - x) + (sy - y) * (sy - y)
        if best_dist is None or d < best_dist:
            best_dist = d
            best = i
    return best


def _assign_into(region_map: RegionMap, seeds: Sequence[Coordinate]) -> None:
    for y, row in enumerate(region_map):
        for x in range(len(row)):
            row[x] = _nearest_seed(x, y, seeds)


def assign_regions(dimension: int, seeds: Sequence[Coordinate]) -> RegionMap:
    """Map every cell of a dimension x dimension grid to the index of its nearest seed."""
    region_map = allocate(UNASSIGNED, dimension)
    if seeds:
        _assign_into(region_map, seeds)
    return region_map


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def relax(seeds: Sequence[Coordinate], region_map: RegionMap, dimension: int, iterations: int) -> List[Coordinate]:
    """Lloyd relaxation: move seeds to their region centroids and reassign.

    Each iteration recenters every seed on the rounded mean of the cells it
    owns (an empty region keeps its previous position), then rebuilds the
    region map in place from the new seeds.
    """
    current = list(seeds)
    for _ in range(iterations):
        sums = [[0, 0, 0] for _ in current]
        for y in range(dimension):
            row = region_map[y]
            for x in range(dimension):
                idx = row[x]
                if 0 <= idx < len(sums):
                    acc = sums[idx]
                    acc[0] += x
                    acc[1] += y
                    acc[2] += 1
        moved = []
        for i, (sx, sy, count) in enumerate(sums):
            if count:
                moved.append((_round_half_up(sx / count), _round_half_up(sy / count)))
            else:
                moved.append(current[i])
        _assign_into(region_map, moved)
        current = moved
    return current


def region_bounds(region_map: RegionMap, count: int) -> List[Optional[tuple]]:
    """Per region index, the inclusive bounding box (x0, y0, x1, y1) or None if empty."""
    bounds: List[Optional[list]] = [None] * count
    for y, row in enumerate(region_map):
        for x, idx in enumerate(row):
            if not 0 <= idx < count:
                continue
            b = bounds[idx]
            if b is None:
                bounds[idx] = [x, y, x, y]
            else:
                if x < b[0]:
                    b[0] = x
                if x > b[2]:
                    b[2] = x
                if y < b[1]:
                    b[1] = y
                if y > b[3]:
                    b[3] = y
    return [tuple(b) if b is not None else None for b in bounds]


def scatter_seeds(
    first: Coordinate,
    count: int,
    dimension: int,
    margin: int,
    spacing: int,
    tries: int,
    rng: random.Random,
) -> List[Coordinate]:
    """Scatter up to ``count`` seeds (``first`` included) inside the padded area.

    A candidate closer than ``spacing`` on both axes to an existing seed is
    redrawn up to ``tries`` times and dropped if it never clears. The request
    is capped at the number of cells in the padded area.
    """
    span = max(1, dimension - 2 * margin)
    target = min(count, span * span)
    seeds = [first]
    taken = {first}
    reach = max(0, spacing - 1)

    def crowded(px: int, py: int) -> bool:
        for dy in range(-reach, reach + 1):
            for dx in range(-reach, reach + 1):
                if (px + dx, py + dy) in taken:
                    return True
        return False

    for _ in range(target - 1):
        for _attempt in range(tries):
            cand = (margin + rng.randrange(span), margin + rng.randrange(span))
            if not crowded(*cand):
                seeds.append(cand)
                taken.add(cand)
                break
    return seeds


def lattice_seeds(
    count: int, dimension: int, margin: int, avoid: Coordinate, rng: random.Random
) -> List[Coordinate]:
    """Lay seeds on a roughly square lattice over the padded area.

    The lattice point nearest ``avoid`` (the spawn) is skipped so the spawn does
    not get a duplicate seed; the rest are shuffled and truncated to
    ``count - 1`` so the spawn plus lattice make ``count`` seeds.
    """
    span = max(1, dimension - 2 * margin)
    count = min(count, span * span)
    if count <= 1:
        return []
    k = math.ceil(math.sqrt(count))
    step = span / k
    jitter = int(step // 4)
    hi = margin + span - 1
    points: List[Coordinate] = []
    for gy in range(k):
        for gx in range(k):
            px = margin + int((gx + 0.5) * step)
            py = margin + int((gy + 0.5) * step)
            if jitter:
                px += rng.randint(-jitter, jitter)
                py += rng.randint(-jitter, jitter)
            points.append((min(max(px, margin), hi), min(max(py, margin), hi)))
    points = list(dict.fromkeys(points))
    ax, ay = avoid
    nearest = min(range(len(points)), key=lambda i: ((points[i][0] - ax) ** 2 + (points[i][1] - ay) ** 2, i))
    del points[nearest]
    rng.shuffle(points)
    return points[: count - 1]


__all__ = ["assign_regions", "relax", "region_bounds", "scatter_seeds", "lattice_seeds"]
