"""Castle generation: rectangular rooms laid out over grid-Voronoi regions.

The spawn room is carved first; remaining seeds sit on a jittered square
lattice so rooms spread evenly across the keep. Each seed's room is sized to
fit inside its region's bounding box (less a one-cell wall margin) and drawn
from ``room_size``. Rooms whose region is too thin to hold one are skipped.
"""
from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

from .grid import allocate, carve_rectangle
from .pipeline import Attempt, Candidate, Outcome, Rejection, Stage, dedupe_centers
from .placement import fit_margin, padded_point, pick_far_floor
from .regions import assign_regions, lattice_seeds, region_bounds
from .rooms import RoomSpec
from .tiles import WALL, Coordinate
from .tunnels import connect


def _fit(span: int, size_range: Tuple[int, int], rng) -> int:
    lo, hi = size_range
    return min(rng.randint(lo, hi), span - 2)


def _room_for(seed: Coordinate, bounds: Optional[tuple], size_range: Tuple[int, int], rng) -> Optional[RoomSpec]:
    if bounds is None:
        return None
    x0, y0, x1, y1 = bounds
    w = _fit(x1 - x0 + 1, size_range, rng)
    h = _fit(y1 - y0 + 1, size_range, rng)
    if w < 2 or h < 2:
        return None
    return RoomSpec(seed[0], seed[1], width=w, height=h)


def _layout(spawn: Coordinate, config, rng) -> Tuple[List[Coordinate], list]:
    settings = config.castle
    margin = fit_margin(config.dimension, settings.padding)
    lattice = lattice_seeds(settings.num_regions, config.dimension, margin, spawn, rng)
    seeds = [spawn] + lattice
    region_map = assign_regions(config.dimension, seeds)
    return seeds, region_bounds(region_map, len(seeds))


def _carve_rooms(grid, seeds: Sequence[Coordinate], bounds: list, size_range, rng) -> List[Coordinate]:
    centers = []
    # index 0 is the spawn, already carved
    for seed, box in zip(seeds[1:], bounds[1:]):
        room = _room_for(seed, box, size_range, rng)
        if room is None:
            continue
        center = room.carve(grid)
        if center is not None:
            centers.append(center)
    return centers


def attempt(ctx: Attempt) -> Outcome:
    config, rng = ctx.config, ctx.rng
    settings = config.castle
    dim = config.dimension

    grid = allocate(WALL, dim)
    sx, sy = padded_point(dim, fit_margin(dim, settings.padding), rng)
    spawn = carve_rectangle(grid, sx, sy, settings.spawn_size, settings.spawn_size)
    if spawn is None:
        return ctx.reject(Rejection.CARVE_FAILED, f"spawn room at {(sx, sy)}")

    seeds, bounds = ctx.phase(Stage.SEEDED, _layout, spawn, config, rng)
    rooms = ctx.phase(Stage.CARVED, _carve_rooms, grid, seeds, bounds, settings.room_size, rng)
    centers = dedupe_centers([spawn] + rooms)
    if len(centers) < 2:
        return ctx.reject(Rejection.TOO_FEW_REGIONS, f"rooms={len(rooms)}")

    ctx.phase(Stage.CONNECTED, connect, grid, centers, config.walker_settings(), rng)

    exit_ = ctx.phase(Stage.EXIT_PLACED, pick_far_floor, grid, spawn, config.exit_distance(), rng)
    if exit_ is None:
        return ctx.reject(Rejection.NO_EXIT_CANDIDATE, f"min_distance={config.exit_distance():.1f}")
    return Candidate(grid, spawn, exit_, tuple(centers))
