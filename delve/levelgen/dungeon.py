"""Classic dungeon: non-overlapping rectangular rooms joined by corridors.

Rooms are proposed at random positions and kept only when they leave at
least one wall cell between themselves and every earlier room. The spawn is
a random room tile; the exit is a far floor tile, as for the other variants.
"""
from __future__ import annotations

from typing import List

from .grid import allocate
from .pipeline import Attempt, Candidate, Outcome, Rejection, Stage, dedupe_centers
from .placement import pick_far_floor, pick_random_floor
from .rooms import propose_room
from .tiles import WALL, Coordinate
from .tunnels import connect


def _place_rooms(grid, settings, rng) -> List[Coordinate]:
    centers = []
    for _ in range(settings.num_rooms):
        room = propose_room(grid, settings.room_size, settings.room_tries, rng)
        if room is None:
            # no room left for another one
            break
        center = room.carve(grid)
        if center is not None:
            centers.append(center)
    return centers


def attempt(ctx: Attempt) -> Outcome:
    config, rng = ctx.config, ctx.rng
    dim = config.dimension

    grid = allocate(WALL, dim)
    centers = ctx.phase(Stage.CARVED, _place_rooms, grid, config.dungeon, rng)
    centers = dedupe_centers(centers)
    if len(centers) < 2:
        return ctx.reject(Rejection.TOO_FEW_REGIONS, f"rooms={len(centers)}")

    start = pick_random_floor(grid, rng)
    if start is None:
        return ctx.reject(Rejection.CARVE_FAILED, "no floor for spawn")

    ctx.phase(Stage.CONNECTED, connect, grid, centers, config.walker_settings(), rng)
    exit_ = ctx.phase(Stage.EXIT_PLACED, pick_far_floor, grid, start, config.exit_distance(), rng)
    if exit_ is None:
        return ctx.reject(Rejection.NO_EXIT_CANDIDATE, f"min_distance={config.exit_distance():.1f}")
    return Candidate(grid, start, exit_, tuple(centers))
