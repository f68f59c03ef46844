"""Forest generation: organic clearings linked by winding paths.

Attempt outline:
  1. Carve a spawn clearing at a padded random point.
  2. Scatter the remaining seeds, redrawing ones that land too close together.
  3. Partition the grid into Voronoi regions and relax the seeds (Lloyd).
  4. Carve an organic clearing of random radius at every relaxed seed; seeds
     whose clearing carves nothing are dropped.
  5. Connect the spawn and all clearings with the corridor walker.
  6. Place the exit on a random floor tile far from the spawn.
"""
from __future__ import annotations

from .grid import allocate, carve_organic
from .pipeline import Attempt, Candidate, Outcome, Rejection, Stage, dedupe_centers
from .placement import fit_margin, padded_point, pick_far_floor
from .regions import assign_regions, relax, scatter_seeds
from .tiles import WALL
from .tunnels import connect


def _partition(spawn, config, margin, rng):
    settings = config.forest
    seeds = scatter_seeds(
        spawn, settings.num_regions, config.dimension, margin, settings.seed_spacing, settings.seed_tries, rng
    )
    region_map = assign_regions(config.dimension, seeds)
    return relax(seeds, region_map, config.dimension, settings.relax_iterations)


def _carve_clearings(grid, seeds, clearing_size, rng):
    lo, hi = clearing_size
    centers = []
    for x, y in seeds:
        center = carve_organic(grid, x, y, rng.randint(lo, hi), rng)
        if center is not None:
            centers.append(center)
    return centers


def attempt(ctx: Attempt) -> Outcome:
    config, rng = ctx.config, ctx.rng
    settings = config.forest
    dim = config.dimension
    margin = fit_margin(dim, settings.padding + settings.clearing_size[1])

    grid = allocate(WALL, dim)
    sx, sy = padded_point(dim, margin, rng)
    spawn = carve_organic(grid, sx, sy, settings.spawn_radius, rng)
    if spawn is None:
        return ctx.reject(Rejection.CARVE_FAILED, f"spawn clearing at {(sx, sy)}")

    seeds = ctx.phase(Stage.SEEDED, _partition, spawn, config, margin, rng)
    clearings = ctx.phase(Stage.CARVED, _carve_clearings, grid, seeds, settings.clearing_size, rng)
    centers = dedupe_centers([spawn] + clearings)
    if len(centers) < 2:
        return ctx.reject(Rejection.TOO_FEW_REGIONS, f"centers={len(centers)}")

    ctx.phase(Stage.CONNECTED, connect, grid, centers, config.walker_settings(), rng)

    exit_ = ctx.phase(Stage.EXIT_PLACED, pick_far_floor, grid, spawn, config.exit_distance(), rng)
    if exit_ is None:
        return ctx.reject(Rejection.NO_EXIT_CANDIDATE, f"min_distance={config.exit_distance():.1f}")
    return Candidate(grid, spawn, exit_, tuple(centers))
