"""Cavern generation: smoothed noise with a guaranteed spawn pocket.

Recipe per attempt:
  1. Noise-fill a fresh grid (WALL with ``fill_probability`` per cell).
  2. Run ``ca_iterations`` cellular automata passes so noise merges into blobs.
  3. Seal the outer ring.
  4. Carve a small square spawn room at a padded random point.
  5. Reject caves that are nearly solid or whose spawn pocket is tiny.
  6. Place the exit on a random floor tile far from the spawn.
"""
from __future__ import annotations

from .automata import ca_step, noise_fill, seal_border
from .connectivity import count_reachable
from .grid import carve_rectangle, count_floor
from .pipeline import Attempt, Candidate, Outcome, Rejection, Stage
from .placement import fit_margin, padded_point, pick_far_floor


def _smooth(dimension: int, fill_probability: float, iterations: int, rng):
    grid = noise_fill(dimension, fill_probability, rng)
    for _ in range(iterations):
        grid = ca_step(grid)
    seal_border(grid)
    return grid


def attempt(ctx: Attempt) -> Outcome:
    config, rng = ctx.config, ctx.rng
    settings = config.cavern
    dim = config.dimension

    grid = ctx.phase(Stage.SEEDED, _smooth, dim, settings.fill_probability, settings.ca_iterations, rng)

    sx, sy = padded_point(dim, fit_margin(dim, settings.padding), rng)
    start = ctx.phase(Stage.CARVED, carve_rectangle, grid, sx, sy, settings.spawn_size, settings.spawn_size)
    if start is None:
        return ctx.reject(Rejection.CARVE_FAILED, f"spawn at {(sx, sy)}")

    floor = count_floor(grid)
    if floor < settings.floor_count_min:
        return ctx.reject(Rejection.TOO_FEW_FLOOR, f"floor={floor}")
    reachable = ctx.phase(Stage.CONNECTED, count_reachable, grid, start)
    if reachable < settings.reachable_min:
        return ctx.reject(Rejection.SPAWN_ISOLATED, f"reachable={reachable}")

    exit_ = ctx.phase(Stage.EXIT_PLACED, pick_far_floor, grid, start, config.exit_distance(), rng)
    if exit_ is None:
        return ctx.reject(Rejection.NO_EXIT_CANDIDATE, f"min_distance={config.exit_distance():.1f}")
    return Candidate(grid, start, exit_)
