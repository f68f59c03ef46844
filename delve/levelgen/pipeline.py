"""Shared generate-validate-retry loop for every level variant.

A variant supplies one function, ``attempt(ctx) -> Candidate | Rejected``,
that synthesizes a grid and places start/exit. This module runs it under the
attempt budget, applies the validation every level must pass, and turns the
first accepted candidate into a ``GenerationResult``.

Per-attempt stages follow INIT -> SEEDED -> CARVED -> CONNECTED ->
EXIT_PLACED -> VALIDATED. A rejection is an ordinary return value tagged with
the stage the attempt was working toward and an enumerated reason; every
rejection consumes one unit of the budget, and once the budget is spent the
loop raises ``GenerationError``.
"""
from __future__ import annotations

import math
import random
import time
from collections import Counter
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List, NamedTuple, Optional, Tuple, Union

from ..logging_utils import get_logger
from .config import GenerationConfig
from .connectivity import count_reachable, is_reachable
from .errors import GenerationError
from .grid import border_is_sealed, count_floor
from .metrics import init_metrics
from .tiles import FLOOR, Coordinate, FrozenGrid, Grid

log = get_logger("delve.levelgen")


class Stage(str, Enum):
    INIT = "init"
    SEEDED = "seeded"
    CARVED = "carved"
    CONNECTED = "connected"
    EXIT_PLACED = "exit_placed"
    VALIDATED = "validated"


class Rejection(str, Enum):
    CARVE_FAILED = "carve_failed"
    TOO_FEW_FLOOR = "too_few_floor"
    SPAWN_ISOLATED = "spawn_isolated"
    TOO_FEW_REGIONS = "too_few_regions"
    NO_EXIT_CANDIDATE = "no_exit_candidate"
    EXIT_IS_START = "exit_is_start"
    ENDPOINT_NOT_FLOOR = "endpoint_not_floor"
    BORDER_BREACH = "border_breach"
    UNREACHABLE_EXIT = "unreachable_exit"


@dataclass(frozen=True)
class Rejected:
    stage: Stage
    reason: Rejection
    detail: str = ""


class Candidate(NamedTuple):
    grid: Grid
    start: Coordinate
    exit: Coordinate
    centers: Tuple[Coordinate, ...] = ()


Outcome = Union[Candidate, Rejected]


@dataclass(frozen=True)
class GenerationResult:
    """A playable level: the grid plus start and exit tiles, both (x, y).

    ``grid[y][x]`` is WALL or FLOOR, stored as a tuple of tuple rows so the
    level itself can not be edited after validation. ``centers`` lists the
    carved room or clearing centers (empty for caverns); ``seed`` replays the
    level. ``metrics`` is a plain diagnostics dict, left out of equality and
    hashing.
    """

    grid: FrozenGrid
    start: Coordinate
    exit: Coordinate
    environment: str = ""
    seed: Optional[Union[int, str]] = None
    attempts: int = 1
    centers: Tuple[Coordinate, ...] = ()
    metrics: Dict[str, Any] = field(default_factory=dict, compare=False)

    @property
    def dimension(self) -> int:
        return len(self.grid)

    def is_floor(self, x: int, y: int) -> bool:
        return 0 <= y < len(self.grid) and 0 <= x < len(self.grid[0]) and self.grid[y][x] == FLOOR

    def to_dict(self) -> Dict[str, Any]:
        return {
            "environment": self.environment,
            "seed": self.seed,
            "dimension": self.dimension,
            "grid": ["".join(row) for row in self.grid],
            "start": list(self.start),
            "exit": list(self.exit),
            "attempts": self.attempts,
        }


class Attempt:
    """Bookkeeping for one attempt: config, random stream, current stage, phase timings."""

    def __init__(self, index: int, config: GenerationConfig, rng: random.Random, timed: bool = False):
        self.index = index
        self.config = config
        self.rng = rng
        self.timed = timed
        self.stage = Stage.INIT
        self.phase_ms: Dict[str, int] = {}

    def phase(self, stage: Stage, fn: Callable, *a, **k):
        self.stage = stage
        if not self.timed:
            return fn(*a, **k)
        ps = time.perf_counter()
        r = fn(*a, **k)
        self.phase_ms[stage.value] = self.phase_ms.get(stage.value, 0) + int((time.perf_counter() - ps) * 1000)
        return r

    def reject(self, reason: Rejection, detail: str = "") -> Rejected:
        return Rejected(self.stage, reason, detail)


def validate_candidate(candidate: Candidate) -> Outcome:
    """Checks every returned level must pass: distinct floor endpoints, sealed border, a path."""
    grid, start, exit_ = candidate.grid, candidate.start, candidate.exit
    if start == exit_:
        return Rejected(Stage.VALIDATED, Rejection.EXIT_IS_START, f"start={start}")
    for label, (x, y) in (("start", start), ("exit", exit_)):
        if not (0 <= y < len(grid) and 0 <= x < len(grid[0])) or grid[y][x] != FLOOR:
            return Rejected(Stage.VALIDATED, Rejection.ENDPOINT_NOT_FLOOR, f"{label}={(x, y)}")
    if not border_is_sealed(grid):
        return Rejected(Stage.VALIDATED, Rejection.BORDER_BREACH)
    if not is_reachable(grid, start, exit_):
        return Rejected(Stage.VALIDATED, Rejection.UNREACHABLE_EXIT, f"start={start} exit={exit_}")
    return candidate


def run_attempts(
    environment: str,
    attempt_fn: Callable[[Attempt], Outcome],
    config: GenerationConfig,
    rng: random.Random,
    seed: Optional[Union[int, str]] = None,
) -> GenerationResult:
    rejections: Counter = Counter()
    last: Optional[Rejected] = None
    started = time.perf_counter()
    for index in range(1, config.attempt_budget + 1):
        ctx = Attempt(index, config, rng, timed=config.enable_metrics)
        outcome = attempt_fn(ctx)
        if isinstance(outcome, Candidate):
            outcome = ctx.phase(Stage.VALIDATED, validate_candidate, outcome)
        if isinstance(outcome, Rejected):
            rejections[outcome.reason.value] += 1
            last = outcome
            log.info(
                event="level_attempt_rejected",
                environment=environment,
                attempt=index,
                stage=outcome.stage.value,
                reason=outcome.reason.value,
                detail=outcome.detail or None,
            )
            continue
        metrics: Dict[str, Any] = {}
        if config.enable_metrics:
            metrics = _collect_metrics(outcome, index, rejections, ctx.phase_ms, started)
        log.info(event="level_generated", environment=environment, attempts=index, seed=seed)
        return GenerationResult(
            grid=tuple(tuple(row) for row in outcome.grid),
            start=outcome.start,
            exit=outcome.exit,
            environment=environment,
            seed=seed,
            attempts=index,
            centers=tuple(outcome.centers),
            metrics=metrics,
        )
    log.error(
        event="level_generation_failed",
        environment=environment,
        attempts=config.attempt_budget,
        last_reason=last.reason.value if last else None,
    )
    raise GenerationError(environment, config.attempt_budget, rejections, last.reason.value if last else None)


def _collect_metrics(
    candidate: Candidate, attempts: int, rejections: Counter, phase_ms: Dict[str, int], started: float
) -> Dict[str, Any]:
    metrics = init_metrics()
    (sx, sy), (ex, ey) = candidate.start, candidate.exit
    metrics["attempts"] = attempts
    metrics["rejections"] = dict(rejections)
    metrics["floor_tiles"] = count_floor(candidate.grid)
    metrics["reachable_tiles"] = count_reachable(candidate.grid, candidate.start)
    metrics["centers"] = len(candidate.centers)
    metrics["exit_distance"] = round(math.hypot(ex - sx, ey - sy), 2)
    metrics["phase_ms"] = dict(phase_ms)
    metrics["runtime_ms"] = int((time.perf_counter() - started) * 1000)
    return metrics


def dedupe_centers(centers: List[Coordinate]) -> List[Coordinate]:
    return list(dict.fromkeys(centers))


__all__ = [
    "Stage",
    "Rejection",
    "Rejected",
    "Candidate",
    "GenerationResult",
    "Attempt",
    "validate_candidate",
    "run_attempts",
    "dedupe_centers",
]
