"""Generation settings.

``GenerationConfig`` is read-only input: helpers that adjust it (mapping
loader, runtime overrides) always return a new instance.
"""
from __future__ import annotations

import os
import random
import re
from dataclasses import dataclass, field, fields, replace
from typing import Any, Dict, Mapping, Optional, Tuple, Union

from flask import current_app, has_app_context

from .errors import ConfigError

ENVIRONMENTS = ("cavern", "forest", "castle", "dungeon")
MIN_DIMENSION = 5
DEFAULT_ATTEMPT_BUDGET = 60
DEFAULT_DIMENSION = 65
DEFAULT_EXIT_MIN_DIST = 40.0  # tuned for DEFAULT_DIMENSION and larger grids
EXIT_DISTANCE_RATIO = 0.6  # exit distance relative to the side on smaller grids


@dataclass(frozen=True)
class WalkerSettings:
    branch_chance: float = 0.1
    loop_chance: float = 0.05
    min_segment: int = 2
    max_segment: int = 6


@dataclass(frozen=True)
class CavernSettings:
    fill_probability: float = 0.45
    ca_iterations: int = 5
    padding: int = 5
    spawn_size: int = 3
    floor_count_min: int = 10
    reachable_min: int = 10


@dataclass(frozen=True)
class ForestSettings:
    num_regions: int = 10
    clearing_size: Tuple[int, int] = (1, 2)
    spawn_radius: int = 3
    padding: int = 5
    seed_spacing: int = 2
    seed_tries: int = 10
    relax_iterations: int = 1


@dataclass(frozen=True)
class CastleSettings:
    num_regions: int = 12
    room_size: Tuple[int, int] = (3, 7)
    spawn_size: int = 3
    padding: int = 5


@dataclass(frozen=True)
class DungeonSettings:
    num_rooms: int = 20
    room_size: Tuple[int, int] = (3, 8)
    room_tries: int = 20


WALKER_PRESETS: Dict[str, WalkerSettings] = {
    "cavern": WalkerSettings(),
    "forest": WalkerSettings(branch_chance=0.15, loop_chance=0.05, min_segment=2, max_segment=5),
    "castle": WalkerSettings(branch_chance=0.05, loop_chance=0.03, min_segment=4, max_segment=10),
    "dungeon": WalkerSettings(branch_chance=0.1, loop_chance=0.05, min_segment=2, max_segment=6),
}

_SECTIONS = ("cavern", "forest", "castle", "dungeon")


@dataclass(frozen=True)
class GenerationConfig:
    environment: str = "cavern"
    dimension: int = DEFAULT_DIMENSION
    attempt_budget: int = DEFAULT_ATTEMPT_BUDGET
    min_exit_distance: Optional[float] = None
    seed: Optional[Union[int, str]] = None
    rng: Optional[random.Random] = field(default=None, compare=False, repr=False)
    enable_metrics: bool = True
    walker: Optional[WalkerSettings] = None
    cavern: CavernSettings = field(default_factory=CavernSettings)
    forest: ForestSettings = field(default_factory=ForestSettings)
    castle: CastleSettings = field(default_factory=CastleSettings)
    dungeon: DungeonSettings = field(default_factory=DungeonSettings)

    def exit_distance(self) -> float:
        """Minimum start-to-exit distance.

        An explicit ``min_exit_distance`` wins. Otherwise grids of
        DEFAULT_DIMENSION or more use DEFAULT_EXIT_MIN_DIST and smaller grids
        scale it down with EXIT_DISTANCE_RATIO.
        """
        if self.min_exit_distance is not None:
            return float(self.min_exit_distance)
        if self.dimension >= DEFAULT_DIMENSION:
            return DEFAULT_EXIT_MIN_DIST
        return min(DEFAULT_EXIT_MIN_DIST, self.dimension * EXIT_DISTANCE_RATIO)

    def walker_settings(self) -> WalkerSettings:
        if self.walker is not None:
            return self.walker
        return WALKER_PRESETS.get(self.environment, WalkerSettings())

    def validate(self) -> None:
        if self.environment not in ENVIRONMENTS:
            raise ConfigError(f"unknown environment {self.environment!r}; expected one of {', '.join(ENVIRONMENTS)}")
        if self.dimension < MIN_DIMENSION:
            raise ConfigError(f"dimension must be >= {MIN_DIMENSION}, got {self.dimension}")
        if self.attempt_budget < 1:
            raise ConfigError(f"attempt_budget must be >= 1, got {self.attempt_budget}")
        if self.min_exit_distance is not None and self.min_exit_distance < 0:
            raise ConfigError("min_exit_distance must be >= 0")
        w = self.walker_settings()
        _check_probability("walker.branch_chance", w.branch_chance)
        _check_probability("walker.loop_chance", w.loop_chance)
        _check_range("walker segment", (w.min_segment, w.max_segment), minimum=1)
        _check_probability("cavern.fill_probability", self.cavern.fill_probability)
        if self.cavern.ca_iterations < 0:
            raise ConfigError("cavern.ca_iterations must be >= 0")
        _check_range("forest.clearing_size", self.forest.clearing_size, minimum=1)
        if self.forest.num_regions < 1 or self.forest.seed_tries < 1 or self.forest.relax_iterations < 0:
            raise ConfigError("forest.num_regions and forest.seed_tries must be >= 1, relax_iterations >= 0")
        _check_range("castle.room_size", self.castle.room_size, minimum=1)
        if self.castle.num_regions < 1:
            raise ConfigError("castle.num_regions must be >= 1")
        _check_range("dungeon.room_size", self.dungeon.room_size, minimum=1)
        if self.dungeon.num_rooms < 1 or self.dungeon.room_tries < 1:
            raise ConfigError("dungeon.num_rooms and dungeon.room_tries must be >= 1")

    @classmethod
    def from_mapping(cls, options: Mapping[str, Any]) -> "GenerationConfig":
        """Build a config from a flat options mapping.

        Accepts snake_case or camelCase keys (``dimensions``, ``numRegions``,
        ``clearingSize``, ``walkerPresets``...). A flat environment-specific key
        applies to every section that defines it; nested section mappings
        (``{"forest": {...}}``) are accepted too. Unknown keys raise ConfigError.
        """
        top: Dict[str, Any] = {}
        sections: Dict[str, Dict[str, Any]] = {name: {} for name in _SECTIONS}
        top_names = {f.name for f in fields(cls)} - set(_SECTIONS) - {"walker"}
        for raw_key, value in options.items():
            key = _normalize_key(raw_key)
            if key in _IGNORED:
                continue
            if key == "walker":
                top["walker"] = _walker_from(value)
            elif key in _SECTIONS and isinstance(value, Mapping):
                for sub_key, sub_value in value.items():
                    _apply_section_key(sections, _normalize_key(sub_key), sub_value, only=key)
            elif key in top_names:
                top[key] = value
            else:
                _apply_section_key(sections, key, value)
        for name, changes in sections.items():
            if changes:
                top[name] = replace(getattr(cls(), name), **changes)
        return cls(**top)


_IGNORED = {"allow_diagonals"}
_ALIASES = {
    "dimensions": "dimension",
    "max_attempts": "attempt_budget",
    "exit_min_distance": "min_exit_distance",
    "voronoi_relaxation": "relax_iterations",
    "walker_presets": "walker",
    "min_corridor": "min_segment",
    "max_corridor": "max_segment",
}
_CAMEL = re.compile(r"(?<!^)(?=[A-Z])")


def _normalize_key(key: str) -> str:
    snake = _CAMEL.sub("_", key).lower()
    return _ALIASES.get(snake, snake)


def _section_fields(name: str) -> set:
    return {f.name for f in fields(getattr(GenerationConfig(), name))}


def _apply_section_key(sections: Dict[str, Dict[str, Any]], key: str, value: Any, only: Optional[str] = None) -> None:
    if isinstance(value, list):
        value = tuple(value)
    if key in ("region_min_size", "region_max_size"):
        low, high = sections["castle"].get("room_size", CastleSettings().room_size)
        sections["castle"]["room_size"] = (value, high) if key == "region_min_size" else (low, value)
        return
    targets = [only] if only else list(_SECTIONS)
    matched = False
    for name in targets:
        if key in _section_fields(name):
            sections[name][key] = value
            matched = True
    if not matched:
        raise ConfigError(f"unknown generation option {key!r}")


def _walker_from(value: Any) -> WalkerSettings:
    if isinstance(value, WalkerSettings):
        return value
    if not isinstance(value, Mapping):
        raise ConfigError("walker settings must be a mapping")
    known = {f.name for f in fields(WalkerSettings)}
    changes = {}
    for raw_key, v in value.items():
        key = _normalize_key(raw_key)
        if key in _IGNORED:
            continue
        if key not in known:
            raise ConfigError(f"unknown walker option {raw_key!r}")
        changes[key] = v
    return WalkerSettings(**changes)


def _check_probability(name: str, value: float) -> None:
    if not 0.0 <= value <= 1.0:
        raise ConfigError(f"{name} must be within [0, 1], got {value}")


def _check_range(name: str, bounds: Tuple[int, int], minimum: int) -> None:
    low, high = bounds
    if low < minimum or high < low:
        raise ConfigError(f"{name} must satisfy {minimum} <= min <= max, got {bounds}")


# ---------------------------------------------------------------------------
# Runtime overrides: environment variables, then Flask app config (highest).
# ---------------------------------------------------------------------------


def _truthy(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() not in {"0", "false", "no", "off", ""}


def _int_value(value: Any) -> int:
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"expected an integer, got {value!r}") from exc


def _seed_value(value: Any) -> Union[int, str]:
    text = str(value).strip()
    return int(text) if re.fullmatch(r"-?\d+", text) else text


OVERRIDE_KEYS = {
    "LEVELGEN_ATTEMPT_BUDGET": ("attempt_budget", _int_value),
    "LEVELGEN_ENABLE_METRICS": ("enable_metrics", _truthy),
    "LEVELGEN_SEED": ("seed", _seed_value),
}


def resolve_overrides(config: GenerationConfig) -> GenerationConfig:
    """Return ``config`` with LEVELGEN_* overrides applied.

    Environment variables are read first; when a Flask app context is active
    its ``app.config`` entries of the same names take precedence.
    """
    changes: Dict[str, Any] = {}
    for env_key, (attr, cast) in OVERRIDE_KEYS.items():
        if os.environ.get(env_key, "") != "":
            changes[attr] = cast(os.environ[env_key])
    if has_app_context():
        cfg = current_app.config
        for env_key, (attr, cast) in OVERRIDE_KEYS.items():
            if cfg.get(env_key) is not None:
                changes[attr] = cast(cfg[env_key])
    return replace(config, **changes) if changes else config


__all__ = [
    "ENVIRONMENTS",
    "MIN_DIMENSION",
    "WalkerSettings",
    "CavernSettings",
    "ForestSettings",
    "CastleSettings",
    "DungeonSettings",
    "WALKER_PRESETS",
    "GenerationConfig",
    "OVERRIDE_KEYS",
    "resolve_overrides",
]
