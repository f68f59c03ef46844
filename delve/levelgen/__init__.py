"""Procedural level generation: caverns, forests, castles and dungeons.

Public import surface. ``generate`` is the entry point; the primitives are
exported for callers that compose their own variants.
"""

from .config import (
    ENVIRONMENTS,
    CastleSettings,
    CavernSettings,
    DungeonSettings,
    ForestSettings,
    GenerationConfig,
    WalkerSettings,
    resolve_overrides,
)  # noqa: F401
from .connectivity import count_reachable, flood_reachable, is_reachable  # noqa: F401
from .errors import ConfigError, GenerationError, LevelGenError  # noqa: F401
from .generator import VARIANTS, generate  # noqa: F401
from .grid import allocate, carve_organic, carve_rectangle, render_ascii  # noqa: F401
from .pipeline import GenerationResult, Rejection, Stage  # noqa: F401
from .placement import pick_far_floor  # noqa: F401
from .regions import assign_regions, relax  # noqa: F401
from .tiles import FLOOR, WALL  # noqa: F401

__all__ = [
    "ENVIRONMENTS",
    "CastleSettings",
    "CavernSettings",
    "DungeonSettings",
    "ForestSettings",
    "GenerationConfig",
    "WalkerSettings",
    "resolve_overrides",
    "count_reachable",
    "flood_reachable",
    "is_reachable",
    "ConfigError",
    "GenerationError",
    "LevelGenError",
    "VARIANTS",
    "generate",
    "allocate",
    "carve_organic",
    "carve_rectangle",
    "render_ascii",
    "GenerationResult",
    "Rejection",
    "Stage",
    "pick_far_floor",
    "assign_regions",
    "relax",
    "FLOOR",
    "WALL",
]
