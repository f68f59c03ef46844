"""Error taxonomy for level generation.

Per-attempt rejections are not exceptions (see ``pipeline.Rejected``); only
invalid configuration and an exhausted attempt budget surface to callers.
"""
from __future__ import annotations

from collections import Counter
from typing import Optional


class LevelGenError(Exception):
    """Base class for generation failures."""


class ConfigError(LevelGenError, ValueError):
    """Invalid generation settings or unknown environment tag."""


class GenerationError(LevelGenError, RuntimeError):
    """Attempt budget exhausted without a validated level."""

    def __init__(self, environment: str, attempts: int, rejections: Counter, last_rejection: Optional[str] = None):
        self.environment = environment
        self.attempts = attempts
        self.rejections = rejections
        self.last_rejection = last_rejection
        summary = ", ".join(f"{reason}={count}" for reason, count in rejections.most_common())
        super().__init__(
            f"Failed to generate a valid {environment} level after {attempts} attempts ({summary or 'no attempts'})"
        )


__all__ = ["LevelGenError", "ConfigError", "GenerationError"]
