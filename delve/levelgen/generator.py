"""Generation controller: picks the variant for ``config.environment`` and runs it."""
from __future__ import annotations

import random
from typing import Any, Callable, Dict, Mapping, Union

from . import castle, cavern, dungeon, forest
from .config import ENVIRONMENTS, GenerationConfig, resolve_overrides
from .errors import ConfigError
from .pipeline import Attempt, GenerationResult, Outcome, run_attempts

VARIANTS: Dict[str, Callable[[Attempt], Outcome]] = {
    "cavern": cavern.attempt,
    "forest": forest.attempt,
    "castle": castle.attempt,
    "dungeon": dungeon.attempt,
}


def generate(config: Union[GenerationConfig, Mapping[str, Any], None] = None) -> GenerationResult:
    """Generate one validated level.

    ``config`` may be a ``GenerationConfig`` or a plain options mapping (see
    ``GenerationConfig.from_mapping``). LEVELGEN_* overrides from the
    environment or the active Flask app are applied before validation.

    Raises ConfigError for invalid settings and GenerationError when the
    attempt budget runs out.
    """
    if config is None:
        config = GenerationConfig()
    elif not isinstance(config, GenerationConfig):
        config = GenerationConfig.from_mapping(config)
    config = resolve_overrides(config)
    config.validate()
    attempt_fn = VARIANTS.get(config.environment)
    if attempt_fn is None:
        raise ConfigError(f"no generator registered for {config.environment!r}; known: {', '.join(ENVIRONMENTS)}")

    seed = config.seed
    if config.rng is not None:
        rng = config.rng
    else:
        # 0 is a valid deterministic seed; None picks a fresh one
        if seed is None:
            seed = random.randint(0, 2**31 - 1)
        rng = random.Random(seed)
    return run_attempts(config.environment, attempt_fn, config, rng, seed=seed)


__all__ = ["VARIANTS", "generate"]
