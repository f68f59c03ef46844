"""
project: Delve
module: __init__.py

Flask application factory for servers that embed the level generator.

The factory only carries configuration: LEVELGEN_* settings are read from the
environment (a local `.env` is loaded first) into ``app.config``, where
``delve.levelgen.config.resolve_overrides`` picks them up whenever a
generation call runs inside an app context.
"""

import os
from typing import Any, Mapping, Optional

from dotenv import load_dotenv
from flask import Flask

from .logging_utils import log


def _env_flag(name: str) -> Optional[bool]:
    # unset means "leave the caller's GenerationConfig alone"
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return None
    return raw.strip().lower() not in {"0", "false", "no", "off"}


def create_app(overrides: Optional[Mapping[str, Any]] = None) -> Flask:
    """Build a Flask app holding generation settings.

    ``overrides`` is applied last, so tests can pin values without touching
    the process environment.
    """
    # Load .env if present so LEVELGEN_* can be supplied without exporting
    # shell variables during development.
    load_dotenv()
    app = Flask(__name__)
    budget = os.getenv("LEVELGEN_ATTEMPT_BUDGET")
    seed = os.getenv("LEVELGEN_SEED")
    app.config.update(
        LEVELGEN_ATTEMPT_BUDGET=int(budget) if budget else None,
        LEVELGEN_ENABLE_METRICS=_env_flag("LEVELGEN_ENABLE_METRICS"),
        LEVELGEN_SEED=seed or None,
    )
    if overrides:
        app.config.update(overrides)
    log.debug(
        event="app_created",
        attempt_budget=app.config["LEVELGEN_ATTEMPT_BUDGET"],
        enable_metrics=app.config["LEVELGEN_ENABLE_METRICS"],
    )
    return app


__all__ = ["create_app"]
