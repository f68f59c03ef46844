import os
import sys

import pytest

# Ensure repository root importable early
ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

_ISOLATED_ENV = (
    "LEVELGEN_ATTEMPT_BUDGET",
    "LEVELGEN_ENABLE_METRICS",
    "LEVELGEN_SEED",
    "DELVE_LOG_LEVEL",
    "DELVE_LOG_JSON",
)


@pytest.fixture(autouse=True)
def _clean_generation_env(monkeypatch):
    """Runtime overrides and log settings from the shell must not leak into tests."""
    for key in _ISOLATED_ENV:
        monkeypatch.delenv(key, raising=False)
    yield


@pytest.fixture()
def test_app():
    from delve import create_app

    app = create_app()
    app.config.update({"TESTING": True})
    return app
