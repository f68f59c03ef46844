import random

import pytest

from delve import create_app
from delve.levelgen import generate
from delve.levelgen.config import (
    CastleSettings,
    ForestSettings,
    GenerationConfig,
    WalkerSettings,
    WALKER_PRESETS,
    resolve_overrides,
)
from delve.levelgen.errors import ConfigError


def test_defaults_mirror_tuning_constants():
    cfg = GenerationConfig()
    assert cfg.environment == "cavern"
    assert cfg.dimension == 65
    assert cfg.attempt_budget == 60
    assert cfg.cavern.fill_probability == 0.45
    assert cfg.cavern.ca_iterations == 5
    assert cfg.forest.num_regions == 10
    assert cfg.forest.clearing_size == (1, 2)
    assert cfg.castle.num_regions == 12
    assert cfg.castle.room_size == (3, 7)
    assert cfg.dungeon.room_size == (3, 8)


def test_exit_distance_scales_with_small_grids():
    assert GenerationConfig(dimension=65).exit_distance() == 40.0
    assert GenerationConfig(dimension=64).exit_distance() == pytest.approx(38.4)
    assert GenerationConfig(dimension=101).exit_distance() == 40.0
    assert GenerationConfig(dimension=15).exit_distance() == pytest.approx(9.0)
    assert GenerationConfig(dimension=15, min_exit_distance=3).exit_distance() == 3.0


def test_walker_presets_per_environment():
    assert GenerationConfig(environment="castle").walker_settings() == WalkerSettings(0.05, 0.03, 4, 10)
    assert GenerationConfig(environment="forest").walker_settings() == WalkerSettings(0.15, 0.05, 2, 5)
    custom = WalkerSettings(0.0, 0.0, 1, 1)
    assert GenerationConfig(environment="forest", walker=custom).walker_settings() is custom
    assert set(WALKER_PRESETS) == {"cavern", "forest", "castle", "dungeon"}


def test_from_mapping_accepts_camel_case():
    cfg = GenerationConfig.from_mapping(
        {
            "environment": "forest",
            "dimensions": 33,
            "numRegions": 5,
            "clearingSize": [1, 3],
            "maxAttempts": 12,
            "voronoiRelaxation": 2,
            "walkerPresets": {
                "branchChance": 0.2,
                "loopChance": 0.1,
                "minCorridor": 3,
                "maxCorridor": 7,
                "allowDiagonals": False,
            },
        }
    )
    assert cfg.environment == "forest"
    assert cfg.dimension == 33
    assert cfg.attempt_budget == 12
    assert cfg.forest == ForestSettings(num_regions=5, clearing_size=(1, 3), relax_iterations=2)
    # flat keys reach every section that knows them
    assert cfg.castle.num_regions == 5
    assert cfg.walker == WalkerSettings(branch_chance=0.2, loop_chance=0.1, min_segment=3, max_segment=7)


def test_from_mapping_castle_region_sizes_and_nested_sections():
    cfg = GenerationConfig.from_mapping({"regionMinSize": 4, "regionMaxSize": 9, "castle": {"numRegions": 6}})
    assert cfg.castle == CastleSettings(num_regions=6, room_size=(4, 9))
    assert cfg.forest.num_regions == 10


def test_from_mapping_rejects_unknown_keys():
    with pytest.raises(ConfigError):
        GenerationConfig.from_mapping({"lavaLevel": 3})
    with pytest.raises(ConfigError):
        GenerationConfig.from_mapping({"walkerPresets": {"jumpChance": 0.5}})
    with pytest.raises(ConfigError):
        GenerationConfig.from_mapping({"forest": {"roomTries": 3}})


@pytest.mark.parametrize(
    "changes",
    [
        {"environment": "swamp"},
        {"dimension": 4},
        {"attempt_budget": 0},
        {"min_exit_distance": -1},
        {"walker": WalkerSettings(branch_chance=2.0)},
        {"walker": WalkerSettings(min_segment=5, max_segment=2)},
        {"castle": CastleSettings(room_size=(0, 3))},
        {"forest": ForestSettings(clearing_size=(0, 0))},
    ],
)
def test_validate_rejects_bad_values(changes):
    with pytest.raises(ConfigError) as info:
        GenerationConfig(**changes).validate()
    assert isinstance(info.value, ValueError)


def test_env_overrides_return_new_config(monkeypatch):
    monkeypatch.setenv("LEVELGEN_ATTEMPT_BUDGET", "7")
    monkeypatch.setenv("LEVELGEN_ENABLE_METRICS", "0")
    monkeypatch.setenv("LEVELGEN_SEED", "42")
    cfg = GenerationConfig(seed=1)
    resolved = resolve_overrides(cfg)
    assert resolved.attempt_budget == 7
    assert resolved.enable_metrics is False
    assert resolved.seed == 42
    assert cfg == GenerationConfig(seed=1)


def test_non_numeric_seed_override_kept_as_text(monkeypatch):
    monkeypatch.setenv("LEVELGEN_SEED", "deep-cave")
    assert resolve_overrides(GenerationConfig()).seed == "deep-cave"


def test_bad_budget_override_is_config_error(monkeypatch):
    monkeypatch.setenv("LEVELGEN_ATTEMPT_BUDGET", "lots")
    with pytest.raises(ConfigError):
        resolve_overrides(GenerationConfig())


def test_no_overrides_returns_same_instance():
    cfg = GenerationConfig(rng=random.Random(1))
    assert resolve_overrides(cfg) is cfg


def test_flask_config_takes_precedence(monkeypatch):
    monkeypatch.setenv("LEVELGEN_ATTEMPT_BUDGET", "7")
    app = create_app({"LEVELGEN_ATTEMPT_BUDGET": 3, "LEVELGEN_SEED": 1234})
    with app.app_context():
        resolved = resolve_overrides(GenerationConfig())
    assert resolved.attempt_budget == 3
    assert resolved.seed == 1234
    # outside the app context only the environment applies
    assert resolve_overrides(GenerationConfig()).attempt_budget == 7


def test_create_app_reads_environment(monkeypatch):
    monkeypatch.setenv("LEVELGEN_ATTEMPT_BUDGET", "11")
    monkeypatch.setenv("LEVELGEN_ENABLE_METRICS", "off")
    app = create_app()
    assert app.config["LEVELGEN_ATTEMPT_BUDGET"] == 11
    assert app.config["LEVELGEN_ENABLE_METRICS"] is False
    assert app.config["LEVELGEN_SEED"] is None


def test_unset_app_settings_leave_config_alone(test_app):
    with test_app.app_context():
        cfg = GenerationConfig(attempt_budget=9, enable_metrics=False)
        assert resolve_overrides(cfg) is cfg


def test_generate_inside_app_context_uses_app_seed():
    app = create_app({"LEVELGEN_SEED": 77})
    with app.app_context():
        result = generate({"environment": "dungeon", "dimension": 35})
    assert result.seed == 77
    assert result.grid == generate({"environment": "dungeon", "dimension": 35, "seed": 77}).grid
