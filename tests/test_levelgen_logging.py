import json

import pytest

from delve.levelgen import GenerationConfig, GenerationError, generate
from delve.logging_utils import get_logger


def _exhaust(budget=3):
    config = GenerationConfig(environment="cavern", dimension=25, min_exit_distance=1000, attempt_budget=budget, seed=3)
    with pytest.raises(GenerationError):
        generate(config)


def test_each_rejection_logged_with_attempt_and_reason(capsys):
    _exhaust(3)
    out, err = capsys.readouterr()
    lines = [ln for ln in out.splitlines() if "event=level_attempt_rejected" in ln]
    assert len(lines) == 3
    for index, line in enumerate(lines, start=1):
        assert f"attempt={index}" in line
        assert "reason=" in line
        assert "stage=" in line
        assert "environment=cavern" in line
        assert line.startswith("level=info")
    assert "event=level_generation_failed" in err
    assert "level=error" in err


def test_success_logged(capsys):
    generate(GenerationConfig(environment="dungeon", dimension=35, seed=4))
    out, _ = capsys.readouterr()
    assert "event=level_generated" in out
    assert "seed=4" in out


def test_json_mode(monkeypatch, capsys):
    monkeypatch.setenv("DELVE_LOG_JSON", "1")
    _exhaust(2)
    out, err = capsys.readouterr()
    records = [json.loads(ln) for ln in out.splitlines() if ln.strip()]
    rejected = [r for r in records if r.get("event") == "level_attempt_rejected"]
    assert [r["attempt"] for r in rejected] == [1, 2]
    assert all(r["logger"] == "delve.levelgen" and r["level"] == "info" for r in rejected)
    failure = json.loads(err.strip().splitlines()[-1])
    assert failure["event"] == "level_generation_failed"


def test_level_threshold_filters(monkeypatch, capsys):
    monkeypatch.setenv("DELVE_LOG_LEVEL", "warn")
    _exhaust(2)
    out, err = capsys.readouterr()
    assert "level_attempt_rejected" not in out
    assert "level_generation_failed" in err


def test_logger_formatting(capsys):
    log = get_logger("delve.test")
    assert get_logger("delve.test") is log
    log.info(event="sample", note="two words", count=3, skipped=None)
    log.debug(event="hidden")
    out = capsys.readouterr().out.strip()
    assert "event=sample" in out
    assert "note=two_words" in out
    assert "count=3" in out
    assert "skipped" not in out
    assert "logger=delve.test" in out
    assert "hidden" not in out
