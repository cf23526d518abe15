from __future__ import annotations

import logging

import pytest

from nile import config
from nile.logging_setup import TURN_ID_VAR, _TurnIdFilter


def test_ai_max_states(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("NILE_AI_MAX_STATES", raising=False)
    assert config.ai_max_states() is None
    monkeypatch.setenv("NILE_AI_MAX_STATES", "2500")
    assert config.ai_max_states() == 2500
    # Neplatne hodnoty znamenaju bez limitu
    for value in ("0", "-3", "abc", ""):
        monkeypatch.setenv("NILE_AI_MAX_STATES", value)
        assert config.ai_max_states() is None


def test_seed(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("NILE_SEED", " 42 ")
    assert config.seed() == 42
    monkeypatch.setenv("NILE_SEED", "x")
    assert config.seed() is None


def test_log_level(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("NILE_LOG_LEVEL", "debug")
    assert config.log_level() == logging.DEBUG
    monkeypatch.setenv("NILE_LOG_LEVEL", "chatty")
    assert config.log_level() == logging.INFO


def test_log_path(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    monkeypatch.delenv("NILE_LOG_PATH", raising=False)
    assert config.log_path().endswith("nile.log")
    target = str(tmp_path / "hra.log")
    monkeypatch.setenv("NILE_LOG_PATH", target)
    assert config.log_path() == target


def test_turn_id_filter_reads_context() -> None:
    record = logging.LogRecord("nile.game", logging.INFO, __file__, 1, "msg", None, None)
    token = TURN_ID_VAR.set("3:cpu1")
    try:
        assert _TurnIdFilter().filter(record)
    finally:
        TURN_ID_VAR.reset(token)
    assert record.turn_id == "3:cpu1"
