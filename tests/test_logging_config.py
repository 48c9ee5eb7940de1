"""Tests for setup_logging."""

from typing import Any

import pytest

from jingtum_rpc import logging_config
from jingtum_rpc.logging_config import LOGGING_CONFIG, setup_logging


@pytest.fixture
def applied(monkeypatch: pytest.MonkeyPatch) -> list[dict[str, Any]]:
    captured: list[dict[str, Any]] = []
    monkeypatch.setattr(logging_config.logging.config, "dictConfig", captured.append)
    return captured


class TestSetupLogging:
    def test_default(self, applied: list[dict[str, Any]]) -> None:
        setup_logging()

        config = applied[0]
        assert config["loggers"]["jingtum_rpc"]["propagate"] is False
        assert config["loggers"]["httpx"]["level"] == "WARNING"
        assert "file" not in config["handlers"]

    def test_level_override(self, applied: list[dict[str, Any]]) -> None:
        setup_logging(level="debug")

        assert applied[0]["loggers"]["jingtum_rpc"]["level"] == "DEBUG"
        assert LOGGING_CONFIG["loggers"]["jingtum_rpc"]["level"] == logging_config.LOG_LEVEL

    def test_log_file(self, applied: list[dict[str, Any]], tmp_path: Any) -> None:
        path = str(tmp_path / "jingtum.log")
        setup_logging(log_file=path)

        config = applied[0]
        assert config["handlers"]["file"]["filename"] == path
        assert "file" in config["loggers"]["jingtum_rpc"]["handlers"]
        # The shared template is left untouched.
        assert "file" not in LOGGING_CONFIG["handlers"]
        assert LOGGING_CONFIG["loggers"]["jingtum_rpc"]["handlers"] == ["console"]

    def test_log_file_also_catches_root(self, applied: list[dict[str, Any]], tmp_path: Any) -> None:
        setup_logging(log_file=str(tmp_path / "jingtum.log"))

        assert applied[0]["root"]["handlers"] == ["console", "file"]
        assert LOGGING_CONFIG["root"]["handlers"] == ["console"]
