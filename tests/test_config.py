"""
Tests for environment config accessors and logger setup.
"""

from __future__ import annotations

import logging
from pathlib import Path
from unittest.mock import patch

import pytest

from school_client.utils import config
from school_client.utils.logger import TokenRedactingFilter, get_logger, setup_logger


@pytest.fixture(autouse=True)
def no_dotenv():
    with patch("school_client.utils.config.load_dotenv"):
        yield


def test_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in ("SCHOOL_SERVER_URL", "SCHOOL_API_PATH", "SCHOOL_API_TIMEOUT", "LOG_LEVEL", "LOG_FILE"):
        monkeypatch.delenv(key, raising=False)
    assert config.server_url() == "http://localhost:3000"
    assert config.api_base_url() == "http://localhost:3000/api"
    assert config.api_timeout() == 30
    assert config.log_level() == logging.INFO
    assert config.log_file() is None


def test_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SCHOOL_SERVER_URL", "https://school.example/")
    monkeypatch.setenv("SCHOOL_API_PATH", "v2/")
    monkeypatch.setenv("SCHOOL_API_TIMEOUT", "nope")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.setenv("LOG_FILE", "logs/app.log")
    assert config.api_base_url() == "https://school.example/v2"
    assert config.api_timeout() == 30
    assert config.log_level() == logging.DEBUG
    assert config.log_file() == config.project_root() / "logs" / "app.log"


def test_empty_api_path(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SCHOOL_SERVER_URL", "http://srv")
    monkeypatch.setenv("SCHOOL_API_PATH", "/")
    assert config.api_base_url() == "http://srv"


def test_unknown_log_level(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LOG_LEVEL", "LOUD")
    assert config.log_level() == logging.INFO


def test_get_required(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SCHOOL_TOKEN_X", " abc ")
    assert config.get_required("SCHOOL_TOKEN_X") == "abc"
    monkeypatch.delenv("SCHOOL_TOKEN_X")
    with pytest.raises(ValueError, match="SCHOOL_TOKEN_X"):
        config.get_required("SCHOOL_TOKEN_X")


def test_setup_logger_attaches_handlers_once(tmp_path: Path) -> None:
    log_path = tmp_path / "nested" / "client.log"
    log = setup_logger("school_client.test", level=logging.DEBUG, log_file=log_path)
    assert len(log.handlers) == 2
    assert log.level == logging.DEBUG
    assert log_path.parent.is_dir()
    again = setup_logger("school_client.test")
    assert again is log
    assert len(again.handlers) == 2
    for h in list(log.handlers):
        h.close()
        log.removeHandler(h)


def test_get_logger_nests_module_loggers() -> None:
    assert get_logger().name == "school_client"
    assert get_logger("school_client.services.auth").name == "school_client.services.auth"
    assert get_logger("__main__").name == "school_client.__main__"


def test_bearer_tokens_are_masked() -> None:
    record = logging.LogRecord("school_client", logging.INFO, __file__, 1, "sent %s", ("Bearer abc.def-123",), None)
    assert TokenRedactingFilter().filter(record) is True
    assert record.getMessage() == "sent Bearer ***"
