"""
Tests for settings loading and structured logging.
"""

import json
import logging

import pytest

from charters.shared import config
from charters.shared.config import Settings, load_settings
from charters.shared.logging.config import (
    BODY_PREVIEW_CHARS,
    StructuredFormatter,
    log_relay_event,
)


ENV_NAMES = (
    "CATALOG_WEBHOOK_URL",
    "ITINERARIES_WEBHOOK_URL",
    "PROPOSAL_WEBHOOK_URL",
    "SELECTION_WEBHOOK_URL",
    "PROPOSAL_SOURCE",
    "DEFAULT_LANGUAGE",
    "DEFAULT_CURRENCY",
    "HTTP_TIMEOUT_SECONDS",
    "LOG_FORMAT",
    "LOG_LEVEL",
)


@pytest.fixture
def clean_env(monkeypatch):
    """Unset every setting and keep a local .env out of the picture."""
    for name in ENV_NAMES:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr(config, "load_dotenv", lambda: False)
    return monkeypatch


class TestLoadSettings:
    """Tests for reading settings from the environment."""

    def test_defaults(self, clean_env):
        assert load_settings() == Settings()

    def test_reads_urls(self, clean_env):
        clean_env.setenv("PROPOSAL_WEBHOOK_URL", "https://hooks.example.com/proposal")
        clean_env.setenv("SELECTION_WEBHOOK_URL", "  https://hooks.example.com/selection  ")

        settings = load_settings()

        assert settings.proposal_webhook_url == "https://hooks.example.com/proposal"
        assert settings.selection_webhook_url == "https://hooks.example.com/selection"
        assert settings.catalog_webhook_url is None

    def test_blank_values_are_unset(self, clean_env):
        clean_env.setenv("PROPOSAL_WEBHOOK_URL", "   ")
        clean_env.setenv("DEFAULT_CURRENCY", "")

        settings = load_settings()

        assert settings.proposal_webhook_url is None
        assert settings.default_currency == "EUR"

    def test_normalized_casing(self, clean_env):
        clean_env.setenv("DEFAULT_LANGUAGE", "ES")
        clean_env.setenv("DEFAULT_CURRENCY", "usd")
        clean_env.setenv("LOG_FORMAT", "JSON")
        clean_env.setenv("LOG_LEVEL", "debug")

        settings = load_settings()

        assert settings.default_language == "es"
        assert settings.default_currency == "USD"
        assert settings.log_format == "json"
        assert settings.log_level == "DEBUG"

    def test_timeout_and_source(self, clean_env):
        clean_env.setenv("HTTP_TIMEOUT_SECONDS", "5")
        clean_env.setenv("PROPOSAL_SOURCE", "broker-ui")

        settings = load_settings()

        assert settings.http_timeout_seconds == 5.0
        assert settings.proposal_source == "broker-ui"

    @pytest.mark.parametrize("raw", ["abc", "-1", "0", "nan"])
    def test_unusable_timeout_falls_back(self, clean_env, caplog, raw):
        """A bad timeout keeps the default instead of failing startup."""
        clean_env.setenv("HTTP_TIMEOUT_SECONDS", raw)

        with caplog.at_level(logging.WARNING, logger="charters.shared.config"):
            settings = load_settings()

        assert settings.http_timeout_seconds == Settings().http_timeout_seconds
        assert "HTTP_TIMEOUT_SECONDS" in caplog.text


class TestStructuredFormatter:

    def test_outputs_json_with_extra(self):
        record = logging.LogRecord("charters.test", logging.WARNING, "", 0, "hello %s", ("world",), None)
        record.extra = {"request_id": "r-1"}

        entry = json.loads(StructuredFormatter().format(record))

        assert entry["level"] == "WARNING"
        assert entry["logger"] == "charters.test"
        assert entry["message"] == "hello world"
        assert entry["extra"] == {"request_id": "r-1"}
        assert entry["request_id"] == "r-1"
        assert "relay" not in entry
        assert entry["timestamp"].endswith("+00:00")


class _CaptureHandler(logging.Handler):
    def __init__(self):
        super().__init__()
        self.records = []

    def emit(self, record):
        self.records.append(record)


class TestLogRelayEvent:
    """Tests for the upstream exchange log."""

    def _capture(self):
        logger = logging.getLogger("charters.tests.relay")
        logger.handlers = []
        logger.propagate = False
        logger.setLevel(logging.INFO)
        handler = _CaptureHandler()
        logger.addHandler(handler)
        return logger, handler

    def test_body_truncated(self):
        logger, handler = self._capture()

        log_relay_event("r-1", "proposal", "https://u", status=502, body="x" * 1000, logger=logger)

        (record,) = handler.records
        assert record.extra["body_preview"] == "x" * BODY_PREVIEW_CHARS
        assert record.extra["upstream_status"] == 502
        assert "[request=r-1] [relay=proposal]" in record.getMessage()

    def test_extra_merged(self):
        logger, handler = self._capture()

        log_relay_event("r-2", "selection", "https://u", status=200, body=None, extra={"ok": True}, logger=logger)

        (record,) = handler.records
        assert record.extra["ok"] is True
        assert record.extra["body_preview"] == ""
