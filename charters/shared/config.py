"""
Service configuration.

Endpoint URLs and defaults are read from the environment (a local .env
file is merged first). Centralized here so routes and tests share one
source of truth.
"""

import logging
import math
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv


# Environment variable names (also used in configuration error messages)
CATALOG_WEBHOOK_ENV = "CATALOG_WEBHOOK_URL"
ITINERARIES_WEBHOOK_ENV = "ITINERARIES_WEBHOOK_URL"
PROPOSAL_WEBHOOK_ENV = "PROPOSAL_WEBHOOK_URL"
SELECTION_WEBHOOK_ENV = "SELECTION_WEBHOOK_URL"

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Settings:
    """
    Runtime settings for the proposal service.

    Attributes:
        catalog_webhook_url: Catalog fetch endpoint (optional)
        itineraries_webhook_url: Itinerary fetch endpoint (optional)
        proposal_webhook_url: Proposal submission endpoint (required to submit)
        selection_webhook_url: Selection notification endpoint (required to notify)
        proposal_source: Value written to meta.source of every proposal
        default_language: Language a new draft starts in
        default_currency: Currency a new draft starts with
        http_timeout_seconds: Transport timeout handed to the HTTP client
        log_format: "text" or "json"
        log_level: Root log level name
    """

    catalog_webhook_url: Optional[str] = None
    itineraries_webhook_url: Optional[str] = None
    proposal_webhook_url: Optional[str] = None
    selection_webhook_url: Optional[str] = None

    proposal_source: str = "charters-api"
    default_language: str = "en"
    default_currency: str = "EUR"

    http_timeout_seconds: float = 30.0

    log_format: str = "text"
    log_level: str = "INFO"


def _env(name: str) -> Optional[str]:
    """Read an environment variable, treating blank values as unset."""
    value = os.environ.get(name)
    if value is None or not value.strip():
        return None
    return value.strip()


def _timeout_seconds(default: float) -> float:
    """HTTP_TIMEOUT_SECONDS as a positive number, else the default."""
    raw = _env("HTTP_TIMEOUT_SECONDS")
    if raw is None:
        return default
    try:
        value = float(raw)
    except ValueError:
        value = None
    if value is None or not math.isfinite(value) or value <= 0:
        logger.warning(f"Ignoring HTTP_TIMEOUT_SECONDS={raw!r}; using {default}")
        return default
    return value


def load_settings() -> Settings:
    """
    Build Settings from the environment.

    Returns:
        Settings with defaults applied for anything not configured
    """
    load_dotenv()
    defaults = Settings()

    timeout = _timeout_seconds(defaults.http_timeout_seconds)
    return Settings(
        catalog_webhook_url=_env(CATALOG_WEBHOOK_ENV),
        itineraries_webhook_url=_env(ITINERARIES_WEBHOOK_ENV),
        proposal_webhook_url=_env(PROPOSAL_WEBHOOK_ENV),
        selection_webhook_url=_env(SELECTION_WEBHOOK_ENV),
        proposal_source=_env("PROPOSAL_SOURCE") or defaults.proposal_source,
        default_language=(_env("DEFAULT_LANGUAGE") or defaults.default_language).lower(),
        default_currency=(_env("DEFAULT_CURRENCY") or defaults.default_currency).upper(),
        http_timeout_seconds=timeout,
        log_format=(_env("LOG_FORMAT") or defaults.log_format).lower(),
        log_level=(_env("LOG_LEVEL") or defaults.log_level).upper(),
    )


# Module-level cache for settings
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Return the process-wide Settings, loading them on first use."""
    global _settings
    if _settings is None:
        _settings = load_settings()
    return _settings
