"""Logging configuration and utilities."""

from charters.shared.logging.config import (
    BODY_PREVIEW_CHARS,
    StructuredFormatter,
    log_relay_event,
    setup_logging,
)

__all__ = [
    "BODY_PREVIEW_CHARS",
    "StructuredFormatter",
    "log_relay_event",
    "setup_logging",
]
