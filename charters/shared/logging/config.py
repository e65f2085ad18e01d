"""
Structured logging configuration.

JSON output for log shippers, plus the helper every relay call uses to
record its upstream exchange.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional


# Upstream bodies are truncated to this many characters in logs
BODY_PREVIEW_CHARS = 250

# Keys of record.extra promoted to top-level JSON fields
CORRELATION_FIELDS = ("request_id", "relay")


class StructuredFormatter(logging.Formatter):
    """
    Render a log record as a single JSON line.

    Fields: timestamp (UTC, ISO 8601), level, logger, message, and when
    present: request_id and relay (lifted out of ``record.extra`` so logs
    can be joined on the correlation id), extra, exception.
    """

    def format(self, record: logging.LogRecord) -> str:
        entry: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        extra = getattr(record, "extra", None)
        if isinstance(extra, dict):
            for name in CORRELATION_FIELDS:
                if extra.get(name) is not None:
                    entry[name] = extra[name]
            entry["extra"] = extra

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        # upstream bodies and ids may hold non-JSON values
        return json.dumps(entry, default=str)


def setup_logging(
    level: int = logging.INFO,
    log_file: Optional[str] = None,
    logger_name: str = "charters",
) -> logging.Logger:
    """
    Route the service's loggers to JSON output.

    Replaces any handlers already on ``logger_name`` and stops propagation,
    so records are not printed a second time by the root text handler.

    Args:
        level: Minimum level to emit
        log_file: Also append JSON lines to this file
        logger_name: Parent logger of the service modules

    Returns:
        The configured logger
    """
    formatter = StructuredFormatter()
    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logger = logging.getLogger(logger_name)
    logger.setLevel(level)
    logger.propagate = False
    logger.handlers = []
    for handler in handlers:
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    return logger


def log_relay_event(
    request_id: str,
    relay_name: str,
    url: Optional[str],
    status: Optional[int] = None,
    body: Optional[str] = None,
    extra: Optional[Dict[str, Any]] = None,
    logger: Optional[logging.Logger] = None,
) -> None:
    """
    Log one upstream exchange.

    Args:
        request_id: Correlation id of the relay call
        relay_name: Which relay path ran (e.g. "proposal", "selection")
        url: Target upstream URL
        status: Upstream HTTP status, if a response was obtained
        body: Raw upstream body (only a preview is logged)
        extra: Additional context to include in the record
        logger: Logger instance to use. If not provided, uses the relay logger.
    """
    if logger is None:
        logger = logging.getLogger("charters.relay")

    preview = (body or "")[:BODY_PREVIEW_CHARS]
    log_data: Dict[str, Any] = {
        "request_id": request_id,
        "relay": relay_name,
        "url": url,
        "upstream_status": status,
        "body_preview": preview,
    }
    if extra:
        log_data.update(extra)

    record = logger.makeRecord(
        logger.name,
        logging.INFO,
        "",
        0,
        f"[request={request_id}] [relay={relay_name}] upstream url={url} status={status} body={preview}",
        args=(),
        exc_info=None,
    )
    record.extra = log_data

    logger.handle(record)
