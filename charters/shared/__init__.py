"""
Shared infrastructure.

Modules:
- config: Environment-backed settings
- logging: Structured JSON logging and relay exchange logs
- schemas: Uniform error envelope
- dependencies: FastAPI dependency providers
"""

from charters.shared.config import Settings, get_settings, load_settings
from charters.shared.logging.config import setup_logging, log_relay_event

__all__ = [
    "Settings",
    "get_settings",
    "load_settings",
    "setup_logging",
    "log_relay_event",
]
