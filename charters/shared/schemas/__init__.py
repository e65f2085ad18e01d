"""Common response schemas."""

from charters.shared.schemas.base import ErrorEnvelope, error_envelope

__all__ = ["ErrorEnvelope", "error_envelope"]
