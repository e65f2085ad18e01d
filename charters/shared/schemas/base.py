"""
Common response envelope.

Every error that reaches a caller has the same shape so the calling
surface has one thing to branch on.
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


class ErrorEnvelope(BaseModel):
    """
    Uniform failure shape.

    Fields:
        ok: Always False
        error: Human-readable message
        requestId: Correlation id, when the failure happened inside a relay call
    """

    ok: bool = Field(default=False)
    error: str = Field(description="Human-readable error message")
    requestId: Optional[str] = Field(default=None)


def error_envelope(
    error: str,
    request_id: Optional[str] = None,
    **extra: Any,
) -> Dict[str, Any]:
    """
    Build an error envelope dict, omitting the request id when absent.

    Args:
        error: Error message
        request_id: Optional correlation id
        **extra: Extra keys to include (None values are dropped)

    Returns:
        JSON-ready dictionary
    """
    envelope = ErrorEnvelope(error=error, requestId=request_id).model_dump(exclude_none=True)
    envelope.update({k: v for k, v in extra.items() if v is not None})
    return envelope
