"""
Upstream relay.

Forwards a JSON payload to an automation webhook and reflects the
upstream status and body back to the caller unchanged. The relay never
retries and never translates upstream status codes.
"""

import json
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

import httpx

from charters.relay.correlation import CorrelationIdFactory, new_correlation_id
from charters.shared.logging.config import log_relay_event
from charters.shared.schemas.base import error_envelope


logger = logging.getLogger(__name__)

# Status reported when no upstream response was obtained
# (missing configuration or transport failure)
ROUTE_ERROR_STATUS = 500


@dataclass(frozen=True)
class RelayResult:
    """
    Outcome of one relay call.

    ``upstream_status`` is None when the call never reached the upstream
    (missing configuration or transport failure); ``error`` is set in
    exactly those cases.
    """

    ok: bool
    request_id: str
    upstream_status: Optional[int] = None
    data: Any = None
    error: Optional[str] = None

    @property
    def status_code(self) -> int:
        """HTTP status the caller should see: upstream's, verbatim, or 500."""
        if self.upstream_status is not None:
            return self.upstream_status
        return ROUTE_ERROR_STATUS

    def to_envelope(self) -> Dict[str, Any]:
        """Serialize into the caller-facing response body."""
        if self.error is not None:
            return error_envelope(self.error, request_id=self.request_id)
        return {
            "ok": self.ok,
            "upstreamStatus": self.upstream_status,
            "data": self.data,
            "requestId": self.request_id,
        }


def parse_body(text: str) -> Any:
    """
    Decode an upstream body.

    Empty body -> None; JSON -> decoded value; anything else -> the raw text.
    """
    if not text:
        return None
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        return text


class UpstreamRelay:
    """
    Pass-through client for the automation webhooks.

    Args:
        new_id: Correlation id factory (chosen at process start)
        timeout_seconds: Transport timeout handed to httpx
        transport: Optional httpx transport (tests use httpx.MockTransport)
    """

    def __init__(
        self,
        new_id: CorrelationIdFactory = new_correlation_id,
        timeout_seconds: Optional[float] = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.new_id = new_id
        self.timeout_seconds = timeout_seconds
        self.transport = transport

    async def send(
        self,
        endpoint_url: Optional[str],
        payload: Any,
        setting_name: str = "endpoint URL",
        relay_name: str = "webhook",
    ) -> RelayResult:
        """
        POST ``payload`` as JSON to ``endpoint_url`` and reflect the response.

        Args:
            endpoint_url: Configured upstream URL (None/empty -> configuration error)
            payload: JSON-serializable body
            setting_name: Name of the setting that should hold the URL
            relay_name: Label used in logs

        Returns:
            RelayResult carrying the upstream status/body or the failure message
        """
        request_id = self.new_id()
        _log = f"[request={request_id}] [relay={relay_name}] "

        if not endpoint_url:
            message = f"missing env {setting_name}"
            logger.error(f"{_log}{message}")
            return RelayResult(ok=False, request_id=request_id, error=message)

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout_seconds,
                transport=self.transport,
            ) as client:
                response = await client.post(
                    endpoint_url,
                    content=json.dumps(payload),
                    headers={"content-type": "application/json"},
                )
                text = response.text
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            message = str(e) or e.__class__.__name__
            logger.error(f"{_log}route error calling {endpoint_url}: {message}")
            return RelayResult(ok=False, request_id=request_id, error=message)

        log_relay_event(
            request_id=request_id,
            relay_name=relay_name,
            url=endpoint_url,
            status=response.status_code,
            body=text,
            extra={"ok": response.is_success},
        )

        return RelayResult(
            ok=response.is_success,
            request_id=request_id,
            upstream_status=response.status_code,
            data=parse_body(text),
        )
