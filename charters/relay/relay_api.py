"""
FastAPI endpoints that relay requests to the automation webhooks.

The HTTP status of every response is the upstream's status, unchanged,
or 500 when the upstream could not be reached or is not configured.
"""

import json
import logging
from typing import Any

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse, Response

from charters.relay.relay import RelayResult, UpstreamRelay
from charters.shared.config import (
    PROPOSAL_WEBHOOK_ENV,
    SELECTION_WEBHOOK_ENV,
    Settings,
)
from charters.shared.dependencies import relay_dependency, settings_dependency


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["relay"])

# Statuses whose HTTP response must not carry a body
NO_BODY_STATUSES = frozenset({204, 304})

# Carries the correlation id when the envelope cannot be sent
REQUEST_ID_HEADER = "X-Request-Id"


async def read_json_body(request: Request, default: Any) -> Any:
    """Decode the request body, falling back to ``default`` if it is not JSON."""
    body = await request.body()
    if not body:
        return default
    try:
        return json.loads(body)
    except (json.JSONDecodeError, UnicodeDecodeError):
        return default


def relay_response(result: RelayResult) -> Response:
    """
    Reflect a relay result to the caller with the upstream status.

    1xx, 204 and 304 keep their status but go out without a body; the
    correlation id travels in the X-Request-Id header instead.
    """
    status = result.status_code
    if status < 200 or status in NO_BODY_STATUSES:
        return Response(status_code=status, headers={REQUEST_ID_HEADER: result.request_id})
    return JSONResponse(content=result.to_envelope(), status_code=result.status_code)


@router.post("/proposals")
async def relay_proposal(
    request: Request,
    settings: Settings = Depends(settings_dependency),
    relay: UpstreamRelay = Depends(relay_dependency),
) -> Response:
    """
    Relay a proposal payload to the proposal webhook.

    The body is forwarded as-is (a missing or non-JSON body becomes ``{}``).
    """
    body = await read_json_body(request, default=None)
    result = await relay.send(
        settings.proposal_webhook_url,
        body if body is not None else {},
        setting_name=PROPOSAL_WEBHOOK_ENV,
        relay_name="proposal",
    )
    return relay_response(result)


@router.post("/boats/selected")
async def relay_selected_boats(
    request: Request,
    settings: Settings = Depends(settings_dependency),
    relay: UpstreamRelay = Depends(relay_dependency),
) -> Response:
    """
    Relay the ids of the currently selected boats to the selection webhook.

    Body: ``{"boatIds": [...]}``; anything that is not a list is sent as ``[]``.
    """
    body = await read_json_body(request, default={})
    boat_ids = body.get("boatIds") if isinstance(body, dict) else None
    if not isinstance(boat_ids, list):
        boat_ids = []

    logger.info(f"[relay=selection] forwarding ids={len(boat_ids)}")
    result = await relay.send(
        settings.selection_webhook_url,
        {"boatIds": boat_ids},
        setting_name=SELECTION_WEBHOOK_ENV,
        relay_name="selection",
    )
    return relay_response(result)
