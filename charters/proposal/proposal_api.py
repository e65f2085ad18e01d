"""
FastAPI endpoints for proposal drafts.

Each draft session owns one DraftState and one catalog snapshot. The
session is the single writer of its draft: every request replaces the
whole DraftState with the result of a pure transition.
"""

import logging
import time
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse, Response

from charters.catalog.catalog_api import to_item_views
from charters.catalog.fetcher import CatalogClient
from charters.catalog.normalizer import build_catalog
from charters.catalog.schemas import CatalogEntry, Itinerary
from charters.proposal.actions import apply_actions
from charters.proposal.assembler import assemble
from charters.proposal.draft import (
    DraftState,
    initial_state,
    mark_sending,
    record_result,
    selected_catalog_ids,
    to_view,
)
from charters.proposal.schemas import (
    ApplyActionsRequest,
    DraftResponse,
    StartDraftResponse,
    ValidationResponse,
)
from charters.proposal.validator import validate
from charters.relay.relay import UpstreamRelay
from charters.relay.relay_api import relay_response
from charters.shared.config import PROPOSAL_WEBHOOK_ENV, SELECTION_WEBHOOK_ENV, Settings
from charters.shared.dependencies import (
    catalog_client_dependency,
    relay_dependency,
    settings_dependency,
)
from charters.shared.schemas.base import error_envelope


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/drafts", tags=["drafts"])


@dataclass
class DraftSession:
    """A draft together with the catalog snapshot it was started from."""

    state: DraftState
    catalog: Tuple[CatalogEntry, ...]
    itineraries: List[Itinerary]
    created_at: str

    @property
    def catalog_keys(self) -> List[str]:
        return [entry.key for entry in self.catalog]


# In-memory session storage (drafts are not persisted across restarts)
_sessions: Dict[str, DraftSession] = {}


def _not_found(session_id: str) -> JSONResponse:
    return JSONResponse(
        status_code=404,
        content=error_envelope(f"Draft session {session_id} not found"),
    )


def get_session(session_id: str) -> Optional[DraftSession]:
    """Look up a session by id."""
    return _sessions.get(session_id)


@router.post("", response_model=StartDraftResponse)
async def start_draft(
    settings: Settings = Depends(settings_dependency),
    catalog_client: CatalogClient = Depends(catalog_client_dependency),
) -> StartDraftResponse:
    """
    Start a new draft session.

    Fetches the catalog and itineraries, freezes them as this session's
    snapshot and seeds a fresh draft.
    """
    api_start_time = time.perf_counter()
    session_id = str(uuid.uuid4())
    _log = f"[session={session_id}] [api=start_draft] "

    items = await catalog_client.fetch_catalog()
    itineraries = await catalog_client.fetch_itineraries()

    session = DraftSession(
        state=initial_state(
            language=settings.default_language,
            currency=settings.default_currency,
        ),
        catalog=build_catalog(items),
        itineraries=itineraries,
        created_at=datetime.now(timezone.utc).isoformat(),
    )
    _sessions[session_id] = session

    duration_ms = (time.perf_counter() - api_start_time) * 1000
    logger.info(
        f"{_log}Draft started | items={len(session.catalog)}, "
        f"itineraries={len(itineraries)}, duration_ms={duration_ms:.1f}"
    )

    return StartDraftResponse(
        session_id=session_id,
        items=to_item_views(session.catalog),
        itineraries=itineraries,
        draft=to_view(session.state),
    )


@router.get("/{session_id}", response_model=DraftResponse)
async def get_draft(session_id: str):
    """Return the current draft of a session."""
    session = get_session(session_id)
    if session is None:
        return _not_found(session_id)

    return DraftResponse(session_id=session_id, draft=to_view(session.state))


@router.post("/{session_id}/actions", response_model=DraftResponse)
async def apply_draft_actions(session_id: str, request: ApplyActionsRequest):
    """
    Apply a batch of actions to a draft, in order.

    Actions never fail; the response is the resulting draft.
    """
    session = get_session(session_id)
    if session is None:
        return _not_found(session_id)

    session.state = apply_actions(session.state, request.actions, session.catalog_keys)

    logger.debug(
        f"[session={session_id}] [api=actions] applied "
        f"{[action.type for action in request.actions]}"
    )
    return DraftResponse(session_id=session_id, draft=to_view(session.state))


@router.get("/{session_id}/validation", response_model=ValidationResponse)
async def validate_draft(session_id: str):
    """Check whether the draft could be submitted, without submitting it."""
    session = get_session(session_id)
    if session is None:
        return _not_found(session_id)

    error = validate(session.state, session.catalog_keys)
    if error is None:
        return ValidationResponse(valid=True)

    return ValidationResponse(
        valid=False,
        error=error.message,
        code=error.code,
        item_key=error.item_key,
    )


@router.post("/{session_id}/submit")
async def submit_draft(
    session_id: str,
    settings: Settings = Depends(settings_dependency),
    relay: UpstreamRelay = Depends(relay_dependency),
) -> Response:
    """
    Validate, assemble and relay the draft to the proposal webhook.

    A submission that is already in flight for this session blocks a
    second one. The upstream status and body are returned unchanged.
    """
    session = get_session(session_id)
    if session is None:
        return _not_found(session_id)

    _log = f"[session={session_id}] [api=submit] "

    if session.state.sending:
        return JSONResponse(
            status_code=409,
            content=error_envelope("A proposal submission is already in progress."),
        )

    error = validate(session.state, session.catalog_keys)
    if error is not None:
        envelope = error_envelope(error.message, code=error.code, itemKey=error.item_key)
        session.state = record_result(session.state, envelope)
        logger.info(f"{_log}Validation failed | code={error.code}, item={error.item_key}")
        return JSONResponse(status_code=422, content=envelope)

    payload = assemble(
        session.state,
        source=settings.proposal_source,
        new_id=relay.new_id,
        catalog_keys=session.catalog_keys,
    )
    session.state = mark_sending(session.state)
    logger.info(
        f"{_log}Submitting proposal | proposal_id={payload.meta.proposal_id}, "
        f"boats={len(payload.boats)}, language={payload.language}"
    )

    try:
        result = await relay.send(
            settings.proposal_webhook_url,
            payload.model_dump(by_alias=True),
            setting_name=PROPOSAL_WEBHOOK_ENV,
            relay_name="proposal",
        )
    except Exception:
        session.state = record_result(
            session.state, error_envelope("Error creating proposal.")
        )
        raise

    session.state = record_result(session.state, result.to_envelope())
    return relay_response(result)


@router.post("/{session_id}/selection")
async def notify_selection(
    session_id: str,
    settings: Settings = Depends(settings_dependency),
    relay: UpstreamRelay = Depends(relay_dependency),
) -> Response:
    """Relay the upstream ids of the selected items to the selection webhook."""
    session = get_session(session_id)
    if session is None:
        return _not_found(session_id)

    boat_ids = selected_catalog_ids(session.state, session.catalog)
    result = await relay.send(
        settings.selection_webhook_url,
        {"boatIds": boat_ids},
        setting_name=SELECTION_WEBHOOK_ENV,
        relay_name="selection",
    )
    return relay_response(result)


@router.delete("/{session_id}")
async def delete_draft(session_id: str) -> Any:
    """Discard a draft session."""
    if session_id not in _sessions:
        return _not_found(session_id)

    del _sessions[session_id]
    return {"message": f"Draft session {session_id} deleted"}
