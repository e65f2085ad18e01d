"""
Proposal assembly.

Turns a validated DraftState into the ProposalPayload sent to the
proposal webhook. The draft is only read.
"""

from datetime import datetime, timezone
from typing import Callable, Optional, Sequence

from charters.proposal.draft import DraftState, active_final_notes, ordered_selection
from charters.proposal.money import parse_money
from charters.proposal.schemas import (
    ProposalBoat,
    ProposalClient,
    ProposalCta,
    ProposalItinerary,
    ProposalMeta,
    ProposalPayload,
)
from charters.relay.correlation import CorrelationIdFactory, new_correlation_id


def _trimmed_or_none(value: Optional[str]) -> Optional[str]:
    text = (value or "").strip()
    return text or None


def _utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


def assemble(
    state: DraftState,
    source: str = "charters-api",
    new_id: CorrelationIdFactory = new_correlation_id,
    now: Callable[[], str] = _utc_timestamp,
    catalog_keys: Optional[Sequence[str]] = None,
) -> ProposalPayload:
    """
    Build the submission payload for a draft.

    Call only after validate(state, catalog_keys) returned None; prices
    are parsed with the same routine validation used.

    Args:
        state: Draft to submit
        source: Value for meta.source
        new_id: Factory for the proposal id
        now: Factory for the ISO timestamp
        catalog_keys: Catalog snapshot order for the boats (None keeps
            the selection order)

    Returns:
        A new ProposalPayload with a fresh proposal id and timestamp
    """
    boats = [
        ProposalBoat(
            id=key,
            price=parse_money(state.prices_by_key.get(key, "")),
            currency=state.currency,
            price_note=_trimmed_or_none(state.notes_by_key.get(key)),
        )
        for key in ordered_selection(state, catalog_keys)
    ]

    final_notes = None
    if state.final_notes_enabled:
        final_notes = _trimmed_or_none(active_final_notes(state))

    return ProposalPayload(
        language=state.language,
        client=ProposalClient(
            name=_trimmed_or_none(state.client_name),
            email=_trimmed_or_none(state.client_email),
        ),
        boats=boats,
        cta=ProposalCta(
            message_from_broker=state.broker_message,
            client_note_enabled=True,
            final_notes=final_notes,
        ),
        itineraries=[ProposalItinerary(id=i) for i in state.selected_itinerary_ids],
        meta=ProposalMeta(source=source, proposal_id=new_id(), timestamp=now()),
    )
