"""
Draft state store for proposal editing.

A DraftState is an immutable value. Every user action is a pure function
from one DraftState to the next; the owning session swaps the whole value
on each transition. No transition raises.
"""

from dataclasses import dataclass, field, replace
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from charters.catalog.schemas import CatalogEntry
from charters.proposal.final_notes import DEFAULT_FINAL_NOTES, default_final_notes


@dataclass(frozen=True)
class DraftState:
    """
    In-progress proposal for one editing session.

    Prices and notes for keys that are no longer selected are kept, so
    re-selecting an item restores what was typed for it. They are only
    dropped by clear_all.
    """

    # Selection (ordered by when each key was selected)
    selected_keys: Tuple[str, ...] = ()
    prices_by_key: Mapping[str, str] = field(default_factory=dict)
    notes_by_key: Mapping[str, str] = field(default_factory=dict)

    # Proposal configuration
    language: str = "en"
    currency: str = "EUR"
    broker_message: str = ""
    selected_itinerary_ids: Tuple[str, ...] = ()

    # Final notes per language
    final_notes_enabled: bool = True
    final_notes_by_language: Mapping[str, str] = field(default_factory=dict)
    final_notes_touched: Mapping[str, bool] = field(default_factory=dict)

    # Client
    client_name: str = ""
    client_email: str = ""

    # Submission status
    sending: bool = False
    last_result: Optional[Dict[str, Any]] = None


def _seeded_final_notes() -> Tuple[Dict[str, str], Dict[str, bool]]:
    texts = dict(DEFAULT_FINAL_NOTES)
    touched = {language: False for language in DEFAULT_FINAL_NOTES}
    return texts, touched


def _toggle(values: Tuple[str, ...], value: str) -> Tuple[str, ...]:
    if value in values:
        return tuple(v for v in values if v != value)
    return values + (value,)


def initial_state(language: str = "en", currency: str = "EUR") -> DraftState:
    """
    Create a fresh draft with final notes seeded for every language.

    Args:
        language: Starting proposal language
        currency: Starting currency code

    Returns:
        New DraftState
    """
    texts, touched = _seeded_final_notes()
    state = DraftState(
        currency=currency.upper(),
        final_notes_by_language=texts,
        final_notes_touched=touched,
    )
    return set_language(state, language)


# =============================================================================
# Selection
# =============================================================================


def select_all(state: DraftState, catalog_keys: Iterable[str]) -> DraftState:
    """Select every key of the current catalog snapshot, in catalog order."""
    return replace(state, selected_keys=tuple(dict.fromkeys(catalog_keys)))


def toggle_selection(state: DraftState, key: str) -> DraftState:
    """Add ``key`` to the selection, or remove it if already selected."""
    return replace(state, selected_keys=_toggle(state.selected_keys, key))


def clear_all(state: DraftState) -> DraftState:
    """
    Reset selection, per-item data, itineraries and final notes.

    Client identity, language, currency and broker message are kept.
    """
    texts, touched = _seeded_final_notes()
    return replace(
        state,
        selected_keys=(),
        prices_by_key={},
        notes_by_key={},
        selected_itinerary_ids=(),
        final_notes_enabled=True,
        final_notes_by_language=texts,
        final_notes_touched=touched,
        last_result=None,
    )


# =============================================================================
# Per-item data
# =============================================================================


def set_price(state: DraftState, key: str, raw: str) -> DraftState:
    """Store the raw price string for ``key``; parsed only at validation."""
    prices = dict(state.prices_by_key)
    prices[key] = raw
    return replace(state, prices_by_key=prices)


def set_note(state: DraftState, key: str, text: str) -> DraftState:
    notes = dict(state.notes_by_key)
    notes[key] = text
    return replace(state, notes_by_key=notes)


# =============================================================================
# Proposal configuration
# =============================================================================


def set_language(state: DraftState, language: str) -> DraftState:
    """
    Switch the active language.

    Seeds the language's final notes from the built-in default if it has
    none yet. Other languages' text is left alone.
    """
    texts = state.final_notes_by_language
    touched = state.final_notes_touched

    if texts.get(language) is None:
        texts = {**texts, language: default_final_notes(language)}
        touched = {**touched, language: False}

    return replace(
        state,
        language=language,
        final_notes_by_language=texts,
        final_notes_touched=touched,
    )


def set_currency(state: DraftState, currency: str) -> DraftState:
    return replace(state, currency=(currency or "").upper())


def set_broker_message(state: DraftState, message: str) -> DraftState:
    return replace(state, broker_message=message)


def toggle_itinerary(state: DraftState, itinerary_id: str) -> DraftState:
    return replace(
        state,
        selected_itinerary_ids=_toggle(state.selected_itinerary_ids, itinerary_id),
    )


# =============================================================================
# Final notes
# =============================================================================


def active_final_notes(state: DraftState) -> str:
    """Final-notes text for the active language."""
    text = state.final_notes_by_language.get(state.language)
    if text is None:
        return default_final_notes(state.language)
    return text


def set_final_notes_enabled(state: DraftState, enabled: bool) -> DraftState:
    return replace(state, final_notes_enabled=bool(enabled))


def edit_final_notes(state: DraftState, text: str) -> DraftState:
    """Replace the active language's text and mark it as user-edited."""
    return replace(
        state,
        final_notes_by_language={**state.final_notes_by_language, state.language: text},
        final_notes_touched={**state.final_notes_touched, state.language: True},
    )


def reset_final_notes_to_default(state: DraftState) -> DraftState:
    """Restore the active language's built-in text and clear its edited flag."""
    return replace(
        state,
        final_notes_by_language={
            **state.final_notes_by_language,
            state.language: default_final_notes(state.language),
        },
        final_notes_touched={**state.final_notes_touched, state.language: False},
    )


# =============================================================================
# Client
# =============================================================================


def set_client_name(state: DraftState, name: str) -> DraftState:
    return replace(state, client_name=name)


def set_client_email(state: DraftState, email: str) -> DraftState:
    return replace(state, client_email=email)


# =============================================================================
# Submission status
# =============================================================================


def mark_sending(state: DraftState) -> DraftState:
    """Flag a submission as in flight and drop the previous outcome."""
    return replace(state, sending=True, last_result=None)


def record_result(state: DraftState, result: Dict[str, Any]) -> DraftState:
    """Store a submission outcome and clear the in-flight flag."""
    return replace(state, sending=False, last_result=dict(result))


# =============================================================================
# Derived views
# =============================================================================


def ordered_selection(
    state: DraftState,
    catalog_keys: Optional[Sequence[str]] = None,
) -> List[str]:
    """
    Selected keys in catalog order.

    Keys that are not in ``catalog_keys`` are left out. Without a catalog
    the keys come back in the order they were selected.
    """
    if catalog_keys is None:
        return list(state.selected_keys)

    selected = set(state.selected_keys)
    return [key for key in dict.fromkeys(catalog_keys) if key in selected]


def selected_catalog_ids(
    state: DraftState,
    catalog: Sequence[CatalogEntry],
) -> List[str]:
    """
    Upstream ids of the selected items, in catalog order.

    Items keyed by a positional fallback have no upstream id and are left out.
    """
    selected = set(state.selected_keys)
    return [
        entry.item.id
        for entry in catalog
        if entry.key in selected and entry.item.id is not None
    ]


def to_view(state: DraftState) -> Dict[str, Any]:
    """Serialize a draft for API responses."""
    return {
        "selectedKeys": list(state.selected_keys),
        "pricesByKey": dict(state.prices_by_key),
        "notesByKey": dict(state.notes_by_key),
        "language": state.language,
        "currency": state.currency,
        "brokerMessage": state.broker_message,
        "selectedItineraryIds": list(state.selected_itinerary_ids),
        "finalNotesEnabled": state.final_notes_enabled,
        "finalNotes": active_final_notes(state),
        "finalNotesTouched": bool(state.final_notes_touched.get(state.language, False)),
        "clientName": state.client_name,
        "clientEmail": state.client_email,
        "sending": state.sending,
        "lastResult": state.last_result,
    }
