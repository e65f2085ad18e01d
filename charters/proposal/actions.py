"""
Dispatch of API draft actions onto DraftState transitions.
"""

from typing import Sequence

from charters.proposal import draft
from charters.proposal.draft import DraftState
from charters.proposal.schemas import (
    ClearAllAction,
    DraftAction,
    EditFinalNotesAction,
    ResetFinalNotesAction,
    SelectAllAction,
    SetBrokerMessageAction,
    SetClientEmailAction,
    SetClientNameAction,
    SetCurrencyAction,
    SetFinalNotesEnabledAction,
    SetLanguageAction,
    SetNoteAction,
    SetPriceAction,
    ToggleItineraryAction,
    ToggleSelectionAction,
)


def apply_action(
    state: DraftState,
    action: DraftAction,
    catalog_keys: Sequence[str],
) -> DraftState:
    """
    Apply one action to a draft.

    Args:
        state: Current draft
        action: Parsed action model
        catalog_keys: Keys of the session's catalog snapshot (for select_all)

    Returns:
        The next DraftState
    """
    if isinstance(action, SelectAllAction):
        return draft.select_all(state, catalog_keys)
    if isinstance(action, ClearAllAction):
        return draft.clear_all(state)
    if isinstance(action, ToggleSelectionAction):
        return draft.toggle_selection(state, action.key)
    if isinstance(action, SetPriceAction):
        return draft.set_price(state, action.key, action.value)
    if isinstance(action, SetNoteAction):
        return draft.set_note(state, action.key, action.value)
    if isinstance(action, SetLanguageAction):
        return draft.set_language(state, action.language)
    if isinstance(action, SetCurrencyAction):
        return draft.set_currency(state, action.currency)
    if isinstance(action, SetBrokerMessageAction):
        return draft.set_broker_message(state, action.message)
    if isinstance(action, SetFinalNotesEnabledAction):
        return draft.set_final_notes_enabled(state, action.enabled)
    if isinstance(action, EditFinalNotesAction):
        return draft.edit_final_notes(state, action.text)
    if isinstance(action, ResetFinalNotesAction):
        return draft.reset_final_notes_to_default(state)
    if isinstance(action, ToggleItineraryAction):
        return draft.toggle_itinerary(state, action.id)
    if isinstance(action, SetClientNameAction):
        return draft.set_client_name(state, action.name)
    if isinstance(action, SetClientEmailAction):
        return draft.set_client_email(state, action.email)

    # unknown action types leave the draft unchanged
    return state


def apply_actions(
    state: DraftState,
    actions: Sequence[DraftAction],
    catalog_keys: Sequence[str],
) -> DraftState:
    """Apply actions in order, returning the final state."""
    for action in actions:
        state = apply_action(state, action, catalog_keys)
    return state
