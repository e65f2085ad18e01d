"""
Schemas for proposal drafting and submission.

Defines the submission payload sent to the automation backend, the draft
actions accepted by the API, and the API request/response models.
"""

from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, Field

from charters.catalog.schemas import CatalogItemView, Itinerary
from charters.proposal.final_notes import Language


# =============================================================================
# Submission Payload
# =============================================================================


class _Frozen(BaseModel):
    class Config:
        frozen = True
        populate_by_name = True


class ProposalBoat(_Frozen):
    """One priced vessel in a proposal."""

    id: str = Field(description="Catalog key of the vessel")
    price: float = Field(description="Parsed price")
    currency: str = Field(description="Currency code")
    price_note: Optional[str] = Field(default=None, alias="priceNote")


class ProposalClient(_Frozen):
    """Client identity, both fields optional."""

    name: Optional[str] = None
    email: Optional[str] = None


class ProposalCta(_Frozen):
    """Call-to-action block: broker intro and closing notes."""

    message_from_broker: str = Field(default="", alias="messageFromBroker")
    client_note_enabled: bool = Field(default=True, alias="clientNoteEnabled")
    final_notes: Optional[str] = Field(default=None, alias="finalNotes")


class ProposalItinerary(_Frozen):
    id: str


class ProposalMeta(_Frozen):
    """Provenance of a submission attempt."""

    source: str
    proposal_id: str = Field(alias="proposalId")
    timestamp: str = Field(description="ISO 8601 UTC timestamp")


class ProposalPayload(_Frozen):
    """
    Submission contract for the proposal webhook.

    Built fresh for every submit attempt and never modified afterwards.
    Serialize with ``model_dump(by_alias=True)``.
    """

    language: str
    client: ProposalClient
    boats: List[ProposalBoat]
    cta: ProposalCta
    itineraries: List[ProposalItinerary] = Field(default_factory=list)
    meta: ProposalMeta


# =============================================================================
# Draft Actions
# =============================================================================


class SelectAllAction(BaseModel):
    type: Literal["select_all"]


class ClearAllAction(BaseModel):
    type: Literal["clear_all"]


class ToggleSelectionAction(BaseModel):
    type: Literal["toggle_selection"]
    key: str = Field(description="Catalog key to toggle")


class SetPriceAction(BaseModel):
    type: Literal["set_price"]
    key: str
    value: str = Field(description="Raw price as typed, e.g. '1.500,00'")


class SetNoteAction(BaseModel):
    type: Literal["set_note"]
    key: str
    value: str


class SetLanguageAction(BaseModel):
    type: Literal["set_language"]
    language: Language


class SetCurrencyAction(BaseModel):
    type: Literal["set_currency"]
    currency: str


class SetBrokerMessageAction(BaseModel):
    type: Literal["set_broker_message"]
    message: str


class SetFinalNotesEnabledAction(BaseModel):
    type: Literal["set_final_notes_enabled"]
    enabled: bool


class EditFinalNotesAction(BaseModel):
    type: Literal["edit_final_notes"]
    text: str


class ResetFinalNotesAction(BaseModel):
    type: Literal["reset_final_notes"]


class ToggleItineraryAction(BaseModel):
    type: Literal["toggle_itinerary"]
    id: str


class SetClientNameAction(BaseModel):
    type: Literal["set_client_name"]
    name: str


class SetClientEmailAction(BaseModel):
    type: Literal["set_client_email"]
    email: str


DraftAction = Annotated[
    Union[
        SelectAllAction,
        ClearAllAction,
        ToggleSelectionAction,
        SetPriceAction,
        SetNoteAction,
        SetLanguageAction,
        SetCurrencyAction,
        SetBrokerMessageAction,
        SetFinalNotesEnabledAction,
        EditFinalNotesAction,
        ResetFinalNotesAction,
        ToggleItineraryAction,
        SetClientNameAction,
        SetClientEmailAction,
    ],
    Field(discriminator="type"),
]


# =============================================================================
# API Request/Response Models
# =============================================================================


class ApplyActionsRequest(BaseModel):
    """Request to apply one or more actions to a draft, in order."""

    actions: List[DraftAction] = Field(min_length=1, description="Actions to apply")


class StartDraftResponse(BaseModel):
    """Response after starting a draft session."""

    session_id: str = Field(description="Unique session identifier")
    items: List[CatalogItemView] = Field(description="Keyed catalog snapshot")
    itineraries: List[Itinerary] = Field(description="Available itineraries")
    draft: Dict[str, Any] = Field(description="Draft view")


class DraftResponse(BaseModel):
    """Current state of a draft session."""

    session_id: str
    draft: Dict[str, Any]


class ValidationResponse(BaseModel):
    """Outcome of validating a draft without submitting it."""

    valid: bool
    error: Optional[str] = None
    code: Optional[str] = None
    item_key: Optional[str] = Field(default=None, alias="itemKey")

    class Config:
        populate_by_name = True

