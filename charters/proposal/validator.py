"""
Draft validation.

Checks run in a fixed order and the first failure wins. Validation never
raises; it returns an error value or None.
"""

import re
from dataclasses import dataclass
from typing import Optional, Sequence

from charters.proposal.draft import DraftState, ordered_selection
from charters.proposal.money import is_valid_amount, parse_money


# local@domain.tld, good enough for a UI check
EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


@dataclass(frozen=True)
class ProposalValidationError:
    """
    Why a draft cannot be submitted.

    Attributes:
        code: Machine-readable reason
        message: Human-readable message
        item_key: Offending catalog key, for per-item failures
    """

    code: str
    message: str
    item_key: Optional[str] = None


def is_valid_email(email: str) -> bool:
    """Empty email is valid (the field is optional)."""
    candidate = (email or "").strip()
    if not candidate:
        return True
    return EMAIL_PATTERN.match(candidate) is not None


def validate(
    state: DraftState,
    catalog_keys: Optional[Sequence[str]] = None,
) -> Optional[ProposalValidationError]:
    """
    Validate a draft before submission.

    Order:
    1. at least one item selected
    2. client email, if given, looks like an email
    3. every selected item has a price that parses to a positive amount
       (stops at the first offending key in catalog order)

    Args:
        state: Draft to check
        catalog_keys: Keys of the session's catalog snapshot; selected keys
            outside it are ignored. None checks the selection as-is.

    Returns:
        The first failing check, or None if the draft can be submitted
    """
    selected = ordered_selection(state, catalog_keys)
    if not selected:
        return ProposalValidationError(
            code="no_items_selected",
            message="You haven't selected any boats.",
        )

    if not is_valid_email(state.client_email):
        return ProposalValidationError(
            code="invalid_client_email",
            message="Client email is not valid.",
        )

    for key in selected:
        raw = (state.prices_by_key.get(key) or "").strip()
        if not raw:
            return ProposalValidationError(
                code="missing_price",
                message=f"Missing price for boat id={key}.",
                item_key=key,
            )
        if not is_valid_amount(parse_money(raw)):
            return ProposalValidationError(
                code="invalid_price",
                message=f"Invalid price for boat id={key}.",
                item_key=key,
            )

    return None
