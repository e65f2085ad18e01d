"""
Proposal drafting and submission.

Draft state transitions, price parsing, validation and payload assembly.
"""

from charters.proposal.draft import DraftState, initial_state
from charters.proposal.schemas import ProposalPayload

__all__ = ["DraftState", "ProposalPayload", "initial_state"]
