"""
Charter proposal service.

This package contains:
- shared/: Common infrastructure (configuration, logging, response envelope, dependencies)
- catalog/: Catalog and itinerary fetching and record normalization
- proposal/: Money parsing, draft state, validation, assembly and draft API
- relay/: Pass-through relay to the automation webhooks
"""

from charters.proposal.assembler import assemble
from charters.proposal.money import parse_money
from charters.proposal.validator import validate

__all__ = ["assemble", "parse_money", "validate"]
