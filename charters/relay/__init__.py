"""
Upstream relay for the automation webhooks.

Transparent pass-through: one POST per call, correlation id per call,
upstream status and body reflected verbatim.
"""

from charters.relay.correlation import new_correlation_id
from charters.relay.relay import RelayResult, UpstreamRelay

__all__ = ["RelayResult", "UpstreamRelay", "new_correlation_id"]
