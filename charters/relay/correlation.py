"""
Correlation id generation.

One capability, two implementations: a cryptographically random token
and a coarse millisecond-timestamp fallback for platforms without a
secure random source. The implementation is chosen once at import time.
"""

import logging
import os
import time
import uuid
from typing import Callable


logger = logging.getLogger(__name__)

CorrelationIdFactory = Callable[[], str]


def secure_correlation_id() -> str:
    """Random uuid4 token."""
    return str(uuid.uuid4())


def coarse_correlation_id() -> str:
    """Millisecond timestamp token. Not unique under concurrent calls."""
    return str(int(time.time() * 1000))


def select_correlation_id_factory() -> CorrelationIdFactory:
    """
    Pick the id implementation for this process.

    Returns:
        secure_correlation_id when the OS provides randomness,
        coarse_correlation_id otherwise
    """
    try:
        os.urandom(1)
    except NotImplementedError:
        logger.warning("No secure random source available; using time-based correlation ids")
        return coarse_correlation_id
    return secure_correlation_id


new_correlation_id: CorrelationIdFactory = select_correlation_id_factory()
