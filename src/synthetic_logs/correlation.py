"""
Correlation ID Builder

Builds the trace prefix, per-hop span IDs and the `00-<prefix>-<span>-01`
correlation strings that link the records of one batch together.
"""

import random
import re
from typing import Optional, Tuple

from .hex_encoder import encode

PREFIX_BYTES = 16
SPAN_ID_BYTES = 8

CORRELATION_ID_PATTERN = re.compile(r'^00-([0-9a-f]{32})-([0-9a-f]{16})-01$')


def new_prefix(rng: random.Random) -> str:
    """Generate a batch-wide trace prefix (32 hex chars)."""
    return encode(rng.randbytes(PREFIX_BYTES))


def new_span_id(rng: random.Random) -> str:
    """Generate a span ID for one hop (16 hex chars)."""
    return encode(rng.randbytes(SPAN_ID_BYTES))


def build_correlation_id(prefix: str, span_id: Optional[str] = None,
                         rng: Optional[random.Random] = None) -> Tuple[str, str]:
    """
    Build a correlation ID for one hop.

    Args:
        prefix: Batch-wide trace prefix
        span_id: Span ID to use; a fresh one is drawn from rng when omitted
        rng: Pseudo-random generator, required when span_id is omitted

    Returns:
        (correlation_id, span_id) - the span ID becomes the next hop's parentSpanId
    """
    if span_id is None:
        if rng is None:
            raise ValueError("rng must be specified when span_id is not supplied")
        span_id = new_span_id(rng)

    return f"00-{prefix}-{span_id}-01", span_id


def parse_correlation_id(correlation_id: str) -> Tuple[str, str]:
    """Split a correlation ID into (prefix, span_id)."""
    match = CORRELATION_ID_PATTERN.match(correlation_id)
    if not match:
        raise ValueError(f"Invalid correlation ID: {correlation_id}")
    return match.group(1), match.group(2)
