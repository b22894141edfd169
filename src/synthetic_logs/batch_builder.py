"""
Batch Builder

Main interface for building one batch of correlated diagnostic-log records.
"""

import logging
import random
from datetime import datetime, timezone
from typing import Callable, List, Optional, Tuple

from .candidates import Candidates, DEFAULT_CANDIDATES
from .correlation import build_correlation_id, new_prefix
from .records import (
    BatchEnvelope,
    Record,
    generate_d2c_record,
    generate_egress_record,
    generate_ingress_record,
    generate_third_party_d2c_record,
    generate_third_party_ingress_record,
)

logger = logging.getLogger("batch-builder")


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class BatchBuilder:
    """
    Builds batches of synthetic IoT Hub diagnostic logs.

    Per batch:
    - One shared trace prefix
    - D2C -> Ingress -> Egress chain, each hop with its own span ID
    - Optional third-party D2C -> Ingress chain under the same prefix
    """

    def __init__(self, candidates: Candidates = DEFAULT_CANDIDATES,
                 rng: Optional[random.Random] = None,
                 clock: Optional[Callable[[], datetime]] = None,
                 include_third_party: bool = False):
        self.candidates = candidates
        self.rng = rng if rng is not None else random.Random()
        self.clock = clock or utc_now
        self.include_third_party = include_third_party

    def build_batch(self) -> BatchEnvelope:
        """Build one envelope with 3 records, or 5 with third-party logs enabled."""
        prefix = new_prefix(self.rng)

        records, device_name = self._generate_hub_chain(prefix)
        if self.include_third_party:
            records.extend(self._generate_third_party_chain(prefix, device_name))

        logger.debug(f"Built batch {prefix} with {len(records)} records")
        return BatchEnvelope(records=records)

    def _generate_hub_chain(self, prefix: str) -> Tuple[List[Record], str]:
        """D2C -> Ingress -> Egress, each hop's parentSpanId is the previous hop's span."""
        d2c_correlation_id, d2c_span_id = build_correlation_id(prefix, rng=self.rng)
        device_name = self._pick(self.candidates.device_names)
        d2c_record = generate_d2c_record(d2c_correlation_id, device_name, self.rng, self.clock())

        ingress_correlation_id, ingress_span_id = build_correlation_id(prefix, rng=self.rng)
        ingress_record = generate_ingress_record(
            ingress_correlation_id, d2c_span_id, self.rng, self.clock()
        )

        egress_correlation_id, _ = build_correlation_id(prefix, rng=self.rng)
        endpoint_name = self._pick(self.candidates.endpoint_names)
        egress_record = generate_egress_record(
            egress_correlation_id, ingress_span_id, endpoint_name, self.rng, self.clock()
        )

        return [d2c_record, ingress_record, egress_record], device_name

    def _generate_third_party_chain(self, prefix: str, device_name: str) -> List[Record]:
        """Independent D2C -> Ingress chain for a third-party service, no egress."""
        d2c_correlation_id, d2c_span_id = build_correlation_id(prefix, rng=self.rng)
        pair_index = self.rng.randrange(len(self.candidates.third_party_service_names))
        service_name, endpoint_name = self.candidates.third_party_pair(pair_index)
        d2c_record = generate_third_party_d2c_record(
            d2c_correlation_id, device_name, service_name, self.rng, self.clock()
        )

        ingress_correlation_id, _ = build_correlation_id(prefix, rng=self.rng)
        ingress_record = generate_third_party_ingress_record(
            ingress_correlation_id, d2c_span_id, service_name, endpoint_name,
            self.rng, self.clock()
        )

        return [d2c_record, ingress_record]

    def _pick(self, names) -> str:
        return names[self.rng.randrange(len(names))]


def build_batch(include_third_party: bool = False, seed: Optional[int] = None) -> BatchEnvelope:
    """
    Convenience function to build a single batch.

    Args:
        include_third_party: Append the third-party chain
        seed: Seed for a fresh pseudo-random generator (optional)

    Returns:
        The generated batch envelope
    """
    builder = BatchBuilder(rng=random.Random(seed), include_third_party=include_third_party)
    return builder.build_batch()
