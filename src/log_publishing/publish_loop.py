"""
Publish Loop - builds one batch per tick and hands it to the publisher
"""

import logging
import time
import uuid
from dataclasses import dataclass
from typing import Callable, Optional

from synthetic_logs import BatchBuilder

from .exceptions import PublishError

logger = logging.getLogger("publish-loop")


@dataclass
class LoopStats:
    ticks: int = 0
    sent: int = 0
    failed: int = 0


class PublishLoop:
    """
    Fixed-interval sender.

    A failed tick never stops the loop; the next tick starts after the
    normal interval.
    """

    def __init__(self, builder: BatchBuilder, publisher, interval_seconds: float,
                 sleep: Callable[[float], None] = time.sleep):
        self.builder = builder
        self.publisher = publisher
        self.interval_seconds = interval_seconds
        self.sleep = sleep
        self.stats = LoopStats()

    def tick(self) -> bool:
        """Build, serialize and send one batch. Returns True when the send succeeded."""
        self.stats.ticks += 1
        message_id = uuid.uuid4()
        logger.info(f"[{self.stats.ticks}] Sending message: {message_id}")

        try:
            payload = self.builder.build_batch().to_bytes()
            logger.debug(f"[{self.stats.ticks}] Payload size: {len(payload)} bytes")
            self.publisher.send(payload)
        except PublishError as e:
            self.stats.failed += 1
            logger.error(f"[{self.stats.ticks}] Exception: {e}")
            return False
        except Exception:
            self.stats.failed += 1
            logger.exception(f"[{self.stats.ticks}] Tick abandoned")
            return False

        self.stats.sent += 1
        return True

    def run(self, max_ticks: Optional[int] = None) -> LoopStats:
        """Run until interrupted, or for max_ticks ticks."""
        try:
            while max_ticks is None or self.stats.ticks < max_ticks:
                self.tick()
                self.sleep(self.interval_seconds)
        except KeyboardInterrupt:
            logger.info("Interrupted, stopping sender")

        logger.info(f"Sent {self.stats.sent} of {self.stats.ticks} batches ({self.stats.failed} failed)")
        return self.stats
