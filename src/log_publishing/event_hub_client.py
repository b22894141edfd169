import logging
from typing import Optional

from azure.eventhub import EventData, EventHubProducerClient
from azure.eventhub.exceptions import EventHubError

from .exceptions import ConfigurationError, PublishError

logger = logging.getLogger("event-hub-client")


class EventHubClient:
    """Sends serialized batches to one Event Hub, one event per batch."""

    def __init__(self, producer: EventHubProducerClient):
        self.producer = producer

    @classmethod
    def from_connection_string(cls, connection_string: str, event_hub_name: str,
                               **kwargs) -> "EventHubClient":
        """Create a client from an `Endpoint=sb://...;SharedAccessKeyName=...;SharedAccessKey=...` string"""
        if not event_hub_name:
            raise ConfigurationError("Event Hub name must not be empty")

        try:
            producer = EventHubProducerClient.from_connection_string(
                connection_string,
                eventhub_name=event_hub_name,
                **kwargs
            )
        except ValueError as e:
            raise ConfigurationError(f"Invalid Event Hub connection string: {e}") from e

        return cls(producer)

    @property
    def event_hub_name(self) -> str:
        return self.producer.eventhub_name

    @property
    def host(self) -> Optional[str]:
        return getattr(self.producer, "fully_qualified_namespace", None)

    def send(self, body: bytes) -> None:
        """Send one event; raises PublishError on transport, auth or quota failures."""
        logger.debug(f"Sending {len(body)} bytes to {self.event_hub_name}")

        try:
            event_batch = self.producer.create_batch()
            event_batch.add(EventData(body))
            self.producer.send_batch(event_batch)
        except EventHubError as e:
            raise PublishError(f"Event Hub send failed: {e}") from e
        except ValueError as e:
            # EventDataBatch.add rejects events larger than the batch size limit
            raise PublishError(f"Event rejected by batch: {e}") from e

        logger.debug("Event Hub accepted message")

    def close(self) -> None:
        self.producer.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()
