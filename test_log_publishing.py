#!/usr/bin/env python3
"""
Tests for the Event Hub client, start-up configuration and the publish loop.
"""

import json
import random
import sys
from pathlib import Path
from unittest import mock

import pytest
from azure.eventhub import EventData, EventHubProducerClient
from azure.eventhub.exceptions import EventHubError

# Add src to Python path
sys.path.insert(0, str(Path(__file__).parent / 'src'))

from log_publishing import Config, ConfigurationError, EventHubClient, PublishError, PublishLoop
from synthetic_logs import BatchBuilder

CONNECTION_STRING = (
    "Endpoint=sb://myns.servicebus.windows.net/;"
    "SharedAccessKeyName=RootManageSharedAccessKey;"
    "SharedAccessKey=c2VjcmV0a2V5PT0="
)


def make_client():
    producer = mock.MagicMock(spec=EventHubProducerClient)
    producer.eventhub_name = Config.EVENT_HUB_NAME
    event_batch = mock.MagicMock()
    producer.create_batch.return_value = event_batch
    return EventHubClient(producer), producer, event_batch


# Configuration

def test_config_from_env_requires_connection_string():
    with pytest.raises(ConfigurationError):
        Config.from_env({})
    with pytest.raises(ConfigurationError):
        Config.from_env({Config.CONNECTION_STRING_ENV_VAR: "   "})


def test_config_from_env_loads_connection_string():
    config = Config.from_env({Config.CONNECTION_STRING_ENV_VAR: CONNECTION_STRING})
    assert config.connection_string == CONNECTION_STRING
    assert config.EVENT_HUB_NAME == "insights-logs-e2ediagnostics"
    assert config.ENABLE_THIRD_PARTY_LOGS is False


def test_from_connection_string_builds_producer():
    with mock.patch.object(EventHubProducerClient, "from_connection_string") as factory:
        client = EventHubClient.from_connection_string(CONNECTION_STRING, Config.EVENT_HUB_NAME, retry_total=0)

    factory.assert_called_once_with(CONNECTION_STRING, eventhub_name=Config.EVENT_HUB_NAME, retry_total=0)
    assert client.producer is factory.return_value


def test_from_connection_string_with_real_producer():
    client = EventHubClient.from_connection_string(CONNECTION_STRING, Config.EVENT_HUB_NAME)
    assert client.event_hub_name == "insights-logs-e2ediagnostics"
    client.close()


def test_connection_string_parse_error_becomes_configuration_error():
    with mock.patch.object(EventHubProducerClient, "from_connection_string",
                           side_effect=ValueError("Connection string is either blank or malformed.")):
        with pytest.raises(ConfigurationError) as excinfo:
            EventHubClient.from_connection_string("garbage", Config.EVENT_HUB_NAME)
    assert "malformed" in str(excinfo.value)


@pytest.mark.parametrize("connection_string", [
    "garbage",
    "Endpoint=sb://myns.servicebus.windows.net/;SharedAccessKeyName=name",
])
def test_malformed_connection_string_fails_fast(connection_string):
    with pytest.raises(ConfigurationError):
        EventHubClient.from_connection_string(connection_string, Config.EVENT_HUB_NAME)


def test_empty_hub_name_fails_fast():
    with pytest.raises(ConfigurationError):
        EventHubClient.from_connection_string(CONNECTION_STRING, "")


# Sending

def test_send_adds_payload_to_batch_and_sends():
    client, producer, event_batch = make_client()
    client.send(b'{"records":[]}')

    producer.create_batch.assert_called_once_with()
    (event,), _ = event_batch.add.call_args
    assert isinstance(event, EventData)
    assert event.body_as_str() == '{"records":[]}'
    producer.send_batch.assert_called_once_with(event_batch)


def test_send_raises_publish_error_on_event_hub_error():
    client, producer, _ = make_client()
    producer.send_batch.side_effect = EventHubError("Unauthorized access")
    with pytest.raises(PublishError) as excinfo:
        client.send(b"{}")
    assert "Unauthorized" in str(excinfo.value)
    assert isinstance(excinfo.value.__cause__, EventHubError)


def test_send_raises_publish_error_when_batch_rejects_event():
    client, _, event_batch = make_client()
    event_batch.add.side_effect = ValueError("EventDataBatch has reached its size limit")
    with pytest.raises(PublishError):
        client.send(b"{}")


def test_client_context_manager_closes_producer():
    client, producer, _ = make_client()
    with client:
        pass
    producer.close.assert_called_once()


# Publish loop

class FakePublisher:
    def __init__(self, failures=()):
        self.failures = list(failures)
        self.sent = []

    def send(self, body):
        if self.failures and self.failures.pop(0):
            raise PublishError("quota exceeded", status_code=403)
        self.sent.append(body)


def test_loop_survives_publish_failure():
    publisher = FakePublisher(failures=[True, False, False])
    sleep = mock.Mock()
    loop = PublishLoop(BatchBuilder(rng=random.Random(0)), publisher, 2, sleep=sleep)

    stats = loop.run(max_ticks=3)

    assert (stats.ticks, stats.sent, stats.failed) == (3, 2, 1)
    assert sleep.call_args_list == [mock.call(2)] * 3
    for body in publisher.sent:
        assert len(json.loads(body)["records"]) == 3


def test_loop_logs_publish_failure(caplog):
    loop = PublishLoop(BatchBuilder(rng=random.Random(0)), FakePublisher(failures=[True]), 2, sleep=mock.Mock())
    with caplog.at_level("INFO", logger="publish-loop"):
        assert loop.tick() is False
    assert "quota exceeded" in caplog.text
    assert "Sending message" in caplog.text


def test_builder_failure_abandons_tick_without_sending():
    builder = mock.Mock()
    builder.build_batch.side_effect = [RuntimeError("boom"), BatchBuilder(rng=random.Random(1)).build_batch()]
    publisher = FakePublisher()
    loop = PublishLoop(builder, publisher, 2, sleep=mock.Mock())

    stats = loop.run(max_ticks=2)

    assert (stats.ticks, stats.sent, stats.failed) == (2, 1, 1)
    assert len(publisher.sent) == 1


def test_keyboard_interrupt_stops_loop():
    sleep = mock.Mock(side_effect=[None, KeyboardInterrupt])
    publisher = FakePublisher()
    loop = PublishLoop(BatchBuilder(rng=random.Random(0)), publisher, 2, sleep=sleep)

    stats = loop.run()

    assert stats.ticks == 2
    assert len(publisher.sent) == 2
