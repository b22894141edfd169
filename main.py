#!/usr/bin/env python3
"""
IoT Hub Diagnostic Log Sender

Fabricates correlated IoT Hub diagnostic-log records (D2C -> Ingress -> Egress)
and publishes one batch to the `insights-logs-e2ediagnostics` Event Hub
every few seconds, so dashboards and alerting have realistic telemetry to
work with in dev/test environments.

Requires:
    E2E_DIAGNOSTICS_EVENT_HUB_CONNECTION_STRING
        Endpoint=sb://<namespace>.servicebus.windows.net/;SharedAccessKeyName=<name>;SharedAccessKey=<key>

Usage:
    python main.py
"""

import sys
import os
import logging

# Add src to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), 'src'))

from log_publishing import Config, ConfigurationError, EventHubClient, PublishLoop
from synthetic_logs import BatchBuilder

# Setup logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger("main-sender")


def create_publisher(config: Config) -> EventHubClient:
    return EventHubClient.from_connection_string(
        config.connection_string,
        config.EVENT_HUB_NAME,
        retry_total=config.SEND_RETRY_TOTAL
    )


def main() -> int:
    try:
        config = Config.from_env()
        publisher = create_publisher(config)
    except ConfigurationError as e:
        logger.error(f"Configuration error: {e}")
        return 1

    builder = BatchBuilder(include_third_party=config.ENABLE_THIRD_PARTY_LOGS)
    loop = PublishLoop(builder, publisher, config.SEND_INTERVAL_SECONDS)

    print("Press Ctrl-C to stop the sender process")
    logger.info(f"Publishing to Event Hub '{publisher.event_hub_name}' on {publisher.host}")

    with publisher:
        loop.run()

    return 0


if __name__ == "__main__":
    sys.exit(main())
