"""
Log Publishing Package

This package provides functionality for publishing generated diagnostic-log
batches to an Azure Event Hub on a fixed interval.
"""

from .config import Config
from .exceptions import ConfigurationError, PublishError
from .event_hub_client import EventHubClient
from .publish_loop import PublishLoop, LoopStats

__all__ = ['Config', 'ConfigurationError', 'PublishError', 'EventHubClient', 'PublishLoop', 'LoopStats']
