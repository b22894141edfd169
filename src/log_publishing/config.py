import os
from typing import Mapping, Optional

from .exceptions import ConfigurationError


class Config:
    """Centralized configuration management"""
    CONNECTION_STRING_ENV_VAR = "E2E_DIAGNOSTICS_EVENT_HUB_CONNECTION_STRING"
    EVENT_HUB_NAME = "insights-logs-e2ediagnostics"
    SEND_INTERVAL_SECONDS = 2
    SEND_RETRY_TOTAL = 0  # the send interval is the retry cadence
    ENABLE_THIRD_PARTY_LOGS = False

    def __init__(self, connection_string: str):
        self.connection_string = connection_string

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Config":
        """Load the connection string once, failing fast when it is absent."""
        environ = os.environ if environ is None else environ
        connection_string = environ.get(cls.CONNECTION_STRING_ENV_VAR, "").strip()
        if not connection_string:
            raise ConfigurationError(
                f"Environment variable {cls.CONNECTION_STRING_ENV_VAR} is not set"
            )
        return cls(connection_string)
