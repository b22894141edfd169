from typing import Optional


class ConfigurationError(ValueError):
    """Start-up configuration is missing or malformed."""


class PublishError(Exception):
    """A batch could not be delivered to the Event Hub."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code
