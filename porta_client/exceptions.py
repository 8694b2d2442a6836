"""
Exceptions raised by Porta Client.

Transport failures (DNS, TLS, refused connections, timeouts) are not wrapped:
they surface as the ``requests.exceptions.RequestException`` raised by the
underlying session.
"""

from typing import Optional


class PortaClientError(Exception):
    """Base exception for all Porta Client errors."""

    def __init__(self, message: str, details: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def __str__(self) -> str:
        return self.message


class ConfigurationError(PortaClientError):
    """Invalid admin portal URL, scheme or client settings."""
    pass


class RequestBuildError(PortaClientError):
    """The request could not be prepared from the resolved URL."""
    pass


class APIError(PortaClientError):
    """
    Structured error for any unsuccessful API call.

    Raised when the response status differs from the one the endpoint
    answers with on success, or when a body fails to decode.
    """

    def __init__(self, status_code: int, reason: str):
        super().__init__(
            f"error calling 3scale system - reason: {reason} - code: {status_code}",
            details=reason,
        )
        self.status_code = status_code
        self.reason = reason

    @property
    def code(self) -> int:
        """HTTP status code of the failed call."""
        return self.status_code
