"""Persistence gateway exceptions."""


class GatewayError(Exception):
    """Base exception for persistence gateway errors."""
    pass


class GatewayConnectionError(GatewayError):
    """Raised when unable to reach the trips API."""
    pass


class GatewayTimeoutError(GatewayError):
    """Raised when a trips API request times out."""
    pass


class GatewayResponseError(GatewayError):
    """Raised when the trips API answers with an error or malformed body."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
