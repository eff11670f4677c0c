"""Common exceptions for the allegro-api package."""

from typing import Any, Dict, Optional


class AllegroAPIError(Exception):
    """Base class for errors raised by the Allegro clients."""


class InvalidParameter(AllegroAPIError, ValueError):
    """Raised when a client is configured with an unusable value (e.g. country code)."""


class InvalidArgument(AllegroAPIError, TypeError):
    """Raised when a WebAPI action is called with malformed arguments."""


class RemoteApiError(AllegroAPIError):
    """Raised when the REST API returns an error response."""

    def __init__(
        self,
        message: str,
        status_code: int = 0,
        response: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.response = response
