# food_admin/errors.py
"""Errors raised by the backend client.

Every failure of a single request is terminal for that request: the client
never retries, callers decide what a failure means for them.
"""
from typing import Any, Optional


class FetchError(Exception):
    """Base class for a failed backend round trip."""

    reason = "unknown"

    def __init__(self, detail: str, resource: Optional[str] = None):
        super().__init__(detail)
        self.detail = detail
        self.resource = resource

    @property
    def message(self) -> str:
        return self.detail


class NetworkError(FetchError):
    """The request could not be sent or no response arrived."""

    reason = "network"


class HttpError(FetchError):
    """The backend answered with a non-2xx status."""

    reason = "http"

    def __init__(
        self,
        detail: str,
        status_code: int,
        resource: Optional[str] = None,
        server_message: Optional[str] = None,
        payload: Any = None,
    ):
        super().__init__(detail, resource=resource)
        self.status_code = status_code
        # text of the backend's {"error": ...} / {"message": ...} body, if any
        self.server_message = server_message
        self.payload = payload


class DecodeError(FetchError):
    """The response body is not valid JSON."""

    reason = "decode"
