from __future__ import annotations


class SynologyClientError(Exception):
    """Base client error."""


class NetworkError(SynologyClientError):
    """Host unreachable, connection refused, DNS or TLS failure."""


class RequestTimeoutError(SynologyClientError):
    """The request did not complete within its timeout."""


class BadResponseError(SynologyClientError):
    def __init__(self, status_code: int, message: str, details: str | None = None):
        super().__init__(message)
        self.status_code = status_code
        self.details = details
