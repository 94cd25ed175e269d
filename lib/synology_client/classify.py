from __future__ import annotations

from .errors import BadResponseError, NetworkError, RequestTimeoutError
from .responses import ConnectionFailure


def connection_failure_from(error: BaseException) -> ConnectionFailure:
    """Map a transport exception to a connection failure.

    A 400 usually means the server choked on the request itself, which in
    practice is an http/https mismatch with the configured port.
    """
    if isinstance(error, BadResponseError) and error.status_code == 400:
        return ConnectionFailure(type="probable-wrong-protocol", error=error)
    if isinstance(error, NetworkError):
        return ConnectionFailure(type="probable-wrong-url-or-unreachable", error=error)
    if isinstance(error, RequestTimeoutError):
        return ConnectionFailure(type="timeout", error=error)
    return ConnectionFailure(type="unknown", error=error)
