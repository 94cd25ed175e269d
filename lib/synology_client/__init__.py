from .client import SynologyClient
from .config_types import ConnectionSettings, TransportConfig
from .errors import BadResponseError, NetworkError, RequestTimeoutError, SynologyClientError
from .responses import NOT_LOGGED_IN, ApiFailure, ApiSuccess, ClientFailure, ConnectionFailure, Session

__all__ = [
    "SynologyClient",
    "ConnectionSettings",
    "TransportConfig",
    "SynologyClientError",
    "NetworkError",
    "RequestTimeoutError",
    "BadResponseError",
    "ApiSuccess",
    "ApiFailure",
    "ClientFailure",
    "ConnectionFailure",
    "Session",
    "NOT_LOGGED_IN",
]
