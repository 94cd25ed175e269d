"""Result values returned by every client operation.

Nothing here is raised: callers branch on the type (or on ``success``)
of what they get back.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Generic, Literal, TypeVar, Union

T = TypeVar("T")

NO_SUCH_METHOD_ERROR_CODE = 103
NO_PERMISSIONS_ERROR_CODE = 105
SESSION_TIMEOUT_ERROR_CODE = 106

AUTHORIZATION_ERROR_CODES = frozenset({NO_PERMISSIONS_ERROR_CODE, SESSION_TIMEOUT_ERROR_CODE})

ConnectionFailureType = Literal[
    "missing-config",
    "probable-wrong-protocol",
    "probable-wrong-url-or-unreachable",
    "timeout",
    "unknown",
]

NOT_LOGGED_IN = "not-logged-in"


@dataclass(frozen=True)
class ApiSuccess(Generic[T]):
    data: T
    success: Literal[True] = field(default=True, init=False)


@dataclass(frozen=True)
class ApiFailure:
    code: int
    errors: Any = None
    success: Literal[False] = field(default=False, init=False)


@dataclass(frozen=True)
class ClientFailure(ApiFailure):
    """An API-level failure annotated with the API group that produced it."""

    api_group: str = ""


@dataclass(frozen=True)
class ConnectionFailure:
    type: ConnectionFailureType
    error: BaseException | None = None

    @classmethod
    def missing_config(cls) -> "ConnectionFailure":
        return cls(type="missing-config")


@dataclass(frozen=True)
class Session:
    sid: str
    base_url: str
    session_name: str


ClientResult = Union[ApiSuccess[T], ClientFailure, ConnectionFailure]


def is_connection_failure(result: object) -> bool:
    return isinstance(result, ConnectionFailure)


def is_authorization_failure(result: object) -> bool:
    return isinstance(result, ApiFailure) and result.code in AUTHORIZATION_ERROR_CODES


def tag_failure(response: ApiFailure, api_group: str) -> ClientFailure:
    if isinstance(response, ClientFailure) and response.api_group == api_group:
        return response
    return ClientFailure(code=response.code, errors=response.errors, api_group=api_group)


def from_response(response: ApiSuccess[T] | ApiFailure, api_group: str) -> ApiSuccess[T] | ClientFailure:
    if response.success:
        return response
    return tag_failure(response, api_group)
