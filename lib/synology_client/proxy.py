from __future__ import annotations

import logging
from typing import Any, Awaitable, Callable

from .classify import connection_failure_from
from .endpoints import Endpoint
from .responses import (
    ApiFailure,
    ApiSuccess,
    ClientResult,
    ConnectionFailure,
    from_response,
    is_authorization_failure,
    is_connection_failure,
    tag_failure,
)
from .session import SessionManager
from .settings import SettingsHolder
from .transport import Transport

log = logging.getLogger(__name__)

ProxiedCall = Callable[..., Awaitable[ClientResult]]


def should_retry(result: ConnectionFailure | ApiFailure) -> bool:
    """Failures that warrant dropping the session and trying once more.

    Missing settings are never retried; they cannot fix themselves.
    """
    if is_connection_failure(result):
        return result.type != "missing-config"
    return is_authorization_failure(result)


class CallProxy:
    """Wraps raw endpoint functions into calls that never raise.

    Authenticated calls log in on demand, restart from scratch when the
    settings version moves underneath them, and retry at most once after
    dropping a session that looks expired. A stale in-flight request is not
    cancelled; its result is simply thrown away.
    """

    def __init__(self, settings: SettingsHolder, sessions: SessionManager, transport: Transport):
        self._settings = settings
        self._sessions = sessions
        self._t = transport

    def wrap(self, endpoint: Endpoint) -> ProxiedCall:
        if endpoint.requires_auth:
            async def call(options: dict[str, Any] | None = None) -> ClientResult:
                return await self.invoke(endpoint, options)
        else:
            async def call(options: dict[str, Any] | None = None) -> ClientResult:
                return await self.invoke_without_auth(endpoint, options)

        call.__name__ = endpoint.attr_name
        call.__qualname__ = f"{type(self).__name__}.{endpoint.attr_name}"
        call.__doc__ = f"{endpoint.name} ({endpoint.api_group})"
        return call

    async def invoke(self, endpoint: Endpoint, options: dict[str, Any] | None, *, allow_retry: bool = True) -> ClientResult:
        while True:
            version_at_init = self._settings.version
            try:
                login = await self._sessions.login()
                if self._settings.version != version_at_init:
                    log.debug("%s: settings changed during login, restarting", endpoint.name)
                    continue
                if not isinstance(login, ApiSuccess):
                    return await self._retry_or_surface(endpoint, options, login, login, allow_retry)

                session = login.data
                response = await endpoint.fn(self._t, session.base_url, session.sid, options)
                if self._settings.version != version_at_init:
                    log.debug("%s: settings changed during call, restarting", endpoint.name)
                    continue
                if response.success:
                    return response
                return await self._retry_or_surface(endpoint, options, response, login, allow_retry)
            except Exception as e:
                if self._settings.version != version_at_init:
                    log.debug("%s: settings changed before call failed, restarting", endpoint.name)
                    continue
                return connection_failure_from(e)

    async def _retry_or_surface(
            self,
            endpoint: Endpoint,
            options: dict[str, Any] | None,
            failure: ConnectionFailure | ApiFailure,
            login: object,
            allow_retry: bool,
    ) -> ClientResult:
        if allow_retry and should_retry(failure):
            log.debug("%s: retrying once with a fresh session after %r", endpoint.name, failure)
            self._sessions.discard(login)
            return await self.invoke(endpoint, options, allow_retry=False)
        if isinstance(failure, ConnectionFailure):
            return failure
        return tag_failure(failure, endpoint.api_group)

    async def invoke_without_auth(self, endpoint: Endpoint, options: dict[str, Any] | None) -> ClientResult:
        settings = self._settings.get_validated()
        if settings is None:
            return ConnectionFailure.missing_config()
        try:
            response = await endpoint.fn(self._t, settings.base_url, options)
        except Exception as e:
            return connection_failure_from(e)
        return from_response(response, endpoint.api_group)
