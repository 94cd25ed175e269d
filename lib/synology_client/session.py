"""Single-flight login and best-effort logout.

The cached login is an ``asyncio.Task`` held in one slot. Every caller awaiting
it gets the same resolved value, so concurrent calls never issue duplicate
login requests. The slot is only ever written from synchronous code paths,
which keeps "clear, then await" free of interleavings.
"""
from __future__ import annotations

import asyncio
import enum
import logging
from typing import Union

from . import endpoints
from .classify import connection_failure_from
from .errors import BadResponseError
from .responses import (
    NO_SUCH_METHOD_ERROR_CODE,
    NOT_LOGGED_IN,
    ApiSuccess,
    ClientFailure,
    ClientResult,
    ConnectionFailure,
    Session,
    from_response,
    tag_failure,
)
from .settings import SettingsHolder
from .transport import Transport

log = logging.getLogger(__name__)

# Lowest Auth version that hands out a sid. DSM 7 claims to support it but
# answers 103, so that case gets one more attempt at the next version.
LOGIN_MIN_VERSION = 2

LoginResult = Union[ApiSuccess[Session], ClientFailure, ConnectionFailure]


class SessionState(str, enum.Enum):
    NO_SESSION = "no-session"
    LOGGING_IN = "logging-in"
    AUTHENTICATED = "authenticated"
    FAILED = "failed"


class SessionManager:
    def __init__(self, settings: SettingsHolder, transport: Transport):
        self._settings = settings
        self._t = transport
        self._pending: asyncio.Task[LoginResult] | None = None
        self._background: set[asyncio.Task] = set()

    @property
    def state(self) -> SessionState:
        pending = self._pending
        if pending is None or pending.cancelled():
            return SessionState.NO_SESSION
        if not pending.done():
            return SessionState.LOGGING_IN
        if isinstance(pending.result(), ApiSuccess):
            return SessionState.AUTHENTICATED
        return SessionState.FAILED

    async def login(self, *, timeout: float | None = None) -> LoginResult:
        """Return the shared login result, starting a login if none is cached.

        ``timeout`` only applies when this call starts the login; callers that
        join an in-flight login share whatever timeout it was started with.
        """
        settings = self._settings.get_validated()
        if settings is None:
            return ConnectionFailure.missing_config()
        if self._pending is None or self._pending.cancelled():
            self._pending = asyncio.ensure_future(self._login(settings, timeout))
        return await asyncio.shield(self._pending)

    async def _login(self, settings, timeout: float | None) -> LoginResult:
        credentials = {"account": settings.account, "passwd": settings.passwd, "session": settings.session}
        try:
            log.debug("logging in to %s as %s", settings.base_url, settings.account)
            response = await endpoints.auth_login(
                self._t, settings.base_url, version=LOGIN_MIN_VERSION, timeout=timeout, **credentials
            )
            if not response.success and response.code == NO_SUCH_METHOD_ERROR_CODE:
                log.debug("login v%s not supported, retrying at v%s", LOGIN_MIN_VERSION, LOGIN_MIN_VERSION + 1)
                response = await endpoints.auth_login(
                    self._t, settings.base_url, version=LOGIN_MIN_VERSION + 1, timeout=timeout, **credentials
                )
        except Exception as e:
            return connection_failure_from(e)

        if not response.success:
            log.debug("login rejected with code %s", response.code)
            return tag_failure(response, endpoints.AUTH.name)
        sid = response.data.get("sid") if isinstance(response.data, dict) else None
        if not sid:
            return ConnectionFailure(type="unknown", error=BadResponseError(200, "login returned no sid"))
        return ApiSuccess(data=Session(sid=str(sid), base_url=settings.base_url, session_name=settings.session))

    def discard(self, stale: object) -> None:
        """Drop the cached login if it still resolves to ``stale``.

        A concurrent call may already have replaced it with a fresh login,
        which must survive.
        """
        pending = self._pending
        if pending is None or not pending.done():
            return
        if pending.cancelled() or pending.result() is stale:
            log.debug("discarding cached session")
            self._pending = None

    def detach(self) -> asyncio.Task[LoginResult] | None:
        pending, self._pending = self._pending, None
        return pending

    async def invalidate(self) -> ClientResult | str:
        """Log out the current session. BEST EFFORT.

        The cached login is dropped before anything is awaited, so the next
        call always logs in again, even while this logout is still running.
        The returned value is informational only; it has no bearing on later
        calls and may not reflect the session state by the time it resolves.
        """
        return await self._logout(self.detach())

    def invalidate_in_background(self) -> None:
        pending = self.detach()
        if pending is None:
            return
        try:
            task = asyncio.get_running_loop().create_task(self._logout(pending))
        except RuntimeError:
            log.debug("no running event loop, dropping session without logout")
            return
        self._background.add(task)
        task.add_done_callback(self._background_done)

    def _background_done(self, task: asyncio.Task) -> None:
        self._background.discard(task)
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            log.warning("background logout failed", exc_info=error)
            return
        log.debug("background logout finished: %r", task.result())

    async def _logout(self, pending: asyncio.Task[LoginResult] | None) -> ClientResult | str:
        if pending is None:
            return NOT_LOGGED_IN
        try:
            login = await asyncio.shield(pending)
        except asyncio.CancelledError:
            if not pending.cancelled():
                raise
            return NOT_LOGGED_IN
        if not isinstance(login, ApiSuccess):
            return login

        session = login.data
        try:
            response = await endpoints.auth_logout(
                self._t, session.base_url, sid=session.sid, session=session.session_name
            )
        except Exception as e:
            return connection_failure_from(e)
        return from_response(response, endpoints.AUTH.name)

    async def drain(self) -> None:
        if self._background:
            await asyncio.gather(*self._background, return_exceptions=True)
