from __future__ import annotations

import logging
from typing import Any, Callable, Iterable, Mapping

from .config_types import ConnectionSettings, TransportConfig
from .endpoints import ENDPOINTS, Endpoint
from .proxy import CallProxy, ProxiedCall
from .responses import ClientResult
from .session import LoginResult, SessionManager, SessionState
from .settings import SettingsHolder
from .transport import Transport

log = logging.getLogger(__name__)


def _coerce_settings(settings: ConnectionSettings | Mapping[str, Any] | None) -> ConnectionSettings:
    if isinstance(settings, ConnectionSettings):
        return settings
    return ConnectionSettings.from_mapping(dict(settings or {}))


class SynologyClient:
    """Session-aware facade over the DSM webapi.

    Every endpoint in the registry is reachable as ``client.call(name, options)``
    and as a snake_case attribute, e.g. ``client.download_station_task_list()``.
    Results are values (see ``responses``); nothing here raises on failure.
    """

    def __init__(
            self,
            settings: ConnectionSettings | Mapping[str, Any] | None = None,
            *,
            transport: Transport | None = None,
            transport_config: TransportConfig | None = None,
            endpoints: Iterable[Endpoint] = ENDPOINTS,
    ):
        self._t = transport or Transport(transport_config)
        self._settings = SettingsHolder(_coerce_settings(settings))
        self._sessions = SessionManager(self._settings, self._t)
        # Must be the first listener: later ones may already issue calls.
        self._settings.on_change(self._sessions.invalidate_in_background)
        self._proxy = CallProxy(self._settings, self._sessions, self._t)

        self._endpoints: dict[str, Endpoint] = {}
        self._calls: dict[str, ProxiedCall] = {}
        self._attr_names: dict[str, str] = {}
        for endpoint in endpoints:
            self._endpoints[endpoint.name] = endpoint
            self._calls[endpoint.name] = self._proxy.wrap(endpoint)
            self._attr_names[endpoint.attr_name] = endpoint.name

    # --- settings ---
    @property
    def settings(self) -> ConnectionSettings:
        return self._settings.current

    @property
    def settings_version(self) -> int:
        return self._settings.version

    def update_settings(self, settings: ConnectionSettings | Mapping[str, Any] | None) -> bool:
        return self._settings.update(_coerce_settings(settings))

    def on_settings_change(self, listener: Callable[[], None]) -> Callable[[], None]:
        return self._settings.on_change(listener)

    # --- Auth ---
    @property
    def session_state(self) -> SessionState:
        return self._sessions.state

    async def login(self, *, timeout: float | None = None) -> LoginResult:
        return await self._sessions.login(timeout=timeout)

    async def logout(self) -> ClientResult | str:
        return await self._sessions.invalidate()

    # --- endpoints ---
    @property
    def endpoint_names(self) -> list[str]:
        return list(self._endpoints)

    def endpoint(self, name: str) -> Endpoint:
        return self._endpoints[name]

    async def call(self, name: str, options: dict[str, Any] | None = None) -> ClientResult:
        return await self._calls[name](options)

    def __getattr__(self, name: str) -> ProxiedCall:
        attr_names = self.__dict__.get("_attr_names") or {}
        if name in attr_names:
            return self._calls[attr_names[name]]
        raise AttributeError(f"{type(self).__name__!s} has no attribute or endpoint {name!r}")

    # --- lifecycle ---
    async def aclose(self) -> None:
        result = await self.logout()
        log.debug("logout on close: %r", result)
        await self._sessions.drain()
        await self._t.aclose()

    async def __aenter__(self) -> "SynologyClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()
