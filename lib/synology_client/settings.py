from __future__ import annotations

import logging
from typing import Callable

from .config_types import SETTING_NAMES, ConnectionSettings

log = logging.getLogger(__name__)

Listener = Callable[[], None]


class SettingsHolder:
    """Current connection settings plus a version counter used as a fencing token.

    The version moves exactly once per update that changes at least one
    recognized field. Listeners run after such an update, in subscription order.
    """

    def __init__(self, settings: ConnectionSettings | None = None):
        self._settings = settings or ConnectionSettings()
        self._version = 0
        self._listeners: list[Listener] = []

    @property
    def version(self) -> int:
        return self._version

    @property
    def current(self) -> ConnectionSettings:
        return self._settings

    def update(self, settings: ConnectionSettings) -> bool:
        if all(getattr(settings, k) == getattr(self._settings, k) for k in SETTING_NAMES):
            return False
        self._version += 1
        self._settings = settings
        log.debug("settings changed, version=%s", self._version)
        for listener in list(self._listeners):
            try:
                listener()
            except Exception:
                log.warning("settings listener %r failed", listener, exc_info=True)
        return True

    def get_validated(self) -> ConnectionSettings | None:
        if self._settings.is_valid():
            return self._settings
        return None

    def on_change(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)
        subscribed = True

        def unsubscribe() -> None:
            nonlocal subscribed
            if subscribed:
                self._listeners.remove(listener)
                subscribed = False

        return unsubscribe
