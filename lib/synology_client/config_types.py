from __future__ import annotations

from dataclasses import dataclass, fields


@dataclass(frozen=True)
class ConnectionSettings:
    base_url: str | None = None
    account: str | None = None
    passwd: str | None = None
    session: str | None = None

    @classmethod
    def from_mapping(cls, data: dict | None) -> "ConnectionSettings":
        data = data or {}
        return cls(**{name: data.get(name) for name in SETTING_NAMES})

    def is_valid(self) -> bool:
        return all(getattr(self, name) for name in SETTING_NAMES)


SETTING_NAMES = tuple(f.name for f in fields(ConnectionSettings))


@dataclass(frozen=True)
class TransportConfig:
    timeout_s: float = 10.0
    user_agent: str = "synology-client/0.1.0"
    verify_tls: bool = True
