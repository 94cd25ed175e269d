from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass
from typing import Any

import tomli_w
from platformdirs import user_config_dir

from synology_client import ConnectionSettings

APP_NAME = "synology-ds"
CONFIG_FILENAME = "config.toml"
ENV_CONFIG_DIR = "SYNO_CONFIG_DIR"
DEFAULT_SESSION_NAME = "DownloadStation"
DEFAULT_TIMEOUT_S = 10.0

PROTOCOLS = ("http", "https")


@dataclass
class ConnectionConfig:
    protocol: str = "https"
    hostname: str = ""
    port: int = 5001
    account: str = ""
    passwd: str = ""
    session: str = DEFAULT_SESSION_NAME


@dataclass
class AppConfig:
    connection: ConnectionConfig
    timeout_s: float = DEFAULT_TIMEOUT_S


def config_path() -> str:
    base = os.getenv(ENV_CONFIG_DIR, "").strip() or user_config_dir(APP_NAME)
    return f"{base}/{CONFIG_FILENAME}"


def default_config() -> AppConfig:
    return AppConfig(connection=ConnectionConfig(), timeout_s=DEFAULT_TIMEOUT_S)


def normalize_hostname(raw: str | None) -> str:
    """Accept a bare host or a pasted URL and keep only the host part."""
    value = (raw or "").strip()
    if "://" in value:
        value = value.split("://", 1)[1]
    value = value.split("/", 1)[0]
    return value.split(":", 1)[0].strip().lower()


def host_url(conn: ConnectionConfig) -> str:
    if not conn.hostname:
        return ""
    return f"{conn.protocol}://{conn.hostname}:{conn.port}"


def connection_settings(cfg: AppConfig) -> ConnectionSettings:
    conn = cfg.connection
    return ConnectionSettings(
        base_url=host_url(conn) or None,
        account=conn.account or None,
        passwd=conn.passwd or None,
        session=conn.session or None,
    )


def ensure_parent_dir(path: str) -> None:
    os.makedirs(os.path.dirname(path), exist_ok=True)


def to_toml(cfg: AppConfig) -> dict[str, Any]:
    conn = cfg.connection
    return {
        "timeout_s": cfg.timeout_s,
        "connection": {
            "protocol": conn.protocol,
            "hostname": conn.hostname,
            "port": conn.port,
            "account": conn.account,
            "passwd": conn.passwd,
            "session": conn.session,
        },
    }


def from_toml(data: dict[str, Any]) -> AppConfig:
    cfg = default_config()
    try:
        cfg.timeout_s = float(data.get("timeout_s") or DEFAULT_TIMEOUT_S)
    except (TypeError, ValueError):
        cfg.timeout_s = DEFAULT_TIMEOUT_S

    conn_raw = data.get("connection") or {}
    if not isinstance(conn_raw, dict):
        return cfg
    protocol = str(conn_raw.get("protocol") or "https").strip().lower()
    port_raw = conn_raw.get("port")
    port = 5000 if protocol == "http" else 5001
    if port_raw is not None:
        try:
            port = int(port_raw)
        except (TypeError, ValueError):
            pass
    cfg.connection = ConnectionConfig(
        protocol=protocol if protocol in PROTOCOLS else "https",
        hostname=normalize_hostname(str(conn_raw.get("hostname") or "")),
        port=port,
        account=str(conn_raw.get("account") or ""),
        passwd=str(conn_raw.get("passwd") or ""),
        session=str(conn_raw.get("session") or DEFAULT_SESSION_NAME),
    )
    return cfg


def load_config() -> AppConfig:
    path = config_path()
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
        return from_toml(data)
    except FileNotFoundError:
        return default_config()


def save_config(cfg: AppConfig) -> str:
    path = config_path()
    ensure_parent_dir(path)
    with open(path, "wb") as f:
        f.write(tomli_w.dumps(to_toml(cfg)).encode("utf-8"))
    os.chmod(path, 0o600)
    return path
