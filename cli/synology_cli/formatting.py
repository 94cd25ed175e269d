from __future__ import annotations

from synology_client import ClientFailure, ConnectionFailure
from synology_client.error_codes import error_message_from_code

_UNITS = ("B", "KB", "MB", "GB", "TB")

_CONNECTION_FAILURE_MESSAGES = {
    "missing-config": "Connection settings are incomplete. Run `syno settings set`.",
    "probable-wrong-protocol": "The server rejected the request. Check that the protocol (http/https) matches the port.",
    "probable-wrong-url-or-unreachable": "Could not reach the server. Check the hostname, port and certificate.",
    "timeout": "The server did not answer in time.",
    "unknown": "Unexpected error while talking to the server.",
}


def format_bytes(value: int | float | None) -> str:
    if value is None:
        return "-"
    size = float(value)
    for unit in _UNITS:
        if abs(size) < 1024 or unit == _UNITS[-1]:
            if unit == "B":
                return f"{int(size)} B"
            return f"{size:.1f} {unit}"
        size /= 1024
    return f"{size:.1f} {_UNITS[-1]}"


def format_speed(value: int | float | None) -> str:
    if not value:
        return "-"
    return f"{format_bytes(value)}/s"


def format_progress(downloaded: int | None, total: int | None) -> str:
    if not total:
        return "-"
    pct = 100.0 * float(downloaded or 0) / float(total)
    return f"{min(pct, 100.0):.1f}%"


def describe_failure(result: ConnectionFailure | ClientFailure) -> str:
    if isinstance(result, ConnectionFailure):
        msg = _CONNECTION_FAILURE_MESSAGES.get(result.type, _CONNECTION_FAILURE_MESSAGES["unknown"])
        if result.error is not None and result.type != "missing-config":
            msg = f"{msg} ({result.error})"
        return msg
    return f"{error_message_from_code(result.code, result.api_group)} [{result.api_group} code {result.code}]"
