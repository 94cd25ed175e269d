"""Raw webapi endpoint functions and the registry the client is built from.

Authenticated endpoints have the shape ``fn(transport, base_url, sid, options)``,
unauthenticated ones ``fn(transport, base_url, options)``. They return the raw
``ApiSuccess | ApiFailure`` and let transport exceptions propagate.
"""
from __future__ import annotations

import json
import re
from dataclasses import dataclass
from typing import Any, Awaitable, Callable

from .responses import ApiFailure, ApiSuccess
from .transport import Transport


@dataclass(frozen=True)
class ApiGroup:
    name: str
    cgi_path: str
    version: int
    json_lists: bool = False


AUTH = ApiGroup("SYNO.API.Auth", "auth.cgi", 2)
INFO = ApiGroup("SYNO.API.Info", "query.cgi", 1)
DS_INFO = ApiGroup("SYNO.DownloadStation.Info", "DownloadStation/info.cgi", 1)
DS_SCHEDULE = ApiGroup("SYNO.DownloadStation.Schedule", "DownloadStation/schedule.cgi", 1)
DS_STATISTIC = ApiGroup("SYNO.DownloadStation.Statistic", "DownloadStation/statistic.cgi", 1)
DS_TASK = ApiGroup("SYNO.DownloadStation.Task", "DownloadStation/task.cgi", 1)
DS2_TASK = ApiGroup("SYNO.DownloadStation2.Task", "entry.cgi", 2, json_lists=True)
FS_INFO = ApiGroup("SYNO.FileStation.Info", "entry.cgi", 2, json_lists=True)
FS_LIST = ApiGroup("SYNO.FileStation.List", "entry.cgi", 2, json_lists=True)

RawResult = ApiSuccess | ApiFailure

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")


def _encode(group: ApiGroup, options: dict[str, Any] | None) -> tuple[dict[str, Any], float | None]:
    params = dict(options or {})
    timeout = params.pop("timeout", None)
    if group.json_lists:
        params = {k: json.dumps(list(v)) if isinstance(v, (list, tuple)) else v for k, v in params.items()}
    return params, timeout


async def _call(
        t: Transport,
        group: ApiGroup,
        base_url: str,
        method: str,
        options: dict[str, Any] | None = None,
        *,
        sid: str | None = None,
        http_method: str = "GET",
        version: int | None = None,
) -> RawResult:
    params, timeout = _encode(group, options)
    if sid is not None:
        params["_sid"] = sid
    return await t.request(
        base_url,
        group.cgi_path,
        api=group.name,
        version=version or group.version,
        method=method,
        params=params,
        http_method=http_method,
        timeout=timeout,
    )


# --- SYNO.API.Auth ---
async def auth_login(
        t: Transport,
        base_url: str,
        *,
        account: str,
        passwd: str,
        session: str,
        version: int,
        timeout: float | None = None,
) -> RawResult:
    options = {"account": account, "passwd": passwd, "session": session, "format": "sid", "timeout": timeout}
    return await _call(t, AUTH, base_url, "login", options, version=version)


async def auth_logout(t: Transport, base_url: str, *, sid: str, session: str) -> RawResult:
    return await _call(t, AUTH, base_url, "logout", {"session": session}, sid=sid, version=1)


# --- SYNO.API.Info ---
async def info_query(t: Transport, base_url: str, options: dict | None = None) -> RawResult:
    return await _call(t, INFO, base_url, "query", {"query": "ALL", **(options or {})})


# --- SYNO.DownloadStation.Info ---
async def ds_info_get_info(t: Transport, base_url: str, sid: str, options: dict | None = None) -> RawResult:
    return await _call(t, DS_INFO, base_url, "getinfo", options, sid=sid)


async def ds_info_get_config(t: Transport, base_url: str, sid: str, options: dict | None = None) -> RawResult:
    return await _call(t, DS_INFO, base_url, "getconfig", options, sid=sid)


async def ds_info_set_server_config(t: Transport, base_url: str, sid: str, options: dict) -> RawResult:
    return await _call(t, DS_INFO, base_url, "setserverconfig", options, sid=sid)


# --- SYNO.DownloadStation.Schedule ---
async def ds_schedule_get_config(t: Transport, base_url: str, sid: str, options: dict | None = None) -> RawResult:
    return await _call(t, DS_SCHEDULE, base_url, "getconfig", options, sid=sid)


async def ds_schedule_set_config(t: Transport, base_url: str, sid: str, options: dict) -> RawResult:
    return await _call(t, DS_SCHEDULE, base_url, "setconfig", options, sid=sid)


# --- SYNO.DownloadStation.Statistic ---
async def ds_statistic_get_info(t: Transport, base_url: str, sid: str, options: dict | None = None) -> RawResult:
    return await _call(t, DS_STATISTIC, base_url, "getinfo", options, sid=sid)


# --- SYNO.DownloadStation.Task ---
async def ds_task_list(t: Transport, base_url: str, sid: str, options: dict | None = None) -> RawResult:
    return await _call(t, DS_TASK, base_url, "list", options, sid=sid)


async def ds_task_get_info(t: Transport, base_url: str, sid: str, options: dict) -> RawResult:
    return await _call(t, DS_TASK, base_url, "getinfo", options, sid=sid)


async def ds_task_create(t: Transport, base_url: str, sid: str, options: dict) -> RawResult:
    return await _call(t, DS_TASK, base_url, "create", options, sid=sid, http_method="POST")


async def ds_task_delete(t: Transport, base_url: str, sid: str, options: dict) -> RawResult:
    return await _call(t, DS_TASK, base_url, "delete", options, sid=sid)


async def ds_task_pause(t: Transport, base_url: str, sid: str, options: dict) -> RawResult:
    return await _call(t, DS_TASK, base_url, "pause", options, sid=sid)


async def ds_task_resume(t: Transport, base_url: str, sid: str, options: dict) -> RawResult:
    return await _call(t, DS_TASK, base_url, "resume", options, sid=sid)


async def ds_task_edit(t: Transport, base_url: str, sid: str, options: dict) -> RawResult:
    return await _call(t, DS_TASK, base_url, "edit", options, sid=sid)


# --- SYNO.DownloadStation2.Task ---
async def ds2_task_create(t: Transport, base_url: str, sid: str, options: dict) -> RawResult:
    params = dict(options)
    urls = params.pop("url", None) or []
    if isinstance(urls, str):
        urls = [urls]
    params["type"] = json.dumps(params.get("type") or "url")
    params["url"] = list(urls)
    if "destination" in params:
        params["destination"] = json.dumps(params["destination"])
    params.setdefault("create_list", False)
    return await _call(t, DS2_TASK, base_url, "create", params, sid=sid, http_method="POST")


# --- SYNO.FileStation.Info ---
async def fs_info_get(t: Transport, base_url: str, sid: str, options: dict | None = None) -> RawResult:
    return await _call(t, FS_INFO, base_url, "get", options, sid=sid)


# --- SYNO.FileStation.List ---
async def fs_list_list_share(t: Transport, base_url: str, sid: str, options: dict | None = None) -> RawResult:
    return await _call(t, FS_LIST, base_url, "list_share", options, sid=sid)


async def fs_list_list(t: Transport, base_url: str, sid: str, options: dict) -> RawResult:
    return await _call(t, FS_LIST, base_url, "list", options, sid=sid)


async def fs_list_get_info(t: Transport, base_url: str, sid: str, options: dict) -> RawResult:
    return await _call(t, FS_LIST, base_url, "getinfo", options, sid=sid)


@dataclass(frozen=True)
class Endpoint:
    name: str
    fn: Callable[..., Awaitable[RawResult]]
    api_group: str
    requires_auth: bool = True

    @property
    def attr_name(self) -> str:
        """``DownloadStation.Task.List`` -> ``download_station_task_list``."""
        return "_".join(_CAMEL_BOUNDARY.sub("_", part).lower() for part in self.name.split("."))


ENDPOINTS: tuple[Endpoint, ...] = (
    Endpoint("Info.Query", info_query, INFO.name, requires_auth=False),
    Endpoint("DownloadStation.Info.GetInfo", ds_info_get_info, DS_INFO.name),
    Endpoint("DownloadStation.Info.GetConfig", ds_info_get_config, DS_INFO.name),
    Endpoint("DownloadStation.Info.SetServerConfig", ds_info_set_server_config, DS_INFO.name),
    Endpoint("DownloadStation.Schedule.GetConfig", ds_schedule_get_config, DS_SCHEDULE.name),
    Endpoint("DownloadStation.Schedule.SetConfig", ds_schedule_set_config, DS_SCHEDULE.name),
    Endpoint("DownloadStation.Statistic.GetInfo", ds_statistic_get_info, DS_STATISTIC.name),
    Endpoint("DownloadStation.Task.List", ds_task_list, DS_TASK.name),
    Endpoint("DownloadStation.Task.GetInfo", ds_task_get_info, DS_TASK.name),
    Endpoint("DownloadStation.Task.Create", ds_task_create, DS_TASK.name),
    Endpoint("DownloadStation.Task.Delete", ds_task_delete, DS_TASK.name),
    Endpoint("DownloadStation.Task.Pause", ds_task_pause, DS_TASK.name),
    Endpoint("DownloadStation.Task.Resume", ds_task_resume, DS_TASK.name),
    Endpoint("DownloadStation.Task.Edit", ds_task_edit, DS_TASK.name),
    Endpoint("DownloadStation2.Task.Create", ds2_task_create, DS2_TASK.name),
    Endpoint("FileStation.Info.Get", fs_info_get, FS_INFO.name),
    Endpoint("FileStation.List.ListShare", fs_list_list_share, FS_LIST.name),
    Endpoint("FileStation.List.List", fs_list_list, FS_LIST.name),
    Endpoint("FileStation.List.GetInfo", fs_list_get_info, FS_LIST.name),
)
