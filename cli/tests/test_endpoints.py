from __future__ import annotations

import json

import pytest

from synology_client import ApiSuccess
from synology_client.endpoints import ENDPOINTS, ds2_task_create, fs_list_get_info

from conftest import FakeTransport


def test_registry_names_are_unique_and_map_to_attributes() -> None:
    names = [e.name for e in ENDPOINTS]
    assert len(names) == len(set(names))
    attrs = {e.name: e.attr_name for e in ENDPOINTS}
    assert attrs["DownloadStation.Task.List"] == "download_station_task_list"
    assert attrs["DownloadStation.Info.SetServerConfig"] == "download_station_info_set_server_config"
    assert attrs["DownloadStation2.Task.Create"] == "download_station2_task_create"
    assert attrs["FileStation.List.ListShare"] == "file_station_list_list_share"


def test_only_capability_discovery_is_unauthenticated() -> None:
    assert [e.name for e in ENDPOINTS if not e.requires_auth] == ["Info.Query"]


@pytest.mark.asyncio
async def test_ds2_create_encodes_json_values() -> None:
    t = FakeTransport().respond("SYNO.DownloadStation2.Task", "create", ApiSuccess(data={}))

    await ds2_task_create(t, "http://h", "sid", {"url": "magnet:?xt=1", "destination": "downloads"})

    req = t.requests[0]
    assert req.http_method == "POST"
    assert req.cgi_path == "entry.cgi"
    assert req.version == 2
    assert json.loads(req.params["url"]) == ["magnet:?xt=1"]
    assert req.params["type"] == '"url"'
    assert req.params["destination"] == '"downloads"'
    assert req.params["create_list"] is False
    assert req.params["_sid"] == "sid"


@pytest.mark.asyncio
async def test_timeout_option_is_not_sent_as_a_parameter() -> None:
    t = FakeTransport().respond("SYNO.FileStation.List", "getinfo", ApiSuccess(data={}))

    await fs_list_get_info(t, "http://h", "sid", {"path": ["/downloads"], "timeout": 3})

    req = t.requests[0]
    assert req.timeout == 3
    assert "timeout" not in req.params
    assert req.params["path"] == '["/downloads"]'
