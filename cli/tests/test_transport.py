from __future__ import annotations

import httpx
import pytest

from synology_client import ApiFailure, ApiSuccess, BadResponseError, NetworkError, RequestTimeoutError
from synology_client.transport import Transport, format_params


def _transport(handler) -> Transport:
    return Transport(client=httpx.AsyncClient(transport=httpx.MockTransport(handler)))


async def _task_list(t: Transport, **kwargs):
    return await t.request(
        "http://nas:5000/",
        "DownloadStation/task.cgi",
        api="SYNO.DownloadStation.Task",
        version=1,
        method="list",
        **kwargs,
    )


def test_format_params() -> None:
    params = format_params({"id": ["a", "b"], "force_complete": False, "limit": 5, "skip": None})
    assert params == {"id": "a,b", "force_complete": "false", "limit": "5"}


@pytest.mark.asyncio
async def test_success_body_and_query_string() -> None:
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = request.url
        return httpx.Response(200, json={"success": True, "data": {"tasks": []}})

    t = _transport(handler)
    result = await _task_list(t, params={"_sid": "abc", "additional": ["transfer", "detail"]})

    assert result == ApiSuccess(data={"tasks": []})
    assert seen["url"].path == "/webapi/DownloadStation/task.cgi"
    assert seen["url"].params["api"] == "SYNO.DownloadStation.Task"
    assert seen["url"].params["method"] == "list"
    assert seen["url"].params["_sid"] == "abc"
    assert seen["url"].params["additional"] == "transfer,detail"
    await t.aclose()


@pytest.mark.asyncio
async def test_post_sends_form_body() -> None:
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["method"] = request.method
        seen["body"] = request.content.decode()
        return httpx.Response(200, json={"success": True})

    t = _transport(handler)
    result = await _task_list(t, params={"uri": "http://x/file"}, http_method="POST")

    assert result.success
    assert seen["method"] == "POST"
    assert "method=list" in seen["body"]
    await t.aclose()


@pytest.mark.asyncio
async def test_failure_body() -> None:
    t = _transport(lambda request: httpx.Response(200, json={"success": False, "error": {"code": 106}}))
    result = await _task_list(t)
    assert result == ApiFailure(code=106)
    await t.aclose()


@pytest.mark.asyncio
async def test_http_400_raises_bad_response() -> None:
    t = _transport(lambda request: httpx.Response(400, text="Bad Request"))
    with pytest.raises(BadResponseError) as exc:
        await _task_list(t)
    assert exc.value.status_code == 400
    await t.aclose()


@pytest.mark.asyncio
async def test_non_json_body_raises_bad_response() -> None:
    t = _transport(lambda request: httpx.Response(200, text="<html>login</html>"))
    with pytest.raises(BadResponseError):
        await _task_list(t)
    await t.aclose()


@pytest.mark.asyncio
async def test_unexpected_json_shape_raises_bad_response() -> None:
    t = _transport(lambda request: httpx.Response(200, json=["not", "an", "envelope"]))
    with pytest.raises(BadResponseError):
        await _task_list(t)
    await t.aclose()


@pytest.mark.asyncio
async def test_connect_error_raises_network_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    t = _transport(handler)
    with pytest.raises(NetworkError):
        await _task_list(t)
    await t.aclose()


@pytest.mark.asyncio
async def test_timeout_raises_request_timeout() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    t = _transport(handler)
    with pytest.raises(RequestTimeoutError):
        await _task_list(t)
    await t.aclose()
