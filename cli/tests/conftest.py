"""Shared fixtures: a scripted stand-in for ``synology_client.transport.Transport``.

Scripted results are consumed in order; the last one repeats. A result can be
an ``ApiSuccess``/``ApiFailure``, an exception instance (raised), or a callable
taking the recorded request (sync or async) that returns either.
"""
from __future__ import annotations

import inspect
from dataclasses import dataclass, field
from typing import Any

import pytest

from synology_client import ApiSuccess, SynologyClient

SETTINGS = {
    "base_url": "http://nas.local:5000",
    "account": "admin",
    "passwd": "secret",
    "session": "DownloadStation",
}


@dataclass
class FakeRequest:
    base_url: str
    cgi_path: str
    api: str
    version: int
    method: str
    params: dict[str, Any] = field(default_factory=dict)
    http_method: str = "GET"
    timeout: float | None = None


class FakeTransport:
    def __init__(self):
        self.requests: list[FakeRequest] = []
        self.scripts: dict[tuple[str, str], list] = {}
        self.closed = False

    def respond(self, api: str, method: str, *results) -> "FakeTransport":
        self.scripts[(api, method)] = list(results)
        return self

    def calls(self, api: str, method: str) -> list[FakeRequest]:
        return [r for r in self.requests if r.api == api and r.method == method]

    async def request(self, base_url, cgi_path, *, api, version, method, params=None, http_method="GET", timeout=None):
        req = FakeRequest(base_url, cgi_path, api, version, method, dict(params or {}), http_method, timeout)
        self.requests.append(req)
        script = self.scripts.get((api, method))
        if not script:
            raise AssertionError(f"unexpected request {api}.{method}")
        result = script.pop(0) if len(script) > 1 else script[0]
        if callable(result) and not isinstance(result, type):
            result = result(req)
            if inspect.isawaitable(result):
                result = await result
        if isinstance(result, BaseException):
            raise result
        return result

    async def aclose(self) -> None:
        self.closed = True


def sid_for(req: FakeRequest) -> ApiSuccess:
    return ApiSuccess(data={"sid": f"sid-{req.base_url}-v{req.version}"})


@pytest.fixture
def transport() -> FakeTransport:
    t = FakeTransport()
    t.respond("SYNO.API.Auth", "login", sid_for)
    t.respond("SYNO.API.Auth", "logout", ApiSuccess(data=None))
    t.respond("SYNO.DownloadStation.Task", "list", ApiSuccess(data={"total": 0, "offset": 0, "tasks": []}))
    return t


@pytest.fixture
def client(transport) -> SynologyClient:
    return SynologyClient(SETTINGS, transport=transport)


@pytest.fixture(autouse=True)
def _isolated_config_dir(tmp_path, monkeypatch):
    monkeypatch.setenv("SYNO_CONFIG_DIR", str(tmp_path / "config"))
