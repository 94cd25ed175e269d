from __future__ import annotations

import logging
from typing import Any

import httpx

from .config_types import TransportConfig
from .errors import BadResponseError, NetworkError, RequestTimeoutError
from .responses import ApiFailure, ApiSuccess

log = logging.getLogger(__name__)


def format_params(params: dict[str, Any]) -> dict[str, str]:
    out: dict[str, str] = {}
    for key, value in params.items():
        if value is None:
            continue
        if isinstance(value, bool):
            out[key] = "true" if value else "false"
        elif isinstance(value, (list, tuple)):
            out[key] = ",".join(str(v) for v in value)
        else:
            out[key] = str(value)
    return out


class Transport:
    """Performs single webapi requests; knows nothing about sessions."""

    def __init__(self, cfg: TransportConfig | None = None, *, client: httpx.AsyncClient | None = None):
        self._cfg = cfg or TransportConfig()
        self._client = client or httpx.AsyncClient(
            timeout=self._cfg.timeout_s,
            headers={"User-Agent": self._cfg.user_agent},
            verify=self._cfg.verify_tls,
            follow_redirects=True,
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    async def request(
            self,
            base_url: str,
            cgi_path: str,
            *,
            api: str,
            version: int,
            method: str,
            params: dict[str, Any] | None = None,
            http_method: str = "GET",
            timeout: float | None = None,
    ) -> ApiSuccess | ApiFailure:
        url = f"{base_url.rstrip('/')}/webapi/{cgi_path}"
        query = format_params({"api": api, "version": version, "method": method, **(params or {})})
        kwargs: dict[str, Any] = {}
        if http_method == "GET":
            kwargs["params"] = query
        else:
            kwargs["data"] = query
        if timeout is not None:
            kwargs["timeout"] = timeout

        log.debug("%s %s api=%s method=%s version=%s", http_method, url, api, method, version)
        try:
            r = await self._client.request(http_method, url, **kwargs)
        except httpx.TimeoutException as e:
            raise RequestTimeoutError(str(e) or "request timed out") from e
        except httpx.RequestError as e:
            raise NetworkError(str(e) or type(e).__name__) from e

        if r.status_code >= 400:
            raise BadResponseError(r.status_code, f"{http_method} {url} failed with {r.status_code}", r.text[:1000])

        try:
            data = r.json()
        except ValueError as e:
            raise BadResponseError(r.status_code, f"{api}.{method} returned a non-JSON body", r.text[:1000]) from e

        return parse_body(data, status_code=r.status_code, where=f"{api}.{method}")


def parse_body(data: Any, *, status_code: int = 200, where: str = "response") -> ApiSuccess | ApiFailure:
    if not isinstance(data, dict) or not isinstance(data.get("success"), bool):
        raise BadResponseError(status_code, f"{where} returned an unexpected body", repr(data)[:1000])
    if data["success"]:
        return ApiSuccess(data=data.get("data"))
    error = data.get("error") if isinstance(data.get("error"), dict) else {}
    try:
        code = int(error.get("code"))
    except (TypeError, ValueError):
        code = 100
    return ApiFailure(code=code, errors=error.get("errors"))
