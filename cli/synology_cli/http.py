from __future__ import annotations

import asyncio
from typing import Any, Awaitable, Callable, TypeVar

import typer
from synology_client import ApiSuccess, SynologyClient, TransportConfig
from synology_client.responses import ClientResult

from . import console
from .config import AppConfig, connection_settings
from .formatting import describe_failure

T = TypeVar("T")


def make_client(cfg: AppConfig, *, timeout_s: float | None = None) -> SynologyClient:
    return SynologyClient(
        connection_settings(cfg),
        transport_config=TransportConfig(timeout_s=timeout_s or cfg.timeout_s),
    )


def run_with_client(client: SynologyClient, fn: Callable[[SynologyClient], Awaitable[T]]) -> T:
    """Run ``fn`` on one event loop, then log out and close the client."""

    async def _main() -> T:
        try:
            return await fn(client)
        finally:
            await client.aclose()

    return asyncio.run(_main())


def unwrap(result: ClientResult, action: str) -> Any:
    if isinstance(result, ApiSuccess):
        return result.data
    console.err(f"{action} failed: {describe_failure(result)}")
    raise typer.Exit(code=2)
