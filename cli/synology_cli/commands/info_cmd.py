from __future__ import annotations

import typer
from synology_client import SynologyClient

from .. import console
from ..config import load_config
from ..http import make_client, run_with_client, unwrap


def info(
        json_out: bool = typer.Option(False, "--json", help="Print raw JSON."),
):
    """Show which APIs the NAS exposes and the Download Station version."""
    cfg = load_config()
    client = make_client(cfg)

    async def _info(c: SynologyClient):
        apis = unwrap(await c.info_query(), "API discovery")
        ds = unwrap(await c.download_station_info_get_info(), "Download Station info")
        return apis, ds

    apis, ds = run_with_client(client, _info)
    apis = apis or {}
    ds = ds or {}
    if json_out:
        console.print_json({"apis": apis, "download_station": ds})
        return

    console.print(f"apis: {len(apis)}")
    for name in ("SYNO.API.Auth", "SYNO.DownloadStation.Task", "SYNO.DownloadStation2.Task", "SYNO.FileStation.List"):
        entry = apis.get(name)
        if isinstance(entry, dict):
            console.print(f"  {name}: v{entry.get('minVersion')}-v{entry.get('maxVersion')}")
        else:
            console.print(f"  {name}: -")
    console.print(f"download_station: {ds.get('version_string') or ds.get('version') or '-'}")
    console.print(f"is_manager: {ds.get('is_manager', '-')}")
