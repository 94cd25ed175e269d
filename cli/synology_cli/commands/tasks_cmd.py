from __future__ import annotations

import typer
from rich.table import Table
from synology_client import SynologyClient

from .. import console
from ..config import load_config
from ..formatting import format_bytes, format_progress, format_speed
from ..http import make_client, run_with_client, unwrap

TASKS_USAGE = """\
Usage:
  syno tasks list [--json]
  syno tasks add URL... [--destination PATH] [--ds2]
  syno tasks pause|resume ID...
  syno tasks delete ID... [--force-complete]
"""

app = typer.Typer(help="Download Station tasks.\n\n" + TASKS_USAGE)


def _report_per_task(data, verb: str) -> None:
    items = data if isinstance(data, list) else []
    failed = [i for i in items if isinstance(i, dict) and i.get("error")]
    for item in failed:
        console.err(f"{item.get('id')}: {verb} failed with code {item.get('error')}")
    if failed:
        raise typer.Exit(code=2)
    console.ok(f"{verb.capitalize()} {len(items)} task(s).")


@app.command("list")
def list_tasks(
        json_out: bool = typer.Option(False, "--json", help="Print raw JSON."),
):
    cfg = load_config()
    client = make_client(cfg)

    async def _list(c: SynologyClient):
        return unwrap(await c.download_station_task_list({"additional": ["transfer"]}), "Listing tasks")

    data = run_with_client(client, _list) or {}
    tasks = data.get("tasks") or []
    if json_out:
        console.print_json(data)
        return
    if not tasks:
        console.info("No tasks.")
        return

    table = Table(title=f"Tasks ({data.get('total', len(tasks))})")
    table.add_column("ID")
    table.add_column("Title")
    table.add_column("Status")
    table.add_column("Size", justify="right")
    table.add_column("Progress", justify="right")
    table.add_column("Down", justify="right")
    for t in tasks:
        transfer = (t.get("additional") or {}).get("transfer") or {}
        table.add_row(
            str(t.get("id", "")),
            str(t.get("title", "")),
            str(t.get("status", "")),
            format_bytes(t.get("size")),
            format_progress(transfer.get("size_downloaded"), t.get("size")),
            format_speed(transfer.get("speed_download")),
        )
    console.print(table)


@app.command("add")
def add_tasks(
        urls: list[str] = typer.Argument(..., help="Download URLs or magnet links."),
        destination: str | None = typer.Option(None, "--destination", help="Shared folder path, e.g. downloads/movies."),
        ds2: bool = typer.Option(False, "--ds2", help="Use the DSM 7 Download Station API."),
):
    cfg = load_config()
    client = make_client(cfg)

    async def _add(c: SynologyClient):
        if ds2:
            options = {"url": urls, "destination": destination or ""}
            return unwrap(await c.download_station2_task_create(options), "Adding tasks")
        options = {"uri": urls}
        if destination:
            options["destination"] = destination
        return unwrap(await c.download_station_task_create(options), "Adding tasks")

    run_with_client(client, _add)
    console.ok(f"Added {len(urls)} task(s).")


@app.command("pause")
def pause_tasks(ids: list[str] = typer.Argument(..., help="Task IDs.")):
    cfg = load_config()
    client = make_client(cfg)

    async def _pause(c: SynologyClient):
        return unwrap(await c.download_station_task_pause({"id": ids}), "Pausing tasks")

    _report_per_task(run_with_client(client, _pause), "paused")


@app.command("resume")
def resume_tasks(ids: list[str] = typer.Argument(..., help="Task IDs.")):
    cfg = load_config()
    client = make_client(cfg)

    async def _resume(c: SynologyClient):
        return unwrap(await c.download_station_task_resume({"id": ids}), "Resuming tasks")

    _report_per_task(run_with_client(client, _resume), "resumed")


@app.command("delete")
def delete_tasks(
        ids: list[str] = typer.Argument(..., help="Task IDs."),
        force_complete: bool = typer.Option(False, "--force-complete", help="Move unfinished files to the destination."),
):
    cfg = load_config()
    client = make_client(cfg)

    async def _delete(c: SynologyClient):
        options = {"id": ids, "force_complete": force_complete}
        return unwrap(await c.download_station_task_delete(options), "Deleting tasks")

    _report_per_task(run_with_client(client, _delete), "deleted")
