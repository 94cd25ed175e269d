from __future__ import annotations

import typer

from .. import console
from ..config import PROTOCOLS, config_path, host_url, load_config, normalize_hostname, save_config

app = typer.Typer(help="Manage connection settings (~/.config/synology-ds/config.toml).")


@app.command("show")
def show_settings():
    cfg = load_config()
    conn = cfg.connection
    passwd_state = "(set)" if conn.passwd else "(empty)"
    console.print(
        f"host={host_url(conn) or '(unset)'} account={conn.account or '(unset)'} passwd={passwd_state} "
        f"session={conn.session} timeout_s={cfg.timeout_s:g}"
    )
    console.print(f"config={config_path()}")


@app.command("set")
def set_settings(
        protocol: str | None = typer.Option(None, "--protocol", help="http or https."),
        hostname: str | None = typer.Option(None, "--hostname", help="NAS hostname or IP."),
        port: int | None = typer.Option(None, "--port", help="DSM port (5000 for http, 5001 for https)."),
        account: str | None = typer.Option(None, "--account", help="DSM account name."),
        password: str | None = typer.Option(None, "--password", help="DSM password."),
        session: str | None = typer.Option(None, "--session", help="Session name to log in under."),
        timeout_s: float | None = typer.Option(None, "--timeout", help="Request timeout in seconds."),
):
    cfg = load_config()
    conn = cfg.connection
    if protocol is not None:
        p = protocol.strip().lower()
        if p not in PROTOCOLS:
            console.err("--protocol must be http or https.")
            raise typer.Exit(code=2)
        conn.protocol = p
    if hostname is not None:
        conn.hostname = normalize_hostname(hostname)
    if port is not None:
        if not 0 < port < 65536:
            console.err("--port must be between 1 and 65535.")
            raise typer.Exit(code=2)
        conn.port = port
    if account is not None:
        conn.account = account.strip()
    if password is not None:
        conn.passwd = password
    if session is not None:
        conn.session = session.strip()
    if timeout_s is not None:
        if timeout_s <= 0:
            console.err("--timeout must be positive.")
            raise typer.Exit(code=2)
        cfg.timeout_s = timeout_s
    saved = save_config(cfg)
    console.ok(f"Settings updated: {saved}")
