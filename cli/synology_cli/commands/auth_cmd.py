from __future__ import annotations

import typer
from synology_client import NOT_LOGGED_IN, ApiSuccess, SynologyClient

from .. import console
from ..config import load_config
from ..formatting import describe_failure
from ..http import make_client, run_with_client

app = typer.Typer(help="Session commands.")


@app.command("check")
def check_login():
    """Log in with the saved settings, then log out again."""
    cfg = load_config()
    client = make_client(cfg)

    async def _check(c: SynologyClient):
        login = await c.login()
        logout = await c.logout() if isinstance(login, ApiSuccess) else None
        return login, logout

    login, logout = run_with_client(client, _check)
    if not isinstance(login, ApiSuccess):
        console.err(f"Login failed: {describe_failure(login)}")
        raise typer.Exit(code=2)
    console.ok(f"Logged in to {login.data.base_url} as session {login.data.session_name!r}.")
    if logout is None or logout == NOT_LOGGED_IN:
        return
    if isinstance(logout, ApiSuccess):
        console.ok("Logged out.")
    else:
        console.warn(f"Logout failed: {describe_failure(logout)}")
