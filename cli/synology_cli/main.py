from __future__ import annotations

import typer

from .commands import auth_cmd, info_cmd, settings_cmd, tasks_cmd
from .logging_ import setup_logging


def _build_app() -> typer.Typer:
    app = typer.Typer(
        name="syno",
        help="Synology Download Station CLI",
        no_args_is_help=True,
    )

    app.add_typer(settings_cmd.app, name="settings")
    app.add_typer(auth_cmd.app, name="auth")
    app.add_typer(tasks_cmd.app, name="tasks")
    app.command("info")(info_cmd.info)

    @app.callback()
    def _main(
            verbose: bool = typer.Option(False, "-v", "--verbose", help="Verbose logs."),
    ):
        setup_logging(verbose)

    return app


app = _build_app()
