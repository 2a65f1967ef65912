from __future__ import annotations

from typing import Annotated

import typer
from typer.main import get_command

from gigafind._meta import __version__
from gigafind.cli import completion, man, scan


def _version_callback(value: bool) -> None:  # noqa: FBT001
    if value:
        typer.echo(f"gigafind {__version__}")
        raise typer.Exit


def create_app() -> typer.Typer:
    app = typer.Typer(
        help="Find directories with many files or files that are large.",
        no_args_is_help=True,
    )

    @app.callback()
    def _root(
        *,
        version: Annotated[
            bool,
            typer.Option(
                "--version",
                "-V",
                help="Show version and exit",
                callback=_version_callback,
                is_eager=True,
            ),
        ] = False,
    ) -> None:
        pass

    scan.register(app)
    completion.register(app)
    man.register(app)

    return app


def main() -> None:
    app = create_app()
    get_command(app)()


# Click-compatible object for tooling that imports it
cli = get_command(create_app())

__all__ = ["cli", "create_app", "main"]
