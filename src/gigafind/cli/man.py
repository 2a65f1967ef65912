from __future__ import annotations

from pathlib import Path  # noqa: TC003
from typing import Annotated

import typer

from gigafind.cli.exit_codes import EXIT_OK
from gigafind.io import write_output


def register(app: typer.Typer) -> None:
    @app.command("man")
    def man(
        output: Annotated[
            Path | None,
            typer.Option("--output", help="Write man page to PATH (use '-' for stdout)."),
        ] = None,
    ) -> None:
        """Print a plain-text manual page."""
        from gigafind.scripts import build_man_page  # noqa: PLC0415

        text = build_man_page()
        write_output(text, output)
        raise typer.Exit(code=EXIT_OK)


__all__ = ["register"]
