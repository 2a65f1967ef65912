"""Utility helpers for generating CLI documentation artefacts."""

from __future__ import annotations

from typing import Literal

import click
from click.shell_completion import BashComplete, FishComplete, ShellComplete, ZshComplete

from gigafind.cli import cli

ShellName = Literal["bash", "zsh", "fish"]

_COMPLETE_CLASSES: dict[ShellName, type[ShellComplete]] = {
    "bash": BashComplete,
    "zsh": ZshComplete,
    "fish": FishComplete,
}

_COMPLETE_VAR = "_GIGAFIND_COMPLETE"

_EXIT_STATUS = """\
0  success, including runs that found nothing
65 traversal output could not be interpreted
66 replay listing missing or unreadable
69 traversal command failed
78 invalid threshold, option or settings file
"""


def _scan_command() -> click.Command:
    group = cli if isinstance(cli, click.Group) else None
    if group is not None and "scan" in group.commands:
        return group.commands["scan"]
    return cli


def _collect_option_flags(command: click.Command) -> tuple[str, ...]:
    flags: list[str] = []
    for param in command.params:
        if isinstance(param, click.Option):
            flags.extend(param.opts)
            flags.extend(param.secondary_opts)
    return tuple(sorted({flag for flag in flags if flag}))


def _build_plain_command() -> click.Command:
    """Return a plain Click command mirroring the ``scan`` command.

    Typer's rich help formatter prints straight to the console; for a man page
    we only need a stable plain-text help string.
    """
    scan = _scan_command()
    return click.Command(
        name="gigafind scan",
        callback=scan.callback,
        params=scan.params,
        help=scan.help,
        epilog=scan.epilog,
        context_settings=scan.context_settings,
    )


def build_man_page() -> str:
    """Return a plain-text manual page for the gigafind CLI."""
    plain_cmd = _build_plain_command()
    ctx = click.Context(plain_cmd, info_name="gigafind scan")
    help_text = plain_cmd.get_help(ctx).strip()
    sections = [
        "GIGAFIND(1)\n",
        "NAME\n----\ngigafind - find large files and crowded directories\n\n",
        "SYNOPSIS\n--------\ngigafind scan [OPTIONS]\n\n",
        "DESCRIPTION\n-----------\n",
        help_text,
        "\n\nEXIT STATUS\n-----------\n",
        _EXIT_STATUS.strip(),
        "\n",
    ]
    return "".join(sections)


def build_completion_script(shell: ShellName) -> str:
    """Return a shell completion script for *shell*."""
    complete_cls = _COMPLETE_CLASSES[shell]
    complete = complete_cls(cli, {}, "gigafind", _COMPLETE_VAR)
    script = complete.source()
    option_comment = "# gigafind scan options: " + " ".join(_collect_option_flags(_scan_command()))
    return f"{option_comment}\n{script}"


__all__ = ["build_completion_script", "build_man_page"]
