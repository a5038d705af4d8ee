# Copyright (c) 2026 Ramin Firoozye
# SPDX-License-Identifier: AGPL-3.0-or-later

"""xenv CLI -- expand a .env file into shell export statements."""

from __future__ import annotations

import logging
from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape

from xenv import __version__
from xenv.config import load_config
from xenv.env_file import parse_env_file
from xenv.errors import XenvError
from xenv.shells import SHELLS, detect_shell, format_exports, normalize_shell

console = Console(stderr=True)


def _resolve_shell(shell: str | None, configured: str | None) -> str:
    """Flag / XENV_SHELL, then config, then detection from the environment."""
    name = shell or configured or detect_shell()
    if name is None:
        console.print("[red]Failed to detect shell. Pass --shell.[/red]")
        raise SystemExit(1)
    try:
        return normalize_shell(name)
    except ValueError as e:
        raise click.UsageError(str(e))


@click.command()
@click.argument(
    "env_file",
    required=False,
    envvar="XENV_FILE",
    type=click.Path(dir_okay=False, path_type=Path),
)
@click.option(
    "--shell", "-s", default=None, envvar="XENV_SHELL",
    help=f"Target shell: {', '.join(SHELLS)}. Default: XENV_SHELL, config, else detected.",
)
@click.option("--verbose", "-v", is_flag=True, help="Verbose output.")
@click.version_option(__version__)
def cli(env_file: Path | None, shell: str | None, verbose: bool) -> None:
    """Expand .env files so they can be used in shell environments.

    \b
    Bash/Zsh:    eval "$(xenv ./.env)"
    Fish:        xenv ./.env | source
    PowerShell:  xenv .\\.env | Out-String | Invoke-Expression
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    cfg = load_config()
    target = _resolve_shell(shell, cfg.shell)
    path = env_file if env_file is not None else cfg.resolve_env_file()

    try:
        pairs = parse_env_file(path)
    except XenvError as e:
        console.print(f"[red]Failed to read env file: {escape(str(e))}[/red]")
        raise SystemExit(1)

    try:
        lines = format_exports(pairs, target)
    except ValueError as e:
        console.print(f"[red]Cannot export for {target}: {escape(str(e))}[/red]")
        raise SystemExit(1)

    for line in lines:
        click.echo(line)
