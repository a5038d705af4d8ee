# Copyright (c) 2026 Ramin Firoozye
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Entry point for the xenv CLI (run via ``xenv`` or ``python -m xenv``)."""

from __future__ import annotations

from xenv.cli import cli


def main() -> None:
    """Run the CLI."""
    cli()


if __name__ == "__main__":
    main()
