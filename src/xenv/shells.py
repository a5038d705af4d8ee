# Copyright (c) 2026 Ramin Firoozye
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Render parsed variables as export statements for a target shell."""

from __future__ import annotations

import os
import re
from collections.abc import Mapping

SHELLS = ("bash", "zsh", "fish", "elvish", "powershell")

_ALIASES = {"pwsh": "powershell", "powershell.exe": "powershell", "pwsh.exe": "powershell"}

# Names bash, zsh and fish accept as variables; .env keys may also contain ".".
_IDENTIFIER = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")


def normalize_shell(name: str) -> str:
    """Map a shell name or alias to one of :data:`SHELLS`; ``ValueError`` if unknown."""
    shell = name.strip().lower()
    shell = _ALIASES.get(shell, shell)
    if shell not in SHELLS:
        raise ValueError(f"Unsupported shell {name!r}. Supported: {', '.join(SHELLS)}")
    return shell


def detect_shell(environ: Mapping[str, str] | None = None) -> str | None:
    """Guess the user's shell from ``$SHELL``, falling back to PowerShell on ``PSModulePath``."""
    env = os.environ if environ is None else environ
    login = env.get("SHELL")
    if login:
        name = os.path.basename(login.rstrip("/"))
        try:
            return normalize_shell(name)
        except ValueError:
            pass
    if env.get("PSModulePath"):
        return "powershell"
    return None


def _sh_escape(value: str) -> str:
    """Escape for Unix sh: single-quote wrapped, internal ' -> '\\''."""
    if not value or any(c in value for c in " \t\n'\"\\$`!#&|;(){}<>*?[]~"):
        return "'" + value.replace("'", "'\\''") + "'"
    return value


def _fish_escape(value: str) -> str:
    """Escape for fish single-quoted string: \\ and ' are backslash-escaped."""
    return "'" + value.replace("\\", "\\\\").replace("'", "\\'") + "'"


def _elvish_escape(value: str) -> str:
    """Escape for elvish single-quoted string: ' -> ''."""
    return "'" + value.replace("'", "''") + "'"


def _powershell_escape(value: str) -> str:
    """Escape for PowerShell single-quoted string: ' -> ''."""
    return value.replace("'", "''")


def _powershell_name(key: str) -> str:
    """``$env:KEY``, braced when *key* would otherwise read as a property access."""
    if _IDENTIFIER.fullmatch(key):
        return f"$env:{key}"
    return "${env:" + key + "}"


def format_exports(pairs: Mapping[str, str], shell: str) -> list[str]:
    """Return one statement per variable, in *pairs* order.

    Raises ``ValueError`` for an unknown shell, or for a key bash, zsh or fish
    cannot use as a variable name (such as ``a.b``).
    """
    shell = normalize_shell(shell)
    lines: list[str] = []
    for key, value in pairs.items():
        if shell in ("bash", "zsh", "fish") and not _IDENTIFIER.fullmatch(key):
            raise ValueError(f"{key!r} is not a valid {shell} variable name")
        if shell in ("bash", "zsh"):
            lines.append(f"export {key}={_sh_escape(value)};")
        elif shell == "fish":
            lines.append(f"set -gx {key} {_fish_escape(value)};")
        elif shell == "elvish":
            lines.append(f"set-env {key} {_elvish_escape(value)}")
        else:
            lines.append(f"{_powershell_name(key)} = '{_powershell_escape(value)}';")
    return lines
