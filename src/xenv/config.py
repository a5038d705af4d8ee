# Copyright (c) 2026 Ramin Firoozye
# SPDX-License-Identifier: AGPL-3.0-or-later

""".xenv.toml configuration loading.

Searches upward from cwd for ``.xenv.toml`` and merges with CLI flags.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

CONFIG_FILENAME = ".xenv.toml"


@dataclass
class XenvConfig:
    """Resolved configuration for the current invocation."""

    env_file: str = ".env"
    shell: str | None = None
    config_path: Path | None = None

    def resolve_env_file(self) -> Path:
        """Return ``env_file``, relative paths taken from the config file's directory."""
        p = Path(self.env_file)
        if p.is_absolute() or self.config_path is None:
            return p
        return self.config_path.parent / p


def find_config_file(start: Path | None = None) -> Path | None:
    """Walk upward from *start* (default cwd) looking for ``.xenv.toml``."""
    cur = (start or Path.cwd()).resolve()
    while True:
        candidate = cur / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
        if cur.parent == cur:
            return None
        cur = cur.parent


def load_config(path: Path | None = None) -> XenvConfig:
    """Load and return config.  Returns defaults if no file found."""
    if path is None:
        path = find_config_file()
    if path is None:
        return XenvConfig()

    raw: dict[str, Any] = tomllib.loads(path.read_text())
    section = raw.get("xenv", {})

    return XenvConfig(
        env_file=section.get("env_file", ".env"),
        shell=section.get("shell"),
        config_path=path,
    )
