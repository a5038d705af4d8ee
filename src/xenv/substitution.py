# Copyright (c) 2026 Ramin Firoozye
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Resolve ``$NAME`` / ``${NAME}`` references while a file is being parsed.

The process environment always wins over values defined in the file, so a
.env file can carry defaults that a deployment overrides without editing it.
Only assignments from earlier lines are visible; the table is filled in as the
file is read, never ahead of time.
"""

from __future__ import annotations

import os
from collections.abc import Mapping

# Key -> value from an earlier line.  ``None`` marks a key assigned nothing
# (``KEY=`` or ``KEY=# comment``); it resolves to "" like a missing key.
SubstitutionTable = dict[str, str | None]


class SubstitutionResolver:
    """Environment lookup plus the running table of already-parsed assignments."""

    def __init__(self, environ: Mapping[str, str] | None = None) -> None:
        self._environ: Mapping[str, str] = os.environ if environ is None else environ
        self.table: SubstitutionTable = {}

    def resolve(self, name: str) -> str:
        """Return the replacement text for *name*; undefined names give ``""``."""
        if name in self._environ:
            return self._environ[name]
        return self.table.get(name) or ""

    def record(self, key: str, value: str | None) -> None:
        """Make *key* visible to substitutions on later lines."""
        self.table[key] = value
