# Copyright (c) 2026 Ramin Firoozye
# SPDX-License-Identifier: AGPL-3.0-or-later

"""SDK for loading .env files into the environment (python-dotenv style)."""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from pathlib import Path

from xenv.env_file import parse_env_file

log = logging.getLogger(__name__)


def dotenv_values(
    path: str | Path = ".env",
    environ: Mapping[str, str] | None = None,
) -> dict[str, str]:
    """Return the variables defined in *path* without modifying os.environ.

    Parameters
    ----------
    path : str or Path, default ".env"
        The file to parse.
    environ : Mapping, optional
        Lookup consulted first for ``$NAME`` substitutions. Defaults to
        ``os.environ``.

    Returns
    -------
    dict[str, str]
        Mapping of variable name to value, in file order.

    Raises
    ------
    LineParseError
        A line is malformed.
    EnvFileIOError
        The file cannot be opened or read.
    """
    return parse_env_file(path, environ)


def load_dotenv(path: str | Path = ".env", override: bool = False) -> bool:
    """Load variables from *path* into os.environ (python-dotenv compatible API).

    Parameters
    ----------
    path : str or Path, default ".env"
        The file to parse. A missing file is not an error; nothing is loaded.
    override : bool, default False
        If True, overwrite existing keys in os.environ. If False, only set
        keys that are not already set (matches python-dotenv semantics).

    Returns
    -------
    bool
        True if at least one variable was set, False otherwise.

    Examples
    --------
    >>> from xenv import load_dotenv
    >>> load_dotenv()  # doctest: +SKIP
    True
    >>> load_dotenv(".env.local", override=True)  # doctest: +SKIP
    True
    """
    p = Path(path)
    if not p.is_file():
        log.debug("%s not found, nothing loaded", p)
        return False
    values = parse_env_file(p)
    count = 0
    for key, value in values.items():
        if key in os.environ and not override:
            continue
        os.environ[key] = value
        count += 1
    return count > 0
