# Copyright (c) 2026 Ramin Firoozye
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Parse .env files into ordered key-value dicts.

Lines are read in order and each assignment is visible to substitutions on
the lines after it.  The first bad line (or read failure) aborts the whole
parse; callers never see a partial dict.
"""

from __future__ import annotations

import io
import logging
from collections.abc import Iterable, Iterator, Mapping
from pathlib import Path

from xenv.errors import EnvFileIOError
from xenv.lines import iter_lines
from xenv.parse import parse_line
from xenv.substitution import SubstitutionResolver

log = logging.getLogger(__name__)


def iter_env(
    source: Iterable[str] | Iterable[bytes],
    environ: Mapping[str, str] | None = None,
    path: str | None = None,
) -> Iterator[tuple[str, str]]:
    """Lazily yield ``(key, value)`` pairs from *source* in file order.

    *environ* is consulted before earlier assignments when resolving
    ``$NAME``; it defaults to ``os.environ``.
    """
    resolver = SubstitutionResolver(environ)
    for lineno, line in enumerate(iter_lines(source, path=path), start=1):
        pair = parse_line(line, resolver)
        if pair is None:
            log.debug("line %d: blank or comment", lineno)
            continue
        yield pair


def parse_stream(
    source: Iterable[str] | Iterable[bytes],
    environ: Mapping[str, str] | None = None,
    path: str | None = None,
) -> dict[str, str]:
    """Return every assignment in *source*; later duplicates win."""
    result: dict[str, str] = {}
    for key, value in iter_env(source, environ, path=path):
        result[key] = value
    log.debug("parsed %d variable(s) from %s", len(result), path or "<stream>")
    return result


def parse_string(text: str, environ: Mapping[str, str] | None = None) -> dict[str, str]:
    """Parse .env content held in memory."""
    return parse_stream(io.StringIO(text), environ)


def parse_env_file(path: str | Path, environ: Mapping[str, str] | None = None) -> dict[str, str]:
    """Read a .env file and return an ordered dict of key-value pairs."""
    p = Path(path)
    try:
        f = p.open("rb")
    except OSError as e:
        raise EnvFileIOError(e.strerror or str(e), path=str(p)) from e
    log.debug("reading %s", p)
    with f:
        return parse_stream(f, environ, path=str(p))
