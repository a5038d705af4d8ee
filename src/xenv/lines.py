# Copyright (c) 2026 Ramin Firoozye
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Line source -- turn a stream or iterable into decoded text lines."""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from xenv.errors import EnvFileIOError

_BOM = "\ufeff"


def iter_lines(source: Iterable[str] | Iterable[bytes], path: str | None = None) -> Iterator[str]:
    """Yield lines from *source* without their line terminators.

    *source* may be a binary or text file object, or any iterable of ``str`` or
    ``bytes`` items.  Bytes are decoded as UTF-8 and a byte order mark at the
    start of the first line is dropped.  A read or decode failure is raised as
    :class:`EnvFileIOError` and ends the iteration.
    """
    it = iter(source)
    first = True
    while True:
        try:
            raw = next(it)
        except StopIteration:
            return
        except (OSError, UnicodeDecodeError) as e:
            raise EnvFileIOError(str(e), path=path) from e
        if isinstance(raw, bytes):
            try:
                line = raw.decode("utf-8")
            except UnicodeDecodeError as e:
                raise EnvFileIOError(f"invalid UTF-8: {e}", path=path) from e
        else:
            line = raw
        if line.endswith("\n"):
            line = line[:-1]
            if line.endswith("\r"):
                line = line[:-1]
        if first:
            first = False
            if line.startswith(_BOM):
                line = line[len(_BOM):]
        yield line
