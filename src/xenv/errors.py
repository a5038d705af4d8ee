# Copyright (c) 2026 Ramin Firoozye
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Exceptions raised while reading and parsing .env files."""

from __future__ import annotations


class XenvError(Exception):
    """Base class for all xenv errors."""


class LineParseError(XenvError, ValueError):
    """A line could not be parsed.

    ``line`` is the raw line as read (before trimming) and ``index`` is the
    UTF-8 byte offset into it where the problem was detected.  For unterminated
    quotes and ``${`` blocks the offset points at the end of the line rather
    than at the opening delimiter.
    """

    def __init__(self, line: str, index: int) -> None:
        super().__init__(line, index)
        self.line = line
        self.index = index

    def __str__(self) -> str:
        return f"Error parsing line: '{self.line}', error at line index: {self.index}"

    @classmethod
    def at_char(cls, line: str, char_index: int) -> LineParseError:
        """Build the error from a character position in *line*."""
        return cls(line, len(line[:char_index].encode("utf-8")))


class EnvFileIOError(XenvError):
    """Reading the underlying source failed; the original error is chained."""

    def __init__(self, message: str, path: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.path = path

    def __str__(self) -> str:
        if self.path:
            return f"{self.path}: {self.message}"
        return self.message
