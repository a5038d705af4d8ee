# Copyright (c) 2026 Ramin Firoozye
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Parse single .env lines into ``(key, value)`` pairs.

Supported syntax, one assignment per line:
  - blank lines and ``#`` comments
  - optional ``export`` prefix (``export`` on its own is also a valid key)
  - ``'...'`` literal spans, ``"..."`` spans with escapes and substitution
  - backslash escapes ``\\\\ \\' \\" \\$ \\<space>`` and ``\\n``
  - ``$NAME`` and ``${NAME}`` substitution
  - trailing ``# comment`` after a value, separated by whitespace
"""

from __future__ import annotations

import enum
import string

from xenv.errors import LineParseError
from xenv.substitution import SubstitutionResolver

_KEY_START = frozenset(string.ascii_letters + "_")
_KEY_CHARS = _KEY_START | frozenset(string.digits + ".")

_ESCAPES = {"\\": "\\", "'": "'", '"': '"', "$": "$", " ": " ", "n": "\n"}


class ScanMode(enum.Enum):
    """What the value scanner is in the middle of."""

    TEXT = "text"  # unquoted, or inside "..." when weak_quote is set
    STRONG_QUOTE = "strong_quote"  # inside '...'
    ESCAPE = "escape"  # previous character was an unconsumed backslash
    BLOCK = "block"  # $NAME
    BRACED_BLOCK = "braced_block"  # ${NAME}
    TRAILING = "trailing"  # value ended; only blanks or a comment may follow


class ValueScanner:
    """Single-pass scanner turning the right-hand side of ``=`` into a string.

    ``weak_quote`` is the only state kept outside :attr:`mode`: escapes and
    substitutions nest inside ``"..."`` and return to it when they finish.
    """

    def __init__(self, resolver: SubstitutionResolver, line: str, offset: int = 0) -> None:
        self.resolver = resolver
        self.line = line
        self.offset = offset
        self.mode = ScanMode.TEXT
        self.weak_quote = False
        self.done = False
        self._name: list[str] = []
        self._output: list[str] = []

    def scan(self, text: str) -> str:
        for index, char in enumerate(text):
            self.feed(index, char)
            if self.done:
                break
        self.finish(len(text))
        return "".join(self._output)

    def feed(self, index: int, char: str) -> None:
        """Consume one character; *index* is its position within the value."""
        mode = self.mode
        if mode is ScanMode.TRAILING:
            self._scan_trailing(index, char)
        elif mode is ScanMode.ESCAPE:
            self._scan_escape(index, char)
        elif mode is ScanMode.STRONG_QUOTE:
            self._scan_strong_quote(char)
        elif mode is ScanMode.BLOCK:
            self._scan_block(index, char)
        elif mode is ScanMode.BRACED_BLOCK:
            self._scan_braced_block(char)
        else:
            self._scan_text(index, char)

    def finish(self, length: int) -> None:
        if self.mode in (ScanMode.STRONG_QUOTE, ScanMode.BRACED_BLOCK) or self.weak_quote:
            raise self._error(max(length - 1, 0))
        if self.mode is ScanMode.BLOCK:
            self._substitute()
            self.mode = ScanMode.TEXT

    def _error(self, index: int) -> LineParseError:
        return LineParseError.at_char(self.line, self.offset + index)

    def _substitute(self) -> None:
        name = "".join(self._name)
        self._name.clear()
        self._output.append(self.resolver.resolve(name))

    def _scan_trailing(self, index: int, char: str) -> None:
        if char in " \t":
            return
        if char == "#":
            self.done = True
            return
        raise self._error(index)

    def _scan_escape(self, index: int, char: str) -> None:
        try:
            self._output.append(_ESCAPES[char])
        except KeyError:
            raise self._error(index) from None
        self.mode = ScanMode.TEXT

    def _scan_strong_quote(self, char: str) -> None:
        if char == "'":
            self.mode = ScanMode.TEXT
        else:
            self._output.append(char)

    def _scan_block(self, index: int, char: str) -> None:
        if char.isalnum():
            self._name.append(char)
            return
        if char == "{" and not self._name:
            self.mode = ScanMode.BRACED_BLOCK
            return
        self._substitute()
        self.mode = ScanMode.TEXT
        # The terminator is ordinary input: a quote, backslash, blank or
        # another ``$`` keeps its usual meaning.  So a blank ends the value
        # and ``$A # c`` drops the comment instead of keeping " # c".
        self._scan_text(index, char)

    def _scan_braced_block(self, char: str) -> None:
        if char == "}":
            self._substitute()
            self.mode = ScanMode.TEXT
        else:
            self._name.append(char)

    def _scan_text(self, index: int, char: str) -> None:
        if char == "$":
            self.mode = ScanMode.BLOCK
        elif self.weak_quote:
            if char == '"':
                self.weak_quote = False
            elif char == "\\":
                self.mode = ScanMode.ESCAPE
            else:
                self._output.append(char)
        elif char == "'":
            self.mode = ScanMode.STRONG_QUOTE
        elif char == '"':
            self.weak_quote = True
        elif char == "\\":
            self.mode = ScanMode.ESCAPE
        elif char in " \t":
            self.mode = ScanMode.TRAILING
        else:
            self._output.append(char)


def parse_value(
    text: str,
    resolver: SubstitutionResolver,
    line: str | None = None,
    offset: int = 0,
) -> str:
    """Resolve quoting, escapes and substitutions in *text*.

    *line* and *offset* only affect error reporting: the raised
    :class:`LineParseError` names *line* (default *text*) and the byte offset
    of the failing character, *offset* characters into *line* being where
    *text* starts.
    """
    scanner = ValueScanner(resolver, text if line is None else line, offset)
    return scanner.scan(text)


class LineParser:
    """Parse one raw line, recording the result in the resolver's table."""

    def __init__(self, line: str, resolver: SubstitutionResolver) -> None:
        self.original_line = line
        self.resolver = resolver
        self.line = line.rstrip()
        self.pos = 0

    def parse(self) -> tuple[str, str] | None:
        self._skip_whitespace()
        if not self.line or self.line.startswith("#"):
            return None

        key = self._parse_key()
        self._skip_whitespace()

        # "export" is either a prefix or a key of its own
        if key == "export":
            if not self._accept_equal():
                key = self._parse_key()
                self._skip_whitespace()
                self._expect_equal()
        else:
            self._expect_equal()
        self._skip_whitespace()

        if not self.line or self.line.startswith("#"):
            self.resolver.record(key, None)
            return key, ""

        value = parse_value(self.line, self.resolver, line=self.original_line, offset=self.pos)
        self.resolver.record(key, value)
        return key, value

    def _error(self) -> LineParseError:
        return LineParseError.at_char(self.original_line, self.pos)

    def _advance(self, count: int) -> None:
        self.pos += count
        self.line = self.line[count:]

    def _skip_whitespace(self) -> None:
        self._advance(len(self.line) - len(self.line.lstrip()))

    def _parse_key(self) -> str:
        if not self.line or self.line[0] not in _KEY_START:
            raise self._error()
        end = 1
        while end < len(self.line) and self.line[end] in _KEY_CHARS:
            end += 1
        key = self.line[:end]
        self._advance(end)
        return key

    def _accept_equal(self) -> bool:
        if not self.line.startswith("="):
            return False
        self._advance(1)
        return True

    def _expect_equal(self) -> None:
        if not self._accept_equal():
            raise self._error()


def parse_line(line: str, resolver: SubstitutionResolver) -> tuple[str, str] | None:
    """Parse *line*; ``None`` for blank and comment-only lines."""
    return LineParser(line, resolver).parse()
