"""Markdown-style emphasis runs resolved into token styles.

A single `*` or `_` run is italic, a double run is bold and a triple run is
bold italic, so `*platform*` renders italic, not bold.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from resume_core.schemas.document import Token, TokenStyle

PLACEHOLDER_RE = re.compile(r"\{\{[A-Za-z0-9_]+\}\}")

_DELIMITER_CHARS = frozenset("*_")


@dataclass(frozen=True)
class _OpenDelimiter:
    char: str
    run: int


def strip_emphasis_markers(text: str) -> str:
    """Remove stray ``*``/``_`` characters outside ``{{placeholder}}`` spans."""
    parts: list[str] = []
    cursor = 0
    for match in PLACEHOLDER_RE.finditer(text):
        parts.append(re.sub(r"[*_]", "", text[cursor:match.start()]))
        parts.append(match.group(0))
        cursor = match.end()
    parts.append(re.sub(r"[*_]", "", text[cursor:]))
    return "".join(parts)


class EmphasisScanner:
    """Left-to-right scan over one text run with a stack of open delimiters.

    A delimiter opens only when the same run length appears later in the
    segment. If anything is still open at the end, every style in the run is
    dropped and the text comes back plain.
    """

    def __init__(self, segment: str) -> None:
        self._segment = segment
        self._cursor = 0
        self._buffer = ""
        self._stack: list[_OpenDelimiter] = []
        self._tokens: list[Token] = []

    def _current_style(self) -> TokenStyle | None:
        bold = any(item.run >= 2 for item in self._stack)
        italic = any(item.run in (1, 3) for item in self._stack)
        if bold and italic:
            return "bolditalic"
        if bold:
            return "bold"
        if italic:
            return "italic"
        return None

    def _flush(self) -> None:
        if not self._buffer:
            return
        self._tokens.append(Token(type="paragraph", text=self._buffer, style=self._current_style(), continued=True))
        self._buffer = ""

    def _consume_delimiter_run(self, char: str) -> None:
        segment = self._segment
        count = 1
        while self._cursor + count < len(segment) and segment[self._cursor + count] == char:
            count += 1

        remaining = count
        while remaining > 0:
            run = min(remaining, 3)
            top = self._stack[-1] if self._stack else None
            if top is not None and top.char == char and top.run == run:
                self._flush()
                self._stack.pop()
            elif segment.find(char * run, self._cursor + run) != -1:
                self._flush()
                self._stack.append(_OpenDelimiter(char=char, run=run))
            self._cursor += run
            remaining -= run

    def scan(self) -> list[Token]:
        segment = self._segment
        while self._cursor < len(segment):
            placeholder = PLACEHOLDER_RE.match(segment, self._cursor)
            if placeholder:
                self._buffer += placeholder.group(0)
                self._cursor = placeholder.end()
                continue
            char = segment[self._cursor]
            if char in _DELIMITER_CHARS:
                self._consume_delimiter_run(char)
                continue
            self._buffer += char
            self._cursor += 1

        self._flush()
        if self._stack:
            for token in self._tokens:
                token.style = None
        for token in self._tokens:
            token.text = strip_emphasis_markers(token.text or "")
        return [token for token in self._tokens if token.text]


def parse_emphasis(segment: str) -> list[Token]:
    return EmphasisScanner(segment).scan()
