from __future__ import annotations

import logging
import re
from typing import Mapping

from resume_core.schemas.document import STRUCTURAL_TOKEN_TYPES, Token

from .emphasis import parse_emphasis, strip_emphasis_markers
from .urls import link_label, normalize_url

logger = logging.getLogger(__name__)

BULLET_PREFIX_RE = re.compile(r"^[\-*–•]\s+")
_BREAK_SPLIT_RE = re.compile(r"(\n|\t)")
_LINK_RE = re.compile(
    r"\[([^\]]+)\]\(([^)\s]+)\)"
    r"|(https?://\S+|www\.\S+|(?:[a-z0-9.-]*linkedin\.com|credly\.com)\S*)",
    re.IGNORECASE,
)
_BARE_TRAILING = ")>.,;:"


class _LineTokenizer:
    def __init__(self, *, preserve_link_text: bool, link_labels: Mapping[str, str] | None) -> None:
        self.preserve_link_text = preserve_link_text
        self.link_labels = link_labels
        self.tokens: list[Token] = []

    def _flush_text(self, segment: str, force_bold: bool) -> None:
        if not segment:
            return
        styled = parse_emphasis(segment)
        if force_bold:
            for token in styled:
                if token.style == "italic":
                    token.style = "bolditalic"
                elif token.style not in ("bold", "bolditalic"):
                    token.style = "bold"
        self.tokens.extend(styled)

    def _append_link(self, text: str, href: str, force_bold: bool) -> None:
        self.tokens.append(
            Token(
                type="link",
                text=strip_emphasis_markers(text),
                href=href,
                style="bold" if force_bold else None,
                continued=True,
            )
        )

    def _process_piece(self, piece: str, force_bold: bool) -> None:
        position = 0
        while True:
            match = _LINK_RE.search(piece, position)
            if match is None:
                break

            leading_parens = 0
            if match.start() > position:
                segment = piece[position:match.start()]
                kept = segment.rstrip("(")
                leading_parens = len(segment) - len(kept)
                self._flush_text(kept, force_bold)
            end = match.end()

            if match.group(1) is not None:
                href = normalize_url(match.group(2))
                if not href:
                    logger.debug("link_rejected raw=%s", match.group(2))
                    self._flush_text("(" * leading_parens + match.group(0), force_bold)
                    position = end
                    continue
                self._append_link(match.group(1), href, force_bold)
            else:
                raw = match.group(3)
                trailing = ""
                while raw and raw[-1] in _BARE_TRAILING:
                    trailing = raw[-1] + trailing
                    raw = raw[:-1]
                href = normalize_url(raw)
                if not href:
                    logger.debug("link_rejected raw=%s", raw)
                    self._flush_text("(" * leading_parens + match.group(0), force_bold)
                    position = end
                    continue
                label = raw if self.preserve_link_text else link_label(href, self.link_labels)
                self._append_link(label, href, force_bold)
                while leading_parens and trailing.startswith(")"):
                    trailing = trailing[1:]
                    leading_parens -= 1
                self._flush_text(trailing, force_bold)

            while leading_parens and end < len(piece) and piece[end] == ")":
                end += 1
                leading_parens -= 1
            position = end

        if position < len(piece):
            self._flush_text(piece[position:], force_bold)

    def process_part(self, part: str, force_bold: bool = False) -> None:
        for piece in _BREAK_SPLIT_RE.split(part):
            if piece == "\n":
                self.tokens.append(Token.newline())
            elif piece == "\t":
                self.tokens.append(Token.tab())
            elif piece:
                self._process_piece(piece, force_bold)


def parse_line(
    text: str,
    *,
    preserve_link_text: bool = False,
    link_labels: Mapping[str, str] | None = None,
) -> list[Token]:
    """Tokenize one logical resume line.

    A leading ``-``/``*``/``•`` marker becomes a ``bullet`` token. Pipe separated
    lines follow the job header convention: the first segment is bold and the
    following segments are joined with ``jobsep`` tokens.
    """
    tokenizer = _LineTokenizer(preserve_link_text=preserve_link_text, link_labels=link_labels)
    text = text or ""

    bullet_match = BULLET_PREFIX_RE.match(text)
    if bullet_match:
        tokenizer.tokens.append(Token.bullet())
        text = text[bullet_match.end():]

    segments = text.split("|")
    if len(segments) > 1:
        leading = segments[0].strip()
        if leading:
            tokenizer.process_part(leading, force_bold=True)
        for segment in segments[1:]:
            trimmed = segment.strip()
            if not trimmed:
                continue
            if not leading and not tokenizer.tokens:
                tokenizer.process_part(trimmed, force_bold=True)
                continue
            tokenizer.tokens.append(Token.jobsep())
            tokenizer.tokens.append(Token.paragraph(" "))
            tokenizer.process_part(trimmed, force_bold=False)
    else:
        tokenizer.process_part(text)

    if not tokenizer.tokens:
        return [Token(type="paragraph", text=strip_emphasis_markers(text), continued=False)]

    tokens = [token for token in tokenizer.tokens if token.type != "paragraph" or token.text]
    last_index = len(tokens) - 1
    for index, token in enumerate(tokens):
        if token.type in STRUCTURAL_TOKEN_TYPES:
            continue
        token.continued = index < last_index
    return tokens
