from __future__ import annotations

import json
import logging
import re
from typing import Any

from pydantic import TypeAdapter, ValidationError

from resume_core.core.config import settings
from resume_core.reconcile import (
    ensure_required_sections,
    merge_duplicate_sections,
    move_summary_job_entries,
    prune_empty_sections,
    split_skills,
)
from resume_core.schemas.document import Document, Section, Token
from resume_core.schemas.inputs import (
    ParseOptions,
    PlainTextResume,
    RawSection,
    ResumeSource,
    StructuredResume,
)

from .headings import DEFAULT_HEADING_VOCABULARY, HeadingVocabulary, normalize_heading
from .tokenizer import BULLET_PREFIX_RE, parse_line

logger = logging.getLogger(__name__)

_ATX_HEADING_RE = re.compile(r"^#{1,6}\s+(.*)$")
_INDENT_RE = re.compile(r"^([ \t]+)(\S.*)$")
_NAME_MARKUP_RE = re.compile(r"[*_]+")
_NAME_HASHES_RE = re.compile(r"^#{1,6}\s+")

_SOURCE_ADAPTER: TypeAdapter[ResumeSource] = TypeAdapter(ResumeSource)


def normalize_name(name: str) -> str:
    cleaned = _NAME_MARKUP_RE.sub("", _NAME_HASHES_RE.sub("", str(name or "").strip()))
    return re.sub(r"\s+", " ", cleaned).strip()


def _raw_items(value: Any) -> list[str]:
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        items: list[str] = []
        for item in value:
            items.extend(_raw_items(item))
        return items
    text = str(value)
    return [text] if text.strip() else []


def _structured_from_json(data: dict[str, Any]) -> StructuredResume:
    name = str(data.get("name") or "Resume")
    sections_value = data.get("sections")
    if isinstance(sections_value, list):
        sections = [
            RawSection(
                heading=str(section.get("heading") or ""),
                items=_raw_items(section.get("items", section.get("content"))),
            )
            for section in sections_value
            if isinstance(section, dict)
        ]
    else:
        sections = [
            RawSection(heading=str(heading), items=_raw_items(content))
            for heading, content in data.items()
            if heading != "name"
        ]
    return StructuredResume(name=name, sections=sections)


def resolve_resume_source(text: str | dict[str, Any] | None) -> ResumeSource:
    """Classify raw input once: a JSON resume object or line-oriented text."""
    if isinstance(text, dict):
        data: Any = text
    else:
        raw = str(text or "")
        stripped = raw.strip()
        if not stripped.startswith("{"):
            return PlainTextResume(text=raw)
        try:
            data = json.loads(stripped)
        except json.JSONDecodeError as exc:
            logger.debug("structured_parse_failed error=%s", exc)
            return PlainTextResume(text=raw)
        if not isinstance(data, dict):
            return PlainTextResume(text=raw)

    if data.get("kind") in {"structured", "plain"}:
        try:
            return _SOURCE_ADAPTER.validate_python(data)
        except ValidationError as exc:
            logger.debug("tagged_source_invalid error=%s", exc)
    return _structured_from_json(data)


def _bulleted(tokens: list[Token]) -> list[Token]:
    if any(token.type == "bullet" for token in tokens):
        return tokens
    return [Token.bullet(), *tokens]


def _parse_structured(source: StructuredResume, options: ParseOptions) -> tuple[str, list[Section]]:
    sections = [
        Section(
            heading=raw.heading,
            items=[_bulleted(parse_line(item, preserve_link_text=options.preserve_link_text)) for item in raw.items],
        )
        for raw in source.sections
    ]
    return normalize_name(source.name or "Resume"), sections


def _parse_lines(
    source: PlainTextResume,
    options: ParseOptions,
    vocabulary: HeadingVocabulary,
) -> tuple[str, list[Section]]:
    lines = source.text.splitlines()
    while lines and not lines[0].strip():
        lines.pop(0)
    name = normalize_name(lines.pop(0)) if lines else ""

    default_heading = options.default_heading or settings.default_heading
    plain_heading_re = vocabulary.plain_heading_pattern()
    sections: list[Section] = []
    current_section = Section(heading=default_heading)
    current_item: list[Token] | None = None

    def flush_item() -> None:
        nonlocal current_item
        if current_item:
            current_item = [token for token in current_item if token.type != "paragraph" or token.text]
            current_section.items.append(current_item)
        current_item = None

    def start_section(heading: str) -> None:
        nonlocal current_section
        flush_item()
        if current_section.items or current_section.heading != default_heading:
            sections.append(current_section)
        current_section = Section(heading=heading.strip())

    def tokenize(text: str) -> list[Token]:
        return parse_line(text, preserve_link_text=options.preserve_link_text)

    for line in lines:
        if not line.strip():
            continue
        trimmed = line.strip()

        heading = _ATX_HEADING_RE.match(trimmed)
        if heading:
            start_section(heading.group(1))
            continue
        if plain_heading_re.match(trimmed.rstrip(":").strip()):
            start_section(trimmed.rstrip(":"))
            continue

        if BULLET_PREFIX_RE.match(line):
            flush_item()
            current_item = tokenize(line)
            continue

        indented = _INDENT_RE.match(line)
        if indented and current_item is not None:
            current_item.append(Token.newline())
            current_item.extend(Token.tab() for _ in range(indented.group(1).count("\t")))
            current_item.extend(tokenize(indented.group(2)))
            continue

        flush_item()
        current_item = tokenize(trimmed)

    flush_item()
    if current_section.items or current_section.heading != default_heading:
        sections.append(current_section)
    return name, sections


def _is_text(token: Token) -> bool:
    return token.type in {"paragraph", "link"} and bool(token.text)


def repair_spacing(tokens: list[Token]) -> list[Token]:
    """Insert a space run between adjacent text runs that would otherwise fuse."""
    repaired: list[Token] = []
    for token in tokens:
        previous = repaired[-1] if repaired else None
        if (
            previous is not None
            and _is_text(previous)
            and _is_text(token)
            and not previous.text[-1].isspace()
            and not token.text[0].isspace()
        ):
            repaired.append(Token.paragraph(" "))
        repaired.append(token)
    return repaired


def _canonicalize(sections: list[Section], vocabulary: HeadingVocabulary) -> list[Section]:
    for section in sections:
        section.heading = normalize_heading(section.heading, vocabulary)
    return sections


def parse_content(
    text: str | dict[str, Any] | None,
    options: ParseOptions | None = None,
    *,
    vocabulary: HeadingVocabulary | None = None,
) -> Document:
    """Turn raw resume text (or a JSON resume) into a reconciled Document."""
    options = options or ParseOptions()
    vocab = vocabulary or DEFAULT_HEADING_VOCABULARY

    source = resolve_resume_source(text)
    if isinstance(source, StructuredResume):
        name, sections = _parse_structured(source, options)
    else:
        name, sections = _parse_lines(source, options, vocab)

    for section in sections:
        section.items = [repair_spacing(tokens) for tokens in section.items]

    sections = split_skills(sections, options.job_skills)
    sections = move_summary_job_entries(sections, vocab)
    sections = _canonicalize(sections, vocab)
    sections = prune_empty_sections(merge_duplicate_sections(sections, vocab))

    if not options.skip_required_sections:
        sections = ensure_required_sections(sections, options.profile, vocab)
        sections = _canonicalize(sections, vocab)
        sections = prune_empty_sections(merge_duplicate_sections(sections, vocab))

    logger.info("document_parsed mode=%s sections=%s", source.kind, len(sections))
    return Document(name=name or "Resume", sections=sections)
