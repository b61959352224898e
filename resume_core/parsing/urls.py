from __future__ import annotations

import re
from types import MappingProxyType
from typing import Mapping
from urllib.parse import urlsplit

DEFAULT_LINK_LABELS: Mapping[str, str] = MappingProxyType(
    {
        "linkedin.com": "LinkedIn",
        "github.com": "GitHub",
        "credly.com": "Credly",
    }
)

_LEADING_WRAPPERS_RE = re.compile(r"^[\[({<]+")
_TRAILING_PUNCTUATION = ")>.,;:!]"
_SCHEME_RE = re.compile(r"^(?:https?|mailto|tel):", re.IGNORECASE)
_LINKEDIN_HOST_RE = re.compile(r"^(?:[a-z0-9.-]*\.)?linkedin\.com", re.IGNORECASE)
_CREDLY_HOST_RE = re.compile(r"^(?:[a-z0-9.-]*\.)?credly\.com", re.IGNORECASE)
_CREDLY_BASE = "https://www.credly.com"


def strip_url_punctuation(url: str) -> str:
    trimmed = _LEADING_WRAPPERS_RE.sub("", str(url or "").strip())
    return trimmed.rstrip(_TRAILING_PUNCTUATION)


def normalize_url(url: str) -> str:
    """Return an absolute URL, or an empty string when the value is not link-like."""
    trimmed = strip_url_punctuation(url)
    if not trimmed:
        return ""
    if _SCHEME_RE.match(trimmed):
        return trimmed
    if trimmed.startswith("//"):
        return f"https:{trimmed}"
    if trimmed.startswith("/"):
        return f"{_CREDLY_BASE}{trimmed}"
    if trimmed.lower().startswith("www."):
        return f"https://{trimmed}"
    if _LINKEDIN_HOST_RE.match(trimmed) or _CREDLY_HOST_RE.match(trimmed):
        return f"https://{trimmed}"
    return ""


def link_label(href: str, labels: Mapping[str, str] | None = None) -> str:
    table = DEFAULT_LINK_LABELS if labels is None else labels
    hostname = (urlsplit(href).hostname or "").lower()
    if hostname.startswith("www."):
        hostname = hostname[4:]
    if hostname in table:
        return table[hostname]
    lowered = href.lower()
    for host, label in table.items():
        if hostname.endswith(f".{host}") or (not hostname and host in lowered):
            return label
    return href
