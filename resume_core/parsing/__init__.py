# The assembler depends on reconcile and extract, which import from this
# package, so it is imported directly as resume_core.parsing.assembler.
from .emphasis import parse_emphasis, strip_emphasis_markers
from .headings import DEFAULT_HEADING_VOCABULARY, HeadingVocabulary, heading_key, normalize_heading
from .tokenizer import parse_line
from .urls import link_label, normalize_url, strip_url_punctuation

__all__ = [
    "parse_line",
    "parse_emphasis",
    "strip_emphasis_markers",
    "HeadingVocabulary",
    "DEFAULT_HEADING_VOCABULARY",
    "normalize_heading",
    "heading_key",
    "normalize_url",
    "strip_url_punctuation",
    "link_label",
]
