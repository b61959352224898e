from .document import Document, Entry, Section, Token, flatten_entry, item_text
from .entities import CertificationEntry, ContactDetails, ExperienceEntry, LanguageEntry
from .inputs import (
    ParseOptions,
    PlainTextResume,
    RawSection,
    ResumeSource,
    StructuredResume,
    SupplementaryProfile,
)
from .metrics import AtsScoreResult, Metric, MetricDelta, Rating, ScoreBreakdown, breakdown_mapping

__all__ = [
    "Token",
    "Entry",
    "Section",
    "Document",
    "flatten_entry",
    "item_text",
    "ExperienceEntry",
    "CertificationEntry",
    "ContactDetails",
    "LanguageEntry",
    "RawSection",
    "StructuredResume",
    "PlainTextResume",
    "ResumeSource",
    "SupplementaryProfile",
    "ParseOptions",
    "Metric",
    "MetricDelta",
    "Rating",
    "ScoreBreakdown",
    "AtsScoreResult",
    "breakdown_mapping",
]
