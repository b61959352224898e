from .certifications import certification_from_record, extract_certifications, parse_certification_line
from .contact import (
    dedupe_contact_lines,
    detect_likely_location,
    extract_contact_details,
    filter_sensitive_contact_lines,
    parse_contact_line,
)
from .dates import parse_resume_date, recency_sort_key
from .education import extract_education
from .experience import extract_experience, flatten_roles, parse_experience_line, sort_by_recency
from .languages import extract_languages, parse_language_line

__all__ = [
    "extract_experience",
    "parse_experience_line",
    "flatten_roles",
    "sort_by_recency",
    "extract_education",
    "extract_languages",
    "parse_language_line",
    "extract_certifications",
    "parse_certification_line",
    "certification_from_record",
    "extract_contact_details",
    "detect_likely_location",
    "parse_contact_line",
    "dedupe_contact_lines",
    "filter_sensitive_contact_lines",
    "parse_resume_date",
    "recency_sort_key",
]
