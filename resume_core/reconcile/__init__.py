from .sections import (
    PLACEHOLDER_TEXT,
    ensure_required_sections,
    format_experience,
    merge_duplicate_sections,
    prune_empty_sections,
)
from .skills import split_skills
from .summary import contains_contact_info, is_job_entry, move_summary_job_entries

__all__ = [
    "PLACEHOLDER_TEXT",
    "split_skills",
    "move_summary_job_entries",
    "contains_contact_info",
    "is_job_entry",
    "ensure_required_sections",
    "format_experience",
    "merge_duplicate_sections",
    "prune_empty_sections",
]
