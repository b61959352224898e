from __future__ import annotations

import logging
from typing import Any

from resume_core.extract import (
    certification_from_record,
    extract_certifications,
    extract_education,
    extract_experience,
)
from resume_core.features import normalize_skill_list_input
from resume_core.parsing.assembler import parse_content
from resume_core.parsing.headings import HeadingVocabulary
from resume_core.schemas.document import Document
from resume_core.schemas.entities import CertificationEntry
from resume_core.schemas.inputs import ParseOptions, SupplementaryProfile

logger = logging.getLogger(__name__)


def _certifications(value: Any) -> list[CertificationEntry]:
    if isinstance(value, list):
        return [certification_from_record(item) for item in value if item]
    return extract_certifications(value)


def build_supplementary_profile(
    *,
    resume_text: str = "",
    profile_experience: Any = None,
    profile_education: Any = None,
    profile_certifications: Any = None,
    verified_certifications: Any = None,
    verification_profile_url: str = "",
    linkedin_profile_url: str = "",
    job_title: str = "",
    project: str = "",
) -> SupplementaryProfile:
    """Coerce loosely shaped profile data into typed entities."""
    return SupplementaryProfile(
        resume_experience=extract_experience(resume_text),
        profile_experience=extract_experience(profile_experience),
        resume_education=extract_education(resume_text),
        profile_education=extract_education(profile_education),
        resume_certifications=extract_certifications(resume_text),
        profile_certifications=_certifications(profile_certifications),
        verified_certifications=_certifications(verified_certifications),
        verification_profile_url=verification_profile_url or "",
        linkedin_profile_url=linkedin_profile_url or "",
        job_title=job_title or "",
        project=project or "",
    )


def build_document(
    text: str,
    *,
    job_skills: Any = None,
    profile: SupplementaryProfile | None = None,
    preserve_link_text: bool = False,
    skip_required_sections: bool = False,
    vocabulary: HeadingVocabulary | None = None,
) -> Document:
    options = ParseOptions(
        preserve_link_text=preserve_link_text,
        job_skills=normalize_skill_list_input(job_skills),
        skip_required_sections=skip_required_sections,
        profile=profile or SupplementaryProfile(),
    )
    document = parse_content(text, options, vocabulary=vocabulary)
    logger.info(
        "document_built name=%s sections=%s job_skills=%s",
        document.name,
        len(document.sections),
        len(options.job_skills),
    )
    return document
