from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field

from .entities import CertificationEntry, ExperienceEntry


class RawSection(BaseModel):
    heading: str = ""
    items: list[str] = Field(default_factory=list)


class StructuredResume(BaseModel):
    kind: Literal["structured"] = "structured"
    name: str = "Resume"
    sections: list[RawSection] = Field(default_factory=list)


class PlainTextResume(BaseModel):
    kind: Literal["plain"] = "plain"
    text: str = ""


ResumeSource = Annotated[Union[StructuredResume, PlainTextResume], Field(discriminator="kind")]


class SupplementaryProfile(BaseModel):
    """Data gathered outside the resume text, already coerced to entity shapes."""

    resume_experience: list[ExperienceEntry] = Field(default_factory=list)
    profile_experience: list[ExperienceEntry] = Field(default_factory=list)
    resume_education: list[str] = Field(default_factory=list)
    profile_education: list[str] = Field(default_factory=list)
    resume_certifications: list[CertificationEntry] = Field(default_factory=list)
    profile_certifications: list[CertificationEntry] = Field(default_factory=list)
    verified_certifications: list[CertificationEntry] = Field(default_factory=list)
    verification_profile_url: str = ""
    linkedin_profile_url: str = ""
    job_title: str = ""
    project: str = ""


class ParseOptions(BaseModel):
    default_heading: str = ""
    preserve_link_text: bool = False
    job_skills: list[str] = Field(default_factory=list)
    skip_required_sections: bool = False
    profile: SupplementaryProfile = Field(default_factory=SupplementaryProfile)
