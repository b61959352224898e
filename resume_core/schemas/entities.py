from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ExperienceEntry(_CamelModel):
    company: str = ""
    title: str = ""
    start_date: str = ""
    end_date: str = ""
    responsibilities: list[str] = Field(default_factory=list)

    def identity_key(self) -> tuple[str, str, str, str]:
        return (
            self.company.lower(),
            self.title.lower(),
            self.start_date.lower(),
            self.end_date.lower(),
        )


class CertificationEntry(_CamelModel):
    name: str = ""
    provider: str = ""
    url: str = ""
    date: str = ""

    def identity_key(self) -> tuple[str, str]:
        return (self.name.lower(), self.provider.lower())


class ContactDetails(_CamelModel):
    email: str = ""
    phone: str = ""
    linkedin: str = ""
    city_state: str = ""
    contact_lines: list[str] = Field(default_factory=list)


class LanguageEntry(_CamelModel):
    language: str = ""
    proficiency: str = ""
