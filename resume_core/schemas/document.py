from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

TokenType = Literal["bullet", "newline", "tab", "link", "paragraph", "jobsep"]
TokenStyle = Literal["bold", "italic", "bolditalic"]

STRUCTURAL_TOKEN_TYPES = frozenset({"newline", "tab", "jobsep"})


class Token(BaseModel):
    type: TokenType
    text: str | None = None
    href: str | None = None
    style: TokenStyle | None = None
    continued: bool | None = None

    @classmethod
    def bullet(cls) -> "Token":
        return cls(type="bullet")

    @classmethod
    def newline(cls) -> "Token":
        return cls(type="newline")

    @classmethod
    def tab(cls) -> "Token":
        return cls(type="tab")

    @classmethod
    def jobsep(cls) -> "Token":
        return cls(type="jobsep")

    @classmethod
    def paragraph(cls, text: str, style: TokenStyle | None = None) -> "Token":
        return cls(type="paragraph", text=text, style=style)

    @classmethod
    def link(cls, text: str, href: str, style: TokenStyle | None = None) -> "Token":
        return cls(type="link", text=text, href=href, style=style)


class Entry(BaseModel):
    """Renderer-agnostic view of one section item."""

    text: str
    bullet: bool = False
    links: list[Token] = Field(default_factory=list)


class Section(BaseModel):
    heading: str
    items: list[list[Token]] = Field(default_factory=list)

    def entries(self) -> list[Entry]:
        return [flatten_entry(tokens) for tokens in self.items]


class Document(BaseModel):
    name: str
    sections: list[Section] = Field(default_factory=list)

    def section(self, heading: str) -> Section | None:
        key = heading.strip().lower()
        for section in self.sections:
            if section.heading.lower() == key:
                return section
        return None


def item_text(tokens: list[Token], *, separator: str = "") -> str:
    return separator.join(token.text for token in tokens if token.text).strip()


def flatten_entry(tokens: list[Token]) -> Entry:
    return Entry(
        text=item_text(tokens),
        bullet=any(token.type == "bullet" for token in tokens),
        links=[token for token in tokens if token.type == "link" and token.href],
    )
