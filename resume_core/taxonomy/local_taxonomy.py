from __future__ import annotations

import json
from pathlib import Path
from typing import Mapping

from .provider import TaxonomyProvider


class LocalTaxonomy(TaxonomyProvider):
    def __init__(
        self,
        categories_path: str | Path | None = None,
        *,
        categories: Mapping[str, list[str] | tuple[str, ...]] | None = None,
    ) -> None:
        if categories is not None:
            self._categories = self._normalize(categories)
        else:
            path = Path(categories_path) if categories_path else Path(__file__).with_name("skill_categories.json")
            self._categories = self._load_categories(path)

    @staticmethod
    def _normalize(raw: Mapping[str, list[str] | tuple[str, ...]]) -> dict[str, tuple[str, ...]]:
        return {
            str(category).strip().lower(): tuple(str(member).strip().lower() for member in members)
            for category, members in raw.items()
        }

    @classmethod
    def _load_categories(cls, path: Path) -> dict[str, tuple[str, ...]]:
        with path.open("r", encoding="utf-8") as handle:
            raw = json.load(handle)
        return cls._normalize(raw)

    def category_for(self, skill: str) -> str | None:
        lowered = skill.strip().lower()
        for category, members in self._categories.items():
            if lowered == category or lowered in members:
                return category
        return None

    def members(self, category: str) -> tuple[str, ...]:
        return self._categories.get(category.strip().lower(), ())
