from __future__ import annotations

from typing import Protocol


class TaxonomyProvider(Protocol):
    def category_for(self, skill: str) -> str | None:
        """Return the umbrella category a skill folds into, if any."""

    def members(self, category: str) -> tuple[str, ...]:
        """Return the lowercase skills grouped under a category."""
