from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache

from ..recipes.models import Recipe


@dataclass(frozen=True)
class SignalSet:
    category: str | None
    area: str | None
    primary_ingredient: str | None


def primary_ingredient_token(first_ingredient: str | None) -> str | None:
    """First whitespace-delimited word of the slot-1 ingredient, lowercased."""
    if not first_ingredient:
        return None
    words = first_ingredient.split()
    return words[0].lower() if words else None


@lru_cache(maxsize=256)
def _signals(
    recipe_id: str,
    category: str | None,
    area: str | None,
    first_ingredient: str | None,
) -> SignalSet:
    return SignalSet(
        category=category.strip() if category and category.strip() else None,
        area=area.strip() if area and area.strip() else None,
        primary_ingredient=primary_ingredient_token(first_ingredient),
    )


def derive_signals(recipe: Recipe) -> SignalSet:
    # Cached on the fields the signals depend on, so a change to any of
    # them yields a fresh SignalSet.
    return _signals(recipe.id, recipe.category, recipe.area, recipe.first_ingredient)
