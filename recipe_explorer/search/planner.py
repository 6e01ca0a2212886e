from __future__ import annotations

import logging

from ..gateway.client import RecipeGateway
from ..recipes.errors import GatewayError, SearchFailed
from ..recipes.models import Recipe, SearchFilters
from .config import DEFAULT_SEARCH_CONFIG, SearchConfig

logger = logging.getLogger(__name__)


def matches_query(recipe: Recipe, query: str) -> bool:
    """True if ``query`` occurs (case-insensitively) in the name, instructions or tags.

    Missing instructions or tags are skipped rather than counted as a match.
    """
    needle = query.lower()
    for text in (recipe.name, recipe.instructions, recipe.tags):
        if text is not None and needle in text.lower():
            return True
    return False


async def _fetch_candidates(
    gateway: RecipeGateway,
    query: str,
    filters: SearchFilters,
    config: SearchConfig,
) -> list[Recipe]:
    # The provider has no combined-filter endpoint: one dimension per call,
    # ingredient > category > area > free text > random.
    if filters.ingredient:
        logger.debug("Search plan: ingredient=%s", filters.ingredient)
        return await gateway.find_by_ingredient(filters.ingredient)
    if filters.category:
        logger.debug("Search plan: category=%s", filters.category)
        return await gateway.find_by_category(filters.category)
    if filters.area:
        logger.debug("Search plan: area=%s", filters.area)
        return await gateway.find_by_area(filters.area)
    if query:
        logger.debug("Search plan: name=%s", query)
        return await gateway.find_by_name(query)
    logger.debug("Search plan: random sample of %d", config.random_sample_size)
    return await gateway.random_sample(config.random_sample_size)


async def plan(
    gateway: RecipeGateway,
    query: str,
    filters: SearchFilters | None = None,
    config: SearchConfig = DEFAULT_SEARCH_CONFIG,
) -> list[Recipe]:
    """
    Run a search with one remote lookup, then narrow by free text.

    Raises ``SearchFailed`` if the lookup fails; no partial results are
    returned in that case.
    """
    query = query.strip()
    filters = filters or SearchFilters()

    try:
        recipes = await _fetch_candidates(gateway, query, filters, config)
    except GatewayError as exc:
        raise SearchFailed("Failed to search recipes") from exc

    if query and recipes:
        recipes = [r for r in recipes if matches_query(r, query)]

    return recipes
