from __future__ import annotations

import asyncio
import logging
from typing import Any, Protocol

import httpx
from pydantic import ValidationError

from ..recipes.errors import GatewayError
from ..recipes.models import Category, Recipe
from .cache import cache_get, cache_set
from .config import DEFAULT_GATEWAY_CONFIG, GatewayConfig

logger = logging.getLogger(__name__)


class RecipeGateway(Protocol):
    """Exact-match lookups against a remote recipe provider.

    Every method raises ``GatewayError`` on transport or parse failure.
    """

    async def find_by_name(self, text: str) -> list[Recipe]: ...

    async def find_by_category(self, category: str) -> list[Recipe]: ...

    async def find_by_area(self, area: str) -> list[Recipe]: ...

    async def find_by_ingredient(self, ingredient: str) -> list[Recipe]: ...

    async def random_sample(self, count: int) -> list[Recipe]: ...

    async def find_by_id(self, recipe_id: str) -> Recipe | None: ...


class MealDBGateway:
    """``RecipeGateway`` backed by TheMealDB's JSON API."""

    def __init__(
        self,
        config: GatewayConfig = DEFAULT_GATEWAY_CONFIG,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._config = config
        self._client = (
            httpx.AsyncClient(timeout=config.timeout) if http_client is None else http_client
        )

    async def __aenter__(self) -> MealDBGateway:
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    # ── Transport ────────────────────────────────────────────────────────

    async def _fetch(
        self, path: str, params: dict[str, str] | None = None, cacheable: bool = True
    ) -> dict[str, Any]:
        url = f"{self._config.base_url.rstrip('/')}{path}"
        params = params or {}
        use_cache = cacheable and self._config.cache_enabled

        if use_cache:
            cached = cache_get(url, params)
            if cached is not None:
                return cached

        logger.debug("GET %s %s", url, params)
        try:
            resp = await self._client.get(url, params=params)
            resp.raise_for_status()
            data = resp.json()
        except (httpx.HTTPError, ValueError) as exc:
            logger.warning("Recipe provider request failed: %s", path, exc_info=True)
            raise GatewayError(f"Request to {path} failed") from exc

        if not isinstance(data, dict):
            raise GatewayError(f"Unexpected payload from {path}")

        if use_cache:
            cache_set(url, params, data, ttl=self._config.cache_ttl)
        return data

    @staticmethod
    def _meals(data: dict[str, Any]) -> list[Recipe]:
        # The provider answers "no match" with {"meals": null}.
        try:
            return [Recipe.model_validate(meal) for meal in data.get("meals") or []]
        except ValidationError as exc:
            raise GatewayError("Malformed meal in provider response") from exc

    # ── Lookups ──────────────────────────────────────────────────────────

    async def find_by_name(self, text: str) -> list[Recipe]:
        return self._meals(await self._fetch("/search.php", {"s": text}))

    async def find_by_first_letter(self, letter: str) -> list[Recipe]:
        return self._meals(await self._fetch("/search.php", {"f": letter}))

    async def find_by_id(self, recipe_id: str) -> Recipe | None:
        meals = self._meals(await self._fetch("/lookup.php", {"i": recipe_id}))
        return meals[0] if meals else None

    async def find_by_category(self, category: str) -> list[Recipe]:
        return self._meals(await self._fetch("/filter.php", {"c": category}))

    async def find_by_area(self, area: str) -> list[Recipe]:
        return self._meals(await self._fetch("/filter.php", {"a": area}))

    async def find_by_ingredient(self, ingredient: str) -> list[Recipe]:
        return self._meals(await self._fetch("/filter.php", {"i": ingredient}))

    async def random_one(self) -> Recipe | None:
        meals = self._meals(await self._fetch("/random.php", cacheable=False))
        return meals[0] if meals else None

    async def random_sample(self, count: int) -> list[Recipe]:
        """Draw ``count`` random recipes concurrently; one failure fails the sample."""
        results = await asyncio.gather(*(self.random_one() for _ in range(count)))
        return [recipe for recipe in results if recipe is not None]

    # ── Reference lists ──────────────────────────────────────────────────

    async def list_categories(self) -> list[Category]:
        data = await self._fetch("/categories.php")
        try:
            return [Category.model_validate(c) for c in data.get("categories") or []]
        except ValidationError as exc:
            raise GatewayError("Malformed category in provider response") from exc

    async def list_areas(self) -> list[str]:
        data = await self._fetch("/list.php", {"a": "list"})
        return [m["strArea"] for m in data.get("meals") or [] if m.get("strArea")]

    async def list_ingredients(self) -> list[str]:
        data = await self._fetch("/list.php", {"i": "list"})
        return [m["strIngredient"] for m in data.get("meals") or [] if m.get("strIngredient")]
