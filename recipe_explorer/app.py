from __future__ import annotations

import asyncio
import logging
import os
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import Depends, FastAPI, HTTPException, Query, Request
from starlette.middleware.sessions import SessionMiddleware

from .favorites.store import add_favorite, is_favorite, list_favorites, remove_favorite
from .gateway.cache import get_cache_stats
from .gateway.client import MealDBGateway
from .recipes.errors import FavoritesFull, GatewayError, RelatedFetchFailed, SearchFailed
from .recipes.facets import (
    categorize_by_mood,
    cooking_time_bucket,
    estimate_cooking_time,
    youtube_embed_url,
)
from .recipes.models import (
    CookingTime,
    Diet,
    FavoriteRecipe,
    FavoritesResponse,
    Mood,
    Recipe,
    RecipeDetail,
    RelatedResponse,
    SearchFilters,
    SearchResponse,
)
from .related.aggregator import relate
from .related.config import DEFAULT_RELATED_CONFIG
from .search.config import DEFAULT_SEARCH_CONFIG
from .search.planner import plan

logger = logging.getLogger(__name__)

_gateway: MealDBGateway | None = None


def get_gateway() -> MealDBGateway:
    """Return the shared provider gateway, creating it on first call."""
    global _gateway
    if _gateway is None:
        _gateway = MealDBGateway()
    return _gateway


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    yield
    global _gateway
    if _gateway is not None:
        await _gateway.aclose()
        _gateway = None


app = FastAPI(title="Recipe Explorer API", version="1.0.0", lifespan=lifespan)
app.add_middleware(
    SessionMiddleware,
    secret_key=os.environ.get("SESSION_SECRET", "recipe-explorer-secret-change-in-production"),
)


# ── Public endpoints ─────────────────────────────────────────────────────


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/metadata")
async def metadata(gateway: MealDBGateway = Depends(get_gateway)) -> dict:
    try:
        categories, areas, ingredients = await asyncio.gather(
            gateway.list_categories(),
            gateway.list_areas(),
            gateway.list_ingredients(),
        )
    except GatewayError:
        logger.warning("Metadata lookup failed", exc_info=True)
        raise HTTPException(status_code=502, detail="Failed to load metadata")
    return {
        "categories": sorted(c.name for c in categories),
        "areas": sorted(areas),
        "ingredients": sorted(ingredients),
    }


# ── Search ───────────────────────────────────────────────────────────────


@app.get("/search", response_model=SearchResponse)
async def search(
    q: str = Query(default="", max_length=200),
    category: str | None = None,
    area: str | None = None,
    ingredient: str | None = None,
    mood: Mood | None = None,
    cooking_time: CookingTime | None = None,
    diet: Diet | None = None,
    gateway: MealDBGateway = Depends(get_gateway),
) -> SearchResponse:
    filters = SearchFilters(
        category=category,
        area=area,
        ingredient=ingredient,
        mood=mood,
        cooking_time=cooking_time,
        diet=diet,
    )

    try:
        results = await plan(gateway, q, filters)
    except SearchFailed:
        logger.warning("Search failed for %r", q, exc_info=True)
        raise HTTPException(status_code=502, detail="Failed to search recipes")

    # Presentational facets, applied after the remote lookup
    if filters.mood:
        results = [r for r in results if filters.mood in categorize_by_mood(r)]
    if filters.cooking_time:
        results = [r for r in results if cooking_time_bucket(r.instructions) == filters.cooking_time]

    return SearchResponse(query=q.strip(), filters=filters, results=results, total=len(results))


# ── Recipes ──────────────────────────────────────────────────────────────


@app.get("/recipes/random", response_model=Recipe)
async def random_recipe(gateway: MealDBGateway = Depends(get_gateway)) -> Recipe:
    try:
        recipe = await gateway.random_one()
    except GatewayError:
        logger.warning("Random recipe lookup failed", exc_info=True)
        raise HTTPException(status_code=502, detail="Failed to load a random recipe")
    if recipe is None:
        raise HTTPException(status_code=404, detail="No recipe available")
    return recipe


@app.get("/recipes/trending", response_model=list[Recipe])
async def trending(
    count: int = Query(
        default=DEFAULT_SEARCH_CONFIG.trending_count,
        ge=1,
        le=DEFAULT_SEARCH_CONFIG.max_trending_count,
    ),
    gateway: MealDBGateway = Depends(get_gateway),
) -> list[Recipe]:
    try:
        return await gateway.random_sample(count)
    except GatewayError:
        logger.warning("Trending recipes lookup failed", exc_info=True)
        raise HTTPException(status_code=502, detail="Failed to load trending recipes")


@app.get("/recipes/letter/{letter}", response_model=list[Recipe])
async def recipes_by_letter(letter: str, gateway: MealDBGateway = Depends(get_gateway)) -> list[Recipe]:
    if len(letter) != 1 or not letter.isalpha():
        raise HTTPException(status_code=422, detail="letter must be a single alphabetic character")
    try:
        return await gateway.find_by_first_letter(letter.lower())
    except GatewayError:
        logger.warning("First-letter lookup failed for %r", letter, exc_info=True)
        raise HTTPException(status_code=502, detail="Failed to search recipes")


async def _load_recipe(gateway: MealDBGateway, recipe_id: str, failure_detail: str) -> Recipe:
    try:
        recipe = await gateway.find_by_id(recipe_id)
    except GatewayError:
        logger.warning("Lookup failed for recipe %s", recipe_id, exc_info=True)
        raise HTTPException(status_code=502, detail=failure_detail)
    if recipe is None:
        raise HTTPException(status_code=404, detail="Recipe not found")
    return recipe


@app.get("/recipes/{recipe_id}", response_model=RecipeDetail)
async def recipe_detail(recipe_id: str, gateway: MealDBGateway = Depends(get_gateway)) -> RecipeDetail:
    recipe = await _load_recipe(gateway, recipe_id, "Failed to load recipe")
    return RecipeDetail(
        recipe=recipe,
        cooking_time=estimate_cooking_time(recipe.instructions),
        youtube_embed_url=youtube_embed_url(recipe.youtube),
        moods=categorize_by_mood(recipe),
    )


@app.get("/recipes/{recipe_id}/related", response_model=RelatedResponse)
async def related_recipes(
    recipe_id: str,
    limit: int = Query(
        default=DEFAULT_RELATED_CONFIG.default_limit,
        ge=1,
        le=DEFAULT_RELATED_CONFIG.max_limit,
    ),
    gateway: MealDBGateway = Depends(get_gateway),
) -> RelatedResponse:
    focal = await _load_recipe(gateway, recipe_id, "Failed to load related recipes")

    try:
        results = await relate(gateway, focal, limit)
    except RelatedFetchFailed:
        logger.warning("Related recipes failed for %s", recipe_id, exc_info=True)
        raise HTTPException(status_code=502, detail="Failed to load related recipes")
    return RelatedResponse(recipe_id=recipe_id, results=results)


# ── Favorites ────────────────────────────────────────────────────────────


@app.get("/favorites", response_model=FavoritesResponse)
def favorites(request: Request) -> FavoritesResponse:
    saved = list_favorites(request.session)
    return FavoritesResponse(favorites=saved, total=len(saved))


@app.post("/favorites", response_model=FavoritesResponse)
def add_to_favorites(body: FavoriteRecipe, request: Request) -> FavoritesResponse:
    try:
        add_favorite(request.session, body)
    except FavoritesFull as exc:
        raise HTTPException(status_code=409, detail=str(exc))
    saved = list_favorites(request.session)
    return FavoritesResponse(favorites=saved, total=len(saved))


@app.get("/favorites/{recipe_id}")
def favorite_status(recipe_id: str, request: Request) -> dict:
    return {"recipe_id": recipe_id, "favorite": is_favorite(request.session, recipe_id)}


@app.delete("/favorites/{recipe_id}", response_model=FavoritesResponse)
def remove_from_favorites(recipe_id: str, request: Request) -> FavoritesResponse:
    if not remove_favorite(request.session, recipe_id):
        raise HTTPException(status_code=404, detail="Recipe is not a favorite")
    saved = list_favorites(request.session)
    return FavoritesResponse(favorites=saved, total=len(saved))


# ── Cache ────────────────────────────────────────────────────────────────


@app.get("/cache/stats")
def cache_stats() -> dict:
    return get_cache_stats()
