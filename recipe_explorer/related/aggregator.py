from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Awaitable, Callable, Protocol

from ..gateway.client import RecipeGateway
from ..recipes.errors import GatewayError, RelatedFetchFailed
from ..recipes.models import Recipe
from .config import DEFAULT_RELATED_CONFIG
from .signals import SignalSet, derive_signals

logger = logging.getLogger(__name__)


class RandomSource(Protocol):
    def shuffle(self, x: list) -> None: ...


_DEFAULT_RANDOM = random.Random()


@dataclass(frozen=True)
class PoolStep:
    dimension: str
    fetch: Callable[[], Awaitable[list[Recipe]]]


def build_steps(gateway: RecipeGateway, signals: SignalSet) -> list[PoolStep]:
    """Ordered fallback lookups, one per dimension that has a signal."""
    steps: list[PoolStep] = []
    if signals.category:
        category = signals.category
        steps.append(PoolStep("category", lambda: gateway.find_by_category(category)))
    if signals.area:
        area = signals.area
        steps.append(PoolStep("area", lambda: gateway.find_by_area(area)))
    if signals.primary_ingredient:
        ingredient = signals.primary_ingredient
        steps.append(PoolStep("ingredient", lambda: gateway.find_by_ingredient(ingredient)))
    return steps


async def collect_candidates(
    gateway: RecipeGateway,
    focal: Recipe,
    limit: int,
) -> list[Recipe]:
    """
    Build the working set for ``focal`` before any shuffling.

    Pools are fetched one after another and only while fewer than ``limit``
    recipes are collected. The result is a deterministic function of the
    focal recipe, ``limit`` and the gateway's answers.
    """
    working: list[Recipe] = []
    seen: set[str] = {focal.id}

    for step in build_steps(gateway, derive_signals(focal)):
        if len(working) >= limit:
            break
        pool = await step.fetch()
        added = 0
        for recipe in pool:
            if recipe.id in seen:
                continue
            seen.add(recipe.id)
            working.append(recipe)
            added += 1
        logger.debug(
            "Related pool %s for %s: %d fetched, %d new", step.dimension, focal.id, len(pool), added
        )

    return working


async def relate(
    gateway: RecipeGateway,
    focal: Recipe,
    limit: int = DEFAULT_RELATED_CONFIG.default_limit,
    rng: RandomSource | None = None,
) -> list[Recipe]:
    """
    Return up to ``limit`` recipes related to ``focal``.

    Output never contains ``focal`` and never repeats an id. Order is
    random even when fewer than ``limit`` candidates exist. Any lookup
    failure raises ``RelatedFetchFailed`` and discards what was collected.
    """
    if limit < 1:
        raise ValueError("limit must be at least 1")

    try:
        working = await collect_candidates(gateway, focal, limit)
    except GatewayError as exc:
        raise RelatedFetchFailed("Failed to load related recipes") from exc

    sampled = list(working)
    (rng or _DEFAULT_RANDOM).shuffle(sampled)
    return sampled[:limit]
