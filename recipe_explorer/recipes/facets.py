from __future__ import annotations

import math
import re

from .models import CookingTime, Recipe

_HOURS_RE = re.compile(r"(\d+)\s*(?:hours?|hrs?)")
_MINUTES_RE = re.compile(r"(\d+)\s*(?:minutes?|mins?)")

_YOUTUBE_RE = re.compile(
    r"(?:https?://)?(?:www\.)?(?:youtube\.com/watch\?v=|youtu\.be/)([a-zA-Z0-9_-]{11})"
)

_PLAIN_AREAS = {"British", "American"}
_PLAIN_CATEGORIES = {"beef", "chicken", "pork"}


def _mentioned_minutes(instructions: str) -> int:
    text = instructions.lower()
    hours = sum(int(m) for m in _HOURS_RE.findall(text))
    minutes = sum(int(m) for m in _MINUTES_RE.findall(text))
    return hours * 60 + minutes


def estimate_cooking_time(instructions: str | None) -> str:
    """Return a human-readable cooking time guess for a set of instructions.

    Time mentions ("20 minutes", "1 hr") are summed. When there are none,
    the length of the instructions stands in for complexity.
    """
    text = instructions or ""
    total = _mentioned_minutes(text)

    if total == 0:
        if len(text) < 300:
            return "15-30 mins"
        if len(text) < 600:
            return "30-45 mins"
        return "45-60 mins"

    if total <= 15:
        return "15 mins"
    if total <= 30:
        return "30 mins"
    if total <= 60:
        return "1 hour"
    return f"{math.ceil(total / 60)} hours"


def cooking_time_bucket(instructions: str | None) -> CookingTime:
    """Map instructions onto the cooking-time filter keys."""
    text = instructions or ""
    total = _mentioned_minutes(text)
    if total == 0:
        # Same length heuristic as estimate_cooking_time, upper bound of each range.
        if len(text) < 300:
            total = 30
        elif len(text) < 600:
            total = 45
        else:
            total = 60

    if total <= 15:
        return "15m"
    if total <= 30:
        return "30m"
    if total <= 60:
        return "1h"
    return ">1h"


def categorize_by_mood(recipe: Recipe) -> list[str]:
    name = recipe.name.lower()
    instructions = (recipe.instructions or "").lower()
    tags = (recipe.tags or "").lower()
    category = (recipe.category or "").lower()

    moods: list[str] = []

    if any(w in name for w in ("soup", "stew", "pasta", "mac", "cheese", "casserole")) or (
        "comfort" in category
    ):
        moods.append("comfort")

    if (
        any(w in name for w in ("quick", "easy", "simple"))
        or "quick" in tags
        or len(instructions) < 300
    ):
        moods.append("quick")

    if (
        any(w in name for w in ("salad", "grilled", "steamed"))
        or "healthy" in tags
        or "light" in tags
        or "seafood" in category
    ):
        moods.append("healthy")

    if any(w in name for w in ("party", "dip", "appetizer", "wings", "nachos")) or (
        "starter" in category
    ):
        moods.append("party")

    if recipe.area and recipe.area not in _PLAIN_AREAS and category not in _PLAIN_CATEGORIES:
        moods.append("exotic")

    return moods or ["comfort"]


def youtube_embed_url(url: str | None) -> str | None:
    if not url:
        return None
    match = _YOUTUBE_RE.search(url)
    if match:
        return f"https://www.youtube.com/embed/{match.group(1)}"
    return None
