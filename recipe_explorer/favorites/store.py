"""Favorites, kept server-side and owned by a browser session.

The session cookie only carries an opaque owner token. Summaries live in an
in-process store capped per owner, and the least recently active owners are
dropped once ``MAX_OWNERS`` is exceeded.
"""
from __future__ import annotations

import uuid
from collections import OrderedDict
from typing import Any, MutableMapping

from ..recipes.errors import FavoritesFull
from ..recipes.models import FavoriteRecipe

SESSION_KEY = "favorites_owner"
MAX_FAVORITES = 200
MAX_OWNERS = 10_000

_shelves: OrderedDict[str, dict[str, FavoriteRecipe]] = OrderedDict()


def _shelf(session: MutableMapping[str, Any], create: bool = False) -> dict[str, FavoriteRecipe]:
    owner = session.get(SESSION_KEY)
    if owner is None:
        if not create:
            return {}
        owner = session[SESSION_KEY] = uuid.uuid4().hex

    shelf = _shelves.get(owner)
    if shelf is None:
        if not create:
            return {}
        shelf = _shelves[owner] = {}
        while len(_shelves) > MAX_OWNERS:
            _shelves.popitem(last=False)
    _shelves.move_to_end(owner)
    return shelf


def list_favorites(session: MutableMapping[str, Any]) -> list[FavoriteRecipe]:
    return list(_shelf(session).values())


def is_favorite(session: MutableMapping[str, Any], recipe_id: str) -> bool:
    return recipe_id in _shelf(session)


def add_favorite(session: MutableMapping[str, Any], recipe: FavoriteRecipe) -> bool:
    """Store ``recipe`` under its id. Returns False if it was already saved.

    Raises FavoritesFull once the session holds ``MAX_FAVORITES`` recipes.
    """
    shelf = _shelf(session, create=True)
    if recipe.id in shelf:
        return False
    if len(shelf) >= MAX_FAVORITES:
        raise FavoritesFull(f"At most {MAX_FAVORITES} favorites can be saved")
    shelf[recipe.id] = recipe
    return True


def remove_favorite(session: MutableMapping[str, Any], recipe_id: str) -> bool:
    return _shelf(session).pop(recipe_id, None) is not None


def clear_favorites() -> None:
    _shelves.clear()
