import pytest

from recipe_explorer.favorites.store import clear_favorites
from recipe_explorer.gateway.cache import clear_cache


@pytest.fixture(autouse=True)
def _reset_state():
    clear_cache()
    clear_favorites()
    yield
    clear_cache()
    clear_favorites()
