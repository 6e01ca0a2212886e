from __future__ import annotations


class RecipeExplorerError(Exception):
    """Base class for every error raised by this package."""


class GatewayError(RecipeExplorerError):
    """The recipe provider could not be reached or returned an unreadable body."""


class SearchFailed(RecipeExplorerError):
    """A planned search could not complete."""


class RelatedFetchFailed(RecipeExplorerError):
    """Related recipes could not be assembled. No partial results are kept."""


class FavoritesFull(RecipeExplorerError):
    """The session already holds the maximum number of favorites."""
