from __future__ import annotations

from typing import Any, Literal

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator

MAX_INGREDIENT_SLOTS = 20

Mood = Literal["comfort", "quick", "healthy", "party", "exotic"]
CookingTime = Literal["15m", "30m", "1h", ">1h"]
Diet = Literal["vegetarian", "vegan", "non-vegetarian", "gluten-free"]


class IngredientLine(BaseModel):
    model_config = ConfigDict(frozen=True)

    slot: int = Field(..., ge=1, le=MAX_INGREDIENT_SLOTS)
    name: str
    measure: str = ""


class Recipe(BaseModel):
    """A meal as returned by the provider.

    Filter endpoints only return id, name and thumbnail, so everything else
    is optional. Accepts both the provider's ``strXxx`` keys and our own
    field names, which lets a dumped recipe be validated again.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., validation_alias=AliasChoices("idMeal", "id"))
    name: str = Field(..., validation_alias=AliasChoices("strMeal", "name"))
    category: str | None = Field(default=None, validation_alias=AliasChoices("strCategory", "category"))
    area: str | None = Field(default=None, validation_alias=AliasChoices("strArea", "area"))
    instructions: str | None = Field(
        default=None, validation_alias=AliasChoices("strInstructions", "instructions")
    )
    tags: str | None = Field(default=None, validation_alias=AliasChoices("strTags", "tags"))
    thumbnail: str | None = Field(default=None, validation_alias=AliasChoices("strMealThumb", "thumbnail"))
    youtube: str | None = Field(default=None, validation_alias=AliasChoices("strYoutube", "youtube"))
    source: str | None = Field(default=None, validation_alias=AliasChoices("strSource", "source"))
    ingredients: tuple[IngredientLine, ...] = ()

    @model_validator(mode="before")
    @classmethod
    def _collect_ingredient_slots(cls, data: Any) -> Any:
        if not isinstance(data, dict) or "ingredients" in data:
            return data
        lines: list[dict[str, Any]] = []
        for slot in range(1, MAX_INGREDIENT_SLOTS + 1):
            name = data.get(f"strIngredient{slot}")
            if name and name.strip():
                measure = data.get(f"strMeasure{slot}") or ""
                lines.append({"slot": slot, "name": name.strip(), "measure": measure.strip()})
        return {**data, "ingredients": lines}

    @property
    def first_ingredient(self) -> str | None:
        """Ingredient in slot 1, or None when that slot is blank."""
        for line in self.ingredients:
            if line.slot == 1:
                return line.name
        return None


class Category(BaseModel):
    id: str = Field(..., validation_alias=AliasChoices("idCategory", "id"))
    name: str = Field(..., validation_alias=AliasChoices("strCategory", "name"))
    thumbnail: str | None = Field(
        default=None, validation_alias=AliasChoices("strCategoryThumb", "thumbnail")
    )
    description: str | None = Field(
        default=None, validation_alias=AliasChoices("strCategoryDescription", "description")
    )


class SearchFilters(BaseModel):
    category: str | None = None
    area: str | None = None
    ingredient: str | None = None
    mood: Mood | None = None
    cooking_time: CookingTime | None = None
    diet: Diet | None = None

    @field_validator("category", "area", "ingredient", mode="before")
    @classmethod
    def _blank_to_none(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value.strip() if isinstance(value, str) else value


class FavoriteRecipe(BaseModel):
    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    thumbnail: str | None = None
    category: str | None = None
    area: str | None = None

    @classmethod
    def from_recipe(cls, recipe: Recipe) -> FavoriteRecipe:
        return cls(
            id=recipe.id,
            name=recipe.name,
            thumbnail=recipe.thumbnail,
            category=recipe.category,
            area=recipe.area,
        )


class SearchResponse(BaseModel):
    query: str
    filters: SearchFilters
    results: list[Recipe]
    total: int


class RecipeDetail(BaseModel):
    recipe: Recipe
    cooking_time: str
    youtube_embed_url: str | None = None
    moods: list[str] = Field(default_factory=list)


class RelatedResponse(BaseModel):
    recipe_id: str
    results: list[Recipe]


class FavoritesResponse(BaseModel):
    favorites: list[FavoriteRecipe]
    total: int
