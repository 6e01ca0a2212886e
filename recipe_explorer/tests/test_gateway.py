from __future__ import annotations

import httpx
import pytest

from recipe_explorer.gateway.cache import get_cache_stats
from recipe_explorer.gateway.client import MealDBGateway
from recipe_explorer.gateway.config import GatewayConfig
from recipe_explorer.recipes.errors import GatewayError

BASE_URL = "https://mealdb.test/api/json/v1/1"

ARRABIATA = {
    "idMeal": "52771",
    "strMeal": "Spicy Arrabiata Penne",
    "strCategory": "Vegetarian",
    "strArea": "Italian",
    "strInstructions": "Bring a large pot of water to a boil.",
    "strTags": "Pasta,Curry",
    "strMealThumb": "https://www.themealdb.com/images/media/meals/ustsqw1468250014.jpg",
    "strYoutube": "https://www.youtube.com/watch?v=1IszT_guI08",
    "strIngredient1": "penne rigate",
    "strMeasure1": "1 pound",
    "strIngredient2": "olive oil",
    "strMeasure2": "1/4 cup",
    "strIngredient3": "",
    "strMeasure3": "",
    "strIngredient4": None,
    "strMeasure4": None,
}


def _gateway(handler, **config) -> tuple[MealDBGateway, list[httpx.Request]]:
    seen: list[httpx.Request] = []

    def _record(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return handler(request)

    client = httpx.AsyncClient(transport=httpx.MockTransport(_record))
    cfg = GatewayConfig(base_url=BASE_URL, **config)
    return MealDBGateway(config=cfg, http_client=client), seen


@pytest.mark.asyncio
async def test_find_by_name_decodes_meals():
    gateway, seen = _gateway(lambda r: httpx.Response(200, json={"meals": [ARRABIATA]}))

    recipes = await gateway.find_by_name("penne")

    assert seen[0].url.path == "/api/json/v1/1/search.php"
    assert seen[0].url.params["s"] == "penne"
    recipe = recipes[0]
    assert recipe.id == "52771"
    assert recipe.area == "Italian"
    assert [(i.slot, i.name, i.measure) for i in recipe.ingredients] == [
        (1, "penne rigate", "1 pound"),
        (2, "olive oil", "1/4 cup"),
    ]


@pytest.mark.asyncio
async def test_null_meals_is_empty_result():
    gateway, _ = _gateway(lambda r: httpx.Response(200, json={"meals": None}))

    assert await gateway.find_by_category("Nothing") == []
    assert await gateway.find_by_id("0") is None


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "method,arg,param",
    [
        ("find_by_category", "Seafood", "c"),
        ("find_by_area", "Canadian", "a"),
        ("find_by_ingredient", "chicken", "i"),
    ],
)
async def test_filter_lookups_use_filter_endpoint(method, arg, param):
    gateway, seen = _gateway(
        lambda r: httpx.Response(200, json={"meals": [{"idMeal": "1", "strMeal": "Partial", "strMealThumb": "x"}]})
    )

    recipes = await getattr(gateway, method)(arg)

    assert seen[0].url.path.endswith("/filter.php")
    assert seen[0].url.params[param] == arg
    assert recipes[0].instructions is None


@pytest.mark.asyncio
async def test_http_error_becomes_gateway_error():
    gateway, _ = _gateway(lambda r: httpx.Response(500, text="oops"))

    with pytest.raises(GatewayError):
        await gateway.find_by_name("anything")


@pytest.mark.asyncio
async def test_transport_error_becomes_gateway_error():
    def _boom(request):
        raise httpx.ConnectError("unreachable", request=request)

    gateway, _ = _gateway(_boom)

    with pytest.raises(GatewayError):
        await gateway.find_by_area("Italian")


@pytest.mark.asyncio
async def test_bad_json_becomes_gateway_error():
    gateway, _ = _gateway(lambda r: httpx.Response(200, text="<html>not json</html>"))

    with pytest.raises(GatewayError):
        await gateway.find_by_category("Beef")


@pytest.mark.asyncio
async def test_malformed_meal_becomes_gateway_error():
    gateway, _ = _gateway(lambda r: httpx.Response(200, json={"meals": [{"strMeal": "no id"}]}))

    with pytest.raises(GatewayError):
        await gateway.find_by_name("no id")


@pytest.mark.asyncio
async def test_random_sample_issues_count_requests_and_drops_empty():
    answers = iter([{"meals": [ARRABIATA]}, {"meals": None}, {"meals": [ARRABIATA]}])
    gateway, seen = _gateway(lambda r: httpx.Response(200, json=next(answers)))

    recipes = await gateway.random_sample(3)

    assert len(seen) == 3
    assert all(r.url.path.endswith("/random.php") for r in seen)
    assert len(recipes) == 2


@pytest.mark.asyncio
async def test_repeated_lookup_is_served_from_cache():
    gateway, seen = _gateway(lambda r: httpx.Response(200, json={"meals": [ARRABIATA]}))

    await gateway.find_by_id("52771")
    await gateway.find_by_id("52771")

    assert len(seen) == 1
    assert get_cache_stats()["hits"] == 1


@pytest.mark.asyncio
async def test_random_is_never_cached():
    gateway, seen = _gateway(lambda r: httpx.Response(200, json={"meals": [ARRABIATA]}))

    await gateway.random_one()
    await gateway.random_one()

    assert len(seen) == 2


@pytest.mark.asyncio
async def test_cache_can_be_disabled():
    gateway, seen = _gateway(
        lambda r: httpx.Response(200, json={"meals": [ARRABIATA]}), cache_enabled=False
    )

    await gateway.find_by_name("penne")
    await gateway.find_by_name("penne")

    assert len(seen) == 2


@pytest.mark.asyncio
async def test_failures_are_not_cached():
    responses = iter([httpx.Response(503), httpx.Response(200, json={"meals": [ARRABIATA]})])
    gateway, seen = _gateway(lambda r: next(responses))

    with pytest.raises(GatewayError):
        await gateway.find_by_name("penne")
    recipes = await gateway.find_by_name("penne")

    assert len(seen) == 2
    assert recipes[0].id == "52771"


@pytest.mark.asyncio
async def test_reference_lists():
    def _handler(request: httpx.Request) -> httpx.Response:
        if request.url.path.endswith("/categories.php"):
            return httpx.Response(200, json={"categories": [
                {"idCategory": "1", "strCategory": "Beef", "strCategoryThumb": "t", "strCategoryDescription": "d"},
            ]})
        if request.url.params.get("a") == "list":
            return httpx.Response(200, json={"meals": [{"strArea": "American"}, {"strArea": "British"}]})
        return httpx.Response(200, json={"meals": [{"idIngredient": "1", "strIngredient": "Chicken"}]})

    gateway, _ = _gateway(_handler)

    categories = await gateway.list_categories()
    assert [c.name for c in categories] == ["Beef"]
    assert await gateway.list_areas() == ["American", "British"]
    assert await gateway.list_ingredients() == ["Chicken"]


@pytest.mark.asyncio
async def test_gateway_closes_client_on_exit():
    client = httpx.AsyncClient(transport=httpx.MockTransport(lambda r: httpx.Response(200, json={})))

    async with MealDBGateway(http_client=client):
        pass

    assert client.is_closed
