"""Tests for the HTTP endpoints."""

from unittest.mock import AsyncMock, patch

from httpx import AsyncClient

from bites.models.restaurant import SearchHit
from bites.services import search

PIZZA_PALACE = {"name": "Pizza Palace", "location": "NY", "cuisines": ["Italian", "Pizza"]}


async def _create(client: AsyncClient, body: dict | None = None) -> dict:
    response = await client.post("/restaurants", json=body or PIZZA_PALACE)
    assert response.status_code == 200
    return response.json()["data"]


async def test_create_restaurant(client: AsyncClient) -> None:
    response = await client.post("/restaurants", json=PIZZA_PALACE)

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert "timestamp" in body
    data = body["data"]
    assert data["name"] == "Pizza Palace"
    assert data["viewCount"] == 0
    assert data["averageRating"] == 0
    assert data["cuisines"] == ["Italian", "Pizza"]


async def test_create_duplicate_restaurant(client: AsyncClient) -> None:
    await _create(client)

    response = await client.post("/restaurants", json=PIZZA_PALACE)

    assert response.status_code == 409
    assert response.json()["success"] is False


async def test_create_restaurant_validation_error(client: AsyncClient) -> None:
    response = await client.post(
        "/restaurants", json={"name": "", "location": "NY", "cuisines": []}
    )

    assert response.status_code == 400
    body = response.json()
    assert body["error"] == "Validation failed"
    assert {detail["field"] for detail in body["details"]} == {"name", "cuisines"}


async def test_get_restaurant_counts_views(client: AsyncClient) -> None:
    created = await _create(client)

    first = await client.get(f"/restaurants/{created['id']}")
    second = await client.get(f"/restaurants/{created['id']}")

    assert first.json()["data"]["viewCount"] == 1
    assert second.json()["data"]["viewCount"] == 2
    assert second.json()["data"]["cuisines"] == ["Italian", "Pizza"]


async def test_get_unknown_restaurant(client: AsyncClient) -> None:
    response = await client.get("/restaurants/missing")

    assert response.status_code == 404
    assert response.json() == {
        "success": False,
        "error": "Restaurant not found",
        "timestamp": response.json()["timestamp"],
    }


async def test_review_flow(client: AsyncClient) -> None:
    created = await _create(client)
    url = f"/restaurants/{created['id']}/reviews"

    first = await client.post(url, json={"rating": 5, "body": "Great crust"})
    second = await client.post(url, json={"rating": 3, "body": "Slow service"})
    assert first.status_code == second.status_code == 200
    assert first.json()["data"]["restaurantId"] == created["id"]

    listed = await client.get(url, params={"page": 1, "limit": 10})
    assert [r["rating"] for r in listed.json()["data"]] == [3, 5]

    restaurant = await client.get(f"/restaurants/{created['id']}")
    assert restaurant.json()["data"]["averageRating"] == 4.0

    review_id = second.json()["data"]["id"]
    deleted = await client.delete(f"{url}/{review_id}")
    assert deleted.status_code == 200
    assert deleted.json()["data"] == {"reviewId": review_id}

    restaurant = await client.get(f"/restaurants/{created['id']}")
    assert restaurant.json()["data"]["averageRating"] == 5.0


async def test_review_rating_out_of_range(client: AsyncClient) -> None:
    created = await _create(client)

    response = await client.post(
        f"/restaurants/{created['id']}/reviews", json={"rating": 6, "body": "!"}
    )

    assert response.status_code == 400


async def test_delete_review_from_wrong_restaurant(client: AsyncClient) -> None:
    owner = await _create(client)
    other = await _create(
        client, {"name": "Burger Barn", "location": "NY", "cuisines": ["American"]}
    )
    review = await client.post(
        f"/restaurants/{owner['id']}/reviews", json={"rating": 4, "body": "Nice"}
    )
    review_id = review.json()["data"]["id"]

    response = await client.delete(f"/restaurants/{other['id']}/reviews/{review_id}")

    assert response.status_code == 400
    assert response.json()["error"] == "Review does not belong to this restaurant"


async def test_list_restaurants_by_rating(client: AsyncClient) -> None:
    low = await _create(client)
    high = await _create(
        client, {"name": "Sushi Go", "location": "NY", "cuisines": ["Japanese"]}
    )
    await client.post(f"/restaurants/{low['id']}/reviews", json={"rating": 2, "body": "meh"})
    await client.post(f"/restaurants/{high['id']}/reviews", json={"rating": 5, "body": "wow"})

    response = await client.get("/restaurants", params={"page": 1, "limit": 10})

    data = response.json()["data"]
    assert [r["id"] for r in data["restaurants"]] == [high["id"], low["id"]]
    assert data["pagination"] == {"page": 1, "limit": 10, "total": 2}


async def test_cuisine_endpoints(client: AsyncClient) -> None:
    created = await _create(client)

    cuisines = await client.get("/cuisines")
    italian = await client.get("/cuisines/Italian")

    assert cuisines.json()["data"] == ["Italian", "Pizza"]
    assert [r["id"] for r in italian.json()["data"]] == [created["id"]]


async def test_weather_endpoint(client: AsyncClient, weather_provider) -> None:
    created = await _create(client, {**PIZZA_PALACE, "latitude": 40.71, "longitude": -74.0})

    first = await client.get(f"/restaurants/{created['id']}/weather")
    second = await client.get(f"/restaurants/{created['id']}/weather")

    assert first.status_code == 200
    assert first.json()["data"] == second.json()["data"] == weather_provider.payload
    assert len(weather_provider.requests) == 1


async def test_weather_provider_down(client: AsyncClient, weather_provider) -> None:
    created = await _create(client, {**PIZZA_PALACE, "latitude": 40.71, "longitude": -74.0})
    weather_provider.status_code = 500

    response = await client.get(f"/restaurants/{created['id']}/weather")

    assert response.status_code == 503


async def test_details_round_trip(client: AsyncClient) -> None:
    created = await _create(client)
    document = {"hours": {"mon": "10-22"}, "tags": ["cozy"], "nested": {"a": [1, 2]}}

    missing = await client.get(f"/restaurants/{created['id']}/details")
    saved = await client.post(f"/restaurants/{created['id']}/details", json=document)
    fetched = await client.get(f"/restaurants/{created['id']}/details")

    assert missing.status_code == 404
    assert saved.status_code == 200
    assert fetched.json()["data"] == document


async def test_search_endpoint(client: AsyncClient) -> None:
    hit = SearchHit(id="abc", name="Pizza Palace", location="NY", average_rating=4.5)
    with patch.object(search, "search", AsyncMock(return_value=[hit])) as mock_search:
        response = await client.get("/restaurants/search", params={"q": "pizz"})

    assert response.status_code == 200
    assert response.json()["data"] == [
        {"id": "abc", "name": "Pizza Palace", "location": "NY", "averageRating": 4.5}
    ]
    assert mock_search.await_args.args[1] == "pizz"


async def test_health(client: AsyncClient) -> None:
    response = await client.get("/health")
    ready = await client.get("/ready")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
    assert ready.json() == {"redis": "ok"}
