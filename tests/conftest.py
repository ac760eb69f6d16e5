"""Pytest configuration and fixtures."""

from collections.abc import AsyncGenerator, Awaitable, Callable

import fakeredis
import httpx
import pytest
from httpx import ASGITransport, AsyncClient

from bites.api.deps import get_http_client, get_redis
from bites.main import app
from bites.models.restaurant import RestaurantView
from bites.services import catalog, duplicates

WEATHER_PAYLOAD = {
    "weather": [{"main": "Clear", "description": "clear sky"}],
    "main": {"temp": 21.5, "humidity": 40},
    "name": "New York",
}


class WeatherProvider:
    """Records calls made through ``httpx.MockTransport``."""

    def __init__(self, status_code: int = 200, payload: dict | None = None) -> None:
        self.status_code = status_code
        self.payload = payload if payload is not None else WEATHER_PAYLOAD
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(self.status_code, json=self.payload)


@pytest.fixture
async def redis() -> AsyncGenerator[fakeredis.FakeAsyncRedis, None]:
    """Isolated in-memory store with the duplicate filter reserved."""
    client = fakeredis.FakeAsyncRedis(
        server=fakeredis.FakeServer(), decode_responses=True
    )
    await duplicates.ensure_filter(client, error_rate=0.001, capacity=10_000)
    yield client
    await client.aclose()


@pytest.fixture
def weather_provider() -> WeatherProvider:
    return WeatherProvider()


@pytest.fixture
async def http_client(
    weather_provider: WeatherProvider,
) -> AsyncGenerator[httpx.AsyncClient, None]:
    async with httpx.AsyncClient(
        transport=httpx.MockTransport(weather_provider)
    ) as client:
        yield client


@pytest.fixture
async def client(
    redis: fakeredis.FakeAsyncRedis, http_client: httpx.AsyncClient
) -> AsyncGenerator[AsyncClient, None]:
    """Provide test client with the store and HTTP clients overridden."""

    async def override_get_redis() -> fakeredis.FakeAsyncRedis:
        return redis

    async def override_get_http_client() -> httpx.AsyncClient:
        return http_client

    app.dependency_overrides[get_redis] = override_get_redis
    app.dependency_overrides[get_http_client] = override_get_http_client

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as client:
        yield client

    app.dependency_overrides.clear()


@pytest.fixture
def make_restaurant(
    redis: fakeredis.FakeAsyncRedis,
) -> Callable[..., Awaitable[RestaurantView]]:
    """Factory creating restaurants through the full creation saga."""

    async def _make(
        name: str = "Pizza Palace",
        location: str = "NY",
        cuisines: tuple[str, ...] = ("Italian", "Pizza"),
        **kwargs: float,
    ) -> RestaurantView:
        return await catalog.create_restaurant(
            redis, name, location, list(cuisines), **kwargs
        )

    return _make
