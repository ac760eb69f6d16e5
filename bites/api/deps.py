"""FastAPI dependencies handing out the clients owned by the application lifespan."""

import httpx
from fastapi import Query, Request
from redis.asyncio import Redis

from bites.config import settings


async def get_redis(request: Request) -> Redis:
    return request.app.state.redis


async def get_http_client(request: Request) -> httpx.AsyncClient:
    return request.app.state.http_client


class PageParams:
    """``page``/``limit`` query parameters turned into an offset window."""

    def __init__(
        self,
        page: int = Query(default=1, ge=1),
        limit: int = Query(default=settings.default_page_size, ge=1, le=settings.max_page_size),
    ) -> None:
        self.page = page
        self.limit = limit

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit
