"""Shared httpx client construction."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import httpx

from skill_fetch.config import settings


def new_client(timeout: float | None = None) -> httpx.AsyncClient:
    """Create a client that sends the fixed User-Agent and follows redirects."""
    return httpx.AsyncClient(
        timeout=timeout if timeout is not None else settings.search_timeout,
        follow_redirects=True,
        headers={"User-Agent": settings.user_agent},
    )


@asynccontextmanager
async def use_client(
    client: httpx.AsyncClient | None = None,
    timeout: float | None = None,
) -> AsyncIterator[httpx.AsyncClient]:
    """Yield the caller's client, or a short-lived one closed on exit."""
    if client is not None:
        yield client
        return
    async with new_client(timeout) as owned:
        yield owned


def github_headers() -> dict[str, str]:
    return {"User-Agent": settings.user_agent, "Accept": "application/vnd.github.v3+json"}


def marketplace_headers() -> dict[str, str]:
    headers = {"User-Agent": settings.user_agent, "Accept": "application/json"}
    if settings.marketplace_api_key:
        headers["Authorization"] = f"Bearer {settings.marketplace_api_key}"
    return headers
