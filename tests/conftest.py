"""Pytest configuration and fixtures."""

import pytest

from brave_search_mcp.clients.brave_search_client import BraveSearchClient
from brave_search_mcp.infrastructure.rate_limiter import RateLimiter
from brave_search_mcp.services.search_service import SearchService
from tests.fakes import API_KEY, FakeBraveApi


@pytest.fixture
def fake_api() -> FakeBraveApi:
    return FakeBraveApi()


@pytest.fixture
def rate_limiter() -> RateLimiter:
    """Limiter generous enough for multi-request tool calls."""
    return RateLimiter(per_second=100, per_month=1000)


@pytest.fixture
def client(fake_api: FakeBraveApi, rate_limiter: RateLimiter) -> BraveSearchClient:
    return BraveSearchClient(
        api_key=API_KEY,
        rate_limiter=rate_limiter,
        transport=fake_api.transport,
    )


@pytest.fixture
def service(fake_api: FakeBraveApi, rate_limiter: RateLimiter) -> SearchService:
    return SearchService(
        api_key=API_KEY,
        rate_limiter=rate_limiter,
        transport=fake_api.transport,
    )


@pytest.fixture
def web_payload() -> dict:
    return {
        "type": "search",
        "web": {
            "results": [
                {
                    "title": "Rust Programming Language",
                    "description": "A language empowering everyone.",
                    "url": "https://www.rust-lang.org/",
                },
                {
                    "title": "The Rust Book",
                    "description": "The official book.",
                    "url": "https://doc.rust-lang.org/book/",
                },
            ]
        },
    }
