"""
Search service behind the Brave Search MCP tools.

Owns the API credential, the rate limiter and the HTTP client, and turns
each tool invocation into text. Failures never escape as exceptions:
they come back as "Error: ..." strings so the MCP layer only ever sees
plain text.
"""

from __future__ import annotations

from typing import Awaitable, Callable

import httpx
from loguru import logger

from brave_search_mcp.clients.brave_search_client import BASE_URL, BraveSearchClient
from brave_search_mcp.config import Settings
from brave_search_mcp.exceptions import BraveSearchError, UnknownCodeError
from brave_search_mcp.infrastructure.rate_limiter import RateLimiter
from brave_search_mcp.schemas.brave import LocationsResponse
from brave_search_mcp.schemas.codes import CountryCode, Freshness, LanguageCode
from brave_search_mcp.utils.formatters import (
    format_location_refs,
    format_news_results,
    format_poi_results,
    format_web_results,
)

WEB_DEFAULT_COUNT = 10
WEB_MAX_COUNT = 20
NEWS_DEFAULT_COUNT = 20
NEWS_MAX_COUNT = 50
LOCAL_DEFAULT_COUNT = 5
LOCAL_MAX_COUNT = 20
MAX_OFFSET = 9

LocalStrategy = Callable[[LocationsResponse], Awaitable[str | None]]


def _clamp(value: int | None, default: int, low: int, high: int) -> int:
    if value is None:
        return default
    return max(low, min(value, high))


class SearchService:
    """Web, news and local search over one Brave API credential."""

    def __init__(
        self,
        api_key: str,
        rate_limiter: RateLimiter | None = None,
        base_url: str = BASE_URL,
        timeout: float = 10.0,
        inline_locations: bool = True,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.rate_limiter = rate_limiter or RateLimiter()
        self._client = BraveSearchClient(
            api_key=api_key,
            rate_limiter=self.rate_limiter,
            base_url=base_url,
            timeout=timeout,
            transport=transport,
        )

        # Tried in order; the first strategy returning text wins.
        self._local_strategies: list[LocalStrategy] = []
        if inline_locations:
            self._local_strategies.append(self._render_inline_locations)
        self._local_strategies.append(self._render_poi_details)

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> SearchService:
        rate_limiter = RateLimiter(
            per_second=settings.RATE_LIMIT_PER_SECOND,
            per_month=settings.RATE_LIMIT_PER_MONTH,
            monthly_reset=settings.RATE_LIMIT_MONTHLY_RESET,
        )
        return cls(
            api_key=settings.BRAVE_API_KEY,
            rate_limiter=rate_limiter,
            base_url=settings.BRAVE_API_BASE_URL,
            timeout=settings.BRAVE_HTTP_TIMEOUT_SECONDS,
            inline_locations=settings.LOCAL_INLINE_LOCATIONS,
            transport=transport,
        )

    # ------------------------------------------------------------------
    # Tool operations
    # ------------------------------------------------------------------

    async def web_search(
        self,
        query: str,
        count: int | None = None,
        offset: int | None = None,
    ) -> str:
        count = _clamp(count, WEB_DEFAULT_COUNT, 1, WEB_MAX_COUNT)
        offset = _clamp(offset, 0, 0, MAX_OFFSET)
        try:
            data = await self._client.web_search(query, count=count, offset=offset)
            return format_web_results(data)
        except BraveSearchError as e:
            return self._error("web_search", e)

    async def news_search(
        self,
        query: str,
        count: int | None = None,
        offset: int | None = None,
        country: str | None = None,
        search_lang: str | None = None,
        freshness: str | None = None,
    ) -> str:
        try:
            country_code = CountryCode.parse(country) if country else CountryCode.default()
        except UnknownCodeError as e:
            return f"Error parsing country code: {e}"
        try:
            language_code = LanguageCode.parse(search_lang) if search_lang else LanguageCode.default()
        except UnknownCodeError as e:
            return f"Error parsing language code: {e}"
        try:
            freshness_code = Freshness.parse(freshness) if freshness else None
        except UnknownCodeError as e:
            return f"Error parsing freshness: {e}"

        count = _clamp(count, NEWS_DEFAULT_COUNT, 1, NEWS_MAX_COUNT)
        offset = _clamp(offset, 0, 0, MAX_OFFSET)
        try:
            data = await self._client.news_search(
                query,
                count=count,
                offset=offset,
                country=country_code,
                language=language_code,
                freshness=freshness_code,
            )
            return format_news_results(data)
        except BraveSearchError as e:
            return self._error("news_search", e)

    async def local_search(self, query: str, count: int | None = None) -> str:
        count = _clamp(count, LOCAL_DEFAULT_COUNT, 1, LOCAL_MAX_COUNT)
        try:
            locations = await self._client.locations_search(query, count=count)
            if not locations.results:
                logger.info(f"No locations for {query!r}, falling back to web search")
                data = await self._client.web_search(query, count=count, offset=0)
                return format_web_results(data)

            for strategy in self._local_strategies:
                text = await strategy(locations)
                if text is not None:
                    return text
            return format_poi_results([], {})
        except BraveSearchError as e:
            return self._error("local_search", e)

    # ------------------------------------------------------------------
    # Local search strategies
    # ------------------------------------------------------------------

    async def _render_inline_locations(self, locations: LocationsResponse) -> str | None:
        return format_location_refs(locations)

    async def _render_poi_details(self, locations: LocationsResponse) -> str | None:
        ids = [location.id for location in locations.results]
        pois = await self._client.poi_detail(ids)
        descriptions = await self._client.poi_descriptions(ids)
        return format_poi_results(pois, descriptions)

    # ------------------------------------------------------------------

    @staticmethod
    def _error(operation: str, error: BraveSearchError) -> str:
        logger.error(f"{operation} failed: {error.message}")
        return f"Error: {error.message}"

    async def close(self) -> None:
        await self._client.close()
