"""
Brave Search API HTTP client.

Wraps the endpoints used by the search tools:
- GET /web/search                         (web search, locations filter)
- GET /news/search                        (news search)
- GET /local/pois?ids=..&ids=..           (POI details)
- GET /local/descriptions?ids=..&ids=..   (POI descriptions)

Every request passes the shared RateLimiter first and is counted
separately. Non-2xx responses raise UpstreamHttpError, unparseable bodies
raise UpstreamParseError.
"""

from typing import TypeVar

import httpx
from loguru import logger
from pydantic import BaseModel, ValidationError

from brave_search_mcp.exceptions import (
    UpstreamHttpError,
    UpstreamParseError,
    UpstreamRequestError,
)
from brave_search_mcp.infrastructure.rate_limiter import RateLimiter
from brave_search_mcp.schemas.brave import (
    DescriptionsResponse,
    LocationsResponse,
    NewsSearchResponse,
    PoiDetail,
    PoiResponse,
    WebSearchResponse,
)
from brave_search_mcp.schemas.codes import CountryCode, Freshness, LanguageCode

BASE_URL = "https://api.search.brave.com/res/v1"

ResponseModel = TypeVar("ResponseModel", bound=BaseModel)


class BraveSearchClient:
    """Async client for the Brave Search API."""

    def __init__(
        self,
        api_key: str,
        rate_limiter: RateLimiter,
        base_url: str = BASE_URL,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        if not api_key:
            raise ValueError("BRAVE_API_KEY is not set.")
        self._rate_limiter = rate_limiter
        self._client = httpx.AsyncClient(
            base_url=base_url,
            headers={
                "Accept": "application/json",
                "Accept-Encoding": "gzip",
                "X-Subscription-Token": api_key,
            },
            timeout=timeout,
            transport=transport,
        )

    async def web_search(self, query: str, count: int, offset: int) -> WebSearchResponse:
        """Web search: plain ranked results."""
        logger.debug(f"Web search: query={query!r}, count={count}, offset={offset}")
        return await self._get(
            "/web/search",
            params=[("q", query), ("count", str(count)), ("offset", str(offset))],
            model=WebSearchResponse,
        )

    async def news_search(
        self,
        query: str,
        count: int,
        offset: int,
        country: CountryCode,
        language: LanguageCode,
        freshness: Freshness | None = None,
    ) -> NewsSearchResponse:
        """News search with locale and optional recency filter."""
        params = [
            ("q", query),
            ("count", str(count)),
            ("offset", str(offset)),
            ("country", country.to_wire_string()),
            ("search_lang", language.to_wire_string()),
            ("spellcheck", "1"),
        ]
        if freshness is not None:
            params.append(("freshness", freshness.to_wire_string()))

        logger.debug(
            f"News search: query={query!r}, count={count}, offset={offset}, "
            f"country={country.value}, lang={language.value}, "
            f"freshness={freshness.value if freshness else None}"
        )
        return await self._get("/news/search", params=params, model=NewsSearchResponse)

    async def locations_search(self, query: str, count: int) -> LocationsResponse:
        """Web search restricted to the locations section."""
        logger.debug(f"Locations search: query={query!r}, count={count}")
        return await self._get(
            "/web/search",
            params=[
                ("q", query),
                ("search_lang", "en"),
                ("result_filter", "locations"),
                ("count", str(count)),
            ],
            model=LocationsResponse,
        )

    async def poi_detail(self, ids: list[str]) -> list[PoiDetail]:
        """POI details for a set of location ids."""
        logger.debug(f"POI details: ids={ids}")
        response = await self._get(
            "/local/pois",
            params=[("ids", location_id) for location_id in ids],
            model=PoiResponse,
        )
        return response.results

    async def poi_descriptions(self, ids: list[str]) -> dict[str, str]:
        """Free-text descriptions keyed by location id."""
        logger.debug(f"POI descriptions: ids={ids}")
        response = await self._get(
            "/local/descriptions",
            params=[("ids", location_id) for location_id in ids],
            model=DescriptionsResponse,
        )
        return response.descriptions

    async def _get(
        self,
        path: str,
        params: list[tuple[str, str]],
        model: type[ResponseModel],
    ) -> ResponseModel:
        await self._rate_limiter.check_and_consume()

        try:
            response = await self._client.get(path, params=params)
        except httpx.RequestError as e:
            logger.error(f"Brave API request to {path} failed: {e!r}")
            raise UpstreamRequestError(e) from e

        if not response.is_success:
            logger.error(f"Brave API error on {path}: {response.status_code} - {response.text}")
            raise UpstreamHttpError(
                status=response.status_code,
                reason=response.reason_phrase,
                body=response.text,
            )

        try:
            return model.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            # Malformed JSON and non-UTF-8 bodies both raise ValueError.
            logger.error(f"Unparseable Brave API response from {path}: {e}")
            raise UpstreamParseError(e) from e

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()
