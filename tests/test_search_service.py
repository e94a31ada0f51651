"""Tests for the search service behind the MCP tools."""

import pytest

from brave_search_mcp.config import Settings
from brave_search_mcp.infrastructure.rate_limiter import RateLimiter
from brave_search_mcp.services.search_service import SearchService
from tests.fakes import API_KEY, FakeBraveApi

LOCATIONS_PAYLOAD = {
    "locations": {
        "results": [
            {
                "id": "loc-1",
                "title": "Joe's Pizza",
                "coordinates": [40.7306, -73.9866],
                "postal_address": {"streetAddress": "1435 Broadway", "addressLocality": "New York"},
            },
            {"id": "loc-2"},
        ]
    }
}


class TestWebSearch:
    @pytest.mark.asyncio
    async def test_formats_results(self, service, fake_api, web_payload):
        fake_api.add("/web/search", json=web_payload)

        text = await service.web_search("rust")

        assert text.startswith("Title: Rust Programming Language\n")
        params = fake_api.requests[0].url.params
        assert params["count"] == "10"
        assert params["offset"] == "0"

    @pytest.mark.asyncio
    async def test_count_and_offset_clamped(self, service, fake_api, web_payload):
        fake_api.add("/web/search", json=web_payload)

        await service.web_search("rust", count=999, offset=42)
        await service.web_search("rust", count=0, offset=-3)

        first, second = (request.url.params for request in fake_api.requests)
        assert (first["count"], first["offset"]) == ("20", "9")
        assert (second["count"], second["offset"]) == ("1", "0")

    @pytest.mark.asyncio
    async def test_no_results_is_empty_text(self, service, fake_api):
        fake_api.add("/web/search", json={"web": {"results": []}})
        assert await service.web_search("nothing") == ""

    @pytest.mark.asyncio
    async def test_http_error_becomes_text(self, service, fake_api):
        fake_api.add("/web/search", status=500, text="upstream down")

        text = await service.web_search("rust")

        assert text == "Error: Brave API error: 500 Internal Server Error\nupstream down"

    @pytest.mark.asyncio
    async def test_rate_limit_becomes_text(self, fake_api, web_payload):
        service = SearchService(
            api_key=API_KEY,
            rate_limiter=RateLimiter(per_second=1),
            transport=fake_api.transport,
        )
        fake_api.add("/web/search", json=web_payload)

        await service.web_search("first")
        text = await service.web_search("second")

        assert text == "Error: Rate limit exceeded"
        assert len(fake_api.requests) == 1

    @pytest.mark.asyncio
    async def test_parse_error_becomes_text(self, service, fake_api):
        fake_api.add("/web/search", text="not json")

        text = await service.web_search("rust")

        assert text.startswith("Error: Failed to parse Brave API response")

    @pytest.mark.asyncio
    async def test_body_not_utf8_becomes_text(self, service, fake_api):
        fake_api.add("/web/search", content=b'{"web": "\xff\xfe"}')

        text = await service.web_search("rust")

        assert text.startswith("Error: Failed to parse Brave API response")


class TestNewsSearch:
    @pytest.mark.asyncio
    async def test_defaults(self, service, fake_api):
        fake_api.add("/news/search", json={"results": []})

        text = await service.news_search("markets")

        assert text == "No news results found"
        params = fake_api.requests[0].url.params
        assert params["count"] == "20"
        assert params["offset"] == "0"
        assert params["country"] == "us"
        assert params["search_lang"] == "en"
        assert params["spellcheck"] == "1"
        assert "freshness" not in params

    @pytest.mark.asyncio
    async def test_offset_and_count_clamped(self, service, fake_api):
        fake_api.add("/news/search", json={"results": []})

        await service.news_search("markets", count=500, offset=50)

        params = fake_api.requests[0].url.params
        assert params["count"] == "50"
        assert params["offset"] == "9"

    @pytest.mark.asyncio
    async def test_codes_normalized(self, service, fake_api):
        fake_api.add("/news/search", json={"results": []})

        await service.news_search("markets", country="DE", search_lang="ZH-HANT", freshness="D")

        params = fake_api.requests[0].url.params
        assert params["country"] == "de"
        assert params["search_lang"] == "zh-hant"
        assert params["freshness"] == "d"

    @pytest.mark.asyncio
    async def test_unknown_country_skips_search(self, service, fake_api):
        text = await service.news_search("markets", country="ZZ")

        assert text.startswith("Error parsing country code: ")
        assert "ZZ" in text
        assert fake_api.requests == []
        assert service.rate_limiter.window.month_count == 0

    @pytest.mark.asyncio
    async def test_unknown_language_skips_search(self, service, fake_api):
        text = await service.news_search("markets", search_lang="xx")

        assert text.startswith("Error parsing language code: ")
        assert "xx" in text
        assert fake_api.requests == []

    @pytest.mark.asyncio
    async def test_unknown_freshness_skips_search(self, service, fake_api):
        text = await service.news_search("markets", freshness="fortnight")

        assert text.startswith("Error parsing freshness: ")
        assert fake_api.requests == []

    @pytest.mark.asyncio
    async def test_breaking_story(self, service, fake_api):
        fake_api.add(
            "/news/search",
            json={"results": [{"title": "T", "description": "D", "url": "U", "breaking": True}]},
        )

        text = await service.news_search("markets")

        assert text == "[BREAKING] Title: T\nDescription: D\nURL: U\nAge: Unknown"


class TestLocalSearch:
    @pytest.mark.asyncio
    async def test_no_locations_falls_back_to_web(self, service, fake_api, web_payload):
        fake_api.add("/web/search", json={"locations": {"results": []}})
        fake_api.add("/web/search", json=web_payload)

        text = await service.local_search("coffee", count=3)

        plain = SearchService(
            api_key=API_KEY,
            rate_limiter=RateLimiter(per_second=100),
            transport=_single_response(web_payload),
        )
        assert text == await plain.web_search("coffee", count=3, offset=0)

        fallback = fake_api.requests[1].url.params
        assert "result_filter" not in fallback
        assert (fallback["count"], fallback["offset"]) == ("3", "0")

    @pytest.mark.asyncio
    async def test_missing_locations_section_falls_back(self, service, fake_api, web_payload):
        fake_api.add("/web/search", json={"type": "search"})
        fake_api.add("/web/search", json=web_payload)

        text = await service.local_search("coffee")

        assert text.startswith("Title: Rust Programming Language")

    @pytest.mark.asyncio
    async def test_inline_locations(self, service, fake_api):
        fake_api.add("/web/search", json=LOCATIONS_PAYLOAD)

        text = await service.local_search("pizza")

        assert text == (
            "Name: Joe's Pizza\n"
            "Address: 1435 Broadway, New York\n"
            "Coordinates: 40.7306, -73.9866\n"
            "ID: loc-1\n"
            "---\n"
            "ID: loc-2"
        )
        assert fake_api.paths() == ["/web/search"]
        assert fake_api.requests[0].url.params["count"] == "5"

    @pytest.mark.asyncio
    async def test_id_only_location(self, service, fake_api):
        fake_api.add("/web/search", json={"locations": {"results": [{"id": "only"}]}})

        assert await service.local_search("pizza") == "ID: only"

    @pytest.mark.asyncio
    async def test_count_clamped(self, service, fake_api):
        fake_api.add("/web/search", json={"locations": {"results": [{"id": "only"}]}})

        await service.local_search("pizza", count=100)

        assert fake_api.requests[0].url.params["count"] == "20"

    @pytest.mark.asyncio
    async def test_poi_details_when_inline_disabled(self, fake_api, rate_limiter):
        service = SearchService(
            api_key=API_KEY,
            rate_limiter=rate_limiter,
            inline_locations=False,
            transport=fake_api.transport,
        )
        fake_api.add("/web/search", json=LOCATIONS_PAYLOAD)
        fake_api.add(
            "/local/pois",
            json={
                "results": [
                    {
                        "id": "loc-1",
                        "name": "Joe's Pizza",
                        "address": {"streetAddress": "1435 Broadway"},
                        "phone": "(212) 555-0199",
                        "rating": {"ratingValue": 4.5, "ratingCount": 1200},
                    }
                ]
            },
        )
        fake_api.add("/local/descriptions", json={"descriptions": {"loc-1": "Classic slices."}})

        text = await service.local_search("pizza")

        assert text == (
            "Name: Joe's Pizza\n"
            "Address: 1435 Broadway\n"
            "Phone: (212) 555-0199\n"
            "Rating: 4.5 (1200 reviews)\n"
            "Price Range: N/A\n"
            "Hours: N/A\n"
            "Description: Classic slices."
        )
        assert fake_api.paths() == ["/web/search", "/local/pois", "/local/descriptions"]
        assert fake_api.requests[1].url.params.get_list("ids") == ["loc-1", "loc-2"]
        assert rate_limiter.window.month_count == 3

    @pytest.mark.asyncio
    async def test_empty_poi_details(self, fake_api, rate_limiter):
        service = SearchService(
            api_key=API_KEY,
            rate_limiter=rate_limiter,
            inline_locations=False,
            transport=fake_api.transport,
        )
        fake_api.add("/web/search", json=LOCATIONS_PAYLOAD)
        fake_api.add("/local/pois", json={"results": []})
        fake_api.add("/local/descriptions", json={"descriptions": {}})

        assert await service.local_search("pizza") == "No local results found"

    @pytest.mark.asyncio
    async def test_poi_failure_becomes_text(self, fake_api, rate_limiter):
        service = SearchService(
            api_key=API_KEY,
            rate_limiter=rate_limiter,
            inline_locations=False,
            transport=fake_api.transport,
        )
        fake_api.add("/web/search", json=LOCATIONS_PAYLOAD)
        fake_api.add("/local/pois", status=403, text="forbidden")

        text = await service.local_search("pizza")

        assert text.startswith("Error: Brave API error: 403 Forbidden")

    @pytest.mark.asyncio
    async def test_malformed_descriptions_ignored(self, fake_api, rate_limiter):
        service = SearchService(
            api_key=API_KEY,
            rate_limiter=rate_limiter,
            inline_locations=False,
            transport=fake_api.transport,
        )
        fake_api.add("/web/search", json=LOCATIONS_PAYLOAD)
        fake_api.add("/local/pois", json={"results": [{"id": "loc-1", "name": "Joe's Pizza"}]})
        fake_api.add("/local/descriptions", json={"results": ["oops"]})

        text = await service.local_search("pizza")

        assert text.startswith("Name: Joe's Pizza\n")
        assert text.endswith("Description: No description available")


class TestConstruction:
    def test_from_settings(self, fake_api):
        settings = Settings(
            BRAVE_API_KEY="from-settings",
            RATE_LIMIT_PER_SECOND=5,
            RATE_LIMIT_PER_MONTH=2000,
            RATE_LIMIT_MONTHLY_RESET="calendar",
            LOCAL_INLINE_LOCATIONS=False,
        )

        service = SearchService.from_settings(settings, transport=fake_api.transport)

        assert service.rate_limiter.per_second == 5
        assert service.rate_limiter.per_month == 2000
        assert service.rate_limiter.monthly_reset == "calendar"
        assert service._local_strategies == [service._render_poi_details]

    def test_missing_key(self):
        with pytest.raises(ValueError):
            SearchService(api_key="")

    @pytest.mark.asyncio
    async def test_close(self, service):
        await service.close()
        assert service._client._client.is_closed


def _single_response(payload: dict):
    api = FakeBraveApi()
    api.add("/web/search", json=payload)
    return api.transport
