"""
Brave Search MCP Server.

Self-contained FastMCP instance with the Brave web, news and local search
tools. Mounted into the registry via tool_registry.py.
"""

from fastmcp import FastMCP
from loguru import logger

from brave_search_mcp.config import settings
from brave_search_mcp.infrastructure.trace_decorator import traced
from brave_search_mcp.services.search_service import SearchService

brave_search_mcp = FastMCP("brave_search")

READ_ONLY_ANNOTATIONS = {
    "readOnlyHint": True,
    "destructiveHint": False,
    "idempotentHint": True,
    "openWorldHint": True,
}

MISSING_API_KEY_ERROR = "Error: BRAVE_API_KEY is not set."

# ---------------------------------------------------------------------------
# Lazy service singleton
# ---------------------------------------------------------------------------

_service: SearchService | None = None


def _get_service() -> SearchService | None:
    global _service
    if _service is None:
        if not settings.BRAVE_API_KEY:
            logger.error("BRAVE_API_KEY is not set; Brave Search tools are unavailable")
            return None
        _service = SearchService.from_settings(settings)
    return _service


def set_service(service: SearchService | None) -> None:
    """Replace the shared service (CLI credential override, tests)."""
    global _service
    _service = service


async def close_service() -> None:
    global _service
    if _service is not None:
        await _service.close()
        _service = None


# ---------------------------------------------------------------------------
# MCP Tools
# ---------------------------------------------------------------------------


@brave_search_mcp.tool(
    title="Brave Web Search",
    description=(
        "Performs a web search using the Brave Search API, ideal for general "
        "queries, news, articles, and online content. Use this for broad "
        "information gathering, recent events, or when you need diverse web "
        "sources. Supports pagination via offset. Maximum 20 results per request."
    ),
    tags={"search", "web", "brave"},
    annotations={"title": "Brave Web Search", **READ_ONLY_ANNOTATIONS},
)
@traced(span_name="mcp.tool.brave_web_search")
async def brave_web_search(
    query: str,
    count: int | None = None,
    offset: int | None = None,
) -> str:
    """Search the web.

    Args:
        query: Search query (max 400 chars, 50 words).
        count: Number of results (1-20, default 10).
        offset: Pagination offset (max 9, default 0).
    """
    service = _get_service()
    if service is None:
        return MISSING_API_KEY_ERROR
    return await service.web_search(query, count=count, offset=offset)


@brave_search_mcp.tool(
    title="Brave News Search",
    description=(
        "Searches news articles using the Brave News Search API. Use this for "
        "current events, breaking stories, and recent coverage of a topic. "
        "Results can be localized by country and language and restricted to "
        "a recency window. Maximum 50 results per request."
    ),
    tags={"search", "news", "brave"},
    annotations={"title": "Brave News Search", **READ_ONLY_ANNOTATIONS},
)
@traced(span_name="mcp.tool.brave_news_search")
async def brave_news_search(
    query: str,
    count: int | None = None,
    offset: int | None = None,
    country: str | None = None,
    search_lang: str | None = None,
    freshness: str | None = None,
) -> str:
    """Search news articles.

    Args:
        query: News search query (max 400 chars, 50 words).
        count: Number of results (1-50, default 20).
        offset: Pagination offset (max 9, default 0).
        country: Country code (e.g. "us", "gb", "de", or "all"; default "us").
        search_lang: Language code (e.g. "en", "en-gb", "zh-hans"; default "en").
        freshness: Recency filter: h (hour), d (day), w (week), m (month), y (year).
    """
    service = _get_service()
    if service is None:
        return MISSING_API_KEY_ERROR
    return await service.news_search(
        query,
        count=count,
        offset=offset,
        country=country,
        search_lang=search_lang,
        freshness=freshness,
    )


@brave_search_mcp.tool(
    title="Brave Local Search",
    description=(
        "Searches for local businesses and places using Brave's Local Search API. "
        "Best for queries related to physical locations, businesses, restaurants, "
        "services, etc. Returns names, addresses, coordinates, and when available "
        "ratings, phone numbers and opening hours. Falls back to web search when "
        "no local results are found."
    ),
    tags={"search", "local", "places", "brave"},
    annotations={"title": "Brave Local Search", **READ_ONLY_ANNOTATIONS},
)
@traced(span_name="mcp.tool.brave_local_search")
async def brave_local_search(
    query: str,
    count: int | None = None,
) -> str:
    """Search for local businesses and places.

    Args:
        query: Local search query (e.g. "pizza near Central Park").
        count: Number of results (1-20, default 5).
    """
    service = _get_service()
    if service is None:
        return MISSING_API_KEY_ERROR
    return await service.local_search(query, count=count)
