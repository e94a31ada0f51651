"""Formatting helpers for Brave Search API responses."""

from brave_search_mcp.schemas.brave import (
    LocationsResponse,
    NewsSearchResponse,
    PoiDetail,
    WebSearchResponse,
)

NO_NEWS_RESULTS = "No news results found"
NO_LOCAL_RESULTS = "No local results found"
NO_DESCRIPTION = "No description available"


def format_web_results(data: WebSearchResponse) -> str:
    """Format web results as Title/Description/URL blocks."""
    return "\n\n".join(
        f"Title: {result.title}\nDescription: {result.description}\nURL: {result.url}"
        for result in data.results
    )


def format_news_results(data: NewsSearchResponse) -> str:
    """Format news results, flagging breaking stories."""
    if not data.results:
        return NO_NEWS_RESULTS

    parts = []
    for result in data.results:
        prefix = "[BREAKING] " if result.breaking else ""
        text = (
            f"{prefix}Title: {result.title}\n"
            f"Description: {result.description}\n"
            f"URL: {result.url}\n"
            f"Age: {result.age or 'Unknown'}"
        )
        if result.thumbnail_url:
            text += f"\nThumbnail: {result.thumbnail_url}"
        parts.append(text)
    return "\n\n".join(parts)


def format_location_refs(data: LocationsResponse) -> str | None:
    """Render location entries inline; None when there is nothing to render."""
    blocks = []
    for location in data.results:
        lines = []
        if location.title:
            lines.append(f"Name: {location.title}")
        if location.postal_address:
            address = ", ".join(location.postal_address.parts())
            if address:
                lines.append(f"Address: {address}")
        if location.coordinates:
            lat, lon = location.coordinates
            lines.append(f"Coordinates: {lat}, {lon}")
        lines.append(f"ID: {location.id}")
        blocks.append("\n".join(lines))

    if not blocks:
        return None
    return "\n---\n".join(blocks)


def _format_rating_value(value: float) -> str:
    return str(value).removesuffix(".0")


def format_poi(poi: PoiDetail, description: str | None) -> str:
    """Format one POI merged with its description."""
    address = ", ".join(poi.address.parts()) or "N/A"

    rating = poi.rating
    rating_value = (
        _format_rating_value(rating.value) if rating and rating.value is not None else "N/A"
    )
    rating_count = rating.count if rating and rating.count is not None else 0

    hours = ", ".join(poi.opening_hours or []) or "N/A"

    lines = [
        f"Name: {poi.name}",
        f"Address: {address}",
        f"Phone: {poi.phone or 'N/A'}",
        f"Rating: {rating_value} ({rating_count} reviews)",
        f"Price Range: {poi.price_range or 'N/A'}",
        f"Hours: {hours}",
        f"Description: {description or NO_DESCRIPTION}",
    ]
    return "\n".join(lines)


def format_poi_results(pois: list[PoiDetail], descriptions: dict[str, str]) -> str:
    """Merge POI details and descriptions by id into result blocks."""
    if not pois:
        return NO_LOCAL_RESULTS
    return "\n---\n".join(format_poi(poi, descriptions.get(poi.id)) for poi in pois)
