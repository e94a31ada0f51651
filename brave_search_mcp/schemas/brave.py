"""Pydantic models for the Brave Search API response shapes.

The web, news and local/POI endpoints return unrelated JSON documents, so
each one gets its own parse target. Upstream field spellings that differ
between endpoints (camelCase vs snake_case) are normalized here, at parse
time, so formatting only ever sees one shape.
"""

from pydantic import (
    AliasChoices,
    AliasPath,
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)


class _UpstreamModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)


# --- Web search ---


class WebResult(_UpstreamModel):
    title: str = Field(description="Result page title.")
    description: str = Field(default="", description="Result snippet.")
    url: str = Field(description="Result URL.")


class WebResults(_UpstreamModel):
    results: list[WebResult] = Field(default_factory=list)


class WebSearchResponse(_UpstreamModel):
    web: WebResults | None = Field(None, description="Web results section.")

    @property
    def results(self) -> list[WebResult]:
        return self.web.results if self.web else []


# --- News search ---


class NewsResult(_UpstreamModel):
    title: str = Field(description="Article title.")
    description: str = Field(default="", description="Article snippet.")
    url: str = Field(description="Article URL.")
    age: str | None = Field(None, description="Human readable article age.")
    breaking: bool | None = Field(None, description="Whether the story is breaking news.")
    thumbnail_url: str | None = Field(
        None,
        validation_alias=AliasChoices(AliasPath("thumbnail", "src"), "thumbnail_url"),
        description="Thumbnail image URL.",
    )


class NewsSearchResponse(_UpstreamModel):
    results: list[NewsResult] = Field(default_factory=list)


# --- Local search ---


class Address(_UpstreamModel):
    street: str | None = Field(
        None, validation_alias=AliasChoices("streetAddress", "street_address", "street")
    )
    locality: str | None = Field(
        None, validation_alias=AliasChoices("addressLocality", "address_locality", "locality")
    )
    region: str | None = Field(
        None, validation_alias=AliasChoices("addressRegion", "address_region", "region")
    )
    postal_code: str | None = Field(
        None, validation_alias=AliasChoices("postalCode", "postal_code")
    )
    country: str | None = Field(
        None, validation_alias=AliasChoices("country", "addressCountry", "address_country")
    )

    def parts(self) -> list[str]:
        """Non-empty address components in display order."""
        components = [self.street, self.locality, self.region, self.postal_code, self.country]
        return [part for part in components if part]


class LocationRef(_UpstreamModel):
    id: str = Field(description="Opaque location identifier used by the POI endpoints.")
    title: str | None = Field(None, description="Location name.")
    coordinates: tuple[float, float] | None = Field(
        None, description="Latitude / longitude pair."
    )
    postal_address: Address | None = Field(
        None, validation_alias=AliasChoices("postal_address", "postalAddress")
    )

    @field_validator("coordinates", mode="before")
    @classmethod
    def _normalize_coordinates(cls, value):
        if isinstance(value, dict):
            return (value.get("latitude"), value.get("longitude"))
        return value


class LocationResults(_UpstreamModel):
    results: list[LocationRef] = Field(default_factory=list)


class LocationsResponse(_UpstreamModel):
    locations: LocationResults | None = Field(None, description="Locations section.")

    @property
    def results(self) -> list[LocationRef]:
        return self.locations.results if self.locations else []


class Rating(_UpstreamModel):
    value: float | None = Field(
        None, validation_alias=AliasChoices("ratingValue", "rating_value", "value")
    )
    count: int | None = Field(
        None, validation_alias=AliasChoices("ratingCount", "reviewCount", "rating_count", "count")
    )


class PoiDetail(_UpstreamModel):
    id: str
    name: str = Field(validation_alias=AliasChoices("name", "title"))
    address: Address = Field(default_factory=Address)
    phone: str | None = None
    rating: Rating | None = None
    opening_hours: list[str] | None = Field(
        None, validation_alias=AliasChoices("openingHours", "opening_hours")
    )
    price_range: str | None = Field(
        None, validation_alias=AliasChoices("priceRange", "price_range")
    )

    @field_validator("address", mode="before")
    @classmethod
    def _default_address(cls, value):
        return {} if value is None else value


class PoiResponse(_UpstreamModel):
    results: list[PoiDetail] = Field(default_factory=list)


class DescriptionsResponse(_UpstreamModel):
    descriptions: dict[str, str] = Field(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def _collect_results(cls, data):
        # Newer responses list {id, description} objects instead of a map.
        if not isinstance(data, dict) or "descriptions" in data:
            return data
        results = data.get("results")
        if not isinstance(results, list):
            return data
        return {
            "descriptions": {
                item["id"]: item["description"]
                for item in results
                if isinstance(item, dict)
                and isinstance(item.get("id"), str)
                and item["id"]
                and item.get("description")
            }
        }
