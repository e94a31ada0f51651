from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # --- Brave Search API ---
    BRAVE_API_KEY: str = Field(
        default="",
        description="Subscription token for the Brave Search API.",
    )
    BRAVE_API_BASE_URL: str = Field(
        default="https://api.search.brave.com/res/v1",
        description="Base URL of the Brave Search REST API.",
    )
    BRAVE_HTTP_TIMEOUT_SECONDS: float = Field(
        default=10.0,
        description="Timeout in seconds applied to every upstream request.",
    )

    # --- Rate limiting ---
    RATE_LIMIT_PER_SECOND: int = Field(
        default=1,
        description="Maximum upstream requests admitted per one-second window.",
    )
    RATE_LIMIT_PER_MONTH: int = Field(
        default=15000,
        description="Maximum upstream requests admitted per month.",
    )
    RATE_LIMIT_MONTHLY_RESET: Literal["never", "calendar"] = Field(
        default="never",
        description=(
            "Monthly counter reset policy: 'never' keeps counting for the "
            "process lifetime, 'calendar' resets when the UTC month changes."
        ),
    )

    # --- Local search ---
    LOCAL_INLINE_LOCATIONS: bool = Field(
        default=True,
        description=(
            "Render location entries inline from the locations search. "
            "When disabled, local search always resolves POI details."
        ),
    )

    # --- Server ---
    LOG_LEVEL: str = Field(
        default="INFO",
        description="Loguru log level for the stderr sink.",
    )
    SSE_HOST: str = Field(
        default="0.0.0.0",
        description="Bind address for the SSE transport.",
    )
    SSE_PORT: int = Field(
        default=3000,
        description="Port for the SSE transport.",
    )

    # --- Observability ---
    OTEL_SERVICE_NAME: str = Field(
        default="brave-search-mcp",
        description="Service name reported on OpenTelemetry spans.",
    )
    AGENT_OBSERVABILITY_ENABLED: bool = Field(
        default=False,
        description="Enable OpenTelemetry spans around tool handlers.",
    )


settings = Settings()
