"""
OpenTelemetry observability for the Brave Search MCP server.

Provides:
- Custom span creation around MCP tool invocations
- Span events recording tool outcome and duration

Spans are exported by whatever tracer provider the process is started with
(e.g. `opentelemetry-instrument brave-search-mcp sse`). Without a configured
provider the API falls back to a no-op tracer.

Environment Variables:
    AGENT_OBSERVABILITY_ENABLED: Enable span creation (default: false)
    OTEL_SERVICE_NAME: Instrumentation scope name (default: brave-search-mcp)
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Optional

from loguru import logger
from opentelemetry import trace
from opentelemetry.trace import SpanKind, Status, StatusCode


class ObservabilityManager:
    """Creates spans and span events for MCP tool handlers."""

    def __init__(
        self,
        service_name: str = "brave-search-mcp",
        enabled: bool = False,
    ) -> None:
        self.service_name = service_name
        self.enabled = enabled
        self._tracer = None

        if self.enabled:
            self._tracer = trace.get_tracer(
                instrumenting_module_name=service_name,
                tracer_provider=trace.get_tracer_provider(),
            )
            logger.info(f"Observability initialized for service: {service_name}")
        else:
            logger.debug("Observability disabled")

    @contextmanager
    def create_span(
        self,
        name: str,
        attributes: Optional[dict] = None,
    ):
        """
        Create an INTERNAL span for the enclosed block.

        Args:
            name: Span name (e.g. "mcp.tool.brave_web_search").
            attributes: Custom attributes to attach.
        """
        if not self.enabled or self._tracer is None:
            yield None
            return

        with self._tracer.start_as_current_span(
            name=name,
            kind=SpanKind.INTERNAL,
            attributes=attributes or {},
        ) as span:
            try:
                yield span
            except Exception as e:
                span.set_status(Status(StatusCode.ERROR, str(e)))
                span.record_exception(e)
                raise

    def record_tool_call(
        self,
        tool_name: str,
        duration_ms: float,
        success: bool = True,
        error: Optional[str] = None,
    ) -> None:
        """Attach a tool outcome event to the current span."""
        if not self.enabled:
            return

        attributes: dict = {
            "mcp.tool.name": tool_name,
            "mcp.tool.duration_ms": duration_ms,
            "mcp.tool.success": success,
        }
        if error is not None:
            attributes["mcp.tool.error"] = error

        trace.get_current_span().add_event(f"tool.{tool_name}", attributes=attributes)


# ------------------------------------------------------------------
# Singleton
# ------------------------------------------------------------------

_observability_manager: ObservabilityManager | None = None


def get_observability_manager() -> ObservabilityManager:
    """Return the global ObservabilityManager singleton (lazy-init)."""
    global _observability_manager

    if _observability_manager is None:
        from brave_search_mcp.config import settings

        _observability_manager = ObservabilityManager(
            service_name=settings.OTEL_SERVICE_NAME,
            enabled=settings.AGENT_OBSERVABILITY_ENABLED,
        )

    return _observability_manager


def initialize_observability(
    service_name: str = "brave-search-mcp",
    enabled: bool = False,
) -> ObservabilityManager:
    """Initialize the global observability manager at startup."""
    global _observability_manager

    _observability_manager = ObservabilityManager(
        service_name=service_name,
        enabled=enabled,
    )

    return _observability_manager
