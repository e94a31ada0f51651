"""
Trace decorator for MCP tool handlers.

Wraps an async tool handler in an OpenTelemetry span named after the tool,
with the call arguments as span attributes and the outcome and duration
recorded as a span event.

Usage:
    @mcp.tool(...)
    @traced(span_name="mcp.tool.brave_web_search")
    async def brave_web_search(query: str, ...) -> str:
        ...
"""

from __future__ import annotations

import functools
import inspect
import time
from typing import Any, Callable

from loguru import logger

from brave_search_mcp.infrastructure.observability import get_observability_manager


def traced(span_name: str) -> Callable:
    """Decorator that wraps an async MCP tool handler with a span."""

    def decorator(func: Callable) -> Callable:
        sig = inspect.signature(func)

        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            observability = get_observability_manager()

            bound = sig.bind(*args, **kwargs)
            bound.apply_defaults()
            span_attributes: dict[str, Any] = {"mcp.tool.name": func.__name__}
            for param_name, param_value in bound.arguments.items():
                span_attributes[f"mcp.tool.param.{param_name}"] = str(param_value)

            start_time = time.monotonic()

            with observability.create_span(name=span_name, attributes=span_attributes):
                try:
                    result = await func(*args, **kwargs)
                except Exception as e:
                    duration_ms = round((time.monotonic() - start_time) * 1000, 2)
                    observability.record_tool_call(
                        func.__name__, duration_ms, success=False, error=str(e)
                    )
                    logger.error(f"[trace] {span_name} failed after {duration_ms}ms: {e}")
                    raise

                duration_ms = round((time.monotonic() - start_time) * 1000, 2)
                observability.record_tool_call(func.__name__, duration_ms)
                logger.debug(f"[trace] {span_name} completed in {duration_ms}ms")
                return result

        return wrapper

    return decorator
