"""
MCP Tool Registry.

Aggregates the MCP servers into a single FastMCP instance.
Initializes observability on startup.
"""

from loguru import logger
from fastmcp import FastMCP

from brave_search_mcp.config import settings
from brave_search_mcp.infrastructure.observability import initialize_observability
from brave_search_mcp.servers.brave_search_server import brave_search_mcp

INSTRUCTIONS = "Brave Search MCP Server for web, news and local search."


class McpServersRegistry:
    def __init__(self) -> None:
        self.registry = FastMCP("brave-search", instructions=INSTRUCTIONS)
        self._is_initialized = False

    async def initialize(self) -> None:
        """Mount all MCP servers into the registry."""
        if self._is_initialized:
            return

        logger.info("Initializing MCP tool registry...")

        try:
            initialize_observability(
                service_name=settings.OTEL_SERVICE_NAME,
                enabled=settings.AGENT_OBSERVABILITY_ENABLED,
            )
        except Exception:
            logger.exception(
                "Observability initialization failed. "
                "Tracing will be disabled."
            )

        # Tool names stay unprefixed: brave_web_search, brave_news_search, ...
        self.registry.mount(brave_search_mcp)

        self._is_initialized = True

        all_tools = await self.registry.list_tools()
        tool_names = [t.name for t in all_tools]
        logger.info(f"Registry initialized with {len(all_tools)} tools: {tool_names}")

    def get_registry(self) -> FastMCP:
        return self.registry
