"""Entrypoint for the Brave Search MCP server.

Run over stdio or SSE from the command line:
    brave-search-mcp --api-key KEY stdio
    brave-search-mcp sse --port 3000

or host the streamable HTTP app with an ASGI server:
    uvicorn brave_search_mcp.main:app
"""

import argparse
import asyncio
import sys

import uvicorn
from loguru import logger

from brave_search_mcp.config import settings
from brave_search_mcp.servers.brave_search_server import close_service, set_service
from brave_search_mcp.servers.tool_registry import McpServersRegistry
from brave_search_mcp.services.search_service import SearchService

registry = McpServersRegistry()
_inner_app = registry.get_registry().http_app(stateless_http=True)


async def app(scope, receive, send):
    """ASGI app that forwards lifespan and lazily initializes the registry."""
    if scope["type"] == "lifespan":
        await _inner_app(scope, receive, send)
        return
    if not registry._is_initialized:
        await registry.initialize()
    await _inner_app(scope, receive, send)


def configure_logging(level: str) -> None:
    # stdout carries the stdio transport, so logs go to stderr only.
    logger.remove()
    logger.add(sys.stderr, level=level.upper())


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="brave-search-mcp",
        description="Brave Search MCP Server",
    )
    parser.add_argument(
        "-k",
        "--api-key",
        default=None,
        help="Brave API key (defaults to the BRAVE_API_KEY environment variable)",
    )
    parser.add_argument(
        "--log-level",
        default=settings.LOG_LEVEL,
        help="Log level for stderr output (default: %(default)s)",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)
    subparsers.add_parser("stdio", help="Run the MCP server over stdio")
    sse = subparsers.add_parser("sse", help="Run the MCP server over SSE")
    sse.add_argument("--host", default=settings.SSE_HOST, help="Bind address (default: %(default)s)")
    sse.add_argument(
        "-p", "--port", type=int, default=settings.SSE_PORT, help="Port (default: %(default)s)"
    )
    return parser


async def run_stdio() -> None:
    await registry.initialize()
    try:
        await registry.get_registry().run_async(transport="stdio")
    finally:
        await close_service()


async def run_sse(host: str, port: int) -> None:
    await registry.initialize()
    sse_app = registry.get_registry().http_app(transport="sse")
    server = uvicorn.Server(uvicorn.Config(sse_app, host=host, port=port))
    try:
        await server.serve()
    finally:
        await close_service()


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    api_key = args.api_key or settings.BRAVE_API_KEY
    if not api_key:
        parser.error("a Brave API key is required (--api-key or BRAVE_API_KEY)")

    configure_logging(args.log_level)
    set_service(
        SearchService.from_settings(settings.model_copy(update={"BRAVE_API_KEY": api_key}))
    )

    logger.info("Starting Brave Search MCP server")
    if args.command == "stdio":
        logger.info("Running in stdio mode")
        asyncio.run(run_stdio())
    else:
        logger.info(f"Running in SSE mode on {args.host}:{args.port}")
        asyncio.run(run_sse(args.host, args.port))


if __name__ == "__main__":
    main()
