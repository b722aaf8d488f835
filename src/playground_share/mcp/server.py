"""MCP server for playground share links using stdio transport.

Lets AI agents create playground share links, decode them, and open
playground URLs (including ``#gist=`` references) headlessly.

Transport: stdio
Protocol: JSON-RPC 2.0 over MCP
"""

import argparse
import asyncio
import logging
import sys

import mcp.server.stdio
import mcp.types as types
from mcp.server import NotificationOptions, Server
from mcp.server.models import InitializationOptions

from .. import __version__
from ..config import CODE_LANGUAGES
from ..logger import DEFAULT_LOG_FILE, setup_logging
from ..version import check_version_consistency
from .lifespan import server_lifespan
from .tools import ALL_SPECS, ToolContext, ToolRegistry, build_error_response

logger = logging.getLogger(__name__)

server = Server("playground-share-server")

# Initialized in main()
_context: ToolContext | None = None
_registry: ToolRegistry | None = None


def get_context() -> ToolContext:
    """Raises RuntimeError if the server lifespan has not started."""
    if _context is None:
        raise RuntimeError(
            "ToolContext not initialized. Server lifespan not started."
        )
    return _context


def set_context(context: ToolContext | None) -> None:
    global _context
    _context = context


def get_registry() -> ToolRegistry:
    if _registry is None:
        raise RuntimeError("ToolRegistry not initialized.")
    return _registry


def set_registry(registry: ToolRegistry | None) -> None:
    global _registry
    _registry = registry


# ---------------------------------------------------------------------------
# MCP protocol handlers
# ---------------------------------------------------------------------------


@server.list_tools()
async def handle_list_tools() -> list[types.Tool]:
    return get_registry().list_tools()


@server.call_tool()
async def handle_call_tool(
    name: str, arguments: dict | None
) -> types.CallToolResult:
    """Dispatch through the ToolRegistry; unknown names become an error
    response instead of a protocol error."""
    context = get_context()
    try:
        return await get_registry().call_tool(name, arguments, context)
    except ValueError as e:
        return build_error_response(
            "unknown_tool",
            str(e),
            "Use list_tools to see available tools.",
        )


# ---------------------------------------------------------------------------
# Server lifecycle
# ---------------------------------------------------------------------------


async def main(config_overrides: dict | None = None):
    """Run the MCP server with stdio transport.

    Logging is set up for MCP mode (file only) before the stdio transport
    starts so nothing reaches stdout during protocol negotiation.
    """
    overrides = dict(config_overrides or {})
    log_file = overrides.pop("log_file", None)
    setup_logging(
        mode="mcp", debug=overrides.get("debug", False), log_file=log_file
    )

    is_consistent, message = check_version_consistency()
    if not is_consistent:
        logger.warning(message)
        sys.stderr.write(f"Warning: {message}\n")
    else:
        logger.info(message)

    async with server_lifespan(config_overrides=overrides or None) as ctx:
        registry = ToolRegistry(ALL_SPECS, ctx["unified"].tools.enabled)
        logger.info(
            "Registered %d tools (of %d total)",
            registry.tool_count(),
            len(ALL_SPECS),
        )
        set_registry(registry)
        set_context(ctx["context"])
        try:
            async with mcp.server.stdio.stdio_server() as (
                read_stream,
                write_stream,
            ):
                init_options = InitializationOptions(
                    server_name="playground-share-server",
                    server_version=__version__,
                    capabilities=server.get_capabilities(
                        notification_options=NotificationOptions(),
                        experimental_capabilities={},
                    ),
                )
                await server.run(read_stream, write_stream, init_options)
        finally:
            set_context(None)
            set_registry(None)


def run() -> None:
    """Entry point: parse CLI arguments and run the server."""
    parser = argparse.ArgumentParser(
        description="Playground Share Server - MCP tools for playground share links",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Run with default config (from .env or .playground_share/config.yml)
  playground-share-server

  # Use a GitHub Enterprise API
  playground-share-server --github-api-url https://github.example.com/api/v3

  # Resolve samples against the JavaScript variants
  playground-share-server --code-language js

Note: This server uses stdio transport for JSON-RPC communication with MCP clients.
All user-facing messages are written to stderr.
        """,
    )
    parser.add_argument(
        "--github-api-url",
        help="GitHub REST API base URL (overrides PLAYGROUND_GITHUB_API_URL and config files)",
    )
    parser.add_argument(
        "--playground-url",
        help="Playground page used as base for share links (overrides PLAYGROUND_URL)",
    )
    parser.add_argument(
        "--code-language",
        choices=CODE_LANGUAGES,
        help="Sample variant used for fallback samples (overrides PLAYGROUND_CODE_LANGUAGE)",
    )
    parser.add_argument(
        "--debug", action="store_true", help="Enable debug logging"
    )
    parser.add_argument(
        "--log-file",
        default=DEFAULT_LOG_FILE,
        help=f"Log file path (default: {DEFAULT_LOG_FILE})",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"playground-share-server version {__version__}",
    )

    args = parser.parse_args()

    config_overrides = {}
    if args.github_api_url:
        config_overrides["github_api_url"] = args.github_api_url
    if args.playground_url:
        config_overrides["playground_url"] = args.playground_url
    if args.code_language:
        config_overrides["code_language"] = args.code_language
    if args.debug:
        config_overrides["debug"] = True
    if args.log_file:
        config_overrides["log_file"] = args.log_file

    try:
        asyncio.run(main(config_overrides=config_overrides or None))
    except RuntimeError:
        # Already reported on stderr by the lifespan manager
        sys.exit(1)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        sys.exit(0)


if __name__ == "__main__":
    run()
