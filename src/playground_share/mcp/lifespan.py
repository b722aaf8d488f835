"""Lifespan management for MCP server startup and shutdown."""

import logging
import sys
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from dotenv import load_dotenv

from ..config import load_config
from ..config_loader import discover_config_files, load_hierarchical_config
from ..config_schema import UnifiedConfig, build_config, to_fallbacks
from ..core.async_utils import init_semaphore
from ..core.client import GistClient
from ..share.resolver import RemoteReferenceResolver
from .tools.registry import ToolContext

logger = logging.getLogger(__name__)


def _stderr_print(msg: str) -> None:
    """Print message to stderr for user feedback (safe in MCP mode)."""
    print(msg, file=sys.stderr, flush=True)


@asynccontextmanager
async def server_lifespan(
    config_overrides: dict[str, Any] | None = None,
) -> AsyncIterator[dict[str, Any]]:
    """
    Manage server startup and shutdown lifecycle.

    On startup:
    - Load .env (so values are visible to env lookups and YAML interpolation)
    - Load YAML config files if present (as fallback values)
    - Merge all sources via load_config(): CLI > env vars > .env > YAML > defaults
    - Create the GistClient and resolver, initialize the request semaphore

    Args:
        config_overrides: Optional dict with CLI values (github_api_url,
            playground_url, code_language, debug)

    Yields:
        Dict with 'context' (ToolContext) and 'unified' (UnifiedConfig)

    Raises:
        RuntimeError: If configuration is invalid.
    """
    logger.info("MCP server starting...")
    _stderr_print("Playground Share Server starting...")

    try:
        load_dotenv()

        unified = UnifiedConfig()
        sources = []
        config_files = discover_config_files()
        if config_files:
            unified = build_config(load_hierarchical_config())
            sources.append(f"config file: {config_files[0]}")

        overrides = config_overrides or {}
        config = load_config(
            github_api_url=overrides.get("github_api_url"),
            playground_url=overrides.get("playground_url"),
            code_language=overrides.get("code_language"),
            debug=overrides.get("debug", False),
            yaml_fallbacks=to_fallbacks(unified),
        )

        if overrides:
            sources.append("CLI arguments")
        sources.append("environment variables")
        source_desc = ", ".join(sources)
        logger.info("Configuration loaded from: %s", source_desc)
        _stderr_print(f"  Configuration loaded from: {source_desc}")
        logger.info("GitHub API: %s", config.github_api_url)
        _stderr_print(f"  GitHub API: {config.github_api_url}")
    except ValueError as e:
        logger.error("Configuration error: %s", e)
        _stderr_print(f"ERROR: Configuration error: {e}")
        raise RuntimeError(f"Configuration error: {e}") from e

    client = GistClient(config)
    init_semaphore(config.max_parallel_requests)
    _stderr_print(f"  Parallel requests: {config.max_parallel_requests}")
    _stderr_print("Server ready. Waiting for MCP client connection...")

    context = ToolContext(
        config=config, resolver=RemoteReferenceResolver(client)
    )
    try:
        yield {"context": context, "unified": unified}
    finally:
        logger.info("MCP server shutting down")
        client.close()
