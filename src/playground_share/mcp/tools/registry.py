"""ToolSpec and ToolRegistry for MCP tool dispatch.

- ToolSpec: Immutable link between a Tool definition and its async handler
  with signature (context, args) -> CallToolResult.
- ToolRegistry: Filters specs by the configured enabled names, then
  provides list_tools() and call_tool() dispatch with error translation.
- ToolContext: What handlers receive: runtime config and gist resolver.
"""

import logging
from collections.abc import Awaitable, Callable, Iterable
from dataclasses import dataclass

import mcp.types as types

from ...config import Config
from ...errors import PlaygroundShareError
from ...share.resolver import Resolver

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ToolContext:
    config: Config
    resolver: Resolver


@dataclass(frozen=True, slots=True)
class ToolSpec:
    """Immutable specification for a single MCP tool."""

    tool: types.Tool
    handler: Callable[[ToolContext, dict], Awaitable[types.CallToolResult]]


class ToolRegistry:
    """Registry of ToolSpecs.

    If enabled is None, every spec is registered; otherwise only specs
    whose name is listed. Unknown names in enabled are logged and ignored.
    """

    def __init__(
        self,
        specs: list[ToolSpec],
        enabled: Iterable[str] | None = None,
    ):
        enabled_names = None if enabled is None else frozenset(enabled)
        self._specs: dict[str, ToolSpec] = {}
        for spec in specs:
            if enabled_names is None or spec.tool.name in enabled_names:
                self._specs[spec.tool.name] = spec

        if enabled_names is not None:
            unknown = enabled_names - {s.tool.name for s in specs}
            if unknown:
                logger.warning(
                    "Ignoring unknown tool names in config: %s",
                    ", ".join(sorted(unknown)),
                )

    def list_tools(self) -> list[types.Tool]:
        return [spec.tool for spec in self._specs.values()]

    def tool_count(self) -> int:
        return len(self._specs)

    async def call_tool(
        self,
        name: str,
        arguments: dict | None,
        context: ToolContext,
    ) -> types.CallToolResult:
        """Dispatch a tool call to its handler.

        Share-state errors, validation errors and unexpected exceptions
        are translated into structured error responses.

        Raises:
            ValueError: If the tool name is not registered.
        """
        from .errors import build_error_response, translate_share_error

        spec = self._specs.get(name)
        if spec is None:
            raise ValueError(f"Unknown tool: {name}")
        args = arguments or {}
        try:
            return await spec.handler(context, args)
        except PlaygroundShareError as e:
            logger.warning("Share error in %s: %s", name, e)
            return translate_share_error(e)
        except ValueError as e:
            return build_error_response(
                "validation_error",
                str(e),
                "Check parameter values and retry.",
            )
        except Exception as e:
            logger.exception("Unexpected error in tool %s", name)
            return build_error_response(
                "server_error",
                str(e),
                "Retry later or check the server log.",
            )
