"""MCP tool handlers for playground share links.

Wraps the codecs and the share-state engine with async handlers and
structured error responses.
"""

from .errors import build_error_response, translate_share_error
from .playground import PLAYGROUND_SPECS, PLAYGROUND_TOOLS
from .registry import ToolContext, ToolRegistry, ToolSpec

ALL_SPECS: list[ToolSpec] = list(PLAYGROUND_SPECS)

__all__ = [
    "ALL_SPECS",
    "PLAYGROUND_SPECS",
    "PLAYGROUND_TOOLS",
    "ToolContext",
    "ToolRegistry",
    "ToolSpec",
    "build_error_response",
    "translate_share_error",
]
