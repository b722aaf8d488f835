"""GitHub gist transport shared between the reconciler and the MCP server."""

from .async_utils import run_sync
from .client import GistClient

__all__ = ["GistClient", "run_sync"]
