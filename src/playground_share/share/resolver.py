"""Resolve ``#gist=<id>`` references into project files.

The HTTP transport lives in ``core.client.GistClient``; this module runs it
off the event loop, completes truncated files, and converts the result.
"""

from __future__ import annotations

import logging
from typing import Any, Protocol

from ..core.async_utils import gather_limited, run_sync, run_sync_limited
from ..core.client import GistClient
from ..models import ProjectFile
from .conversion import gist_to_project_files

logger = logging.getLogger(__name__)


class Resolver(Protocol):
    """Anything that can turn a gist id into project files."""

    async def resolve(self, gist_id: str) -> list[ProjectFile]:
        """Raises ``NotFoundError`` or ``TransportError`` on failure."""
        ...  # pragma: no cover


class RemoteReferenceResolver:
    """Fetch a gist and map it into ``ProjectFile`` records.

    Args:
        client: Gist transport. Its ``NotFoundError`` / ``TransportError``
            propagate unchanged.
    """

    def __init__(self, client: GistClient) -> None:
        self.client = client

    async def resolve(self, gist_id: str) -> list[ProjectFile]:
        gist = await run_sync(self.client.get_gist, gist_id)
        gist_files = await self._fill_truncated(gist["files"])
        files = gist_to_project_files(gist_files)
        logger.info("Resolved gist %s with %d file(s)", gist_id, len(files))
        return files

    async def _fill_truncated(
        self, gist_files: dict[str, dict[str, Any]]
    ) -> dict[str, dict[str, Any]]:
        """Fetch full content for files the API returned truncated."""
        truncated = [
            (key, gist_file)
            for key, gist_file in gist_files.items()
            if gist_file.get("truncated") and gist_file.get("raw_url")
        ]
        if not truncated:
            return gist_files

        logger.debug("Fetching %d truncated gist file(s)", len(truncated))
        contents = await gather_limited(
            [
                run_sync_limited(
                    self.client.get_raw_content, gist_file["raw_url"]
                )
                for _, gist_file in truncated
            ]
        )

        filled = dict(gist_files)
        for (key, gist_file), content in zip(truncated, contents):
            filled[key] = {**gist_file, "content": content, "truncated": False}
        return filled
