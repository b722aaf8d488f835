"""Convert GitHub gist file mappings into playground project files.

A gist may carry a ``playground.json`` metadata file::

    {"files": {"index.html": {}, "my-element.ts": {}, "package.json": {"hidden": true}}}

Its key order is the project's file order and its ``hidden`` flags are
applied. The metadata file is never itself a project file. Gist files that
the metadata does not list follow in gist order.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from ..models import ProjectFile

logger = logging.getLogger(__name__)

PLAYGROUND_METADATA_FILE = "playground.json"


def _parse_metadata(content: str) -> dict[str, dict[str, Any]]:
    """Return the ``files`` mapping of ``playground.json``, or ``{}``."""
    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        logger.warning("Ignoring invalid %s: %s", PLAYGROUND_METADATA_FILE, e)
        return {}

    files = data.get("files") if isinstance(data, dict) else None
    if not isinstance(files, dict):
        logger.warning(
            "Ignoring %s without a files mapping", PLAYGROUND_METADATA_FILE
        )
        return {}
    return {
        name: info if isinstance(info, dict) else {}
        for name, info in files.items()
    }


def gist_to_project_files(
    gist_files: dict[str, dict[str, Any]],
) -> list[ProjectFile]:
    """Map a gist's ``files`` object onto ordered ``ProjectFile`` records.

    Args:
        gist_files: GitHub's ``filename -> {filename, content, ...}``
            mapping. Truncated entries must already be filled in.
    """
    metadata: dict[str, dict[str, Any]] = {}
    contents: dict[str, str] = {}

    for key, gist_file in gist_files.items():
        filename = gist_file.get("filename") or key
        content = gist_file.get("content") or ""
        if filename == PLAYGROUND_METADATA_FILE:
            metadata = _parse_metadata(content)
            continue
        contents[filename] = content

    ordered = [name for name in metadata if name in contents]
    ordered += [name for name in contents if name not in metadata]

    return [
        ProjectFile(
            name=name,
            content=contents[name],
            hidden=bool(metadata.get(name, {}).get("hidden", False)),
        )
        for name in ordered
    ]
