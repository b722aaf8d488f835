"""Serialize an ordered list of project files into one URL token.

Token layout: ``safe_base64(json([{"name", "content", "hidden"?}, ...]))``.
The JSON uses compact separators and keeps non-ASCII characters as-is;
base64 takes care of URL safety.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable

from pydantic import TypeAdapter, ValidationError

from ..errors import MalformedProjectError
from ..models import CompactProjectFile, ProjectFile
from .compact import compact_file
from .safe_base64 import decode_safe_base64, encode_safe_base64

logger = logging.getLogger(__name__)

_FILE_LIST = TypeAdapter(list[CompactProjectFile])


def serialize_project(files: Iterable[ProjectFile]) -> str:
    """Return the ``#project=`` token for *files*, preserving order."""
    records = [compact_file(f).to_wire() for f in files]
    text = json.dumps(records, separators=(",", ":"), ensure_ascii=False)
    return encode_safe_base64(text)


def deserialize_project(token: str) -> list[CompactProjectFile]:
    """Decode a ``#project=`` token back into compact file records.

    Raises:
        DecodeError: The token itself is not valid safe base64.
        MalformedProjectError: The decoded text is not JSON, is not a list
            of ``{name, content, hidden?}`` records, or repeats a name.
    """
    text = decode_safe_base64(token)

    try:
        payload = json.loads(text)
    except json.JSONDecodeError as e:
        raise MalformedProjectError(f"Invalid JSON in project token: {e}") from e
    except RecursionError as e:
        raise MalformedProjectError("Project token is nested too deeply") from e

    if not isinstance(payload, list):
        raise MalformedProjectError(
            f"Project token must hold a list of files, got {type(payload).__name__}"
        )

    try:
        files = _FILE_LIST.validate_python(payload)
    except ValidationError as e:
        raise MalformedProjectError(
            f"Invalid file record in project token: {e.error_count()} error(s)"
        ) from e

    names = [f.name for f in files]
    if len(set(names)) != len(names):
        raise MalformedProjectError("Project token repeats a file name")

    logger.debug("Decoded project token with %d file(s)", len(files))
    return files
