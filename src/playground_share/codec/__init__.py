"""Codecs that turn playground projects into URL fragment tokens.

Modules:

- ``safe_base64`` -- UTF-8 text <-> URL-safe, unpadded base64.
- ``compact``     -- ``ProjectFile`` <-> ``CompactProjectFile``.
- ``project``     -- file list <-> ``#project=`` token.
"""

from .compact import compact_file, expand_file
from .project import deserialize_project, serialize_project
from .safe_base64 import decode_safe_base64, encode_safe_base64

__all__ = [
    "compact_file",
    "decode_safe_base64",
    "deserialize_project",
    "encode_safe_base64",
    "expand_file",
    "serialize_project",
]
