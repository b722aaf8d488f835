"""URL-safe base64 for arbitrary Unicode text.

Standard base64 uses ``+``, ``/`` and ``=`` which all need escaping in a
URL fragment. Tokens produced here use the RFC 4648 URL-safe alphabet
(``-`` and ``_``) and carry no padding.
"""

import base64
import binascii
import re

from ..errors import DecodeError

_TOKEN_PATTERN = re.compile(r"[A-Za-z0-9_-]*")


def encode_safe_base64(text: str) -> str:
    """Encode *text* as UTF-8 and return an unpadded URL-safe base64 token."""
    encoded = base64.urlsafe_b64encode(text.encode("utf-8"))
    return encoded.rstrip(b"=").decode("ascii")


def decode_safe_base64(token: str) -> str:
    """Inverse of ``encode_safe_base64()``.

    Raises:
        DecodeError: If *token* contains characters outside the URL-safe
            alphabet, has a length no base64 string can have, or does not
            decode to valid UTF-8.
    """
    if not _TOKEN_PATTERN.fullmatch(token):
        raise DecodeError("Token contains characters outside [A-Za-z0-9_-]")
    if len(token) % 4 == 1:
        raise DecodeError(f"Token length {len(token)} is not valid base64")

    padded = token + "=" * (-len(token) % 4)
    try:
        raw = base64.urlsafe_b64decode(padded)
    except binascii.Error as e:
        raise DecodeError(f"Invalid base64 token: {e}") from e

    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as e:
        raise DecodeError(f"Token does not decode to UTF-8 text: {e}") from e
