"""Tests for mcp/tools/errors.py: error response builders."""

import mcp.types as types
import pytest

from playground_share.errors import (
    DecodeError,
    MalformedProjectError,
    NotFoundError,
    PlaygroundShareError,
    TransportError,
)
from playground_share.mcp.tools.errors import (
    build_error_response,
    translate_share_error,
)


def _get_error_text(result: types.CallToolResult) -> str:
    content = result.content[0]
    assert isinstance(content, types.TextContent)
    return content.text


class TestBuildErrorResponse:
    def test_format(self):
        result = build_error_response("not_found", "Gist x not found", "Check it")

        assert result.isError is True
        assert _get_error_text(result) == (
            "Error (not_found): Gist x not found\n\nAction: Check it"
        )


class TestTranslateShareError:
    @pytest.mark.parametrize(
        "error, error_type",
        [
            (DecodeError("bad alphabet"), "decode_error"),
            (MalformedProjectError("not a list"), "malformed_project"),
            (NotFoundError("Gist x not found"), "not_found"),
            (TransportError("HTTP 500", status=500), "transport_error"),
            (PlaygroundShareError("other"), "server_error"),
        ],
    )
    def test_error_types(self, error, error_type):
        result = translate_share_error(error)

        text = _get_error_text(result)
        assert result.isError is True
        assert text.startswith(f"Error ({error_type}): {error}")
        assert "Action:" in text
