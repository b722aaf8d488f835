"""Error response builders for MCP tool handlers.

Responses carry a corrective action so an agent can recover without human
intervention.
"""

import mcp.types as types

from ...errors import (
    DecodeError,
    MalformedProjectError,
    NotFoundError,
    TransportError,
)


def build_error_response(
    error_type: str, message: str, corrective_action: str
) -> types.CallToolResult:
    """Build a structured error response with corrective action.

    Args:
        error_type: Error category (decode_error, malformed_project,
            not_found, transport_error, validation_error, server_error)
        message: Human-readable error description
        corrective_action: What the agent can do about it

    Returns:
        CallToolResult with isError=True

    Examples:
        >>> build_error_response("not_found", "Gist abc not found", "Check the gist id.")
        CallToolResult(content=[TextContent(...)], isError=True)
    """
    error_text = f"Error ({error_type}): {message}\n\nAction: {corrective_action}"

    return types.CallToolResult(
        content=[types.TextContent(type="text", text=error_text)],
        isError=True,
    )


def translate_share_error(error: Exception) -> types.CallToolResult:
    """Translate a share-state exception into a structured error response."""
    match error:
        case DecodeError():
            return build_error_response(
                "decode_error",
                str(error),
                "The token must be URL-safe base64 as produced by playground_share. "
                "Check it was copied completely.",
            )
        case MalformedProjectError():
            return build_error_response(
                "malformed_project",
                str(error),
                "The token decodes but does not contain a list of files. "
                "Re-create it with playground_share.",
            )
        case NotFoundError():
            return build_error_response(
                "not_found",
                str(error),
                "Check the gist id, and that the gist is public.",
            )
        case TransportError():
            return build_error_response(
                "transport_error",
                str(error),
                "Check network access to the GitHub API or retry later.",
            )
        case _:
            return build_error_response(
                "server_error",
                str(error),
                "Retry later or check the server log.",
            )
