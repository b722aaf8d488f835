"""MCP tool handlers for playground share links.

Defines three tools:

- ``playground_share``  -- encode files into a ``#project=`` share link.
- ``playground_decode`` -- decode a ``#project=`` token into files.
- ``playground_open``   -- reconcile a playground URL the way the page
  would and report the resulting editor configuration.
"""

from __future__ import annotations

import json
import logging
from typing import Any

import mcp.types as types
from pydantic import TypeAdapter

from ...codec.compact import expand_file
from ...codec.project import deserialize_project
from ...config import CODE_LANGUAGES
from ...models import ProjectFile
from ...share.session import PlaygroundSession
from ...share.sharing import build_share_link
from ...validators import validate_project_files
from .errors import build_error_response
from .registry import ToolContext, ToolSpec

logger = logging.getLogger(__name__)

_FILES = TypeAdapter(list[ProjectFile])

_FILE_SCHEMA = {
    "type": "object",
    "properties": {
        "name": {"type": "string", "description": "Path-like file name"},
        "content": {"type": "string"},
        "hidden": {"type": "boolean", "default": False},
    },
    "required": ["name", "content"],
}


# ---------------------------------------------------------------------------
# Tool definitions
# ---------------------------------------------------------------------------


PLAYGROUND_TOOLS: list[types.Tool] = [
    types.Tool(
        name="playground_share",
        description=(
            "Encode project files into a playground share link. The whole "
            "project is stored in the URL fragment; nothing is uploaded."
        ),
        annotations=types.ToolAnnotations(
            readOnlyHint=True,
            destructiveHint=False,
            idempotentHint=True,
            openWorldHint=False,
        ),
        inputSchema={
            "type": "object",
            "properties": {
                "files": {
                    "type": "array",
                    "items": _FILE_SCHEMA,
                    "description": "Files in display order",
                },
                "base_url": {
                    "type": "string",
                    "description": "Playground page URL. Defaults to the configured playground URL.",
                },
            },
            "required": ["files"],
        },
    ),
    types.Tool(
        name="playground_decode",
        description="Decode a playground '#project=' token back into its files.",
        annotations=types.ToolAnnotations(
            readOnlyHint=True,
            destructiveHint=False,
            idempotentHint=True,
            openWorldHint=False,
        ),
        inputSchema={
            "type": "object",
            "properties": {
                "token": {
                    "type": "string",
                    "description": "Value of the 'project' fragment parameter",
                },
            },
            "required": ["token"],
        },
    ),
    types.Tool(
        name="playground_open",
        description=(
            "Open a playground URL headlessly: resolves '#gist=' (GitHub), "
            "'#project=' or '#sample=' exactly like the playground page and "
            "returns the editor configuration plus any notifications."
        ),
        annotations=types.ToolAnnotations(
            readOnlyHint=True,
            destructiveHint=False,
            idempotentHint=True,
            openWorldHint=True,
        ),
        inputSchema={
            "type": "object",
            "properties": {
                "url": {"type": "string", "description": "Playground URL"},
                "code_language": {
                    "type": "string",
                    "enum": list(CODE_LANGUAGES),
                    "description": "Sample variant. Defaults to the configured language.",
                },
                "samples": {
                    "type": "array",
                    "items": {"type": "string"},
                    "description": "Sample ids shown in the navigation list",
                },
            },
            "required": ["url"],
        },
    ),
]


# ---------------------------------------------------------------------------
# Individual handlers
# ---------------------------------------------------------------------------


def _files_text(files: list[ProjectFile]) -> str:
    lines = []
    for f in files:
        flag = " (hidden)" if f.hidden else ""
        lines.append(f"- {f.name}{flag}: {len(f.content)} chars")
    return "\n".join(lines) if lines else "(no files)"


async def _handle_share(
    context: ToolContext, args: dict[str, Any]
) -> types.CallToolResult:
    raw_files = args.get("files")
    if not isinstance(raw_files, list):
        return build_error_response(
            "validation_error",
            "files must be a list",
            "Provide 'files' as a list of {name, content, hidden?} objects.",
        )

    files = _FILES.validate_python(raw_files)
    is_valid, error = validate_project_files(files)
    if not is_valid:
        raise ValueError(error)

    base_url = args.get("base_url") or context.config.playground_url
    link = build_share_link(files, base_url)
    token = link.rpartition("#project=")[2]

    text = f"Share link ({len(files)} file(s)):\n{link}"
    return types.CallToolResult(
        content=[types.TextContent(type="text", text=text)],
        structuredContent={
            "url": link,
            "token": token,
            "file_count": len(files),
        },
    )


async def _handle_decode(
    context: ToolContext, args: dict[str, Any]
) -> types.CallToolResult:
    token = args.get("token")
    if not isinstance(token, str) or not token:
        return build_error_response(
            "validation_error",
            "token is required",
            "Provide the value of the 'project' fragment parameter.",
        )

    files = [expand_file(c) for c in deserialize_project(token)]
    return types.CallToolResult(
        content=[types.TextContent(type="text", text=_files_text(files))],
        structuredContent={"files": [f.model_dump() for f in files]},
    )


async def _handle_open(
    context: ToolContext, args: dict[str, Any]
) -> types.CallToolResult:
    url = args.get("url")
    if not isinstance(url, str) or not url:
        return build_error_response(
            "validation_error",
            "url is required",
            "Provide a playground URL, e.g. https://lit.dev/playground/#sample=examples/hello-world",
        )
    code_language = args.get("code_language")
    if code_language is not None and code_language not in CODE_LANGUAGES:
        raise ValueError(
            f"code_language must be one of {', '.join(CODE_LANGUAGES)}"
        )

    session = PlaygroundSession.headless(
        context.config,
        context.resolver,
        url=url,
        samples=args.get("samples") or (),
        code_language=code_language,
    )
    source = await session.reconciler.sync_from_url()
    project_config = session.editor.config
    active = session.reconciler.active_remote_ref

    structured = {
        "source": source.value if source else None,
        "project_config": project_config.to_dict() if project_config else None,
        "active_gist": active.id if active else None,
        "language_switch_hidden": session.language_switch.hidden,
        "active_sample": session.navigation.active,
        "notifications": [
            {"heading": e.heading, "message": e.message, "detail": e.detail}
            for e in session.notifier.errors
        ],
    }

    lines = [f"Source: {structured['source']}"]
    for note in structured["notifications"]:
        lines.append(f"Notification: {note['heading']} - {note['message']}")
    lines.append(json.dumps(structured["project_config"], indent=2))
    return types.CallToolResult(
        content=[types.TextContent(type="text", text="\n".join(lines))],
        structuredContent=structured,
    )


PLAYGROUND_SPECS: list[ToolSpec] = [
    ToolSpec(tool=PLAYGROUND_TOOLS[0], handler=_handle_share),
    ToolSpec(tool=PLAYGROUND_TOOLS[1], handler=_handle_decode),
    ToolSpec(tool=PLAYGROUND_TOOLS[2], handler=_handle_open),
]
