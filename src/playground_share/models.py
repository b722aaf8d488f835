"""Pydantic models for playground projects and share state.

- ``ProjectFile`` / ``CompactProjectFile``: a file in full and in its
  size-optimized serialized form.
- ``RemoteRef`` / ``InlineToken`` / ``NoShareState``: the share state
  carried by a URL fragment (``UrlShareState``).
- ``ActiveRemoteRef``: the most recently resolved gist.
- ``ExtendsProjectConfig`` / ``SourceProjectConfig``: what the editor is
  handed (``ProjectConfig``).
- ``ReconcileSource`` / ``ReconcilerPhase``: reconciler bookkeeping.

All models are frozen.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field, field_validator


class ProjectFile(BaseModel):
    """A named source file in a playground project.

    Attributes:
        name: Path-like name, unique within a project.
        content: File text.
        hidden: Whether the editor hides the file from its tab bar.
    """

    name: str
    content: str
    hidden: bool = False

    model_config = {"frozen": True}


class CompactProjectFile(BaseModel):
    """Serialized form of ``ProjectFile``: ``hidden`` is only kept when true.

    Validation is strict so a payload like ``{"name": 1}`` is rejected
    rather than coerced. An explicit ``"hidden": false`` is accepted and
    normalized away.
    """

    name: str
    content: str
    hidden: bool | None = None

    model_config = {"frozen": True, "strict": True}

    @field_validator("hidden")
    @classmethod
    def _drop_false(cls, value: bool | None) -> bool | None:
        return True if value else None

    def to_wire(self) -> dict:
        """Dict with keys ``name``, ``content`` and ``hidden`` only if true."""
        return self.model_dump(exclude_none=True)


# ---------------------------------------------------------------------------
# URL share state
# ---------------------------------------------------------------------------


class RemoteRef(BaseModel):
    """``#gist=<id>``"""

    id: str

    model_config = {"frozen": True}


class InlineToken(BaseModel):
    """``#project=<token>``"""

    token: str

    model_config = {"frozen": True}


class NoShareState(BaseModel):
    """No gist or project parameter in the fragment."""

    model_config = {"frozen": True}


UrlShareState = RemoteRef | InlineToken | NoShareState


class ActiveRemoteRef(BaseModel):
    """The gist the editor currently shows, with its resolved files."""

    id: str
    files: list[ProjectFile] = []

    model_config = {"frozen": True}


# ---------------------------------------------------------------------------
# Editor project configuration
# ---------------------------------------------------------------------------


class FileConfig(BaseModel):
    content: str
    hidden: bool = False

    model_config = {"frozen": True}


class ExtendsProjectConfig(BaseModel):
    """Project built from shared files on top of a base config."""

    extends: str
    files: dict[str, FileConfig]

    model_config = {"frozen": True}

    @classmethod
    def from_files(
        cls, base: str, files: list[ProjectFile]
    ) -> ExtendsProjectConfig:
        return cls(
            extends=base,
            files={
                f.name: FileConfig(content=f.content, hidden=f.hidden)
                for f in files
            },
        )

    def to_dict(self) -> dict:
        return self.model_dump()


class SourceProjectConfig(BaseModel):
    """Project loaded from a prebuilt sample manifest."""

    project_src: str = Field(alias="projectSrc")

    model_config = {"frozen": True, "populate_by_name": True}

    def to_dict(self) -> dict:
        return self.model_dump(by_alias=True)


ProjectConfig = ExtendsProjectConfig | SourceProjectConfig


# ---------------------------------------------------------------------------
# Reconciler bookkeeping
# ---------------------------------------------------------------------------


class ReconcileSource(str, Enum):
    """Which source of truth drove the last applied project."""

    REMOTE_REF = "remote_ref"
    INLINE_TOKEN = "inline_token"
    FALLBACK = "fallback"


class ReconcilerPhase(str, Enum):
    IDLE = "idle"
    RESOLVING = "resolving"
    APPLIED = "applied"
