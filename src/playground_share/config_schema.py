"""Unified configuration schema for playground_share.

Defines Pydantic models for the YAML config structure with dedicated
sections for the GitHub gist API, built-in samples, logging, and the tool
surface. Includes adapters to the runtime ``Config`` dataclass.

Usage:
    from playground_share.config_schema import build_config, to_fallbacks

    raw = load_hierarchical_config()
    unified = build_config(raw)
    config = load_config(yaml_fallbacks=to_fallbacks(unified))
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Literal

from pydantic import BaseModel, Field

if TYPE_CHECKING:
    from .config import Config

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Section models
# ---------------------------------------------------------------------------


class GitHubConfig(BaseModel):
    """GitHub REST API settings used to resolve ``#gist=`` links."""

    api_url: str | None = Field(
        default=None, description="GitHub REST API base URL"
    )
    request_timeout: float = Field(
        default=10.0, gt=0, le=300, description="HTTP timeout in seconds"
    )
    max_parallel_requests: int = Field(
        default=5,
        ge=1,
        le=100,
        description="Concurrent raw-content fetches for truncated gist files",
    )

    model_config = {"frozen": True}


class SamplesConfig(BaseModel):
    """Built-in sample layout and share link settings.

    Sample manifests live at ``<root>/<sample>/<manifest_file>`` where the
    root depends on the code-language preference.
    """

    playground_url: str | None = Field(
        default=None, description="Public playground page for share links"
    )
    base_config: str = Field(
        default="/samples/base.json",
        description="Config extended by shared (inline or gist) projects",
    )
    root: str = Field(default="/samples", description="TypeScript samples root")
    js_root: str = Field(
        default="/samples/js", description="JavaScript samples root"
    )
    default_sample: str = Field(default="examples/hello-world")
    manifest_file: str = Field(default="project.json")
    code_language: Literal["ts", "js"] = Field(default="ts")
    debug: bool = Field(default=False, description="Enable debug mode")

    model_config = {"frozen": True}


class LoggingConfig(BaseModel):
    """Logging configuration.

    Attributes:
        level: Log level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        file: Optional log file path.
    """

    level: str = Field(default="INFO", description="Log level")
    file: str | None = Field(default=None, description="Log file path")

    model_config = {"frozen": True}


class ToolsConfig(BaseModel):
    """Tool surface settings.

    Attributes:
        enabled: Tool names to expose. ``None`` exposes every tool.
    """

    enabled: list[str] | None = Field(default=None)

    model_config = {"frozen": True}


# ---------------------------------------------------------------------------
# Top-level unified config
# ---------------------------------------------------------------------------


class UnifiedConfig(BaseModel):
    """Top-level unified configuration.

    Every section has defaults, so ``UnifiedConfig()`` is always valid.
    """

    github: GitHubConfig = Field(default_factory=GitHubConfig)
    samples: SamplesConfig = Field(default_factory=SamplesConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    tools: ToolsConfig = Field(default_factory=ToolsConfig)

    model_config = {"frozen": True}


def build_config(raw_data: dict) -> UnifiedConfig:
    """Construct a ``UnifiedConfig`` from ``load_hierarchical_config()`` output.

    Missing sections get defaults.
    """
    if not raw_data:
        return UnifiedConfig()

    return UnifiedConfig(**raw_data)


# ---------------------------------------------------------------------------
# Adapters: UnifiedConfig -> runtime Config
# ---------------------------------------------------------------------------


def to_fallbacks(unified: UnifiedConfig) -> dict:
    """Flatten a ``UnifiedConfig`` into the ``yaml_fallbacks`` dict that
    ``load_config()`` understands. ``None`` values are dropped.
    """
    flat = {
        "github_api_url": unified.github.api_url,
        "request_timeout": unified.github.request_timeout,
        "max_parallel_requests": unified.github.max_parallel_requests,
        "playground_url": unified.samples.playground_url,
        "base_config": unified.samples.base_config,
        "samples_root": unified.samples.root,
        "js_samples_root": unified.samples.js_root,
        "default_sample": unified.samples.default_sample,
        "manifest_file": unified.samples.manifest_file,
        "code_language": unified.samples.code_language,
        "debug": unified.samples.debug,
    }
    return {k: v for k, v in flat.items() if v is not None}


def to_runtime_config(
    unified: UnifiedConfig,
    cli_overrides: dict | None = None,
) -> Config:
    """Convert a ``UnifiedConfig`` into the ``Config`` dataclass, applying
    CLI overrides on top (keys: github_api_url, playground_url,
    code_language, debug).

    The result is NOT validated; run ``validate_config()`` separately.
    """
    # Imported here: config.py is the lower layer
    from .config import Config

    overrides = cli_overrides or {}
    fb = to_fallbacks(unified)
    defaults = Config()

    return Config(
        github_api_url=overrides.get("github_api_url")
        or fb.get("github_api_url", defaults.github_api_url),
        playground_url=overrides.get("playground_url")
        or fb.get("playground_url", defaults.playground_url),
        base_config=fb["base_config"],
        samples_root=fb["samples_root"],
        js_samples_root=fb["js_samples_root"],
        default_sample=fb["default_sample"],
        manifest_file=fb["manifest_file"],
        code_language=overrides.get("code_language") or fb["code_language"],
        request_timeout=fb["request_timeout"],
        max_parallel_requests=fb["max_parallel_requests"],
        debug=overrides.get("debug", False) or fb["debug"],
    )
