"""Runtime configuration for the playground share server.

Reads settings from CLI args, environment variables, .env files, and YAML
config file fallbacks.

Precedence (highest to lowest):
    CLI args > Environment variables > .env file > YAML config > Built-in defaults

Environment variables:
    PLAYGROUND_GITHUB_API_URL: GitHub REST API base (default: https://api.github.com)
    PLAYGROUND_URL: Public playground page used for share links
    PLAYGROUND_CODE_LANGUAGE: "ts" or "js" sample variant (default: ts)
    PLAYGROUND_REQUEST_TIMEOUT: HTTP timeout in seconds (default: 10)
    PLAYGROUND_MAX_PARALLEL_REQUESTS: Concurrent raw gist fetches (default: 5)
    PLAYGROUND_DEBUG: Enable debug logging (default: false)
"""

import logging
import os
from dataclasses import dataclass
from urllib.parse import urlparse

logger = logging.getLogger(__name__)

CODE_LANGUAGES = ("ts", "js")


@dataclass
class Config:
    github_api_url: str = "https://api.github.com"
    playground_url: str = "https://lit.dev/playground/"
    base_config: str = "/samples/base.json"
    samples_root: str = "/samples"
    js_samples_root: str = "/samples/js"
    default_sample: str = "examples/hello-world"
    manifest_file: str = "project.json"
    code_language: str = "ts"
    request_timeout: float = 10.0
    max_parallel_requests: int = 5
    debug: bool = False


def _validate_http_url(label: str, url: str) -> str:
    url = url.strip()
    if not url.startswith(("http://", "https://")):
        raise ValueError(
            f"Invalid {label} '{url}': must start with http:// or https://"
        )
    if not urlparse(url).hostname:
        raise ValueError(f"Invalid {label} '{url}': URL must include a hostname")
    return url


def validate_config(config: Config) -> None:
    """Validate configuration values and raise ValueError if invalid.

    Normalizes the GitHub API URL (no trailing slash) in place.

    Raises:
        ValueError: On malformed URLs, an unknown code language, or
            out-of-range numbers.
    """
    config.github_api_url = _validate_http_url(
        "GitHub API URL", config.github_api_url
    ).removesuffix("/")
    config.playground_url = _validate_http_url(
        "playground URL", config.playground_url
    )

    if config.code_language not in CODE_LANGUAGES:
        raise ValueError(
            f"Invalid code language '{config.code_language}': "
            f"must be one of {', '.join(CODE_LANGUAGES)}"
        )

    if not config.default_sample.strip():
        raise ValueError("Default sample cannot be empty")

    if config.request_timeout <= 0:
        raise ValueError(
            f"Invalid request timeout {config.request_timeout}: must be positive"
        )

    if not (1 <= config.max_parallel_requests <= 100):
        raise ValueError(
            f"Invalid max_parallel_requests {config.max_parallel_requests}: "
            "must be a number between 1 and 100"
        )


def get_bool_env(key: str) -> bool | None:
    """Return True/False from env var, or None if unset."""
    val = os.getenv(key)
    if val is None:
        return None
    return val.lower() in ("true", "1", "yes", "on")


def _numeric_env(key: str, cast, fallback):
    raw = os.getenv(key)
    if raw is None:
        return fallback
    try:
        return cast(raw)
    except ValueError:
        raise ValueError(f"Invalid {key} '{raw}': must be a number") from None


def load_config(
    github_api_url: str | None = None,
    playground_url: str | None = None,
    code_language: str | None = None,
    debug: bool = False,
    yaml_fallbacks: dict | None = None,
) -> Config:
    """Load configuration with unified precedence.

    Resolution order for each field (highest to lowest):
        CLI arg > env var / .env > yaml_fallbacks > built-in default

    The caller is responsible for calling ``load_dotenv()`` first.

    Args:
        github_api_url: Override the GitHub API base URL.
        playground_url: Override the public playground URL.
        code_language: Override the sample variant ("ts" or "js").
        debug: Enable debug logging (CLI flag).
        yaml_fallbacks: Flat dict of values taken from the YAML config
            (see ``config_schema.to_fallbacks()``).

    Returns:
        Validated Config instance.

    Raises:
        ValueError: If any resolved value is invalid.
    """
    fb = yaml_fallbacks or {}
    defaults = Config()

    def pick(cli_value, env_key: str, field: str):
        return cli_value or os.getenv(env_key) or fb.get(field) or getattr(
            defaults, field
        )

    if debug:
        final_debug = True
    else:
        env_debug = get_bool_env("PLAYGROUND_DEBUG")
        final_debug = (
            env_debug if env_debug is not None else bool(fb.get("debug", False))
        )

    config = Config(
        github_api_url=pick(
            github_api_url, "PLAYGROUND_GITHUB_API_URL", "github_api_url"
        ),
        playground_url=pick(playground_url, "PLAYGROUND_URL", "playground_url"),
        base_config=fb.get("base_config") or defaults.base_config,
        samples_root=fb.get("samples_root") or defaults.samples_root,
        js_samples_root=fb.get("js_samples_root") or defaults.js_samples_root,
        default_sample=fb.get("default_sample") or defaults.default_sample,
        manifest_file=fb.get("manifest_file") or defaults.manifest_file,
        code_language=pick(
            code_language, "PLAYGROUND_CODE_LANGUAGE", "code_language"
        ),
        request_timeout=_numeric_env(
            "PLAYGROUND_REQUEST_TIMEOUT",
            float,
            float(fb.get("request_timeout", defaults.request_timeout)),
        ),
        max_parallel_requests=_numeric_env(
            "PLAYGROUND_MAX_PARALLEL_REQUESTS",
            int,
            int(fb.get("max_parallel_requests", defaults.max_parallel_requests)),
        ),
        debug=final_debug,
    )

    validate_config(config)
    logger.debug(
        "Config resolved: api=%s language=%s",
        config.github_api_url,
        config.code_language,
    )
    return config
