"""Tests for playground_share.config: env-var config loading and validation.

NOT to be confused with test_config_loader.py (hierarchical YAML config)
or test_config_schema.py (Pydantic models).
"""

import pytest

from playground_share.config import Config, get_bool_env, load_config, validate_config

_ENV_KEYS = (
    "PLAYGROUND_GITHUB_API_URL",
    "PLAYGROUND_URL",
    "PLAYGROUND_CODE_LANGUAGE",
    "PLAYGROUND_REQUEST_TIMEOUT",
    "PLAYGROUND_MAX_PARALLEL_REQUESTS",
    "PLAYGROUND_DEBUG",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for key in _ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


# -------------------------------------------------------------------------
# validate_config()
# -------------------------------------------------------------------------


class TestValidateConfig:
    def test_defaults_are_valid(self):
        validate_config(Config())

    def test_strips_trailing_slash(self):
        config = Config(github_api_url="https://ghe.example.com/api/v3/")
        validate_config(config)
        assert config.github_api_url == "https://ghe.example.com/api/v3"

    def test_invalid_scheme(self):
        with pytest.raises(
            ValueError, match="must start with http:// or https://"
        ):
            validate_config(Config(github_api_url="ftp://example.com"))

    def test_missing_hostname(self):
        with pytest.raises(ValueError, match="URL must include a hostname"):
            validate_config(Config(playground_url="https://"))

    def test_invalid_code_language(self):
        with pytest.raises(ValueError, match="Invalid code language"):
            validate_config(Config(code_language="py"))

    def test_empty_default_sample(self):
        with pytest.raises(ValueError, match="Default sample cannot be empty"):
            validate_config(Config(default_sample="  "))

    def test_non_positive_timeout(self):
        with pytest.raises(ValueError, match="must be positive"):
            validate_config(Config(request_timeout=0))

    @pytest.mark.parametrize("value", [0, 101])
    def test_max_parallel_out_of_range(self, value):
        with pytest.raises(ValueError, match="between 1 and 100"):
            validate_config(Config(max_parallel_requests=value))


# -------------------------------------------------------------------------
# load_config()
# -------------------------------------------------------------------------


class TestLoadConfig:
    def test_defaults(self):
        config = load_config()
        assert config == Config()

    def test_env_overrides_yaml(self, monkeypatch):
        monkeypatch.setenv("PLAYGROUND_CODE_LANGUAGE", "js")
        config = load_config(yaml_fallbacks={"code_language": "ts"})
        assert config.code_language == "js"

    def test_cli_overrides_env(self, monkeypatch):
        monkeypatch.setenv("PLAYGROUND_GITHUB_API_URL", "https://env.example.com")
        config = load_config(github_api_url="https://cli.example.com")
        assert config.github_api_url == "https://cli.example.com"

    def test_yaml_fallbacks_used(self):
        config = load_config(
            yaml_fallbacks={
                "playground_url": "https://play.example.com/",
                "samples_root": "/s",
                "js_samples_root": "/s/js",
                "request_timeout": 3,
                "max_parallel_requests": 2,
                "debug": True,
            }
        )
        assert config.playground_url == "https://play.example.com/"
        assert config.samples_root == "/s"
        assert config.js_samples_root == "/s/js"
        assert config.request_timeout == 3.0
        assert config.max_parallel_requests == 2
        assert config.debug is True

    def test_numeric_env(self, monkeypatch):
        monkeypatch.setenv("PLAYGROUND_REQUEST_TIMEOUT", "2.5")
        monkeypatch.setenv("PLAYGROUND_MAX_PARALLEL_REQUESTS", "7")
        config = load_config()
        assert config.request_timeout == 2.5
        assert config.max_parallel_requests == 7

    def test_invalid_numeric_env(self, monkeypatch):
        monkeypatch.setenv("PLAYGROUND_MAX_PARALLEL_REQUESTS", "many")
        with pytest.raises(ValueError, match="must be a number"):
            load_config()

    def test_debug_env_false_beats_yaml(self, monkeypatch):
        monkeypatch.setenv("PLAYGROUND_DEBUG", "false")
        assert load_config(yaml_fallbacks={"debug": True}).debug is False

    def test_debug_cli_flag(self, monkeypatch):
        monkeypatch.setenv("PLAYGROUND_DEBUG", "false")
        assert load_config(debug=True).debug is True

    def test_invalid_value_raises(self, monkeypatch):
        monkeypatch.setenv("PLAYGROUND_CODE_LANGUAGE", "coffee")
        with pytest.raises(ValueError, match="Invalid code language"):
            load_config()


@pytest.mark.parametrize(
    "raw, expected",
    [("true", True), ("1", True), ("YES", True), ("off", False), ("0", False)],
)
def test_get_bool_env(monkeypatch, raw, expected):
    monkeypatch.setenv("PLAYGROUND_DEBUG", raw)
    assert get_bool_env("PLAYGROUND_DEBUG") is expected


def test_get_bool_env_unset():
    assert get_bool_env("PLAYGROUND_DEBUG") is None
