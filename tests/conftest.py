"""Shared pytest fixtures for playground-share tests."""

from unittest.mock import MagicMock

import pytest
from dotenv import load_dotenv

from playground_share.config import Config
from playground_share.models import ProjectFile

load_dotenv()


def pytest_addoption(parser):
    parser.addoption(
        "--run-live",
        action="store_true",
        default=False,
        help="Run tests that call the real GitHub API",
    )


def pytest_collection_modifyitems(config, items):
    """Skip live tests unless --run-live is passed."""
    if config.getoption("--run-live"):
        return
    skip_live = pytest.mark.skip(reason="need --run-live option to run")
    for item in items:
        if "live" in item.keywords:
            item.add_marker(skip_live)


@pytest.fixture
def config():
    """Default Config, as load_config() would produce with no overrides."""
    return Config()


@pytest.fixture
def mock_gist_client(config):
    """MagicMock standing in for GistClient."""
    from playground_share.core.client import GistClient

    client = MagicMock(spec=GistClient)
    client.config = config
    return client


@pytest.fixture
def two_files():
    return [
        ProjectFile(name="index.html", content="<my-element></my-element>"),
        ProjectFile(
            name="package.json",
            content='{"dependencies": {"lit": "^3.0.0"}}',
            hidden=True,
        ),
    ]
