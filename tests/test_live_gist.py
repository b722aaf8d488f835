"""Live tests against the public GitHub API. Run with --run-live."""

import pytest

from playground_share.core.client import GistClient
from playground_share.errors import NotFoundError
from playground_share.share.resolver import RemoteReferenceResolver

pytestmark = pytest.mark.live


async def test_unknown_gist_is_not_found(config):
    client = GistClient(config)
    try:
        with pytest.raises(NotFoundError):
            await RemoteReferenceResolver(client).resolve("0" * 32)
    finally:
        client.close()
