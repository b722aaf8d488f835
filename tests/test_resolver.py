"""Tests for RemoteReferenceResolver (gist -> project files)."""

import pytest

from playground_share.errors import NotFoundError, TransportError
from playground_share.models import ProjectFile
from playground_share.share.resolver import RemoteReferenceResolver


def _gist(files: dict) -> dict:
    return {"id": "abc123", "files": files}


class TestRemoteReferenceResolver:
    async def test_resolves_files(self, mock_gist_client):
        mock_gist_client.get_gist.return_value = _gist(
            {
                "index.html": {
                    "filename": "index.html",
                    "content": "<p>hi</p>",
                    "truncated": False,
                }
            }
        )
        resolver = RemoteReferenceResolver(mock_gist_client)

        files = await resolver.resolve("abc123")

        assert files == [ProjectFile(name="index.html", content="<p>hi</p>")]
        mock_gist_client.get_gist.assert_called_once_with("abc123")
        mock_gist_client.get_raw_content.assert_not_called()

    async def test_fetches_truncated_content(self, mock_gist_client):
        mock_gist_client.get_gist.return_value = _gist(
            {
                "big.ts": {
                    "filename": "big.ts",
                    "content": "partial",
                    "truncated": True,
                    "raw_url": "https://gist.githubusercontent.com/raw/big.ts",
                },
                "small.ts": {"filename": "small.ts", "content": "x"},
            }
        )
        mock_gist_client.get_raw_content.return_value = "full content"
        resolver = RemoteReferenceResolver(mock_gist_client)

        files = await resolver.resolve("abc123")

        assert files == [
            ProjectFile(name="big.ts", content="full content"),
            ProjectFile(name="small.ts", content="x"),
        ]
        mock_gist_client.get_raw_content.assert_called_once_with(
            "https://gist.githubusercontent.com/raw/big.ts"
        )

    async def test_not_found_propagates(self, mock_gist_client):
        mock_gist_client.get_gist.side_effect = NotFoundError(
            "Gist missing not found"
        )
        resolver = RemoteReferenceResolver(mock_gist_client)

        with pytest.raises(NotFoundError) as exc_info:
            await resolver.resolve("missing")
        assert exc_info.value.status == 404

    async def test_truncated_fetch_failure_propagates(self, mock_gist_client):
        mock_gist_client.get_gist.return_value = _gist(
            {
                "big.ts": {
                    "filename": "big.ts",
                    "truncated": True,
                    "raw_url": "https://gist.githubusercontent.com/raw/big.ts",
                }
            }
        )
        mock_gist_client.get_raw_content.side_effect = TransportError(
            "Failed to fetch Gist file content: HTTP 500", status=500
        )
        resolver = RemoteReferenceResolver(mock_gist_client)

        with pytest.raises(TransportError):
            await resolver.resolve("abc123")
