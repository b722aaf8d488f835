import logging
import threading
from typing import Any
from urllib.parse import quote

import requests

from ..config import Config
from ..errors import NotFoundError, TransportError

logger = logging.getLogger(__name__)

GITHUB_ACCEPT = "application/vnd.github+json"
GITHUB_API_VERSION = "2022-11-28"


class GistClient:
    """Read-only client for the GitHub gists REST API.

    One ``requests.Session`` per thread, since calls run through
    ``asyncio.to_thread``.
    """

    def __init__(self, config: Config):
        self.config = config
        self._thread_local = threading.local()
        self._sessions: list[requests.Session] = []
        self._lock = threading.Lock()

    @property
    def session(self) -> requests.Session:
        return self._get_session()

    @property
    def api_base_url(self) -> str:
        return self.config.github_api_url.rstrip("/")

    def _get_session(self) -> requests.Session:
        if not hasattr(self._thread_local, "session"):
            self._thread_local.session = self._create_session()
        return self._thread_local.session

    def _create_session(self) -> requests.Session:
        session = requests.Session()
        session.headers.update(
            {
                "Accept": GITHUB_ACCEPT,
                "X-GitHub-Api-Version": GITHUB_API_VERSION,
            }
        )
        with self._lock:
            self._sessions.append(session)
        return session

    def close(self) -> None:
        """Close the sessions of every thread that used this client."""
        with self._lock:
            sessions, self._sessions = self._sessions, []
        for session in sessions:
            session.close()

    def _get(self, url: str, what: str) -> requests.Response:
        """GET *url*, mapping failures onto the remote error taxonomy.

        Raises:
            NotFoundError: On HTTP 404.
            TransportError: On any other HTTP error or network failure.
        """
        try:
            response = self._get_session().get(
                url, timeout=self.config.request_timeout
            )
        except requests.RequestException as e:
            raise TransportError(f"Failed to fetch {what}: {e}") from e

        if response.status_code == 404:
            raise NotFoundError(f"{what} not found", status=404)
        if not response.ok:
            raise TransportError(
                f"Failed to fetch {what}: HTTP {response.status_code}",
                status=response.status_code,
            )
        return response

    def get_gist(self, gist_id: str) -> dict[str, Any]:
        """
        Fetch a gist by id.

        Returns:
            The gist JSON object (``id``, ``files``, ...).

        Raises:
            NotFoundError: If the gist does not exist.
            TransportError: On any other failure, including a non-JSON body.
        """
        url = f"{self.api_base_url}/gists/{quote(gist_id, safe='')}"
        logger.debug("Fetching gist %s", gist_id)
        response = self._get(url, f"Gist {gist_id}")
        try:
            gist = response.json()
        except ValueError as e:
            raise TransportError(
                f"Gist {gist_id} response is not JSON",
                status=response.status_code,
            ) from e
        if not isinstance(gist, dict) or not isinstance(gist.get("files"), dict):
            raise TransportError(
                f"Gist {gist_id} response has no files mapping",
                status=response.status_code,
            )
        return gist

    def get_raw_content(self, raw_url: str) -> str:
        """
        Fetch the full content of a gist file the API returned truncated.
        """
        response = self._get(raw_url, "Gist file content")
        response.encoding = response.encoding or "utf-8"
        return response.text
