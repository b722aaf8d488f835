"""Read share state out of a URL fragment.

The fragment is query-string style: ``#gist=<id>``, ``#project=<token>``,
``#sample=<path>``. Unknown parameters are ignored and only the first
occurrence of a repeated parameter counts.
"""

from __future__ import annotations

import logging
from urllib.parse import parse_qsl, urlsplit, urlunsplit

from ..models import InlineToken, NoShareState, RemoteRef, UrlShareState
from ..validators import validate_sample_id

logger = logging.getLogger(__name__)

GIST_PARAM = "gist"
PROJECT_PARAM = "project"
SAMPLE_PARAM = "sample"


def fragment_params(fragment: str) -> dict[str, str]:
    """Parse ``#a=1&b=2`` (leading ``#`` optional) into a dict."""
    params: dict[str, str] = {}
    for key, value in parse_qsl(fragment.removeprefix("#"), keep_blank_values=True):
        params.setdefault(key, value)
    return params


def parse_share_state(fragment: str) -> UrlShareState:
    """A gist reference wins over an inline project token. Empty values
    count as absent."""
    params = fragment_params(fragment)
    if gist_id := params.get(GIST_PARAM):
        return RemoteRef(id=gist_id)
    if token := params.get(PROJECT_PARAM):
        return InlineToken(token=token)
    return NoShareState()


def remote_ref_id(fragment: str) -> str | None:
    state = parse_share_state(fragment)
    return state.id if isinstance(state, RemoteRef) else None


def sample_from_fragment(fragment: str, default: str) -> str:
    """Return the ``sample`` parameter if it is a valid sample id, else
    *default*."""
    sample = fragment_params(fragment).get(SAMPLE_PARAM)
    if validate_sample_id(sample):
        return sample
    if sample is not None:
        logger.debug("Ignoring invalid sample id %r", sample)
    return default


def with_fragment(url: str, fragment: str) -> str:
    """Return *url* with its fragment replaced by *fragment*."""
    return urlunsplit(urlsplit(url)._replace(fragment=fragment))
