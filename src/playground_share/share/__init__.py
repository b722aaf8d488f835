"""URL share-state engine.

Modules:

- ``url_state``     -- parse ``#gist=``/``#project=``/``#sample=`` fragments.
- ``conversion``    -- gist file mapping -> ``ProjectFile`` list.
- ``resolver``      -- ``RemoteReferenceResolver``: gist id -> files.
- ``reconciler``    -- ``StateReconciler``: URL -> editor project config.
- ``sharing``       -- ``build_share_link`` and ``ShareAction``.
- ``collaborators`` -- interfaces to the surrounding page and in-memory
  implementations.
- ``session``       -- ``PlaygroundSession``: everything wired headless.

Usage example
-------------
::

    from playground_share.config import Config
    from playground_share.core.client import GistClient
    from playground_share.share import PlaygroundSession, RemoteReferenceResolver

    config = Config()
    resolver = RemoteReferenceResolver(GistClient(config))
    session = PlaygroundSession.headless(
        config, resolver, url="https://lit.dev/playground/#gist=abc123"
    )
    session.reconciler.start()
    await session.reconciler.drain()
    print(session.editor.config)
"""

from .reconciler import StateReconciler
from .resolver import RemoteReferenceResolver
from .session import PlaygroundSession
from .sharing import ShareAction, build_share_link
from .url_state import parse_share_state

__all__ = [
    "PlaygroundSession",
    "RemoteReferenceResolver",
    "ShareAction",
    "StateReconciler",
    "build_share_link",
    "parse_share_state",
]
