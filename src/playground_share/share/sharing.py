"""Encode the editor's project into a ``#project=`` share link."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from ..codec.project import serialize_project
from ..models import ProjectFile
from .collaborators import Clipboard, EditorModel, Location, Notifier
from .url_state import PROJECT_PARAM, with_fragment

logger = logging.getLogger(__name__)


def build_share_link(files: Iterable[ProjectFile], current_url: str) -> str:
    """Return *current_url* with its fragment replaced by ``project=<token>``.

    Any ``gist``, ``sample`` or other fragment parameter is dropped.
    """
    token = serialize_project(files)
    return with_fragment(current_url, f"{PROJECT_PARAM}={token}")


class ShareAction:
    """The "Share" button: update the URL, copy it, confirm."""

    def __init__(
        self,
        *,
        editor: EditorModel,
        location: Location,
        clipboard: Clipboard,
        notifier: Notifier,
    ) -> None:
        self._editor = editor
        self._location = location
        self._clipboard = clipboard
        self._notifier = notifier

    def share(self) -> str:
        """Returns the share link that was placed on the clipboard.

        Navigation comes last since it runs the location's listeners; the
        link is already copied and confirmed if one of them raises.
        """
        files = self._editor.files or []
        link = build_share_link(files, self._location.href)
        self._clipboard.write_text(link)
        self._notifier.show_share_confirmation()
        logger.info("Shared project with %d file(s)", len(files))
        self._location.navigate(link)
        return link
