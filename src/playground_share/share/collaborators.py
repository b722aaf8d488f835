"""Interfaces to the page around the playground, plus in-memory versions.

The reconciler and share action receive these at construction time. The
in-memory implementations back headless sessions (the MCP tools, tests).

Trigger sources (``Location``, ``CodeLanguagePreference``) are concrete
classes with an explicit ``subscribe()``; listeners run synchronously on
every change.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from typing import Protocol

from ..errors import UserFacingError
from ..models import ExtendsProjectConfig, ProjectConfig, ProjectFile
from .url_state import with_fragment

logger = logging.getLogger(__name__)

Listener = Callable[[], None]


# ---------------------------------------------------------------------------
# Protocols
# ---------------------------------------------------------------------------


class EditorModel(Protocol):
    """The code editor's project."""

    @property
    def files(self) -> list[ProjectFile]: ...  # pragma: no cover

    def set_config(self, config: ProjectConfig) -> None:
        """Replace the whole project configuration."""
        ...  # pragma: no cover


class Notifier(Protocol):
    def show_error(self, error: UserFacingError) -> None: ...  # pragma: no cover

    def show_share_confirmation(self) -> None: ...  # pragma: no cover


class Clipboard(Protocol):
    def write_text(self, text: str) -> None: ...  # pragma: no cover


class Navigation(Protocol):
    """The sample list next to the editor."""

    def clear_highlight(self) -> None: ...  # pragma: no cover

    def highlight(self, sample: str) -> bool:
        """Mark *sample* active; False if there is no such entry."""
        ...  # pragma: no cover

    def scroll_to_center(self, sample: str) -> None:
        """Bring *sample* to the middle of the list without moving focus."""
        ...  # pragma: no cover


class LanguageSwitch(Protocol):
    """The TypeScript/JavaScript toggle."""

    def set_hidden(self, hidden: bool) -> None: ...  # pragma: no cover


# ---------------------------------------------------------------------------
# Trigger sources
# ---------------------------------------------------------------------------


class _Subscribable:
    def __init__(self) -> None:
        self._listeners: list[Listener] = []

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register *listener*; returns a function that unregisters it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener()


class Location(_Subscribable):
    """Current page URL. Listeners fire when the fragment changes."""

    def __init__(self, href: str = "https://localhost/playground/") -> None:
        super().__init__()
        self._href = href

    @property
    def href(self) -> str:
        return self._href

    @property
    def hash(self) -> str:
        """Fragment including the leading ``#``, or ``""``."""
        _, sep, fragment = self._href.partition("#")
        return f"#{fragment}" if sep and fragment else ""

    def navigate(self, url: str) -> None:
        old_hash = self.hash
        self._href = url
        if self.hash != old_hash:
            logger.debug("Location fragment changed to %s", self.hash[:80])
            self._notify()

    def set_hash(self, fragment: str) -> None:
        self.navigate(with_fragment(self._href, fragment.removeprefix("#")))


class CodeLanguagePreference(_Subscribable):
    """``"ts"`` or ``"js"``; listeners fire when the value changes."""

    def __init__(self, value: str = "ts") -> None:
        super().__init__()
        self._value = value

    @property
    def value(self) -> str:
        return self._value

    def set(self, value: str) -> None:
        if value != self._value:
            self._value = value
            self._notify()


# ---------------------------------------------------------------------------
# In-memory implementations
# ---------------------------------------------------------------------------


class InMemoryEditor:
    """Editor stand-in that records every configuration it is given."""

    def __init__(self, files: Sequence[ProjectFile] = ()) -> None:
        self._files = list(files)
        self.configs: list[ProjectConfig] = []

    @property
    def config(self) -> ProjectConfig | None:
        return self.configs[-1] if self.configs else None

    @property
    def files(self) -> list[ProjectFile]:
        return list(self._files)

    def set_files(self, files: Sequence[ProjectFile]) -> None:
        self._files = list(files)

    def set_config(self, config: ProjectConfig) -> None:
        self.configs.append(config)
        if isinstance(config, ExtendsProjectConfig):
            self._files = [
                ProjectFile(name=name, content=f.content, hidden=f.hidden)
                for name, f in config.files.items()
            ]
        else:
            # Sample files are loaded by the editor from project_src
            self._files = []


class RecordingNotifier:
    def __init__(self) -> None:
        self.errors: list[UserFacingError] = []
        self.share_confirmations = 0

    def show_error(self, error: UserFacingError) -> None:
        self.errors.append(error)

    def show_share_confirmation(self) -> None:
        self.share_confirmations += 1


class MemoryClipboard:
    def __init__(self) -> None:
        self.text: str | None = None

    def write_text(self, text: str) -> None:
        self.text = text


class ToggleState:
    """Language switch visibility."""

    def __init__(self, hidden: bool = False) -> None:
        self.hidden = hidden

    def set_hidden(self, hidden: bool) -> None:
        self.hidden = hidden


class SampleNavigation:
    """Fixed-height sample list inside a scrollable viewport.

    Args:
        samples: Sample ids in display order.
        item_height: Height of one entry.
        viewport_height: Visible height of the list container.
    """

    def __init__(
        self,
        samples: Sequence[str] = (),
        item_height: float = 32.0,
        viewport_height: float = 480.0,
    ) -> None:
        self.samples = list(samples)
        self.item_height = item_height
        self.viewport_height = viewport_height
        self.active: str | None = None
        self.scroll_top = 0.0

    def clear_highlight(self) -> None:
        self.active = None

    def highlight(self, sample: str) -> bool:
        if sample not in self.samples:
            return False
        self.active = sample
        return True

    def scroll_to_center(self, sample: str) -> None:
        """Scroll only when the entry is not fully visible."""
        if sample not in self.samples:
            return
        top = self.samples.index(sample) * self.item_height
        bottom = top + self.item_height
        if top >= self.scroll_top and bottom <= self.scroll_top + self.viewport_height:
            return
        max_scroll = max(
            0.0, len(self.samples) * self.item_height - self.viewport_height
        )
        centered = top + self.item_height / 2 - self.viewport_height / 2
        self.scroll_top = min(max(0.0, centered), max_scroll)


class NullNavigation:
    """Used when the page has no sample list."""

    def clear_highlight(self) -> None:
        pass

    def highlight(self, sample: str) -> bool:
        return False

    def scroll_to_center(self, sample: str) -> None:
        pass
