"""Wire a reconciler and share action to in-memory collaborators."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from ..config import Config
from .collaborators import (
    CodeLanguagePreference,
    InMemoryEditor,
    Location,
    MemoryClipboard,
    RecordingNotifier,
    SampleNavigation,
    ToggleState,
)
from .reconciler import StateReconciler
from .resolver import Resolver
from .sharing import ShareAction


@dataclass
class PlaygroundSession:
    """A headless playground page."""

    location: Location
    preference: CodeLanguagePreference
    editor: InMemoryEditor
    navigation: SampleNavigation
    language_switch: ToggleState
    notifier: RecordingNotifier
    clipboard: MemoryClipboard
    reconciler: StateReconciler
    share_action: ShareAction

    @classmethod
    def headless(
        cls,
        config: Config,
        resolver: Resolver,
        url: str | None = None,
        samples: Sequence[str] = (),
        code_language: str | None = None,
    ) -> PlaygroundSession:
        location = Location(url or config.playground_url)
        preference = CodeLanguagePreference(code_language or config.code_language)
        editor = InMemoryEditor()
        navigation = SampleNavigation(samples)
        language_switch = ToggleState()
        notifier = RecordingNotifier()
        clipboard = MemoryClipboard()

        reconciler = StateReconciler(
            config=config,
            location=location,
            preference=preference,
            editor=editor,
            resolver=resolver,
            notifier=notifier,
            navigation=navigation,
            language_switch=language_switch,
        )
        share_action = ShareAction(
            editor=editor,
            location=location,
            clipboard=clipboard,
            notifier=notifier,
        )
        return cls(
            location=location,
            preference=preference,
            editor=editor,
            navigation=navigation,
            language_switch=language_switch,
            notifier=notifier,
            clipboard=clipboard,
            reconciler=reconciler,
            share_action=share_action,
        )
