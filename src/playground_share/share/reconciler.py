"""Keep the editor in sync with the share state in the URL fragment.

On every trigger (start, fragment change, code-language change) the
``StateReconciler`` picks exactly one source for the editor's project:

1. ``#gist=<id>``       -- resolve the gist (the only await).
2. ``#project=<token>`` -- decode the inline token.
3. otherwise            -- load a built-in sample manifest.

Any failure in 1 or 2 is reported through the notifier and ends in 3, so
the editor always ends up with a valid configuration.

Triggers may overlap while a gist is being fetched. When the fetch
returns, the reconciler re-reads the URL; if the gist id there is no
longer the one it fetched, the outcome is dropped.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable

from ..codec.compact import expand_file
from ..codec.project import deserialize_project
from ..config import Config
from ..errors import DecodeError, MalformedProjectError, to_user_facing
from ..models import (
    ActiveRemoteRef,
    ExtendsProjectConfig,
    InlineToken,
    ProjectFile,
    ReconcilerPhase,
    ReconcileSource,
    RemoteRef,
    SourceProjectConfig,
)
from .collaborators import (
    CodeLanguagePreference,
    EditorModel,
    LanguageSwitch,
    Location,
    Navigation,
    Notifier,
    NullNavigation,
    ToggleState,
)
from .resolver import Resolver
from .url_state import parse_share_state, remote_ref_id, sample_from_fragment

logger = logging.getLogger(__name__)


class StateReconciler:
    """Drive the editor from the URL fragment.

    Args:
        config: Sample layout and base config paths.
        location: Page URL; its changes are triggers.
        preference: Code-language preference; its changes are triggers.
        editor: Receives the chosen ``ProjectConfig``.
        resolver: Resolves gist ids.
        notifier: Shows error notifications.
        navigation: Sample list, if the page has one.
        language_switch: TS/JS toggle, if the page has one.

    Attributes:
        active_remote_ref: Most recently resolved gist still named by the
            URL, or ``None``.
        phase: ``resolving`` while any gist fetch is outstanding, otherwise
            ``idle`` before the first project is applied and ``applied``
            afterwards.
        resolving_id: Gist id of the most recently started fetch that is
            still outstanding, if any.
        source: Source of the last applied project.
    """

    def __init__(
        self,
        *,
        config: Config,
        location: Location,
        preference: CodeLanguagePreference,
        editor: EditorModel,
        resolver: Resolver,
        notifier: Notifier,
        navigation: Navigation | None = None,
        language_switch: LanguageSwitch | None = None,
    ) -> None:
        self.config = config
        self._location = location
        self._preference = preference
        self._editor = editor
        self._resolver = resolver
        self._notifier = notifier
        self._navigation = navigation or NullNavigation()
        self._language_switch = language_switch or ToggleState()

        self.active_remote_ref: ActiveRemoteRef | None = None
        self.source: ReconcileSource | None = None
        self._applied = False
        # One entry per outstanding fetch; the same id may appear twice
        self._resolving: list[str] = []

        self._tasks: set[asyncio.Task] = set()
        self._unsubscribers: list[Callable[[], None]] = []

    @property
    def phase(self) -> ReconcilerPhase:
        if self._resolving:
            return ReconcilerPhase.RESOLVING
        return ReconcilerPhase.APPLIED if self._applied else ReconcilerPhase.IDLE

    @property
    def resolving_id(self) -> str | None:
        return self._resolving[-1] if self._resolving else None

    # ------------------------------------------------------------------
    # Trigger wiring
    # ------------------------------------------------------------------

    def start(self) -> asyncio.Task:
        """Subscribe to URL and preference changes and run the initial sync.

        Must be called from a running event loop.
        """
        if not self._unsubscribers:
            self._unsubscribers = [
                self._location.subscribe(lambda: self.trigger("fragment change")),
                self._preference.subscribe(
                    lambda: self.trigger("code language change")
                ),
            ]
        return self.trigger("initial load")

    def stop(self) -> None:
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers = []

    def trigger(self, reason: str = "manual") -> asyncio.Task:
        """Schedule one ``sync_from_url()`` run."""
        logger.debug("Sync triggered by %s", reason)
        task = asyncio.get_running_loop().create_task(self.sync_from_url())
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def drain(self) -> None:
        """Wait until every scheduled sync (including ones they trigger)
        has finished."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks))

    # ------------------------------------------------------------------
    # Reconciliation
    # ------------------------------------------------------------------

    async def sync_from_url(self) -> ReconcileSource | None:
        """Apply the project named by the current URL.

        Returns:
            The source that was applied, or ``None`` when a gist resolution
            finished after the URL had moved on and was discarded.
        """
        fragment = self._location.hash
        state = parse_share_state(fragment)

        gist_id = state.id if isinstance(state, RemoteRef) else None
        if self.active_remote_ref is not None and self.active_remote_ref.id != gist_id:
            # Switching to another gist, a token, or a sample
            logger.debug("Active gist %s is outdated", self.active_remote_ref.id)
            self.active_remote_ref = None

        match state:
            case RemoteRef(id=gist_id):
                return await self._load_gist(gist_id)
            case InlineToken(token=token):
                return self._load_token(token)
            case _:
                return self._apply_fallback()

    async def _load_gist(self, gist_id: str) -> ReconcileSource | None:
        try:
            files = await self._resolve(gist_id)
        except Exception as e:
            if self._is_stale(gist_id):
                logger.info("Dropping failed load of outdated gist %s", gist_id)
                return None
            logger.warning("Failed to load gist %s: %s", gist_id, e, exc_info=True)
            self._report(e)
            return self._apply_fallback()

        if self._is_stale(gist_id):
            logger.info("Dropping outdated gist %s", gist_id)
            return None

        self.active_remote_ref = ActiveRemoteRef(id=gist_id, files=files)
        return self._apply_files(files, ReconcileSource.REMOTE_REF)

    async def _resolve(self, gist_id: str) -> list[ProjectFile]:
        self._resolving.append(gist_id)
        try:
            return await self._resolver.resolve(gist_id)
        finally:
            self._resolving.remove(gist_id)

    def _load_token(self, token: str) -> ReconcileSource:
        try:
            compact_files = deserialize_project(token)
        except DecodeError as e:
            logger.error("Invalid project base64 in URL: %s", e)
            self._report(e)
            return self._apply_fallback()
        except MalformedProjectError as e:
            logger.error("Invalid project JSON in URL: %s", e)
            self._report(e)
            return self._apply_fallback()

        files = [expand_file(c) for c in compact_files]
        return self._apply_files(files, ReconcileSource.INLINE_TOKEN)

    def _is_stale(self, gist_id: str) -> bool:
        return remote_ref_id(self._location.hash) != gist_id

    def _report(self, error: Exception) -> None:
        self._notifier.show_error(to_user_facing(error))

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def _apply_files(
        self, files: list[ProjectFile], source: ReconcileSource
    ) -> ReconcileSource:
        """Show shared files. The TS/JS toggle is hidden: only built-in
        samples have a precompiled JavaScript variant."""
        self._navigation.clear_highlight()
        self._language_switch.set_hidden(True)
        self._editor.set_config(
            ExtendsProjectConfig.from_files(self.config.base_config, files)
        )
        logger.info("Applied %d shared file(s) from %s", len(files), source.value)
        return self._finish(source)

    def _apply_fallback(self) -> ReconcileSource:
        """Load a built-in sample chosen by ``#sample=`` and the language."""
        self._navigation.clear_highlight()
        self._language_switch.set_hidden(False)

        sample = sample_from_fragment(
            self._location.hash, self.config.default_sample
        )
        root = (
            self.config.samples_root
            if self._preference.value == "ts"
            else self.config.js_samples_root
        )
        project_src = f"{root}/{sample}/{self.config.manifest_file}"
        self._editor.set_config(SourceProjectConfig(project_src=project_src))
        logger.info("Applied sample %s", project_src)

        if self._navigation.highlight(sample):
            self._navigation.scroll_to_center(sample)
        return self._finish(ReconcileSource.FALLBACK)

    def _finish(self, source: ReconcileSource) -> ReconcileSource:
        self._applied = True
        self.source = source
        return source
