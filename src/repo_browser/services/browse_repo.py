"""Browse-repository use case — the session that drives the state machine.

The session owns the only :class:`BrowserState` and mutates it exclusively
through :meth:`RepositorySession.dispatch`.  Every operation tags its remote
request with a fresh token and reports the outcome as an event; the reducer
decides whether that outcome is still wanted.
"""

from __future__ import annotations

import asyncio
import itertools
import logging
from typing import NoReturn

from repo_browser.domain.entities import DirectoryEntry, FileContent, FileEntry
from repo_browser.domain.exceptions import (
    EmptyInputError,
    FetchError,
    InvalidFormatError,
    NoRepositoryLoadedError,
    RepoBrowserError,
)
from repo_browser.domain.navigation import normalize_path, parent_path
from repo_browser.domain.ports.repo_provider import RepositoryProvider
from repo_browser.domain.state import (
    BrowserState,
    ContentFailed,
    ContentLoaded,
    ErrorRaised,
    Event,
    FileSelected,
    LoadFailed,
    LoadRejected,
    LoadStarted,
    LoadSucceeded,
    NavigationFailed,
    NavigationStarted,
    NavigationSucceeded,
    reduce,
)
from repo_browser.domain.value_objects import RepositoryRef
from repo_browser.services.listing_cache import ListingCache

logger = logging.getLogger(__name__)


class RepositorySession:
    """Orchestrates repository loading, folder navigation and file viewing.

    Parameters
    ----------
    provider:
        Adapter for the metadata, listing and raw-content lookups.
    listing_cache:
        Optional per-path listing cache.  When omitted every navigation
        re-fetches the listing.

    Operations return the state snapshot they leave behind.  A failure that
    is applied to the state is also raised; a failure belonging to a request
    the user has already moved away from is dropped.
    """

    def __init__(
        self,
        provider: RepositoryProvider,
        listing_cache: ListingCache | None = None,
    ) -> None:
        self._provider = provider
        self._listing_cache = listing_cache if listing_cache is not None else ListingCache()
        self._state = BrowserState()
        self._tokens = itertools.count(1)

    @property
    def state(self) -> BrowserState:
        return self._state

    def dispatch(self, event: Event) -> BrowserState:
        """Apply *event* and return the new state."""
        self._state = reduce(self._state, event)
        return self._state

    # ── Repository ──────────────────────────────────────────────────────

    async def load_repository(self, url_text: str) -> BrowserState:
        """Parse *url_text*, then fetch metadata and the root listing."""
        if not url_text or not url_text.strip():
            self._fail(EmptyInputError("Please enter a GitHub repository URL."))

        try:
            ref = RepositoryRef.parse(url_text)
        except InvalidFormatError as exc:
            self.dispatch(LoadRejected(exc))
            raise

        token = next(self._tokens)
        self._listing_cache.clear()
        self.dispatch(LoadStarted(token, ref))
        logger.info("Loading repository %s", ref.full_name)

        metadata, listing = await asyncio.gather(
            self._provider.fetch_metadata(ref),
            self._provider.fetch_listing(ref, ""),
            return_exceptions=True,
        )

        # Metadata first: its error is the more meaningful one to surface.
        for outcome in (metadata, listing):
            if isinstance(outcome, Exception):
                return self._settle(LoadFailed(token, _as_browser_error(outcome)))
            if isinstance(outcome, BaseException):
                raise outcome

        entries = tuple(listing)  # type: ignore[arg-type]
        state = self.dispatch(LoadSucceeded(token, metadata, entries))  # type: ignore[arg-type]
        if state.listing_token == token:
            self._listing_cache.put("", entries)
            logger.info("Loaded %s (%d root entries)", ref.full_name, len(entries))
        return state

    # ── Navigation ──────────────────────────────────────────────────────

    async def navigate_to(self, path: str) -> BrowserState:
        """Show the listing of the directory at *path*."""
        ref = self._state.repository
        if ref is None or not self._state.is_loaded:
            self._fail(NoRepositoryLoadedError("Load a repository first."))

        target = normalize_path(path)
        token = next(self._tokens)
        self.dispatch(NavigationStarted(token, target))

        cached = self._listing_cache.get(target)
        if cached is not None:
            return self.dispatch(NavigationSucceeded(token, target, cached))

        logger.info("Listing %s:/%s", ref.full_name, target)
        try:
            listing = await self._provider.fetch_listing(ref, target)
        except Exception as exc:
            return self._settle(NavigationFailed(token, _as_browser_error(exc)))

        entries = tuple(listing)
        state = self.dispatch(NavigationSucceeded(token, target, entries))
        if state.listing_token == token:
            self._listing_cache.put(target, entries)
        return state

    async def navigate_up(self) -> BrowserState:
        """Move to the parent directory; a no-op at the root."""
        if not self._state.current_path:
            return self._state
        return await self.navigate_to(parent_path(self._state.current_path))

    async def navigate_to_root(self) -> BrowserState:
        return await self.navigate_to("")

    # ── Files ───────────────────────────────────────────────────────────

    async def select_file(self, entry: DirectoryEntry) -> BrowserState:
        """Select *entry* and fetch its text.

        Directories and files without a content locator are ignored.
        """
        if not isinstance(entry, FileEntry) or not entry.content_locator:
            return self._state

        token = next(self._tokens)
        self.dispatch(FileSelected(token, entry))
        logger.info("Fetching content of %s", entry.path)

        try:
            text = await self._provider.fetch_raw(entry.content_locator)
        except Exception as exc:
            return self._settle(ContentFailed(token, _as_browser_error(exc)))

        return self.dispatch(ContentLoaded(token, FileContent(file=entry, content=text)))

    def find_entry(self, path: str) -> DirectoryEntry | None:
        """Return the entry of the current listing located at *path*."""
        target = normalize_path(path)
        return next((e for e in self._state.listing if e.path == target), None)

    # ── Helpers ─────────────────────────────────────────────────────────

    def _settle(
        self, event: LoadFailed | NavigationFailed | ContentFailed
    ) -> BrowserState:
        """Apply a failure event and raise it unless it turned out to be stale."""
        state = self.dispatch(event)
        if state.error is event.error:
            logger.warning("%s: %s", type(event.error).__name__, event.error)
            raise event.error
        return state

    def _fail(self, error: RepoBrowserError) -> NoReturn:
        """Record an error raised before any request was issued, then raise it."""
        self.dispatch(ErrorRaised(error))
        raise error


def _as_browser_error(exc: Exception) -> RepoBrowserError:
    """Wrap an unexpected provider failure so it can be recorded in the state."""
    if isinstance(exc, RepoBrowserError):
        return exc
    logger.error("Unexpected provider failure", exc_info=exc)
    error = FetchError(f"Unexpected error: {exc}")
    error.__cause__ = exc
    return error
