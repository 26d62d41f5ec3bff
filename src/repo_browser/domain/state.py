"""Browsing state container and its transition function.

All state changes go through :func:`reduce`, which takes the current
:class:`BrowserState` and an event and returns the next state.  Every remote
request is tagged with a token; a completion event is only applied while its
token is still the one the state expects, so responses that arrive after the
user moved on are dropped.
"""

from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass

from repo_browser.domain.entities import (
    Breadcrumb,
    DirectoryEntry,
    FileContent,
    FileEntry,
    RepositoryMetadata,
)
from repo_browser.domain.exceptions import RepoBrowserError
from repo_browser.domain.navigation import breadcrumbs, sort_entries
from repo_browser.domain.value_objects import RepositoryRef

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class BrowserState:
    """Snapshot of everything the presentation layer renders."""

    repository: RepositoryRef | None = None
    metadata: RepositoryMetadata | None = None
    current_path: str = ""
    listing: tuple[DirectoryEntry, ...] = ()
    selected_file: FileEntry | None = None
    content: FileContent | None = None
    error: RepoBrowserError | None = None
    is_loading: bool = False
    is_file_loading: bool = False
    pending_path: str | None = None
    listing_token: int = 0
    content_token: int = 0

    @property
    def is_loaded(self) -> bool:
        return self.metadata is not None

    @property
    def breadcrumbs(self) -> list[Breadcrumb]:
        return breadcrumbs(self.current_path)

    @property
    def sorted_listing(self) -> list[DirectoryEntry]:
        return sort_entries(self.listing)


# ── Events ──────────────────────────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class ErrorRaised:
    """An operation failed before contacting any provider."""

    error: RepoBrowserError


@dataclass(frozen=True, slots=True)
class LoadRejected:
    """A load was attempted with text that does not name a repository."""

    error: RepoBrowserError


@dataclass(frozen=True, slots=True)
class LoadStarted:
    token: int
    repository: RepositoryRef


@dataclass(frozen=True, slots=True)
class LoadSucceeded:
    token: int
    metadata: RepositoryMetadata
    listing: tuple[DirectoryEntry, ...]


@dataclass(frozen=True, slots=True)
class LoadFailed:
    token: int
    error: RepoBrowserError


@dataclass(frozen=True, slots=True)
class NavigationStarted:
    token: int
    path: str


@dataclass(frozen=True, slots=True)
class NavigationSucceeded:
    token: int
    path: str
    listing: tuple[DirectoryEntry, ...]


@dataclass(frozen=True, slots=True)
class NavigationFailed:
    token: int
    error: RepoBrowserError


@dataclass(frozen=True, slots=True)
class FileSelected:
    token: int
    file: FileEntry


@dataclass(frozen=True, slots=True)
class ContentLoaded:
    token: int
    content: FileContent


@dataclass(frozen=True, slots=True)
class ContentFailed:
    token: int
    error: RepoBrowserError


Event = (
    ErrorRaised
    | LoadRejected
    | LoadStarted
    | LoadSucceeded
    | LoadFailed
    | NavigationStarted
    | NavigationSucceeded
    | NavigationFailed
    | FileSelected
    | ContentLoaded
    | ContentFailed
)


# ── Transition function ─────────────────────────────────────────────────────


def _replace(state: BrowserState, **changes: object) -> BrowserState:
    return dataclasses.replace(state, **changes)  # type: ignore[arg-type]


def _is_stale_listing(state: BrowserState, token: int) -> bool:
    if token != state.listing_token:
        logger.debug("Discarding stale listing response (token %d)", token)
        return True
    return False


def _is_stale_content(state: BrowserState, token: int) -> bool:
    if token != state.content_token:
        logger.debug("Discarding stale content response (token %d)", token)
        return True
    return False


def reduce(state: BrowserState, event: Event) -> BrowserState:
    """Return the state that results from applying *event* to *state*."""
    if isinstance(event, ErrorRaised):
        return _replace(state, error=event.error)

    if isinstance(event, LoadRejected):
        return BrowserState(error=event.error)

    # A load wipes everything and claims both request slots, so any
    # navigation or file fetch still in flight becomes stale.
    if isinstance(event, LoadStarted):
        return BrowserState(
            repository=event.repository,
            is_loading=True,
            listing_token=event.token,
            content_token=event.token,
        )

    if isinstance(event, LoadSucceeded):
        if _is_stale_listing(state, event.token):
            return state
        return _replace(
            state,
            metadata=event.metadata,
            error=None,
            current_path="",
            listing=event.listing,
            is_loading=False,
        )

    if isinstance(event, LoadFailed):
        if _is_stale_listing(state, event.token):
            return state
        return BrowserState(error=event.error)

    if isinstance(event, NavigationStarted):
        return _replace(
            state,
            error=None,
            is_loading=True,
            pending_path=event.path,
            listing_token=event.token,
        )

    if isinstance(event, NavigationSucceeded):
        if _is_stale_listing(state, event.token):
            return state
        return _replace(
            state,
            current_path=event.path,
            listing=event.listing,
            is_loading=False,
            pending_path=None,
        )

    if isinstance(event, NavigationFailed):
        if _is_stale_listing(state, event.token):
            return state
        return _replace(state, error=event.error, is_loading=False, pending_path=None)

    if isinstance(event, FileSelected):
        return _replace(
            state,
            error=None,
            selected_file=event.file,
            content=None,
            is_file_loading=True,
            content_token=event.token,
        )

    if isinstance(event, ContentLoaded):
        if _is_stale_content(state, event.token):
            return state
        if event.content.file != state.selected_file:
            return state
        return _replace(state, content=event.content, is_file_loading=False)

    if isinstance(event, ContentFailed):
        if _is_stale_content(state, event.token):
            return state
        return _replace(state, error=event.error, is_file_loading=False)

    raise TypeError(f"Unknown event: {event!r}")
