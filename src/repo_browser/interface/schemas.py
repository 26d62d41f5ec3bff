"""Pydantic request / response DTOs for the API boundary."""

from __future__ import annotations

from pydantic import BaseModel, field_validator

from repo_browser.domain.entities import DirectoryEntry, FileEntry, RepositoryMetadata
from repo_browser.domain.state import BrowserState
from repo_browser.services.formatting import format_size


class LoadRequest(BaseModel):
    """Request body for ``POST /repository``."""

    url: str


class NavigateRequest(BaseModel):
    """Request body for ``POST /navigate``."""

    path: str = ""

    @field_validator("path")
    @classmethod
    def _no_parent_segments(cls, v: str) -> str:
        if ".." in v.split("/"):
            msg = "path must not contain '..' segments."
            raise ValueError(msg)
        return v


class SelectRequest(BaseModel):
    """Request body for ``POST /select``."""

    path: str


class RepositoryView(BaseModel):
    full_name: str
    html_url: str
    description: str | None = None
    primary_language: str | None = None
    star_count: int
    fork_count: int
    default_branch: str
    owner_login: str | None = None
    owner_avatar_url: str | None = None

    @classmethod
    def from_metadata(cls, metadata: RepositoryMetadata) -> RepositoryView:
        return cls(
            full_name=metadata.full_name,
            html_url=metadata.html_url,
            description=metadata.description,
            primary_language=metadata.primary_language,
            star_count=metadata.star_count,
            fork_count=metadata.fork_count,
            default_branch=metadata.default_branch,
            owner_login=metadata.owner_login,
            owner_avatar_url=metadata.owner_avatar_url,
        )


class EntryView(BaseModel):
    name: str
    path: str
    kind: str
    size: int | None = None
    size_display: str | None = None
    download_url: str | None = None

    @classmethod
    def from_entry(cls, entry: DirectoryEntry) -> EntryView:
        if isinstance(entry, FileEntry):
            return cls(
                name=entry.name,
                path=entry.path,
                kind=entry.kind.value,
                size=entry.size,
                size_display=format_size(entry.size),
                download_url=entry.content_locator,
            )
        return cls(name=entry.name, path=entry.path, kind=entry.kind.value)


class BreadcrumbView(BaseModel):
    label: str
    path: str


class BrowserView(BaseModel):
    """Everything a client needs to render the browser."""

    repository: RepositoryView | None = None
    current_path: str = ""
    breadcrumbs: list[BreadcrumbView]
    entries: list[EntryView]
    selected_file: EntryView | None = None
    content: str | None = None
    is_loading: bool = False
    is_file_loading: bool = False
    error: str | None = None

    @classmethod
    def from_state(cls, state: BrowserState) -> BrowserView:
        return cls(
            repository=RepositoryView.from_metadata(state.metadata) if state.metadata else None,
            current_path=state.current_path,
            breadcrumbs=[
                BreadcrumbView(label=crumb.label, path=crumb.path) for crumb in state.breadcrumbs
            ],
            entries=[EntryView.from_entry(entry) for entry in state.sorted_listing],
            selected_file=(
                EntryView.from_entry(state.selected_file) if state.selected_file else None
            ),
            content=state.content.content if state.content else None,
            is_loading=state.is_loading,
            is_file_loading=state.is_file_loading,
            error=str(state.error) if state.error else None,
        )


class ErrorResponse(BaseModel):
    """Standard error envelope returned on all failure paths."""

    status: str = "error"
    message: str
