"""Domain entities — pure data structures with no external dependencies."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class EntryKind(str, Enum):
    """Kind of item returned by a directory listing."""

    DIRECTORY = "dir"
    FILE = "file"


def _parent_of(path: str) -> str:
    head, _, _ = path.rpartition("/")
    return head


@dataclass(frozen=True, slots=True)
class DirectoryNode:
    """A sub-directory inside the listed directory."""

    name: str
    path: str

    @property
    def kind(self) -> EntryKind:
        return EntryKind.DIRECTORY

    @property
    def parent_path(self) -> str:
        return _parent_of(self.path)


@dataclass(frozen=True, slots=True)
class FileEntry:
    """A file inside the listed directory.

    ``content_locator`` is the absolute URL the raw text is fetched from; the
    provider omits it for entries it cannot serve (e.g. submodules).
    """

    name: str
    path: str
    size: int = 0
    content_locator: str | None = None

    def __post_init__(self) -> None:
        if self.size < 0:
            raise ValueError(f"File size must be non-negative, got {self.size}")

    @property
    def kind(self) -> EntryKind:
        return EntryKind.FILE

    @property
    def parent_path(self) -> str:
        return _parent_of(self.path)


DirectoryEntry = DirectoryNode | FileEntry


@dataclass(frozen=True, slots=True)
class RepositoryMetadata:
    """High-level metadata about a GitHub repository."""

    full_name: str
    html_url: str
    star_count: int = 0
    fork_count: int = 0
    default_branch: str = "main"
    description: str | None = None
    primary_language: str | None = None
    owner_login: str | None = None
    owner_avatar_url: str | None = None


@dataclass(frozen=True, slots=True)
class Breadcrumb:
    """One step of the trail from the repository root to the current path."""

    label: str
    path: str


@dataclass(frozen=True, slots=True)
class FileContent:
    """The last viewed file together with its decoded text."""

    file: FileEntry
    content: str
