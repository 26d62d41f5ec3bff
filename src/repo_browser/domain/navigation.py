"""Pure path helpers: parent lookup, breadcrumb trail and listing order."""

from __future__ import annotations

from typing import Iterable

from repo_browser.domain.entities import Breadcrumb, DirectoryEntry, EntryKind

ROOT_LABEL = "Root"


def normalize_path(path: str) -> str:
    """Strip surrounding separators; ``""`` denotes the repository root."""
    return path.strip().strip("/")


def parent_path(path: str) -> str:
    """Return the parent of *path*; the root is its own parent."""
    head, _, _ = normalize_path(path).rpartition("/")
    return head


def breadcrumbs(path: str) -> list[Breadcrumb]:
    """Derive the breadcrumb trail for *path*.

    ``"a/b"`` yields ``Root -> ""``, ``a -> "a"``, ``b -> "a/b"``.
    """
    trail = [Breadcrumb(label=ROOT_LABEL, path="")]
    normalized = normalize_path(path)
    if not normalized:
        return trail

    segments = normalized.split("/")
    for index, segment in enumerate(segments):
        trail.append(Breadcrumb(label=segment, path="/".join(segments[: index + 1])))
    return trail


def sort_entries(entries: Iterable[DirectoryEntry]) -> list[DirectoryEntry]:
    """Directories first, then files; each group ordered by name.

    Names compare case-insensitively; names differing only in case put the
    lowercase spelling first (``readme`` before ``README``).
    """
    return sorted(
        entries,
        key=lambda entry: (
            entry.kind is not EntryKind.DIRECTORY,
            entry.name.casefold(),
            entry.name.swapcase(),
        ),
    )
