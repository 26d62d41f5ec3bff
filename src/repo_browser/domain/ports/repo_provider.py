"""Port: repository provider — defined by the domain, implemented by infrastructure."""

from __future__ import annotations

from typing import Protocol

from repo_browser.domain.entities import DirectoryEntry, RepositoryMetadata
from repo_browser.domain.value_objects import RepositoryRef


class RepositoryProvider(Protocol):
    """Abstract contract for the three remote lookups the browser needs."""

    async def fetch_metadata(self, ref: RepositoryRef) -> RepositoryMetadata:
        """Return high-level repository metadata."""
        ...

    async def fetch_listing(self, ref: RepositoryRef, path: str) -> list[DirectoryEntry]:
        """Return the entries of the directory at *path* (``""`` is the root)."""
        ...

    async def fetch_raw(self, locator: str) -> str:
        """Return the decoded text behind a file's content locator."""
        ...
