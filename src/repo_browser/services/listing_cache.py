"""Per-path cache of directory listings for the loaded repository."""

from __future__ import annotations

import logging
from collections import OrderedDict

from repo_browser.domain.entities import DirectoryEntry

logger = logging.getLogger(__name__)


class ListingCache:
    """Least-recently-used map of ``path -> listing``.

    A ``max_entries`` of zero disables the cache: lookups always miss and
    nothing is stored.  The session clears it whenever a new repository is
    loaded.
    """

    def __init__(self, max_entries: int = 0) -> None:
        if max_entries < 0:
            raise ValueError("max_entries must be >= 0")
        self._max_entries = max_entries
        self._entries: OrderedDict[str, tuple[DirectoryEntry, ...]] = OrderedDict()

    @property
    def enabled(self) -> bool:
        return self._max_entries > 0

    def get(self, path: str) -> tuple[DirectoryEntry, ...] | None:
        listing = self._entries.get(path)
        if listing is not None:
            self._entries.move_to_end(path)
            logger.debug("Listing cache hit for '%s'", path)
        return listing

    def put(self, path: str, listing: tuple[DirectoryEntry, ...]) -> None:
        if not self.enabled:
            return
        self._entries[path] = listing
        self._entries.move_to_end(path)
        while len(self._entries) > self._max_entries:
            evicted, _ = self._entries.popitem(last=False)
            logger.debug("Evicted listing for '%s'", evicted)

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, path: object) -> bool:
        return path in self._entries
