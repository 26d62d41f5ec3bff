"""Shared test fixtures for the repository browser."""

from __future__ import annotations

import asyncio

import pytest

from repo_browser.domain.entities import (
    DirectoryEntry,
    DirectoryNode,
    FileEntry,
    RepositoryMetadata,
)
from repo_browser.domain.exceptions import PathNotFoundError
from repo_browser.domain.value_objects import RepositoryRef


class FakeProvider:
    """In-memory RepositoryProvider.

    ``listings`` maps a path to its entries, ``contents`` maps a content
    locator to text.  Any value may instead be an exception instance, which is
    raised.  A request whose key is in ``gates`` waits for that event first,
    which lets tests complete requests out of order.
    """

    def __init__(
        self,
        metadata: RepositoryMetadata | Exception,
        listings: dict[str, list[DirectoryEntry] | Exception],
        contents: dict[str, str | Exception] | None = None,
    ) -> None:
        self.metadata = metadata
        self.listings = listings
        self.contents = contents or {}
        self.gates: dict[str, asyncio.Event] = {}
        self.calls: list[tuple[str, str]] = []

    def gate(self, key: str) -> asyncio.Event:
        event = asyncio.Event()
        self.gates[key] = event
        return event

    async def _wait(self, key: str) -> None:
        if key in self.gates:
            await self.gates[key].wait()

    async def fetch_metadata(self, ref: RepositoryRef) -> RepositoryMetadata:
        self.calls.append(("metadata", ref.full_name))
        await self._wait(f"metadata:{ref.full_name}")
        if isinstance(self.metadata, Exception):
            raise self.metadata
        return self.metadata

    async def fetch_listing(self, ref: RepositoryRef, path: str) -> list[DirectoryEntry]:
        self.calls.append(("listing", path))
        await self._wait(f"listing:{path}")
        result = self.listings.get(path)
        if result is None:
            raise PathNotFoundError(f"Path '{path}' not found.", status_code=404)
        if isinstance(result, Exception):
            raise result
        return list(result)

    async def fetch_raw(self, locator: str) -> str:
        self.calls.append(("raw", locator))
        await self._wait(f"raw:{locator}")
        result = self.contents[locator]
        if isinstance(result, Exception):
            raise result
        return result


def file_entry(path: str, size: int = 10) -> FileEntry:
    return FileEntry(
        name=path.rpartition("/")[2],
        path=path,
        size=size,
        content_locator=f"https://raw.githubusercontent.com/octo/demo/main/{path}",
    )


def dir_entry(path: str) -> DirectoryNode:
    return DirectoryNode(name=path.rpartition("/")[2], path=path)


@pytest.fixture
def sample_metadata() -> RepositoryMetadata:
    return RepositoryMetadata(
        full_name="octo/demo",
        html_url="https://github.com/octo/demo",
        star_count=1200,
        fork_count=34,
        description="Demo repository",
        primary_language="Python",
        owner_login="octo",
        owner_avatar_url="https://avatars.githubusercontent.com/u/1",
    )


@pytest.fixture
def sample_listings() -> dict[str, list[DirectoryEntry]]:
    return {
        "": [
            file_entry("setup.py", 1536),
            dir_entry("src"),
            file_entry("README.md", 2048),
            dir_entry("docs"),
        ],
        "src": [dir_entry("src/pkg"), file_entry("src/main.py", 800)],
        "src/pkg": [file_entry("src/pkg/core.py", 4096)],
        "docs": [file_entry("docs/index.md", 100)],
    }


@pytest.fixture
def sample_contents() -> dict[str, str]:
    base = "https://raw.githubusercontent.com/octo/demo/main/"
    return {
        base + "README.md": "# Demo\n",
        base + "setup.py": "from setuptools import setup\n",
        base + "src/main.py": "print('hello')\n",
        base + "src/pkg/core.py": "VALUE = 1\n",
        base + "docs/index.md": "Docs\n",
    }


@pytest.fixture
def provider(sample_metadata, sample_listings, sample_contents) -> FakeProvider:
    return FakeProvider(sample_metadata, dict(sample_listings), dict(sample_contents))
