"""Tests for the per-path listing cache."""

from __future__ import annotations

import pytest

from repo_browser.domain.entities import DirectoryNode, FileEntry
from repo_browser.services.listing_cache import ListingCache

ROOT = (DirectoryNode(name="src", path="src"), FileEntry(name="README.md", path="README.md"))
SRC = (FileEntry(name="main.py", path="src/main.py"),)


def test_disabled_cache_stores_nothing():
    cache = ListingCache()
    cache.put("", ROOT)
    assert not cache.enabled
    assert cache.get("") is None
    assert len(cache) == 0


def test_hit_after_put():
    cache = ListingCache(4)
    cache.put("src", SRC)
    assert cache.get("src") == SRC
    assert "src" in cache


def test_evicts_least_recently_used():
    cache = ListingCache(2)
    cache.put("", ROOT)
    cache.put("src", SRC)
    cache.get("")
    cache.put("docs", ())

    assert "src" not in cache
    assert "" in cache
    assert "docs" in cache


def test_clear():
    cache = ListingCache(2)
    cache.put("", ROOT)
    cache.clear()
    assert cache.get("") is None


def test_negative_size_rejected():
    with pytest.raises(ValueError):
        ListingCache(-1)
