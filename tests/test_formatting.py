"""Tests for byte-count formatting."""

from __future__ import annotations

import pytest

from repo_browser.services.formatting import format_size


@pytest.mark.parametrize(
    ("num_bytes", "expected"),
    [
        (0, "0 Bytes"),
        (1, "1 Bytes"),
        (1023, "1023 Bytes"),
        (1024, "1 KB"),
        (1536, "1.5 KB"),
        (1048576, "1 MB"),
        (1024**3, "1 GB"),
        (1234567, "1.18 MB"),
        (5 * 1024**4, "5120 GB"),
    ],
)
def test_format_size(num_bytes, expected):
    assert format_size(num_bytes) == expected


def test_negative_size_rejected():
    with pytest.raises(ValueError):
        format_size(-1)
