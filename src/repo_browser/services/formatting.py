"""Human-readable byte counts."""

from __future__ import annotations

_UNITS = ("Bytes", "KB", "MB", "GB")
_STEP = 1024


def format_size(num_bytes: int) -> str:
    """Render *num_bytes* with binary units, e.g. ``1536 -> "1.5 KB"``."""
    if num_bytes < 0:
        raise ValueError(f"Size must be non-negative, got {num_bytes}")
    if num_bytes == 0:
        return "0 Bytes"

    exponent = 0
    while exponent < len(_UNITS) - 1 and num_bytes >= _STEP ** (exponent + 1):
        exponent += 1

    scaled = f"{num_bytes / _STEP**exponent:.2f}".rstrip("0").rstrip(".")
    return f"{scaled} {_UNITS[exponent]}"
