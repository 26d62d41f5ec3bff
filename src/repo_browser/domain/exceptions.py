"""Domain exception hierarchy.

Each exception maps to a specific HTTP status code at the interface layer.
Inner layers raise these; the outermost error-handler translates them.
"""

from __future__ import annotations


class RepoBrowserError(Exception):
    """Base exception for the entire application."""


# ── Input validation ────────────────────────────────────────────────────────


class EmptyInputError(RepoBrowserError):
    """A blank repository identifier was submitted."""


class InvalidFormatError(RepoBrowserError):
    """The supplied text does not identify a GitHub repository."""


# ── Remote lookups ──────────────────────────────────────────────────────────


class FetchError(RepoBrowserError):
    """A metadata, listing or content lookup failed.

    ``status_code`` is ``None`` for transport failures (DNS, timeouts, ...).
    ``detail`` holds the response body when the provider returned one.
    """

    def __init__(
        self, message: str, status_code: int | None = None, detail: str = ""
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.detail = detail


class RepositoryNotFoundError(FetchError):
    """The repository does not exist or is not accessible (404)."""


class PathNotFoundError(FetchError):
    """A directory or file inside the repository does not exist (404)."""


class RepositoryAccessDeniedError(FetchError):
    """Access to the repository was denied (403)."""


class GitHubRateLimitError(FetchError):
    """GitHub API rate limit exceeded (429 / 403 with rate-limit header)."""


# ── Session misuse ──────────────────────────────────────────────────────────


class NoRepositoryLoadedError(RepoBrowserError):
    """Navigation was requested before a repository finished loading."""


class EntryNotFoundError(RepoBrowserError):
    """The requested path is not part of the current directory listing."""


class NoFileContentError(RepoBrowserError):
    """No file content is available to copy or download."""
