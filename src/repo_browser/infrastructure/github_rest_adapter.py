"""GitHub REST API adapter — implements the RepositoryProvider port."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any
from urllib.parse import quote

import httpx

from repo_browser.domain.entities import (
    DirectoryEntry,
    DirectoryNode,
    FileEntry,
    RepositoryMetadata,
)
from repo_browser.domain.exceptions import (
    FetchError,
    GitHubRateLimitError,
    PathNotFoundError,
    RepositoryAccessDeniedError,
    RepositoryNotFoundError,
)
from repo_browser.domain.value_objects import RepositoryRef

logger = logging.getLogger(__name__)

_GITHUB_API = "https://api.github.com"
_USER_AGENT = "repo-browser/1.0"
_DETAIL_LIMIT = 500


class GitHubRestAdapter:
    """Concrete RepositoryProvider backed by the GitHub v3 REST API."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        token: str | None = None,
        api_url: str = _GITHUB_API,
        max_content_kb: int = 1024,
    ) -> None:
        self._client = client
        self._api_url = api_url.rstrip("/")
        self._max_content_bytes = max_content_kb * 1024
        self._api_headers: dict[str, str] = {
            "Accept": "application/vnd.github.v3+json",
            "User-Agent": _USER_AGENT,
        }
        if token:
            self._api_headers["Authorization"] = f"Bearer {token}"

    async def fetch_metadata(self, ref: RepositoryRef) -> RepositoryMetadata:
        """GET /repos/{owner}/{repo} → RepositoryMetadata."""
        resp = await self._api_get(
            f"/repos/{ref.owner}/{ref.name}",
            not_found=(
                RepositoryNotFoundError,
                "Repository not found. Make sure the URL points to a public repository.",
            ),
        )
        data = _json(resp)
        try:
            return _to_metadata(ref, data)
        except (ValueError, KeyError, TypeError, AttributeError) as exc:
            raise _malformed(resp) from exc

    async def fetch_listing(self, ref: RepositoryRef, path: str) -> list[DirectoryEntry]:
        """GET /repos/{owner}/{repo}/contents/{path} → [DirectoryEntry]."""
        endpoint = f"/repos/{ref.owner}/{ref.name}/contents"
        if path:
            endpoint = f"{endpoint}/{quote(path, safe='/')}"

        resp = await self._api_get(
            endpoint,
            not_found=(PathNotFoundError, f"Path '{path or '/'}' not found in {ref.full_name}."),
        )
        data = _json(resp)
        if not isinstance(data, list):
            raise FetchError(f"'{path}' in {ref.full_name} is not a directory.")
        try:
            return [_to_entry(item) for item in data]
        except (ValueError, KeyError, TypeError, AttributeError) as exc:
            raise _malformed(resp) from exc

    async def fetch_raw(self, locator: str) -> str:
        """Fetch raw file content from a ``download_url``."""
        try:
            resp = await self._client.get(locator, headers={"User-Agent": _USER_AGENT})
        except httpx.HTTPError as exc:
            raise FetchError(f"Network error fetching {locator}: {exc}") from exc

        if resp.status_code == 404:
            raise PathNotFoundError(
                f"File not found: {locator}", status_code=404, detail=_detail(resp)
            )
        if resp.status_code != 200:
            raise FetchError(
                f"Failed to fetch file content: HTTP {resp.status_code}",
                status_code=resp.status_code,
                detail=_detail(resp),
            )

        if len(resp.content) > self._max_content_bytes:
            raise FetchError(
                f"File is too large to display ({len(resp.content)} bytes, "
                f"limit {self._max_content_bytes}).",
                status_code=413,
            )
        return resp.text

    async def _api_get(
        self, endpoint: str, not_found: tuple[type[FetchError], str]
    ) -> httpx.Response:
        """Perform a GitHub API GET request with error translation."""
        url = f"{self._api_url}{endpoint}"
        try:
            resp = await self._client.get(url, headers=self._api_headers)
        except httpx.HTTPError as exc:
            raise FetchError(f"Network error fetching {url}: {exc}") from exc

        if resp.status_code == 200:
            return resp

        detail = _detail(resp)
        if resp.status_code == 404:
            error_type, message = not_found
            raise error_type(message, status_code=404, detail=detail)

        if resp.status_code == 403:
            remaining = resp.headers.get("x-ratelimit-remaining", "")
            if remaining == "0":
                reset_raw = resp.headers.get("x-ratelimit-reset", "")
                try:
                    reset_str = datetime.fromtimestamp(int(reset_raw), tz=timezone.utc).strftime(
                        "%Y-%m-%d %H:%M:%S UTC"
                    )
                except (ValueError, OSError):
                    reset_str = reset_raw or "unknown"
                raise GitHubRateLimitError(
                    f"GitHub API rate limit exceeded. Resets at {reset_str}. "
                    "Set the GITHUB_TOKEN environment variable to increase the limit.",
                    status_code=403,
                    detail=detail,
                )
            raise RepositoryAccessDeniedError(
                "Access denied. The repository may be private.",
                status_code=403,
                detail=detail,
            )

        if resp.status_code == 429:
            raise GitHubRateLimitError(
                "GitHub API rate limit exceeded (HTTP 429).", status_code=429, detail=detail
            )

        raise FetchError(
            f"Error: {resp.status_code} - {detail}", status_code=resp.status_code, detail=detail
        )


def _to_metadata(ref: RepositoryRef, data: dict[str, Any]) -> RepositoryMetadata:
    owner = data.get("owner") or {}
    return RepositoryMetadata(
        full_name=data.get("full_name", ref.full_name),
        html_url=data.get("html_url", f"https://github.com/{ref.full_name}"),
        star_count=data.get("stargazers_count", 0),
        fork_count=data.get("forks_count", 0),
        default_branch=data.get("default_branch", "main"),
        description=data.get("description"),
        primary_language=data.get("language"),
        owner_login=owner.get("login"),
        owner_avatar_url=owner.get("avatar_url"),
    )


def _to_entry(item: dict[str, Any]) -> DirectoryEntry:
    """Map one item of a contents listing to a tagged entry."""
    if item.get("type") == "dir":
        return DirectoryNode(name=item["name"], path=item["path"])
    return FileEntry(
        name=item["name"],
        path=item["path"],
        size=item.get("size") or 0,
        content_locator=item.get("download_url"),
    )


def _detail(resp: httpx.Response) -> str:
    return resp.text[:_DETAIL_LIMIT]


def _malformed(resp: httpx.Response) -> FetchError:
    return FetchError(
        f"Malformed response from GitHub for {resp.request.url}",
        status_code=resp.status_code,
        detail=_detail(resp),
    )


def _json(resp: httpx.Response) -> Any:
    try:
        return resp.json()
    except ValueError as exc:
        raise _malformed(resp) from exc
