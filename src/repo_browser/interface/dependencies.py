"""FastAPI dependency injection wiring."""

from __future__ import annotations

import httpx

from repo_browser.infrastructure.config import get_settings
from repo_browser.infrastructure.github_rest_adapter import GitHubRestAdapter
from repo_browser.services.browse_repo import RepositorySession
from repo_browser.services.listing_cache import ListingCache

_http_client: httpx.AsyncClient | None = None
_session: RepositorySession | None = None


async def startup() -> None:
    """Initialise shared resources — called from the lifespan context manager."""
    global _http_client, _session  # noqa: PLW0603

    settings = get_settings()
    _http_client = httpx.AsyncClient(
        timeout=httpx.Timeout(settings.request_timeout), follow_redirects=True
    )
    token = settings.github_token.get_secret_value() if settings.github_token else None
    adapter = GitHubRestAdapter(
        client=_http_client,
        token=token,
        api_url=settings.github_api_url,
        max_content_kb=settings.max_content_kb,
    )
    _session = RepositorySession(
        provider=adapter,
        listing_cache=ListingCache(settings.listing_cache_size),
    )


async def shutdown() -> None:
    """Release shared resources."""
    global _http_client, _session  # noqa: PLW0603

    if _http_client:
        await _http_client.aclose()
        _http_client = None
    _session = None


def get_session() -> RepositorySession:
    """Return the single browsing session of this process."""
    assert _session is not None, "startup() was not called"
    return _session
