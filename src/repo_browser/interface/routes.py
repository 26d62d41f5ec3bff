"""API routes — thin controllers that delegate to the browsing session."""

from __future__ import annotations

from urllib.parse import quote

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse

from repo_browser.domain.entities import FileContent
from repo_browser.domain.exceptions import EntryNotFoundError, NoFileContentError
from repo_browser.interface.dependencies import get_session
from repo_browser.interface.schemas import (
    BrowserView,
    LoadRequest,
    NavigateRequest,
    SelectRequest,
)
from repo_browser.services.browse_repo import RepositorySession

router = APIRouter()

_FETCH_RESPONSES: dict[int | str, dict[str, str]] = {
    403: {"description": "Repository is private"},
    404: {"description": "Repository or path not found"},
    429: {"description": "GitHub API rate limit exceeded"},
    502: {"description": "GitHub returned an unexpected error"},
}


@router.post(
    "/repository",
    response_model=BrowserView,
    responses={422: {"description": "Empty or invalid repository URL"}, **_FETCH_RESPONSES},
)
async def load_repository(
    body: LoadRequest,
    session: RepositorySession = Depends(get_session),
) -> BrowserView:
    """Load a public GitHub repository and show its root directory."""
    state = await session.load_repository(body.url)
    return BrowserView.from_state(state)


@router.get("/repository", response_model=BrowserView)
async def current_view(session: RepositorySession = Depends(get_session)) -> BrowserView:
    return BrowserView.from_state(session.state)


@router.post(
    "/navigate",
    response_model=BrowserView,
    responses={409: {"description": "No repository loaded"}, **_FETCH_RESPONSES},
)
async def navigate(
    body: NavigateRequest,
    session: RepositorySession = Depends(get_session),
) -> BrowserView:
    """Open the directory at ``path`` (``""`` is the root)."""
    state = await session.navigate_to(body.path)
    return BrowserView.from_state(state)


@router.post("/navigate/up", response_model=BrowserView, responses=_FETCH_RESPONSES)
async def navigate_up(session: RepositorySession = Depends(get_session)) -> BrowserView:
    state = await session.navigate_up()
    return BrowserView.from_state(state)


@router.post("/navigate/root", response_model=BrowserView, responses=_FETCH_RESPONSES)
async def navigate_root(session: RepositorySession = Depends(get_session)) -> BrowserView:
    state = await session.navigate_to_root()
    return BrowserView.from_state(state)


@router.post("/select", response_model=BrowserView, responses=_FETCH_RESPONSES)
async def select_file(
    body: SelectRequest,
    session: RepositorySession = Depends(get_session),
) -> BrowserView:
    """View a file of the current directory."""
    entry = session.find_entry(body.path)
    if entry is None:
        raise EntryNotFoundError(f"'{body.path}' is not in the current directory.")
    state = await session.select_file(entry)
    return BrowserView.from_state(state)


@router.get("/file/raw", response_class=PlainTextResponse)
async def raw_content(session: RepositorySession = Depends(get_session)) -> PlainTextResponse:
    """Raw text of the viewed file, for copying."""
    cached = _require_content(session)
    return PlainTextResponse(cached.content)


@router.get("/file/download", response_class=PlainTextResponse)
async def download(session: RepositorySession = Depends(get_session)) -> PlainTextResponse:
    """The viewed file as an attachment."""
    cached = _require_content(session)
    return PlainTextResponse(
        cached.content,
        headers={"Content-Disposition": _attachment_header(cached.file.name)},
    )


def _require_content(session: RepositorySession) -> FileContent:
    cached = session.state.content
    if cached is None:
        raise NoFileContentError("No file content is loaded.")
    return cached


def _attachment_header(filename: str) -> str:
    """``Content-Disposition`` value with an ASCII fallback and the UTF-8 name."""
    fallback = filename.encode("ascii", "replace").decode("ascii")
    fallback = fallback.replace("?", "_").replace('"', "_").replace("\\", "_")
    return f"attachment; filename=\"{fallback}\"; filename*=UTF-8''{quote(filename, safe='')}"
