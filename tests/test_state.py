"""Tests for the browsing state transitions, independent of any I/O."""

from __future__ import annotations

import pytest

from repo_browser.domain.entities import FileContent
from repo_browser.domain.exceptions import (
    FetchError,
    InvalidFormatError,
    NoRepositoryLoadedError,
)
from repo_browser.domain.state import (
    BrowserState,
    ContentFailed,
    ContentLoaded,
    ErrorRaised,
    FileSelected,
    LoadFailed,
    LoadRejected,
    LoadStarted,
    LoadSucceeded,
    NavigationFailed,
    NavigationStarted,
    NavigationSucceeded,
    reduce,
)
from repo_browser.domain.value_objects import RepositoryRef

from conftest import dir_entry, file_entry

REF = RepositoryRef("octo", "demo")
ROOT = (dir_entry("src"), file_entry("README.md"))
SRC = (file_entry("src/main.py"),)


@pytest.fixture
def loaded(sample_metadata) -> BrowserState:
    state = reduce(BrowserState(), LoadStarted(1, REF))
    return reduce(state, LoadSucceeded(1, sample_metadata, ROOT))


class TestLoad:
    def test_load_started_resets_everything(self, loaded):
        state = reduce(loaded, FileSelected(2, file_entry("README.md")))
        state = reduce(state, LoadStarted(3, RepositoryRef("other", "repo")))

        assert state.repository == RepositoryRef("other", "repo")
        assert state.metadata is None
        assert state.listing == ()
        assert state.selected_file is None
        assert state.content is None
        assert state.current_path == ""
        assert state.is_loading

    def test_load_succeeded_populates_root(self, loaded, sample_metadata):
        assert loaded.metadata == sample_metadata
        assert loaded.listing == ROOT
        assert loaded.current_path == ""
        assert not loaded.is_loading

    def test_load_failed_leaves_no_repository(self):
        error = FetchError("boom", status_code=500)
        state = reduce(BrowserState(), LoadStarted(1, REF))
        state = reduce(state, LoadFailed(1, error))

        assert state.repository is None
        assert state.metadata is None
        assert state.listing == ()
        assert state.current_path == ""
        assert state.error is error

    def test_rejected_input_resets_state(self, loaded):
        error = InvalidFormatError("bad")
        state = reduce(loaded, LoadRejected(error))
        assert state == BrowserState(error=error)

    def test_result_of_superseded_load_is_dropped(self, sample_metadata):
        state = reduce(BrowserState(), LoadStarted(1, REF))
        state = reduce(state, LoadStarted(2, RepositoryRef("other", "repo")))
        state = reduce(state, LoadSucceeded(1, sample_metadata, ROOT))

        assert state.metadata is None
        assert state.repository == RepositoryRef("other", "repo")


class TestNavigation:
    def test_success_replaces_path_and_listing_together(self, loaded):
        state = reduce(loaded, NavigationStarted(2, "src"))
        assert state.current_path == ""
        assert state.pending_path == "src"

        state = reduce(state, NavigationSucceeded(2, "src", SRC))
        assert (state.current_path, state.listing) == ("src", SRC)
        assert state.pending_path is None

    def test_failure_keeps_previous_listing(self, loaded):
        error = FetchError("gone", status_code=404)
        state = reduce(loaded, NavigationStarted(2, "missing"))
        state = reduce(state, NavigationFailed(2, error))

        assert state.current_path == ""
        assert state.listing == ROOT
        assert state.error is error
        assert not state.is_loading

    def test_late_response_for_abandoned_path_is_dropped(self, loaded):
        state = reduce(loaded, NavigationStarted(2, "src"))
        state = reduce(state, NavigationStarted(3, "docs"))
        docs = (file_entry("docs/index.md"),)
        state = reduce(state, NavigationSucceeded(3, "docs", docs))
        state = reduce(state, NavigationSucceeded(2, "src", SRC))

        assert state.current_path == "docs"
        assert state.listing == docs

    def test_late_failure_for_abandoned_path_is_dropped(self, loaded):
        state = reduce(loaded, NavigationStarted(2, "src"))
        state = reduce(state, NavigationStarted(3, "docs"))
        state = reduce(state, NavigationFailed(2, FetchError("late")))

        assert state.error is None
        assert state.is_loading

    def test_navigation_keeps_selection(self, loaded):
        readme = file_entry("README.md")
        state = reduce(loaded, FileSelected(2, readme))
        state = reduce(state, ContentLoaded(2, FileContent(readme, "# Demo")))
        state = reduce(state, NavigationStarted(3, "src"))
        state = reduce(state, NavigationSucceeded(3, "src", SRC))

        assert state.selected_file == readme
        assert state.content == FileContent(readme, "# Demo")

    def test_new_operation_clears_previous_error(self, loaded):
        state = reduce(loaded, NavigationStarted(2, "missing"))
        state = reduce(state, NavigationFailed(2, FetchError("gone")))
        state = reduce(state, NavigationStarted(3, "src"))
        assert state.error is None


class TestFileSelection:
    def test_selection_is_immediate_and_clears_content(self, loaded):
        readme, setup = file_entry("README.md"), file_entry("setup.py")
        state = reduce(loaded, FileSelected(2, readme))
        state = reduce(state, ContentLoaded(2, FileContent(readme, "# Demo")))
        state = reduce(state, FileSelected(3, setup))

        assert state.selected_file == setup
        assert state.content is None
        assert state.is_file_loading

    def test_late_content_for_previous_selection_is_dropped(self, loaded):
        a, b = file_entry("a.txt"), file_entry("b.txt")
        state = reduce(loaded, FileSelected(2, a))
        state = reduce(state, FileSelected(3, b))
        state = reduce(state, ContentLoaded(3, FileContent(b, "B")))
        state = reduce(state, ContentLoaded(2, FileContent(a, "A")))

        assert state.content == FileContent(b, "B")

    def test_failure_keeps_selected_file_without_content(self, loaded):
        readme = file_entry("README.md")
        error = FetchError("Failed to fetch file content: HTTP 500", status_code=500)
        state = reduce(loaded, FileSelected(2, readme))
        state = reduce(state, ContentFailed(2, error))

        assert state.selected_file == readme
        assert state.content is None
        assert state.error is error

    def test_content_in_flight_when_repository_reloads_is_dropped(self, loaded):
        readme = file_entry("README.md")
        state = reduce(loaded, FileSelected(2, readme))
        state = reduce(state, LoadStarted(3, REF))
        state = reduce(state, ContentLoaded(2, FileContent(readme, "# Demo")))

        assert state.selected_file is None
        assert state.content is None


def test_derived_views(loaded):
    state = reduce(loaded, NavigationStarted(2, "src/pkg"))
    state = reduce(state, NavigationSucceeded(2, "src/pkg", ()))

    assert [c.path for c in state.breadcrumbs] == ["", "src", "src/pkg"]
    assert loaded.sorted_listing[0] == dir_entry("src")
    assert loaded.is_loaded


def test_unknown_event_rejected():
    with pytest.raises(TypeError):
        reduce(BrowserState(), object())  # type: ignore[arg-type]


def test_load_succeeded_clears_error_recorded_while_loading(sample_metadata):
    state = reduce(BrowserState(), LoadStarted(1, REF))
    state = reduce(state, ErrorRaised(NoRepositoryLoadedError("Load a repository first.")))
    state = reduce(state, LoadSucceeded(1, sample_metadata, ROOT))

    assert state.error is None
    assert state.metadata == sample_metadata
