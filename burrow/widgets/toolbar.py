from __future__ import annotations

from rich.markup import escape
from textual import on
from textual.app import ComposeResult
from textual.containers import Horizontal
from textual.reactive import reactive
from textual.widgets import Input, Label, Select

from burrow.core.messages import SearchRequest, SortRequest
from burrow.core.state import SessionState, SessionStateStore
from burrow.domain.entries import SORT_KEY_LABELS
from burrow.services.formatting import format_bytes


class ListingToolbar(Horizontal):
    """Search box and sort selector for the current listing."""

    def __init__(self, *, state_store: SessionStateStore, id: str | None = None) -> None:
        super().__init__(id=id)
        self._state_store = state_store
        self._state_subscription = self._handle_state_update

    def compose(self) -> ComposeResult:
        yield Input(placeholder="Search files or folders...", id="toolbar_search")
        yield Select(
            [(label, key) for key, label in SORT_KEY_LABELS.items()],
            value=self._state_store.state.sort_by,
            allow_blank=False,
            id="toolbar_sort",
        )

    def on_mount(self) -> None:
        self._state_store.subscribe(self._state_subscription)

    def on_unmount(self) -> None:
        self._state_store.unsubscribe(self._state_subscription)

    @on(Input.Changed, "#toolbar_search")
    def _on_search_changed(self, event: Input.Changed) -> None:
        event.stop()
        if event.value == self._state_store.state.search_query:
            return
        self.post_message(SearchRequest(event.value))

    @on(Select.Changed, "#toolbar_sort")
    def _on_sort_changed(self, event: Select.Changed) -> None:
        event.stop()
        if event.value != self._state_store.state.sort_by:
            self.post_message(SortRequest(str(event.value)))

    def _handle_state_update(self, state: SessionState) -> None:
        search = self.query_one("#toolbar_search", Input)
        if not search.has_focus and search.value != state.search_query:
            search.value = state.search_query


class StatsBar(Horizontal):
    """Folder/file counts, total size, query time and clipboard contents."""

    summary = reactive("", always_update=True)

    def __init__(self, *, state_store: SessionStateStore, id: str | None = None) -> None:
        super().__init__(id=id)
        self._state_store = state_store
        self._state_subscription = self._handle_state_update
        self._label = Label("", id="stats_summary")

    def compose(self) -> ComposeResult:
        yield self._label

    def on_mount(self) -> None:
        self._state_store.subscribe(self._state_subscription)

    def on_unmount(self) -> None:
        self._state_store.unsubscribe(self._state_subscription)

    def watch_summary(self) -> None:
        self._label.update(self.summary)

    def _handle_state_update(self, state: SessionState) -> None:
        self.summary = build_summary(state)


def build_summary(state: SessionState) -> str:
    listing = state.listing
    if listing is None:
        parts = ["[dim]No listing yet[/dim]"]
    else:
        parts = [
            f"Folders: {listing.total_folders}",
            f"Files: {listing.total_files}",
            f"Size: {format_bytes(listing.total_size)}",
            f"Query: {listing.query_time_ms:.0f}ms",
        ]
    if state.clipboard:
        parts.append(f"[dim]Clipboard:[/dim] {escape(state.clipboard)}")
    return "  |  ".join(parts)
