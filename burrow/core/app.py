from __future__ import annotations

import logging
from pathlib import Path
from typing import Awaitable

from textual import on
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.widgets import Footer
from textual.worker import Worker, WorkerState

from burrow import __version__
from burrow.core.config import RuntimeConfig, get_runtime_config
from burrow.core.errors import BurrowError, format_error
from burrow.core.logging import get_logger, log_event
from burrow.core.messages import (
    ActivateEntryRequest,
    ContextMenuRequest,
    HistoryRequest,
    NavigateRequest,
    PathInputChanged,
    PathKeyRequest,
    SearchRequest,
    SortRequest,
    SuggestionChosen,
    SuggestionsDismissed,
)
from burrow.core.notify import NotifyTimeouts
from burrow.core.session import SessionController
from burrow.core.worker_groups import WorkerGroup
from burrow.core.worker_registry import WorkerRouter, worker_handler
from burrow.domain.entries import FileEntry
from burrow.gateway import FilesystemGateway, LocalFilesystemGateway
from burrow.widgets import (
    ContextMenuScreen,
    DeleteDialog,
    FileList,
    ListingToolbar,
    PathBar,
    PreviewScreen,
    RenameDialog,
    StatsBar,
)
from burrow.widgets.context_menu import MenuAction

logger = get_logger(__name__)


class Burrow(App):
    TITLE = "Burrow"
    SUB_TITLE = f"v{__version__}"
    CSS_PATH = Path(__file__).parent.parent / "styles" / "index.tcss"

    BINDINGS = [
        Binding("alt+left", "history_back", "Back", show=True),
        Binding("alt+right", "history_forward", "Forward", show=True),
        Binding("ctrl+l", "focus_path", "Path", show=True),
        Binding("ctrl+f", "focus_search", "Search", show=False),
        Binding("ctrl+r", "refresh_listing", "Refresh", show=False),
        Binding("ctrl+s", "measure_size", "Measure size", show=True),
    ]

    def __init__(
        self,
        start_path: Path | None = None,
        *,
        gateway: FilesystemGateway | None = None,
        config: RuntimeConfig | None = None,
    ) -> None:
        super().__init__()
        self.config = config or get_runtime_config()
        self.notify_timeouts = NotifyTimeouts()
        self._start_path = start_path
        self.session = SessionController(
            gateway
            or LocalFilesystemGateway(
                timeout=self.config.gateway_timeout,
                size_depth=self.config.size_depth,
            ),
            config=self.config,
            notify=self.show_error,
        )
        self._worker_router = WorkerRouter()
        self._worker_router.bind(self)

    def compose(self) -> ComposeResult:
        store = self.session.store
        with Vertical(id="app_main_container"):
            yield PathBar(state_store=store, id="path_bar")
            yield ListingToolbar(state_store=store, id="listing_toolbar")
            yield StatsBar(state_store=store, id="stats_bar")
            yield FileList(state_store=store, id="file_list")
        yield Footer()

    def on_mount(self) -> None:
        start = str(self._start_path.expanduser()) if self._start_path else None
        self._run(self.session.start(start), WorkerGroup.DIRECTORY_LISTING)
        self.query_one(FileList).focus()

    def on_unmount(self) -> None:
        self.session.shutdown()

    def show_error(self, error: BaseException) -> None:
        message, severity = format_error(error)
        timeouts = self.notify_timeouts
        timeout = {
            "information": timeouts.quick,
            "warning": timeouts.short,
        }.get(severity, timeouts.normal)
        self.notify(message, severity=severity, timeout=timeout)

    def _run(self, work: Awaitable[object], group: str) -> None:
        self.run_worker(work, group=group, exclusive=False)

    # Navigation

    @on(NavigateRequest)
    def handle_navigation(self, event: NavigateRequest) -> None:
        self._run(self.session.navigate_to(event.path), WorkerGroup.DIRECTORY_LISTING)

    @on(HistoryRequest)
    def handle_history(self, event: HistoryRequest) -> None:
        if event.delta < 0:
            self.action_history_back()
        else:
            self.action_history_forward()

    def action_history_back(self) -> None:
        self._run(self.session.back(), WorkerGroup.DIRECTORY_LISTING)

    def action_history_forward(self) -> None:
        self._run(self.session.forward(), WorkerGroup.DIRECTORY_LISTING)

    def action_refresh_listing(self) -> None:
        self._run(self.session.refresh(), WorkerGroup.DIRECTORY_LISTING)

    def action_measure_size(self) -> None:
        self._run(self.session.measure_directory_size(), WorkerGroup.DIRECTORY_SIZE)

    def action_focus_path(self) -> None:
        self.query_one(PathBar).focus_input()

    def action_focus_search(self) -> None:
        self.query_one("#toolbar_search").focus()

    @on(SearchRequest)
    def handle_search(self, event: SearchRequest) -> None:
        self._run(self.session.search(event.query), WorkerGroup.DIRECTORY_LISTING)

    @on(SortRequest)
    def handle_sort(self, event: SortRequest) -> None:
        self.session.change_sort(event.sort_by)

    # Path input and suggestions

    @on(PathInputChanged)
    def handle_path_input(self, event: PathInputChanged) -> None:
        self._run(
            self.session.directory_input_changed(event.value), WorkerGroup.AUTOCOMPLETE
        )

    @on(PathKeyRequest)
    def handle_path_key(self, event: PathKeyRequest) -> None:
        async def press() -> None:
            outcome = await self.session.directory_key(event.key)
            if event.key == "enter" and not outcome.handled and event.value.strip():
                self.session.dismiss_suggestions()
                await self.session.navigate_to(event.value.strip())

        self._run(press(), WorkerGroup.AUTOCOMPLETE)

    @on(SuggestionChosen)
    def handle_suggestion(self, event: SuggestionChosen) -> None:
        self._run(self.session.choose_suggestion(event.index), WorkerGroup.AUTOCOMPLETE)

    @on(SuggestionsDismissed)
    def handle_suggestions_dismissed(self, _: SuggestionsDismissed) -> None:
        self.session.dismiss_suggestions()

    # Entries

    @on(ActivateEntryRequest)
    def handle_activate(self, event: ActivateEntryRequest) -> None:
        if event.entry.is_dir:
            self._run(self.session.activate(event.entry), WorkerGroup.DIRECTORY_LISTING)
            return
        self.push_screen(
            PreviewScreen(state_store=self.session.store),
            lambda _: self.session.close_preview(),
        )
        self._run(self.session.activate(event.entry), WorkerGroup.PREVIEW)

    @on(ContextMenuRequest)
    def handle_context_menu(self, event: ContextMenuRequest) -> None:
        entry = event.entry
        self.session.open_context_menu(entry)
        self.push_screen(
            ContextMenuScreen(entry, can_paste=bool(self.session.state.clipboard)),
            lambda action: self._handle_menu_choice(entry, action),
        )

    def _handle_menu_choice(self, entry: FileEntry, action: MenuAction | None) -> None:
        if action is None:
            self.session.background_click()
        elif action == "copy":
            self.session.copy()
        elif action == "paste":
            self._run(self.session.paste(), WorkerGroup.CONTEXT_ACTION)
        elif action == "rename":
            self.push_screen(
                RenameDialog(entry),
                self._after_rename_input,
            )
        elif action == "delete":
            self.push_screen(
                DeleteDialog(entry),
                self._after_delete_confirm,
            )

    def _after_rename_input(self, name: str | None) -> None:
        if name is None:
            self.session.background_click()
            return
        self._run(self.session.rename(name), WorkerGroup.CONTEXT_ACTION)

    def _after_delete_confirm(self, confirmed: bool | None) -> None:
        if not confirmed:
            self.session.background_click()
            return
        self._run(self.session.delete(), WorkerGroup.CONTEXT_ACTION)

    # Workers

    @worker_handler(WorkerGroup.ALL, states=(WorkerState.ERROR,))
    def _handle_worker_failure(self, event: Worker.StateChanged) -> bool:
        error = event.worker.error or RuntimeError("Background task failed.")
        log_event(
            logger,
            "worker.failed",
            level=logging.ERROR,
            group=event.worker.group,
            error=str(error),
        )
        if not isinstance(error, BurrowError):
            error = BurrowError(
                code="internal", message="Unexpected failure", detail=str(error)
            )
        self.show_error(error)
        return True

    @on(Worker.StateChanged)
    def _on_worker_state_changed(self, event: Worker.StateChanged) -> None:
        self._worker_router.dispatch(event)
