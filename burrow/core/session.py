from __future__ import annotations

import logging
from typing import Callable

from burrow.core.autocomplete import AutocompleteController, KeyOutcome
from burrow.core.config import RuntimeConfig, get_runtime_config
from burrow.core.context_menu import ContextMenuController
from burrow.core.errors import BurrowError, OperationResult, ResultStatus
from burrow.core.history import NavigationHistory
from burrow.core.listing import DirectoryListingOrchestrator
from burrow.core.logging import get_logger, log_event
from burrow.core.preview import PreviewManager
from burrow.core.resources import ResourceFactory, create_resource
from burrow.core.state import SessionState, SessionStateStore
from burrow.domain.entries import FileEntry, normalize_sort_key
from burrow.gateway.protocol import FilesystemGateway

logger = get_logger(__name__)

Notifier = Callable[[BurrowError], None]


class SessionController:
    """Single owner of the browsing session.

    Front ends call these methods and subscribe to ``store``; nothing else
    mutates the session state. Failures come back as ``OperationResult``
    values, are kept in ``SessionState.last_error`` and are forwarded to
    ``notify`` when one is supplied.
    """

    def __init__(
        self,
        gateway: FilesystemGateway,
        *,
        config: RuntimeConfig | None = None,
        notify: Notifier | None = None,
        resource_factory: ResourceFactory = create_resource,
    ) -> None:
        self._config = config or get_runtime_config()
        self._gateway = gateway
        self._notify = notify
        self.store = SessionStateStore(
            SessionState(sort_by=normalize_sort_key(self._config.default_sort))
        )
        self.history = NavigationHistory(limit=self._config.history_limit)
        self.listing = DirectoryListingOrchestrator(gateway, self.store, self.history)
        self.autocomplete = AutocompleteController(
            gateway, self.store, limit=self._config.suggestion_limit
        )
        self.menu = ContextMenuController(
            gateway, self.store, refresh_listing=self.refresh
        )
        self.preview = PreviewManager(
            gateway, self.store, resource_factory=resource_factory
        )

    @property
    def state(self) -> SessionState:
        return self.store.state

    async def start(self, directory: str | None = None) -> OperationResult:
        if directory is None:
            try:
                directory = await self._gateway.home_directory()
            except Exception as exc:
                log_event(
                    logger, "session.home_failed", level=logging.WARNING, error=str(exc)
                )
                return self._report(OperationResult.from_error(exc))
        log_event(logger, "session.started", directory=directory)
        return await self.navigate_to(directory)

    async def navigate_to(self, path: str) -> OperationResult:
        self.autocomplete.clear()
        return self._report(await self.listing.navigate_to(path))

    async def back(self) -> OperationResult | None:
        result = await self.listing.back()
        return self._report(result) if result is not None else None

    async def forward(self) -> OperationResult | None:
        result = await self.listing.forward()
        return self._report(result) if result is not None else None

    async def refresh(self) -> OperationResult:
        return self._report(await self.listing.refresh())

    async def search(self, query: str) -> OperationResult:
        return self._report(await self.listing.search(query))

    def change_sort(self, sort_by: object) -> None:
        self.listing.change_sort(sort_by)

    async def measure_directory_size(self) -> OperationResult:
        return self._report(await self.listing.measure_directory_size())

    async def activate(self, entry: FileEntry) -> OperationResult:
        """Open a folder, or preview a file."""
        if entry.is_dir:
            return await self.navigate_to(entry.path)
        return await self.open_preview(entry)

    # Path input

    async def directory_input_changed(self, value: str) -> OperationResult:
        self.store.set_directory(value)
        return self._report(await self.autocomplete.input_changed(value))

    async def directory_key(self, key: str) -> KeyOutcome:
        outcome = self.autocomplete.key(key)
        if outcome.committed is not None:
            await self.navigate_to(outcome.committed)
        return outcome

    async def choose_suggestion(self, index: int) -> OperationResult | None:
        path = self.autocomplete.click(index)
        if path is None:
            return None
        return await self.navigate_to(path)

    def dismiss_suggestions(self) -> None:
        self.autocomplete.clear()

    # Context menu and clipboard

    def open_context_menu(self, entry: FileEntry) -> None:
        self.menu.open_menu(entry)

    def background_click(self) -> None:
        self.menu.close_menu()

    def copy(self) -> OperationResult:
        return self._report(self.menu.copy())

    async def paste(self) -> OperationResult:
        return self._report(await self.menu.paste())

    async def rename(self, new_name: str | None) -> OperationResult:
        return self._report(await self.menu.rename(new_name))

    async def delete(self) -> OperationResult:
        return self._report(await self.menu.delete())

    # Preview

    async def open_preview(self, entry: FileEntry) -> OperationResult:
        return self._report(await self.preview.open(entry))

    def close_preview(self) -> None:
        self.preview.close()

    def dismiss_error(self) -> None:
        self.store.set_last_error(None)

    def shutdown(self) -> None:
        self.preview.close()
        self.menu.close_menu()
        self.autocomplete.clear()

    def _report(self, result: OperationResult) -> OperationResult:
        if result.status in {ResultStatus.SUCCESS, ResultStatus.STALE}:
            return result
        if result.error is not None:
            self.store.set_last_error(result.error)
            if self._notify is not None:
                self._notify(result.error)
        return result
