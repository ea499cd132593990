from __future__ import annotations

import logging
import os
from typing import Awaitable, Callable

from burrow.core.errors import OperationResult
from burrow.core.logging import get_logger, log_event
from burrow.core.state import ContextMenuState, SessionStateStore
from burrow.domain.entries import FileEntry
from burrow.gateway.protocol import FilesystemGateway

logger = get_logger(__name__)

RefreshListing = Callable[[], Awaitable[OperationResult]]


class ContextMenuController:
    """Per-entry action menu plus the single-slot copy clipboard.

    Every action closes the menu it was started from when it finishes,
    whatever the outcome. A menu opened meanwhile is left alone.
    The listing is refreshed only after a gateway call succeeds.
    """

    def __init__(
        self,
        gateway: FilesystemGateway,
        store: SessionStateStore,
        *,
        refresh_listing: RefreshListing,
    ) -> None:
        self._gateway = gateway
        self._store = store
        self._refresh_listing = refresh_listing

    @property
    def state(self) -> ContextMenuState:
        return self._store.state.context_menu

    @property
    def clipboard(self) -> str | None:
        return self._store.state.clipboard

    def open_menu(self, entry: FileEntry) -> None:
        self._store.set_context_menu(ContextMenuState(visible=True, target=entry))

    def close_menu(self) -> None:
        self._store.set_context_menu(ContextMenuState())

    def copy(self) -> OperationResult:
        target = self._target()
        if target is None:
            return self._menu_closed()
        self._store.set_clipboard(target.path)
        self.close_menu()
        log_event(logger, "clipboard.copied", path=target.path)
        return OperationResult.success(target.path)

    async def paste(self) -> OperationResult:
        target = self._target()
        if target is None:
            return self._menu_closed()
        source = self.clipboard
        if not source:
            self.close_menu()
            return OperationResult.invalid("paste_nothing", "Nothing to paste")

        destination = target.path if target.is_dir else self._displayed_directory()
        return await self._perform(
            "paste",
            lambda: self._gateway.paste_entry(source, destination),
            source=source,
            destination=destination,
        )

    async def rename(self, new_name: str | None) -> OperationResult:
        target = self._target()
        if target is None:
            return self._menu_closed()
        name = new_name or ""
        if not name.strip():
            self.close_menu()
            return OperationResult.invalid("rename_empty", "No new name given")
        if "/" in name or os.sep in name:
            self.close_menu()
            return OperationResult.invalid(
                "rename_invalid", f"'{name}' must not contain a path separator"
            )
        return await self._perform(
            "rename",
            lambda: self._gateway.rename_entry(target.path, name),
            path=target.path,
            new_name=name,
        )

    async def delete(self) -> OperationResult:
        target = self._target()
        if target is None:
            return self._menu_closed()
        return await self._perform(
            "delete",
            lambda: self._gateway.delete_entry(target.path),
            path=target.path,
        )

    async def _perform(
        self,
        action: str,
        call: Callable[[], Awaitable[None]],
        **fields: object,
    ) -> OperationResult:
        menu = self.state
        try:
            await call()
        except Exception as exc:
            log_event(
                logger,
                "menu.action_failed",
                level=logging.WARNING,
                action=action,
                error=str(exc),
                **fields,
            )
            return OperationResult.from_error(exc)
        finally:
            # A menu opened while the call was in flight stays open.
            if self.state is menu:
                self.close_menu()

        log_event(logger, f"menu.{action}", **fields)
        await self._refresh_listing()
        return OperationResult.success()

    def _target(self) -> FileEntry | None:
        state = self.state
        if not state.visible:
            return None
        return state.target

    def _displayed_directory(self) -> str:
        state = self._store.state
        return state.listing.directory if state.listing else state.directory

    def _menu_closed(self) -> OperationResult:
        return OperationResult.invalid("menu_closed", "No entry menu is open")
