from __future__ import annotations

import logging
import time
from dataclasses import replace

from burrow.core.errors import OperationResult
from burrow.core.history import NavigationHistory
from burrow.core.logging import get_logger, log_event
from burrow.core.state import ListingResult, SessionStateStore
from burrow.domain.entries import normalize_sort_key, sort_entries, unique_by_path
from burrow.gateway.protocol import FilesystemGateway

logger = get_logger(__name__)


class DirectoryListingOrchestrator:
    """Issues listing requests and publishes sorted snapshots.

    Every request takes the next token. Only the response to the most
    recently issued request is applied; older ones are dropped whether they
    succeed or fail. A failed request leaves the previous listing in place,
    and history is only written after a listing succeeds.
    """

    def __init__(
        self,
        gateway: FilesystemGateway,
        store: SessionStateStore,
        history: NavigationHistory,
    ) -> None:
        self._gateway = gateway
        self._store = store
        self._history = history
        self._token = 0
        # Target of the latest navigation, which may not be listed yet.
        self._directory: str | None = None
        # History change to commit once the latest request succeeds.
        self._record_pending = False
        self._pending_index: int | None = None

    @property
    def directory(self) -> str | None:
        if self._directory is not None:
            return self._directory
        listing = self._store.state.listing
        return listing.directory if listing else None

    async def refresh(
        self,
        directory: str | None = None,
        search_query: str | None = None,
        sort_by: object | None = None,
        *,
        record_history: bool = False,
    ) -> OperationResult:
        if sort_by is not None:
            self._store.set_sort_by(normalize_sort_key(sort_by))
        state = self._store.state
        if directory is None:
            directory = self.directory or state.directory
        self._directory = directory
        query = state.search_query if search_query is None else search_query
        if record_history:
            self._record_pending = True
            self._pending_index = None

        self._token += 1
        token = self._token
        started = time.perf_counter()
        try:
            response = await self._gateway.list_directory(directory, query)
        except Exception as exc:
            if token != self._token:
                log_event(logger, "listing.stale", directory=directory, token=token)
                return OperationResult.stale()
            self._settle_navigation(succeeded=False)
            log_event(
                logger,
                "listing.failed",
                level=logging.WARNING,
                directory=directory,
                query=query,
                error=str(exc),
            )
            return OperationResult.from_error(exc)

        if token != self._token:
            log_event(logger, "listing.stale", directory=directory, token=token)
            return OperationResult.stale()

        elapsed_ms = (time.perf_counter() - started) * 1000.0
        entries, dropped = unique_by_path(response.entries)
        if dropped:
            log_event(
                logger,
                "listing.duplicate_paths",
                level=logging.WARNING,
                directory=directory,
                dropped=dropped,
            )

        # Sort by the key selected now; a sort change may land mid-request.
        sort_by = self._store.state.sort_by
        listing = ListingResult(
            directory=directory,
            query=query,
            sort_by=sort_by,
            entries=tuple(sort_entries(entries, sort_by)),
            total_files=response.total_files,
            total_folders=response.total_folders,
            total_size=response.total_size,
            query_time_ms=round(elapsed_ms, 2),
            token=token,
        )
        self._store.set_listing(listing)
        self._settle_navigation(succeeded=True)
        log_event(
            logger,
            "listing.loaded",
            directory=directory,
            query=query,
            sort_by=sort_by,
            files=listing.total_files,
            folders=listing.total_folders,
            query_time_ms=listing.query_time_ms,
        )
        return OperationResult.success(listing)

    async def navigate_to(self, path: str) -> OperationResult:
        self._store.set_directory(path)
        self._store.set_search_query("")
        return await self.refresh(path, "", record_history=True)

    async def back(self) -> OperationResult | None:
        return await self._revisit(-1)

    async def forward(self) -> OperationResult | None:
        return await self._revisit(1)

    async def _revisit(self, step: int) -> OperationResult | None:
        # Repeated presses walk on from a revisit that is still in flight.
        target = self._history.peek(step, origin=self._pending_index)
        if target is None:
            return None
        index, path = target
        self._store.set_directory(path)
        self._store.set_search_query("")
        self._record_pending = False
        self._pending_index = index
        return await self.refresh(path, "")

    def _settle_navigation(self, *, succeeded: bool) -> None:
        record, self._record_pending = self._record_pending, False
        index, self._pending_index = self._pending_index, None
        listing = self._store.state.listing
        if not succeeded:
            self._directory = listing.directory if listing else None
            if listing is not None:
                self._store.set_directory(listing.directory)
            return
        if record:
            self._store.set_history(self._history.record(listing.directory))
        elif index is not None:
            self._store.set_history(self._history.move_to(index))

    async def search(self, query: str) -> OperationResult:
        self._store.set_search_query(query)
        return await self.refresh(search_query=query)

    def change_sort(self, sort_by: object) -> ListingResult | None:
        key = normalize_sort_key(sort_by)
        self._store.set_sort_by(key)
        listing = self._store.state.listing
        if listing is None:
            return None
        resorted = replace(
            listing,
            sort_by=key,
            entries=tuple(sort_entries(listing.entries, key)),
        )
        self._store.set_listing(resorted)
        return resorted

    async def measure_directory_size(self) -> OperationResult:
        listing = self._store.state.listing
        if listing is None:
            return OperationResult.invalid("no_listing", "Nothing is listed yet")
        try:
            size = await self._gateway.directory_size(listing.directory)
        except Exception as exc:
            log_event(
                logger,
                "listing.size_failed",
                level=logging.WARNING,
                directory=listing.directory,
                error=str(exc),
            )
            return OperationResult.from_error(exc)

        current = self._store.state.listing
        if current is None or current.token != listing.token:
            return OperationResult.stale()
        self._store.set_listing(replace(current, total_size=size))
        return OperationResult.success(size)
