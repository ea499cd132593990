from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from burrow.core.errors import OperationResult
from burrow.core.logging import get_logger, log_event
from burrow.core.state import AutocompleteState, SessionStateStore
from burrow.gateway.protocol import FilesystemGateway

logger = get_logger(__name__)

PATH_SEPARATORS = ("/", os.sep)


@dataclass(frozen=True, slots=True)
class KeyOutcome:
    handled: bool = False
    committed: str | None = None


PASS_THROUGH = KeyOutcome()


class AutocompleteController:
    """Path suggestions for the directory input and keyboard selection over them."""

    def __init__(
        self,
        gateway: FilesystemGateway,
        store: SessionStateStore,
        *,
        limit: int | None = None,
    ) -> None:
        self._gateway = gateway
        self._store = store
        self._limit = limit
        self._token = 0

    @property
    def state(self) -> AutocompleteState:
        return self._store.state.autocomplete

    async def input_changed(self, value: str) -> OperationResult:
        self._token += 1
        token = self._token
        self._store.update_autocomplete(partial=value)
        if value.endswith(PATH_SEPARATORS):
            self._replace_suggestions(())
            return OperationResult.success(())

        try:
            paths = await self._gateway.autocomplete_path(value)
        except Exception as exc:
            if token != self._token:
                return OperationResult.stale()
            log_event(
                logger,
                "autocomplete.failed",
                level=logging.WARNING,
                partial=value,
                error=str(exc),
            )
            return OperationResult.from_error(exc)

        if token != self._token:
            return OperationResult.stale()
        suggestions = tuple(paths)
        if self._limit is not None:
            suggestions = suggestions[: self._limit]
        self._replace_suggestions(suggestions)
        return OperationResult.success(suggestions)

    def key(self, key: str) -> KeyOutcome:
        state = self.state
        count = len(state.suggestions)
        if count == 0:
            return PASS_THROUGH

        if key == "down":
            selected = state.selected + 1 if state.selected < count - 1 else 0
            self._store.update_autocomplete(selected=selected)
            return KeyOutcome(handled=True)
        if key == "up":
            selected = state.selected - 1 if state.selected > 0 else count - 1
            self._store.update_autocomplete(selected=selected)
            return KeyOutcome(handled=True)
        if key == "enter":
            if state.selected == -1:
                return PASS_THROUGH
            return KeyOutcome(handled=True, committed=self._commit(state.selected))
        return PASS_THROUGH

    def click(self, index: int) -> str | None:
        if not 0 <= index < len(self.state.suggestions):
            return None
        return self._commit(index)

    def clear(self) -> None:
        self._token += 1
        self._replace_suggestions(())

    def _commit(self, index: int) -> str:
        path = self.state.suggestions[index]
        self._token += 1
        self._store.set_autocomplete(AutocompleteState(partial=path))
        log_event(logger, "autocomplete.committed", path=path)
        return path

    def _replace_suggestions(self, suggestions: tuple[str, ...]) -> None:
        self._store.update_autocomplete(suggestions=suggestions, selected=-1)
