from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Callable

from burrow.core.errors import BurrowError
from burrow.core.history import HistoryState
from burrow.core.resources import TransientResource
from burrow.domain.entries import DEFAULT_SORT, FileEntry, SortKey
from burrow.domain.preview import PreviewKind


@dataclass(frozen=True, slots=True)
class ListingResult:
    directory: str
    query: str
    sort_by: SortKey
    entries: tuple[FileEntry, ...]
    total_files: int
    total_folders: int
    total_size: int | None = None
    query_time_ms: float = 0.0
    token: int = 0

    def to_json(self) -> dict[str, object]:
        return {
            "directory": self.directory,
            "query": self.query,
            "sort_by": self.sort_by,
            "entries": [entry.to_json() for entry in self.entries],
            "total_files": self.total_files,
            "total_folders": self.total_folders,
            "total_size": self.total_size,
            "query_time_ms": self.query_time_ms,
        }


@dataclass(frozen=True, slots=True)
class ContextMenuState:
    visible: bool = False
    target: FileEntry | None = None


@dataclass(frozen=True, slots=True)
class AutocompleteState:
    partial: str = ""
    suggestions: tuple[str, ...] = ()
    selected: int = -1


@dataclass(frozen=True, slots=True)
class PreviewState:
    entry: FileEntry
    kind: PreviewKind
    content: str | TransientResource | None = None
    loading: bool = False
    error: str | None = None

    def to_json(self) -> dict[str, object]:
        if isinstance(self.content, TransientResource):
            content: object = self.content.to_json()
        elif isinstance(self.content, str):
            content = {"text_length": len(self.content)}
        else:
            content = None
        return {
            "entry": self.entry.to_json(),
            "kind": self.kind.value,
            "content": content,
            "loading": self.loading,
            "error": self.error,
        }


@dataclass(frozen=True, slots=True)
class SessionState:
    directory: str = ""
    search_query: str = ""
    sort_by: SortKey = DEFAULT_SORT
    history: HistoryState = field(default_factory=HistoryState)
    listing: ListingResult | None = None
    clipboard: str | None = None
    context_menu: ContextMenuState = field(default_factory=ContextMenuState)
    autocomplete: AutocompleteState = field(default_factory=AutocompleteState)
    preview: PreviewState | None = None
    last_error: BurrowError | None = None

    def to_json(self) -> dict[str, object]:
        target = self.context_menu.target
        return {
            "directory": self.directory,
            "search_query": self.search_query,
            "sort_by": self.sort_by,
            "history": {
                "entries": list(self.history.entries),
                "index": self.history.index,
            },
            "listing": self.listing.to_json() if self.listing else None,
            "clipboard": self.clipboard,
            "context_menu": {
                "visible": self.context_menu.visible,
                "target": target.to_json() if target else None,
            },
            "autocomplete": {
                "partial": self.autocomplete.partial,
                "suggestions": list(self.autocomplete.suggestions),
                "selected": self.autocomplete.selected,
            },
            "preview": self.preview.to_json() if self.preview else None,
            "last_error": str(self.last_error) if self.last_error else None,
        }


class SessionStateStore:
    def __init__(self, initial: SessionState | None = None) -> None:
        self._state = initial or SessionState()
        self._listeners: set[Callable[[SessionState], None]] = set()

    @property
    def state(self) -> SessionState:
        return self._state

    def subscribe(self, callback: Callable[[SessionState], None]) -> None:
        self._listeners.add(callback)
        callback(self._state)

    def unsubscribe(self, callback: Callable[[SessionState], None]) -> None:
        self._listeners.discard(callback)

    def set_directory(self, value: str) -> None:
        self._update_state(directory=value)

    def set_search_query(self, value: str) -> None:
        self._update_state(search_query=value)

    def set_sort_by(self, value: SortKey) -> None:
        self._update_state(sort_by=value)

    def set_history(self, value: HistoryState) -> None:
        self._update_state(history=value)

    def set_listing(self, value: ListingResult | None) -> None:
        self._update_state(listing=value)

    def set_clipboard(self, value: str | None) -> None:
        self._update_state(clipboard=value)

    def set_context_menu(self, value: ContextMenuState) -> None:
        self._update_state(context_menu=value)

    def set_autocomplete(self, value: AutocompleteState) -> None:
        self._update_state(autocomplete=value)

    def update_autocomplete(self, **changes: object) -> None:
        self._update_state(autocomplete=replace(self._state.autocomplete, **changes))

    def set_preview(self, value: PreviewState | None) -> None:
        self._update_state(preview=value)

    def set_last_error(self, value: BurrowError | None) -> None:
        self._update_state(last_error=value)

    def _update_state(self, **changes: object) -> None:
        new_state = replace(self._state, **changes)
        if new_state == self._state:
            return
        self._state = new_state
        for callback in list(self._listeners):
            callback(self._state)
