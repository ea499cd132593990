from __future__ import annotations

from rich.text import Text
from textual import on
from textual.binding import Binding
from textual.events import Key, MouseDown
from textual.widgets import OptionList
from textual.widgets.option_list import Option

from burrow.core.messages import ActivateEntryRequest, ContextMenuRequest
from burrow.core.state import ListingResult, SessionState, SessionStateStore
from burrow.domain.entries import FileEntry
from burrow.services.formatting import format_bytes, format_timestamp

NAME_WIDTH = 48
SIZE_WIDTH = 12


def _truncate(value: str, width: int) -> str:
    if len(value) <= width:
        return value
    if width <= 3:
        return value[:width]
    return f"{value[: width - 3]}..."


def render_entry_row(entry: FileEntry) -> Text:
    name = f"{entry.name}/" if entry.is_dir else entry.name
    size = "" if entry.is_dir else format_bytes(entry.size)
    text = Text()
    text.append(_truncate(name, NAME_WIDTH).ljust(NAME_WIDTH), style="bold" if entry.is_dir else "")
    text.append(" ")
    text.append(size.rjust(SIZE_WIDTH))
    text.append("  ")
    text.append(format_timestamp(entry.created), style="dim")
    return text


class FileList(OptionList):
    """Rows of the current listing. Right-click or ``m`` opens the entry menu."""

    BINDINGS = [
        Binding("m", "open_menu", "Menu", show=True, tooltip="Actions for the highlighted entry"),
        Binding("j", "cursor_down", "Cursor down", show=False),
        Binding("k", "cursor_up", "Cursor up", show=False),
    ]

    def __init__(self, *, state_store: SessionStateStore, id: str | None = None) -> None:
        super().__init__(id=id)
        self._state_store = state_store
        self._state_subscription = self._handle_state_update
        self._listing: ListingResult | None = None
        self._entries: tuple[FileEntry, ...] = ()
        self._menu_click = False

    def on_mount(self) -> None:
        self._state_store.subscribe(self._state_subscription)

    def on_unmount(self) -> None:
        self._state_store.unsubscribe(self._state_subscription)

    def _handle_state_update(self, state: SessionState) -> None:
        listing = state.listing
        if listing is self._listing:
            return
        self._listing = listing
        self._show_listing(listing)

    def _show_listing(self, listing: ListingResult | None) -> None:
        previous = self._entry_at(self.highlighted)
        self._entries = listing.entries if listing else ()
        with self.app.batch_update():
            self.clear_options()
            if not self._entries:
                self.add_option(Option("No files in this directory.", disabled=True))
                return
            self.add_options(
                [Option(render_entry_row(entry), id=entry.path) for entry in self._entries]
            )
            paths = [entry.path for entry in self._entries]
            if previous is not None and previous.path in paths:
                self.highlighted = paths.index(previous.path)
            else:
                self.highlighted = 0

    def _entry_at(self, index: int | None) -> FileEntry | None:
        if index is None or not 0 <= index < len(self._entries):
            return None
        return self._entries[index]

    @on(OptionList.OptionSelected)
    def _on_option_selected(self, event: OptionList.OptionSelected) -> None:
        if event.option_list is not self:
            return
        event.stop()
        entry = self._entry_at(event.option_index)
        menu_click, self._menu_click = self._menu_click, False
        if entry is None:
            return
        if menu_click:
            self.post_message(ContextMenuRequest(entry))
        else:
            self.post_message(ActivateEntryRequest(entry))

    def on_mouse_down(self, event: MouseDown) -> None:
        self._menu_click = event.button == 3

    def on_key(self, _event: Key) -> None:
        self._menu_click = False

    def action_open_menu(self) -> None:
        entry = self._entry_at(self.highlighted)
        if entry is not None:
            self.post_message(ContextMenuRequest(entry))
