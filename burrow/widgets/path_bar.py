from __future__ import annotations

from textual import on
from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical
from textual.events import Click, Key
from textual.widgets import Input, OptionList, Static

from burrow.core.messages import (
    HistoryRequest,
    NavigateRequest,
    PathInputChanged,
    PathKeyRequest,
    SuggestionChosen,
    SuggestionsDismissed,
)
from burrow.core.state import SessionState, SessionStateStore


class PathBar(Vertical):
    """Back/forward controls and the editable directory input with suggestions."""

    SUGGESTION_ROWS = 10

    def __init__(self, *, state_store: SessionStateStore, id: str | None = None) -> None:
        super().__init__(id=id)
        self._state_store = state_store
        self._state_subscription = self._handle_state_update
        self._programmatic_value: str | None = None
        self._input: Input | None = None
        self._suggestions: OptionList | None = None
        self._shown_suggestions: tuple[str, ...] = ()
        self._displayed_directory: str | None = None

    def compose(self) -> ComposeResult:
        with Horizontal(id="path_bar_row"):
            yield Static("←", id="path_bar_back", classes="path_bar_control disabled")
            yield Static("→", id="path_bar_forward", classes="path_bar_control disabled")
            yield Input(placeholder="Enter a directory path", id="path_bar_input")
        suggestions = OptionList(id="path_bar_suggestions")
        suggestions.can_focus = False
        suggestions.display = False
        yield suggestions

    def on_mount(self) -> None:
        self._input = self.query_one("#path_bar_input", Input)
        self._suggestions = self.query_one("#path_bar_suggestions", OptionList)
        self._state_store.subscribe(self._state_subscription)

    def on_unmount(self) -> None:
        self._state_store.unsubscribe(self._state_subscription)

    @on(Input.Changed, "#path_bar_input")
    def _on_input_changed(self, event: Input.Changed) -> None:
        event.stop()
        if event.value == self._programmatic_value:
            self._programmatic_value = None
            return
        self.post_message(PathInputChanged(event.value))

    @on(Input.Submitted, "#path_bar_input")
    def _on_input_submitted(self, event: Input.Submitted) -> None:
        event.stop()
        if self._shown_suggestions:
            self.post_message(PathKeyRequest("enter", event.value))
            return
        value = event.value.strip()
        if value:
            self.post_message(NavigateRequest(value))

    @on(OptionList.OptionSelected, "#path_bar_suggestions")
    def _on_suggestion_selected(self, event: OptionList.OptionSelected) -> None:
        event.stop()
        self.post_message(SuggestionChosen(event.option_index))

    def on_click(self, event: Click) -> None:
        control = event.widget
        if control is None or not control.has_class("path_bar_control"):
            return
        event.stop()
        if control.has_class("disabled"):
            return
        if control.id == "path_bar_back":
            self.post_message(HistoryRequest(-1))
        elif control.id == "path_bar_forward":
            self.post_message(HistoryRequest(1))

    def on_key(self, event: Key) -> None:
        if self.app.focused is not self._input or not self._shown_suggestions:
            return
        if event.key in {"up", "down"}:
            event.stop()
            event.prevent_default()
            value = self._input.value if self._input else ""
            self.post_message(PathKeyRequest(event.key, value))
        elif event.key == "escape":
            event.stop()
            event.prevent_default()
            self.post_message(SuggestionsDismissed())

    def focus_input(self) -> None:
        if self._input is not None:
            self._input.focus()

    def _handle_state_update(self, state: SessionState) -> None:
        displayed = state.listing.directory if state.listing else None
        landed = displayed != self._displayed_directory
        self._displayed_directory = displayed
        if self._input is not None and self._input.value != state.directory:
            # Typing owns the input until a navigation lands.
            if landed or not self._input.has_focus:
                self._set_input_value(state.directory)
        self._render_suggestions(state.autocomplete.suggestions, state.autocomplete.selected)
        self._update_controls(state)

    def _set_input_value(self, value: str) -> None:
        if self._input is None:
            return
        self._programmatic_value = value
        self._input.value = value
        self._input.cursor_position = len(value)

    def _render_suggestions(self, suggestions: tuple[str, ...], selected: int) -> None:
        if self._suggestions is None:
            return
        if suggestions != self._shown_suggestions:
            self._shown_suggestions = suggestions
            self._suggestions.clear_options()
            if suggestions:
                self._suggestions.add_options(list(suggestions))
            self._suggestions.display = bool(suggestions)
            self._suggestions.styles.height = min(self.SUGGESTION_ROWS, len(suggestions)) + 2
        if suggestions:
            self._suggestions.highlighted = selected if selected >= 0 else None

    def _update_controls(self, state: SessionState) -> None:
        back = self.query_one("#path_bar_back", Static)
        forward = self.query_one("#path_bar_forward", Static)
        back.set_class(not state.history.can_go_back, "disabled")
        forward.set_class(not state.history.can_go_forward, "disabled")
