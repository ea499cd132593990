from __future__ import annotations

from typing import Literal

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.events import Click
from textual.screen import ModalScreen
from textual.widgets import Button, Label

from burrow.domain.entries import FileEntry

MenuAction = Literal["copy", "paste", "rename", "delete"]

MENU_ACTIONS: tuple[tuple[MenuAction, str], ...] = (
    ("copy", "Copy"),
    ("paste", "Paste"),
    ("rename", "Rename"),
    ("delete", "Delete"),
)


class ContextMenuScreen(ModalScreen["MenuAction | None"]):
    """Action menu for one entry; dismisses with the chosen action or ``None``."""

    BINDINGS = [
        Binding("escape", "cancel", "Close menu", show=True),
        Binding("c", "choose('copy')", "Copy", show=False),
        Binding("v", "choose('paste')", "Paste", show=False),
        Binding("r", "choose('rename')", "Rename", show=False),
        Binding("d", "choose('delete')", "Delete", show=False),
    ]

    def __init__(self, entry: FileEntry, *, can_paste: bool) -> None:
        super().__init__()
        self.entry = entry
        self._can_paste = can_paste

    def compose(self) -> ComposeResult:
        with Vertical(id="context_menu"):
            yield Label(self.entry.name, id="context_menu_title")
            for action, label in MENU_ACTIONS:
                button = Button(label, id=f"menu_{action}")
                if action == "paste" and not self._can_paste:
                    button.disabled = True
                yield button
            yield Button("Cancel", id="menu_cancel")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        button_id = event.button.id or ""
        action = button_id.removeprefix("menu_")
        if action in {name for name, _ in MENU_ACTIONS}:
            self.dismiss(action)  # type: ignore[arg-type]
        else:
            self.dismiss(None)

    def on_click(self, event: Click) -> None:
        if event.widget is self:
            self.dismiss(None)

    def action_choose(self, action: str) -> None:
        if action == "paste" and not self._can_paste:
            return
        self.dismiss(action)  # type: ignore[arg-type]

    def action_cancel(self) -> None:
        self.dismiss(None)
