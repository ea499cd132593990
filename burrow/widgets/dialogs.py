from __future__ import annotations

from rich.markup import escape
from textual import on
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Container, Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, Input, Label

from burrow.domain.entries import FileEntry


def rename_problem(entry: FileEntry, value: str) -> str | None:
    """Inline hint for a proposed name, or ``None`` when it can be submitted."""
    if not value.strip():
        return "Enter a name."
    if "/" in value or "\\" in value:
        return "Names cannot contain path separators."
    if value == entry.name:
        return "The name is unchanged."
    return None


class DeleteDialog(ModalScreen[bool]):
    """Asks before an entry is removed; folders are removed with their contents."""

    BINDINGS = [
        Binding("escape,n", "answer(False)", "Keep", show=False),
        Binding("y", "answer(True)", "Delete", show=False),
    ]

    def __init__(self, entry: FileEntry) -> None:
        super().__init__()
        self.entry = entry

    def compose(self) -> ComposeResult:
        kind = "folder and everything in it" if self.entry.is_dir else "file"
        yield Container(
            Label(f"Delete this {kind}?", id="dialog_message"),
            Label(f"[dim]{escape(self.entry.path)}[/dim]", id="dialog_detail"),
            Horizontal(
                Button("Delete", id="delete", variant="error"),
                Button("Keep", id="keep"),
                classes="dialog_buttons",
            ),
            id="dialog_container",
        )

    def on_mount(self) -> None:
        self.query_one("#keep", Button).focus()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        self.dismiss(event.button.id == "delete")

    def action_answer(self, confirmed: bool) -> None:
        self.dismiss(confirmed)


class RenameDialog(ModalScreen["str | None"]):
    """Collects a new name for one entry. Dismisses with ``None`` on cancel."""

    BINDINGS = [Binding("escape", "cancel", "Cancel", show=False)]

    def __init__(self, entry: FileEntry) -> None:
        super().__init__()
        self.entry = entry

    def compose(self) -> ComposeResult:
        yield Vertical(
            Label(f"Rename [b]{escape(self.entry.name)}[/b]", id="dialog_message"),
            Container(
                Input(value=self.entry.name, id="rename_input"),
                Label("", id="rename_hint"),
                id="input_container",
            ),
            Horizontal(
                Button("Rename", id="rename", variant="primary", disabled=True),
                Button("Cancel", id="cancel"),
                classes="dialog_buttons",
            ),
            id="dialog_container",
        )

    def on_mount(self) -> None:
        self.query_one("#rename_input", Input).focus()

    @on(Input.Changed, "#rename_input")
    def _on_name_changed(self, event: Input.Changed) -> None:
        problem = rename_problem(self.entry, event.value)
        self.query_one("#rename_hint", Label).update(f"[dim]{problem or ''}[/dim]")
        self.query_one("#rename", Button).disabled = problem is not None

    @on(Input.Submitted, "#rename_input")
    def _on_name_submitted(self, event: Input.Submitted) -> None:
        if rename_problem(self.entry, event.value) is None:
            self.dismiss(event.value)

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "rename":
            self.dismiss(self.query_one("#rename_input", Input).value)
        else:
            self.dismiss(None)

    def action_cancel(self) -> None:
        self.dismiss(None)
