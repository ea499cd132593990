from __future__ import annotations

import subprocess
import sys
from pathlib import Path

from rich.markup import escape
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Vertical, VerticalScroll
from textual.screen import ModalScreen
from textual.widgets import Footer, Label, Static

from burrow.core.resources import TransientResource
from burrow.core.state import PreviewState, SessionState, SessionStateStore
from burrow.domain.preview import UNSUPPORTED_MESSAGE, PreviewKind
from burrow.services.formatting import format_bytes
from burrow.services.pdf_info import summarize_pdf


def describe_preview(preview: PreviewState | None) -> str:
    """Markup shown in the preview body for the given state."""
    if preview is None:
        return ""
    if preview.loading:
        return "[dim]Loading...[/dim]"
    if preview.error:
        return f"[$error]Could not load preview:[/] {escape(preview.error)}"
    if preview.kind is PreviewKind.UNSUPPORTED:
        return UNSUPPORTED_MESSAGE

    content = preview.content
    if isinstance(content, str):
        return escape(content)
    if not isinstance(content, TransientResource):
        return ""

    lines = [
        f"[bold]Type:[/bold] {content.mime_type}",
        f"[bold]Size:[/bold] {format_bytes(content.size)}",
        f"[bold]Location:[/bold] {escape(content.uri)}",
    ]
    if preview.kind is PreviewKind.PDF:
        for label, value in summarize_pdf(content.read_bytes()).items():
            if label == "Excerpt":
                lines.append(f"\n{escape(value)}")
            else:
                lines.append(f"[bold]{label}:[/bold] {escape(value)}")
    lines.append("\n[dim]Press o to open in the system viewer.[/dim]")
    return "\n".join(lines)


class PreviewScreen(ModalScreen[None]):
    """Shows the session's open preview until dismissed."""

    BINDINGS = [
        Binding("escape,q", "close", "Close preview", show=True),
        Binding("o", "open_external", "Open externally", show=True),
        Binding("j,down", "scroll_down", "Scroll down", show=False),
        Binding("k,up", "scroll_up", "Scroll up", show=False),
    ]

    def __init__(self, *, state_store: SessionStateStore) -> None:
        super().__init__()
        self._state_store = state_store
        self._state_subscription = self._handle_state_update
        self._shown: PreviewState | None = None

    def compose(self) -> ComposeResult:
        yield Vertical(
            Label("", id="preview_title"),
            VerticalScroll(Static("", id="preview_body"), id="preview_scroll"),
            Footer(id="preview_footer"),
            id="preview_modal",
        )

    def on_mount(self) -> None:
        self._state_store.subscribe(self._state_subscription)
        self.query_one("#preview_scroll", VerticalScroll).focus()

    def on_unmount(self) -> None:
        self._state_store.unsubscribe(self._state_subscription)

    def _handle_state_update(self, state: SessionState) -> None:
        preview = state.preview
        if preview is self._shown:
            return
        self._shown = preview
        title = escape(preview.entry.name) if preview else ""
        self.query_one("#preview_title", Label).update(f"[bold]{title}[/bold]")
        self.query_one("#preview_body", Static).update(describe_preview(preview))

    def action_close(self) -> None:
        self.dismiss(None)

    def action_open_external(self) -> None:
        preview = self._shown
        if preview is None or not isinstance(preview.content, TransientResource):
            return
        try:
            _open_with_default_app(preview.content.path)
        except OSError as exc:
            self.app.notify(f"Could not open viewer: {exc}", severity="error")

    def action_scroll_down(self) -> None:
        self.query_one("#preview_scroll", VerticalScroll).scroll_down()

    def action_scroll_up(self) -> None:
        self.query_one("#preview_scroll", VerticalScroll).scroll_up()


def _open_with_default_app(path: Path) -> None:
    if sys.platform == "darwin":
        subprocess.Popen(["open", str(path)])
    elif sys.platform == "win32":
        subprocess.Popen(["cmd", "/c", "start", "", str(path)])
    else:
        subprocess.Popen(["xdg-open", str(path)])
