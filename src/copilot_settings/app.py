"""Textual TUI app hosting the settings panel."""

from __future__ import annotations

from collections.abc import Callable
from typing import ClassVar

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.widgets import Footer, Header

from copilot_settings.client import AssistantClient
from copilot_settings.errors import PersistenceError
from copilot_settings.panel import SettingsPanel
from copilot_settings.store import SettingsStore
from copilot_settings.validator import BinaryValidator


class SettingsApp(App):
    """Standalone host for the completion assistant settings."""

    TITLE = "Copilot settings"
    SUB_TITLE = "completion assistant"

    BINDINGS: ClassVar[list[Binding]] = [
        Binding("ctrl+s", "save", "Save"),
        Binding("ctrl+t", "test_path", "Test path"),
        Binding("ctrl+q", "quit", "Quit"),
    ]

    def __init__(
        self,
        store: SettingsStore,
        validator: BinaryValidator | None = None,
        client: AssistantClient | None = None,
        on_keybindings_saved: Callable[[], None] | None = None,
    ) -> None:
        super().__init__()
        self.store = store
        self.validator = validator or BinaryValidator()
        self.client = client
        self._on_keybindings_saved = on_keybindings_saved

    def compose(self) -> ComposeResult:
        yield Header()
        yield Vertical(id="main")
        yield Footer()

    async def on_mount(self) -> None:
        try:
            await self.store.load()
        except PersistenceError as exc:
            self.notify(f"Could not load settings, using defaults: {exc}", severity="error")
        panel = SettingsPanel(
            self.store,
            self.validator,
            client=self.client,
            on_keybindings_saved=self._on_keybindings_saved,
            id="settings",
        )
        await self.query_one("#main", Vertical).mount(panel)

    async def action_save(self) -> None:
        if await self.query_one("#settings", SettingsPanel).save():
            self.notify("Settings saved.")

    def action_test_path(self) -> None:
        self.query_one("#settings", SettingsPanel).test_path()
