"""Settings panel: binary path, keybindings and account buttons.

Thin composition layer over SettingsStore and BinaryValidator. Every edit
goes through ``store.update()``; the path and the enabled switch save (and
notify observers) immediately, keybindings wait for "Save keybindings".
"""

from __future__ import annotations

from collections.abc import Callable

from textual import on, work
from textual.app import ComposeResult
from textual.containers import Horizontal, VerticalScroll
from textual.widgets import Button, Input, Label, Static, Switch

from copilot_settings.client import AssistantClient
from copilot_settings.config import DEFAULT_SETTINGS, REQUIRED_MAJOR_VERSION
from copilot_settings.errors import PersistenceError
from copilot_settings.store import SettingsStore
from copilot_settings.validator import BinaryValidator
from copilot_settings.widgets import AuthScreen, KeybindingInput

_HOTKEYS = (
    ("accept", "Accept suggestion", "Keybinding to accept suggestions."),
    ("cancel", "Cancel suggestion", "Keybinding to cancel suggestions."),
)


class SettingsPanel(VerticalScroll):
    """All user-editable settings in one scrollable column."""

    DEFAULT_CSS = """
    SettingsPanel {
        padding: 1 2;
    }
    SettingsPanel Horizontal {
        height: auto;
        margin: 0 0 1 0;
    }
    SettingsPanel #binary-path {
        width: 1fr;
    }
    SettingsPanel .section-title {
        text-style: bold;
        margin: 1 0 0 0;
    }
    SettingsPanel .note {
        color: $text-muted;
        margin: 0 0 1 0;
    }
    """

    def __init__(
        self,
        store: SettingsStore,
        validator: BinaryValidator,
        client: AssistantClient | None = None,
        on_keybindings_saved: Callable[[], None] | None = None,
        **kwargs,
    ) -> None:
        super().__init__(**kwargs)
        self.store = store
        self.validator = validator
        self.client = client
        self._on_keybindings_saved = on_keybindings_saved

    def compose(self) -> ComposeResult:
        settings = self.store.settings

        with Horizontal():
            yield Label("Enable suggestions ")
            yield Switch(value=settings.enabled, id="enabled")

        yield Static("Binary path", classes="section-title")
        yield Static(
            f"The path to your node binary (at least v{REQUIRED_MAJOR_VERSION}). "
            "This is used to run the assistant server.",
            classes="note",
        )
        with Horizontal():
            yield Input(
                value=settings.binary_path,
                placeholder="Enter the path to your node binary.",
                id="binary-path",
            )
            yield Button("Test the path", id="test-path")

        yield Static("Keybindings", classes="section-title")
        yield Static(
            "Be aware that not all keybindings will work as some are "
            "already defined and used by other plugins.",
            classes="note",
        )
        for hotkey, title, description in _HOTKEYS:
            yield KeybindingInput(
                hotkey,
                title,
                description,
                value=getattr(settings.hotkeys, hotkey),
                default=getattr(DEFAULT_SETTINGS.hotkeys, hotkey),
            )
        yield Button("Save keybindings", id="save-keybindings", variant="primary")

        yield Static("Account", classes="section-title")
        with Horizontal():
            yield Button("Restart sign-in process", id="sign-in", disabled=self.client is None)
            yield Button("Sign out", id="sign-out", variant="error", disabled=self.client is None)

    async def save(self, notify: bool = True) -> bool:
        """Save and report failures as a notification. Returns True on success."""
        try:
            await self.store.save(notify)
        except PersistenceError as exc:
            self.app.notify(f"Could not save settings: {exc}", severity="error")
            return False
        return True

    @on(Switch.Changed, "#enabled")
    async def _enabled_changed(self, event: Switch.Changed) -> None:
        if event.value == self.store.settings.enabled:
            return
        self.store.update(enabled=event.value)
        await self.save()

    @on(Input.Changed, "#binary-path")
    async def _binary_path_changed(self, event: Input.Changed) -> None:
        if event.value == self.store.settings.binary_path:
            return
        self.store.update(binary_path=event.value)
        await self.save()

    def on_keybinding_input_changed(self, event: KeybindingInput.Changed) -> None:
        self.store.update(hotkeys={event.hotkey: event.value})

    @on(Button.Pressed, "#save-keybindings")
    async def _save_keybindings(self) -> None:
        if await self.save() and self._on_keybindings_saved is not None:
            self._on_keybindings_saved()

    @on(Button.Pressed, "#test-path")
    def _test_path_pressed(self) -> None:
        self.test_path()

    @work(exclusive=True, group="test-path")
    async def test_path(self) -> None:
        """Background worker: validate the configured binary and show the result."""
        message = await self.validator.describe(self.store.settings.binary_path)
        self.app.notify(message)

    @on(Button.Pressed, "#sign-in")
    async def _sign_in(self) -> None:
        if self.client is None:
            return
        try:
            result = await self.client.initiate_sign_in()
        except Exception as exc:
            self.app.notify(f"Sign-in failed: {exc}", severity="error")
            return
        if result.already_signed_in:
            self.app.notify("You are already signed in.")
        else:
            self.app.push_screen(AuthScreen(result.user_code or "", result.verification_uri or ""))

    @on(Button.Pressed, "#sign-out")
    async def _sign_out(self) -> None:
        if self.client is None:
            return
        try:
            await self.client.sign_out()
        except Exception as exc:
            self.app.notify(f"Sign-out failed: {exc}", severity="error")
            return
        self.app.notify("Signed out successfully.")
