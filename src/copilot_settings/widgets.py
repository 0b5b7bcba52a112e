"""Custom Textual widgets for the settings panel."""

from __future__ import annotations

from typing import ClassVar

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.message import Message
from textual.screen import ModalScreen
from textual.widgets import Button, Input, Label, Static


class KeybindingInput(Vertical):
    """Title, description, key input and a reset-to-default button for one hotkey."""

    DEFAULT_CSS = """
    KeybindingInput {
        height: auto;
        margin: 0 0 1 0;
    }
    KeybindingInput .keybinding-description {
        color: $text-muted;
    }
    KeybindingInput Horizontal {
        height: auto;
    }
    KeybindingInput Input {
        width: 1fr;
    }
    """

    class Changed(Message):
        """Posted when the user edits or resets the key."""

        def __init__(self, hotkey: str, value: str) -> None:
            super().__init__()
            self.hotkey = hotkey
            self.value = value

    def __init__(
        self,
        hotkey: str,
        title: str,
        description: str,
        value: str,
        default: str,
        **kwargs,
    ) -> None:
        super().__init__(**kwargs)
        self.hotkey = hotkey
        self.key_title = title
        self.key_description = description
        self.value = value
        self.default = default

    def compose(self) -> ComposeResult:
        yield Label(f"[b]{self.key_title}[/b]")
        yield Static(self.key_description, classes="keybinding-description")
        with Horizontal():
            yield Input(value=self.value, placeholder=self.default, id=f"{self.hotkey}-key")
            yield Button("Reset", id=f"{self.hotkey}-reset")

    def on_input_changed(self, event: Input.Changed) -> None:
        event.stop()
        # empty input is not a key; keep the last one until the user types again
        if event.value and event.value != self.value:
            self.value = event.value
            self.post_message(self.Changed(self.hotkey, event.value))

    def on_button_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        self.query_one(Input).value = self.default


class AuthScreen(ModalScreen[None]):
    """Shows the device code the user enters to finish signing in."""

    BINDINGS: ClassVar[list[Binding]] = [Binding("escape", "dismiss", "Close")]

    DEFAULT_CSS = """
    AuthScreen {
        align: center middle;
    }
    AuthScreen > Vertical {
        width: 60;
        height: auto;
        border: thick $accent;
        background: $surface;
        padding: 1 2;
    }
    AuthScreen #user-code {
        text-style: bold;
        color: $accent;
        margin: 1 0;
    }
    """

    def __init__(self, user_code: str, verification_uri: str) -> None:
        super().__init__()
        self.user_code = user_code
        self.verification_uri = verification_uri

    def compose(self) -> ComposeResult:
        with Vertical():
            yield Label("Sign in to the assistant service")
            yield Static(f"Open {self.verification_uri} and enter this code:")
            yield Static(self.user_code, id="user-code")
            yield Button("Close", id="close", variant="primary")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        self.dismiss()
