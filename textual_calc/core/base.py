"""Base classes and utilities for the calculator front ends."""

from datetime import datetime
from typing import Any, ClassVar

from pydantic import BaseModel
from textual import events, on
from textual.app import App, ComposeResult
from textual.containers import Container
from textual.css.query import NoMatches
from textual.reactive import var
from textual.widgets import Button, Footer, Header, Static

from .engine import ERROR_MARKER, CalculatorEngine, EnginePhase, Operator, Token, TokenKind
from .keypad import ASCII_GLYPHS, UnknownSymbolError, button_id, describe_pending, token_for_symbol


class AppConfig(BaseModel):
    """Configuration for a calculator application."""
    name: str
    description: str
    version: str = "1.0.0"
    author: str = "Textual-Calc"
    tags: list[str] = []


class AppStatus(BaseModel):
    """Status information for a calculator application."""
    app_id: str
    name: str
    pid: int | None = None
    status: str = "stopped"  # stopped, running, error
    start_time: str | None = None
    error_message: str | None = None


class StatusWidget(Static):
    """Standard status widget for applications."""

    def __init__(self, initial_status: str = "Ready", **kwargs):
        super().__init__(initial_status, **kwargs)
        self.add_class("status-widget")

    def update_status(self, status: str, status_type: str = "info") -> None:
        """Update status with styling based on type."""
        self.update(status)
        self.remove_class("status-info", "status-warning", "status-error", "status-success")
        self.add_class(f"status-{status_type}")


_KEY_CLASSES = {
    TokenKind.DIGIT: "key number",
    TokenKind.DECIMAL: "key point",
    TokenKind.OPERATOR: "key operator",
    TokenKind.EQUALS: "key equals",
    TokenKind.CLEAR: "key clear",
}


class BaseCalculatorApp(App):
    """Textual calculator that forwards keypad presses to a shared engine.

    Skins only provide metadata, CSS and the keypad layout; all input handling
    lives here and all arithmetic lives in ``CalculatorEngine``.
    """

    APP_CONFIG: ClassVar[AppConfig]
    # Rows of button labels. Every label must be known to ``token_for_symbol``.
    KEYPAD: ClassVar[list[list[str]]] = []
    OPERATOR_GLYPHS: ClassVar[dict[Operator, str]] = ASCII_GLYPHS

    AUTO_FOCUS = None
    BINDINGS = [
        ("q", "quit", "Quit"),
        ("ctrl+c", "quit", "Quit"),
    ]

    numbers = var("0")

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.app_id: str | None = None
        self.engine = CalculatorEngine()
        self.output_buffer: list[str] = []
        self._key_tokens: dict[str, Token] = {}
        self._creation_time = datetime.now().isoformat()

    @classmethod
    def get_config(cls) -> AppConfig:
        """Get application configuration."""
        return cls.APP_CONFIG

    def set_app_id(self, app_id: str) -> None:
        """Set the application ID."""
        self.app_id = app_id

    def compose(self) -> ComposeResult:
        """Display, pending-operation line and the skin's keypad."""
        yield Header()
        with Container(id="calculator"):
            yield Static(self.numbers, id="display")
            yield StatusWidget("", id="pending")
            for row in self.KEYPAD:
                for label in row:
                    token = token_for_symbol(label)
                    key_id = button_id(token)
                    self._key_tokens[key_id] = token
                    yield Button(label, id=key_id, classes=_KEY_CLASSES[token.kind])
        yield Footer()

    def watch_numbers(self, value: str) -> None:
        """Update the display when the engine output changes."""
        try:
            display = self.query_one("#display", Static)
        except NoMatches:
            # Widget not yet mounted during initialization
            return
        display.update(value)
        display.set_class(value == ERROR_MARKER, "error")

    @on(Button.Pressed, ".key")
    def key_pressed(self, event: Button.Pressed) -> None:
        """Pressed a keypad button."""
        assert event.button.id is not None
        self.press(self._key_tokens[event.button.id])

    def on_key(self, event: events.Key) -> None:
        """Map the physical keyboard onto keypad buttons."""
        def press(key_id: str) -> None:
            """Press a button, should it exist."""
            try:
                self.query_one(f"#{key_id}", Button).press()
            except NoMatches:
                pass

        if event.key == "enter":
            press("equals")
        elif event.key == "escape":
            press("clear")
        elif event.character:
            try:
                token = token_for_symbol(event.character)
            except UnknownSymbolError:
                return
            press(button_id(token))

    def press(self, token: Token) -> str:
        """Send one token to the engine and refresh the screen."""
        before = self.engine.display
        self.numbers = self.engine.handle(token)
        try:
            pending = self.query_one("#pending", StatusWidget)
        except NoMatches:
            pending = None
        if pending is not None:
            if self.engine.phase is EnginePhase.ERROR_SHOWN:
                pending.update_status("Clear to continue", "error")
            else:
                pending.update_status(describe_pending(self.engine.state, self.OPERATOR_GLYPHS))
        self._log_output(f"[{datetime.now().isoformat()}] {token.symbol}: {before} -> {self.numbers}")
        return self.numbers

    def get_status(self) -> AppStatus:
        """Get current application status."""
        error = self.engine.phase is EnginePhase.ERROR_SHOWN
        return AppStatus(
            app_id=self.app_id or "unknown",
            name=self.APP_CONFIG.name,
            pid=None,
            status="running" if self.is_running else "stopped",
            start_time=self._creation_time,
            error_message="Calculator is showing an error" if error else None
        )

    def get_app_specific_state(self) -> dict[str, Any]:
        """Engine snapshot plus what the screen shows."""
        return {
            "app_name": self.APP_CONFIG.name,
            "engine": self.engine.snapshot(),
            "pending": describe_pending(self.engine.state, self.OPERATOR_GLYPHS),
            "recent_interactions": self.output_buffer[-10:],
        }

    def _log_output(self, message: str) -> None:
        """Add message to output buffer."""
        self.output_buffer.append(message)
        # Keep buffer size manageable
        if len(self.output_buffer) > 1000:
            self.output_buffer = self.output_buffer[-500:]


class AppRegistry:
    """Registry for managing available applications."""

    _apps: dict[str, type] = {}

    @classmethod
    def register(cls, app_class: type) -> None:
        """Register an application class."""
        config = app_class.get_config()
        cls._apps[config.name] = app_class

    @classmethod
    def get_app_class(cls, name: str) -> type | None:
        """Get application class by name."""
        return cls._apps.get(name)

    @classmethod
    def list_apps(cls) -> list[AppConfig]:
        """List all registered applications."""
        return [app_class.get_config() for app_class in cls._apps.values()]


def register_app(app_class: type):
    """Decorator to register an application."""
    AppRegistry.register(app_class)
    return app_class
