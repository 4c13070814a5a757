"""Main Textual TUI application.

Hosts a SessionController: feeds it terminal, timer and stream events and
carries out the commands it returns. All conversation behaviour lives in
the controller; this module only owns the side effects.
"""

import asyncio

import pyperclip
from textual import work
from textual.app import App, ComposeResult
from textual.binding import Binding

from ..errors import ClipboardError
from ..llm.registry import ProviderRegistry
from ..session import (
    ChunkReceived,
    CloseStream,
    Command,
    CopyToClipboard,
    Event,
    KeyPressed,
    Quit,
    ReceiveNext,
    SessionController,
    StreamHandle,
    Tick,
)
from .config import CURSOR_BLINK_INTERVAL, NOTIFY_TIMEOUT, LogLevel
from .styles import APP_CSS
from .themes import CHAIT_DARK
from .widgets import ConversationView, DebugPanel


def copy_to_system_clipboard(text: str) -> None:
    """Write text to the OS clipboard.

    Raises:
        ClipboardError: If no clipboard mechanism is available
    """
    try:
        pyperclip.copy(text)
    except pyperclip.PyperclipException as e:
        raise ClipboardError(str(e)) from e


class ChaitApp(App):
    """Textual host for an interactive chat session."""

    CSS = APP_CSS
    TITLE = "chait"
    ENABLE_COMMAND_PALETTE = False

    # Priority bindings so the keys reach the session instead of Textual's defaults
    BINDINGS = [
        Binding("ctrl+c", "session_key('ctrl+c')", "Cancel/Quit", show=False, priority=True),
        Binding("escape", "session_key('escape')", "Cancel", show=False, priority=True),
        Binding("ctrl+p", "session_key('ctrl+p')", "Provider", show=False, priority=True),
        Binding("ctrl+d", "toggle_debug", "Log", show=False, priority=True),
    ]

    def __init__(
        self,
        registry: ProviderRegistry,
        initial_input: str = "",
        log_level: str | None = None,
    ) -> None:
        super().__init__()
        self.provider_registry = registry
        self._initial_input = initial_input
        self._log_level = log_level
        self._debug_panel: DebugPanel | None = None
        self.controller = SessionController(registry, debug_callback=self._route_debug)

    def compose(self) -> ComposeResult:
        yield ConversationView(self.controller, self.handle_session_event, id="conversation")
        yield DebugPanel(id="debug-panel")

    def on_mount(self) -> None:
        """Called when app is mounted."""
        self.register_theme(CHAIT_DARK)
        self.theme = "chait-dark"

        self._debug_panel = self.query_one("#debug-panel", DebugPanel)
        self.provider_registry.set_debug_callback(self._route_debug)

        if self._log_level is not None:
            self._debug_panel.threshold = LogLevel.from_string(self._log_level)
            self._debug_panel.show()
            self._debug_panel.route("info", "TUI", f"Log panel enabled with level: {self._log_level.upper()}")

        view = self.query_one("#conversation", ConversationView)
        view.focus()
        self.controller.width = view.size.width or self.controller.width
        self.controller.height = view.size.height or self.controller.height

        self.set_interval(CURSOR_BLINK_INTERVAL, self._blink)
        self._run_commands(self.controller.start(self._initial_input))

    async def on_unmount(self) -> None:
        """Close the in-flight stream, if any."""
        handle = self.controller.stream
        if handle is not None:
            await handle.aclose()

    def handle_session_event(self, event: Event) -> None:
        """Apply a session event, run its commands and redraw."""
        self._run_commands(self.controller.handle(event))

    def _run_commands(self, commands: list[Command]) -> None:
        for command in commands:
            if isinstance(command, ReceiveNext):
                self._receive(command.handle)
            elif isinstance(command, CloseStream):
                self._close_stream(command.handle)
            elif isinstance(command, CopyToClipboard):
                self._copy(command.text)
            elif isinstance(command, Quit):
                self.exit()
        self.query_one("#conversation", ConversationView).refresh()

    @work(group="stream")
    async def _receive(self, handle: StreamHandle) -> None:
        """Await one chunk and feed it back to the controller."""
        chunk = await handle.receive()
        self.handle_session_event(ChunkReceived(handle, chunk))

    @work(group="stream-close")
    async def _close_stream(self, handle: StreamHandle) -> None:
        try:
            await handle.aclose()
        except Exception as e:
            self._route_debug("warning", "Stream", f"Closing {handle!r} failed: {e}")
        else:
            self._route_debug("debug", "Stream", f"Closed {handle!r}")

    def _copy(self, text: str) -> None:
        """Copy to the system clipboard, falling back to the terminal (OSC 52)."""
        try:
            copy_to_system_clipboard(text)
            self.notify("Copied to clipboard", timeout=NOTIFY_TIMEOUT)
        except ClipboardError as e:
            self._route_debug("warning", "TUI", f"System clipboard unavailable: {e}")
            self.copy_to_clipboard(text)
            self.notify("Copied (terminal)", timeout=NOTIFY_TIMEOUT)

    def _blink(self) -> None:
        self.handle_session_event(Tick())

    def _route_debug(self, level: str, component: str, message: str) -> None:
        """Route debug messages to the log panel."""
        if self._debug_panel is not None:
            self._debug_panel.route(level, component, message)

    def action_session_key(self, key: str) -> None:
        """Forward a key claimed by a priority binding to the session."""
        self.handle_session_event(KeyPressed(key))

    def action_toggle_debug(self) -> None:
        """Toggle the log panel visibility."""
        if self._debug_panel is None:
            return
        is_visible = self._debug_panel.toggle()
        self.notify(f"Log panel {'shown' if is_visible else 'hidden'}", timeout=NOTIFY_TIMEOUT)


async def run_tui(
    registry: ProviderRegistry,
    initial_input: str = "",
    log_level: str | None = None,
) -> None:
    """Run the interactive TUI.

    Args:
        registry: Providers, with the active one selected
        initial_input: Message to send as the first turn, if any
        log_level: Log level for panel (debug/info/warning/error), None to hide
    """
    app = ChaitApp(registry, initial_input=initial_input, log_level=log_level)
    try:
        await app.run_async()
    except (KeyboardInterrupt, asyncio.CancelledError):
        pass
