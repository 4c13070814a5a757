"""Textual widgets for the chat screen.

ConversationView turns terminal input into session events and draws the
controller's frame. DebugPanel shows the session log.
"""

from collections.abc import Callable
from datetime import datetime
from typing import Any

from rich.text import Text
from textual import events
from textual.widget import Widget
from textual.widgets import RichLog

from ..session import (
    Event,
    KeyPressed,
    MouseDragged,
    MousePressed,
    MouseReleased,
    MouseScrolled,
    Pasted,
    Resized,
    SessionController,
    render_frame,
)
from .config import LOG_MAX_MESSAGE_LENGTH, LOG_TIMESTAMP_FORMAT, LogLevel


class ConversationView(Widget, can_focus=True):
    """Full-screen view of a session controller.

    Draws the controller's frame and forwards every terminal event to
    ``dispatch`` as a session event. It keeps no state of its own.
    """

    def __init__(
        self,
        controller: SessionController,
        dispatch: Callable[[Event], Any],
        *args,
        **kwargs,
    ) -> None:
        super().__init__(*args, **kwargs)
        self._controller = controller
        self._dispatch = dispatch
        self._dragging = False

    def render(self) -> Text:
        return render_frame(self._controller)

    def on_key(self, event: events.Key) -> None:
        event.stop()
        event.prevent_default()
        character = event.character if event.is_printable else None
        self._dispatch(KeyPressed(event.key, character))

    def on_paste(self, event: events.Paste) -> None:
        event.stop()
        if event.text:
            self._dispatch(Pasted(event.text))

    def on_mouse_down(self, event: events.MouseDown) -> None:
        if event.button != 1:
            return
        event.stop()
        self._dragging = True
        self.capture_mouse()
        self._dispatch(MousePressed(event.x, event.y))

    def on_mouse_move(self, event: events.MouseMove) -> None:
        if not self._dragging:
            return
        event.stop()
        self._dispatch(MouseDragged(event.x, event.y))

    def on_mouse_up(self, event: events.MouseUp) -> None:
        if not self._dragging:
            return
        event.stop()
        self._dragging = False
        self.release_mouse()
        self._dispatch(MouseReleased(event.x, event.y))

    def on_mouse_scroll_up(self, event: events.MouseScrollUp) -> None:
        event.stop()
        self._dispatch(MouseScrolled(-1))

    def on_mouse_scroll_down(self, event: events.MouseScrollDown) -> None:
        event.stop()
        self._dispatch(MouseScrolled(1))

    def on_resize(self, event: events.Resize) -> None:
        self._dispatch(Resized(event.size.width, event.size.height))


class DebugPanel(RichLog):
    """Session log with a level threshold.

    Receives the ``(level, component, message)`` strings emitted through the
    debug callbacks of the controller, registry and providers. Hidden by
    the stylesheet until ``--log-level`` or ctrl+d shows it.
    """

    BORDER_TITLE = "Log"

    LEVEL_STYLES = {
        LogLevel.DEBUG: "dim",
        LogLevel.INFO: "cyan",
        LogLevel.WARNING: "yellow",
        LogLevel.ERROR: "bold red",
    }

    COMPONENT_STYLES = {
        "TUI": "cyan",
        "Session": "green",
        "Stream": "bright_yellow",
        "Registry": "bright_blue",
        "LLM": "magenta",
        "Settings": "bright_white",
    }

    def __init__(self, threshold: int = LogLevel.DEBUG, **kwargs) -> None:
        super().__init__(markup=False, highlight=False, wrap=True, max_lines=1000, **kwargs)
        self._threshold = threshold

    @property
    def threshold(self) -> int:
        return self._threshold

    @threshold.setter
    def threshold(self, level: int) -> None:
        self._threshold = level
        self._refresh_subtitle()

    def _refresh_subtitle(self) -> None:
        self.border_subtitle = f"Level: {LogLevel.name(self._threshold)}" if self.display else ""

    def write_entry(self, level: int, component: str, message: str) -> None:
        """Append one timestamped entry unless it is below the threshold."""
        if level < self._threshold:
            return
        if len(message) > LOG_MAX_MESSAGE_LENGTH:
            message = message[:LOG_MAX_MESSAGE_LENGTH] + "..."

        line = Text(datetime.now().strftime(LOG_TIMESTAMP_FORMAT), style="dim")
        line.append(f" {LogLevel.name(level):<7} ", style=self.LEVEL_STYLES.get(level, ""))
        line.append(f"[{component}] ", style=self.COMPONENT_STYLES.get(component, "white"))
        line.append(message)
        self.write(line)

    def route(self, level: str, component: str, message: str) -> None:
        """Debug callback target."""
        self.write_entry(LogLevel.from_string(level), component, message)

    def show(self) -> None:
        self.display = True
        self._refresh_subtitle()

    def toggle(self) -> bool:
        """Flip visibility and return whether the panel is now shown."""
        self.display = not self.display
        self._refresh_subtitle()
        return self.display
