"""Session controller.

The top-level state machine of interactive mode. It hides every decision
about what a key press, mouse gesture, timer tick or streamed chunk does to
the conversation. ``handle()`` mutates the controller in place and returns
the side effects the host has to perform (receive the next chunk, close an
abandoned stream, copy to the clipboard, quit). It never touches the UI
toolkit, the network or the clipboard itself.
"""

from collections.abc import Callable
from enum import Enum
from typing import Any

from ..errors import ChaitError
from ..llm.registry import ProviderRegistry
from .config import (
    DEFAULT_HEIGHT,
    DEFAULT_SYSTEM_PROMPT,
    DEFAULT_WIDTH,
    INPUT_RESERVED_ROWS,
    WHEEL_SCROLL_LINES,
)
from .events import (
    ChunkReceived,
    CloseStream,
    Command,
    CopyToClipboard,
    Event,
    KeyPressed,
    MouseDragged,
    MousePressed,
    MouseReleased,
    MouseScrolled,
    Pasted,
    Quit,
    ReceiveNext,
    Resized,
    Tick,
)
from .input import InputBuffer
from .layout import VisualLine, wrap
from .messages import Message, MessageStore, MessageType, help_notice, welcome_notice
from .scroll import ScrollController
from .selection import Point, Selection
from .selector import SelectorGroup, SelectorKind, SelectorOption
from .streaming import StreamChunk, StreamHandle

CANCEL_KEYS = frozenset({"ctrl+c", "escape"})
NEWLINE_KEYS = frozenset({"ctrl+j", "alt+enter"})

SELECTOR_SHORTCUTS: dict[str, SelectorKind] = {
    "ctrl+p": SelectorKind.PROVIDER,
    "ctrl+o": SelectorKind.MODEL,
    "ctrl+t": SelectorKind.TEMPERATURE,
}

SELECTOR_COMMANDS: dict[str, SelectorKind] = {
    ":p": SelectorKind.PROVIDER,
    ":m": SelectorKind.MODEL,
    ":t": SelectorKind.TEMPERATURE,
}


class SessionState(str, Enum):
    """Controller states, highest priority first."""

    SELECTOR_ACTIVE = "selector_active"
    API_KEY_ENTRY = "api_key_entry"
    STREAMING = "streaming"
    IDLE = "idle"


class SessionController:
    """Interactive session state plus its event reducer.

    Attributes:
        messages: The conversation
        scroll: Viewport position over the visual lines
        selectors: Provider, model and temperature pickers
        selection: Current mouse selection
        input: The prompt being edited
        input_enabled: False while a reply is streaming
        cursor_visible: Blink phase of the prompt cursor
        stream: Handle of the in-flight turn, if any
    """

    def __init__(
        self,
        registry: ProviderRegistry,
        width: int = DEFAULT_WIDTH,
        height: int = DEFAULT_HEIGHT,
        system_prompt: str = DEFAULT_SYSTEM_PROMPT,
        debug_callback: Callable[[str, str, str], Any] | None = None,
    ) -> None:
        self.registry = registry
        self.width = width
        self.height = height
        self.messages = MessageStore(system_prompt)
        self.scroll = ScrollController(self.viewport_height)
        self.selectors = SelectorGroup()
        self.selection = Selection()
        self.input = InputBuffer()
        self.input_enabled = True
        self.cursor_visible = True
        self.stream: StreamHandle | None = None
        self.api_key_entry = False
        self._resume_after_key = False
        self._lines: list[VisualLine] = []
        self._debug_callback = debug_callback

        self.refresh_selectors()
        self._relayout()

    @property
    def state(self) -> SessionState:
        if self.selectors.active is not None:
            return SessionState.SELECTOR_ACTIVE
        if self.api_key_entry:
            return SessionState.API_KEY_ENTRY
        if self.stream is not None:
            return SessionState.STREAMING
        return SessionState.IDLE

    @property
    def viewport_height(self) -> int:
        return max(self.height - INPUT_RESERVED_ROWS, 1)

    @property
    def lines(self) -> list[VisualLine]:
        """Visual lines of the current layout."""
        return self._lines

    def visible_lines(self) -> list[VisualLine]:
        start = self.scroll.position
        return self._lines[start:start + self.viewport_height]

    def start(self, initial_input: str = "") -> list[Command]:
        """Show the welcome notice and optionally send a first message."""
        self.messages.append(welcome_notice(self.registry.active))
        commands: list[Command] = []
        if initial_input.strip():
            commands = self._dispatch_safely(lambda: self._send(initial_input.strip()))
        self._relayout()
        return commands

    def handle(self, event: Event) -> list[Command]:
        """Apply one event and return the commands the host must run."""
        commands = self._dispatch_safely(lambda: self._dispatch(event))
        self._relayout()
        return commands

    def refresh_selectors(self) -> None:
        """Rebuild all selector options from the registry's current state."""
        active = self.registry.active

        providers = self.registry.providers()
        self.selectors[SelectorKind.PROVIDER].set_options(
            [
                SelectorOption(f"{p.name} [{'Ready' if p.is_ready() else 'Not Ready'}]", p.name)
                for p in providers
            ],
            next((i for i, p in enumerate(providers) if p.name == active.name), 0),
        )

        models = list(active.available_models)
        self.selectors[SelectorKind.MODEL].set_options(
            [SelectorOption(m, m) for m in models],
            models.index(active.model) if active.model in models else 0,
        )

        presets = list(active.temperature_presets)
        self.selectors[SelectorKind.TEMPERATURE].set_options(
            [SelectorOption(p.label, p.value) for p in presets],
            next((i for i, p in enumerate(presets) if abs(p.value - active.temperature) < 1e-9), 0),
        )

    def _dispatch_safely(self, action: Callable[[], list[Command]]) -> list[Command]:
        try:
            return action()
        except ChaitError as e:
            self._debug("error", "Session", f"{type(e).__name__}: {e}")
            self.messages.add(MessageType.ERROR, str(e))
            return []

    def _dispatch(self, event: Event) -> list[Command]:
        if isinstance(event, KeyPressed):
            return self._on_key(event)
        if isinstance(event, ChunkReceived):
            return self._on_chunk(event.handle, event.chunk)
        if isinstance(event, MouseReleased):
            return self._on_mouse_release(event.x, event.y)

        if isinstance(event, Pasted):
            self._on_paste(event.text)
        elif isinstance(event, MousePressed):
            self._on_mouse_press(event.x, event.y)
        elif isinstance(event, MouseDragged):
            self._on_mouse_drag(event.x, event.y)
        elif isinstance(event, MouseScrolled):
            if self.selectors.active is None:
                self.scroll.scroll_by(event.delta * WHEEL_SCROLL_LINES)
        elif isinstance(event, Resized):
            self.width = event.width
            self.height = event.height
        elif isinstance(event, Tick):
            self.cursor_visible = not self.cursor_visible
        return []

    def _on_key(self, event: KeyPressed) -> list[Command]:
        key = event.key

        if self.selectors.active is not None:
            return self._on_selector_key(event)

        if key in CANCEL_KEYS:
            return self._cancel()

        if key == "pageup":
            self.scroll.page_up()
            return []
        if key == "pagedown":
            self.scroll.page_down()
            return []
        if key == "home":
            self.scroll.to_top()
            return []
        if key == "end":
            self.scroll.to_bottom()
            return []
        if key == "up":
            self.scroll.scroll_by(-1)
            return []
        if key == "down":
            self.scroll.scroll_by(1)
            return []

        if self.api_key_entry:
            if key == "enter":
                return self._submit_api_key()
            self._edit(event)
            return []

        if key in SELECTOR_SHORTCUTS:
            if self.stream is None:
                self._open_selector(SELECTOR_SHORTCUTS[key])
            return []

        if key == "enter":
            return self._submit()

        if self._edit(event):
            return self._run_inline_command()
        return []

    def _edit(self, event: KeyPressed) -> bool:
        """Apply an editing key to the input; returns True if text was inserted."""
        if not self.input_enabled:
            return False
        key = event.key
        if key in NEWLINE_KEYS:
            self.input.newline()
        elif key == "backspace":
            self.input.backspace()
        elif key == "delete":
            self.input.delete()
        elif key == "left":
            self.input.left()
        elif key == "right":
            self.input.right()
        elif event.character and event.character.isprintable():
            self.input.insert(event.character)
            return True
        return False

    def _run_inline_command(self) -> list[Command]:
        command = self.input.text
        if command in SELECTOR_COMMANDS:
            self.input.clear()
            self._open_selector(SELECTOR_COMMANDS[command])
        elif command == ":h":
            self.input.clear()
            self.messages.append(help_notice(self.registry.active))
            self.scroll.follow()
        elif command == ":c":
            self.input.clear()
            self.messages.reset()
            self.selection.clear()
            self.scroll.follow()
            self._debug("info", "Session", "Started a new conversation")
        elif command == ":k":
            self._enter_api_key_entry(resume_turn=False)
        return []

    def _on_paste(self, text: str) -> None:
        if self.selectors.active is not None or not self.input_enabled:
            return
        text = text.replace("\r\n", "\n").replace("\r", "\n")
        if self.api_key_entry:
            text = text.strip()
        self.input.insert(text)

    def _cancel(self) -> list[Command]:
        if self.api_key_entry:
            self._leave_api_key_entry()
            self._debug("debug", "Session", "API key entry cancelled")
            return []
        if self.stream is not None:
            handle = self.stream
            self._finish_turn()
            last = self.messages.last
            if last.type is MessageType.ASSISTANT and not last.content:
                self.messages.replace_last(Message(MessageType.NOTICE, "Request cancelled."))
            self._debug("info", "Session", f"Cancelled {handle!r}")
            return [CloseStream(handle)]
        return [Quit()]

    def _open_selector(self, kind: SelectorKind) -> None:
        self.refresh_selectors()
        self.selectors.activate(kind)
        self._debug("debug", "Session", f"Opened {kind.value} selector")

    def _on_selector_key(self, event: KeyPressed) -> list[Command]:
        kind = self.selectors.active_kind
        widget = self.selectors[kind]
        key = event.key

        if key in CANCEL_KEYS:
            widget.cancel()
            self.refresh_selectors()
        elif key == "up":
            widget.previous()
        elif key == "down":
            widget.next()
        elif key == "enter":
            self._apply_selection(kind, widget.confirm())
        elif event.character is not None and len(event.character) == 1 and event.character in "123456789":
            if widget.select_by_index(int(event.character) - 1):
                self._apply_selection(kind, widget.confirm())
        return []

    def _apply_selection(self, kind: SelectorKind, value: Any) -> None:
        try:
            if value is None:
                return
            if kind is SelectorKind.PROVIDER:
                self.registry.set_active_provider(value)
            elif kind is SelectorKind.MODEL:
                self.registry.set_model(value)
            else:
                self.registry.set_temperature(value)
            self._debug("info", "Session", f"{kind.value} set to {value}")
        finally:
            self.refresh_selectors()

    def _submit(self) -> list[Command]:
        if not self.input_enabled:
            # Enter while a reply streams only jumps back to the newest output
            self.scroll.follow()
            return []
        if not self.input.text.strip():
            return []
        return self._send(self.input.take())

    def _send(self, text: str) -> list[Command]:
        self.messages.add(MessageType.USER, text)
        self.scroll.follow()
        return self._begin_turn()

    def _begin_turn(self) -> list[Command]:
        provider = self.registry.active
        if not provider.is_ready():
            self._debug("warning", "Session", f"Provider {provider.name} is not ready")
            self._enter_api_key_entry(resume_turn=True)
            return []

        history = self.messages.chat_history()
        self.messages.add(MessageType.ASSISTANT, "")
        self.stream = StreamHandle(self.registry.stream_chat(history))
        self.input_enabled = False
        self.scroll.follow()
        self._debug(
            "info", "Session",
            f"Streaming from {provider.name} ({provider.model}) with {len(history)} messages",
        )
        return [ReceiveNext(self.stream)]

    def _on_chunk(self, handle: StreamHandle, chunk: StreamChunk) -> list[Command]:
        if handle is not self.stream:
            self._debug("debug", "Stream", f"Ignoring chunk from stale {handle!r}")
            return []

        if chunk.error is not None:
            self._debug("error", "Stream", f"{type(chunk.error).__name__}: {chunk.error}")
            error = Message(MessageType.ERROR, str(chunk.error) or type(chunk.error).__name__)
            if self.messages.last.type is MessageType.ASSISTANT:
                self.messages.replace_last(error)
            else:
                self.messages.append(error)
            self._finish_turn()
            return []

        if chunk.done:
            self._debug("info", "Stream", f"{handle!r} done")
            self._finish_turn()
            return []

        self.messages.extend_assistant(chunk.content)
        return [ReceiveNext(handle)]

    def _finish_turn(self) -> None:
        self.stream = None
        self.input_enabled = True

    def _enter_api_key_entry(self, resume_turn: bool) -> None:
        self.api_key_entry = True
        self._resume_after_key = resume_turn
        self.input.clear()
        self.input.masked = True
        self.input_enabled = True
        self.messages.add(
            MessageType.NOTICE, f"Please enter your API key of {self.registry.active.name}:"
        )
        self.scroll.follow()

    def _leave_api_key_entry(self) -> None:
        self.api_key_entry = False
        self._resume_after_key = False
        self.input.clear()
        self.input.masked = False

    def _submit_api_key(self) -> list[Command]:
        api_key = self.input.text.strip()
        if not api_key:
            return []

        resume = self._resume_after_key
        self._leave_api_key_entry()
        name = self.registry.active.name
        try:
            self.registry.set_api_key(api_key)
        except ChaitError as e:
            self.messages.add(MessageType.ERROR, f"Error setting API key: {e}")
            return []
        finally:
            self.refresh_selectors()

        self.messages.add(MessageType.NOTICE, f"API key for '{name}' has been set successfully.")
        self.scroll.follow()
        if resume:
            return self._begin_turn()
        return []

    def _point(self, x: int, y: int) -> Point:
        return Point(y + self.scroll.position, x)

    def _on_mouse_press(self, x: int, y: int) -> None:
        if self.selectors.active is not None:
            return
        self.selection.begin(self._point(x, y))
        self.scroll.hold()

    def _on_mouse_drag(self, x: int, y: int) -> None:
        if self.selection.selecting:
            self.selection.extend(self._point(x, y), self._lines)

    def _on_mouse_release(self, x: int, y: int) -> list[Command]:
        if not self.selection.selecting:
            return []
        text = self.selection.extend(self._point(x, y), self._lines)
        if text:
            self._debug("debug", "Session", f"Selected {len(text)} characters")
            return [CopyToClipboard(text)]
        self.selection.clear()
        return []

    def _relayout(self) -> None:
        self._lines = wrap(self.messages, self.width)
        self.scroll.update(len(self._lines), self.viewport_height)

    def set_debug_callback(self, callback: Callable[[str, str, str], Any] | None) -> None:
        self._debug_callback = callback

    def _debug(self, level: str, component: str, message: str) -> None:
        if self._debug_callback:
            self._debug_callback(level, component, message)
