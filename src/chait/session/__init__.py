"""Interactive session engine.

Module structure (each module hides one design decision):
- messages.py: The conversation and what is sent to the provider
- layout.py: Wrapping messages into visual lines
- selection.py: Mapping mouse positions onto visual-line text
- scroll.py: Viewport position and auto-follow
- selector.py: The modal provider/model/temperature pickers
- input.py: The editable prompt
- streaming.py: Pacing a provider stream one chunk at a time
- events.py: What the host feeds in and what it has to do
- controller.py: The state machine tying it all together
- render.py: Turning controller state into a rich Text frame
"""

from .controller import SessionController, SessionState
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
from .layout import VisualLine, display_width, find_break_point, iter_visual_lines, wrap, wrap_text
from .messages import Message, MessageStore, MessageType
from .render import render_frame
from .scroll import ScrollController
from .selection import Point, Selection, update_selection, visual_column_to_index
from .selector import SelectorGroup, SelectorKind, SelectorOption, SelectorWidget
from .streaming import StreamChunk, StreamHandle

__all__ = [
    "ChunkReceived",
    "CloseStream",
    "Command",
    "CopyToClipboard",
    "Event",
    "InputBuffer",
    "KeyPressed",
    "Message",
    "MessageStore",
    "MessageType",
    "MouseDragged",
    "MousePressed",
    "MouseReleased",
    "MouseScrolled",
    "Pasted",
    "Point",
    "Quit",
    "ReceiveNext",
    "Resized",
    "ScrollController",
    "Selection",
    "SelectorGroup",
    "SelectorKind",
    "SelectorOption",
    "SelectorWidget",
    "SessionController",
    "SessionState",
    "StreamChunk",
    "StreamHandle",
    "Tick",
    "VisualLine",
    "display_width",
    "find_break_point",
    "iter_visual_lines",
    "render_frame",
    "update_selection",
    "visual_column_to_index",
    "wrap",
    "wrap_text",
]
