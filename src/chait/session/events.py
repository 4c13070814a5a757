"""Events the session controller consumes and commands it returns.

Events are produced by the host (terminal runtime, timer, stream worker);
commands are side effects the host performs on the controller's behalf.
Neither side depends on the UI toolkit.
"""

from dataclasses import dataclass

from .streaming import StreamChunk, StreamHandle


@dataclass(frozen=True)
class KeyPressed:
    """A key press.

    Attributes:
        key: Key name in Textual's notation, e.g. "enter", "ctrl+p", "a"
        character: Printable character produced, if any
    """

    key: str
    character: str | None = None


@dataclass(frozen=True)
class Pasted:
    text: str


@dataclass(frozen=True)
class MousePressed:
    x: int
    y: int


@dataclass(frozen=True)
class MouseDragged:
    x: int
    y: int


@dataclass(frozen=True)
class MouseReleased:
    x: int
    y: int


@dataclass(frozen=True)
class MouseScrolled:
    """Wheel movement in ticks; negative is up."""

    delta: int


@dataclass(frozen=True)
class Resized:
    width: int
    height: int


@dataclass(frozen=True)
class Tick:
    """Cursor blink timer."""


@dataclass(frozen=True)
class ChunkReceived:
    handle: StreamHandle
    chunk: StreamChunk


Event = (
    KeyPressed | Pasted | MousePressed | MouseDragged | MouseReleased
    | MouseScrolled | Resized | Tick | ChunkReceived
)


@dataclass(frozen=True)
class ReceiveNext:
    """Await the next chunk of ``handle`` and feed it back as ChunkReceived."""

    handle: StreamHandle


@dataclass(frozen=True)
class CloseStream:
    """Close an abandoned stream."""

    handle: StreamHandle


@dataclass(frozen=True)
class CopyToClipboard:
    text: str


@dataclass(frozen=True)
class Quit:
    pass


Command = ReceiveNext | CloseStream | CopyToClipboard | Quit
