"""Layout engine.

Turns the message store and a terminal width into visual lines: the
prefixed, width-bounded lines that appear on screen. Everything here is a
pure function of its arguments; visual lines are recomputed on every render
and never stored.

Widths are measured in terminal cells using rich's East-Asian-width tables,
so a CJK glyph counts as two cells.
"""

from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from rich.cells import cell_len, get_character_cell_size

from .messages import Message, MessageType

PREFIXES: dict[MessageType, str] = {
    MessageType.USER: "> ",
    MessageType.SYSTEM: "System: ",
    MessageType.ASSISTANT: "Assistant: ",
    MessageType.ERROR: "Error: ",
    MessageType.NOTICE: "",
}


@dataclass(frozen=True)
class VisualLine:
    """One wrapped line of a message.

    Attributes:
        type: Type of the source message (drives colouring)
        content: Text as displayed, prefix included on the first line
        source_index: Index of the source message in the store
        soft_break: True when the line ends because of wrapping rather
            than a newline in the content
    """

    type: MessageType
    content: str
    source_index: int = -1
    soft_break: bool = False


def char_width(char: str) -> int:
    """Number of terminal cells a single character occupies."""
    return get_character_cell_size(char)


def display_width(text: str) -> int:
    """Number of terminal cells a string occupies."""
    return cell_len(text)


def find_break_point(text: str, width: int) -> int:
    """Find how many characters of ``text`` go on a line ``width`` cells wide.

    Prefers breaking after the last space that fits; otherwise breaks hard
    at the width limit. Always returns at least 1 for non-empty text so
    wrapping makes progress even when a wide glyph cannot fit.
    """
    if not text:
        return 0

    used = 0
    pos = len(text)
    for i, char in enumerate(text):
        w = char_width(char)
        if used + w > width:
            pos = i
            break
        used += w

    if pos == len(text):
        return pos

    # The space stays on the current line
    for i in range(pos - 1, 0, -1):
        if text[i] == " ":
            return i + 1

    return max(pos, 1)


def wrap_segments(text: str, width: int, prefix_width: int = 0) -> list[tuple[str, bool]]:
    """Split text into (line, soft_break) pairs.

    Each newline-separated line of ``text`` starts with ``prefix_width``
    cells fewer than ``width``; continuation lines get the full width.
    A width of zero or less disables wrapping.
    """
    if width <= 0:
        return [(line, False) for line in text.split("\n")]

    segments: list[tuple[str, bool]] = []
    for line in text.split("\n"):
        if not line:
            segments.append(("", False))
            continue

        available = width - prefix_width
        remaining = line
        while remaining:
            cut = find_break_point(remaining, available)
            chunk, remaining = remaining[:cut], remaining[cut:]
            segments.append((chunk, bool(remaining)))
            available = width
    return segments


def wrap_text(text: str, width: int, prefix_width: int = 0) -> str:
    """Wrap text to ``width`` cells, returning it with inserted newlines."""
    if width <= 0:
        return text
    return "\n".join(line for line, _ in wrap_segments(text, width, prefix_width))


def format_message(message: Message, width: int) -> list[tuple[str, bool]]:
    """Wrapped, prefixed lines of a single message."""
    prefix = PREFIXES[message.type]
    segments = wrap_segments(message.content, width, display_width(prefix))
    first, soft = segments[0]
    segments[0] = (prefix + first, soft)
    if message.type is MessageType.ASSISTANT:
        # Blank line separating a reply from what follows
        segments.append(("", False))
    return segments


def iter_visual_lines(messages: Iterable[Message], width: int) -> Iterator[VisualLine]:
    """Lazily lay out messages as visual lines."""
    for index, message in enumerate(messages):
        for content, soft_break in format_message(message, width):
            yield VisualLine(message.type, content, index, soft_break)


def wrap(messages: Iterable[Message], width: int) -> list[VisualLine]:
    """Lay out all messages for a terminal ``width`` cells wide."""
    return list(iter_visual_lines(messages, width))
