"""Frame renderer.

Hides how controller state becomes terminal output: colours per message
type, the reverse-video selection overlay, the selector view and the input
prompt. Produces a single rich Text so any host that can print rich
renderables can draw it.
"""

from rich.style import Style
from rich.text import Text

from .controller import SessionController
from .layout import VisualLine, display_width, wrap_text
from .messages import MessageType
from .selection import selected_span

USER_COLOR = "#5e9aa4"
ASSISTANT_COLOR = "#5ea46b"
SYSTEM_COLOR = "#87CEEB"
NOTICE_COLOR = "#D3D3D3"
ERROR_COLOR = "#a45e8b"

MESSAGE_STYLES: dict[MessageType, Style] = {
    MessageType.USER: Style(color=USER_COLOR),
    MessageType.ASSISTANT: Style(color=ASSISTANT_COLOR),
    MessageType.SYSTEM: Style(color=SYSTEM_COLOR),
    MessageType.NOTICE: Style(color=NOTICE_COLOR),
    MessageType.ERROR: Style(color=ERROR_COLOR),
}

PROMPT = "> "
SELECTOR_STYLE = Style(color=NOTICE_COLOR)
SELECTOR_CURRENT_STYLE = Style(color=ASSISTANT_COLOR, bold=True)


def render_line(line: VisualLine, span: tuple[int, int] | None = None) -> Text:
    """Style one visual line, reversing the characters in ``span``."""
    style = MESSAGE_STYLES[line.type]
    text = Text(line.content, style=style, no_wrap=True, end="")
    if span is not None:
        start, end = span
        text.stylize(style + Style(reverse=True), start, end)
    return text


def render_selector(controller: SessionController) -> Text:
    widget = controller.selectors.active
    frame = Text(no_wrap=True)
    if widget is None:
        return frame
    for i, line in enumerate(widget.render_lines()):
        if i:
            frame.append("\n")
        current = line.startswith(" > ")
        frame.append(line, style=SELECTOR_CURRENT_STYLE if current else SELECTOR_STYLE)
    return frame


def render_prompt(controller: SessionController) -> Text:
    """Prompt line with the (possibly masked) input and blinking cursor."""
    shown = controller.input.display(controller.cursor_visible)
    wrapped = wrap_text(shown, controller.width, display_width(PROMPT))
    return Text(PROMPT + wrapped, style=MESSAGE_STYLES[MessageType.USER], end="")


def show_prompt(controller: SessionController) -> bool:
    """The prompt is drawn only while input is enabled and the newest line is in view."""
    return controller.input_enabled and controller.scroll.at_bottom


def render_frame(controller: SessionController) -> Text:
    """Render the whole screen for the controller's current state."""
    if controller.selectors.active is not None:
        return render_selector(controller)

    selection = controller.selection
    frame = Text(no_wrap=True)
    first = controller.scroll.position
    for offset, line in enumerate(controller.visible_lines()):
        index = first + offset
        span = None
        if selection.visible:
            span = selected_span(line.content, index, selection.start, selection.end)
        frame.append_text(render_line(line, span))
        frame.append("\n")

    if show_prompt(controller):
        frame.append_text(render_prompt(controller))
    return frame
