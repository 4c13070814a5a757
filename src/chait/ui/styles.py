"""Textual CSS for the chat screen.

The conversation fills the terminal. The log panel docks under it and is
hidden until requested.
"""

APP_CSS = """
Screen {
    layout: vertical;
    background: $background;
}

#conversation {
    height: 1fr;
    width: 100%;
    background: $background;
    overflow: hidden hidden;
}

#debug-panel {
    dock: bottom;
    height: 10;
    background: $panel;
    border-top: heavy $warning 50%;
    border-title-color: $warning;
    border-subtitle-color: $text-muted;
    border-subtitle-align: right;
    display: none;
    padding: 0 1;
    overflow-y: auto;
    overflow-x: hidden;
}
"""
