"""Terminal UI module for chait.

Provides the Textual host for the interactive session engine.

Module structure (Parnas principle - each module hides a design decision):
- config.py: Log levels and UI timing constants
- styles.py: CSS styling (layout decisions)
- themes.py: Color palette and theme configuration
- widgets.py: Conversation view and log panel
- app.py: Application orchestration (running session commands)
"""

from .app import ChaitApp, run_tui
from .config import LogLevel
from .widgets import ConversationView, DebugPanel

__all__ = [
    "ChaitApp",
    "ConversationView",
    "DebugPanel",
    "LogLevel",
    "run_tui",
]
