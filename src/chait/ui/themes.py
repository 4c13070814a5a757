"""Theme definitions for the TUI.

This module hides the colour palette of the Textual host. Message colours
inside the conversation frame are fixed by the session renderer; the theme
covers everything around it (background, log panel, notifications).
"""

from textual.theme import Theme

CHAIT_DARK = Theme(
    name="chait-dark",
    primary="#5e9aa4",      # User teal
    secondary="#5ea46b",    # Assistant green
    accent="#87CEEB",       # System sky blue
    foreground="#D3D3D3",   # Notice grey
    background="#121417",
    success="#5ea46b",
    warning="#d7a65f",
    error="#a45e8b",        # Error plum
    surface="#1a1d21",
    panel="#16181b",
    dark=True,
    variables={
        "border": "#3a3f45",
        "border-blurred": "#2a2e33",

        "scrollbar": "#2a2e33",
        "scrollbar-hover": "#3a3f45",
        "scrollbar-active": "#5e9aa4",
        "scrollbar-background": "#16181b",
        "scrollbar-corner-color": "#16181b",

        "footer-foreground": "#a8adb3",
        "footer-background": "#121417",
        "footer-key-foreground": "#87CEEB",
        "footer-key-background": "#2a2e33",
        "footer-description-foreground": "#a8adb3",

        "text-muted": "#6b7178",
        "text-disabled": "#3a3f45",
    },
)
