"""Session engine constants."""

# Rows below the conversation kept free for the input prompt
INPUT_RESERVED_ROWS = 3

# Lines moved per mouse wheel tick
WHEEL_SCROLL_LINES = 3

# User/assistant messages sent to the provider besides the system message
HISTORY_WINDOW = 20

DEFAULT_WIDTH = 80
DEFAULT_HEIGHT = 24

DEFAULT_SYSTEM_PROMPT = "You are a helpful assistant."

SEPARATOR = "-----------------------------------"
