"""Log levels and timing constants for the Textual host."""


class LogLevel:
    """Numeric levels for the log panel.

    An entry is shown when its level is at or above the panel's threshold,
    so DEBUG shows everything and ERROR only failures.
    """

    DEBUG = 10
    INFO = 20
    WARNING = 30
    ERROR = 40

    _by_name = {
        "debug": DEBUG,
        "info": INFO,
        "warning": WARNING,
        "error": ERROR,
    }

    @classmethod
    def name(cls, level: int) -> str:
        for name, value in cls._by_name.items():
            if value == level:
                return name.upper()
        return "UNKNOWN"

    @classmethod
    def from_string(cls, level_str: str) -> int:
        """Parse a ``--log-level`` value; anything unrecognised means DEBUG."""
        return cls._by_name.get(level_str.strip().lower(), cls.DEBUG)

    @classmethod
    def choices(cls) -> list[str]:
        return list(cls._by_name)


# Prompt cursor blink period, seconds
CURSOR_BLINK_INTERVAL = 0.53

# Log panel entries
LOG_TIMESTAMP_FORMAT = "%H:%M:%S"
LOG_MAX_MESSAGE_LENGTH = 500

# Seconds a toast stays on screen
NOTIFY_TIMEOUT = 2
