"""Error taxonomy for chait.

Every failure the session engine knows how to recover from is one of these.
The session controller catches them at its boundary and turns them into an
Error message or a silent no-op; none of them should crash the process.
"""


class ChaitError(Exception):
    """Base class for all chait errors."""


class ProviderNotReadyError(ChaitError):
    """The active provider has no API key configured."""

    def __init__(self, provider: str) -> None:
        super().__init__(f"Provider '{provider}' is not ready: API key not set")
        self.provider = provider


class TransportError(ChaitError):
    """A network or HTTP failure reported by the provider client."""


class StreamParseError(ChaitError):
    """A streamed chunk could not be decoded. The stream continues."""


class ValidationError(ChaitError, ValueError):
    """Invalid model, temperature, provider name or API key."""


class ClipboardError(ChaitError):
    """The system clipboard could not be written."""


class SettingsError(ChaitError):
    """The configuration file could not be read or written."""
