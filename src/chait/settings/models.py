"""Data models for persisted configuration.

These models define the shape of the config file, independent of where it
is stored.
"""

from pydantic import BaseModel, Field

DEFAULT_PROVIDER = "deepseek"


class ProviderSettings(BaseModel):
    """Persisted state of a single provider."""

    api_key: str = Field(default="", description="API key, empty when not configured")
    model: str | None = Field(default=None, description="Selected model (None uses the provider default)")
    temperature: float | None = Field(default=None, description="Selected temperature")


class Settings(BaseModel):
    """Complete chait configuration."""

    provider: str = Field(default=DEFAULT_PROVIDER, description="Active provider name")
    debug: bool = Field(default=False, description="Show the log panel on start-up")
    providers: dict[str, ProviderSettings] = Field(default_factory=dict)

    def for_provider(self, name: str) -> ProviderSettings:
        """Get a provider's settings, creating an empty entry if missing."""
        if name not in self.providers:
            self.providers[name] = ProviderSettings()
        return self.providers[name]
