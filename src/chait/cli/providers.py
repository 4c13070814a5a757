"""Provider factory functions for CLI.

Centralizes creation of the settings store and the provider registry from
the config file and environment variables. Hides configuration details
from command implementations.
"""

from pathlib import Path

import typer
from rich.console import Console

from ..errors import ChaitError
from ..llm import ProviderRegistry
from ..settings import SettingsStore

# Default console for output
_console = Console()

# Set from the global --config option
_config_path: Path | None = None


def set_config_path(path: Path | None) -> None:
    global _config_path
    _config_path = path


def get_store() -> SettingsStore:
    """Settings store at --config, $CHAIT_CONFIG or ~/.config/chait/config.json."""
    return SettingsStore(_config_path)


def get_registry(console: Console | None = None, provider: str | None = None) -> ProviderRegistry:
    """Build the provider registry from persisted settings.

    Args:
        console: Optional Rich console for output
        provider: Provider to activate for this run only (not persisted)

    Returns:
        Registry with every known provider

    Raises:
        SystemExit: If the config file is unreadable or the provider is unknown

    Environment variables:
        CHAIT_CONFIG: Config file path when --config is not given
            (default: ~/.config/chait/config.json)
        DEEPSEEK_API_KEY: DeepSeek API key, used when none is stored
        OPENAI_API_KEY: OpenAI API key, used when none is stored
        XAI_API_KEY: xAI (Grok) API key, used when none is stored
    """
    con = console or _console
    store = get_store()
    try:
        settings = store.load()
    except ChaitError as e:
        con.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(code=1)

    if provider is not None:
        settings.provider = provider.lower()
        if settings.provider == "xai":
            settings.provider = "grok"
        registry = ProviderRegistry.from_settings(settings)
        if registry.active.name != settings.provider:
            con.print(f"[red]Error: Unknown provider: {provider}[/red]")
            raise typer.Exit(code=1)
        return registry

    return ProviderRegistry.from_settings(settings, store=store)


def prefer_ready_provider(registry: ProviderRegistry, console: Console | None = None) -> None:
    """Switch to the first ready provider when the active one has no API key.

    Leaves the registry alone when no provider is ready; interactive mode
    then asks for a key.
    """
    con = console or _console
    if registry.active.is_ready():
        return
    ready = registry.ready_providers()
    if not ready:
        return
    try:
        registry.set_active_provider(ready[0].name)
    except ChaitError as e:
        con.print(f"[yellow]Warning: {e}[/yellow]")
        return
    con.print(f"[dim]Switched to ready provider: {ready[0].name}[/dim]")


def require_ready_provider(registry: ProviderRegistry, console: Console | None = None) -> None:
    """Exit with an error unless the active provider has an API key."""
    con = console or _console
    prefer_ready_provider(registry, con)
    if not registry.active.is_ready():
        con.print(
            f"[red]Error: No API key for {registry.active.name}. "
            f"Set one with: chait config providers.{registry.active.name}.api_key YOUR_KEY[/red]"
        )
        raise typer.Exit(code=1)
