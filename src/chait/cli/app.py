"""Main CLI application using Typer."""
import asyncio
import sys
from pathlib import Path

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.table import Table

from .. import __version__
from ..errors import ChaitError
from ..llm import PROVIDER_CLASSES, ChatMessage
from ..session.config import DEFAULT_SYSTEM_PROMPT
from ..ui.config import LogLevel
from .providers import (
    get_registry,
    get_store,
    prefer_ready_provider,
    require_ready_provider,
    set_config_path,
)

# Load environment variables
load_dotenv()

# Create Typer app
app = typer.Typer(
    name="chait",
    help="Chat with language models from the terminal",
    no_args_is_help=True,
    add_completion=True,
)

# Console for rich output
console = Console()


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"chait version {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        callback=_version_callback,
        is_eager=True,
        help="Show the version and exit"
    ),
    config_path: Path | None = typer.Option(
        None,
        "--config",
        "-c",
        dir_okay=False,
        help="Config file (default: $CHAIT_CONFIG or ~/.config/chait/config.json)"
    ),
):
    """Chat with language models from the terminal."""
    set_config_path(config_path)


def _read_piped_input() -> str:
    """Return piped stdin, or "" when stdin is a terminal."""
    if sys.stdin is None or sys.stdin.isatty():
        return ""
    return sys.stdin.read().strip()


def _compose_query(query: list[str] | None, piped: str) -> str:
    text = " ".join(query or []).strip()
    if piped and text:
        return f"{piped}\n\n{text}"
    return piped or text


@app.command()
def chat(
    query: list[str] | None = typer.Argument(
        None,
        help="Message to send as the first turn"
    ),
    log_level: str | None = typer.Option(
        None,
        "--log-level",
        "-l",
        help="Show log panel with level: debug (all), info, warning, or error"
    ),
):
    """Start interactive mode."""
    if log_level is not None and log_level.lower() not in LogLevel.choices():
        console.print(f"[red]Error: Unknown log level: {log_level}[/red]")
        raise typer.Exit(code=1)

    registry = get_registry(console)
    prefer_ready_provider(registry, console)
    if log_level is None and registry.settings.debug:
        log_level = "debug"
    initial_input = _compose_query(query, "")

    async def _chat():
        from ..ui import run_tui

        try:
            await run_tui(registry, initial_input=initial_input, log_level=log_level)
        finally:
            await registry.close()

    try:
        asyncio.run(_chat())
    except KeyboardInterrupt:
        pass


@app.command()
def ask(
    query: list[str] | None = typer.Argument(
        None,
        help="Question to ask; piped stdin is prepended"
    ),
    provider: str | None = typer.Option(
        None,
        "--provider",
        "-p",
        help="Provider to use for this query (deepseek, openai, grok)"
    ),
):
    """Send a single query and stream the reply to stdout."""
    text = _compose_query(query, _read_piped_input())
    if not text:
        console.print("[red]Error: Nothing to ask[/red]")
        raise typer.Exit(code=1)

    registry = get_registry(console, provider=provider)
    require_ready_provider(registry, console)

    async def _ask():
        messages = [
            ChatMessage(role="system", content=DEFAULT_SYSTEM_PROMPT),
            ChatMessage(role="user", content=text),
        ]
        try:
            async for chunk in registry.stream_chat(messages):
                console.print(chunk, end="", markup=False, highlight=False, soft_wrap=True)
            console.print()
        except ChaitError as e:
            console.print(f"\n[red]Error: {e}[/red]")
            raise typer.Exit(code=1)
        finally:
            await registry.close()

    try:
        asyncio.run(_ask())
    except KeyboardInterrupt:
        console.print("\n[dim]Interrupted.[/dim]")


@app.command()
def config(
    key: str = typer.Argument(..., help="Dotted key, e.g. providers.deepseek.api_key"),
    value: str = typer.Argument(..., help="Value; true/false and numbers are converted"),
):
    """Set a configuration value."""
    store = get_store()
    try:
        stored = store.set_value(key, value)
    except ChaitError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(code=1)
    shown = "****" if key.endswith("api_key") else stored
    console.print(f"Set '{key}' to '{shown}'")


@app.command()
def providers():
    """List providers with readiness, model and temperature."""
    registry = get_registry(console)

    table = Table(title="Providers")
    table.add_column("Provider", style="bold cyan")
    table.add_column("Status")
    table.add_column("API Key", style="dim")
    table.add_column("Model")
    table.add_column("Temperature", justify="right")

    for llm in registry.providers():
        active = "* " if llm.name == registry.active.name else "  "
        status = "[green]Ready[/green]" if llm.is_ready() else "[yellow]Not Ready[/yellow]"
        table.add_row(
            active + llm.name,
            status,
            llm.masked_api_key or "-",
            llm.model,
            f"{llm.temperature:.1f}",
        )

    console.print(table)
    console.print(f"[dim]Known providers: {', '.join(PROVIDER_CLASSES)}[/dim]")


def main():
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
