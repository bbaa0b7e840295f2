"""Click CLI interface for tailwind-assist."""

import asyncio
from collections.abc import Awaitable, Callable
from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from tailwind_assist.config import AssistConfig
from tailwind_assist.console_host import ConsoleHost
from tailwind_assist.exceptions import HandledCommandError
from tailwind_assist.extension import OPEN_DOCS_CONTEXT_COMMAND, Extension
from tailwind_assist.logger import setup_logger
from tailwind_assist.naming import docs_url
from tailwind_assist.watcher import ConfigFileWatcher

console = Console()

config_option = click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, file_okay=True, path_type=Path),
    help="Path to a YAML configuration file",
)


def _run(
    command: Callable[[Extension, ConsoleHost], Awaitable[None]], config: Path | None
) -> None:
    """Activate the extension in a console host and run ``command`` against it."""
    assist_config = AssistConfig(config_file=config)
    host = ConsoleHost(assist_config, console)
    extension = Extension(
        host,
        definitions_file=assist_config.definitions_file,
        completions_enabled=assist_config.completions_enabled,
        base_docs_url=assist_config.docs_url,
    )

    async def _main() -> None:
        try:
            state = await extension.activate()
            if not state.is_loaded:
                console.print(
                    "[red]Error:[/red] Failed to load definitions: "
                    f"{escape(state.error)}"
                )
                raise HandledCommandError(state.error)
            await command(extension, host)
        finally:
            extension.deactivate()

    try:
        asyncio.run(_main())
    except HandledCommandError:
        raise click.exceptions.Exit(1) from None


@click.group()
@click.version_option(package_name="tailwind-assist")
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default=None,
    help="Log level (defaults to TAILWIND_ASSIST_LOG_LEVEL or WARNING)",
)
def main(log_level: str | None) -> None:
    """tailwind-assist - Tailwind CSS class completion and class browser."""
    setup_logger(log_level)


@main.command()
@config_option
def tree(config: Path | None) -> None:
    """Print the tree of Tailwind classes."""

    async def _tree(extension: Extension, host: ConsoleHost) -> None:
        console.print(extension.state.sidebar.tree_view.build())

    _run(_tree, config)


@main.command()
@click.argument("prefix", default="")
@config_option
def complete(prefix: str, config: Path | None) -> None:
    """List the completions for PREFIX (variants like md:hover: allowed)."""

    async def _complete(extension: Extension, host: ConsoleHost) -> None:
        provider = extension.state.completion_provider
        items = provider.provide_completion_items(prefix, len(prefix))
        if not items:
            console.print("[yellow]No completions[/yellow]")
            return

        table = Table(show_header=True, box=None, padding=(0, 2))
        table.add_column("Class", style="cyan")
        table.add_column("Category", style="white")
        table.add_column("Docs", style="dim")
        for item in items:
            table.add_row(item.insert_text, item.detail, item.documentation_url or "")
        console.print(table)

    _run(_complete, config)


@main.command()
@click.argument("name")
@click.option("--open", "open_url", is_flag=True, help="Open the page in a browser")
@config_option
def docs(name: str, open_url: bool, config: Path | None) -> None:
    """Show the documentation URL for a section, category or class NAME."""

    async def _docs(extension: Extension, host: ConsoleHost) -> None:
        tree_view = extension.state.sidebar.tree_view
        selected = tree_view.select(name)
        if selected is None:
            console.print(
                f"[red]Error:[/red] No class or category named {escape(repr(name))}"
            )
            raise HandledCommandError(name)

        if open_url:
            await host.execute_command(OPEN_DOCS_CONTEXT_COMMAND)
        else:
            console.print(docs_url(selected, extension.base_docs_url))

    _run(_docs, config)


@main.command()
@config_option
def watch(config: Path | None) -> None:
    """Reload the class definitions whenever the Tailwind config changes."""

    async def _watch(extension: Extension, host: ConsoleHost) -> None:
        tailwind_config = extension.state.config.tailwind_config_file_path
        if tailwind_config is None:
            console.print(
                "[red]Error:[/red] No Tailwind config file configured. "
                "Set tailwind_config or TAILWIND_ASSIST_TAILWIND_CONFIG."
            )
            raise HandledCommandError("tailwind_config")

        editor = await host.open_editor(tailwind_config)
        watcher = ConfigFileWatcher(editor, console)
        await watcher.start_watching()
        console.print("[dim]Press Ctrl+C to stop[/dim]")
        try:
            await watcher.wait()
        finally:
            await watcher.stop_watching()

    try:
        _run(_watch, config)
    except KeyboardInterrupt:
        console.print("\n[yellow]Stopped watching.[/yellow]")


if __name__ == "__main__":
    main()
