"""CLI commands for the plugin marketplace."""

from pathlib import Path
from typing import NoReturn, Optional

import structlog
import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from marketplace import __version__
from marketplace.core.exceptions import MarketplaceException, PluginNotFoundException
from marketplace.detect import detect_stack, detect_web_framework, format_frameworks
from marketplace.plugins.catalog import Marketplace
from marketplace.plugins.installer import PluginInstaller

app = typer.Typer(name="claude-market", help="Claude Code plugin marketplace CLI")
console = Console(highlight=False)


@app.callback()
def main(ctx: typer.Context) -> None:
    """Claude Code plugin marketplace CLI."""
    structlog.contextvars.bind_contextvars(command=ctx.invoked_subcommand)


def _usage(marketplace: Marketplace) -> NoReturn:
    console.print("Usage: claude-market install <plugin-name>")
    console.print()
    console.print("Available plugins:")
    for name in marketplace.available():
        console.print(f"  - {escape(name)}")
    raise typer.Exit(code=1)


def _fail(error: MarketplaceException) -> NoReturn:
    console.print(f"[red]Error: {escape(error.message)}[/red]", soft_wrap=True)
    raise typer.Exit(code=1)


@app.command()
def version() -> None:
    """Show version."""
    console.print(f"[bold green]Claude Market v{__version__}[/bold green]")


@app.command()
def install(name: Optional[str] = typer.Argument(None, help="Plugin to install")) -> None:
    """Install a plugin into ~/.claude/plugins.

    Args:
        name: Plugin name
    """
    marketplace = Marketplace()
    if not name:
        _usage(marketplace)

    installer = PluginInstaller(marketplace)
    try:
        result = installer.install(name)
    except PluginNotFoundException as e:
        console.print(f"[red]Error: {escape(e.message)}[/red]", soft_wrap=True)
        console.print()
        _usage(marketplace)
    except MarketplaceException as e:
        _fail(e)

    if result.replaced:
        console.print(f"[yellow]Plugin '{escape(name)}' already existed. Replaced old version.[/yellow]")
    console.print(f"[green]✓ Plugin '{escape(name)}' installed successfully![/green]")
    console.print()
    console.print(f"Location: {escape(str(result.link))} -> {escape(str(result.target))}", soft_wrap=True)
    console.print()
    console.print("Restart Claude Code to load the plugin.")


@app.command()
def uninstall(name: str = typer.Argument(..., help="Plugin to remove")) -> None:
    """Remove an installed plugin link.

    Args:
        name: Plugin name
    """
    installer = PluginInstaller()
    try:
        removed = installer.uninstall(name)
    except MarketplaceException as e:
        _fail(e)

    if removed:
        console.print(f"[green]✓ Plugin '{escape(name)}' uninstalled[/green]")
    else:
        console.print(f"[yellow]Plugin '{escape(name)}' is not installed[/yellow]")


@app.command("list")
def list_plugins() -> None:
    """List marketplace plugins."""
    installer = PluginInstaller()
    try:
        plugins = installer.marketplace.list_plugins()
    except MarketplaceException as e:
        _fail(e)

    if not plugins:
        console.print("[yellow]No plugins found[/yellow]")
        return

    table = Table(title="Marketplace plugins")
    table.add_column("Name", style="bold", no_wrap=True)
    table.add_column("Version", no_wrap=True)
    table.add_column("Description")
    table.add_column("Skills", justify="right")
    table.add_column("Agents", justify="right")
    table.add_column("Commands", justify="right")
    table.add_column("Installed", justify="center")

    for plugin in plugins:
        if plugin["error"]:
            description = f"[red]unreadable: {escape(plugin['error'])}[/red]"
        else:
            description = escape(plugin["description"])
        table.add_row(
            escape(plugin["name"]),
            plugin["version"] or "-",
            description,
            str(plugin["skills"]),
            str(plugin["agents"]),
            str(plugin["commands"]),
            "✓" if installer.is_installed(plugin["name"]) else "",
        )
    console.print(table)


@app.command()
def info(name: str = typer.Argument(..., help="Plugin to describe")) -> None:
    """Show a plugin's manifest and components.

    Args:
        name: Plugin name
    """
    try:
        plugin = Marketplace().get_plugin(name)
    except MarketplaceException as e:
        _fail(e)

    console.print(f"[bold]{escape(plugin.name)}[/bold] {plugin.version or ''}".rstrip())
    if plugin.description:
        console.print(escape(plugin.description))
    console.print(f"Path: {escape(str(plugin.path))}", soft_wrap=True)

    for title, components in (
        ("Skills", plugin.skills),
        ("Agents", plugin.agents),
        ("Commands", plugin.commands),
    ):
        if not components:
            continue
        console.print()
        console.print(f"[bold]{title}:[/bold]")
        for component in components:
            line = f"  - {escape(component.name)}"
            if component.description:
                line += f": {escape(component.description)}"
            console.print(line)


@app.command()
def validate() -> None:
    """Check plugin manifests against the marketplace layout."""
    problems = Marketplace().validate()
    if problems:
        for problem in problems:
            console.print(f"[red]✗ {escape(problem)}[/red]", soft_wrap=True)
        raise typer.Exit(code=1)
    console.print("[green]✓ Marketplace is valid[/green]")


@app.command()
def detect(path: Path = typer.Argument(Path("."), help="Project directory")) -> None:
    """Detect a project's framework and technology stack.

    Args:
        path: Project directory
    """
    typer.echo(format_frameworks(detect_stack(path)))


@app.command("detect-web")
def detect_web(
    package_json: Path = typer.Argument(Path("package.json"), help="package.json or project directory"),
) -> None:
    """Detect the web framework from package.json.

    Args:
        package_json: Path to package.json
    """
    typer.echo(detect_web_framework(package_json))


if __name__ == "__main__":
    app()
