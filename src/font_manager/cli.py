"""``fm`` command line interface.

Examples:
    fm install FiraCode
    fm install "FiraCode@nerdfonts" "Inter@fontsource" https://example.com/font.zip
    fm install -f fonts.txt
    fm uninstall FiraCode
    fm list
"""

import asyncio
import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from .exceptions import FontAlreadyInstalledError
from .exceptions import FontError
from .manager import FontManager
from .platform import get_platform
from .settings import FontManagerSettings
from .sources import default_sources

app = typer.Typer(
    rich_markup_mode="rich",
    help="fm is a font manager for Linux and macOS (Nerd Fonts, Fontsource, direct URLs).",
)
console = Console()
err_console = Console(stderr=True)


def build_manager(settings: FontManagerSettings | None = None) -> FontManager:
    """Create a manager for the running OS with the built-in sources registered."""
    settings = settings or FontManagerSettings()
    return FontManager(
        platform=get_platform(settings),
        sources=default_sources(timeout=settings.http_timeout, user_agent=settings.user_agent),
        settings=settings,
    )


def _get_manager(ctx: typer.Context) -> FontManager:
    if ctx.obj is None:
        try:
            ctx.obj = build_manager()
        except FontError as e:
            err_console.print(f"[red]Error initializing font manager: {e}[/red]")
            raise typer.Exit(1) from e
    return ctx.obj


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@app.command()
def install(
    ctx: typer.Context,
    names: list[str] = typer.Argument(None, help="Font names, name@source, or archive URLs"),  # noqa: B008
    file: Path = typer.Option(None, "--file", "-f", help="Install every font listed in a file"),  # noqa: B008
) -> None:
    """Install one or more fonts."""
    names = names or []
    if file is not None and names:
        err_console.print("[red]When using -f, no additional font names should be provided[/red]")
        raise typer.Exit(2)
    if file is None and not names:
        err_console.print("[red]Requires at least 1 font name when not using -f[/red]")
        raise typer.Exit(2)

    manager = _get_manager(ctx)

    if file is not None:
        console.print(f"Installing fonts from {file}...")
        try:
            with open(file, encoding="utf-8") as reader:
                asyncio.run(manager.install_from_config(reader))
        except OSError as e:
            err_console.print(f"[red]Error opening config file: {e}[/red]")
            raise typer.Exit(1) from e
        except FontError as e:
            err_console.print(f"[red]Error installing fonts from config: {e}[/red]")
            raise typer.Exit(1) from e
        console.print("[green]Successfully installed fonts from config file[/green]")
        return

    installed = 0
    skipped: list[str] = []
    failed: list[str] = []

    for name in names:
        console.print(f"Installing {name}...")
        try:
            asyncio.run(manager.install(name))
        except FontAlreadyInstalledError:
            console.print(f"[yellow]Skipped {name} (already installed)[/yellow]")
            skipped.append(name)
            continue
        except FontError as e:
            err_console.print(f"[red]Error installing {name}: {e}[/red]")
            failed.append(name)
            continue
        console.print(f"[green]Successfully installed {name}[/green]")
        installed += 1

    console.print("\n[bold]Installation Summary:[/bold]")
    console.print(f"Successfully installed: {installed}")
    if skipped:
        console.print(f"Skipped (already installed): {len(skipped)}")
        for name in skipped:
            console.print(f"  - {name}")
    if failed:
        console.print(f"Failed to install: {len(failed)}")
        for name in failed:
            console.print(f"  - {name}")
        raise typer.Exit(1)


@app.command()
def uninstall(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Installed font name"),
) -> None:
    """Uninstall a font from the user font directory."""
    manager = _get_manager(ctx)
    console.print(f"Uninstalling {name}...")
    try:
        asyncio.run(manager.uninstall(name))
    except FontError as e:
        err_console.print(f"[red]Error uninstalling {name}: {e}[/red]")
        raise typer.Exit(1) from e
    console.print(f"[green]Successfully uninstalled {name}[/green]")


@app.command("list")
def list_command(ctx: typer.Context) -> None:
    """List installed fonts (user and system directories)."""
    manager = _get_manager(ctx)
    try:
        fonts = asyncio.run(manager.list_fonts())
    except FontError as e:
        err_console.print(f"[red]Error listing fonts: {e}[/red]")
        raise typer.Exit(1) from e

    if not fonts:
        console.print("No fonts installed")
        return

    table = Table(title="Installed fonts")
    table.add_column("Name", style="bold")
    table.add_column("Source")
    table.add_column("Installed at")
    table.add_column("Directory", overflow="fold")
    for font in fonts:
        table.add_row(
            font.name,
            font.source or "-",
            font.meta.get("installed_at", "-"),
            font.meta.get("directory", ""),
        )
    console.print(table)


@app.command()
def sources(ctx: typer.Context) -> None:
    """List registered font sources in search order."""
    manager = _get_manager(ctx)
    for position, source in enumerate(manager.sources, start=1):
        console.print(f"{position}. {source.name}")


if __name__ == "__main__":
    app()
