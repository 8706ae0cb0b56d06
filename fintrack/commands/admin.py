"""Admin commands for setting up configuration."""

import sys

from rich.markup import escape

from fintrack.commands.context import console
from fintrack.config import create_default_config, get_config_path, load_config


def init_command(force: bool = False) -> None:
    """Create the default configuration file."""
    config_path = get_config_path()

    # Guard: refuse to overwrite without force flag
    if config_path.exists() and not force:
        console.print("[red]Initialization failed:[/red]", style="bold")
        console.print(f"  Config already exists: {escape(str(config_path))}")
        console.print("\n[yellow]Use 'fintrack init --force' to overwrite[/yellow]")
        sys.exit(1)

    try:
        console.print(f"[cyan]Creating config file at {escape(str(config_path))}...[/cyan]")
        create_default_config(config_path)
    except OSError as e:
        console.print(f"[red]Filesystem error: {escape(str(e))}[/red]", style="bold")
        sys.exit(1)

    config = load_config(config_path)
    console.print("[green]✓[/green] Config file created (permissions: 600)")
    console.print(f"[dim]API URL: {escape(str(config['api_url']))}[/dim]")
    console.print("\n[green]Initialization complete![/green] Run 'fintrack login' next.", style="bold")
