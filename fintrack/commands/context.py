"""Shared setup for commands: config, session and API clients."""

import sys
from dataclasses import dataclass
from typing import Any, NoReturn

from rich.console import Console
from rich.markup import escape

from fintrack.api import MailExporter, TransactionRepository
from fintrack.config import load_config
from fintrack.errors import ApiError, AuthError, FintrackError, ValidationError
from fintrack.session import load_session

console = Console()


@dataclass
class CommandContext:
    """Everything a logged-in command needs."""

    config: dict[str, Any]
    repository: TransactionRepository
    mailer: MailExporter

    @property
    def currency(self) -> str:
        return str(self.config["currency"])


def load_context() -> CommandContext:
    """Load config and session and build the API clients.

    Exits with an error notice if nobody is logged in.
    """
    config = load_config()
    try:
        session = load_session()
    except AuthError as e:
        fail(e)
    return CommandContext(
        config=config,
        repository=TransactionRepository(config["api_url"], session),
        mailer=MailExporter(config["api_url"], session),
    )


def fail(error: FintrackError | str) -> NoReturn:
    """Print an error notice and exit with status 1."""
    if isinstance(error, ValidationError):
        console.print("[red]Please fix the following:[/red]", style="bold")
        for field, problem in error.errors.items():
            console.print(f"  [red]{field}[/red]: {escape(problem)}")
    elif isinstance(error, AuthError):
        console.print(f"[red]{escape(str(error))}[/red]", style="bold")
    elif isinstance(error, ApiError):
        console.print(f"[red]{escape(str(error))}[/red]", style="bold")
        console.print("[dim]Nothing was changed. Please try again.[/dim]")
    else:
        console.print(f"[red]Error: {escape(str(error))}[/red]", style="bold")
    sys.exit(1)
