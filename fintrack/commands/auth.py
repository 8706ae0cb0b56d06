"""Account commands (register, login, logout)."""

from rich.markup import escape

from fintrack.api import AuthClient
from fintrack.commands.context import console, fail
from fintrack.config import load_config
from fintrack.errors import FintrackError
from fintrack.session import end_session, start_session


def register_command(name: str, email: str, password: str) -> None:
    """Create an account on the server."""
    config = load_config()
    try:
        AuthClient(config["api_url"]).register(name, email, password)
    except FintrackError as e:
        fail(e)

    console.print(f"[green]✓[/green] Registered {escape(email)}")
    console.print("[dim]Run 'fintrack login' to start a session[/dim]")


def login_command(email: str, password: str) -> None:
    """Log in and store the session token."""
    config = load_config()
    try:
        session = AuthClient(config["api_url"]).login(email, password)
    except FintrackError as e:
        fail(e)

    try:
        start_session(session)
    except OSError as e:
        fail(f"Could not save session: {e}")

    console.print(f"[green]✓[/green] Logged in as {escape(email)}")


def logout_command() -> None:
    """Forget the stored session."""
    if end_session():
        console.print("[green]✓[/green] Logged out")
    else:
        console.print("[dim]Not logged in[/dim]")
