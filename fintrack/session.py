"""Login session state.

The bearer token and user id live in one file, written on login and
removed on logout. Commands load it once and hand the SessionState to the
API clients; nothing else reads the file.
"""

import os
import tomllib
from dataclasses import dataclass
from pathlib import Path

import tomli_w

from fintrack.errors import AuthError


@dataclass(frozen=True)
class SessionState:
    """Opaque credentials issued by the auth API."""

    token: str
    user_id: str


def get_xdg_state_home() -> Path:
    """Get XDG state directory, with fallback to ~/.local/state."""
    xdg_state = os.environ.get("XDG_STATE_HOME")
    if xdg_state:
        return Path(xdg_state)
    return Path.home() / ".local" / "state"


def get_session_path() -> Path:
    """Get the session file path (XDG compliant)."""
    return get_xdg_state_home() / "fintrack" / "session.toml"


def start_session(state: SessionState, session_path: Path | None = None) -> None:
    """Persist a new session with owner-only permissions.

    Args:
        state: Token and user id from a successful login.
        session_path: Path to session file. If None, uses default location.
    """
    if session_path is None:
        session_path = get_session_path()

    session_path.parent.mkdir(parents=True, exist_ok=True)

    with open(session_path, "wb") as f:
        tomli_w.dump({"token": state.token, "user_id": state.user_id}, f)

    os.chmod(session_path, 0o600)


def load_session(session_path: Path | None = None) -> SessionState:
    """Load the current session.

    Raises:
        AuthError: If nobody is logged in or the file is unreadable.
    """
    if session_path is None:
        session_path = get_session_path()

    try:
        with open(session_path, "rb") as f:
            data = tomllib.load(f)
    except FileNotFoundError as e:
        raise AuthError("Not logged in. Run 'fintrack login' first.") from e
    except tomllib.TOMLDecodeError as e:
        raise AuthError(f"Session file is corrupt ({e}). Run 'fintrack login' again.") from e

    token = data.get("token")
    if not token:
        raise AuthError("Session has no token. Run 'fintrack login' again.")
    return SessionState(token=str(token), user_id=str(data.get("user_id", "")))


def end_session(session_path: Path | None = None) -> bool:
    """Remove the session file.

    Returns:
        True if a session was removed, False if there was none.
    """
    if session_path is None:
        session_path = get_session_path()

    try:
        session_path.unlink()
    except FileNotFoundError:
        return False
    return True
