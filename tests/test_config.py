"""Tests for fintrack.config and fintrack.session file handling."""

import stat
from pathlib import Path

import pytest

from fintrack.config import DEFAULT_CONFIG, create_default_config, get_config_path, load_config, save_config
from fintrack.errors import AuthError
from fintrack.session import SessionState, end_session, get_session_path, load_session, start_session


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("FINTRACK_API_URL", raising=False)
    monkeypatch.delenv("FINTRACK_LOG_LEVEL", raising=False)


class TestConfig:
    """Tests for loading and saving the config file."""

    def test_defaults_without_file(self, tmp_path: Path) -> None:
        """Should return defaults when no file exists."""
        assert load_config(tmp_path / "missing.toml") == DEFAULT_CONFIG

    def test_file_overrides_defaults(self, tmp_path: Path) -> None:
        """Should merge file values over defaults."""
        path = tmp_path / "config.toml"
        save_config({"currency": "USD", "api_url": "https://example.com/api/"}, path)

        config = load_config(path)

        assert config["currency"] == "USD"
        assert config["api_url"] == "https://example.com/api"
        assert config["report_dir"] == DEFAULT_CONFIG["report_dir"]

    def test_env_overrides_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Should let FINTRACK_API_URL win over the file."""
        path = tmp_path / "config.toml"
        save_config({"api_url": "https://file.example/api"}, path)
        monkeypatch.setenv("FINTRACK_API_URL", "https://env.example/api")

        assert load_config(path)["api_url"] == "https://env.example/api"

    def test_saved_file_is_private(self, tmp_path: Path) -> None:
        """Should write the config with owner-only permissions."""
        path = tmp_path / "nested" / "config.toml"
        create_default_config(path)

        assert stat.S_IMODE(path.stat().st_mode) == 0o600
        assert load_config(path) == DEFAULT_CONFIG

    def test_xdg_location(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Should honour XDG_CONFIG_HOME."""
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))

        assert get_config_path() == tmp_path / "fintrack" / "config.toml"


class TestSession:
    """Tests for the login session file."""

    def test_round_trip(self, tmp_path: Path) -> None:
        """Should load what was saved, with private permissions."""
        path = tmp_path / "session.toml"
        start_session(SessionState(token="jwt", user_id="42"), path)

        assert load_session(path) == SessionState(token="jwt", user_id="42")
        assert stat.S_IMODE(path.stat().st_mode) == 0o600

    def test_missing_session(self, tmp_path: Path) -> None:
        """Should raise AuthError when nobody is logged in."""
        with pytest.raises(AuthError):
            load_session(tmp_path / "session.toml")

    def test_corrupt_session(self, tmp_path: Path) -> None:
        """Should raise AuthError for an unreadable file."""
        path = tmp_path / "session.toml"
        path.write_text("token = ")

        with pytest.raises(AuthError):
            load_session(path)

    def test_session_without_token(self, tmp_path: Path) -> None:
        """Should raise AuthError when the token is blank."""
        path = tmp_path / "session.toml"
        path.write_text('token = ""\nuser_id = "42"\n')

        with pytest.raises(AuthError):
            load_session(path)

    def test_end_session(self, tmp_path: Path) -> None:
        """Should remove the file once and report whether it existed."""
        path = tmp_path / "session.toml"
        start_session(SessionState(token="jwt", user_id="42"), path)

        assert end_session(path)
        assert not end_session(path)
        assert not path.exists()

    def test_xdg_location(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Should honour XDG_STATE_HOME."""
        monkeypatch.setenv("XDG_STATE_HOME", str(tmp_path))

        assert get_session_path() == tmp_path / "fintrack" / "session.toml"
