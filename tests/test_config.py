"""Tests for environments, credential sources and settings resolution."""

from __future__ import annotations

import io
from pathlib import Path

import pytest

from monerium.config import (
    DEFAULT_ENVIRONMENT,
    ENVIRONMENTS,
    get_environment,
    load_settings,
    resolve_credential,
)
from monerium.exceptions import ConfigError

_VARS = (
    "MONERIUM_ENV",
    "MONERIUM_CLIENT_ID",
    "MONERIUM_CLIENT_SECRET",
    "MONERIUM_CLIENT_SECRET_SOURCE",
    "MONERIUM_TIMEOUT",
)


class _Tty(io.StringIO):
    def isatty(self) -> bool:
        return True


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _VARS:
        monkeypatch.delenv(name, raising=False)


# ---------------------------------------------------------------------------
# Environments
# ---------------------------------------------------------------------------


class TestEnvironments:
    def test_production(self) -> None:
        env = get_environment("production")
        assert env.api == "https://api.monerium.app"
        assert env.web == "https://monerium.app"

    def test_sandbox(self) -> None:
        env = get_environment("sandbox")
        assert env.api == "https://api.monerium.dev"
        assert env.web == "https://sandbox.monerium.dev"

    def test_only_two(self) -> None:
        assert set(ENVIRONMENTS) == {"production", "sandbox"}

    def test_unknown(self) -> None:
        with pytest.raises(ConfigError, match="production, sandbox"):
            get_environment("dev")


# ---------------------------------------------------------------------------
# Credential sources
# ---------------------------------------------------------------------------


class TestResolveCredential:
    def test_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("MY_SECRET", "s3cret")
        assert resolve_credential("env:MY_SECRET") == "s3cret"

    def test_env_missing(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("MY_SECRET", raising=False)
        with pytest.raises(ConfigError, match="MY_SECRET"):
            resolve_credential("env:MY_SECRET")

    def test_file(self, tmp_path: Path) -> None:
        secret = tmp_path / "secret.txt"
        secret.write_text("  from-file\n", encoding="utf-8")
        assert resolve_credential(f"file:{secret}") == "from-file"

    def test_file_missing(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="not found"):
            resolve_credential(f"file:{tmp_path / 'nope'}")

    def test_prompt_requires_tty(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("monerium.config.sys.stdin", io.StringIO())
        with pytest.raises(ConfigError, match="not a TTY"):
            resolve_credential("prompt")

    def test_prompt(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("monerium.config.sys.stdin", _Tty())
        monkeypatch.setattr("getpass.getpass", lambda prompt: "typed")
        assert resolve_credential("prompt") == "typed"

    def test_unknown_format(self) -> None:
        with pytest.raises(ConfigError, match="Unknown credential source"):
            resolve_credential("vault:abc")


# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------


class TestLoadSettings:
    def test_defaults(self) -> None:
        settings = load_settings()
        assert settings.environment == DEFAULT_ENVIRONMENT
        assert settings.client_id is None
        assert settings.client_secret is None
        assert settings.timeout is None

    def test_from_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("MONERIUM_ENV", "production")
        monkeypatch.setenv("MONERIUM_CLIENT_ID", "cid")
        monkeypatch.setenv("MONERIUM_CLIENT_SECRET", "sec")
        monkeypatch.setenv("MONERIUM_TIMEOUT", "2.5")
        settings = load_settings()
        assert settings.environment == "production"
        assert settings.client_id == "cid"
        assert settings.client_secret == "sec"
        assert settings.timeout == 2.5

    def test_overrides_win(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("MONERIUM_CLIENT_ID", "from-env")
        settings = load_settings(client_id="from-flag", environment=None)
        assert settings.client_id == "from-flag"
        assert settings.environment == "sandbox"

    def test_secret_source(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        secret = tmp_path / "secret"
        secret.write_text("file-secret", encoding="utf-8")
        monkeypatch.setenv("MONERIUM_CLIENT_SECRET_SOURCE", f"file:{secret}")
        assert load_settings().client_secret == "file-secret"

    def test_secret_beats_source(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("MONERIUM_CLIENT_SECRET", "direct")
        monkeypatch.setenv("MONERIUM_CLIENT_SECRET_SOURCE", "vault:nope")
        assert load_settings().client_secret == "direct"

    def test_unknown_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("MONERIUM_ENV", "staging")
        with pytest.raises(ConfigError, match="Unknown environment"):
            load_settings()

    def test_bad_timeout(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("MONERIUM_TIMEOUT", "soon")
        with pytest.raises(ConfigError, match="Invalid settings"):
            load_settings()
