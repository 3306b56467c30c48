"""Environments, credential sources, and settings resolution.

This module covers the configuration the client and CLI need:

* **Environments** -- the two fixed Monerium deployments,
  ``production`` and ``sandbox``. See :data:`ENVIRONMENTS` and
  :func:`get_environment`.
* **Credential resolution** -- :func:`resolve_credential` reads secrets
  from env vars, files, or an interactive prompt.
* **Settings** -- :func:`load_settings` builds a
  :class:`ClientSettings` from ``MONERIUM_*`` environment variables, with
  explicit overrides (CLI flags) taking precedence.
"""

from __future__ import annotations

import getpass
import os
import sys
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, Field, ValidationError

from monerium.exceptions import ConfigError
from monerium.models import Environment

DEFAULT_ENVIRONMENT = "sandbox"

ENVIRONMENTS: dict[str, Environment] = {
    "production": Environment(api="https://api.monerium.app", web="https://monerium.app"),
    "sandbox": Environment(api="https://api.monerium.dev", web="https://sandbox.monerium.dev"),
}
"""Named deployments a client can be bound to."""

_ENV_PREFIX = "MONERIUM_"


def get_environment(name: str) -> Environment:
    """Return the :class:`~monerium.models.Environment` called *name*.

    Raises:
        ConfigError: If *name* is not ``production`` or ``sandbox``.
    """
    try:
        return ENVIRONMENTS[name]
    except KeyError:
        choices = ", ".join(sorted(ENVIRONMENTS))
        raise ConfigError(f"Unknown environment '{name}' (expected one of: {choices})") from None


# --- Credential source resolution ---


def resolve_credential(source: str) -> str:
    """Resolve a credential from its source descriptor.

    Supported formats:
        - ``"env:VAR_NAME"`` -- reads ``os.environ["VAR_NAME"]``
        - ``"file:/path/to/file"`` -- reads file content, stripped of whitespace
        - ``"prompt"`` -- prompts user interactively (requires a TTY)

    Args:
        source: The source descriptor string.

    Returns:
        The resolved credential string.

    Raises:
        ConfigError: If the source can't be resolved.
    """
    if source.startswith("env:"):
        var_name = source[4:]
        value = os.environ.get(var_name)
        if value is None:
            raise ConfigError(
                f"Environment variable '{var_name}' is not set (source: {source})"
            )
        return value

    if source.startswith("file:"):
        path = Path(source[5:]).expanduser()
        if not path.is_file():
            raise ConfigError(f"Credential file not found: {path} (source: {source})")
        try:
            return path.read_text(encoding="utf-8").strip()
        except OSError as exc:
            raise ConfigError(f"Cannot read credential file {path}: {exc}") from exc

    if source == "prompt":
        if not sys.stdin.isatty():
            raise ConfigError(
                "Cannot prompt for credentials: stdin is not a TTY (source: prompt)"
            )
        return getpass.getpass("Enter client secret: ")

    raise ConfigError(f"Unknown credential source format: {source}")


# --- Settings ---


class ClientSettings(BaseModel):
    """Effective settings for a CLI invocation."""

    environment: str = Field(default=DEFAULT_ENVIRONMENT, description="production or sandbox")
    client_id: Optional[str] = None
    client_secret: Optional[str] = None
    timeout: Optional[float] = Field(
        default=None, description="Request timeout in seconds; None leaves httpx's default"
    )


def load_settings(**overrides: Any) -> ClientSettings:
    """Resolve settings from the environment, then apply *overrides*.

    Precedence (high to low):
        1. Keyword overrides whose value is not ``None`` (CLI flags)
        2. ``MONERIUM_ENV``, ``MONERIUM_CLIENT_ID``, ``MONERIUM_CLIENT_SECRET``,
           ``MONERIUM_TIMEOUT``; ``MONERIUM_CLIENT_SECRET_SOURCE`` is
           resolved with :func:`resolve_credential` when the secret itself
           is not set
        3. Defaults

    Raises:
        ConfigError: On an unknown environment name, an unresolvable secret
            source, or a non-numeric timeout.
    """
    data: dict[str, Any] = {}
    env_map = {
        "environment": "ENV",
        "client_id": "CLIENT_ID",
        "client_secret": "CLIENT_SECRET",
        "timeout": "TIMEOUT",
    }
    for field, suffix in env_map.items():
        value = os.environ.get(_ENV_PREFIX + suffix)
        if value:
            data[field] = value

    if "client_secret" not in data:
        secret_source = os.environ.get(_ENV_PREFIX + "CLIENT_SECRET_SOURCE")
        if secret_source:
            data["client_secret"] = resolve_credential(secret_source)

    data.update({key: value for key, value in overrides.items() if value is not None})

    try:
        settings = ClientSettings.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid settings: {exc}") from exc

    get_environment(settings.environment)
    return settings
