"""Typer application and CLI entry point for ``monerium``.

The CLI is a thin shell over :class:`~monerium.client.MoneriumClient`:

* ``monerium auth-url`` -- build a PKCE authorization URL (no network).
* ``monerium token`` -- run any of the three grants and print the bearer
  profile.
* ``monerium context|profile|balances|orders|order|tokens`` --
  authenticate with client credentials, then print the resource.

Settings come from ``MONERIUM_*`` environment variables and the global
options (see :func:`monerium.config.load_settings`). Library errors are
reported on stderr and mapped to the exit codes in
:mod:`monerium.exit_codes`.
"""

from __future__ import annotations

import contextlib
import signal
import sys
from collections.abc import Iterator
from typing import Any, Optional

import typer

from monerium import __version__
from monerium.exit_codes import EXIT_INVALID_USAGE


app = typer.Typer(
    name="monerium",
    help="Command-line client for the Monerium API.",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
)


def _version_callback(value: bool) -> None:
    """Print version and exit when --version is passed."""
    if value:
        typer.echo(f"monerium {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    env: Optional[str] = typer.Option(
        None, "--env", "-e", help="Environment: production or sandbox."
    ),
    client_id: Optional[str] = typer.Option(
        None, "--client-id", help="OAuth2 client id (default: $MONERIUM_CLIENT_ID)."
    ),
    client_secret: Optional[str] = typer.Option(
        None, "--client-secret", help="OAuth2 client secret (default: $MONERIUM_CLIENT_SECRET)."
    ),
    timeout: Optional[float] = typer.Option(
        None, "--timeout", help="Request timeout in seconds."
    ),
    json_output: bool = typer.Option(False, "--json", help="JSON output format."),
    plain_output: bool = typer.Option(False, "--plain", help="Plain text output."),
    no_color: bool = typer.Option(False, "--no-color", help="Disable color output."),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Suppress non-essential output."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug output."),
) -> None:
    """Initialise output and resolve settings before every sub-command.

    The resolved :class:`~monerium.config.ClientSettings` is stored in
    ``ctx.obj["settings"]``.
    """
    from monerium.config import load_settings
    from monerium.output import OutputFormat, OutputManager, set_output

    fmt = OutputFormat.AUTO
    if json_output:
        fmt = OutputFormat.JSON
    elif plain_output:
        fmt = OutputFormat.PLAIN

    output = OutputManager(format=fmt, no_color=no_color, quiet=quiet, verbose=verbose)
    output.configure_logging()
    set_output(output)

    ctx.ensure_object(dict)
    with _handle_errors():
        ctx.obj["settings"] = load_settings(
            environment=env,
            client_id=client_id,
            client_secret=client_secret,
            timeout=timeout,
        )


# ------------------------------------------------------------------ #
# Helpers
# ------------------------------------------------------------------ #


@contextlib.contextmanager
def _handle_errors() -> Iterator[None]:
    """Report :class:`~monerium.exceptions.MoneriumError` and exit with its code."""
    from monerium.exceptions import ApiError, MoneriumError
    from monerium.output import error, format_response

    try:
        yield
    except ApiError as exc:
        error(str(exc))
        if exc.body is not None:
            format_response(exc.body)
        raise typer.Exit(code=exc.exit_code) from None
    except MoneriumError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None


def _client(ctx: typer.Context) -> Any:
    from monerium.client import MoneriumClient

    settings = ctx.obj["settings"]
    return MoneriumClient(settings.environment, timeout=settings.timeout)


def _require(value: Optional[str], flag: str) -> str:
    if not value:
        from monerium.output import error

        error(f"Missing {flag} (or the matching MONERIUM_* environment variable).")
        raise typer.Exit(code=EXIT_INVALID_USAGE)
    return value


def _authenticated_call(ctx: typer.Context, operation: str, *args: Any) -> None:
    """Authenticate with client credentials, call *operation* and print its result."""
    from monerium.models import ClientCredentialsArgs
    from monerium.output import debug, format_response

    settings = ctx.obj["settings"]
    grant = ClientCredentialsArgs(
        client_id=_require(settings.client_id, "--client-id"),
        client_secret=_require(settings.client_secret, "--client-secret"),
    )
    with _handle_errors(), _client(ctx) as client:
        client.authenticate(grant)
        debug(f"Calling {operation} on {client.environment.api}")
        format_response(getattr(client, operation)(*args))


# ------------------------------------------------------------------ #
# Authentication commands
# ------------------------------------------------------------------ #


@app.command("auth-url")
def auth_url(
    ctx: typer.Context,
    state: str = typer.Option(..., "--state", help="Opaque value echoed back on redirect."),
    redirect_uri: Optional[str] = typer.Option(None, "--redirect-uri"),
    scope: Optional[str] = typer.Option(None, "--scope"),
    address: Optional[str] = typer.Option(
        None, "--address", help="Wallet address to link during authorization."
    ),
) -> None:
    """Print a PKCE authorization URL and the code verifier to complete it with."""
    from monerium.output import format_response, info

    settings = ctx.obj["settings"]
    client = _client(ctx)
    url = client.pkce_request(
        {
            "client_id": _require(settings.client_id, "--client-id"),
            "state": state,
            "redirect_uri": redirect_uri,
            "scope": scope,
            "address": address,
        }
    )
    info("Open the URL, then run `monerium token --code ... --code-verifier ...`.")
    format_response({"url": url, "code_verifier": client.code_verifier})


@app.command("token")
def token(
    ctx: typer.Context,
    code: Optional[str] = typer.Option(None, "--code", help="Authorization code."),
    code_verifier: Optional[str] = typer.Option(None, "--code-verifier"),
    redirect_uri: Optional[str] = typer.Option(None, "--redirect-uri"),
    refresh_token: Optional[str] = typer.Option(None, "--refresh-token"),
    scope: Optional[str] = typer.Option(None, "--scope"),
) -> None:
    """Exchange a grant for a bearer profile and print it.

    The grant is picked from the options given: ``--code`` (authorization
    code), else ``--refresh-token``, else the client secret.
    """
    from monerium.output import format_response, success

    settings = ctx.obj["settings"]
    args = {
        "client_id": _require(settings.client_id, "--client-id"),
        "code": code,
        "code_verifier": code_verifier,
        "redirect_uri": redirect_uri,
        "refresh_token": refresh_token,
        "scope": scope,
    }
    # The secret only travels with the client-credentials grant.
    if code is None and refresh_token is None:
        args["client_secret"] = settings.client_secret
    with _handle_errors(), _client(ctx) as client:
        profile = client.authenticate(args)
    success("Authenticated.")
    format_response(profile)


# ------------------------------------------------------------------ #
# Resource commands
# ------------------------------------------------------------------ #


@app.command("context")
def context(ctx: typer.Context) -> None:
    """Show the auth context of the client's token."""
    _authenticated_call(ctx, "get_auth_context")


@app.command("profile")
def profile(
    ctx: typer.Context,
    profile_id: str = typer.Argument(help="Profile id."),
) -> None:
    """Show a profile with its KYC state and accounts."""
    _authenticated_call(ctx, "get_profile", profile_id)


@app.command("balances")
def balances(
    ctx: typer.Context,
    profile_id: Optional[str] = typer.Argument(None, help="Profile id; all profiles when omitted."),
) -> None:
    """Show balances."""
    _authenticated_call(ctx, "get_balances", profile_id)


@app.command("orders")
def orders(
    ctx: typer.Context,
    address: Optional[str] = typer.Option(None, "--address"),
    tx_hash: Optional[str] = typer.Option(None, "--tx-hash"),
    profile_id: Optional[str] = typer.Option(None, "--profile"),
    memo: Optional[str] = typer.Option(None, "--memo"),
    account_id: Optional[str] = typer.Option(None, "--account-id"),
    state: Optional[str] = typer.Option(
        None, "--state", help="placed, pending, processed or rejected."
    ),
) -> None:
    """List orders, optionally filtered."""
    from pydantic import ValidationError

    from monerium.models import OrderFilter
    from monerium.output import error

    try:
        filter = OrderFilter(
            address=address,
            tx_hash=tx_hash,
            profile=profile_id,
            memo=memo,
            account_id=account_id,
            state=state,
        )
    except ValidationError as exc:
        error(f"Invalid filter: {exc.errors()[0]['msg']}")
        raise typer.Exit(code=EXIT_INVALID_USAGE) from None
    _authenticated_call(ctx, "get_orders", filter)


@app.command("order")
def order(
    ctx: typer.Context,
    order_id: str = typer.Argument(help="Order id."),
) -> None:
    """Show one order."""
    _authenticated_call(ctx, "get_order", order_id)


@app.command("tokens")
def tokens(ctx: typer.Context) -> None:
    """List the tokens Monerium issues."""
    _authenticated_call(ctx, "get_tokens")


# ------------------------------------------------------------------ #
# Entry point
# ------------------------------------------------------------------ #


def _setup_signal_handlers() -> None:
    """Install a SIGINT handler so Ctrl-C exits cleanly."""

    def _handler(signum: int, frame: Any) -> None:  # noqa: ANN401
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)

    signal.signal(signal.SIGINT, _handler)


def main() -> None:
    """Console-script entry point declared in ``pyproject.toml``."""
    _setup_signal_handlers()
    app()
