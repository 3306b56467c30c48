"""Exception hierarchy for the Monerium client.

All exceptions inherit from :class:`MoneriumError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`monerium.exit_codes`.
Library callers catch the specific subclasses; the ``monerium`` CLI catches
``MoneriumError`` around each command and exits with the matching code.

Subclass hierarchy::

    MoneriumError               (exit 1)
    +-- UnclassifiableGrantError (exit 2)
    +-- ApiError                (exit 5, 3 on 401/403, 4 on 404)
    +-- TransportError          (exit 6)
    +-- MalformedResponseError  (exit 7)
    +-- ConfigError             (exit 1)
"""

from __future__ import annotations

from typing import Any

from monerium.exit_codes import (
    EXIT_API_ERROR,
    EXIT_AUTH_FAILURE,
    EXIT_CONNECTION_ERROR,
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_USAGE,
    EXIT_MALFORMED_RESPONSE,
    EXIT_NOT_FOUND,
)


class MoneriumError(Exception):
    """Base exception for all Monerium client errors.

    Args:
        message: Human-readable error description.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class UnclassifiableGrantError(MoneriumError):
    """Raised when authentication arguments match no supported OAuth2 grant.

    Raised before any network traffic: the arguments carry none of
    ``code``, ``refresh_token`` or ``client_secret``.
    """

    exit_code = EXIT_INVALID_USAGE

    def __init__(self, message: str = "Authentication method could not be detected."):
        super().__init__(message)


class ApiError(MoneriumError):
    """Raised when the API answers with a non-2xx status.

    The parsed JSON body is kept verbatim on :attr:`body` so callers can
    inspect the upstream error schema (for instance ``{"error": "invalid_grant"}``
    from the token endpoint).

    Args:
        status: The HTTP status code.
        body: The decoded JSON payload of the error response.
    """

    exit_code = EXIT_API_ERROR

    def __init__(self, status: int, body: Any):
        self.status = status
        self.body = body
        super().__init__(_describe(status, body))
        if status in (401, 403):
            self.exit_code = EXIT_AUTH_FAILURE
        elif status == 404:
            self.exit_code = EXIT_NOT_FOUND


class TransportError(MoneriumError):
    """Raised on network-level failures (timeout, DNS resolution, connection refused).

    The underlying :mod:`httpx` exception is chained as ``__cause__``.
    """

    exit_code = EXIT_CONNECTION_ERROR


class MalformedResponseError(MoneriumError):
    """Raised when a response body is not valid JSON or does not fit its model.

    Args:
        status: The HTTP status code of the offending response, if known.
        text: The raw response text, or the validation details.
        reason: Short description used in the message.
    """

    exit_code = EXIT_MALFORMED_RESPONSE

    def __init__(
        self,
        status: int | None,
        text: str,
        reason: str = "response is not valid JSON",
    ):
        self.status = status
        self.text = text
        snippet = text[:200] if text else "<empty body>"
        prefix = f"HTTP {status}: " if status is not None else ""
        super().__init__(f"{prefix}{reason}: {snippet}")


class ConfigError(MoneriumError):
    """Raised for configuration problems (unknown environment, unresolvable credential source)."""

    exit_code = EXIT_GENERIC_FAILURE


def _describe(status: int, body: Any) -> str:
    """Build a short message from an upstream error payload."""
    msg = ""
    if isinstance(body, dict):
        msg = (
            body.get("message")
            or body.get("error_description")
            or body.get("error")
            or body.get("detail")
            or ""
        )
    elif body is not None:
        msg = str(body)
    prefix = f"HTTP {status}"
    return f"{prefix}: {msg}" if msg else prefix
