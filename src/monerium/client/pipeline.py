"""Request/response envelope shared by the blocking and non-blocking clients.

The two clients differ only in how they send a request. Everything around
the send -- URL construction, header assembly, response decoding, and the
mapping of HTTP outcome to result or exception -- lives here so both
behave identically:

- :func:`build_url` joins the environment's API base URL and a resource
  path (which may carry its own query string; it is not re-encoded).
- :func:`build_headers` picks ``Content-Type`` from the
  :class:`~monerium.encoding.ContentType` and attaches the session's
  ``Authorization`` value (``""`` when unauthenticated).
- :func:`handle_response` decodes the body as JSON whatever the status,
  returns it on 2xx and raises :class:`~monerium.exceptions.ApiError`
  with the decoded body otherwise.
- :func:`transport_error` wraps an :class:`httpx.TransportError`.

There is no retry: every call is exactly one request.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from monerium.auth.session import AuthSession
from monerium.encoding import ContentType
from monerium.exceptions import ApiError, MalformedResponseError, TransportError

logger = logging.getLogger(__name__)


def build_url(session: AuthSession, path: str) -> str:
    """Return ``{api}/{path}`` for the session's environment."""
    return f"{session.environment.api}/{path.lstrip('/')}"


def build_headers(
    session: AuthSession,
    content_type: ContentType,
    authorized: bool = True,
) -> dict[str, str]:
    """Assemble request headers.

    Args:
        session: Source of the cached ``Authorization`` value.
        content_type: Encoding of the request body.
        authorized: When ``False`` (token exchange) no ``Authorization``
            header is sent at all.
    """
    headers = {
        "Accept": "application/json",
        "Content-Type": content_type.header_value,
    }
    if authorized:
        headers["Authorization"] = session.authorization or ""
    return headers


def handle_response(response: httpx.Response) -> Any:
    """Decode *response* and map its status to a result or an exception.

    Returns:
        The decoded JSON body of a 2xx response, or ``None`` when a 2xx
        response has no body.

    Raises:
        ApiError: On any non-2xx status; ``body`` is the decoded payload.
        MalformedResponseError: If the body is not valid JSON.
    """
    status = response.status_code
    logger.debug("HTTP %s %s -> %s", response.request.method, response.request.url, status)

    if response.is_success and not response.content:
        return None

    try:
        body = response.json()
    except ValueError as exc:
        raise MalformedResponseError(status, response.text) from exc

    if response.is_success:
        return body
    raise ApiError(status, body)


def transport_error(method: str, url: str, exc: httpx.TransportError) -> TransportError:
    """Build the :class:`~monerium.exceptions.TransportError` for a failed send."""
    logger.debug("HTTP %s %s failed: %r", method, url, exc)
    return TransportError(f"{method} {url} failed: {exc}")
