"""Blocking Monerium client backed by :class:`httpx.Client`.

:class:`MoneriumClient` binds an :class:`~monerium.auth.session.AuthSession`
to one environment and exposes:

- **Authentication** -- :meth:`~MoneriumClient.pkce_request` builds the
  authorization URL; :meth:`~MoneriumClient.authenticate` exchanges a
  grant for a bearer profile.
- **Request pipeline** -- :meth:`~MoneriumClient.request`, a single
  request/response cycle with the session's ``Authorization`` header.
- **Resource operations** -- thin wrappers over
  :mod:`monerium.client.resources`.

See Also:
    :class:`~monerium.client.async_client.AsyncMoneriumClient` for the
    equivalent non-blocking implementation.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Optional, Union

import httpx

from monerium.auth.grants import GrantArgs, with_code_verifier
from monerium.auth.pkce import authorization_url, derive_pkce
from monerium.auth.session import AuthSession
from monerium.client import resources
from monerium.client.pipeline import (
    build_headers,
    build_url,
    handle_response,
    transport_error,
)
from monerium.config import get_environment
from monerium.encoding import ContentType
from monerium.models import (
    AuthContext,
    Balances,
    BearerProfile,
    Environment,
    LinkAddress,
    NewOrder,
    Order,
    OrderFilter,
    PKCERequestArgs,
    Profile,
    SupportingDoc,
    Token,
)

logger = logging.getLogger(__name__)


class MoneriumClient:
    """Synchronous client for the Monerium API.

    Can be used as a context manager, which closes the underlying
    connection pool on exit; otherwise call :meth:`close` when done.

    Args:
        environment: ``"production"``, ``"sandbox"``, or an
            :class:`~monerium.models.Environment`.
        transport: Optional httpx transport (e.g. :class:`httpx.MockTransport`).
        timeout: Request timeout in seconds. ``None`` keeps httpx's default.

    Example::

        with MoneriumClient("sandbox") as client:
            client.authenticate({"client_id": cid, "client_secret": secret})
            tokens = client.get_tokens()
    """

    def __init__(
        self,
        environment: Union[str, Environment] = "sandbox",
        transport: Optional[httpx.BaseTransport] = None,
        timeout: Optional[float] = None,
    ) -> None:
        if isinstance(environment, str):
            environment = get_environment(environment)
        self._session = AuthSession(environment)
        self._transport = transport
        self._timeout = timeout
        self._client: Optional[httpx.Client] = None

    # ------------------------------------------------------------------ #
    # Context manager
    # ------------------------------------------------------------------ #

    def __enter__(self) -> MoneriumClient:
        self._http()
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    def close(self) -> None:
        """Close the underlying :class:`httpx.Client`, if one was opened."""
        if self._client:
            self._client.close()
            self._client = None

    # ------------------------------------------------------------------ #
    # Session state
    # ------------------------------------------------------------------ #

    @property
    def session(self) -> AuthSession:
        return self._session

    @property
    def environment(self) -> Environment:
        return self._session.environment

    @property
    def bearer_profile(self) -> Optional[BearerProfile]:
        return self._session.bearer_profile

    @property
    def code_verifier(self) -> Optional[str]:
        return self._session.code_verifier

    # ------------------------------------------------------------------ #
    # Authentication
    # ------------------------------------------------------------------ #

    def pkce_request(self, args: Union[PKCERequestArgs, Mapping[str, Any]]) -> str:
        """Build the authorization URL for the PKCE authorization-code flow.

        A new verifier is generated and kept on the session, where
        :meth:`authenticate` picks it up if the grant arguments omit
        ``code_verifier``. No request is sent.

        Args:
            args: ``client_id`` and ``state``, optionally ``redirect_uri``,
                ``scope`` and ``address``.

        Returns:
            ``{api}/auth?...`` to redirect the end user to.
        """
        if not isinstance(args, PKCERequestArgs):
            args = PKCERequestArgs.model_validate(dict(args))
        pair = derive_pkce()
        self._session.code_verifier = pair.code_verifier
        return authorization_url(self.environment.api, args, pair.code_challenge)

    def authenticate(self, args: GrantArgs) -> BearerProfile:
        """Exchange a grant for a bearer profile and store it on the session.

        The grant type is resolved from *args* before anything is sent.
        There is no retry and no expiry tracking; call again (for example
        with a refresh token) when the access token expires.

        Args:
            args: An :data:`~monerium.models.AuthArgs` model or a mapping
                with the fields of one grant.

        Returns:
            The new :class:`~monerium.models.BearerProfile`.

        Raises:
            UnclassifiableGrantError: If *args* match no grant.
            ApiError: If the token endpoint rejects the grant.
            TransportError: On network failure.
        """
        call = resources.token(with_code_verifier(args, self._session.code_verifier))
        data = self._execute(call)
        profile = self._session.set_bearer_profile(data)
        logger.debug("Authenticated against %s", self.environment.api)
        return profile

    # ------------------------------------------------------------------ #
    # Request pipeline
    # ------------------------------------------------------------------ #

    def request(
        self,
        method: str,
        path: str,
        body: Optional[str] = None,
        content_type: ContentType = ContentType.JSON,
        authorized: bool = True,
    ) -> Any:
        """Send one request and return the decoded JSON body.

        Args:
            method: HTTP method.
            path: Resource path relative to the API base URL; may include
                a query string, which is sent as given.
            body: Pre-serialised body, sent unmodified.
            content_type: Encoding announced in ``Content-Type``.
            authorized: Attach the session's ``Authorization`` header.

        Returns:
            The decoded JSON body of a 2xx response (``None`` if empty).

        Raises:
            ApiError: On non-2xx status, carrying the decoded body.
            MalformedResponseError: If the body is not JSON.
            TransportError: On network failure.
        """
        url = build_url(self._session, path)
        headers = build_headers(self._session, content_type, authorized)
        try:
            response = self._http().request(method, url, headers=headers, content=body)
        except httpx.TransportError as exc:
            raise transport_error(method, url, exc) from exc
        return handle_response(response)

    # ------------------------------------------------------------------ #
    # Read methods
    # ------------------------------------------------------------------ #

    def get_auth_context(self) -> AuthContext:
        return self._execute(resources.auth_context())

    def get_profile(self, profile_id: str) -> Profile:
        return self._execute(resources.profile(profile_id))

    def get_balances(self, profile_id: Optional[str] = None) -> Union[Balances, list[Balances]]:
        """Balances of *profile_id*, or a list covering every profile when omitted."""
        return self._execute(resources.balances(profile_id))

    def get_orders(
        self, filter: Union[OrderFilter, Mapping[str, Any], None] = None
    ) -> list[Order]:
        return self._execute(resources.orders(filter))

    def get_order(self, order_id: str) -> Order:
        return self._execute(resources.order(order_id))

    def get_tokens(self) -> list[Token]:
        return self._execute(resources.tokens())

    # ------------------------------------------------------------------ #
    # Write methods
    # ------------------------------------------------------------------ #

    def link_address(
        self, profile_id: str, body: Union[LinkAddress, Mapping[str, Any]]
    ) -> Any:
        return self._execute(resources.link_address(profile_id, body))

    def place_order(
        self,
        order: Union[NewOrder, Mapping[str, Any]],
        profile_id: Optional[str] = None,
    ) -> Order:
        return self._execute(resources.place_order(order, profile_id))

    def upload_supporting_document(self, document: Mapping[str, Any]) -> SupportingDoc:
        return self._execute(resources.upload_supporting_document(document))

    # ------------------------------------------------------------------ #
    # Private helpers
    # ------------------------------------------------------------------ #

    def _http(self) -> httpx.Client:
        if self._client is None:
            kwargs: dict[str, Any] = {"transport": self._transport}
            if self._timeout is not None:
                kwargs["timeout"] = self._timeout
            self._client = httpx.Client(**kwargs)
        return self._client

    def _execute(self, call: resources.Call) -> Any:
        data = self.request(
            call.method,
            call.path,
            body=call.body,
            content_type=call.content_type,
            authorized=call.authorized,
        )
        return call.parse(data)
