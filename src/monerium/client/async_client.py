"""Non-blocking Monerium client -- mirrors :class:`~monerium.client.sync_client.MoneriumClient`.

:class:`AsyncMoneriumClient` wraps :class:`httpx.AsyncClient` and offers
the same operations with ``await``. Each call suspends only while waiting
for the HTTP response; there is no internal parallelism.

.. note::
   Nothing orders concurrent calls on one client. If ``authenticate`` runs
   concurrently with a resource call, that call may be sent with either the
   old or the new ``Authorization`` header. Cancel an in-flight call by
   cancelling its task.

See Also:
    :class:`~monerium.client.sync_client.MoneriumClient` for the blocking
    equivalent.
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


class AsyncMoneriumClient:
    """Asynchronous client for the Monerium API.

    Provides the same capabilities as
    :class:`~monerium.client.sync_client.MoneriumClient` using
    :class:`httpx.AsyncClient`. Use it as an async context manager, or call
    :meth:`aclose` when done.

    Args:
        environment: ``"production"``, ``"sandbox"``, or an
            :class:`~monerium.models.Environment`.
        transport: Optional async httpx transport.
        timeout: Request timeout in seconds. ``None`` keeps httpx's default.

    Example::

        async with AsyncMoneriumClient("sandbox") as client:
            await client.authenticate(ClientCredentialsArgs(client_id=cid, client_secret=s))
            orders = await client.get_orders()
    """

    def __init__(
        self,
        environment: Union[str, Environment] = "sandbox",
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: Optional[float] = None,
    ) -> None:
        if isinstance(environment, str):
            environment = get_environment(environment)
        self._session = AuthSession(environment)
        self._transport = transport
        self._timeout = timeout
        self._client: Optional[httpx.AsyncClient] = None

    # ------------------------------------------------------------------ #
    # Async context manager
    # ------------------------------------------------------------------ #

    async def __aenter__(self) -> AsyncMoneriumClient:
        self._http()
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._client:
            await self._client.aclose()
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
        """Build the PKCE authorization URL and keep the verifier on the session.

        Synchronous: no request is sent.
        """
        if not isinstance(args, PKCERequestArgs):
            args = PKCERequestArgs.model_validate(dict(args))
        pair = derive_pkce()
        self._session.code_verifier = pair.code_verifier
        return authorization_url(self.environment.api, args, pair.code_challenge)

    async def authenticate(self, args: GrantArgs) -> BearerProfile:
        """Exchange a grant for a bearer profile and store it on the session.

        Behaves identically to
        :meth:`~monerium.client.sync_client.MoneriumClient.authenticate`.
        """
        call = resources.token(with_code_verifier(args, self._session.code_verifier))
        data = await self._execute(call)
        profile = self._session.set_bearer_profile(data)
        logger.debug("Authenticated against %s", self.environment.api)
        return profile

    # ------------------------------------------------------------------ #
    # Request pipeline
    # ------------------------------------------------------------------ #

    async def request(
        self,
        method: str,
        path: str,
        body: Optional[str] = None,
        content_type: ContentType = ContentType.JSON,
        authorized: bool = True,
    ) -> Any:
        """Send one request and return the decoded JSON body.

        See :meth:`~monerium.client.sync_client.MoneriumClient.request`.
        """
        url = build_url(self._session, path)
        headers = build_headers(self._session, content_type, authorized)
        try:
            response = await self._http().request(method, url, headers=headers, content=body)
        except httpx.TransportError as exc:
            raise transport_error(method, url, exc) from exc
        return handle_response(response)

    # ------------------------------------------------------------------ #
    # Read methods
    # ------------------------------------------------------------------ #

    async def get_auth_context(self) -> AuthContext:
        return await self._execute(resources.auth_context())

    async def get_profile(self, profile_id: str) -> Profile:
        return await self._execute(resources.profile(profile_id))

    async def get_balances(
        self, profile_id: Optional[str] = None
    ) -> Union[Balances, list[Balances]]:
        return await self._execute(resources.balances(profile_id))

    async def get_orders(
        self, filter: Union[OrderFilter, Mapping[str, Any], None] = None
    ) -> list[Order]:
        return await self._execute(resources.orders(filter))

    async def get_order(self, order_id: str) -> Order:
        return await self._execute(resources.order(order_id))

    async def get_tokens(self) -> list[Token]:
        return await self._execute(resources.tokens())

    # ------------------------------------------------------------------ #
    # Write methods
    # ------------------------------------------------------------------ #

    async def link_address(
        self, profile_id: str, body: Union[LinkAddress, Mapping[str, Any]]
    ) -> Any:
        return await self._execute(resources.link_address(profile_id, body))

    async def place_order(
        self,
        order: Union[NewOrder, Mapping[str, Any]],
        profile_id: Optional[str] = None,
    ) -> Order:
        return await self._execute(resources.place_order(order, profile_id))

    async def upload_supporting_document(self, document: Mapping[str, Any]) -> SupportingDoc:
        return await self._execute(resources.upload_supporting_document(document))

    # ------------------------------------------------------------------ #
    # Private helpers
    # ------------------------------------------------------------------ #

    def _http(self) -> httpx.AsyncClient:
        if self._client is None:
            kwargs: dict[str, Any] = {"transport": self._transport}
            if self._timeout is not None:
                kwargs["timeout"] = self._timeout
            self._client = httpx.AsyncClient(**kwargs)
        return self._client

    async def _execute(self, call: resources.Call) -> Any:
        data = await self.request(
            call.method,
            call.path,
            body=call.body,
            content_type=call.content_type,
            authorized=call.authorized,
        )
        return call.parse(data)
