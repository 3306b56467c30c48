"""monerium -- Python client for the Monerium money-movement API.

The package authenticates against Monerium with OAuth2 (authorization code
with PKCE, refresh token, client credentials) and exposes typed read/write
operations on profiles, balances, orders, tokens, supporting documents and
linked addresses.

Typical usage::

    from monerium import MoneriumClient

    with MoneriumClient("sandbox") as client:
        url = client.pkce_request({"client_id": cid, "state": "xyz"})
        # ... redirect the user, receive ?code=... on redirect_uri ...
        client.authenticate({"client_id": cid, "code": code, "redirect_uri": uri})
        print(client.get_auth_context())

Modules:
    client: Blocking and async clients and the shared request pipeline.
    auth: PKCE, grant resolution and the in-memory auth session.
    models: Pydantic models for session state and API resources.
    config: Environments, credential sources and settings.
    exceptions: Exception hierarchy with exit-code mapping.
    utils: Timestamp and order-message helpers for signing orders.
    app: The ``monerium`` command-line interface.
"""

__version__ = "0.1.0"

from monerium.client import AsyncMoneriumClient, MoneriumClient  # noqa: E402
from monerium.exceptions import (  # noqa: E402
    ApiError,
    MalformedResponseError,
    MoneriumError,
    TransportError,
    UnclassifiableGrantError,
)
from monerium.utils import (  # noqa: E402
    generate_random_string,
    place_order_message,
    rfc3339,
)

__all__ = [
    "ApiError",
    "AsyncMoneriumClient",
    "MalformedResponseError",
    "MoneriumClient",
    "MoneriumError",
    "TransportError",
    "UnclassifiableGrantError",
    "__version__",
    "generate_random_string",
    "place_order_message",
    "rfc3339",
]
