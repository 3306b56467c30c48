"""HTTP clients for the Monerium API.

Provides blocking and non-blocking clients that wrap :mod:`httpx` with
OAuth2 authentication, ``Authorization`` header injection, and typed
resource operations.

Classes:
    :class:`MoneriumClient` -- blocking client backed by :class:`httpx.Client`.
    :class:`AsyncMoneriumClient` -- non-blocking client backed by :class:`httpx.AsyncClient`.

Both share the request envelope in :mod:`monerium.client.pipeline` and
the resource mapping in :mod:`monerium.client.resources`.

Example::

    from monerium.client import MoneriumClient

    with MoneriumClient("sandbox") as client:
        url = client.pkce_request({"client_id": cid, "state": "xyz"})
"""

from monerium.client.async_client import AsyncMoneriumClient
from monerium.client.sync_client import MoneriumClient

__all__ = ["MoneriumClient", "AsyncMoneriumClient"]
