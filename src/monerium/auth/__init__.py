"""OAuth2 authentication for the Monerium API.

This package holds the protocol-level pieces shared by both clients:

- :mod:`~monerium.auth.pkce` -- PKCE verifier/challenge derivation and the
  authorization URL.
- :mod:`~monerium.auth.grants` -- grant-type classification and token
  request parameters.
- :mod:`~monerium.auth.session` -- :class:`AuthSession`, the in-memory
  bearer profile and derived ``Authorization`` header.

The token exchange itself is performed by
:meth:`monerium.client.MoneriumClient.authenticate` (or its async twin),
which routes ``POST auth/token`` through the request pipeline.
"""

from monerium.auth.grants import classify, token_request_params
from monerium.auth.pkce import authorization_url, code_challenge, derive_pkce
from monerium.auth.session import AuthSession

__all__ = [
    "AuthSession",
    "authorization_url",
    "classify",
    "code_challenge",
    "derive_pkce",
    "token_request_params",
]
