"""PKCE (:rfc:`7636`) verifier/challenge derivation and authorization URLs.

The random source and the digest are parameters so that tests can pin
them; production callers use the defaults (:func:`secrets.token_bytes`
and :func:`hashlib.sha256`).
"""

from __future__ import annotations

import base64
import hashlib
import secrets
from typing import Any, Callable

from monerium.encoding import url_encoded
from monerium.models import PKCEPair, PKCERequestArgs

VERIFIER_BYTES = 64
"""Random bytes per verifier; hex encoding yields 128 characters, the RFC maximum."""

CODE_CHALLENGE_METHOD = "S256"


def code_challenge(
    code_verifier: str,
    digest: Callable[[bytes], Any] = hashlib.sha256,
) -> str:
    """Derive the ``S256`` code challenge for *code_verifier*.

    Args:
        code_verifier: The verifier string.
        digest: Hash constructor; must return an object with ``digest()``.

    Returns:
        The base64url-encoded digest with ``=`` padding stripped.
    """
    raw = digest(code_verifier.encode("ascii")).digest()
    return base64.urlsafe_b64encode(raw).rstrip(b"=").decode("ascii")


def derive_pkce(
    random_source: Callable[[int], bytes] = secrets.token_bytes,
) -> PKCEPair:
    """Generate a fresh PKCE pair.

    Args:
        random_source: Callable returning *n* cryptographically secure
            random bytes.

    Returns:
        A :class:`~monerium.models.PKCEPair` whose verifier is the hex
        encoding of :data:`VERIFIER_BYTES` random bytes.
    """
    code_verifier = random_source(VERIFIER_BYTES).hex()
    return PKCEPair(
        code_verifier=code_verifier,
        code_challenge=code_challenge(code_verifier),
    )


def authorization_url(base_url: str, args: PKCERequestArgs, challenge: str) -> str:
    """Build the URL an end user is redirected to in order to authorize a client.

    Args:
        base_url: The environment's API base URL.
        args: Caller-supplied request fields; unset optional fields are
            left out of the query.
        challenge: The code challenge of the PKCE pair in use.

    Returns:
        ``{base_url}/auth?{query}``.
    """
    params: dict[str, Any] = args.model_dump()
    params["code_challenge"] = challenge
    params["code_challenge_method"] = CODE_CHALLENGE_METHOD
    params["response_type"] = "code"
    return f"{base_url}/auth?{url_encoded(params)}"
