"""Grant-type resolution for the token endpoint.

``POST auth/token`` accepts three OAuth2 grants. Typed arguments
(:data:`~monerium.models.AuthArgs`) name their grant explicitly; plain
mappings are classified structurally, in a fixed precedence because the
field sets of the three shapes may overlap:

1. ``code`` present          -> ``authorization_code``
2. ``refresh_token`` present -> ``refresh_token``
3. ``client_secret`` present -> ``client_credentials``

Anything else raises :class:`~monerium.exceptions.UnclassifiableGrantError`.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Union

from monerium.exceptions import UnclassifiableGrantError
from monerium.models import (
    AuthorizationCodeArgs,
    ClientCredentialsArgs,
    GrantType,
    RefreshTokenArgs,
)

GrantArgs = Union[
    AuthorizationCodeArgs, RefreshTokenArgs, ClientCredentialsArgs, Mapping[str, Any]
]

_PRECEDENCE: tuple[tuple[str, GrantType], ...] = (
    ("code", GrantType.AUTHORIZATION_CODE),
    ("refresh_token", GrantType.REFRESH_TOKEN),
    ("client_secret", GrantType.CLIENT_CREDENTIALS),
)


def _as_mapping(args: GrantArgs) -> dict[str, Any]:
    if isinstance(args, (AuthorizationCodeArgs, RefreshTokenArgs, ClientCredentialsArgs)):
        return args.model_dump()
    if isinstance(args, Mapping):
        return dict(args)
    raise UnclassifiableGrantError(
        f"Authentication arguments must be a mapping or grant model, got {type(args).__name__}"
    )


def classify(args: GrantArgs) -> GrantType:
    """Return the grant type *args* describe.

    Raises:
        UnclassifiableGrantError: If *args* carry none of ``code``,
            ``refresh_token`` or ``client_secret``.
    """
    if isinstance(args, (AuthorizationCodeArgs, RefreshTokenArgs, ClientCredentialsArgs)):
        return args.grant_type
    fields = _as_mapping(args)
    for key, grant_type in _PRECEDENCE:
        if fields.get(key) is not None:
            return grant_type
    raise UnclassifiableGrantError()


def with_code_verifier(args: GrantArgs, code_verifier: str | None) -> GrantArgs:
    """Fill in a missing ``code_verifier`` of an authorization-code grant.

    Other grants, and arguments that already carry a verifier, are
    returned as given.
    """
    if code_verifier is None or classify(args) is not GrantType.AUTHORIZATION_CODE:
        return args
    if isinstance(args, AuthorizationCodeArgs):
        if args.code_verifier is None:
            return args.model_copy(update={"code_verifier": code_verifier})
        return args
    fields = _as_mapping(args)
    if fields.get("code_verifier") is None:
        fields["code_verifier"] = code_verifier
        return fields
    return args


def token_request_params(args: GrantArgs) -> dict[str, str]:
    """Build the form fields for ``POST auth/token``.

    Returns a new dict: the non-``None`` fields of *args* with
    ``grant_type`` merged in. *args* itself is not modified.

    Raises:
        UnclassifiableGrantError: As for :func:`classify`.
    """
    grant_type = classify(args)
    params = {key: value for key, value in _as_mapping(args).items() if value is not None}
    params["grant_type"] = grant_type.value
    return params
