"""Resource operations as pure request descriptions.

Each function maps typed arguments to a :class:`Call` -- HTTP method,
resource path, optional body and its encoding -- plus the model the
response decodes into. The clients execute the call through their request
pipeline; nothing here touches the network, so the mapping is shared by
:class:`~monerium.client.MoneriumClient` and
:class:`~monerium.client.AsyncMoneriumClient`.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Optional, Union

from pydantic import BaseModel, TypeAdapter, ValidationError

from monerium.auth.grants import GrantArgs, token_request_params
from monerium.encoding import ContentType, url_encoded
from monerium.exceptions import MalformedResponseError
from monerium.models import (
    AuthContext,
    Balances,
    BearerProfile,
    LinkAddress,
    NewOrder,
    Order,
    OrderFilter,
    Profile,
    SupportingDoc,
    Token,
    dump_payload,
)


@dataclass(frozen=True)
class Call:
    """One request against the API.

    Attributes:
        method: HTTP method.
        path: Resource path relative to the API base URL, query included.
        body: Pre-serialised request body, or ``None`` (always ``None`` for GET).
        content_type: Encoding of *body*.
        authorized: Whether the session's ``Authorization`` header is sent.
        result: Type the decoded JSON is validated into; ``None`` keeps the
            raw JSON.
        required: Whether an empty 2xx body is an error rather than ``None``.
    """

    method: str
    path: str
    body: Optional[str] = None
    content_type: ContentType = ContentType.JSON
    authorized: bool = True
    result: Any = None
    required: bool = False

    def parse(self, data: Any) -> Any:
        """Validate decoded JSON into :attr:`result`.

        Raises:
            MalformedResponseError: If *data* does not fit :attr:`result`, or
                is missing when :attr:`required` is set.
        """
        if data is None and self.required:
            raise MalformedResponseError(
                None, "", reason=f"empty {self.method} {self.path} response"
            )
        if self.result is None or data is None:
            return data
        try:
            return TypeAdapter(self.result).validate_python(data)
        except ValidationError as exc:
            raise MalformedResponseError(
                None, str(exc), reason=f"unexpected {self.method} {self.path} payload"
            ) from exc


def _payload(body: Union[BaseModel, Mapping[str, Any]]) -> dict[str, Any]:
    if isinstance(body, BaseModel):
        return dump_payload(body)
    return dict(body)


# -- Authentication


def token(args: GrantArgs) -> Call:
    """``POST auth/token`` with the grant's form fields and no Authorization header."""
    params = token_request_params(args)
    return Call(
        "POST",
        "auth/token",
        body=ContentType.FORM.serialize(params),
        content_type=ContentType.FORM,
        authorized=False,
        result=BearerProfile,
        required=True,
    )


# -- Read methods


def auth_context() -> Call:
    return Call("GET", "auth/context", result=AuthContext)


def profile(profile_id: str) -> Call:
    return Call("GET", f"profiles/{profile_id}", result=Profile)


def balances(profile_id: Optional[str] = None) -> Call:
    """Balances of one profile, or of every profile the token can read."""
    if profile_id:
        return Call("GET", f"profiles/{profile_id}/balances", result=Balances)
    return Call("GET", "balances", result=list[Balances])


def orders(filter: Union[OrderFilter, Mapping[str, Any], None] = None) -> Call:
    query = url_encoded(_payload(filter)) if filter is not None else ""
    return Call("GET", f"orders?{query}", result=list[Order])


def order(order_id: str) -> Call:
    return Call("GET", f"orders/{order_id}", result=Order)


def tokens() -> Call:
    return Call("GET", "tokens", result=list[Token])


# -- Write methods


def link_address(profile_id: str, body: Union[LinkAddress, Mapping[str, Any]]) -> Call:
    return Call(
        "POST",
        f"profiles/{profile_id}/addresses",
        body=ContentType.JSON.serialize(_payload(body)),
    )


def place_order(
    new_order: Union[NewOrder, Mapping[str, Any]],
    profile_id: Optional[str] = None,
) -> Call:
    path = f"profiles/{profile_id}/orders" if profile_id else "orders"
    return Call(
        "POST",
        path,
        body=ContentType.JSON.serialize(_payload(new_order)),
        result=Order,
    )


def upload_supporting_document(document: Mapping[str, Any]) -> Call:
    """``POST files/supporting-document`` with *document*'s fields form-encoded."""
    return Call(
        "POST",
        "files/supporting-document",
        body=ContentType.FORM.serialize(dict(document)),
        content_type=ContentType.FORM,
        result=SupportingDoc,
    )
