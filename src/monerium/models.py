"""Canonical Pydantic models shared across the Monerium client.

This is the single source of truth for data shapes in the project. The
models fall into three groups:

**Session models** -- owned by the auth subsystem:
    :class:`Environment`, :class:`GrantType`, the grant argument union
    (:class:`AuthorizationCodeArgs`, :class:`RefreshTokenArgs`,
    :class:`ClientCredentialsArgs`), :class:`PKCERequestArgs`,
    :class:`PKCEPair` and :class:`BearerProfile`.

**Resource models** -- decoded from API responses:
    :class:`AuthContext`, :class:`Profile`, :class:`Balances`,
    :class:`Order`, :class:`Token`, :class:`SupportingDoc` and their
    nested types. They accept unknown keys (``extra="allow"``) so an
    upstream schema addition never breaks decoding.

**Request models** -- serialised into request bodies or query strings:
    :class:`OrderFilter`, :class:`NewOrder`, :class:`LinkAddress`.

The API speaks camelCase. Resource and request models use snake_case
attribute names with camelCase aliases; dump them with ``by_alias=True``.
"""

from __future__ import annotations

import enum
from typing import Any, ClassVar, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


# --- Environment ---


class Environment(BaseModel):
    """Base URLs of one Monerium deployment.

    ``api`` hosts the REST endpoints and the OAuth2 authorization page;
    ``web`` is the end-user web application.
    """

    model_config = ConfigDict(frozen=True)

    api: str
    web: str


# --- Grants ---


class GrantType(str, enum.Enum):
    """OAuth2 grant types accepted by ``POST auth/token``."""

    AUTHORIZATION_CODE = "authorization_code"
    REFRESH_TOKEN = "refresh_token"
    CLIENT_CREDENTIALS = "client_credentials"


class _GrantArgs(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    grant_type: ClassVar[GrantType]

    client_id: str
    scope: Optional[str] = None


class AuthorizationCodeArgs(_GrantArgs):
    """Arguments for completing the authorization-code (PKCE) grant.

    ``code_verifier`` may be omitted when the same client produced the
    authorization URL with :meth:`~monerium.client.MoneriumClient.pkce_request`;
    the verifier stored on the session is used instead.
    """

    grant_type: ClassVar[GrantType] = GrantType.AUTHORIZATION_CODE

    code: str
    redirect_uri: str
    code_verifier: Optional[str] = None


class RefreshTokenArgs(_GrantArgs):
    """Arguments for exchanging a refresh token for a new bearer profile."""

    grant_type: ClassVar[GrantType] = GrantType.REFRESH_TOKEN

    refresh_token: str


class ClientCredentialsArgs(_GrantArgs):
    """Arguments for the machine-to-machine client-credentials grant."""

    grant_type: ClassVar[GrantType] = GrantType.CLIENT_CREDENTIALS

    client_secret: str


AuthArgs = Union[AuthorizationCodeArgs, RefreshTokenArgs, ClientCredentialsArgs]
"""Typed authentication arguments; each member names its own grant type."""


# --- PKCE ---


class PKCERequestArgs(BaseModel):
    """Caller-supplied fields of the PKCE authorization request.

    Field order is the query-string order of the generated authorization URL.
    """

    client_id: str
    redirect_uri: Optional[str] = None
    scope: Optional[str] = None
    state: str
    address: Optional[str] = None


class PKCEPair(BaseModel):
    """A PKCE code verifier and its ``S256`` challenge."""

    model_config = ConfigDict(frozen=True)

    code_verifier: str
    code_challenge: str


# --- Bearer profile ---


class BearerProfile(BaseModel):
    """The token-endpoint response held by an authenticated session.

    Frozen: a session replaces its profile wholesale and never edits one
    in place.
    """

    model_config = ConfigDict(frozen=True, extra="allow", populate_by_name=True)

    access_token: str
    token_type: str = "Bearer"
    expires_in: Optional[int] = None
    refresh_token: Optional[str] = None
    profile: Optional[str] = None
    user_id: Optional[str] = Field(default=None, alias="userId")


# --- Shared enums ---


class Currency(str, enum.Enum):
    eur = "eur"
    usd = "usd"
    gbp = "gbp"
    isk = "isk"


class Chain(str, enum.Enum):
    polygon = "polygon"
    ethereum = "ethereum"
    gnosis = "gnosis"


class Network(str, enum.Enum):
    mainnet = "mainnet"
    chiado = "chiado"
    goerli = "goerli"
    mumbai = "mumbai"


class ApiModel(BaseModel):
    """Base for resource and request models: camelCase aliases, unknown keys kept."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
    )


# --- Auth context ---


class AuthMethod(str, enum.Enum):
    password = "password"
    resource = "resource"
    jwt = "jwt"
    api_key = "apiKey"


class ProfileType(str, enum.Enum):
    corporate = "corporate"
    personal = "personal"


class Permission(str, enum.Enum):
    read = "read"
    write = "write"


class AuthProfile(ApiModel):
    id: str
    type: Optional[ProfileType] = None
    name: Optional[str] = None
    perms: list[Permission] = Field(default_factory=list)


class AuthDetails(ApiModel):
    method: Optional[AuthMethod] = None
    subject: Optional[str] = None
    verified: Optional[bool] = None


class AuthContext(ApiModel):
    """Who the bearer token belongs to and which profiles it may act on."""

    user_id: str
    email: Optional[str] = None
    name: Optional[str] = None
    roles: list[str] = Field(default_factory=list)
    auth: Optional[AuthDetails] = None
    default_profile: Optional[str] = None
    profiles: list[AuthProfile] = Field(default_factory=list)


# --- Profile ---


class KYCState(str, enum.Enum):
    absent = "absent"
    submitted = "submitted"
    pending = "pending"
    confirmed = "confirmed"


class KYCOutcome(str, enum.Enum):
    approved = "approved"
    rejected = "rejected"
    unknown = "unknown"


class PaymentStandard(str, enum.Enum):
    iban = "iban"
    scan = "scan"


class KYC(ApiModel):
    state: KYCState
    outcome: KYCOutcome


class Account(ApiModel):
    address: str
    currency: Currency
    standard: Optional[PaymentStandard] = None
    iban: Optional[str] = None
    sort_code: Optional[str] = None
    account_number: Optional[str] = None
    network: Optional[Network] = None
    chain: Optional[Chain] = None
    id: Optional[str] = None


class Profile(ApiModel):
    id: str
    name: Optional[str] = None
    kyc: Optional[KYC] = None
    accounts: list[Account] = Field(default_factory=list)


# --- Balances ---


class Balance(ApiModel):
    currency: Currency
    amount: str


class Balances(ApiModel):
    id: str
    address: str
    chain: Chain
    network: Network
    balances: list[Balance] = Field(default_factory=list)


# --- Orders ---


class OrderKind(str, enum.Enum):
    redeem = "redeem"
    issue = "issue"


class OrderState(str, enum.Enum):
    placed = "placed"
    pending = "pending"
    processed = "processed"
    rejected = "rejected"


class Fee(ApiModel):
    provider: str
    currency: Currency
    amount: str


class IBAN(ApiModel):
    standard: Literal["iban"] = "iban"
    iban: str


class SCAN(ApiModel):
    standard: Literal["scan"] = "scan"
    sort_code: str
    account_number: str


class Individual(ApiModel):
    first_name: str
    last_name: str
    country: Optional[str] = None


class Corporation(ApiModel):
    company_name: str
    country: str


class Counterpart(ApiModel):
    identifier: Union[IBAN, SCAN] = Field(discriminator="standard")
    details: Union[Individual, Corporation]


class OrderMetadata(ApiModel):
    approved_at: Optional[str] = None
    processed_at: Optional[str] = None
    rejected_at: Optional[str] = None
    state: Optional[OrderState] = None
    placed_by: Optional[str] = None
    placed_at: Optional[str] = None
    received_amount: Optional[str] = None
    sent_amount: Optional[str] = None


class OrderFilter(ApiModel):
    """Query filters for ``GET orders``; unset fields are left out of the query."""

    address: Optional[str] = None
    tx_hash: Optional[str] = None
    profile: Optional[str] = None
    memo: Optional[str] = None
    account_id: Optional[str] = None
    state: Optional[OrderState] = None


class Order(ApiModel):
    id: str
    profile: Optional[str] = None
    account_id: Optional[str] = None
    address: Optional[str] = None
    kind: Optional[OrderKind] = None
    amount: Optional[str] = None
    currency: Optional[Currency] = None
    total_fee: Optional[str] = None
    fees: list[Fee] = Field(default_factory=list)
    counterpart: Optional[Counterpart] = None
    memo: Optional[str] = None
    rejected_reason: Optional[str] = None
    supporting_document_id: Optional[str] = None
    meta: Optional[OrderMetadata] = None


# --- Tokens ---


class Token(ApiModel):
    currency: Currency
    ticker: str
    symbol: str
    chain: Chain
    network: Network
    address: str
    decimals: int


# --- Write payloads ---


class NewOrder(ApiModel):
    """Body of ``POST orders``; ``message`` is usually built with
    :func:`~monerium.utils.place_order_message` and signed by the wallet."""

    kind: OrderKind
    amount: str
    signature: str
    address: str
    currency: Currency
    counterpart: Counterpart
    message: str
    memo: str
    chain: Chain
    network: Network
    account_id: Optional[str] = None
    supporting_document_id: Optional[str] = None


class CurrencyAccounts(ApiModel):
    network: Network
    chain: Chain
    currency: Currency


class LinkAddress(ApiModel):
    """Body of ``POST profiles/{id}/addresses``."""

    address: str
    message: str
    signature: str
    accounts: list[CurrencyAccounts] = Field(default_factory=list)


# --- Supporting documents ---


class SupportingDocMetadata(ApiModel):
    uploaded_by: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class SupportingDoc(ApiModel):
    id: str
    name: Optional[str] = None
    type: Optional[str] = None
    size: Optional[int] = None
    hash: Optional[str] = None
    meta: Optional[SupportingDocMetadata] = None


def dump_payload(model: BaseModel) -> dict[str, Any]:
    """Serialise a request model to its wire shape (camelCase, enums as values, ``None`` dropped)."""
    return model.model_dump(mode="json", by_alias=True, exclude_none=True)
