"""Small helpers for building order payloads."""

from __future__ import annotations

import secrets
from datetime import datetime, timezone
from typing import Optional, Union

from monerium.models import Currency


def rfc3339(date: datetime) -> str:
    """Format *date* as an RFC 3339 UTC timestamp with second precision.

    Naive datetimes are taken to be UTC already.

    Example::

        rfc3339(datetime(2023, 4, 30, 12, 0, tzinfo=timezone(timedelta(hours=2))))
        # '2023-04-30T10:00:00Z'
    """
    if date.tzinfo is not None:
        date = date.astimezone(timezone.utc)
    return date.strftime("%Y-%m-%dT%H:%M:%SZ")


def place_order_message(
    amount: Union[int, float, str],
    currency: Union[Currency, str],
    iban: str,
    date: Optional[datetime] = None,
) -> str:
    """Build the message a wallet signs to place a redeem order.

    Args:
        amount: Amount to send, rendered as given.
        currency: Order currency; rendered upper-case.
        iban: Receiving account.
        date: Timestamp embedded in the message; defaults to now.

    Returns:
        ``"Send {CURRENCY} {amount} to {iban} at {timestamp}"``.
    """
    if isinstance(currency, Currency):
        currency = currency.value
    when = rfc3339(date or datetime.now(timezone.utc))
    return f"Send {currency.upper()} {amount} to {iban} at {when}"


def generate_random_string(length: int = 128) -> str:
    """Return a URL-safe random string of *length* characters from :mod:`secrets`."""
    return secrets.token_urlsafe(length)[:length]
