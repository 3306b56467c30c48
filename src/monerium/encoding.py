"""Request body and query-string encoding.

Two wire formats exist in the Monerium API: JSON request bodies and
``application/x-www-form-urlencoded`` bodies (the token endpoint and
supporting-document upload). Query strings use the form encoding too.
:class:`ContentType` names the two variants and owns the serialiser for
each, so the request pipeline never branches on a boolean flag.
"""

from __future__ import annotations

import enum
import json
from collections.abc import Mapping
from typing import Any
from urllib.parse import urlencode


def url_encoded(params: Mapping[str, Any]) -> str:
    """Serialise *params* as ``application/x-www-form-urlencoded``.

    Keys keep their insertion order, spaces become ``+`` and keys whose
    value is ``None`` are dropped. Enum members are encoded by value and
    booleans as ``true``/``false``. An empty mapping encodes to ``""``.

    Args:
        params: The fields to encode.

    Returns:
        The encoded string, without a leading ``?``.
    """
    pairs: list[tuple[str, str]] = []
    for key, value in params.items():
        if value is None:
            continue
        if isinstance(value, enum.Enum):
            value = value.value
        if isinstance(value, bool):
            value = "true" if value else "false"
        pairs.append((key, str(value)))
    return urlencode(pairs)


class ContentType(str, enum.Enum):
    """Closed set of request body encodings."""

    JSON = "application/json"
    FORM = "application/x-www-form-urlencoded"

    @property
    def header_value(self) -> str:
        """The ``Content-Type`` header sent with this encoding."""
        return self.value

    def serialize(self, payload: Any) -> str:
        """Encode *payload* for the wire.

        Strings are treated as already serialised and returned unchanged.
        """
        if isinstance(payload, str):
            return payload
        if self is ContentType.FORM:
            return url_encoded(payload)
        return json.dumps(payload)
