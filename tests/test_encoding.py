"""Tests for body and query-string encoding."""

from __future__ import annotations

import json

import pytest

from monerium.encoding import ContentType, url_encoded
from monerium.models import OrderState


class TestUrlEncoded:
    def test_simple(self) -> None:
        assert url_encoded({"a": "1", "b": "2"}) == "a=1&b=2"

    def test_insertion_order(self) -> None:
        assert url_encoded({"z": "1", "a": "2"}) == "z=1&a=2"

    def test_space_becomes_plus(self) -> None:
        assert url_encoded({"scope": "read write"}) == "scope=read+write"

    def test_reserved_characters(self) -> None:
        assert url_encoded({"redirect_uri": "http://localhost:5173/?x=1&y"}) == (
            "redirect_uri=http%3A%2F%2Flocalhost%3A5173%2F%3Fx%3D1%26y"
        )

    def test_none_dropped(self) -> None:
        assert url_encoded({"a": None, "b": "x", "c": None}) == "b=x"

    def test_empty(self) -> None:
        assert url_encoded({}) == ""

    def test_enum_and_bool(self) -> None:
        assert url_encoded({"state": OrderState.placed, "flag": True}) == "state=placed&flag=true"

    def test_numbers(self) -> None:
        assert url_encoded({"n": 5}) == "n=5"


class TestContentType:
    def test_header_values(self) -> None:
        assert ContentType.JSON.header_value == "application/json"
        assert ContentType.FORM.header_value == "application/x-www-form-urlencoded"

    def test_json_serialize(self) -> None:
        assert json.loads(ContentType.JSON.serialize({"a": [1, 2]})) == {"a": [1, 2]}

    def test_form_serialize(self) -> None:
        assert ContentType.FORM.serialize({"a": "b c"}) == "a=b+c"

    @pytest.mark.parametrize("content_type", list(ContentType))
    def test_string_passthrough(self, content_type: ContentType) -> None:
        assert content_type.serialize("already=encoded") == "already=encoded"
