"""Tests for the resource request descriptions."""

from __future__ import annotations

import json

import pytest

from monerium.client import resources
from monerium.encoding import ContentType
from monerium.exceptions import MalformedResponseError, UnclassifiableGrantError
from monerium.models import BearerProfile, LinkAddress, Order, OrderFilter


class TestTokenCall:
    def test_shape(self) -> None:
        call = resources.token({"client_id": "i", "client_secret": "s"})
        assert call.method == "POST"
        assert call.path == "auth/token"
        assert call.content_type is ContentType.FORM
        assert call.authorized is False
        assert call.body == "client_id=i&client_secret=s&grant_type=client_credentials"
        assert call.result is BearerProfile

    def test_unclassifiable(self) -> None:
        with pytest.raises(UnclassifiableGrantError):
            resources.token({"client_id": "i"})


class TestReadCalls:
    @pytest.mark.parametrize(
        ("call", "path"),
        [
            (resources.auth_context(), "auth/context"),
            (resources.profile("p1"), "profiles/p1"),
            (resources.balances("p1"), "profiles/p1/balances"),
            (resources.balances(), "balances"),
            (resources.order("o1"), "orders/o1"),
            (resources.tokens(), "tokens"),
            (resources.orders(), "orders?"),
        ],
    )
    def test_paths(self, call: resources.Call, path: str) -> None:
        assert call.method == "GET"
        assert call.path == path
        assert call.body is None
        assert call.authorized is True

    def test_orders_query(self) -> None:
        call = resources.orders(OrderFilter(address="0x1", account_id="a 1"))
        assert call.path == "orders?address=0x1&accountId=a+1"


class TestWriteCalls:
    def test_link_address_model(self) -> None:
        call = resources.link_address(
            "p1", LinkAddress(address="0xabc", message="m", signature="0xsig")
        )
        assert call.path == "profiles/p1/addresses"
        assert json.loads(call.body) == {
            "address": "0xabc",
            "message": "m",
            "signature": "0xsig",
            "accounts": [],
        }
        assert call.result is None

    def test_place_order_paths(self) -> None:
        assert resources.place_order({"amount": "1"}).path == "orders"
        assert resources.place_order({"amount": "1"}, "p1").path == "profiles/p1/orders"

    def test_supporting_document_is_form(self) -> None:
        call = resources.upload_supporting_document({"file": "a b"})
        assert call.content_type is ContentType.FORM
        assert call.body == "file=a+b"


class TestParse:
    def test_raw_result(self) -> None:
        assert resources.Call("GET", "x").parse({"a": 1}) == {"a": 1}

    def test_none_passthrough(self) -> None:
        assert resources.order("o1").parse(None) is None

    def test_token_requires_body(self) -> None:
        call = resources.token({"client_id": "i", "client_secret": "s"})
        assert call.required is True
        with pytest.raises(MalformedResponseError) as exc_info:
            call.parse(None)
        assert exc_info.value.exit_code == 7

    def test_list_result(self) -> None:
        orders = resources.orders().parse([{"id": "o1"}, {"id": "o2"}])
        assert [o.id for o in orders] == ["o1", "o2"]
        assert isinstance(orders[0], Order)

    def test_unknown_fields_kept(self) -> None:
        order = resources.order("o1").parse({"id": "o1", "newField": 1})
        assert order.model_extra == {"newField": 1}

    def test_mismatch(self) -> None:
        with pytest.raises(MalformedResponseError) as exc_info:
            resources.tokens().parse({"not": "a list"})
        assert exc_info.value.status is None
        assert exc_info.value.exit_code == 7
