"""Tests for the exception hierarchy and exit-code mapping."""

from __future__ import annotations

import pytest

from monerium.exceptions import (
    ApiError,
    ConfigError,
    MalformedResponseError,
    MoneriumError,
    TransportError,
    UnclassifiableGrantError,
)
from monerium.exit_codes import (
    EXIT_API_ERROR,
    EXIT_AUTH_FAILURE,
    EXIT_CONNECTION_ERROR,
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_USAGE,
    EXIT_MALFORMED_RESPONSE,
    EXIT_NOT_FOUND,
)


class TestHierarchy:
    @pytest.mark.parametrize(
        "exc",
        [
            UnclassifiableGrantError(),
            ApiError(500, None),
            TransportError("x"),
            MalformedResponseError(200, ""),
            ConfigError("x"),
        ],
    )
    def test_all_are_monerium_errors(self, exc: MoneriumError) -> None:
        assert isinstance(exc, MoneriumError)

    def test_exit_codes(self) -> None:
        assert MoneriumError("x").exit_code == EXIT_GENERIC_FAILURE
        assert UnclassifiableGrantError().exit_code == EXIT_INVALID_USAGE
        assert TransportError("x").exit_code == EXIT_CONNECTION_ERROR
        assert MalformedResponseError(None, "x").exit_code == EXIT_MALFORMED_RESPONSE
        assert ConfigError("x").exit_code == EXIT_GENERIC_FAILURE

    def test_exit_code_override(self) -> None:
        assert MoneriumError("x", exit_code=42).exit_code == 42


class TestUnclassifiableGrantError:
    def test_default_message(self) -> None:
        assert str(UnclassifiableGrantError()) == "Authentication method could not be detected."


class TestApiError:
    @pytest.mark.parametrize(
        ("status", "code"),
        [
            (400, EXIT_API_ERROR),
            (401, EXIT_AUTH_FAILURE),
            (403, EXIT_AUTH_FAILURE),
            (404, EXIT_NOT_FOUND),
            (500, EXIT_API_ERROR),
        ],
    )
    def test_status_to_exit_code(self, status: int, code: int) -> None:
        assert ApiError(status, {}).exit_code == code

    @pytest.mark.parametrize(
        ("body", "message"),
        [
            ({"message": "Profile not found"}, "HTTP 404: Profile not found"),
            ({"error": "invalid_grant", "error_description": "expired"}, "HTTP 404: expired"),
            ({"error": "invalid_grant"}, "HTTP 404: invalid_grant"),
            ({"detail": "gone"}, "HTTP 404: gone"),
            ({}, "HTTP 404"),
            (None, "HTTP 404"),
            (["a"], "HTTP 404: ['a']"),
        ],
    )
    def test_message(self, body, message: str) -> None:
        assert str(ApiError(404, body)) == message

    def test_body_kept_verbatim(self) -> None:
        body = {"error": "invalid_grant", "extra": [1, 2]}
        assert ApiError(400, body).body is body


class TestMalformedResponseError:
    def test_message_with_status(self) -> None:
        assert str(MalformedResponseError(502, "Bad Gateway")) == (
            "HTTP 502: response is not valid JSON: Bad Gateway"
        )

    def test_message_without_status(self) -> None:
        err = MalformedResponseError(None, "details", reason="unexpected GET tokens payload")
        assert str(err) == "unexpected GET tokens payload: details"

    def test_long_text_truncated(self) -> None:
        err = MalformedResponseError(200, "x" * 500)
        assert str(err).endswith("x" * 200)
        assert len(err.text) == 500
