"""
Unit Tests for Exception Hierarchy

Tests the ShowlistError base class and the HTTP status each family maps to.
"""

import pytest

from showlist.core.exceptions import (
    AuthenticationError,
    CacheConnectionError,
    CacheError,
    CacheKeyError,
    ConfigurationError,
    ConflictError,
    DuplicateItemError,
    NotFoundError,
    PermissionDeniedError,
    ShowlistError,
    TokenError,
    UpstreamError,
    UpstreamUnavailableError,
    ValidationFailedError,
)


@pytest.mark.unit
class TestShowlistError:
    """Test base exception behavior."""

    def test_message_and_defaults(self):
        error = ShowlistError("boom")

        assert str(error) == "boom"
        assert error.request_id is None
        assert error.details == {}
        assert error.status_code == 500

    def test_details_are_copied(self):
        details = {"a": 1}
        error = ShowlistError("boom", details=details)
        details["b"] = 2

        assert error.details == {"a": 1}

    def test_to_dict(self):
        error = NotFoundError("Watchlist not found", request_id="req-1", details={"watchlist_id": "w1"})

        assert error.to_dict() == {
            "error_type": "NotFoundError",
            "message": "Watchlist not found",
            "request_id": "req-1",
            "details": {"watchlist_id": "w1"},
        }

    def test_with_context_chains(self):
        error = ConflictError("taken").with_context(email="ada@example.com")

        assert isinstance(error, ConflictError)
        assert error.details["email"] == "ada@example.com"

    def test_from_exception(self):
        original = ConnectionRefusedError("refused")

        error = CacheConnectionError.from_exception(original, host="localhost")

        assert isinstance(error, CacheConnectionError)
        assert error.message == "refused"
        assert error.details["original_error"] == "ConnectionRefusedError"
        assert error.details["host"] == "localhost"

    def test_repr_includes_context(self):
        text = repr(ShowlistError("boom", request_id="req-1", details={"k": "v"}))

        assert "boom" in text
        assert "req-1" in text


@pytest.mark.unit
class TestHierarchy:
    """Test inheritance and status codes."""

    @pytest.mark.parametrize(
        "exc_class, status_code",
        [
            (ValidationFailedError, 400),
            (DuplicateItemError, 400),
            (AuthenticationError, 401),
            (TokenError, 403),
            (PermissionDeniedError, 403),
            (NotFoundError, 404),
            (ConflictError, 409),
            (UpstreamError, 502),
            (UpstreamUnavailableError, 503),
            (ConfigurationError, 500),
        ],
    )
    def test_status_codes(self, exc_class, status_code):
        assert exc_class("x").status_code == status_code

    def test_families(self):
        assert issubclass(CacheConnectionError, CacheError)
        assert issubclass(CacheKeyError, CacheError)
        assert issubclass(DuplicateItemError, ValidationFailedError)
        assert issubclass(TokenError, AuthenticationError)
        assert issubclass(UpstreamUnavailableError, UpstreamError)

    def test_all_derive_from_base(self):
        for exc_class in (CacheError, ValidationFailedError, NotFoundError, UpstreamError):
            assert issubclass(exc_class, ShowlistError)
