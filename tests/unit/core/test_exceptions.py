"""Precise unit tests for exception hierarchy.

Tests focus on meaningful behavior, not just field access.
"""

import pytest

from typedcms.delivery.core import (
    ConfigurationError,
    DecodeError,
    DeliveryError,
    IteratorDone,
    RateLimitError,
    SchemaError,
    TransportError,
)


def test_rate_limit_error_with_retry_after():
    """Test RateLimitError with retry_after (meaningful behavior)."""
    error = RateLimitError("rate limit", retry_after=120)
    assert error.status_code == 429
    assert error.retry_after == 120
    assert isinstance(error, TransportError)
    assert isinstance(error, DeliveryError)


def test_transport_error_with_status_code():
    """Test TransportError with status_code (meaningful behavior)."""
    error = TransportError("error", status_code=404)
    assert str(error) == "error"
    assert error.status_code == 404
    assert isinstance(error, DeliveryError)


def test_schema_error_with_content_type():
    error = SchemaError("Unknown content type 'post'", content_type_id="post")
    assert error.content_type_id == "post"
    assert isinstance(error, DeliveryError)


@pytest.mark.parametrize("exc_type", [ConfigurationError, DecodeError])
def test_plain_errors_are_delivery_errors(exc_type):
    assert issubclass(exc_type, DeliveryError)


def test_iterator_done_is_not_a_failure():
    """Exhaustion ends async iteration and is not caught as a DeliveryError."""
    assert issubclass(IteratorDone, StopAsyncIteration)
    assert not issubclass(IteratorDone, DeliveryError)
