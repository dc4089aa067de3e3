"""Custom exception hierarchy."""

from __future__ import annotations


class DeliveryError(Exception):
    """Base exception for all library errors."""

    pass


class ConfigurationError(DeliveryError):
    """Client configuration is missing or invalid."""

    pass


class SchemaError(DeliveryError):
    """Content model is malformed or a content type is unknown."""

    def __init__(self, message: str, content_type_id: str | None = None) -> None:
        super().__init__(message)
        self.content_type_id = content_type_id


class TransportError(DeliveryError):
    """Error from the content delivery API."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code


class RateLimitError(TransportError):
    """API rate limit exceeded."""

    def __init__(self, message: str, retry_after: int = 60) -> None:
        super().__init__(message, status_code=429)
        self.retry_after = retry_after


class DecodeError(DeliveryError):
    """Response envelope or entry payload could not be decoded."""

    pass


class IteratorDone(StopAsyncIteration):
    """Raised by ``EntryIterator.next`` once every page has been delivered.

    Exhaustion is not a failure, so this deliberately sits outside the
    ``DeliveryError`` hierarchy. Subclassing ``StopAsyncIteration`` lets the
    iterator drive ``async for`` loops directly.
    """

    pass
