"""Core components."""

from .config import (
    DEFAULT_ENVIRONMENT,
    DEFAULT_LIMIT,
    DEFAULT_LOCALE,
    MAX_INCLUDE_DEPTH,
    MAX_LIMIT,
    ClientConfig,
    get_base_url,
    normalize_include,
    normalize_limit,
)
from .enums import DeliveryApi, FieldShape, FieldType, LinkType
from .exceptions import (
    ConfigurationError,
    DecodeError,
    DeliveryError,
    IteratorDone,
    RateLimitError,
    SchemaError,
    TransportError,
)

__all__ = [
    "ClientConfig",
    "ConfigurationError",
    "DEFAULT_ENVIRONMENT",
    "DEFAULT_LIMIT",
    "DEFAULT_LOCALE",
    "DecodeError",
    "DeliveryApi",
    "DeliveryError",
    "FieldShape",
    "FieldType",
    "IteratorDone",
    "LinkType",
    "MAX_INCLUDE_DEPTH",
    "MAX_LIMIT",
    "RateLimitError",
    "SchemaError",
    "TransportError",
    "get_base_url",
    "normalize_include",
    "normalize_limit",
]
