"""typedcms.delivery - Typed, reference-resolving content delivery client."""

from .clients import DeliveryClient
from .core import (
    ClientConfig,
    ConfigurationError,
    DecodeError,
    DeliveryApi,
    DeliveryError,
    FieldShape,
    FieldType,
    IteratorDone,
    LinkType,
    RateLimitError,
    SchemaError,
    TransportError,
)
from .models import (
    Asset,
    ContentTypeSchema,
    EntryPage,
    FieldSchema,
    Includes,
    Link,
    Locale,
    RawAsset,
    RawEntry,
)
from .resolution import EntryResolver, EntryStore, ResolutionCache, resolve_asset
from .runtime import EntryIterator, ListOptions
from .schema import ContentModel, ContentModelRegistry, EntryModel, classify_field

__version__ = "0.1.0"

__all__ = [
    # Client
    "DeliveryClient",
    "ClientConfig",
    "DeliveryApi",
    # Pagination
    "EntryIterator",
    "ListOptions",
    # Schema
    "ContentModel",
    "ContentModelRegistry",
    "ContentTypeSchema",
    "EntryModel",
    "FieldSchema",
    "FieldShape",
    "FieldType",
    "LinkType",
    "Locale",
    "classify_field",
    # Resolution
    "EntryResolver",
    "EntryStore",
    "ResolutionCache",
    "resolve_asset",
    # Models
    "Asset",
    "EntryPage",
    "Includes",
    "Link",
    "RawAsset",
    "RawEntry",
    # Exceptions
    "ConfigurationError",
    "DecodeError",
    "DeliveryError",
    "IteratorDone",
    "RateLimitError",
    "SchemaError",
    "TransportError",
]
