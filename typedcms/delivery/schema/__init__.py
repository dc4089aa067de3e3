"""Schema layer: field classification and per-content-type models."""

from .classifier import FieldClassification, classify_content_type, classify_field, resolve_targets
from .registry import (
    ContentModel,
    ContentModelRegistry,
    EntryModel,
    EntryPayload,
    FieldBinding,
    attribute_name,
    class_name,
)

__all__ = [
    "ContentModel",
    "ContentModelRegistry",
    "EntryModel",
    "EntryPayload",
    "FieldBinding",
    "FieldClassification",
    "attribute_name",
    "class_name",
    "classify_content_type",
    "classify_field",
    "resolve_targets",
]
