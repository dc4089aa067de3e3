"""Core enumerations for content model and delivery types.

Architecture:
    This module defines the standardized enums shared by the schema layer,
    the classifier and the resolver. Values match the wire format of the
    content delivery API so raw schema payloads map onto them directly.

Key Types:
    - FieldType: Declared type of a content type field
    - LinkType: Target kind of a link field (Entry or Asset)
    - FieldShape: Classified reference shape of a field
    - DeliveryApi: Published content vs draft preview
"""

from enum import Enum


class FieldType(str, Enum):
    """Declared field type as reported by the content model."""

    SYMBOL = "Symbol"
    TEXT = "Text"
    RICH_TEXT = "RichText"
    INTEGER = "Integer"
    NUMBER = "Number"
    DATE = "Date"
    BOOLEAN = "Boolean"
    LOCATION = "Location"
    OBJECT = "Object"
    LINK = "Link"
    ARRAY = "Array"

    @classmethod
    def from_str(cls, value: str) -> "FieldType | None":
        """Get field type from string value. Returns None if no match."""
        try:
            return cls(value)
        except ValueError:
            return None


class LinkType(str, Enum):
    """Target kind of a link field."""

    ENTRY = "Entry"
    ASSET = "Asset"

    def __str__(self) -> str:
        return self.value


class FieldShape(str, Enum):
    """Reference shape of a field, decided once per schema load.

    The shape selects both the attribute layout of the generated model and
    the resolver branch used to populate it.
    """

    SCALAR = "scalar"
    SCALAR_ARRAY = "scalar_array"
    ASSET = "asset"
    ASSET_COLLECTION = "asset_collection"
    # Single entry links
    ENTRY = "entry"
    ENTRY_REFERENCE = "entry_reference"
    POLYMORPHIC = "polymorphic"
    # Entry collections
    ENTRY_COLLECTION = "entry_collection"
    REFERENCE_COLLECTION = "reference_collection"
    POLYMORPHIC_COLLECTION = "polymorphic_collection"

    @property
    def is_entry_link(self) -> bool:
        """Whether populating this field requires resolving other entries."""
        return self in _ENTRY_LINK_SHAPES

    @property
    def is_collection(self) -> bool:
        return self in _COLLECTION_SHAPES

    @property
    def is_reference(self) -> bool:
        """Whether the field shares the cached object instead of holding a copy."""
        return self in (FieldShape.ENTRY_REFERENCE, FieldShape.REFERENCE_COLLECTION)

    @property
    def is_polymorphic(self) -> bool:
        return self in (FieldShape.POLYMORPHIC, FieldShape.POLYMORPHIC_COLLECTION)

    def __str__(self) -> str:
        return self.value


_ENTRY_LINK_SHAPES = frozenset(
    {
        FieldShape.ENTRY,
        FieldShape.ENTRY_REFERENCE,
        FieldShape.POLYMORPHIC,
        FieldShape.ENTRY_COLLECTION,
        FieldShape.REFERENCE_COLLECTION,
        FieldShape.POLYMORPHIC_COLLECTION,
    }
)

_COLLECTION_SHAPES = frozenset(
    {
        FieldShape.SCALAR_ARRAY,
        FieldShape.ASSET_COLLECTION,
        FieldShape.ENTRY_COLLECTION,
        FieldShape.REFERENCE_COLLECTION,
        FieldShape.POLYMORPHIC_COLLECTION,
    }
)


class DeliveryApi(str, Enum):
    """Which content API a client talks to."""

    DELIVERY = "delivery"  # published content
    PREVIEW = "preview"  # drafts included

    def __str__(self) -> str:
        return self.value
