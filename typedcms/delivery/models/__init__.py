"""Data models for content delivery.

Architecture:
    This module exports the Pydantic v2 models used throughout the library:
    - Schema: ContentTypeSchema, FieldSchema and friends (immutable)
    - Wire: RawEntry, RawAsset, Includes, EntryPage (undecoded page envelope)
    - Values: Asset (immutable leaf value)

    Models for entries themselves are not declared here: they are built per
    content type at schema load time by ``ContentModelRegistry``.
"""

from .asset import Asset
from .raw import (
    AssetFields,
    AssetFile,
    EntryPage,
    EntrySys,
    FileDetails,
    ImageDetails,
    Includes,
    Link,
    LinkSys,
    RawAsset,
    RawEntry,
)
from .schema import ContentTypeSchema, FieldItems, FieldSchema, FieldValidation, Locale

__all__ = [
    "Asset",
    "AssetFields",
    "AssetFile",
    "ContentTypeSchema",
    "EntryPage",
    "EntrySys",
    "FieldItems",
    "FieldSchema",
    "FieldValidation",
    "FileDetails",
    "ImageDetails",
    "Includes",
    "Link",
    "LinkSys",
    "Locale",
    "RawAsset",
    "RawEntry",
]
