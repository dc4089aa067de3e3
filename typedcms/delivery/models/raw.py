"""Raw delivery API response schemas.

This module defines Pydantic models for the undecoded page envelope. Entry
``fields`` are deliberately kept as plain JSON: they are only decoded, into
the content type's own payload model, when the resolver reaches them.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class LinkSys(BaseModel):
    """``sys`` block of a link object."""

    id: str = ""
    type: str = "Link"
    link_type: str | None = Field(None, alias="linkType")

    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class Link(BaseModel):
    """Reference to another entry or asset by id."""

    sys: LinkSys = Field(default_factory=LinkSys)

    model_config = ConfigDict(extra="ignore")

    @property
    def id(self) -> str:
        return self.sys.id

    @classmethod
    def to(cls, target_id: str, link_type: str = "Entry") -> Link:
        """Build a link object pointing at ``target_id``."""
        return cls(sys=LinkSys(id=target_id, link_type=link_type))


class EntrySys(BaseModel):
    """``sys`` block of an entry or asset."""

    id: str = Field(..., min_length=1)
    type: str = "Entry"
    content_type: Link | None = Field(None, alias="contentType")
    revision: int | None = None
    locale: str | None = None

    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class RawEntry(BaseModel):
    """An entry as delivered: id, content type tag and undecoded fields."""

    sys: EntrySys
    fields: dict[str, Any] = Field(default_factory=dict)

    model_config = ConfigDict(extra="ignore")

    @property
    def id(self) -> str:
        return self.sys.id

    @property
    def content_type_id(self) -> str:
        """Content type tag used for polymorphic dispatch ("" if absent)."""
        if self.sys.content_type is None:
            return ""
        return self.sys.content_type.id


class ImageDetails(BaseModel):
    width: int = 0
    height: int = 0

    model_config = ConfigDict(extra="ignore")


class FileDetails(BaseModel):
    size: int = 0
    image: ImageDetails | None = None

    model_config = ConfigDict(extra="ignore")


class AssetFile(BaseModel):
    url: str = ""
    file_name: str | None = Field(None, alias="fileName")
    content_type: str | None = Field(None, alias="contentType")
    details: FileDetails | None = None

    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class AssetFields(BaseModel):
    title: str = ""
    description: str = ""
    file: AssetFile | None = None

    model_config = ConfigDict(extra="ignore")


class RawAsset(BaseModel):
    """An asset as delivered in ``includes.Asset``."""

    sys: EntrySys
    fields: AssetFields = Field(default_factory=AssetFields)

    model_config = ConfigDict(extra="ignore")

    @property
    def id(self) -> str:
        return self.sys.id


class Includes(BaseModel):
    """Linked entries and assets delivered alongside a page."""

    entries: list[RawEntry] = Field(default_factory=list, alias="Entry")
    assets: list[RawAsset] = Field(default_factory=list, alias="Asset")

    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class EntryPage(BaseModel):
    """One page of an entries collection response."""

    total: int = 0
    skip: int = 0
    limit: int = 0
    items: list[RawEntry] = Field(default_factory=list)
    includes: Includes = Field(default_factory=Includes)

    model_config = ConfigDict(extra="ignore")
