"""Content model schema definitions.

These models mirror the content type and locale payloads returned by the
API. A schema is fetched once per client and treated as immutable for the
lifetime of every resolution run built on it.
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..core.enums import FieldType, LinkType

logger = logging.getLogger(__name__)


def _known_type(field: Any) -> bool:
    if not isinstance(field, dict):
        return True
    field_type = field.get("type")
    if isinstance(field_type, str) and FieldType.from_str(field_type) is None:
        return False
    items = field.get("items")
    if field_type == FieldType.ARRAY and isinstance(items, dict):
        item_type = items.get("type")
        return not isinstance(item_type, str) or FieldType.from_str(item_type) is not None
    return True


class FieldValidation(BaseModel):
    """One validation rule attached to a field.

    Only ``linkContentType`` matters to reference resolution; every other
    rule (size, regexp, in, ...) is ignored.
    """

    link_content_type: list[str] = Field(default_factory=list, alias="linkContentType")

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")


class FieldItems(BaseModel):
    """Element description of an Array field."""

    type: FieldType
    link_type: LinkType | None = Field(None, alias="linkType")
    validations: list[FieldValidation] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")


class FieldSchema(BaseModel):
    """A single field of a content type."""

    id: str = Field(..., min_length=1)
    name: str = ""
    type: FieldType
    link_type: LinkType | None = Field(None, alias="linkType")
    items: FieldItems | None = None
    validations: list[FieldValidation] = Field(default_factory=list)
    localized: bool = False
    required: bool = False
    disabled: bool = False
    omitted: bool = False

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    @property
    def is_array(self) -> bool:
        return self.type == FieldType.ARRAY

    @property
    def element_type(self) -> FieldType:
        """Declared type of the value, or of each element for arrays."""
        if self.is_array and self.items is not None:
            return self.items.type
        return self.type

    @property
    def target_link_type(self) -> LinkType | None:
        """Link kind of the field (or of its elements), None for non-links."""
        if self.is_array:
            return self.items.link_type if self.items is not None else None
        return self.link_type

    def link_content_types(self) -> list[str]:
        """Union of validated target content type ids, in declaration order."""
        rules = self.items.validations if self.is_array and self.items else self.validations
        seen: list[str] = []
        for rule in rules:
            for content_type_id in rule.link_content_type:
                if content_type_id not in seen:
                    seen.append(content_type_id)
        return seen


class ContentTypeSchema(BaseModel):
    """A content type: id, display name and ordered fields."""

    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    description: str | None = None
    display_field: str | None = Field(None, alias="displayField")
    fields: list[FieldSchema] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    @field_validator("fields", mode="before")
    @classmethod
    def _drop_unknown_types(cls, value: Any) -> Any:
        """Skip fields whose type (or element type) this client does not model."""
        if not isinstance(value, list):
            return value
        kept = []
        for field in value:
            if _known_type(field):
                kept.append(field)
            else:
                logger.debug(
                    "field_type_skipped",
                    extra={"field_id": field.get("id"), "field_type": field.get("type")},
                )
        return kept

    @classmethod
    def from_api(cls, payload: dict[str, Any]) -> ContentTypeSchema:
        """Create a schema from a raw ``content_types`` item.

        The API nests the identifier under ``sys.id``.
        """
        data = dict(payload)
        data.setdefault("id", (payload.get("sys") or {}).get("id", ""))
        return cls.model_validate(data)

    def get_field(self, field_id: str) -> FieldSchema | None:
        for field in self.fields:
            if field.id == field_id:
                return field
        return None


class Locale(BaseModel):
    """A locale enabled in the environment."""

    code: str = Field(..., min_length=1)
    name: str = ""
    default: bool = False
    fallback_code: str | None = Field(None, alias="fallbackCode")

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")
