"""Content model registry: one typed model per content type.

Architecture:
    The registry is the explicit, immutable context of a resolution run. It
    is built once from the fetched schema and passed to the resolver, the
    iterators and the client; nothing about the schema lives in module
    state. For every content type it holds:
    - The field classifications, in declaration order
    - A payload model decoding the raw ``fields`` JSON (links stay as ids)
    - The materialized entry model, with link fields typed by shape

Design Decisions:
    - Models are built with ``pydantic.create_model`` and linked to each
      other through forward references, rebuilt once every class exists
    - Entry models are mutable: the resolver caches an object before its
      entry links are populated and fills them in place
    - Materialized objects are never re-validated; scalar values are
      validated once by the payload model and copied over
    - Declaration order is the resolution order of entry link fields, which
      keeps partially populated objects on cycles reproducible

See Also:
    - classify_field: Decides each field's shape
    - EntryResolver: Populates instances of these models
"""

from __future__ import annotations

import keyword
import logging
import re
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from datetime import date, datetime
from typing import Annotated, Any, ClassVar, ForwardRef, Optional, Union

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, create_model

from ..core.enums import FieldShape, FieldType
from ..core.exceptions import SchemaError
from ..models.asset import Asset
from ..models.raw import Link, RawEntry
from ..models.schema import ContentTypeSchema
from .classifier import FieldClassification, classify_content_type

logger = logging.getLogger(__name__)


def _parse_date(value: Any) -> Any:
    """Accept ``YYYY-MM-DD`` as well as full timestamps, keeping the date."""
    if value is None or isinstance(value, date):
        return value.date() if isinstance(value, datetime) else value
    if isinstance(value, str):
        text = value.strip()
        if not text or text == "null":
            return None
        return date.fromisoformat(text[:10])
    return value


ContentDate = Annotated[Optional[date], BeforeValidator(_parse_date)]

_SCALAR_TYPES: dict[FieldType, Any] = {
    FieldType.SYMBOL: str,
    FieldType.TEXT: str,
    FieldType.INTEGER: int,
    FieldType.NUMBER: float,
    FieldType.BOOLEAN: bool,
}

_SCALAR_ZEROS: dict[FieldType, Any] = {
    FieldType.SYMBOL: "",
    FieldType.TEXT: "",
    FieldType.INTEGER: 0,
    FieldType.NUMBER: 0.0,
    FieldType.BOOLEAN: False,
}


class EntryModel(BaseModel):
    """Base class of every generated entry model."""

    content_type_id: ClassVar[str] = ""

    id: str = ""

    model_config = ConfigDict(extra="ignore", validate_assignment=False, protected_namespaces=())

    def __repr__(self) -> str:
        # Entry graphs may be cyclic; never recurse into linked entries.
        return f"{type(self).__name__}(id={self.id!r})"

    __str__ = __repr__

    def __eq__(self, other: object) -> bool:
        # Compares type and id only; linked fields may hold cycles.
        if not isinstance(other, EntryModel):
            return NotImplemented
        return type(self) is type(other) and self.id == other.id


class EntryPayload(BaseModel):
    """Base class of every generated payload (raw ``fields``) model."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True, protected_namespaces=())


_RESERVED = frozenset(dir(EntryModel)) | frozenset(dir(EntryPayload)) | {"id"}


def attribute_name(field_id: str) -> str:
    """Python attribute name for a field id (``featuredImage`` -> ``featured_image``)."""
    name = re.sub(r"(?<=[a-z0-9])([A-Z])", r"_\1", field_id)
    name = re.sub(r"\W+", "_", name).strip("_").lower()
    if not name:
        name = "field"
    if name[0].isdigit():
        name = f"f_{name}"
    if keyword.iskeyword(name) or name in _RESERVED:
        name = f"{name}_"
    return name


def class_name(display_name: str, content_type_id: str) -> str:
    """Class name for a content type: display name with spaces removed."""
    name = re.sub(r"\W+", "", display_name.replace(" ", ""))
    if not name or name[0].isdigit():
        name = re.sub(r"\W+", "", content_type_id) or "Entry"
        name = f"Entry{name[0].upper()}{name[1:]}" if name[0].isdigit() else name
    return name[0].upper() + name[1:]


@dataclass(frozen=True)
class FieldBinding:
    """A classified field bound to its Python attribute name."""

    attribute: str
    classification: FieldClassification

    @property
    def field_id(self) -> str:
        return self.classification.field.id

    @property
    def shape(self) -> FieldShape:
        return self.classification.shape

    @property
    def targets(self) -> tuple[str, ...]:
        return self.classification.targets

    @property
    def target(self) -> str | None:
        return self.classification.target


class ContentModel:
    """Typed view of one content type."""

    def __init__(
        self,
        schema: ContentTypeSchema,
        bindings: list[FieldBinding],
        model: type[EntryModel],
        payload_model: type[EntryPayload],
    ) -> None:
        self.schema = schema
        self.bindings = tuple(bindings)
        self.model = model
        self.payload_model = payload_model
        self.scalar_bindings = tuple(
            b for b in bindings if b.shape in (FieldShape.SCALAR, FieldShape.SCALAR_ARRAY)
        )
        self.asset_bindings = tuple(
            b for b in bindings if b.shape in (FieldShape.ASSET, FieldShape.ASSET_COLLECTION)
        )
        # Resolution order of entry links: declaration order.
        self.link_bindings = tuple(b for b in bindings if b.shape.is_entry_link)

    @property
    def id(self) -> str:
        return self.schema.id

    @property
    def name(self) -> str:
        return self.model.__name__

    def decode(self, raw: RawEntry) -> EntryPayload:
        """Decode the raw fields of an entry.

        Raises:
            pydantic.ValidationError: If the payload does not match the schema
        """
        return self.payload_model.model_validate(raw.fields)

    def zero(self) -> EntryModel:
        """Zero value: every field at its default."""
        return self.model()

    def materialize(self, entry_id: str, payload: EntryPayload) -> EntryModel:
        """Build an object holding only the scalar fields of ``payload``."""
        values: dict[str, Any] = {}
        for b in self.scalar_bindings:
            value = getattr(payload, b.attribute)
            if value is not None:
                values[b.attribute] = value
        return self.model.model_construct(id=entry_id, **values)

    def __repr__(self) -> str:
        return f"ContentModel(id={self.id!r}, name={self.name!r})"


def _payload_definition(binding: FieldBinding) -> tuple[Any, Any]:
    field = binding.classification.field
    shape = binding.shape
    if shape == FieldShape.SCALAR:
        annotation = _scalar_annotation(field.type)
        return Optional[annotation], Field(None, alias=field.id)
    if shape == FieldShape.SCALAR_ARRAY:
        element = _scalar_annotation(field.element_type)
        return Optional[list[element]], Field(None, alias=field.id)
    if shape.is_collection:
        return Optional[list[Link]], Field(None, alias=field.id)
    return Optional[Link], Field(None, alias=field.id)


def _scalar_annotation(field_type: FieldType) -> Any:
    if field_type == FieldType.DATE:
        return ContentDate
    return _SCALAR_TYPES.get(field_type, Any)


def _model_definition(binding: FieldBinding, all_names: list[str], names: dict[str, str]) -> tuple[Any, Any]:
    field = binding.classification.field
    shape = binding.shape
    if shape == FieldShape.SCALAR:
        if field.type == FieldType.DATE:
            return Optional[date], None
        if field.type in _SCALAR_TYPES:
            return _SCALAR_TYPES[field.type], _SCALAR_ZEROS[field.type]
        return Any, None
    if shape == FieldShape.SCALAR_ARRAY:
        element = _SCALAR_TYPES.get(field.element_type, Any)
        return list[element], Field(default_factory=list)
    if shape == FieldShape.ASSET:
        return Asset, Field(default_factory=Asset)
    if shape == FieldShape.ASSET_COLLECTION:
        return list[Asset], Field(default_factory=list)

    if shape.is_polymorphic:
        target: Any = Union[tuple(ForwardRef(n) for n in all_names)]
    else:
        target = ForwardRef(names[binding.target])
    if shape.is_collection:
        return list[target], Field(default_factory=list)
    return Optional[target], None


class ContentModelRegistry:
    """Immutable set of content models for one schema."""

    def __init__(self, schemas: Iterable[ContentTypeSchema]) -> None:
        self._schemas = list(schemas)
        self._models: dict[str, ContentModel] = {}
        self._build()
        logger.info(
            "schema_loaded",
            extra={
                "content_types": len(self._models),
                "models": [m.name for m in self._models.values()],
            },
        )

    @classmethod
    def from_api(cls, payloads: Iterable[dict[str, Any]]) -> ContentModelRegistry:
        """Build a registry from raw ``content_types`` items."""
        try:
            schemas = [ContentTypeSchema.from_api(p) for p in payloads]
        except ValueError as e:
            raise SchemaError(f"Malformed content type: {e}") from e
        return cls(schemas)

    def _build(self) -> None:
        names: dict[str, str] = {}
        taken: set[str] = set()
        for schema in self._schemas:
            if schema.id in names:
                raise SchemaError(f"Duplicate content type '{schema.id}'", schema.id)
            name = class_name(schema.name, schema.id)
            candidate, n = name, 2
            while candidate in taken:
                candidate, n = f"{name}{n}", n + 1
            names[schema.id] = candidate
            taken.add(candidate)

        all_names = [names[s.id] for s in self._schemas]
        namespace: dict[str, type[EntryModel]] = {}
        pending: list[tuple[ContentTypeSchema, list[FieldBinding], type[EntryModel], type[EntryPayload]]] = []

        for schema in self._schemas:
            bindings = self._bind(schema)
            model_fields = {
                b.attribute: _model_definition(b, all_names, names) for b in bindings
            }
            payload_fields = {b.attribute: _payload_definition(b) for b in bindings}
            model = create_model(
                names[schema.id],
                __base__=EntryModel,
                __module__=__name__,
                **model_fields,
            )
            model.content_type_id = schema.id
            if schema.description:
                model.__doc__ = schema.description
            payload_model = create_model(
                f"{names[schema.id]}Fields",
                __base__=EntryPayload,
                __module__=__name__,
                **payload_fields,
            )
            namespace[names[schema.id]] = model
            pending.append((schema, bindings, model, payload_model))

        for schema, bindings, model, payload_model in pending:
            model.model_rebuild(_types_namespace=namespace)
            self._models[schema.id] = ContentModel(schema, bindings, model, payload_model)

    def _bind(self, schema: ContentTypeSchema) -> list[FieldBinding]:
        bindings: list[FieldBinding] = []
        used: set[str] = set()
        for classification in classify_content_type(schema, self._schemas):
            attribute = attribute_name(classification.field.id)
            if attribute in used:
                raise SchemaError(
                    f"Fields of '{schema.id}' collide on attribute '{attribute}'", schema.id
                )
            used.add(attribute)
            bindings.append(FieldBinding(attribute=attribute, classification=classification))
        return bindings

    @property
    def schemas(self) -> tuple[ContentTypeSchema, ...]:
        return tuple(self._schemas)

    @property
    def content_type_ids(self) -> tuple[str, ...]:
        return tuple(self._models)

    def get(self, content_type_id: str) -> ContentModel:
        """Get a content model.

        Raises:
            SchemaError: If the content type is not part of the schema
        """
        content_model = self._models.get(content_type_id)
        if content_model is None:
            raise SchemaError(f"Unknown content type '{content_type_id}'", content_type_id)
        return content_model

    def find(self, content_type_id: str) -> ContentModel | None:
        """Like ``get`` but returns None for unknown content types."""
        return self._models.get(content_type_id)

    def model_for(self, content_type_id: str) -> type[EntryModel]:
        return self.get(content_type_id).model

    def __contains__(self, content_type_id: object) -> bool:
        return content_type_id in self._models

    def __iter__(self) -> Iterator[ContentModel]:
        return iter(self._models.values())

    def __len__(self) -> int:
        return len(self._models)
