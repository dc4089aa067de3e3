"""Field shape classification.

Decides, for one field of one content type, which reference shape it has.
The decision only depends on the field's declared type and on its
``linkContentType`` validations resolved against the loaded schema:

    ============  =============  ==========================
    field kind    targets        shape
    ============  =============  ==========================
    scalar        -              SCALAR / SCALAR_ARRAY
    asset link    -              ASSET / ASSET_COLLECTION
    entry link    1, not self    ENTRY / ENTRY_COLLECTION
    entry link    1, is self     ENTRY_REFERENCE / REFERENCE_COLLECTION
    entry link    0 or >1        POLYMORPHIC / POLYMORPHIC_COLLECTION
    ============  =============  ==========================

"Is self" means the validated target set is exactly the owning content
type. Only that case is laid out as a shared reference; cycles that run
through *other* types are broken at resolution time by the cache.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from ..core.enums import FieldShape, LinkType
from ..models.schema import ContentTypeSchema, FieldSchema


@dataclass(frozen=True)
class FieldClassification:
    """Classification result for one field.

    Attributes:
        field: Field being classified
        shape: Reference shape
        targets: Known target content type ids (empty unless an entry link)
    """

    field: FieldSchema
    shape: FieldShape
    targets: tuple[str, ...] = ()

    @property
    def target(self) -> str | None:
        """The single concrete target, if the shape has one."""
        if self.shape in (
            FieldShape.ENTRY,
            FieldShape.ENTRY_REFERENCE,
            FieldShape.ENTRY_COLLECTION,
            FieldShape.REFERENCE_COLLECTION,
        ):
            return self.targets[0]
        return None


def resolve_targets(field: FieldSchema, known_ids: Iterable[str]) -> tuple[str, ...]:
    """Validated target content types that exist in the schema.

    Unknown ids in a validation are dropped rather than treated as errors.
    """
    known = set(known_ids)
    return tuple(ct for ct in field.link_content_types() if ct in known)


def classify_field(
    field: FieldSchema,
    owner: ContentTypeSchema,
    schemas: Iterable[ContentTypeSchema],
) -> FieldClassification:
    """Classify a field of ``owner``.

    Args:
        field: Field to classify
        owner: Content type that declares the field
        schemas: Every content type of the loaded schema

    Returns:
        FieldClassification with shape and resolved targets
    """
    link_type = field.target_link_type
    if link_type is None:
        shape = FieldShape.SCALAR_ARRAY if field.is_array else FieldShape.SCALAR
        return FieldClassification(field=field, shape=shape)

    if link_type == LinkType.ASSET:
        shape = FieldShape.ASSET_COLLECTION if field.is_array else FieldShape.ASSET
        return FieldClassification(field=field, shape=shape)

    targets = resolve_targets(field, (schema.id for schema in schemas))
    if len(targets) == 1:
        if targets[0] == owner.id:
            shape = FieldShape.REFERENCE_COLLECTION if field.is_array else FieldShape.ENTRY_REFERENCE
        else:
            shape = FieldShape.ENTRY_COLLECTION if field.is_array else FieldShape.ENTRY
    else:
        shape = FieldShape.POLYMORPHIC_COLLECTION if field.is_array else FieldShape.POLYMORPHIC
    return FieldClassification(field=field, shape=shape, targets=targets)


def classify_content_type(
    owner: ContentTypeSchema,
    schemas: Iterable[ContentTypeSchema],
) -> list[FieldClassification]:
    """Classify every field of ``owner`` in declaration order."""
    all_schemas = list(schemas)
    return [classify_field(field, owner, all_schemas) for field in owner.fields]
