"""Entry resolution with cycle breaking.

Architecture:
    EntryResolver turns raw entries into materialized objects of their
    content type's model, following entry links through the visible
    EntryStore and reusing objects through a ResolutionCache.

    Resolving one entry of type T:
    1. Cache hit on (T, id): return the cached object
    2. Scan the visible entries for id; no match -> zero value
    3. Decode the raw fields; failure -> zero value, nothing cached
    4. Build the object with scalar and asset fields only, then cache it
    5. Resolve entry links one by one, in field declaration order,
       assigning into the cached object
    6. Return the object

    Because step 4 happens before step 5, a reference that leads back to an
    entry still being resolved hits the cache and gets the partially
    populated object instead of recursing forever.

    Each resolution is a generator that yields the linked entries it needs
    and receives them back. ``_run`` drives these generators from an
    explicit stack, so a chain of links as long as a page does not grow the
    Python call stack.

Design Decisions:
    - Value-shaped links (single target, polymorphic, and their collections)
      hold a shallow copy taken when the link is resolved. A copy taken while
      the cycle is still open keeps that state: the fields of the closing
      object that come after the re-entry point stay at their defaults.
    - Reference-shaped links (a type linking to itself) share the cached
      object, so self-referential graphs are real object cycles.
    - Misses and decode failures are not errors; they are logged at DEBUG
      and replaced by zero values, or skipped inside collections.

See Also:
    - ContentModelRegistry: Field shapes and models per content type
    - ResolutionCache: The per-page cache
    - EntryIterator: Resolves each fetched page through this class
"""

from __future__ import annotations

import logging
from collections.abc import Generator, Sequence
from typing import Any

from pydantic import ValidationError

from ..core.enums import FieldShape
from ..models.asset import Asset
from ..models.raw import Link, RawEntry
from ..schema.registry import ContentModel, ContentModelRegistry, EntryModel, EntryPayload
from .assets import resolve_asset, resolve_assets
from .cache import ResolutionCache
from .store import EntryStore

logger = logging.getLogger(__name__)

# Yields the resolutions it depends on, receives their results, returns its own.
_Steps = Generator["_Steps", Any, Any]


def _link_id(link: Link | None) -> str:
    return link.id if link is not None else ""


def _link_ids(links: Sequence[Link] | None) -> list[str]:
    return [link.id for link in links or () if link.id]


def _as_value(entry: EntryModel) -> EntryModel:
    return entry.model_copy()


class EntryResolver:
    """Resolves entry ids into materialized objects for one schema."""

    def __init__(self, registry: ContentModelRegistry) -> None:
        self.registry = registry

    def resolve_one(
        self,
        content_type_id: str,
        entry_id: str,
        store: EntryStore,
        cache: ResolutionCache,
    ) -> EntryModel:
        """Resolve one entry as ``content_type_id``.

        Returns:
            The cached object for the entry, or the type's zero value if the
            entry is not visible or cannot be decoded

        Raises:
            SchemaError: If ``content_type_id`` is not part of the schema
        """
        content_model = self.registry.get(content_type_id)
        entry = self._run(self._steps(content_model, entry_id, store, cache))
        return entry if entry is not None else content_model.zero()

    def resolve_many(
        self,
        content_type_id: str,
        entry_ids: Sequence[str],
        store: EntryStore,
        cache: ResolutionCache,
    ) -> list[EntryModel]:
        """Resolve several entries of one type, in visible-entry order.

        Ids that are not visible, or whose entry fails to decode, are skipped.
        """
        content_model = self.registry.get(content_type_id)
        return self._run(self._many_steps(content_model, entry_ids, store, cache))

    def resolve_polymorphic(
        self,
        entry_id: str,
        store: EntryStore,
        cache: ResolutionCache,
    ) -> EntryModel | None:
        """Resolve an entry as whatever content type its tag names.

        Returns:
            An object of the tagged type (zero value if it fails to decode),
            or None if the entry is not visible or its tag is unknown
        """
        return self._run(self._polymorphic_steps(entry_id, store, cache))

    def resolve_polymorphic_many(
        self,
        entry_ids: Sequence[str],
        store: EntryStore,
        cache: ResolutionCache,
    ) -> list[EntryModel]:
        """Polymorphic resolution per id, in visible-entry order, skipping unmatched."""
        return self._run(self._polymorphic_many_steps(entry_ids, store, cache))

    def resolve_entry(
        self,
        raw: RawEntry,
        store: EntryStore,
        cache: ResolutionCache,
    ) -> EntryModel:
        """Resolve a raw entry by its own content type tag.

        Raises:
            SchemaError: If the tag is not part of the schema
        """
        content_model = self.registry.get(raw.content_type_id)
        entry = self._run(self._steps(content_model, raw.id, store, cache, raw=raw))
        return entry if entry is not None else content_model.zero()

    def resolve_item(
        self,
        content_type_id: str,
        raw: RawEntry,
        store: EntryStore,
        cache: ResolutionCache,
    ) -> EntryModel:
        """Resolve a page item, for which a decode failure is an error.

        Raises:
            SchemaError: If ``content_type_id`` is not part of the schema
            pydantic.ValidationError: If the item does not match its content type
        """
        content_model = self.registry.get(content_type_id)
        cached = cache.get(content_model.id, raw.id)
        if cached is not None:
            return cached
        payload = content_model.decode(raw)
        entry = self._run(self._steps(content_model, raw.id, store, cache, raw=raw, payload=payload))
        return entry if entry is not None else content_model.zero()

    def resolve_asset(self, asset_id: str, store: EntryStore) -> Asset:
        """Resolve an asset id; the zero Asset on a miss."""
        return resolve_asset(asset_id, store.assets)

    def _run(self, steps: _Steps) -> Any:
        """Drive a resolution and every resolution it yields to completion."""
        stack: list[_Steps] = [steps]
        sent: Any = None
        while True:
            try:
                pending = stack[-1].send(sent)
            except StopIteration as done:
                stack.pop()
                if not stack:
                    return done.value
                sent = done.value
            else:
                stack.append(pending)
                sent = None

    def _steps(
        self,
        content_model: ContentModel,
        entry_id: str,
        store: EntryStore,
        cache: ResolutionCache,
        raw: RawEntry | None = None,
        payload: EntryPayload | None = None,
    ) -> _Steps:
        cached = cache.get(content_model.id, entry_id)
        if cached is not None:
            return cached

        if raw is None:
            raw = store.find(entry_id)
        if raw is None:
            logger.debug(
                "entry_not_visible",
                extra={"entry_id": entry_id, "content_type_id": content_model.id},
            )
            return None
        if raw.content_type_id and raw.content_type_id != content_model.id:
            logger.debug(
                "content_type_mismatch",
                extra={
                    "entry_id": entry_id,
                    "expected": content_model.id,
                    "actual": raw.content_type_id,
                },
            )

        if payload is None:
            try:
                payload = content_model.decode(raw)
            except ValidationError as e:
                logger.debug(
                    "entry_decode_failed",
                    extra={
                        "entry_id": entry_id,
                        "content_type_id": content_model.id,
                        "errors": e.error_count(),
                    },
                )
                return None

        entry = content_model.materialize(raw.id, payload)
        self._assign_assets(content_model, entry, payload, store)
        cache.put(content_model.id, raw.id, entry)

        for binding in content_model.link_bindings:
            value = getattr(payload, binding.attribute)
            shape = binding.shape
            resolved: Any

            if shape == FieldShape.ENTRY:
                target = self.registry.get(binding.target)
                linked = yield self._steps(target, _link_id(value), store, cache)
                resolved = _as_value(linked) if linked is not None else target.zero()
            elif shape == FieldShape.ENTRY_REFERENCE:
                resolved = yield self._steps(content_model, _link_id(value), store, cache)
            elif shape == FieldShape.POLYMORPHIC:
                linked = yield self._polymorphic_steps(_link_id(value), store, cache)
                resolved = _as_value(linked) if linked is not None else None
            elif shape == FieldShape.ENTRY_COLLECTION:
                target = self.registry.get(binding.target)
                linked_many = yield self._many_steps(target, _link_ids(value), store, cache)
                resolved = [_as_value(e) for e in linked_many]
            elif shape == FieldShape.REFERENCE_COLLECTION:
                resolved = yield self._many_steps(content_model, _link_ids(value), store, cache)
            else:
                linked_many = yield self._polymorphic_many_steps(_link_ids(value), store, cache)
                resolved = [_as_value(e) for e in linked_many]

            setattr(entry, binding.attribute, resolved)
        return entry

    def _many_steps(
        self,
        content_model: ContentModel,
        entry_ids: Sequence[str],
        store: EntryStore,
        cache: ResolutionCache,
    ) -> _Steps:
        resolved: list[EntryModel] = []
        for raw in store.select(entry_ids):
            entry = yield self._steps(content_model, raw.id, store, cache, raw=raw)
            if entry is not None:
                resolved.append(entry)
        return resolved

    def _polymorphic_steps(self, entry_id: str, store: EntryStore, cache: ResolutionCache) -> _Steps:
        raw = store.find(entry_id)
        if raw is None:
            logger.debug("entry_not_visible", extra={"entry_id": entry_id})
            return None
        content_model = self._tagged_model(raw)
        if content_model is None:
            return None
        entry = yield self._steps(content_model, raw.id, store, cache, raw=raw)
        return entry if entry is not None else content_model.zero()

    def _polymorphic_many_steps(
        self,
        entry_ids: Sequence[str],
        store: EntryStore,
        cache: ResolutionCache,
    ) -> _Steps:
        resolved: list[EntryModel] = []
        for raw in store.select(entry_ids):
            content_model = self._tagged_model(raw)
            if content_model is None:
                continue
            entry = yield self._steps(content_model, raw.id, store, cache, raw=raw)
            if entry is not None:
                resolved.append(entry)
        return resolved

    def _tagged_model(self, raw: RawEntry) -> ContentModel | None:
        content_model = self.registry.find(raw.content_type_id)
        if content_model is None:
            logger.debug(
                "unknown_content_type",
                extra={"entry_id": raw.id, "content_type_id": raw.content_type_id},
            )
        return content_model

    def _assign_assets(
        self,
        content_model: ContentModel,
        entry: EntryModel,
        payload: EntryPayload,
        store: EntryStore,
    ) -> None:
        for binding in content_model.asset_bindings:
            value = getattr(payload, binding.attribute)
            if binding.shape == FieldShape.ASSET_COLLECTION:
                setattr(entry, binding.attribute, resolve_assets(_link_ids(value), store.assets))
            else:
                setattr(entry, binding.attribute, resolve_asset(_link_id(value), store.assets))
