"""Per-run cache of materialized entries."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..schema.registry import EntryModel


class ResolutionCache:
    """One slot per content type mapping entry id to its materialized object.

    An object is stored as soon as its scalar and asset fields are set and
    before any of its entry links are followed. A later lookup of the same
    id, including one made while that object is still being populated,
    returns the stored object, which is what terminates reference cycles.

    A cache belongs to exactly one page fetch and is never shared.
    """

    def __init__(self) -> None:
        self._slots: dict[str, dict[str, EntryModel]] = {}
        self.hits = 0

    def get(self, content_type_id: str, entry_id: str) -> EntryModel | None:
        entry = self._slots.get(content_type_id, {}).get(entry_id)
        if entry is not None:
            self.hits += 1
        return entry

    def put(self, content_type_id: str, entry_id: str, entry: EntryModel) -> None:
        self._slots.setdefault(content_type_id, {})[entry_id] = entry

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, tuple) or len(key) != 2:
            return False
        content_type_id, entry_id = key
        return entry_id in self._slots.get(content_type_id, {})

    def __len__(self) -> int:
        return sum(len(slot) for slot in self._slots.values())
