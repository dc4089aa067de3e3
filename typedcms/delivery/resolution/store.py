"""In-memory view of the entries and assets visible to one resolution."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from ..models.raw import EntryPage, RawAsset, RawEntry


class EntryStore:
    """Raw entries and assets that links may resolve against.

    Lookups are linear scans by id. The entry list keeps the order entries
    were supplied in, and collection lookups return matches in that order,
    not in the order of the requested ids.
    """

    def __init__(
        self,
        entries: Iterable[RawEntry] = (),
        assets: Iterable[RawAsset] = (),
    ) -> None:
        self.entries: list[RawEntry] = list(entries)
        self.assets: list[RawAsset] = list(assets)

    @classmethod
    def from_page(cls, page: EntryPage, extra_entries: Iterable[RawEntry] = ()) -> EntryStore:
        """Visible set of a fetched page: its includes, any extra entries, then its items.

        Page items are part of the visible set so that links between
        siblings on the same page resolve without another request.
        """
        return cls(
            entries=[*page.includes.entries, *extra_entries, *page.items],
            assets=page.includes.assets,
        )

    def find(self, entry_id: str) -> RawEntry | None:
        """First visible entry with ``entry_id``, or None."""
        if not entry_id:
            return None
        for entry in self.entries:
            if entry.id == entry_id:
                return entry
        return None

    def select(self, entry_ids: Sequence[str]) -> list[RawEntry]:
        """Visible entries whose id is in ``entry_ids``, in visible order.

        Ids with no visible entry are dropped silently.
        """
        wanted = list(entry_ids)
        return [entry for entry in self.entries if entry.id in wanted]

    def __len__(self) -> int:
        return len(self.entries)

    def __repr__(self) -> str:
        return f"EntryStore(entries={len(self.entries)}, assets={len(self.assets)})"
