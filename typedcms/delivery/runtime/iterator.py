"""Pull-based pagination over entry collections.

An EntryIterator fetches one page only when its buffer is empty and a
caller asks for the next item. Each page is resolved with a fresh
ResolutionCache, so results are never shared, or stale, across pages.

Delivery order within a page is last-fetched-first: items are popped from
the tail of the buffer, so a page ``[i1, i2, i3]`` yields ``i3, i2, i1``.
Callers that need API order should use ``DeliveryClient.fetch_all`` or sort.
"""

from __future__ import annotations

from dataclasses import dataclass
from time import perf_counter
from typing import Protocol

from pydantic import ValidationError

from ..core.config import DEFAULT_LIMIT, normalize_include, normalize_limit
from ..core.exceptions import DecodeError, DeliveryError, IteratorDone
from ..models.raw import EntryPage
from ..resolution.cache import ResolutionCache
from ..resolution.resolver import EntryResolver
from ..resolution.store import EntryStore
from ..schema.registry import EntryModel
from .telemetry import log_iterator_exhausted, log_page_error, log_page_fetched


@dataclass(frozen=True)
class ListOptions:
    """Pagination options for a listing.

    Attributes:
        page: Zero-based page to start from
        limit: Page size; non-positive means the default (100)
        include: Link depth the API should include with each page (0-10)
    """

    page: int = 0
    limit: int = DEFAULT_LIMIT
    include: int = 0


class PageSource(Protocol):
    """Anything that can fetch one page of raw entries."""

    async def fetch_page(
        self,
        content_type_id: str,
        *,
        limit: int,
        skip: int,
        include: int,
        locale: str | None = None,
    ) -> EntryPage: ...


def resolve_page(
    resolver: EntryResolver,
    content_type_id: str,
    page: EntryPage,
    cache: ResolutionCache | None = None,
) -> list[EntryModel]:
    """Resolve every item of a page, in API order.

    The page's own items are visible to link resolution alongside its
    includes, so siblings on the same page link to each other.

    Raises:
        DecodeError: If an item's fields do not match its content type
    """
    resolver.registry.get(content_type_id)
    cache = cache if cache is not None else ResolutionCache()
    store = EntryStore.from_page(page)
    resolved: list[EntryModel] = []
    for raw in page.items:
        try:
            resolved.append(resolver.resolve_item(content_type_id, raw, store, cache))
        except ValidationError as e:
            raise DecodeError(
                f"Entry '{raw.id}' does not match content type '{content_type_id}': {e}"
            ) from e
    return resolved


class EntryIterator:
    """Cursor over one content type's entries.

    States:
        - buffered: ``next()`` pops from the buffer without I/O
        - empty: ``next()`` fetches the page at ``offset`` first
        - exhausted: a fetch returned no items; ``next()`` keeps raising
          ``IteratorDone`` without further requests

    A failed fetch raises and leaves the iterator in the empty state, so
    calling ``next()`` again retries the same page.
    """

    def __init__(
        self,
        source: PageSource,
        resolver: EntryResolver,
        content_type_id: str,
        options: ListOptions | None = None,
        *,
        locale: str | None = None,
        default_limit: int = DEFAULT_LIMIT,
    ) -> None:
        options = options or ListOptions()
        # Fail fast on unknown content types
        resolver.registry.get(content_type_id)

        self.content_type_id = content_type_id
        self.page = max(options.page, 0)
        self.limit = normalize_limit(options.limit, default=default_limit)
        self.offset = self.page * self.limit
        self.include = normalize_include(options.include)
        self.locale = locale
        self.total: int | None = None
        self._source = source
        self._resolver = resolver
        self._items: list[EntryModel] = []
        self._cache = ResolutionCache()
        self._exhausted = False

    @property
    def exhausted(self) -> bool:
        return self._exhausted

    @property
    def buffered(self) -> int:
        """Number of resolved items waiting to be delivered."""
        return len(self._items)

    @property
    def cache(self) -> ResolutionCache:
        """Cache of the most recent page fetch."""
        return self._cache

    def __aiter__(self) -> EntryIterator:
        return self

    async def __anext__(self) -> EntryModel:
        return await self.next()

    async def next(self) -> EntryModel:
        """Return the next item, fetching a page if the buffer is empty.

        Raises:
            IteratorDone: Once a fetch comes back empty, and on every call after
            DeliveryError: If the page fetch fails
        """
        if self._exhausted:
            raise IteratorDone()

        if not self._items:
            await self.fetch()

        if not self._items:
            self._exhausted = True
            log_iterator_exhausted(
                content_type_id=self.content_type_id, page=self.page, offset=self.offset
            )
            raise IteratorDone()

        item = self._items.pop()
        if not self._items:
            self.page += 1
            self.offset = self.page * self.limit
        return item

    async def fetch(self) -> None:
        """Fetch and resolve the page at the current offset, replacing the buffer.

        Raises:
            DeliveryError: On transport or decode failure; the buffer is untouched
        """
        start = perf_counter()
        try:
            page = await self._source.fetch_page(
                self.content_type_id,
                limit=self.limit,
                skip=self.offset,
                include=self.include,
                locale=self.locale,
            )
            cache = ResolutionCache()
            items = resolve_page(self._resolver, self.content_type_id, page, cache)
        except DeliveryError as e:
            log_page_error(
                content_type_id=self.content_type_id,
                page=self.page,
                offset=self.offset,
                error_type=type(e).__name__,
                error_message=str(e),
            )
            raise

        self._cache = cache
        self._items = items
        self.total = page.total
        log_page_fetched(
            content_type_id=self.content_type_id,
            page=self.page,
            offset=self.offset,
            items=len(items),
            includes=len(page.includes.entries) + len(page.includes.assets),
            total=page.total,
            cache_hits=cache.hits,
            latency_ms=(perf_counter() - start) * 1000.0,
        )

    async def collect(self) -> list[EntryModel]:
        """Drain the iterator into a list (delivery order)."""
        out: list[EntryModel] = []
        async for item in self:
            out.append(item)
        return out

    def __repr__(self) -> str:
        return (
            f"EntryIterator(content_type_id={self.content_type_id!r}, page={self.page}, "
            f"limit={self.limit}, offset={self.offset}, buffered={len(self._items)})"
        )
