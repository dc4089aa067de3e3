"""Content delivery client.

Architecture:
    DeliveryClient is the entry point of the library. It owns the HTTP
    transport and, once the schema is loaded, the ContentModelRegistry and
    the EntryResolver built on it. Listings hand out EntryIterator objects
    that pull pages through ``fetch_page``.

Request Flow:
    1. ``load_schema()`` fetches content types once and builds the registry
    2. ``entries()`` validates the content type and returns an iterator
    3. ``EntryIterator.next()`` calls ``fetch_page`` when its buffer is empty
    4. The page is resolved with a fresh cache and buffered

See Also:
    - EntryIterator: Pagination state machine
    - EntryResolver: Link resolution with cycle breaking
    - HTTPClient: Transport, error mapping
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError

from ..core.config import MAX_LIMIT, ClientConfig, normalize_include, normalize_limit
from ..core.exceptions import DecodeError, SchemaError
from ..models.raw import EntryPage
from ..models.schema import ContentTypeSchema, Locale
from ..resolution.cache import ResolutionCache
from ..resolution.resolver import EntryResolver
from ..resolution.store import EntryStore
from ..runtime.iterator import EntryIterator, ListOptions, resolve_page
from ..schema.registry import ContentModelRegistry, EntryModel
from ..utils.http import HTTPClient

logger = logging.getLogger(__name__)


class DeliveryClient:
    """Typed, read-only client for one space/environment."""

    def __init__(
        self,
        config: ClientConfig,
        *,
        registry: ContentModelRegistry | None = None,
        http: HTTPClient | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            config: Connection settings
            registry: Pre-built schema registry; skips ``load_schema()``
            http: Transport override (tests, shared sessions)
        """
        self.config = config
        self._http = http or HTTPClient(
            base_url=config.base_url,
            timeout=config.timeout,
            headers={"Authorization": f"Bearer {config.access_token}"},
        )
        self._registry = registry
        self._resolver = EntryResolver(registry) if registry is not None else None

    @classmethod
    def from_env(cls, **kwargs: Any) -> DeliveryClient:
        """Create a client configured from ``TYPEDCMS_*`` environment variables."""
        return cls(ClientConfig.from_env(), **kwargs)

    @property
    def registry(self) -> ContentModelRegistry:
        """Loaded schema registry.

        Raises:
            SchemaError: If no schema has been loaded yet
        """
        if self._registry is None:
            raise SchemaError("Schema not loaded; call load_schema() first")
        return self._registry

    @property
    def resolver(self) -> EntryResolver:
        if self._resolver is None:
            raise SchemaError("Schema not loaded; call load_schema() first")
        return self._resolver

    async def load_schema(self, *, force: bool = False) -> ContentModelRegistry:
        """Fetch the content model and build the registry (once per client)."""
        if self._registry is not None and not force:
            return self._registry
        schemas = await self.fetch_content_types()
        self._registry = ContentModelRegistry(schemas)
        self._resolver = EntryResolver(self._registry)
        return self._registry

    async def fetch_content_types(self) -> list[ContentTypeSchema]:
        """Fetch every content type, following skip/limit pagination."""
        path = f"{self.config.environment_path}/content_types"
        schemas: list[ContentTypeSchema] = []
        skip = 0
        while True:
            data = await self._http.get(path, params={"limit": MAX_LIMIT, "skip": skip})
            items = _items_of(data, path)
            try:
                schemas.extend(ContentTypeSchema.from_api(item) for item in items)
            except ValidationError as e:
                raise SchemaError(f"Malformed content type in {path}: {e}") from e
            skip += len(items)
            if not items or skip >= int(data.get("total", 0)):
                break
        logger.debug("content_types_fetched", extra={"count": len(schemas)})
        return schemas

    async def fetch_locales(self) -> list[Locale]:
        """Fetch the locales enabled in the environment."""
        path = f"{self.config.environment_path}/locales"
        data = await self._http.get(path)
        try:
            return [Locale.model_validate(item) for item in _items_of(data, path)]
        except ValidationError as e:
            raise DecodeError(f"Malformed locale in {path}: {e}") from e

    async def fetch_page(
        self,
        content_type_id: str,
        *,
        limit: int,
        skip: int,
        include: int,
        locale: str | None = None,
    ) -> EntryPage:
        """Fetch one raw page of entries of a content type.

        Raises:
            TransportError: On HTTP failure or non-2xx status
            DecodeError: If the envelope is malformed
        """
        params = {
            "content_type": content_type_id,
            "include": normalize_include(include),
            "locale": locale or self.config.locale,
            "limit": normalize_limit(limit, default=self.config.default_limit),
            "skip": max(skip, 0),
        }
        path = f"{self.config.environment_path}/entries"
        data = await self._http.get(path, params=params)
        try:
            return EntryPage.model_validate(data)
        except ValidationError as e:
            raise DecodeError(f"Malformed entries page for '{content_type_id}': {e}") from e

    def entries(
        self,
        content_type_id: str,
        options: ListOptions | None = None,
        *,
        locale: str | None = None,
    ) -> EntryIterator:
        """Paginated listing of a content type's entries.

        Raises:
            SchemaError: If the schema is not loaded or the type is unknown
        """
        return EntryIterator(
            self,
            self.resolver,
            content_type_id,
            options,
            locale=locale,
            default_limit=self.config.default_limit,
        )

    async def fetch_all(
        self,
        content_type_id: str,
        options: ListOptions | None = None,
        *,
        locale: str | None = None,
    ) -> list[EntryModel]:
        """Fetch and resolve a single page, in API order, without iterator state."""
        options = options or ListOptions()
        limit = normalize_limit(options.limit, default=self.config.default_limit)
        self.registry.get(content_type_id)
        page = await self.fetch_page(
            content_type_id,
            limit=limit,
            skip=max(options.page, 0) * limit,
            include=options.include,
            locale=locale,
        )
        return resolve_page(self.resolver, content_type_id, page)

    def resolve(self, content_type_id: str, entry_id: str, page: EntryPage) -> EntryModel:
        """Resolve one entry of an already fetched page with a fresh cache."""
        return self.resolver.resolve_one(
            content_type_id, entry_id, EntryStore.from_page(page), ResolutionCache()
        )

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self._http.close()

    async def __aenter__(self) -> DeliveryClient:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()


def _items_of(data: Any, path: str) -> list[dict[str, Any]]:
    if not isinstance(data, dict) or not isinstance(data.get("items", []), list):
        raise DecodeError(f"Unexpected response shape from {path}")
    return data.get("items", [])
