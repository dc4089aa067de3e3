"""Content graph resolution: entry store, cache and resolvers."""

from .assets import asset_url, resolve_asset, resolve_assets, to_asset
from .cache import ResolutionCache
from .resolver import EntryResolver
from .store import EntryStore

__all__ = [
    "EntryResolver",
    "EntryStore",
    "ResolutionCache",
    "asset_url",
    "resolve_asset",
    "resolve_assets",
    "to_asset",
]
