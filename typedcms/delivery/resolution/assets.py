"""Asset resolution.

Assets are leaves: they link to nothing, so they are resolved by a plain
scan on every reference and never cached.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from ..models.asset import Asset
from ..models.raw import RawAsset


def asset_url(url: str) -> str:
    """Absolute URL for a file url (protocol-relative urls get ``https:``)."""
    if url.startswith("//"):
        return f"https:{url}"
    return url


def to_asset(raw: RawAsset) -> Asset:
    """Flatten a raw asset into an Asset value."""
    fields = raw.fields
    file = fields.file
    details = file.details if file is not None else None
    image = details.image if details is not None else None
    return Asset(
        id=raw.id,
        title=fields.title or "",
        description=fields.description or "",
        url=asset_url(file.url) if file is not None else "",
        width=image.width if image is not None else 0,
        height=image.height if image is not None else 0,
        size=details.size if details is not None else 0,
    )


def resolve_asset(asset_id: str, assets: Iterable[RawAsset]) -> Asset:
    """Resolve an asset id against the visible assets.

    Returns:
        The matching Asset, or the zero ``Asset()`` if none matches
    """
    if asset_id:
        for raw in assets:
            if raw.id == asset_id:
                return to_asset(raw)
    return Asset()


def resolve_assets(asset_ids: Sequence[str], assets: Sequence[RawAsset]) -> list[Asset]:
    """Resolve asset ids in reference order, dropping ids with no match."""
    resolved: list[Asset] = []
    for asset_id in asset_ids:
        asset = resolve_asset(asset_id, assets)
        if asset.id:
            resolved.append(asset)
    return resolved
