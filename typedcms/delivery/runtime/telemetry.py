"""Structured logging for page fetches.

This module provides telemetry hooks for the pagination iterator, emitting
structured log records whose fields travel in ``extra``.
"""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


def log_page_fetched(
    *,
    content_type_id: str,
    page: int,
    offset: int,
    items: int,
    includes: int,
    total: int | None = None,
    cache_hits: int = 0,
    latency_ms: float | None = None,
) -> None:
    """Log a fetched and resolved page.

    Args:
        content_type_id: Content type being listed
        page: Zero-based page number
        offset: Skip value sent with the request
        items: Number of items on the page
        includes: Number of included entries and assets
        total: Total reported by the API
        cache_hits: Resolution cache hits while resolving the page
        latency_ms: Request latency in milliseconds (optional)
    """
    logger.info(
        "page_fetched",
        extra={
            "content_type_id": content_type_id,
            "page": page,
            "offset": offset,
            "items": items,
            "includes": includes,
            "total": total,
            "cache_hits": cache_hits,
            "latency_ms": latency_ms,
        },
    )


def log_page_error(
    *,
    content_type_id: str,
    page: int,
    offset: int,
    error_type: str,
    error_message: str,
) -> None:
    """Log a failed page fetch.

    Args:
        content_type_id: Content type being listed
        page: Zero-based page number
        offset: Skip value sent with the request
        error_type: Type of error (e.g., "TransportError", "DecodeError")
        error_message: Error message
    """
    logger.error(
        "page_fetch_error",
        extra={
            "content_type_id": content_type_id,
            "page": page,
            "offset": offset,
            "error_type": error_type,
            "error_message": error_message,
        },
    )


def log_iterator_exhausted(*, content_type_id: str, page: int, offset: int) -> None:
    logger.debug(
        "iterator_exhausted",
        extra={"content_type_id": content_type_id, "page": page, "offset": offset},
    )
