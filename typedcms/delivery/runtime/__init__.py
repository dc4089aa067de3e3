"""Runtime: pagination iterators and page telemetry."""

from .iterator import EntryIterator, ListOptions, PageSource, resolve_page

__all__ = ["EntryIterator", "ListOptions", "PageSource", "resolve_page"]
