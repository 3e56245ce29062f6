from __future__ import annotations

import logging
from typing import Any, Callable

from .errors import PaginationStalled

logger = logging.getLogger(__name__)

PAGE_SIZE = 1000

PageFetcher = Callable[[int, int], dict[str, Any]]


def _check_limit(limit: int | None) -> None:
    if limit is not None and limit < 1:
        raise ValueError(f"limit must be a positive number, got {limit}")


def _reached(items: list[Any], limit: int | None) -> bool:
    return limit is not None and len(items) >= limit


def _truncate(items: list[Any], limit: int | None) -> list[Any]:
    return items[:limit] if limit is not None else items


def collect_short_pages(
    fetch_page: PageFetcher,
    page_size: int = PAGE_SIZE,
    limit: int | None = None,
) -> list[Any]:
    """Fetch pages until one comes back shorter than ``page_size``.

    Used where the endpoint does not report a total. The offset always moves
    forward by ``page_size``, whatever the previous page actually held.
    """
    _check_limit(limit)
    items: list[Any] = []
    offset = 0
    while True:
        chunk = fetch_page(offset, page_size).get("items") or []
        items.extend(chunk)
        logger.debug("Fetched %d items at offset %d", len(chunk), offset)
        if len(chunk) < page_size or _reached(items, limit):
            break
        offset += page_size
    return _truncate(items, limit)


def collect_until_total(
    fetch_page: PageFetcher,
    page_size: int = PAGE_SIZE,
    limit: int | None = None,
    max_pages: int | None = None,
) -> list[Any]:
    """Fetch pages until the total reported by the first page is accumulated.

    The next offset is the number of items accumulated so far. A server that
    keeps answering with empty pages below the total never lets this finish,
    unless ``max_pages`` bounds the number of requests.
    """
    _check_limit(limit)
    first = fetch_page(0, page_size)
    items: list[Any] = list(first.get("items") or [])
    total = int(first.get("total", len(items)) or 0)
    pages = 1

    while len(items) < total and not _reached(items, limit):
        if max_pages is not None and pages >= max_pages:
            raise PaginationStalled(
                f"Stopped after {pages} pages with {len(items)} of {total} items collected"
            )
        chunk = fetch_page(len(items), page_size).get("items") or []
        if not chunk:
            logger.debug("Empty page at offset %d with %d of %d items collected", len(items), len(items), total)
        items.extend(chunk)
        pages += 1

    return _truncate(items, limit)
