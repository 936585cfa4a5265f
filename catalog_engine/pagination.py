"""Pagination stage.

Offset-based pagination over an ordered sequence, plus the helpers that
clients need to render pagination controls.
"""

import math
from typing import Mapping, Sequence, TypeVar
from urllib.parse import urlencode

from catalog_engine.models import PageResult

T = TypeVar("T")

DEFAULT_PAGE_SIZE = 12
MAX_PAGE_SIZE = 100


def normalize_page(page: float | None) -> int:
    """Clamp a page number to >= 1. Non-finite pages count as absent."""
    if page is None or not math.isfinite(page):
        return 1
    return max(1, math.floor(page))


def normalize_limit(limit: float | None, default: int = DEFAULT_PAGE_SIZE) -> int:
    """Clamp a page size to 1..MAX_PAGE_SIZE. Non-finite limits count as absent."""
    if limit is None or not math.isfinite(limit):
        limit = default
    return min(max(1, math.floor(limit)), MAX_PAGE_SIZE)


def get_offset(page: float | None, limit: float | None) -> int:
    """Calculate the zero-based offset of a page.

    Args:
        page: Page number (1-indexed).
        limit: Items per page.

    Returns:
        Offset of the first item on the page.
    """
    return (normalize_page(page) - 1) * normalize_limit(limit)


def paginate(
    items: Sequence[T],
    page: float | None = 1,
    limit: float | None = DEFAULT_PAGE_SIZE,
) -> PageResult[T]:
    """Slice one page out of an ordered sequence.

    Page and limit are normalized rather than rejected: page is floored and
    raised to at least 1, limit is floored and clamped to 1..100. A page
    past the end yields no data but valid metadata.

    Args:
        items: Ordered items.
        page: Page number (1-indexed).
        limit: Items per page.

    Returns:
        Page of items with pagination metadata.
    """
    current_page = normalize_page(page)
    per_page = normalize_limit(limit)

    total = len(items)
    total_pages = math.ceil(total / per_page)

    start = (current_page - 1) * per_page
    data = tuple(items[start:start + per_page])

    return PageResult(
        data=data,
        page=current_page,
        limit=per_page,
        total=total,
        total_pages=total_pages,
        has_next=current_page < total_pages,
        has_prev=current_page > 1 and total > 0,
    )


def build_pagination_links(
    base_url: str,
    current_page: int,
    total_pages: int,
    query_params: Mapping[str, str] | None = None,
) -> dict[str, str]:
    """Build first/prev/next/last page URLs.

    Only links that lead somewhere are included.

    Args:
        base_url: URL without query string.
        current_page: Current page number.
        total_pages: Number of pages.
        query_params: Other query parameters to carry over.

    Returns:
        Mapping of link name to URL.
    """
    params = dict(query_params or {})

    def link(page: int) -> str:
        return f"{base_url}?{urlencode({**params, 'page': str(page)})}"

    links: dict[str, str] = {}
    if current_page > 1:
        links["first"] = link(1)
        links["prev"] = link(current_page - 1)
    if current_page < total_pages:
        links["next"] = link(current_page + 1)
        links["last"] = link(total_pages)
    return links


def get_page_numbers(
    current_page: int,
    total_pages: int,
    window_size: int = 5,
) -> list[int]:
    """Page numbers to show around the current page.

    Example: current_page=5, total_pages=20, window_size=5 -> [3, 4, 5, 6, 7]

    Args:
        current_page: Current page number.
        total_pages: Number of pages.
        window_size: Maximum number of page numbers.

    Returns:
        Ascending page numbers.
    """
    if total_pages <= window_size:
        return list(range(1, total_pages + 1))

    half = window_size // 2
    start = max(1, current_page - half)
    end = min(total_pages, current_page + half)

    # Keep the window full near either edge
    if current_page <= half:
        end = min(window_size, total_pages)
    if current_page >= total_pages - half:
        start = max(1, total_pages - window_size + 1)

    return list(range(start, end + 1))
