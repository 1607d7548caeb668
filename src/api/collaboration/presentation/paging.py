"""Paging helpers for collaborator collection responses."""

from __future__ import annotations

from collaboration.application.paging import DEFAULT_PAGE_LIMIT
from collaboration.presentation.models import PagingLinks


def parse_page_param(value: str | None) -> int | None:
    """Parse a ``page[...]`` query value, treating garbage as absent."""
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        return None


def build_paging_links(
    path: str,
    result_length: int,
    offset: int,
    limit: int,
    count: int,
) -> PagingLinks:
    """Compute first/prev/next/last links for a page of a collection.

    Args:
        path: Absolute URL of the collection, without query string
        result_length: Number of items on the current page
        offset: Effective offset of the current page
        limit: Effective page size
        count: Total number of items in the collection

    Returns:
        PagingLinks; ``prev`` and ``next`` are omitted at the boundaries
    """
    if limit <= 0:
        limit = DEFAULT_PAGE_LIMIT

    links = PagingLinks()

    if offset > 0 and count > 0:
        if offset <= count:
            prev_start = offset - limit
        else:
            # first page that overlaps the end of the collection
            prev_start = offset - (((offset - count) // limit) + 1) * limit
        links.prev = _link(path, *_cut_at_zero(prev_start, limit))

    next_start = offset + result_length
    if next_start < count:
        links.next = _link(path, next_start, limit)

    # with a shifted offset the first page ends where the current grid starts
    first_limit = offset % limit if offset > 0 else limit
    links.first = _link(path, 0, first_limit or limit)

    if offset < count:
        last_start = offset + ((count - offset - 1) // limit) * limit
    else:
        last_start = offset - (((offset - count) // limit) + 1) * limit
    links.last = _link(path, *_cut_at_zero(last_start, limit))

    return links


def _cut_at_zero(start: int, limit: int) -> tuple[int, int]:
    if start < 0:
        return 0, limit + start
    return start, limit


def _link(path: str, offset: int, limit: int) -> str:
    return f"{path}?page[offset]={offset}&page[limit]={limit}"
