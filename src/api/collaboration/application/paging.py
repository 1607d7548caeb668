"""Paging parameter defaults for collaborator listings."""

from __future__ import annotations

DEFAULT_PAGE_LIMIT = 20
MAX_PAGE_LIMIT = 100


def compute_paging_limits(
    offset: int | None,
    limit: int | None,
) -> tuple[int, int]:
    """Resolve requested paging parameters to usable values.

    A missing or negative offset becomes 0. A missing or non-positive limit
    becomes the default page size, and limits above the maximum are capped.

    Example:
        >>> compute_paging_limits(None, 500)
        (0, 100)
    """
    effective_offset = 0 if offset is None or offset < 0 else offset

    if limit is None or limit <= 0:
        effective_limit = DEFAULT_PAGE_LIMIT
    else:
        effective_limit = min(limit, MAX_PAGE_LIMIT)

    return effective_offset, effective_limit
