"""Pagination helpers shared by the feature services."""

MAX_PAGE_LIMIT = 1000


def clamp_limit(limit: int, default: int, ceiling: int = MAX_PAGE_LIMIT) -> int:
    """Replace non-positive limits with the default and cap at the ceiling."""
    if limit <= 0:
        return default
    if limit > ceiling:
        return ceiling
    return limit
