"""Lenient normalisation of paging and sorting parameters.

Listing endpoints never reject paging input: anything unparseable or out of
range falls back to the default.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

MIN_PAGE_SIZE = 1
MAX_PAGE_SIZE = 100

# Offsets are bound as signed 64-bit integers by every supported driver.
MAX_OFFSET = 2**63 - 1


class SortField(StrEnum):
    CREATED_AT = "created_at"
    MODIFIED_AT = "modified_at"
    ID = "id"
    SCORE = "score"
    REACTION_COUNT = "reaction_count"
    COMMENT_COUNT = "comment_count"


class SortOrder(StrEnum):
    ASC = "asc"
    DESC = "desc"


# Spelling used by older clients.
_SORT_ALIASES = {"reactions_count": SortField.REACTION_COUNT}


@dataclass(frozen=True)
class ListingParams:
    """Validated paging and ordering for a listing query."""

    page: int = 1
    page_size: int = 10
    sort_field: SortField = SortField.CREATED_AT
    sort_order: SortOrder = SortOrder.DESC

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size


def _coerce_int(value: object) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None


def normalize_page(value: object, page_size: int = MAX_PAGE_SIZE) -> int:
    """Return a 1-based page whose offset still fits in a 64-bit integer."""
    page = _coerce_int(value)
    if page is None or page < 1 or (page - 1) * page_size > MAX_OFFSET:
        return 1
    return page


def normalize_page_size(value: object, default: int, maximum: int = MAX_PAGE_SIZE) -> int:
    size = _coerce_int(value)
    if size is None or size < MIN_PAGE_SIZE or size > maximum:
        return default
    return size


def normalize_sort_field(value: object) -> SortField:
    if isinstance(value, str):
        if value in _SORT_ALIASES:
            return _SORT_ALIASES[value]
        try:
            return SortField(value)
        except ValueError:
            pass
    return SortField.CREATED_AT


def normalize_sort_order(value: object) -> SortOrder:
    if isinstance(value, str) and value.lower() == SortOrder.ASC:
        return SortOrder.ASC
    return SortOrder.DESC


def normalize_listing(
    page: object = None,
    page_size: object = None,
    sort_field: object = None,
    sort_order: object = None,
    *,
    default_page_size: int = 10,
    max_page_size: int = MAX_PAGE_SIZE,
) -> ListingParams:
    """Build :class:`ListingParams`, substituting defaults for bad input."""
    size = normalize_page_size(page_size, default_page_size, max_page_size)
    return ListingParams(
        page=normalize_page(page, size),
        page_size=size,
        sort_field=normalize_sort_field(sort_field),
        sort_order=normalize_sort_order(sort_order),
    )
