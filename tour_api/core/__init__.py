"""Core interfaces, models and errors for the tour API."""

from tour_api.core.interfaces import ITourStore
from tour_api.core.models import (
    SortDirection,
    SortField,
    Projection,
    Pagination,
    QueryDirective,
    ListResult,
)
from tour_api.core.errors import (
    ErrorCode,
    TourApiError,
    ValidationError,
    NotFoundError,
    PageOutOfRangeError,
    StoreError,
)

__all__ = [
    "ITourStore",
    "SortDirection",
    "SortField",
    "Projection",
    "Pagination",
    "QueryDirective",
    "ListResult",
    "ErrorCode",
    "TourApiError",
    "ValidationError",
    "NotFoundError",
    "PageOutOfRangeError",
    "StoreError",
]
