"""
Shared data models for the tour API.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict, Field

# Keeps the page offset inside a 64-bit BSON integer
MAX_PAGE = 1_000_000
MAX_LIMIT = 10_000


class SortDirection(int, Enum):
    """Sort direction, valued the way MongoDB expects it."""

    ASCENDING = 1
    DESCENDING = -1


class SortField(BaseModel):
    """A single (field, direction) pair of a sort order."""

    model_config = ConfigDict(frozen=True)

    field: str
    direction: SortDirection = SortDirection.ASCENDING


class Projection(BaseModel):
    """Fields to include, or to exclude when ``exclude`` is set."""

    model_config = ConfigDict(frozen=True)

    fields: List[str] = Field(default_factory=list)
    exclude: bool = False


class Pagination(BaseModel):
    """Page window of a list query."""

    model_config = ConfigDict(frozen=True)

    page: int = Field(1, ge=1, le=MAX_PAGE)
    limit: int = Field(100, ge=1, le=MAX_LIMIT)
    explicit_page: bool = False  # page was requested by the client

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


class QueryDirective(BaseModel):
    """
    Fully resolved description of a list query.

    Applied in order: filter, sort, projection, pagination.
    """

    model_config = ConfigDict(frozen=True)

    filter: Dict[str, Any] = Field(default_factory=dict)
    sort: List[SortField] = Field(default_factory=list)
    projection: Projection = Field(default_factory=Projection)
    pagination: Pagination = Field(default_factory=Pagination)


class ListResult(BaseModel):
    """Records returned by a list query."""

    records: List[Dict[str, Any]] = Field(default_factory=list)
    count: int = 0
    requested_at: datetime
