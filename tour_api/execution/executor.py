"""
Tour service.

Runs list directives and CRUD operations through a record store.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, Mapping, Optional

from pydantic import ValidationError as PydanticValidationError

from tour_api.core.errors import PageOutOfRangeError, ValidationError
from tour_api.core.interfaces import ITourStore
from tour_api.core.models import ListResult, QueryDirective
from tour_api.schema.tour import TourCreate, TourUpdate

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("name", "price")


class TourService:
    """
    Coordinates tour operations.

    Wraps a record store and adds what every store shares: the page overflow
    check, body validation and request timestamps. Holds no per-request state.
    """

    def __init__(self, store: ITourStore):
        """
        Initialize tour service.

        Args:
            store: Record store implementation
        """
        self.store = store

    def list_tours(
        self, directive: QueryDirective, requested_at: Optional[datetime] = None
    ) -> ListResult:
        """
        Execute a list directive.

        Args:
            directive: Resolved query directive
            requested_at: When the request was received, now if omitted

        Returns:
            Records of the requested page

        Raises:
            PageOutOfRangeError: If an explicitly requested page starts past
                the last stored record
        """
        requested_at = requested_at or datetime.now(timezone.utc)
        pagination = directive.pagination

        if pagination.explicit_page:
            total = self.store.count({})
            if pagination.offset >= total:
                logger.info(
                    "Page %d out of range: offset %d, %d tours",
                    pagination.page,
                    pagination.offset,
                    total,
                )
                raise PageOutOfRangeError("This page does not exist")

        records = self.store.find(directive)
        return ListResult(records=records, count=len(records), requested_at=requested_at)

    def get_tour(self, tour_id: str) -> Dict[str, Any]:
        return self.store.get(tour_id)

    def create_tour(self, body: Mapping[str, Any]) -> Dict[str, Any]:
        """
        Validate and insert a new tour.

        Raises:
            ValidationError: If ``name`` or ``price`` is missing or the body
                does not match the tour schema
        """
        if any(body.get(field) in (None, "") for field in REQUIRED_FIELDS):
            raise ValidationError("Missing name or price")

        tour = _validate(TourCreate, body)
        return self.store.create(tour.model_dump(exclude_none=True))

    def update_tour(self, tour_id: str, body: Mapping[str, Any]) -> Dict[str, Any]:
        """
        Validate the supplied fields and apply them to a tour.

        An empty update returns the tour unchanged.
        """
        changes = _validate(TourUpdate, body).model_dump(exclude_unset=True)
        if any(field in changes and changes[field] is None for field in REQUIRED_FIELDS):
            raise ValidationError("name and price cannot be removed")
        if not changes:
            return self.store.get(tour_id)
        return self.store.update(tour_id, changes)

    def delete_tour(self, tour_id: str) -> None:
        self.store.delete(tour_id)


def _validate(model, body: Mapping[str, Any]):
    try:
        return model.model_validate(dict(body))
    except PydanticValidationError as e:
        messages = [
            f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}"
            for err in e.errors()
        ]
        raise ValidationError("Invalid input data. " + "; ".join(messages)) from None
