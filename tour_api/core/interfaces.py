"""
Abstract interface for record stores.

This protocol defines the contract a store must implement to back the
tour service.
"""

from typing import Any, Dict, List, Protocol

from tour_api.core.models import QueryDirective


class ITourStore(Protocol):
    """
    Persist and query tour records.

    Records are returned as plain dictionaries with the identifier
    serialized to a string under ``_id``. Implementations raise the errors
    from ``tour_api.core.errors``: ``ValidationError`` for malformed ids or
    duplicate values, ``NotFoundError`` for missing records and
    ``StoreError`` for anything the backend reports.
    """

    def find(self, directive: QueryDirective) -> List[Dict[str, Any]]:
        """
        Execute a list query.

        Args:
            directive: Resolved filter, sort, projection and pagination

        Returns:
            Matching records in sort order, restricted to the page window
        """
        ...

    def count(self, filter: Dict[str, Any]) -> int:
        """Count records matching a filter predicate."""
        ...

    def get(self, tour_id: str) -> Dict[str, Any]:
        """Fetch a single record by identifier."""
        ...

    def create(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """Insert a record and return it with its generated identifier."""
        ...

    def update(self, tour_id: str, changes: Dict[str, Any]) -> Dict[str, Any]:
        """Apply field changes to a record and return the updated record."""
        ...

    def delete(self, tour_id: str) -> None:
        """Delete a record by identifier."""
        ...
