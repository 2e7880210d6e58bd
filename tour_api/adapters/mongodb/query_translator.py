"""
MongoDB query translator.

Converts query directives to ``Collection.find`` arguments.
"""

from typing import Any, Dict, List, Tuple

from tour_api.core.models import Projection, QueryDirective, SortDirection

ID_FIELD = "_id"


class MongoQueryTranslator:
    """
    Translates query directives to pymongo ``find()`` keyword arguments.
    """

    def translate(self, directive: QueryDirective) -> Dict[str, Any]:
        """
        Convert a directive to ``find()`` arguments.

        Args:
            directive: Resolved query directive

        Returns:
            Dictionary with ``filter``, ``projection``, ``sort``, ``skip`` and
            ``limit`` keys
        """
        return {
            "filter": dict(directive.filter),
            "projection": self._build_projection(directive.projection),
            "sort": self._build_sort(directive),
            "skip": directive.pagination.offset,
            "limit": directive.pagination.limit,
        }

    def _build_sort(self, directive: QueryDirective) -> List[Tuple[str, int]]:
        """Build the sort list, ending with ``_id`` so ties keep a stable order."""
        sort_spec = [(s.field, s.direction.value) for s in directive.sort]
        if all(field != ID_FIELD for field, _ in sort_spec):
            sort_spec.append((ID_FIELD, SortDirection.ASCENDING.value))
        return sort_spec

    def _build_projection(self, projection: Projection) -> Dict[str, int]:
        flag = 0 if projection.exclude else 1
        return {field: flag for field in projection.fields}
