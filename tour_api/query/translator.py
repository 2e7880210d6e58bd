"""
Query translation from request parameters to query directives.

Turns the flat key/value pairs of a list request into a ``QueryDirective``
the record store can execute.
"""

import logging
import re
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from tour_api.core.errors import ValidationError
from tour_api.core.models import (
    MAX_LIMIT,
    MAX_PAGE,
    Pagination,
    Projection,
    QueryDirective,
    SortDirection,
    SortField,
)
from tour_api.schema.type_mappings import TypeMapper

logger = logging.getLogger(__name__)

CONTROL_PARAMS = ("page", "sort", "limit", "fields")
COMPARISON_OPERATORS = ("gt", "gte", "lt", "lte")
OPERATOR_MARKER = "$"

DEFAULT_SORT = "-createdAt"
DEFAULT_PAGE = 1
DEFAULT_LIMIT = 100
VERSION_FIELD = "__v"

# field[op]=value
_BRACKET_KEY = re.compile(r"^(?P<field>[^\[\]]+)\[(?P<op>[^\[\]]*)\]$")


def parse_query_params(items: Iterable[Tuple[str, str]]) -> Dict[str, Any]:
    """
    Nest bracketed query string keys.

    ``[("duration[gte]", "5"), ("sort", "price")]`` becomes
    ``{"duration": {"gte": "5"}, "sort": "price"}``. Repeated keys keep the
    last value; a plain value and a comparator on the same field keep the
    one given last.
    """
    params: Dict[str, Any] = {}
    for key, value in items:
        match = _BRACKET_KEY.match(key)
        if match is None:
            params[key] = value
            continue

        field, op = match.group("field"), match.group("op")
        nested = params.get(field)
        if not isinstance(nested, dict):
            nested = params[field] = {}
        nested[op] = value
    return params


class QueryTranslator:
    """
    Builds query directives from request parameters.

    The translator is stateless; ``translate`` never mutates its input.
    """

    def __init__(self, default_limit: int = DEFAULT_LIMIT):
        """
        Initialize query translator.

        Args:
            default_limit: Page size used when the request has no ``limit``
        """
        self.default_limit = default_limit

    def translate(self, params: Mapping[str, Any]) -> QueryDirective:
        """
        Convert request parameters to a query directive.

        Args:
            params: Parameter mapping, with comparator filters nested
                (``{"duration": {"gte": "5"}}``)

        Returns:
            Resolved query directive

        Raises:
            ValidationError: If a control parameter or filter value is malformed
        """
        directive = QueryDirective(
            filter=self.build_filter(params),
            sort=self.build_sort(params.get("sort")),
            projection=self.build_projection(params.get("fields")),
            pagination=self.build_pagination(params.get("page"), params.get("limit")),
        )
        logger.debug("Translated %s into %s", dict(params), directive)
        return directive

    def build_filter(self, params: Mapping[str, Any]) -> Dict[str, Any]:
        """Build the filter predicate from everything but the control parameters."""
        predicate: Dict[str, Any] = {}
        for field, value in params.items():
            if field in CONTROL_PARAMS:
                continue
            _reject_operator_key(field)
            if isinstance(value, Mapping):
                predicate[field] = self._normalize_comparators(field, value)
            else:
                predicate[field] = TypeMapper.coerce(field, value)
        return predicate

    def _normalize_comparators(
        self, field: str, comparators: Mapping[str, Any]
    ) -> Dict[str, Any]:
        """Prefix the comparison operators of a nested filter with the operator marker."""
        normalized: Dict[str, Any] = {}
        for op, value in comparators.items():
            _reject_operator_key(op)
            if op in COMPARISON_OPERATORS:
                normalized[f"{OPERATOR_MARKER}{op}"] = TypeMapper.coerce(field, value)
            else:
                normalized[op] = value
        return normalized

    @staticmethod
    def build_sort(sort: Optional[str]) -> List[SortField]:
        """Parse ``a,-b`` into ascending ``a`` then descending ``b``."""
        if not sort:
            sort = DEFAULT_SORT
        if not isinstance(sort, str):
            raise ValidationError("Invalid sort parameter")

        sort_fields: List[SortField] = []
        for spec in sort.split(","):
            spec = spec.strip()
            if not spec or spec == "-":
                continue
            if spec.startswith("-"):
                sort_fields.append(SortField(field=spec[1:], direction=SortDirection.DESCENDING))
            else:
                sort_fields.append(SortField(field=spec, direction=SortDirection.ASCENDING))
        return sort_fields

    @staticmethod
    def build_projection(fields: Optional[str]) -> Projection:
        """Parse ``name,price`` into an inclusion set, ``-summary`` into an exclusion set."""
        if not fields:
            return Projection(fields=[VERSION_FIELD], exclude=True)
        if not isinstance(fields, str):
            raise ValidationError("Invalid fields parameter")

        names = [name.strip() for name in fields.split(",") if name.strip()]
        excluded = [name[1:] for name in names if name.startswith("-")]
        included = [name for name in names if not name.startswith("-")]

        if excluded and included:
            raise ValidationError("Cannot mix included and excluded fields")
        if excluded:
            return Projection(fields=excluded, exclude=True)
        if not included:
            return Projection(fields=[VERSION_FIELD], exclude=True)
        return Projection(fields=included, exclude=False)

    def build_pagination(self, page: Any, limit: Any) -> Pagination:
        """Coerce ``page`` and ``limit`` to positive integers."""
        return Pagination(
            page=_positive_int("page", page, DEFAULT_PAGE, MAX_PAGE),
            limit=_positive_int("limit", limit, self.default_limit, MAX_LIMIT),
            explicit_page=page is not None,
        )


def top_cheapest_directive() -> QueryDirective:
    """
    Build the curated "top five cheapest tours" directive.

    First page of five, best rating first and cheapest among equals,
    restricted to the summary fields.
    """
    return QueryDirective(
        filter={},
        sort=QueryTranslator.build_sort("-ratingsAverage,price"),
        projection=QueryTranslator.build_projection(
            "name,price,ratingsAverage,summary,difficulty"
        ),
        pagination=Pagination(page=1, limit=5, explicit_page=True),
    )


def _reject_operator_key(key: str) -> None:
    # Only the whitelisted comparators may reach the store as operators
    if key.startswith(OPERATOR_MARKER):
        raise ValidationError(f"Unsupported query operator '{key}'")


def _positive_int(name: str, value: Any, default: int, maximum: int) -> int:
    if value is None:
        return default
    try:
        number = int(str(value).strip())
    except ValueError:
        raise ValidationError(f"'{name}' must be a positive integer") from None
    if number < 1:
        raise ValidationError(f"'{name}' must be a positive integer")
    if number > maximum:
        raise ValidationError(f"'{name}' must not exceed {maximum}")
    return number
