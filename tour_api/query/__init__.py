"""Query translation."""

from tour_api.query.translator import (
    QueryTranslator,
    parse_query_params,
    top_cheapest_directive,
)

__all__ = ["QueryTranslator", "parse_query_params", "top_cheapest_directive"]
