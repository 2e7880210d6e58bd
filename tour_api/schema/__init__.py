"""Tour schema and value coercion."""

from tour_api.schema.tour import TourCreate, TourUpdate
from tour_api.schema.type_mappings import TypeMapper

__all__ = ["TourCreate", "TourUpdate", "TypeMapper"]
