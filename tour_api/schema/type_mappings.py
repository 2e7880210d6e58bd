"""
Type mapping utilities for converting query string values to Python types.
"""

from datetime import datetime
from typing import Any, Dict, Optional, Type, Union, get_args, get_origin

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from tour_api.core.errors import ValidationError
from tour_api.schema.tour import TourCreate


class TypeMapper:
    """Maps tour fields to Python types and coerces raw filter values."""

    # Fields the record store adds on its own
    SERVER_FIELDS: Dict[str, Type] = {
        "createdAt": datetime,
    }

    _adapters: Dict[Type, TypeAdapter] = {}

    @classmethod
    def get_python_type(cls, field: str) -> Optional[Type]:
        """
        Get the scalar Python type of a tour field.

        Optional and list annotations are unwrapped, so ``List[datetime]``
        maps to ``datetime``: a filter on an array field matches its items.

        Args:
            field: Tour field name

        Returns:
            Python type class, or None for fields outside the schema
        """
        if field in cls.SERVER_FIELDS:
            return cls.SERVER_FIELDS[field]

        model_field = TourCreate.model_fields.get(field)
        if model_field is None:
            return None

        annotation = model_field.annotation
        if get_origin(annotation) is Union:
            args = [a for a in get_args(annotation) if a is not type(None)]
            annotation = args[0] if args else Any
        if get_origin(annotation) in (list, tuple):
            args = get_args(annotation)
            annotation = args[0] if args else Any
        return annotation

    @classmethod
    def coerce(cls, field: str, value: Any) -> Any:
        """
        Coerce a raw query string value to the field's type.

        Args:
            field: Tour field name
            value: Raw value, usually a string

        Returns:
            Value converted to the field type; unknown fields are returned unchanged

        Raises:
            ValidationError: If the value cannot be converted
        """
        python_type = cls.get_python_type(field)
        if python_type is None or python_type is Any:
            return value

        adapter = cls._adapters.get(python_type)
        if adapter is None:
            adapter = cls._adapters[python_type] = TypeAdapter(python_type)
        try:
            return adapter.validate_python(value)
        except PydanticValidationError:
            raise ValidationError(
                f"Invalid value {value!r} for field '{field}'"
            ) from None
