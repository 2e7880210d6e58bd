"""
Custom exceptions for the tour API.

Every failure the service reports belongs to one of a small set of error
kinds, each mapped to a fixed HTTP status and envelope status.

Usage:
    from tour_api.core.errors import NotFoundError

    raise NotFoundError("No tour found with that ID")
"""

from enum import Enum
from typing import Dict


class ErrorCode(str, Enum):
    """Error codes carried in error envelopes."""

    VALIDATION_ERROR = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"
    PAGE_OUT_OF_RANGE = "PAGE_OUT_OF_RANGE"
    STORE_ERROR = "STORE_ERROR"


HTTP_STATUS: Dict[ErrorCode, int] = {
    ErrorCode.VALIDATION_ERROR: 400,
    ErrorCode.NOT_FOUND: 404,
    ErrorCode.PAGE_OUT_OF_RANGE: 404,
    ErrorCode.STORE_ERROR: 500,
}


class TourApiError(Exception):
    """Base exception for all tour API errors."""

    code: ErrorCode = ErrorCode.STORE_ERROR

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)

    @property
    def status_code(self) -> int:
        return HTTP_STATUS[self.code]

    @property
    def status(self) -> str:
        """Envelope status: "fail" for client errors, "error" for server errors."""
        return "fail" if self.status_code < 500 else "error"


class ValidationError(TourApiError):
    """Request body, query parameters or identifier are invalid."""

    code = ErrorCode.VALIDATION_ERROR


class NotFoundError(TourApiError):
    """No record exists with the requested identifier."""

    code = ErrorCode.NOT_FOUND


class PageOutOfRangeError(TourApiError):
    """Requested page starts past the last matching record."""

    code = ErrorCode.PAGE_OUT_OF_RANGE


class StoreError(TourApiError):
    """The record store failed or could not be reached."""

    code = ErrorCode.STORE_ERROR
