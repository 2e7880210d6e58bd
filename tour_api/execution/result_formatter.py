"""
Result formatting utilities.

Wraps service results in the response envelope every endpoint shares.
"""

from datetime import datetime
from typing import Any, Dict, Optional

from tour_api.core.errors import TourApiError
from tour_api.core.models import ListResult


class ResultFormatter:
    """
    Formats results into ``{status, data, message?, requestedAt?, results?}``.
    """

    @staticmethod
    def format_list(result: ListResult) -> Dict[str, Any]:
        """
        Format a list result.

        Args:
            result: Records returned by the service

        Returns:
            Success envelope with ``results`` and ``data.tours``
        """
        return {
            "status": "success",
            "requestedAt": result.requested_at.isoformat(),
            "results": result.count,
            "data": {"tours": result.records},
        }

    @staticmethod
    def format_record(
        record: Dict[str, Any], requested_at: Optional[datetime] = None
    ) -> Dict[str, Any]:
        """Format a single tour under ``data.tour``."""
        formatted: Dict[str, Any] = {"status": "success"}
        if requested_at is not None:
            formatted["requestedAt"] = requested_at.isoformat()
        formatted["data"] = {"tour": record}
        return formatted

    @staticmethod
    def format_error(error: TourApiError) -> Dict[str, Any]:
        return {
            "status": error.status,
            "data": None,
            "message": error.message,
            "code": error.code.value,
        }
