"""Query execution and result formatting."""

from tour_api.execution.executor import TourService
from tour_api.execution.result_formatter import ResultFormatter

__all__ = ["TourService", "ResultFormatter"]
