"""
Tour API - REST service for managing tour records.

Main entry point for building tour services backed by different record stores.
"""

from tour_api.execution.executor import TourService

__all__ = ["TourService"]
