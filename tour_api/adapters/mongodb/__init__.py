"""MongoDB adapter for the tour API."""

from tour_api.adapters.mongodb.query_translator import MongoQueryTranslator
from tour_api.adapters.mongodb.executor import MongoTourStore

__all__ = ["MongoQueryTranslator", "MongoTourStore"]
