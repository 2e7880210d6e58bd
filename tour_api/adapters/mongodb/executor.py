"""
MongoDB record store.

Executes query directives and CRUD operations against a tour collection.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from bson import ObjectId
from bson.errors import BSONError
from pymongo import ASCENDING, MongoClient, ReturnDocument
from pymongo.collection import Collection
from pymongo.database import Database
from pymongo.errors import DuplicateKeyError, PyMongoError

from tour_api.adapters.mongodb.query_translator import MongoQueryTranslator
from tour_api.core.errors import NotFoundError, StoreError, ValidationError
from tour_api.core.models import QueryDirective

logger = logging.getLogger(__name__)

NOT_FOUND_MESSAGE = "No tour found with that ID"

# Raised by BSON encoding before a command reaches the server
ENCODING_ERRORS = (BSONError, OverflowError)


class MongoTourStore:
    """
    Stores tours in a MongoDB collection.

    Implements the ITourStore interface for MongoDB.
    """

    def __init__(
        self,
        collection: Collection,
        translator: Optional[MongoQueryTranslator] = None,
    ):
        """
        Initialize MongoDB tour store.

        Args:
            collection: Collection holding tour documents
            translator: Directive translator, a default one if omitted
        """
        self.collection = collection
        self.translator = translator or MongoQueryTranslator()

    @classmethod
    def from_uri(
        cls, mongo_uri: str, database_name: str, collection_name: str
    ) -> "MongoTourStore":
        """
        Create a store with its own client.

        Args:
            mongo_uri: MongoDB connection URI
            database_name: Name of the database
            collection_name: Name of the collection

        Returns:
            Store bound to the collection; close the client via ``close()``
        """
        client: MongoClient = MongoClient(mongo_uri, tz_aware=True)
        db: Database = client[database_name]
        return cls(db[collection_name])

    def close(self) -> None:
        self.collection.database.client.close()

    def ensure_indexes(self) -> None:
        """Create the unique index on tour names."""
        try:
            self.collection.create_index([("name", ASCENDING)], unique=True)
        except PyMongoError as e:
            raise StoreError(f"Could not create indexes: {e}") from e

    def find(self, directive: QueryDirective) -> List[Dict[str, Any]]:
        """Execute a list query and return serialized documents."""
        query = self.translator.translate(directive)
        try:
            documents = list(self.collection.find(**query))
        except ENCODING_ERRORS as e:
            raise ValidationError(f"Invalid query value: {e}") from e
        except PyMongoError as e:
            logger.error("Find failed for %s: %s", query, e)
            raise StoreError(str(e)) from e
        return [_serialize(doc) for doc in documents]

    def count(self, filter: Dict[str, Any]) -> int:
        try:
            return self.collection.count_documents(filter)
        except ENCODING_ERRORS as e:
            raise ValidationError(f"Invalid query value: {e}") from e
        except PyMongoError as e:
            logger.error("Count failed for %s: %s", filter, e)
            raise StoreError(str(e)) from e

    def get(self, tour_id: str) -> Dict[str, Any]:
        oid = _object_id(tour_id)
        try:
            document = self.collection.find_one({"_id": oid}, {"__v": 0})
        except PyMongoError as e:
            raise StoreError(str(e)) from e
        if document is None:
            raise NotFoundError(NOT_FOUND_MESSAGE)
        return _serialize(document)

    def create(self, data: Dict[str, Any]) -> Dict[str, Any]:
        document = dict(data)
        document.setdefault("createdAt", datetime.now(timezone.utc))
        try:
            result = self.collection.insert_one(document)
        except DuplicateKeyError as e:
            raise ValidationError(_duplicate_message(e)) from e
        except ENCODING_ERRORS as e:
            raise ValidationError(f"Invalid query value: {e}") from e
        except PyMongoError as e:
            logger.error("Insert failed: %s", e)
            raise StoreError(str(e)) from e
        document["_id"] = result.inserted_id
        return _serialize(document)

    def update(self, tour_id: str, changes: Dict[str, Any]) -> Dict[str, Any]:
        oid = _object_id(tour_id)
        try:
            document = self.collection.find_one_and_update(
                {"_id": oid},
                {"$set": changes},
                projection={"__v": 0},
                return_document=ReturnDocument.AFTER,
            )
        except DuplicateKeyError as e:
            raise ValidationError(_duplicate_message(e)) from e
        except ENCODING_ERRORS as e:
            raise ValidationError(f"Invalid query value: {e}") from e
        except PyMongoError as e:
            logger.error("Update of %s failed: %s", tour_id, e)
            raise StoreError(str(e)) from e
        if document is None:
            raise NotFoundError(NOT_FOUND_MESSAGE)
        return _serialize(document)

    def delete(self, tour_id: str) -> None:
        oid = _object_id(tour_id)
        try:
            result = self.collection.delete_one({"_id": oid})
        except PyMongoError as e:
            logger.error("Delete of %s failed: %s", tour_id, e)
            raise StoreError(str(e)) from e
        if result.deleted_count == 0:
            raise NotFoundError(NOT_FOUND_MESSAGE)


def _object_id(tour_id: str) -> ObjectId:
    if not ObjectId.is_valid(tour_id):
        raise ValidationError(f"Invalid _id: {tour_id}")
    return ObjectId(tour_id)


def _serialize(document: Dict[str, Any]) -> Dict[str, Any]:
    # Convert ObjectId to string for JSON serialization
    if "_id" in document:
        document["_id"] = str(document["_id"])
    return document


def _duplicate_message(error: DuplicateKeyError) -> str:
    key_value = (error.details or {}).get("keyValue") or {}
    if key_value:
        field, value = next(iter(key_value.items()))
        return f"Duplicate field value: {field}={value!r}"
    return "Duplicate field value"
