"""Shared test fixtures for the tour API."""

import operator
import os
import sys
from copy import deepcopy
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any, Dict, List

import pytest
from bson import ObjectId

# Tests run against the routes without a prefix
os.environ["API_PREFIX"] = ""

# Add project root to Python path for imports
root_path = Path(__file__).parent.parent
sys.path.insert(0, str(root_path))

from fastapi.testclient import TestClient  # noqa: E402

from api import app, get_service  # noqa: E402
from tour_api.core.errors import NotFoundError, ValidationError  # noqa: E402
from tour_api.core.models import QueryDirective, SortDirection, SortField  # noqa: E402
from tour_api.execution import TourService  # noqa: E402

_COMPARATORS = {
    "$gt": operator.gt,
    "$gte": operator.ge,
    "$lt": operator.lt,
    "$lte": operator.le,
}

BASE_TIME = datetime(2024, 1, 1, tzinfo=timezone.utc)

SAMPLE_TOURS: List[Dict[str, Any]] = [
    {"name": "The Forest Hiker", "price": 397, "duration": 5, "ratingsAverage": 4.7, "difficulty": "easy", "summary": "Breathtaking hike through the Canadian Banff National Park"},
    {"name": "The Sea Explorer", "price": 497, "duration": 7, "ratingsAverage": 4.8, "difficulty": "medium", "summary": "Exploring the jaw-dropping US east coast by foot and by boat"},
    {"name": "The Snow Adventurer", "price": 997, "duration": 4, "ratingsAverage": 4.5, "difficulty": "difficult", "summary": "Exciting adventure in the snow with snowboarding and skiing"},
    {"name": "The City Wanderer", "price": 1197, "duration": 9, "ratingsAverage": 4.8, "difficulty": "easy", "summary": "Living the life of Wanderlust in the US' most beatiful cities"},
    {"name": "The Park Camper", "price": 1497, "duration": 10, "ratingsAverage": 4.9, "difficulty": "medium", "summary": "Breathing in Nature in America's most spectacular National Parks"},
    {"name": "The Sports Lover", "price": 2997, "duration": 14, "ratingsAverage": 4.7, "difficulty": "difficult", "summary": "Surfing, skating, parajumping, rock climbing and more, all in one tour"},
    {"name": "The Wine Taster", "price": 1997, "duration": 5, "ratingsAverage": 4.5, "difficulty": "easy", "summary": "Exquisite wines, scenic views, exclusive barrel tastings"},
    {"name": "The Northern Lights", "price": 1597, "duration": 3, "ratingsAverage": 4.9, "difficulty": "easy", "summary": "Enjoy the Northern Lights in one of the best places in the world"},
]


class InMemoryTourStore:
    """
    ITourStore test double keeping documents in a list.

    Understands equality filters and the $gt/$gte/$lt/$lte comparators.
    """

    def __init__(self, documents=None):
        self.documents: List[Dict[str, Any]] = []
        self.find_calls = 0
        for i, document in enumerate(documents or []):
            document = dict(document)
            document.setdefault("createdAt", BASE_TIME + timedelta(days=i))
            self.create(document)

    def find(self, directive: QueryDirective) -> List[Dict[str, Any]]:
        self.find_calls += 1
        matched = [d for d in self.documents if _matches(d, directive.filter)]

        # Stable sorts applied from the last key to the first
        for sort_field in reversed(list(directive.sort) + [SortField(field="_id")]):
            matched.sort(
                key=lambda d, f=sort_field.field: d.get(f),
                reverse=sort_field.direction is SortDirection.DESCENDING,
            )

        offset = directive.pagination.offset
        page = matched[offset:offset + directive.pagination.limit]

        projection = directive.projection
        if projection.exclude:
            return [
                {k: v for k, v in d.items() if k not in projection.fields}
                for d in deepcopy(page)
            ]
        return [
            {k: v for k, v in d.items() if k in projection.fields or k == "_id"}
            for d in deepcopy(page)
        ]

    def count(self, filter: Dict[str, Any]) -> int:
        return sum(1 for d in self.documents if _matches(d, filter))

    def get(self, tour_id: str) -> Dict[str, Any]:
        return deepcopy(self._lookup(tour_id))

    def create(self, data: Dict[str, Any]) -> Dict[str, Any]:
        if any(d["name"] == data.get("name") for d in self.documents):
            raise ValidationError(f"Duplicate field value: name={data.get('name')!r}")
        document = dict(data)
        document["_id"] = str(ObjectId())
        document.setdefault("createdAt", datetime.now(timezone.utc))
        self.documents.append(document)
        return deepcopy(document)

    def update(self, tour_id: str, changes: Dict[str, Any]) -> Dict[str, Any]:
        document = self._lookup(tour_id)
        document.update(changes)
        return deepcopy(document)

    def delete(self, tour_id: str) -> None:
        document = self._lookup(tour_id)
        self.documents.remove(document)

    def _lookup(self, tour_id: str) -> Dict[str, Any]:
        if not ObjectId.is_valid(tour_id):
            raise ValidationError(f"Invalid _id: {tour_id}")
        for document in self.documents:
            if document["_id"] == tour_id:
                return document
        raise NotFoundError("No tour found with that ID")


def _matches(document: Dict[str, Any], filter: Dict[str, Any]) -> bool:
    for field, condition in filter.items():
        value = document.get(field)
        if isinstance(condition, dict) and condition and all(k in _COMPARATORS for k in condition):
            for op, operand in condition.items():
                if value is None or not _COMPARATORS[op](value, operand):
                    return False
        elif value != condition:
            return False
    return True


@pytest.fixture
def store():
    """Provide an in-memory store seeded with the sample tours."""
    return InMemoryTourStore(SAMPLE_TOURS)


@pytest.fixture
def client(store):
    """Provide a test client whose service uses the in-memory store."""
    app.dependency_overrides[get_service] = lambda: TourService(store)
    yield TestClient(app)
    app.dependency_overrides.clear()
