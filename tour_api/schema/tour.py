"""
Tour record schema.

Pydantic models used to validate tour bodies on create and update.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class TourBase(BaseModel):
    """Fields shared by every tour body."""

    # Unknown fields are dropped, trimmed strings are stored
    model_config = ConfigDict(extra="ignore", str_strip_whitespace=True)

    duration: Optional[int] = Field(None, ge=1, description="Tour length in days")
    maxGroupSize: Optional[int] = Field(None, ge=1, description="Maximum group size")
    difficulty: Optional[str] = Field(None, description="Difficulty level")
    ratingsAverage: float = Field(4.5, ge=0, le=5, description="Average rating")
    ratingsQuantity: int = Field(0, ge=0, description="Number of ratings")
    priceDiscount: Optional[float] = Field(None, ge=0, description="Discount amount")
    summary: Optional[str] = None
    description: Optional[str] = None
    imageCover: Optional[str] = None
    images: List[str] = Field(default_factory=list)
    startDates: List[datetime] = Field(default_factory=list)


class TourCreate(TourBase):
    """Body of a create request."""

    name: str = Field(..., min_length=1, description="Unique tour name")
    price: float = Field(..., ge=0, description="Tour price")


class TourUpdate(TourBase):
    """Body of an update request. Every field is optional."""

    name: Optional[str] = Field(None, min_length=1)
    price: Optional[float] = Field(None, ge=0)
    ratingsAverage: Optional[float] = Field(None, ge=0, le=5)
    ratingsQuantity: Optional[int] = Field(None, ge=0)
    images: Optional[List[str]] = None
    startDates: Optional[List[datetime]] = None
