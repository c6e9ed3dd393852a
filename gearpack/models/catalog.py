"""Pydantic models for the user's gear catalog.

The catalog itself lives in an external store; these models only describe
the records handed to the matcher and the planner.
"""
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class MatchConfidence(str, Enum):
    """Confidence tier of a catalog match.

    Tier semantics:
        - high: link the catalog item automatically
        - medium: ask the user to pick one of the candidates
        - low: treat the item as missing gear
    """
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class CatalogEntry(BaseModel):
    """An owned gear item as supplied by the catalog store.

    Attributes:
        id: Unique catalog identifier
        name: Display name (e.g. "Sony A7IV Body")
        brand: Optional manufacturer
        model: Optional model designation
        tags: Free-text tags
        category_id: Optional catalog category
        quantity: Units owned
        essential: Marked as always-pack by the user
    """

    id: str = Field(..., min_length=1)
    name: str
    brand: Optional[str] = None
    model: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    category_id: Optional[str] = None
    quantity: int = Field(default=1, ge=1)
    essential: bool = False

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        json_schema_extra={
            "example": {
                "id": "cam1",
                "name": "Sony A7IV Body",
                "brand": "Sony",
                "model": "ILCE-7M4",
                "tags": ["full-frame", "hybrid"],
                "quantity": 1,
                "essential": True,
            }
        },
    )

    @field_validator("tags", mode="before")
    @classmethod
    def none_tags_to_empty(cls, v):
        """Stores may hand over null instead of an empty tag list."""
        return [] if v is None else v


class MatchQuery(BaseModel):
    """An AI-suggested item name plus an optional catalog id hint."""

    ai_name: str
    suggested_id: Optional[str] = None
