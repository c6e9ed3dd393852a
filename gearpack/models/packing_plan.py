"""Pydantic models for AI-generated packing plans.

Models return inconsistent casing and synonyms for enumerated fields, so
priority, action and role values are normalized before validation. Any
unrecognized value falls back to a safe default instead of failing the plan.
"""
import json
from enum import Enum
from typing import Any, List, Optional, Union

from pydantic import BaseModel, Field, ValidationError, field_validator
import structlog

from gearpack.errors.exceptions import PlanValidationError

logger = structlog.get_logger(__name__)


class Priority(str, Enum):
    """Packing priority of a recommended or missing item."""
    MUST_HAVE = "must-have"
    NICE_TO_HAVE = "nice-to-have"
    OPTIONAL = "optional"


class MissingAction(str, Enum):
    """How the user should obtain gear they do not own."""
    BUY = "buy"
    BORROW = "borrow"
    RENT = "rent"


class ItemRole(str, Enum):
    """Role of a recommended item within its section."""
    PRIMARY = "primary"
    BACKUP = "backup"
    ALTERNATIVE = "alternative"
    STANDARD = "standard"


PRIORITY_SYNONYMS = {
    Priority.MUST_HAVE: {"must-have", "essential", "critical", "required", "high", "important"},
    Priority.NICE_TO_HAVE: {"nice-to-have", "recommended", "suggested", "medium", "moderate"},
    Priority.OPTIONAL: {"optional", "low", "extra", "bonus"},
}

ACTION_SYNONYMS = {
    MissingAction.BUY: {"buy", "purchase"},
    MissingAction.BORROW: {"borrow", "loan"},
    MissingAction.RENT: {"rent", "hire", "lease"},
}

ROLE_SYNONYMS = {
    ItemRole.PRIMARY: {"primary", "main", "essential", "key"},
    ItemRole.BACKUP: {"backup", "secondary", "spare", "redundant"},
    ItemRole.ALTERNATIVE: {"alternative", "alternate", "alt"},
    ItemRole.STANDARD: {"standard", "normal", "default", "regular", "support"},
}


def _normalize_choice(value: Any, synonyms: dict, default: Enum) -> Enum:
    if isinstance(value, Enum) and value in synonyms:
        return value
    if not isinstance(value, str):
        return default
    lowered = value.lower().strip()
    for member, words in synonyms.items():
        if lowered in words:
            return member
    return default


def normalize_priority(value: Any) -> Priority:
    """Map a free-form priority string onto Priority (default: optional)."""
    return _normalize_choice(value, PRIORITY_SYNONYMS, Priority.OPTIONAL)


def normalize_action(value: Any) -> MissingAction:
    """Map a free-form action string onto MissingAction (default: buy)."""
    return _normalize_choice(value, ACTION_SYNONYMS, MissingAction.BUY)


def normalize_role(value: Any) -> ItemRole:
    """Map a free-form role string onto ItemRole (default: standard)."""
    return _normalize_choice(value, ROLE_SYNONYMS, ItemRole.STANDARD)


class RecommendedItem(BaseModel):
    """A gear item the AI recommends packing.

    Attributes:
        section: Packing section (e.g. "Lenses")
        gear_item_id: Catalog id hint supplied by the AI (may be wrong or null)
        name: Item name as the AI wrote it
        reason: Why the item is recommended
        priority: Normalized packing priority
        quantity: Units to pack
        role: Role within the section
    """

    section: str = "Misc"
    gear_item_id: Optional[str] = None
    name: str = Field(..., min_length=1)
    reason: str = ""
    priority: Priority = Priority.OPTIONAL
    quantity: int = Field(default=1, ge=1)
    role: ItemRole = ItemRole.STANDARD

    @field_validator("priority", mode="before")
    @classmethod
    def coerce_priority(cls, v):
        return normalize_priority(v)

    @field_validator("role", mode="before")
    @classmethod
    def coerce_role(cls, v):
        return normalize_role(v)


class MissingItem(BaseModel):
    """Gear the user does not own and should buy, borrow or rent."""

    name: str = Field(..., min_length=1)
    category: str = "Misc"
    reason: str = ""
    priority: Priority = Priority.OPTIONAL
    action: MissingAction = MissingAction.BUY
    estimated_cost: Optional[str] = None

    @field_validator("priority", mode="before")
    @classmethod
    def coerce_priority(cls, v):
        return normalize_priority(v)

    @field_validator("action", mode="before")
    @classmethod
    def coerce_action(cls, v):
        return normalize_action(v)


class PackingPlan(BaseModel):
    """Packing plan as returned by the AI model."""

    event_title: str = "Untitled Event"
    event_type: str = "general"
    recommended_items: List[RecommendedItem] = Field(default_factory=list)
    missing_items: List[MissingItem] = Field(default_factory=list)
    tips: List[str] = Field(default_factory=list)

    model_config = {
        "json_schema_extra": {
            "example": {
                "event_title": "Corporate Interview",
                "event_type": "corporate interview",
                "recommended_items": [
                    {
                        "section": "Camera Bodies",
                        "gear_item_id": "cam1",
                        "name": "Sony A7 IV",
                        "reason": "Primary interview camera",
                        "priority": "Must-have",
                        "quantity": 1,
                        "role": "primary",
                    }
                ],
                "missing_items": [
                    {
                        "name": "Lavalier microphone",
                        "reason": "Clean dialogue capture",
                        "priority": "Must-have",
                        "action": "rent",
                    }
                ],
                "tips": ["Charge all batteries the night before."],
            }
        }
    }

    @field_validator("tips", mode="before")
    @classmethod
    def none_tips_to_empty(cls, v):
        return [] if v is None else v


def parse_packing_plan(payload: Union[str, bytes, dict]) -> PackingPlan:
    """Validate a raw AI payload into a PackingPlan.

    Args:
        payload: Decoded JSON object, or JSON text

    Returns:
        Validated and normalized PackingPlan

    Raises:
        PlanValidationError: If the payload is not valid JSON or does not
            match the packing plan schema
    """
    if isinstance(payload, (str, bytes)):
        try:
            payload = json.loads(payload)
        except json.JSONDecodeError as e:
            logger.warning("plan_payload_not_json", error=str(e))
            raise PlanValidationError(
                "AI response is not valid JSON.",
                details={"error": str(e)},
            ) from e

    if not isinstance(payload, dict):
        raise PlanValidationError(
            "AI response did not match schema.",
            details={"error": f"expected object, got {type(payload).__name__}"},
        )

    try:
        return PackingPlan.model_validate(payload)
    except ValidationError as e:
        logger.warning("plan_payload_invalid", error_count=e.error_count())
        raise PlanValidationError(
            "AI response did not match schema.",
            details={"errors": e.errors(include_url=False)},
        ) from e
