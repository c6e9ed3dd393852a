"""Pydantic models for the gear catalog and AI packing plans."""
from gearpack.models.catalog import CatalogEntry, MatchConfidence, MatchQuery
from gearpack.models.packing_plan import (
    ItemRole,
    MissingAction,
    MissingItem,
    PackingPlan,
    Priority,
    RecommendedItem,
    normalize_action,
    normalize_priority,
    normalize_role,
    parse_packing_plan,
)

__all__ = [
    "CatalogEntry",
    "MatchConfidence",
    "MatchQuery",
    "ItemRole",
    "MissingAction",
    "MissingItem",
    "PackingPlan",
    "Priority",
    "RecommendedItem",
    "normalize_action",
    "normalize_priority",
    "normalize_role",
    "parse_packing_plan",
]
