"""Packing plan resolution against the user's gear catalog.

Key Components:
    - PlanResolver: Runs the catalog matcher once per recommended item
    - apply_review_selections: Applies the user's manual review choices
    - group_by_section: Canonical packing section grouping
"""
from gearpack.services.planning.resolver import (
    MISSING_SELECTION,
    ChecklistItem,
    PlanResolver,
    ResolvedPlan,
    ReviewItem,
    accept_top_suggestions,
    apply_review_selections,
    mark_all_missing,
    resolve_packing_plan,
    unresolved_keys,
)
from gearpack.services.planning.sections import (
    PACKING_SECTIONS,
    group_by_section,
    priority_label,
    priority_rank,
)

__all__ = [
    "MISSING_SELECTION",
    "ChecklistItem",
    "PlanResolver",
    "ResolvedPlan",
    "ReviewItem",
    "accept_top_suggestions",
    "apply_review_selections",
    "mark_all_missing",
    "resolve_packing_plan",
    "unresolved_keys",
    "PACKING_SECTIONS",
    "group_by_section",
    "priority_label",
    "priority_rank",
]
