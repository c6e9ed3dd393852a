"""Business logic services for gear catalog matching and packing plans.

Available Services:
    - matching: Catalog matching using fuzzy string comparison
    - planning: Packing plan resolution and manual review
"""
from gearpack.services.matching import (
    CascadeMatcher,
    MatcherStrategy,
    MatchResult,
    create_matcher,
    match_catalog_item,
)
from gearpack.services.planning import (
    PlanResolver,
    ResolvedPlan,
    apply_review_selections,
    resolve_packing_plan,
)

__all__: list[str] = [
    # Matching
    "CascadeMatcher",
    "MatcherStrategy",
    "MatchResult",
    "create_matcher",
    "match_catalog_item",
    # Planning
    "PlanResolver",
    "ResolvedPlan",
    "apply_review_selections",
    "resolve_packing_plan",
]
