"""Resolve an AI packing plan against the user's gear catalog.

The resolver runs the catalog matcher once per recommended item and
partitions the plan by confidence tier:

    - high: checklist item linked to the matched catalog id
    - medium: checklist item without a catalog id plus a ReviewItem for
      the user to settle
    - low: moved to the missing items (rent suggestion)

Review selections are applied afterwards with apply_review_selections().
"""
from dataclasses import dataclass, field, replace
from typing import Dict, List, Mapping, MutableMapping, Optional, Sequence, Tuple
import structlog

from gearpack.errors.exceptions import ReviewSelectionError
from gearpack.models.catalog import MatchConfidence, MatchQuery
from gearpack.models.packing_plan import (
    ItemRole,
    MissingAction,
    MissingItem,
    PackingPlan,
    Priority,
)
from gearpack.services.matching import (
    CascadeMatcher,
    CatalogItem,
    HighConfidenceMatch,
    MatcherStrategy,
    MediumConfidenceMatch,
)

logger = structlog.get_logger(__name__)

# Review selection meaning "not in my catalog"
MISSING_SELECTION = "__MISSING__"

NOT_IN_CATALOG_REASON = "Recommended for this event but not found in your catalog"
CONFIRMED_MISSING_REASON = "Not found in your catalog (confirmed by you)"


@dataclass(frozen=True)
class ChecklistItem:
    """A packing checklist line, optionally linked to a catalog item."""
    name: str
    gear_item_id: Optional[str]
    quantity: int = 1
    notes: Optional[str] = None
    priority: Priority = Priority.OPTIONAL
    section: str = "Misc"
    role: ItemRole = ItemRole.STANDARD


@dataclass(frozen=True)
class ReviewItem:
    """A recommended item with several plausible catalog matches.

    Attributes:
        key: Unique key for the review item (the AI-suggested name)
        ai_name: Name as the AI described it
        candidates: Up to three catalog entries, best first
        scores: Match score of each candidate
        quantity, notes, priority, section: carried from the checklist item
    """
    key: str
    ai_name: str
    candidates: Tuple[CatalogItem, ...]
    scores: Tuple[float, ...] = ()
    quantity: int = 1
    notes: Optional[str] = None
    priority: Priority = Priority.OPTIONAL
    section: Optional[str] = None

    @property
    def candidate_ids(self) -> List[str]:
        return [c.id for c in self.candidates]


@dataclass
class ResolvedPlan:
    """Packing plan after catalog matching."""
    event_title: str
    event_type: str
    checklist: List[ChecklistItem] = field(default_factory=list)
    review_items: List[ReviewItem] = field(default_factory=list)
    missing_items: List[MissingItem] = field(default_factory=list)
    tips: List[str] = field(default_factory=list)

    @property
    def needs_review(self) -> bool:
        return bool(self.review_items)

    def linked_ids(self) -> List[str]:
        """Catalog ids referenced by the checklist."""
        return [c.gear_item_id for c in self.checklist if c.gear_item_id]


class PlanResolver:
    """Links AI-recommended items to the catalog via a MatcherStrategy."""

    def __init__(self, matcher: Optional[MatcherStrategy] = None):
        self._matcher = matcher or CascadeMatcher()
        self._log = logger.bind(matcher=self._matcher.get_strategy_name())

    def resolve(
        self,
        plan: PackingPlan,
        catalog: Optional[Sequence[CatalogItem]],
    ) -> ResolvedPlan:
        """Match every recommended item and partition the plan by tier.

        Args:
            plan: Validated AI packing plan
            catalog: Entries owned by the user

        Returns:
            ResolvedPlan with linked checklist, pending reviews and missing gear
        """
        catalog = list(catalog or [])
        resolved = ResolvedPlan(
            event_title=plan.event_title,
            event_type=plan.event_type,
            missing_items=list(plan.missing_items),
            tips=list(plan.tips),
        )
        counts: Dict[str, int] = {tier.value: 0 for tier in MatchConfidence}

        for item in plan.recommended_items:
            query = MatchQuery(ai_name=item.name, suggested_id=item.gear_item_id)
            match = self._matcher.match_query(query, catalog)
            counts[match.confidence.value] += 1

            checklist_item = ChecklistItem(
                name=item.name,
                gear_item_id=None,
                quantity=item.quantity,
                notes=item.reason or None,
                priority=item.priority,
                section=item.section,
                role=item.role,
            )

            if isinstance(match, HighConfidenceMatch):
                resolved.checklist.append(
                    replace(checklist_item, gear_item_id=match.best_match.id)
                )
            elif isinstance(match, MediumConfidenceMatch):
                resolved.review_items.append(ReviewItem(
                    key=item.name,
                    ai_name=item.name,
                    candidates=match.candidates,
                    scores=match.scores,
                    quantity=item.quantity,
                    notes=item.reason or None,
                    priority=item.priority,
                    section=item.section,
                ))
                resolved.checklist.append(checklist_item)
            else:
                resolved.missing_items.append(MissingItem(
                    name=item.name,
                    category=item.section,
                    reason=item.reason or NOT_IN_CATALOG_REASON,
                    priority=item.priority,
                    action=MissingAction.RENT,
                ))

        self._log.info(
            "plan_resolved",
            event_type=plan.event_type,
            recommended=len(plan.recommended_items),
            catalog_size=len(catalog),
            **counts,
        )
        return resolved


def resolve_packing_plan(
    plan: PackingPlan,
    catalog: Optional[Sequence[CatalogItem]],
    matcher: Optional[MatcherStrategy] = None,
) -> ResolvedPlan:
    """Resolve a packing plan with a one-off PlanResolver."""
    return PlanResolver(matcher).resolve(plan, catalog)


def unresolved_keys(
    review_items: Sequence[ReviewItem],
    selections: Mapping[str, str],
) -> List[str]:
    """Review keys the user has not decided on yet."""
    return [r.key for r in review_items if r.key not in selections]


def accept_top_suggestions(
    review_items: Sequence[ReviewItem],
    selections: MutableMapping[str, str],
) -> MutableMapping[str, str]:
    """Select the top candidate for every review item still undecided."""
    for review in review_items:
        if review.key not in selections and review.candidates:
            selections[review.key] = review.candidates[0].id
    return selections


def mark_all_missing(review_items: Sequence[ReviewItem]) -> Dict[str, str]:
    """Selections that file every review item as missing gear."""
    return {review.key: MISSING_SELECTION for review in review_items}


def apply_review_selections(
    resolved: ResolvedPlan,
    selections: Mapping[str, str],
) -> ResolvedPlan:
    """Apply the user's review choices to a resolved plan.

    A catalog id links the unlinked checklist item with that name;
    MISSING_SELECTION removes it from the checklist and files it under
    missing items (borrow suggestion). Items without a selection stay
    unlinked.

    Args:
        resolved: Plan returned by PlanResolver.resolve()
        selections: Review key -> chosen catalog id or MISSING_SELECTION

    Returns:
        New ResolvedPlan with no pending review items

    Raises:
        ReviewSelectionError: If a selected id was not offered as a candidate
    """
    offered = {r.key: set(r.candidate_ids) for r in resolved.review_items}
    for key, choice in selections.items():
        if choice == MISSING_SELECTION:
            continue
        if key in offered and choice not in offered[key]:
            raise ReviewSelectionError(
                f"Catalog item {choice!r} was not offered for {key!r}",
                details={"key": key, "selection": choice, "candidates": sorted(offered[key])},
            )

    checklist: List[ChecklistItem] = []
    missing_items = list(resolved.missing_items)

    for item in resolved.checklist:
        # Selections only settle items left unlinked by the matcher
        choice = selections.get(item.name) if item.gear_item_id is None else None
        if choice is None:
            checklist.append(item)
        elif choice == MISSING_SELECTION:
            missing_items.append(MissingItem(
                name=item.name,
                category=item.section,
                reason=CONFIRMED_MISSING_REASON,
                priority=item.priority,
                action=MissingAction.BORROW,
            ))
        else:
            checklist.append(replace(item, gear_item_id=choice))

    logger.info(
        "review_selections_applied",
        selections=len(selections),
        confirmed_missing=sum(1 for c in selections.values() if c == MISSING_SELECTION),
        unresolved=len(unresolved_keys(resolved.review_items, selections)),
    )

    return ResolvedPlan(
        event_title=resolved.event_title,
        event_type=resolved.event_type,
        checklist=checklist,
        review_items=[],
        missing_items=missing_items,
        tips=list(resolved.tips),
    )
