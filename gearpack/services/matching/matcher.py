"""Catalog matching service for AI-suggested gear names.

This module implements the Strategy pattern for catalog matching. The
default CascadeMatcher scores every catalog entry with the similarity
cascade and buckets the best score into a confidence tier.

Key Components:
    - CatalogItem: Protocol for catalog records accepted by the matcher
    - MatcherStrategy: Abstract base class for matching algorithms
    - CascadeMatcher: Default implementation (exact/substring/tokens/Levenshtein)
    - HighConfidenceMatch, MediumConfidenceMatch, LowConfidenceMatch:
      the three shapes of MatchResult
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import ClassVar, List, Optional, Protocol, Sequence, Tuple, Union
import structlog

from gearpack.config import MatchingSettings, matching_settings
from gearpack.errors.exceptions import ConfigurationError
from gearpack.models.catalog import MatchConfidence, MatchQuery
from gearpack.services.matching.similarity import score_entry

logger = structlog.get_logger(__name__)


class CatalogItem(Protocol):
    """Protocol for catalog data used in matching.

    This allows passing any object with these attributes,
    supporting both pydantic models and plain data classes.
    """
    id: str
    name: str
    brand: Optional[str]
    model: Optional[str]
    tags: Sequence[str]


@dataclass(frozen=True)
class HighConfidenceMatch:
    """A single catalog entry the AI name resolves to.

    Attributes:
        best_match: The matched catalog entry
        score: Similarity score (None when resolved through the id hint)
        via_hint: True when the AI-suggested id matched an entry directly
    """
    best_match: CatalogItem
    score: Optional[float] = None
    via_hint: bool = False

    confidence: ClassVar[MatchConfidence] = MatchConfidence.HIGH

    def to_dict(self) -> dict:
        """Convert to dictionary for storage alongside the plan."""
        result = {
            "confidence": self.confidence.value,
            "gear_item_id": self.best_match.id,
            "via_hint": self.via_hint,
        }
        if self.score is not None:
            result["score"] = round(self.score, 4)
        return result


@dataclass(frozen=True)
class MediumConfidenceMatch:
    """Candidates the user has to choose from, best first.

    Attributes:
        candidates: Up to max_candidates catalog entries, sorted by score
        scores: Score of each candidate, same order
    """
    candidates: Tuple[CatalogItem, ...]
    scores: Tuple[float, ...]

    confidence: ClassVar[MatchConfidence] = MatchConfidence.MEDIUM

    def __post_init__(self):
        if not self.candidates:
            raise ValueError("medium confidence match needs at least one candidate")
        if len(self.candidates) != len(self.scores):
            raise ValueError("candidates and scores must have the same length")

    @property
    def top_score(self) -> float:
        return self.scores[0]

    def to_dict(self) -> dict:
        """Convert to dictionary for storage alongside the plan."""
        return {
            "confidence": self.confidence.value,
            "candidates": [
                {"gear_item_id": c.id, "name": c.name, "score": round(s, 4)}
                for c, s in zip(self.candidates, self.scores)
            ],
        }


@dataclass(frozen=True)
class LowConfidenceMatch:
    """No catalog entry is close enough; the item counts as missing gear.

    Attributes:
        best_score: Highest score seen (None for an empty catalog)
    """
    best_score: Optional[float] = None

    confidence: ClassVar[MatchConfidence] = MatchConfidence.LOW

    def to_dict(self) -> dict:
        """Convert to dictionary for storage alongside the plan."""
        return {"confidence": self.confidence.value}


MatchResult = Union[HighConfidenceMatch, MediumConfidenceMatch, LowConfidenceMatch]


class MatcherStrategy(ABC):
    """Abstract base class for catalog matching strategies.

    All implementations must honor the contract:
        - match() never raises for any input
        - Empty or missing catalog returns LowConfidenceMatch
        - A suggested id that resolves returns HighConfidenceMatch
        - Medium candidates are sorted by score (descending)
    """

    @abstractmethod
    def match(
        self,
        ai_name: str,
        suggested_id: Optional[str],
        catalog: Optional[Sequence[CatalogItem]],
    ) -> MatchResult:
        """Match an AI-suggested item name against the user's catalog.

        Args:
            ai_name: Item name as written by the AI
            suggested_id: Catalog id hint from the AI (None means no hint)
            catalog: Entries owned by the user

        Returns:
            MatchResult tiered by confidence
        """
        pass

    @abstractmethod
    def get_strategy_name(self) -> str:
        """Get the name of this matching strategy."""
        pass

    def match_query(
        self,
        query: MatchQuery,
        catalog: Optional[Sequence[CatalogItem]],
    ) -> MatchResult:
        """Match a MatchQuery against the catalog."""
        return self.match(query.ai_name, query.suggested_id, catalog)


class CascadeMatcher(MatcherStrategy):
    """Catalog matcher using the exact/substring/token/Levenshtein cascade.

    Thresholds default to MatchingSettings and can be overridden per
    instance. Instances hold configuration only, so one matcher can be
    shared between concurrent callers.

    Attributes:
        high_threshold: Score at or above this auto-links the item
        medium_threshold: Score at or above this asks the user
        max_candidates: Maximum candidates in a medium result
    """

    def __init__(
        self,
        high_threshold: Optional[float] = None,
        medium_threshold: Optional[float] = None,
        max_candidates: Optional[int] = None,
        settings: Optional[MatchingSettings] = None,
    ):
        """Initialize the cascade matcher.

        Args:
            high_threshold: Override for settings.high_threshold
            medium_threshold: Override for settings.medium_threshold
            max_candidates: Override for settings.max_candidates
            settings: MatchingSettings to read defaults from (global if None)

        Raises:
            ConfigurationError: If the thresholds are out of order or range
        """
        cfg = settings or matching_settings
        self.high_threshold = cfg.high_threshold if high_threshold is None else high_threshold
        self.medium_threshold = cfg.medium_threshold if medium_threshold is None else medium_threshold
        self.max_candidates = cfg.max_candidates if max_candidates is None else max_candidates
        self.substring_score = cfg.substring_score
        self.token_overlap_threshold = cfg.token_overlap_threshold
        self.min_token_length = cfg.min_token_length

        if not 0 <= self.medium_threshold <= self.high_threshold <= 1:
            raise ConfigurationError(
                "Thresholds must satisfy 0 <= medium <= high <= 1",
                details={
                    "high_threshold": self.high_threshold,
                    "medium_threshold": self.medium_threshold,
                },
            )
        if self.max_candidates < 1:
            raise ConfigurationError(
                "max_candidates must be at least 1",
                details={"max_candidates": self.max_candidates},
            )

        self._log = logger.bind(matcher=self.get_strategy_name())

    def get_strategy_name(self) -> str:
        """Get the name of this matching strategy."""
        return "cascade"

    def score(self, ai_name: str, entry: CatalogItem) -> float:
        """Score a single catalog entry against the AI name."""
        return score_entry(
            ai_name,
            entry,
            substring_score=self.substring_score,
            token_overlap_threshold=self.token_overlap_threshold,
            min_token_length=self.min_token_length,
        )

    def rank(
        self,
        ai_name: str,
        catalog: Sequence[CatalogItem],
    ) -> List[Tuple[CatalogItem, float]]:
        """Score every entry and sort by score descending.

        Ties keep catalog order.
        """
        scored = [
            (index, entry, self.score(ai_name or "", entry))
            for index, entry in enumerate(catalog)
        ]
        scored.sort(key=lambda s: (-s[2], s[0]))
        return [(entry, score) for _, entry, score in scored]

    def match(
        self,
        ai_name: str,
        suggested_id: Optional[str],
        catalog: Optional[Sequence[CatalogItem]],
    ) -> MatchResult:
        """Match an AI-suggested name, trusting a resolving id hint first.

        Args:
            ai_name: Item name as written by the AI
            suggested_id: Catalog id hint from the AI (None means no hint)
            catalog: Entries owned by the user

        Returns:
            HighConfidenceMatch, MediumConfidenceMatch or LowConfidenceMatch
        """
        if not catalog:
            self._log.debug("no_catalog_entries", ai_name=ai_name)
            return LowConfidenceMatch()

        if suggested_id:
            for entry in catalog:
                if entry.id == suggested_id:
                    self._log.debug(
                        "hint_resolved",
                        ai_name=ai_name,
                        gear_item_id=suggested_id,
                    )
                    return HighConfidenceMatch(best_match=entry, via_hint=True)

        ranked = self.rank(ai_name, catalog)
        best_entry, best_score = ranked[0]

        if best_score >= self.high_threshold:
            result: MatchResult = HighConfidenceMatch(best_match=best_entry, score=best_score)
        elif best_score >= self.medium_threshold:
            top = ranked[:self.max_candidates]
            result = MediumConfidenceMatch(
                candidates=tuple(entry for entry, _ in top),
                scores=tuple(score for _, score in top),
            )
        else:
            result = LowConfidenceMatch(best_score=best_score)

        self._log.debug(
            "match_completed",
            ai_name=ai_name,
            confidence=result.confidence.value,
            best_score=round(best_score, 4),
            catalog_size=len(catalog),
        )
        return result


def create_matcher(
    strategy: str = "cascade",
    **kwargs
) -> MatcherStrategy:
    """Factory function to create a matcher strategy.

    Args:
        strategy: Strategy name ("cascade" for now)
        **kwargs: Additional arguments passed to the matcher

    Returns:
        MatcherStrategy instance

    Raises:
        ValueError: If unknown strategy name
    """
    strategies = {
        "cascade": CascadeMatcher,
    }

    if strategy not in strategies:
        raise ValueError(f"Unknown matching strategy: {strategy}. Available: {list(strategies.keys())}")

    return strategies[strategy](**kwargs)


def match_catalog_item(
    ai_name: str,
    suggested_id: Optional[str],
    catalog: Optional[Sequence[CatalogItem]],
) -> MatchResult:
    """Match one AI-suggested item with a matcher built from matching_settings."""
    return CascadeMatcher().match(ai_name, suggested_id, catalog)
