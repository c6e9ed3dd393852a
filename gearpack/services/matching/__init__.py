"""Catalog matching services using fuzzy string matching.

This module decides whether an AI-suggested gear name refers to an item
the user already owns.

Key Components:
    - MatcherStrategy: Abstract base class for matching algorithms
    - CascadeMatcher: Default exact/substring/token/Levenshtein cascade
    - HighConfidenceMatch, MediumConfidenceMatch, LowConfidenceMatch:
      the three shapes of MatchResult
"""
from gearpack.services.matching.matcher import (
    CatalogItem,
    MatcherStrategy,
    CascadeMatcher,
    HighConfidenceMatch,
    MediumConfidenceMatch,
    LowConfidenceMatch,
    MatchResult,
    create_matcher,
    match_catalog_item,
)

__all__ = [
    "CatalogItem",
    "MatcherStrategy",
    "CascadeMatcher",
    "HighConfidenceMatch",
    "MediumConfidenceMatch",
    "LowConfidenceMatch",
    "MatchResult",
    "create_matcher",
    "match_catalog_item",
]
