"""String similarity primitives for catalog matching.

The scoring cascade is an ordered chain of early returns:

    exact match -> substring containment -> token overlap -> Levenshtein

Each later check only runs when the cheaper ones were inconclusive. The
signals are never blended into one formula.
"""
import re
from typing import Iterable, Optional, Set

from rapidfuzz.distance import Levenshtein

_NON_ALNUM = re.compile(r"[^a-z0-9\s]")
_WHITESPACE = re.compile(r"\s+")

EXACT_SCORE = 1.0
DEFAULT_SUBSTRING_SCORE = 0.87
DEFAULT_TOKEN_OVERLAP_THRESHOLD = 0.75
DEFAULT_MIN_TOKEN_LENGTH = 2


def normalize(text: Optional[str]) -> str:
    """Lower-case, drop punctuation, collapse whitespace.

    Characters outside a-z, 0-9 and whitespace are removed (not replaced),
    so "A7-IV" becomes "a7iv".
    """
    if not text:
        return ""
    text = _NON_ALNUM.sub("", text.lower())
    return _WHITESPACE.sub(" ", text).strip()


def comparison_string(entry) -> str:
    """Join brand, name, model and tags of a catalog entry, normalized."""
    parts: Iterable[Optional[str]] = [
        entry.brand,
        entry.name,
        entry.model,
        *(entry.tags or []),
    ]
    return normalize(" ".join(p for p in parts if p))


def token_set(text: str, min_length: int = DEFAULT_MIN_TOKEN_LENGTH) -> Set[str]:
    """Split a normalized string into a set of tokens of at least min_length."""
    return {t for t in text.split(" ") if len(t) >= min_length}


def dice_coefficient(
    a: str,
    b: str,
    min_length: int = DEFAULT_MIN_TOKEN_LENGTH,
) -> float:
    """Sørensen–Dice coefficient over the token sets of two normalized strings.

    Returns 0.0 when either side has no usable tokens.
    """
    tokens_a = token_set(a, min_length)
    tokens_b = token_set(b, min_length)
    if not tokens_a or not tokens_b:
        return 0.0
    shared = len(tokens_a & tokens_b)
    return (2 * shared) / (len(tokens_a) + len(tokens_b))


def levenshtein_distance(a: str, b: str) -> int:
    """Edit distance with unit insert, delete and substitute costs."""
    return Levenshtein.distance(a, b)


def levenshtein_similarity(a: str, b: str) -> float:
    """(longer_length - distance) / longer_length; 1.0 for two empty strings."""
    longer = max(len(a), len(b))
    if longer == 0:
        return 1.0
    return (longer - levenshtein_distance(a, b)) / longer


def score_entry(
    ai_name: str,
    entry,
    substring_score: float = DEFAULT_SUBSTRING_SCORE,
    token_overlap_threshold: float = DEFAULT_TOKEN_OVERLAP_THRESHOLD,
    min_token_length: int = DEFAULT_MIN_TOKEN_LENGTH,
) -> float:
    """Score how well an AI-suggested name matches a catalog entry.

    Args:
        ai_name: Item name as written by the AI
        entry: Catalog entry exposing brand, name, model and tags
        substring_score: Fixed score for containment in either direction
        token_overlap_threshold: Dice coefficient returned as-is at or above this
        min_token_length: Shorter tokens are ignored by token overlap

    Returns:
        Similarity score in the 0-1 range
    """
    ai_norm = normalize(ai_name)
    item_str = comparison_string(entry)

    if not item_str:
        return 0.0

    if ai_norm == item_str:
        return EXACT_SCORE

    # An empty AI name is contained in everything; it must not count as a hit
    if ai_norm and (ai_norm in item_str or item_str in ai_norm):
        return substring_score

    token_score = dice_coefficient(ai_norm, item_str, min_token_length)
    if token_score >= token_overlap_threshold:
        return token_score

    return levenshtein_similarity(ai_norm, item_str)
