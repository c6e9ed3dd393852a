"""Unit tests for the string similarity primitives.

Tests cover:
    - normalize(): casing, punctuation removal, whitespace collapsing
    - comparison_string(): field concatenation order
    - dice_coefficient(): token filtering and empty sets
    - levenshtein_similarity(): distance-based similarity
    - score_entry(): cascade order (exact, substring, tokens, Levenshtein)
"""
import pytest

from gearpack.models import CatalogEntry
from gearpack.services.matching.similarity import (
    DEFAULT_SUBSTRING_SCORE,
    DEFAULT_TOKEN_OVERLAP_THRESHOLD,
    EXACT_SCORE,
    comparison_string,
    dice_coefficient,
    levenshtein_distance,
    levenshtein_similarity,
    normalize,
    score_entry,
    token_set,
)


class TestNormalize:
    """Tests for normalize()."""

    def test_lowercases_and_strips_punctuation(self):
        assert normalize("Sony A7-IV (Body)") == "sony a7iv body"

    def test_collapses_whitespace(self):
        assert normalize("  Shotgun \t  Mic\n") == "shotgun mic"

    def test_punctuation_is_removed_not_replaced(self):
        assert normalize("24-70mm f/2.8") == "2470mm f28"

    def test_blank_and_none(self):
        assert normalize("   ") == ""
        assert normalize("") == ""
        assert normalize(None) == ""


class TestComparisonString:
    """Tests for comparison_string()."""

    def test_brand_name_model_tags_order(self):
        entry = CatalogEntry(
            id="cam2",
            name="FX3",
            brand="Sony",
            model="ILME-FX3",
            tags=["cinema", "Full Frame"],
        )
        assert comparison_string(entry) == "sony fx3 ilmefx3 cinema full frame"

    def test_missing_fields_are_skipped(self):
        entry = CatalogEntry(id="aud1", name="Shotgun Mic")
        assert comparison_string(entry) == "shotgun mic"

    def test_punctuation_only_entry_is_empty(self):
        entry = CatalogEntry(id="x", name="---", tags=["!!"])
        assert comparison_string(entry) == ""


class TestDiceCoefficient:
    """Tests for token overlap."""

    def test_single_character_tokens_ignored(self):
        assert token_set("a lens b cap") == {"lens", "cap"}

    def test_identical_sets(self):
        assert dice_coefficient("sony a7 iv", "iv a7 sony") == 1.0

    def test_partial_overlap(self):
        # {sony, a7, iv} vs {sony, a7iv, body}: one shared token
        assert dice_coefficient("sony a7 iv", "sony a7iv body") == pytest.approx(1 / 3)

    def test_empty_token_set_scores_zero(self):
        assert dice_coefficient("a b c", "sony fx3") == 0.0
        assert dice_coefficient("", "sony fx3") == 0.0

    def test_duplicate_tokens_count_once(self):
        # {sony, fx3} vs {sony}
        assert dice_coefficient("sony sony fx3", "sony") == pytest.approx(2 / 3)


class TestLevenshtein:
    """Tests for Levenshtein distance and similarity."""

    @pytest.mark.parametrize(
        "a, b, expected",
        [
            ("kitten", "sitting", 3),
            ("", "abc", 3),
            ("abc", "abc", 0),
            ("flaw", "lawn", 2),
        ],
    )
    def test_distance(self, a, b, expected):
        assert levenshtein_distance(a, b) == expected

    def test_similarity_uses_longer_length(self):
        # distance 3, longer length 7
        assert levenshtein_similarity("kitten", "sitting") == pytest.approx(4 / 7)

    def test_similarity_is_symmetric(self):
        assert levenshtein_similarity("lens", "lenz") == levenshtein_similarity("lenz", "lens")

    def test_both_empty_is_one(self):
        assert levenshtein_similarity("", "") == 1.0

    def test_one_empty_is_zero(self):
        assert levenshtein_similarity("", "tripod") == 0.0


class TestScoreEntry:
    """Tests for the scoring cascade."""

    def test_empty_comparison_string_scores_zero(self):
        entry = CatalogEntry(id="x", name="???")
        assert score_entry("anything", entry) == 0.0

    def test_exact_match(self):
        entry = CatalogEntry(id="aud1", name="Shotgun Mic")
        assert score_entry("shotgun  MIC!", entry) == EXACT_SCORE

    def test_ai_name_contained_in_entry(self):
        entry = CatalogEntry(id="aud1", name="Shotgun Mic", tags=["interview"])
        assert score_entry("Shotgun Mic", entry) == DEFAULT_SUBSTRING_SCORE

    def test_entry_contained_in_ai_name(self):
        entry = CatalogEntry(id="tri1", name="Carbon Tripod")
        assert score_entry("Peak Design Carbon Tripod with ball head", entry) == DEFAULT_SUBSTRING_SCORE

    def test_substring_outranks_token_overlap(self):
        # Dice alone would give 4/6 here
        entry = CatalogEntry(id="tri1", name="Carbon Tripod", brand="Peak Design")
        assert score_entry("carbon tripod", entry) == DEFAULT_SUBSTRING_SCORE

    def test_reordered_tokens_use_dice(self):
        entry = CatalogEntry(id="lens1", name="24-70mm f/2.8", brand="Sony")
        # "2470mm f28 sony" vs "sony 2470mm f28": same token set, no containment
        assert score_entry("24-70mm f/2.8 Sony", entry) == 1.0

    def test_dice_at_threshold_returned_directly(self):
        entry = CatalogEntry(id="x", name="alpha bravo charlie echo")
        score = score_entry("alpha bravo charlie delta", entry)
        assert score == pytest.approx(DEFAULT_TOKEN_OVERLAP_THRESHOLD)

    def test_low_dice_falls_back_to_levenshtein(self, camera_body):
        ai_norm = "sony a7 iv"
        item_str = comparison_string(camera_body)
        assert item_str == "sony sony a7iv body"
        assert dice_coefficient(ai_norm, item_str) < DEFAULT_TOKEN_OVERLAP_THRESHOLD

        score = score_entry("Sony A7 IV", camera_body)
        assert score == levenshtein_similarity(ai_norm, item_str)

    def test_typo_scores_by_levenshtein(self):
        entry = CatalogEntry(id="x", name="lens")
        assert score_entry("lenz", entry) == pytest.approx(0.75)

    def test_blank_ai_name_scores_zero(self, shotgun_mic):
        assert score_entry("   ", shotgun_mic) == 0.0

    def test_custom_substring_score(self, shotgun_mic):
        assert score_entry("shotgun", shotgun_mic, substring_score=0.9) == 0.9
