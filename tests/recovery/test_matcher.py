"""Unit tests for the best-match and single-substitution matchers."""

from unittest.mock import patch

import pytest

from src.recovery.distance import edit_distance
from src.recovery.matcher import (
    find_best_match,
    find_single_substitution_match,
    match_code,
)
from src.recovery.types import CodeMatch, MatchMethod, SubstitutionMatch


class TestFindBestMatch:
    """Test the candidate + edit-distance resolver."""

    def test_exact_match(self, known_codes):
        """Test a correct OCR read returns the code."""
        assert find_best_match("PL-HJK-4RT", known_codes) == "PL-HJK-4RT"

    def test_lowercase_noisy_read(self, known_codes):
        """Test OCR noise is normalized before matching."""
        assert find_best_match(" pl-hjk-4rt. ", known_codes) == "PL-HJK-4RT"

    def test_misread_recovered_by_candidate(self):
        """Test '0' misread for 'Q' is corrected."""
        assert find_best_match("PL-0A9-K2M", ["PL-QA9-K2M"]) == "PL-QA9-K2M"

    def test_fuzzy_match_within_budget(self):
        """Test the closest code within max_distance is returned."""
        assert find_best_match("PL-7A9-KM", ["PL-7A9-K2M", "PL-HJK-4RT"]) == "PL-7A9-K2M"

    def test_no_match_beyond_budget(self):
        """Test no match when every code is too far away."""
        assert find_best_match("PL-XXX-XXX", ["PL-AAA-AAA"], max_distance=2) is None

    def test_empty_known_codes(self):
        """Test empty code set short-circuits both passes."""
        with patch("src.recovery.matcher.generate_candidates") as candidates_spy, patch(
            "src.recovery.matcher.edit_distance"
        ) as distance_spy:
            assert find_best_match("PL-7A9-K2M", []) is None

        candidates_spy.assert_not_called()
        distance_spy.assert_not_called()

    def test_empty_input(self, known_codes):
        """Test empty OCR text finds nothing."""
        assert find_best_match("", known_codes) is None

    def test_negative_budget(self, known_codes):
        """Test error for negative max_distance."""
        with pytest.raises(ValueError, match="max_distance"):
            find_best_match("PL-7A9-K2M", known_codes, max_distance=-1)


class TestExactMatchShortCircuit:
    """Test the fuzzy pass is skipped when an exact hit exists."""

    def test_identity_hit_skips_edit_distance(self, known_codes):
        """Test edit distance is never computed for an exact identity hit."""
        with patch(
            "src.recovery.matcher.edit_distance", wraps=edit_distance
        ) as distance_spy:
            assert find_best_match("pl-7a9-k2m", known_codes) == "PL-7A9-K2M"

        distance_spy.assert_not_called()

    def test_candidate_hit_skips_edit_distance(self):
        """Test a substitution hit also skips the fuzzy pass."""
        with patch(
            "src.recovery.matcher.edit_distance", wraps=edit_distance
        ) as distance_spy:
            assert find_best_match("PL-0A9-K2M", ["PL-DA9-K2M"]) == "PL-DA9-K2M"

        distance_spy.assert_not_called()

    def test_fuzzy_pass_reached_without_exact_hit(self):
        """Test edit distance is used when no candidate is known."""
        with patch(
            "src.recovery.matcher.edit_distance", wraps=edit_distance
        ) as distance_spy:
            assert find_best_match("PL-7A9-K2N", ["PL-7A9-K2M"]) == "PL-7A9-K2M"

        assert distance_spy.call_count > 0


class TestDistanceBudget:
    """Test max_distance semantics."""

    def test_zero_budget_with_exact_match(self):
        """Test max_distance=0 still returns an exact match."""
        assert find_best_match("PL-7A9-K2M", ["PL-7A9-K2M"], max_distance=0) == "PL-7A9-K2M"

    def test_zero_budget_without_exact_match(self):
        """Test max_distance=0 rejects even a one-character difference."""
        assert find_best_match("PL-7A9-K2N", ["PL-7A9-K2M"], max_distance=0) is None

    def test_budget_is_inclusive(self):
        """Test a code exactly at max_distance is accepted."""
        assert find_best_match("PL-7A9-K2N", ["PL-7A9-K2M"], max_distance=1) == "PL-7A9-K2M"


class TestTieBreaking:
    """Test resolution when several codes are equally close."""

    def test_some_minimal_code_returned(self):
        """Test a minimal-distance code is returned on ties."""
        valid_codes = ["PL-7A9-K3M", "PL-7A9-K4M", "PL-HJK-4RT"]

        result = find_best_match("PL-7A9-K2M", valid_codes)

        assert result in {"PL-7A9-K3M", "PL-7A9-K4M"}

    def test_tie_break_independent_of_order(self):
        """Test the lexicographically smallest code wins regardless of order."""
        forward = find_best_match("PL-7A9-K2M", ["PL-7A9-K3M", "PL-7A9-K4M"])
        backward = find_best_match("PL-7A9-K2M", ["PL-7A9-K4M", "PL-7A9-K3M"])

        assert forward == backward == "PL-7A9-K3M"

    def test_closer_code_beats_smaller_code(self):
        """Test distance takes priority over lexicographic order."""
        result = find_best_match("PL-7A9-K2MX", ["PL-7A9-A2M", "PL-7A9-K2M"])

        assert result == "PL-7A9-K2M"


class TestMatchCode:
    """Test the detailed match result."""

    def test_exact_method(self):
        """Test identity hit reports EXACT."""
        match = match_code("PL-7A9-K2M", ["PL-7A9-K2M"])

        assert match == CodeMatch(
            code="PL-7A9-K2M",
            method=MatchMethod.EXACT,
            candidate="PL-7A9-K2M",
            distance=0,
        )

    def test_candidate_method(self):
        """Test substitution hit reports CANDIDATE."""
        match = match_code("PL-0A9-K2M", ["PL-QA9-K2M"])

        assert match.method == MatchMethod.CANDIDATE
        assert match.distance == 0

    def test_edit_distance_method(self):
        """Test fuzzy hit reports the distance and winning candidate."""
        match = match_code("PL-7A9-K2N", ["PL-7A9-K2M"])

        assert match.method == MatchMethod.EDIT_DISTANCE
        assert match.distance == 1
        assert match.candidate == "PL-7A9-K2N"

    def test_precomputed_candidates(self):
        """Test supplied candidates replace generation."""
        match = match_code("ignored", ["PL-QA9-K2M"], candidates=["PL-QA9-K2M"])

        assert match.code == "PL-QA9-K2M"
        assert match.method == MatchMethod.EXACT

    def test_custom_confusions(self):
        """Test a custom confusion map drives the candidate pass."""
        match = match_code("PL-7A9-K2M", ["PL-TA9-K2M"], confusions={"7": ["T"]})

        assert match.method == MatchMethod.CANDIDATE

    def test_known_codes_from_generator(self):
        """Test a one-shot iterable of known codes reaches the fuzzy pass."""
        match = match_code("PL-7A9-K2N", (code for code in ["PL-7A9-K2M"]))

        assert match.code == "PL-7A9-K2M"
        assert match.method == MatchMethod.EDIT_DISTANCE
        assert match.distance == 1

    def test_generator_without_match(self):
        """Test a generator with no close code returns None."""
        assert match_code("PL-XXX-XXX", (code for code in ["PL-AAA-AAA"])) is None


class TestSingleSubstitutionMatch:
    """Test the live-scan Hamming-1 matcher."""

    def test_last_character_differs(self):
        """Test a one-character difference is matched."""
        match = find_single_substitution_match("PL-7A9-K2N", ["PL-7A9-K2M"])

        assert match == SubstitutionMatch(
            code="PL-7A9-K2M", scanned_code="PL-7A9-K2N", position=5
        )

    def test_identical_code_does_not_qualify(self):
        """Test Hamming distance 0 is not a substitution match."""
        assert find_single_substitution_match("PL-7A9-K2M", ["PL-7A9-K2M"]) is None

    def test_two_differences_rejected(self):
        """Test Hamming distance 2 is not matched."""
        assert find_single_substitution_match("PL-QA9-K2N", ["PL-7A9-K2M"]) is None

    def test_length_mismatch_rejected(self):
        """Test insertions and deletions are not considered."""
        assert find_single_substitution_match("PL-7A9-K2", ["PL-7A9-K2M"]) is None
        assert find_single_substitution_match("PL-7A9-K2MM", ["PL-7A9-K2M"]) is None

    def test_first_qualifying_code_wins(self):
        """Test iteration order decides between qualifying codes."""
        match = find_single_substitution_match(
            "PL-7A9-K2N", ["PL-HJK-4RT", "PL-7A9-K2P", "PL-7A9-K2M"]
        )

        assert match.code == "PL-7A9-K2P"

    def test_original_scanned_string_kept(self):
        """Test the uncorrected scanned code is returned for display."""
        match = find_single_substitution_match("pl-7a9-k2n", ["PL-7A9-K2M"])

        assert match.code == "PL-7A9-K2M"
        assert match.scanned_code == "pl-7a9-k2n"

    def test_no_known_codes(self):
        """Test empty code set yields no match."""
        assert find_single_substitution_match("PL-7A9-K2N", []) is None
