# Path: doc_match/tests/unit/test_learning_store.py
"""
Unit Tests for LearningStore

Tests recording, learned bonuses, the weight control loop,
suggestions and statistics.
"""

import math

import pytest

from doc_match.constants import (
    DEFAULT_LEARNED_WEIGHT,
    MAX_LEARNED_WEIGHT,
    PATTERN_BONUS_CAP,
    TERM_BONUS_CAP,
    WEIGHT_TOLERANCE,
)
from doc_match.process.matcher.learning import LearningStore
from doc_match.process.matcher.models.errors import ValidationError


REFERENCE = "Exhibit A5-01 Claimant Letter"
PATH = "exhibits/A5-01 Claimant Letter.pdf"


class TestRecordMatch:
    """Test record_match()."""

    def test_updates_statistics(self):
        store = LearningStore()
        store.record_match(REFERENCE, PATH, 0.8, confirmed=True)
        store.record_match(REFERENCE, "misc/Other.pdf", 0.4, confirmed=False)

        stats = store.statistics
        assert stats.total_matches == 2
        assert stats.successful_matches == 1
        assert stats.failed_matches == 1
        assert stats.average_confidence == pytest.approx(0.6)

    def test_signed_pattern_counts(self):
        """Confirm adds one, reject subtracts one."""
        store = LearningStore()
        store.record_match("Exhibit A5-01", "folder/A5-01-letter.pdf", 0.6)
        store.record_match("Exhibit A5-02", "folder/A5-02-letter.pdf", 0.6)
        store.record_match("Exhibit A5-03", "folder/A5-03-letter.pdf", 0.6, confirmed=False)

        assert store.pattern_count("exhibit a# #", "folder/a# # letter") == 1

    def test_term_edges_clamped(self):
        """Edges rise by 0.1 per confirmation and stop at 1."""
        store = LearningStore()
        for _ in range(15):
            store.record_match("Claimant Letter", "bundle/Correspondence.pdf", 0.5)

        assert store.term_weight('claimant', 'correspondence') == pytest.approx(1.0)
        assert store.term_weight('correspondence', 'claimant') == pytest.approx(1.0)

    def test_term_edges_floor_at_zero(self):
        store = LearningStore()
        store.record_match("Claimant Letter", "bundle/Correspondence.pdf", 0.5)
        for _ in range(5):
            store.record_match("Claimant Letter", "bundle/Correspondence.pdf", 0.5, confirmed=False)

        assert store.term_weight('claimant', 'correspondence') == 0.0

    def test_history_is_capped(self):
        """Oldest entries are evicted first."""
        store = LearningStore(history_cap=3)
        for i in range(5):
            store.record_match(f"Exhibit A5-0{i}", f"x/A5-0{i}.pdf", 0.5)

        assert [h.reference for h in store.history] == [
            "Exhibit A5-02", "Exhibit A5-03", "Exhibit A5-04"
        ]

    def test_rejects_empty_input(self):
        store = LearningStore()
        with pytest.raises(ValidationError):
            store.record_match("", PATH, 0.5)
        with pytest.raises(ValidationError):
            store.record_match(REFERENCE, "  ", 0.5)
        assert store.statistics.total_matches == 0

    def test_score_clamped(self):
        store = LearningStore()
        entry = store.record_match(REFERENCE, PATH, 1.7)
        assert entry.score == 1.0


class TestEnhanceScore:
    """Test pattern/term bonuses and blending."""

    def test_no_learning_scales_base(self):
        """Without learned data the base is scaled by 1 - learned."""
        store = LearningStore()
        result = store.enhance_score(REFERENCE, PATH, 0.5)

        assert result.pattern == 0.0
        assert result.term == 0.0
        assert result.score == pytest.approx(0.5 * (1 - DEFAULT_LEARNED_WEIGHT))

    def test_pattern_bonus_formula(self):
        store = LearningStore()
        store.record_match("Exhibit A5-01", "folder/A5-01-letter.pdf", 0.6)

        bonus = store.pattern_bonus("Exhibit A5-02", "folder/A5-02-letter.pdf")
        assert bonus == pytest.approx(math.log(2) * 0.03)

    def test_pattern_bonus_capped(self):
        store = LearningStore()
        for i in range(300):
            store.record_match("Exhibit A5-01", "folder/A5-01-letter.pdf", 0.6)
        assert store.pattern_bonus("Exhibit A5-01", "folder/A5-01-letter.pdf") == PATTERN_BONUS_CAP

    def test_term_bonus_capped(self):
        store = LearningStore()
        for _ in range(10):
            store.record_match(REFERENCE, PATH, 0.6)
        assert store.term_bonus(REFERENCE, PATH) == pytest.approx(TERM_BONUS_CAP)

    def test_confirming_never_decreases_pattern_bonus(self):
        """Repeated confirmations are monotonic."""
        store = LearningStore()
        previous = 0.0
        for _ in range(20):
            store.record_match("Exhibit A5-01", "folder/A5-01-letter.pdf", 0.6)
            bonus = store.enhance_score("Exhibit A5-09", "folder/A5-09-letter.pdf", 0.5).pattern
            assert bonus >= previous
            previous = bonus

    def test_rejecting_never_increases_pattern_bonus(self):
        store = LearningStore()
        for _ in range(5):
            store.record_match("Exhibit A5-01", "folder/A5-01-letter.pdf", 0.6)
        previous = store.pattern_bonus("Exhibit A5-01", "folder/A5-01-letter.pdf")
        for _ in range(10):
            store.record_match("Exhibit A5-01", "folder/A5-01-letter.pdf", 0.6, confirmed=False)
            bonus = store.pattern_bonus("Exhibit A5-01", "folder/A5-01-letter.pdf")
            assert bonus <= previous
            previous = bonus
        assert previous == 0.0

    def test_score_clamped_to_one(self):
        store = LearningStore()
        for _ in range(10):
            store.record_match(REFERENCE, PATH, 1.0)
        assert store.enhance_score(REFERENCE, PATH, 1.0).score <= 1.0


class TestWeightControlLoop:
    """Test update_weights()."""

    def test_weights_sum_to_one_after_every_record(self):
        store = LearningStore()
        for i in range(120):
            store.record_match(f"Exhibit A5-{i:02d}", f"x/A5-{i:02d}.pdf", 0.9, confirmed=i % 10 != 0)
            assert abs(store.weights.total - 1.0) <= WEIGHT_TOLERANCE

    def test_no_change_below_min_matches(self):
        store = LearningStore()
        for i in range(50):
            store.record_match(REFERENCE, PATH, 0.9)
        assert store.weights.learned == DEFAULT_LEARNED_WEIGHT

    def test_learned_rises_with_success(self):
        store = LearningStore()
        for i in range(100):
            store.record_match(REFERENCE, PATH, 0.9)

        learned = store.weights.learned
        # 100 of 500 observations at 100% success
        assert learned == pytest.approx(0.2 + 0.2 * (100 / 500) * 1.0)
        assert DEFAULT_LEARNED_WEIGHT < learned <= MAX_LEARNED_WEIGHT
        assert store.weights.word / store.weights.character == pytest.approx(0.7 / 0.3)

    def test_low_success_keeps_weights(self):
        store = LearningStore()
        for i in range(100):
            store.record_match(REFERENCE, PATH, 0.5, confirmed=i % 2 == 0)
        assert store.weights.learned == DEFAULT_LEARNED_WEIGHT


class TestSuggestions:
    """Test learned suggestions."""

    def test_pattern_suggestions(self):
        store = LearningStore()
        for _ in range(3):
            store.record_match("Exhibit A5-01", "folder/A5-01-letter.pdf", 0.6)
        store.record_match("Exhibit A5-01", "other/A5-01.pdf", 0.6)

        suggestions = store.get_suggestions("Exhibit A7-04")
        assert [s.pattern for s in suggestions] == ["folder/a# # letter", "other/a# #"]
        assert suggestions[0].usage == 3
        assert suggestions[0].confidence == pytest.approx(0.3)

    def test_rejected_patterns_not_suggested(self):
        store = LearningStore()
        store.record_match("Exhibit A5-01", "folder/A5-01-letter.pdf", 0.6, confirmed=False)
        assert store.get_suggestions("Exhibit A5-01") == []

    def test_term_suggestions(self):
        store = LearningStore()
        for _ in range(3):
            store.record_match("Claimant Letter", "bundle/Correspondence.pdf", 0.5)

        suggestions = store.get_term_suggestions("Claimant")
        assert suggestions[0].term in ('bundle', 'correspondence')
        assert suggestions[0].confidence == pytest.approx(0.3)

    def test_top_patterns_with_examples(self):
        store = LearningStore()
        for i in range(1, 5):
            store.record_match(f"Exhibit A5-0{i}", f"folder/A5-0{i}-letter.pdf", 0.6)

        top = store.get_top_patterns()
        assert top[0]['count'] == 4
        assert [e['reference'] for e in top[0]['examples']] == [
            "Exhibit A5-02", "Exhibit A5-03", "Exhibit A5-04"
        ]


class TestStatisticsAndReset:
    """Test get_statistics() and reset()."""

    def test_statistics_view(self):
        store = LearningStore()
        store.record_match("Exhibit A5-01", "folder/A5-01-letter.pdf", 0.6)
        store.record_match("Exhibit A5-02", "folder/A5-02-letter.pdf", 0.6, confirmed=False)

        stats = store.get_statistics()
        assert stats['patternsLearned'] == 1
        # +1 then -1 on the same pattern pair
        assert stats['totalObservations'] == 0
        assert stats['matchHistory'] == 2
        assert stats['termMappings'] == store.term_edge_count
        assert stats['recentMatches'][0]['reference'] == "Exhibit A5-02"
        assert set(stats['currentWeights']) == {'word', 'character', 'learned'}

    def test_reset_clears_everything(self):
        store = LearningStore()
        for _ in range(60):
            store.record_match(REFERENCE, PATH, 0.9)
        store.reset()

        assert store.patterns == {}
        assert store.term_edges == {}
        assert store.history == []
        assert store.statistics.total_matches == 0
        assert store.weights.learned == DEFAULT_LEARNED_WEIGHT
