# Path: doc_match/tests/unit/test_coordinator.py
"""
Unit Tests for MatchingCoordinator

Tests the search pipeline, confirm/reject/skip/remove, series
application, auto-match and learning-data import/export.
"""

import pytest

from doc_match.constants import MatchMethod
from doc_match.process.matcher import MatchingCoordinator
from doc_match.process.matcher.models.errors import (
    ConflictError,
    DataCorruptionError,
    ValidationError,
)
from doc_match.process.matcher.models.match import (
    Confidence,
    ScoredCandidate,
    SearchResponse,
)
from doc_match.process.matcher.text.normalizer import extract_pattern


def _candidate(path, score, index=0):
    return ScoredCandidate(path=path, index=index, base_score=score, score=score)


class TestSearch:
    """Test search(), begin_search() and finish_search()."""

    def test_best_first(self, coordinator, session):
        response = coordinator.search(session, 'Exhibit A5-02')

        assert response.best.path == 'exhibits/A5-02.pdf'
        assert response.best.confidence == Confidence.HIGH
        scores = [c.score for c in response.results]
        assert scores == sorted(scores, reverse=True)
        assert session.last_search is response

    def test_result_breakdown(self, coordinator, session):
        """Every result records its base score and each enhancer."""
        best = coordinator.search(session, 'Exhibit A5-02').best
        assert set(best.breakdown) == {'base', 'learning', 'context'}
        assert best.breakdown['base']['variant'] == 'key_terms'

    def test_learning_and_context_lift_next_item(
        self, coordinator, scenario_session
    ):
        """After confirming A5-01, A5-02's path ranks first and A5-01's is gone."""
        coordinator.confirm(
            scenario_session, 'Exhibit A5-01', 'folder/A5-01-letter.pdf', 0.6
        )
        response = coordinator.search(scenario_session, 'Exhibit A5-02')

        assert response.paths == ['folder/A5-02-letter.pdf']
        best = response.best
        assert best.score > best.base_score
        assert best.breakdown['learning']['pattern'] > 0
        assert best.breakdown['context']['sequence'] > 0
        assert best.confidence == Confidence.HIGH

    def test_used_paths_excluded(self, coordinator, session):
        coordinator.confirm(session, 'Exhibit A5-01', 'exhibits/A5-01.pdf', 1.0)
        response = coordinator.search(session, 'Exhibit A5-01')
        assert 'exhibits/A5-01.pdf' not in response.paths

    def test_stale_search_discarded(self, coordinator, session):
        """Only the latest request delivers results."""
        first = coordinator.begin_search(session, 'Exhibit A5-01')
        second = coordinator.begin_search(session, 'Exhibit A5-02')

        assert coordinator.finish_search(session, first) is None
        response = coordinator.finish_search(session, second)
        assert response.reference == 'Exhibit A5-02'
        assert session.last_search is response

    def test_confirm_during_pending_search_excludes_path(
        self, coordinator, scenario_session
    ):
        """A path confirmed before the search finishes is not returned."""
        pending = coordinator.begin_search(scenario_session, 'Exhibit A5-02')
        coordinator.confirm(
            scenario_session, 'Exhibit A5-01', 'folder/A5-01-letter.pdf', 0.6
        )
        response = coordinator.finish_search(scenario_session, pending)

        assert response.paths == ['folder/A5-02-letter.pdf']

    def test_empty_reference_returns_nothing_useful(self, coordinator, session):
        """Scoring never raises; empty text scores 0 and falls below the floor."""
        assert len(coordinator.search(session, '')) == 0


class TestConfirm:
    """Test confirm() and negative sampling."""

    def test_confirm_records_learning_and_context(self, coordinator, session):
        match = coordinator.confirm(session, 'Exhibit A5-01', 'exhibits/A5-01.pdf', 0.9)

        assert match.method == MatchMethod.MANUAL
        assert session.ledger.is_used('exhibits/A5-01.pdf')
        assert session.learning_store.statistics.successful_matches == 1
        assert session.context_tracker.current_folder == 'exhibits'

    def test_negative_samples_from_latest_search(self, coordinator, session):
        """Up to three unchosen siblings above 0.5 are recorded as rejections."""
        session.last_search = SearchResponse(
            reference='Exhibit A5-02',
            request_id=1,
            results=[
                _candidate('exhibits/A5-02.pdf', 0.9, 1),
                _candidate('exhibits/A5-01.pdf', 0.8, 0),
                _candidate('exhibits/A5-03.pdf', 0.7, 2),
                _candidate('misc/Cover Letter.docx', 0.6, 6),
                _candidate('orders/Procedural Order 3.pdf', 0.55, 5),
                _candidate('witness/CW-1 Witness Statement Smith.pdf', 0.4, 3),
            ],
        )

        match = coordinator.confirm(session, 'Exhibit A5-02', 'exhibits/A5-02.pdf')

        stats = session.learning_store.statistics
        assert match.score == pytest.approx(0.9)
        assert stats.successful_matches == 1
        assert stats.failed_matches == 3
        rejected = [h.path for h in session.learning_store.history if not h.confirmed]
        assert rejected == [
            'exhibits/A5-01.pdf', 'exhibits/A5-03.pdf', 'misc/Cover Letter.docx'
        ]

    def test_no_negatives_from_other_reference(self, coordinator, session):
        session.last_search = SearchResponse(
            reference='Exhibit A5-03',
            request_id=1,
            results=[_candidate('exhibits/A5-01.pdf', 0.9)],
        )
        coordinator.confirm(session, 'Exhibit A5-02', 'exhibits/A5-02.pdf', 0.9)
        assert session.learning_store.statistics.failed_matches == 0

    def test_conflict_leaves_learning_untouched(self, coordinator, session):
        coordinator.confirm(session, 'Exhibit A5-01', 'exhibits/A5-01.pdf', 0.9)

        with pytest.raises(ConflictError):
            coordinator.confirm(session, 'Exhibit A5-02', 'exhibits/A5-01.pdf', 0.5)

        assert session.learning_store.statistics.total_matches == 1
        assert not session.ledger.is_matched('Exhibit A5-02')

    def test_unknown_path_raises(self, coordinator, session):
        with pytest.raises(ValidationError):
            coordinator.confirm(session, 'Exhibit A5-01', 'nowhere.pdf', 0.9)
        assert session.learning_store.statistics.total_matches == 0


class TestRejectSkipRemove:
    """Test reject(), skip() and remove()."""

    def test_reject(self, coordinator, session):
        coordinator.reject(session, 'Exhibit A5-02', 'exhibits/A5-01.pdf', 0.6)

        assert session.learning_store.statistics.failed_matches == 1
        assert len(session.ledger) == 0

    def test_reject_empty_path_raises(self, coordinator, session):
        with pytest.raises(ValidationError):
            coordinator.reject(session, 'Exhibit A5-02', '', 0.6)

    def test_skip_rejects_best(self, coordinator, session):
        coordinator.search(session, 'Exhibit A5-02')
        rejected = coordinator.skip(session, 'Exhibit A5-02')

        assert rejected == 'exhibits/A5-02.pdf'
        assert session.learning_store.statistics.failed_matches == 1

    def test_skip_without_search(self, coordinator, session):
        assert coordinator.skip(session, 'Exhibit A5-02') is None
        assert session.learning_store.statistics.total_matches == 0

    def test_remove_keeps_learning(self, coordinator, session):
        coordinator.confirm(session, 'Exhibit A5-01', 'exhibits/A5-01.pdf', 0.9)
        coordinator.remove(session, 'Exhibit A5-01')

        assert not session.ledger.is_used('exhibits/A5-01.pdf')
        assert session.learning_store.pattern_count(
            extract_pattern('Exhibit A5-01'), extract_pattern('exhibits/A5-01.pdf')
        ) == 1

    def test_remove_can_unlearn(self, make_config, sample_references, sample_paths):
        coordinator = MatchingCoordinator(make_config(unlearn_on_remove=True))
        try:
            session = coordinator.create_session(sample_references, sample_paths)
            coordinator.confirm(session, 'Exhibit A5-01', 'exhibits/A5-01.pdf', 0.9)
            coordinator.remove(session, 'Exhibit A5-01')

            assert session.learning_store.pattern_count(
                extract_pattern('Exhibit A5-01'), extract_pattern('exhibits/A5-01.pdf')
            ) == 0
        finally:
            coordinator.shutdown()

    def test_remove_unmatched_raises(self, coordinator, session):
        with pytest.raises(ValidationError):
            coordinator.remove(session, 'Exhibit A5-01')


class TestSeries:
    """Test series detection and application."""

    def _exhibit_sets(self, coordinator, session):
        return [
            s for s in coordinator.suggest_series(session)
            if s.group.series_key == 'exhibit:A5'
        ]

    def test_detect_on_unmatched(self, coordinator, session):
        coordinator.confirm(session, 'CW-1 - Witness Statement of J. Smith',
                            'witness/CW-1 Witness Statement Smith.pdf', 0.9)
        keys = [g.series_key for g in coordinator.bulk_detect_series(session)]
        assert keys == ['exhibit:A5']

    def test_apply_series(self, coordinator, session):
        result = coordinator.apply_series(session, self._exhibit_sets(coordinator, session))

        assert len(result.applied) == 3
        assert result.skipped == []
        assert all(m.method == MatchMethod.PATTERN for m in result.applied)
        assert all(m.score == pytest.approx(0.85) for m in result.applied)
        assert session.ledger.get_match('Exhibit A5-03').path == 'exhibits/A5-03.pdf'

    def test_apply_rechecks_state(self, coordinator, session):
        """A path used after suggestion time is skipped, not overwritten."""
        sets = self._exhibit_sets(coordinator, session)
        coordinator.confirm(session, 'Exhibit A5-02', 'exhibits/A5-02.pdf', 1.0)

        result = coordinator.apply_series(session, sets)

        assert len(result.applied) == 2
        assert [s[0] for s in result.skipped] == ['Exhibit A5-02']


class TestAutoMatch:
    """Test auto_match() and apply_auto_matches()."""

    def test_proposals(self, coordinator, session):
        result = coordinator.auto_match(session, threshold=0.8)
        proposed = {p.reference: p.path for p in result.proposals}

        assert proposed['Exhibit A5-01'] == 'exhibits/A5-01.pdf'
        assert proposed['Exhibit A5-02'] == 'exhibits/A5-02.pdf'
        assert proposed['Exhibit A5-03'] == 'exhibits/A5-03.pdf'
        assert len(set(proposed.values())) == len(proposed)
        assert all(p.score >= 0.8 for p in result.proposals)
        assert len(session.ledger) == 0

    def test_apply(self, coordinator, session):
        result = coordinator.auto_match(session, threshold=0.8)
        applied = coordinator.apply_auto_matches(session, result)

        assert len(applied.applied) == len(result.proposals)
        assert all(m.method == MatchMethod.AUTO for m in applied.applied)

    def test_apply_skips_conflicts(self, coordinator, session):
        result = coordinator.auto_match(session, threshold=0.8)
        coordinator.confirm(session, 'Exhibit A5-03', 'exhibits/A5-03.pdf', 1.0)

        applied = coordinator.apply_auto_matches(session, result)

        assert [s[0] for s in applied.skipped] == ['Exhibit A5-03']
        assert len(applied.applied) == len(result.proposals) - 1


class TestLearningData:
    """Test statistics, export and import."""

    def test_statistics_sections(self, coordinator, session):
        coordinator.confirm(session, 'Exhibit A5-01', 'exhibits/A5-01.pdf', 0.9)
        stats = coordinator.get_statistics(session)

        assert set(stats) == {'learning', 'ledger', 'context'}
        assert stats['ledger']['matched'] == 1
        assert stats['learning']['patternsLearned'] == 1

    def test_round_trip(self, coordinator, session, sample_references, sample_paths):
        """Export then import into a fresh session gives equal statistics."""
        coordinator.confirm(session, 'Exhibit A5-01', 'exhibits/A5-01.pdf', 0.9)
        coordinator.confirm(session, 'Exhibit A5-02', 'exhibits/A5-02.pdf', 0.8)
        coordinator.reject(session, 'Exhibit A5-03', 'misc/Cover Letter.docx', 0.3)

        payload = coordinator.export_learning_data(session)
        fresh = coordinator.create_session(sample_references, sample_paths)
        report = coordinator.import_learning_data(fresh, payload)

        assert report.warnings == []
        assert report.history_imported == 3
        assert (
            coordinator.get_statistics(fresh)['learning']
            == coordinator.get_statistics(session)['learning']
        )

    @pytest.mark.parametrize("payload", [
        [],
        'not a snapshot',
        {'patterns': []},
        {'version': '9.9'},
    ])
    def test_corrupt_payload_leaves_store_untouched(self, coordinator, session, payload):
        coordinator.confirm(session, 'Exhibit A5-01', 'exhibits/A5-01.pdf', 0.9)

        with pytest.raises(DataCorruptionError):
            coordinator.import_learning_data(session, payload)

        assert session.learning_store.statistics.total_matches == 1
