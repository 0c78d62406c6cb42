# Path: doc_match/tests/unit/test_auto_matcher.py
"""
Unit Tests for AutoMatcher
"""

from doc_match.process.matcher.engine import AutoMatcher
from doc_match.process.matcher.models.match import Confidence


class TestAutoMatcher:
    """Test propose()."""

    def test_longer_reference_goes_first(self):
        """Both references want the same path; the longer one gets it."""
        result = AutoMatcher().propose(
            ['Letter', 'Claimant Letter'],
            [(0, 'bundle/Claimant Letter.pdf')],
            threshold=0.1,
        )

        assert [(p.reference, p.path) for p in result.proposals] == [
            ('Claimant Letter', 'bundle/Claimant Letter.pdf')
        ]
        assert result.unmatched == ['Letter']

    def test_threshold(self):
        result = AutoMatcher().propose(
            ['Exhibit A5-01'], [(0, 'misc/Cover Letter.docx')], threshold=0.8
        )
        assert result.proposals == []
        assert result.unmatched == ['Exhibit A5-01']

    def test_each_path_proposed_once(self):
        result = AutoMatcher().propose(
            ['Exhibit A5-01', 'Exhibit A5-02'],
            [(0, 'exhibits/A5-01.pdf'), (1, 'exhibits/A5-02.pdf')],
            threshold=0.5,
        )

        paths = [p.path for p in result.proposals]
        assert sorted(paths) == ['exhibits/A5-01.pdf', 'exhibits/A5-02.pdf']
        assert result.high_confidence == 2
        assert all(p.confidence == Confidence.HIGH for p in result.proposals)

    def test_empty_inputs(self):
        result = AutoMatcher().propose([], [], threshold=0.8)
        assert result.proposals == []
        assert result.unmatched == []
