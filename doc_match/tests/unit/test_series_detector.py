# Path: doc_match/tests/unit/test_series_detector.py
"""
Unit Tests for Series Detection

Tests series shapes, grouping, increment classification,
template inference and path generation.
"""

import pytest

from doc_match.constants import SeriesType, IncrementPattern
from doc_match.process.matcher.series import (
    SeriesDetector,
    classify_increment,
    parse_series_item,
)


WITNESS_REFERENCES = [
    'CW-1 - Witness Statement of J. Smith',
    'CW-2 - Witness Statement of K. Jones',
    'CW-3 - Witness Statement of L. Brown',
]

EXHIBIT_REFERENCES = ['Exhibit A5-01', 'Exhibit A5-02', 'Exhibit A5-03']


class TestParseSeriesItem:
    """Test the series shapes."""

    def test_exhibit(self):
        series_type, item = parse_series_item('Exhibit A5-03 - Claimant Letter')
        assert series_type == SeriesType.EXHIBIT
        assert item.series == 'A5'
        assert item.number == 3
        assert item.description == 'Claimant Letter'

    def test_appendix(self):
        series_type, item = parse_series_item('Appendix 4 to Statement of Claim - Chronology')
        assert series_type == SeriesType.APPENDIX
        assert item.number == 4
        assert item.series == 'Statement of Claim'
        assert item.description == 'Chronology'

    def test_witness(self):
        series_type, item = parse_series_item('RW-2 Witness Statement')
        assert series_type == SeriesType.WITNESS
        assert item.series == 'RW'
        assert item.number == 2

    def test_document(self):
        series_type, item = parse_series_item('RDCC 0042 - Board Minutes')
        assert series_type == SeriesType.DOCUMENT
        assert item.series == 'RDCC'
        assert item.number == 42

    def test_not_a_series(self):
        assert parse_series_item('Procedural Order No. 3') is None
        assert parse_series_item('') is None


class TestClassifyIncrement:
    """Test classify_increment()."""

    @pytest.mark.parametrize("numbers,expected", [
        ([1, 2, 3], (1, IncrementPattern.SEQUENTIAL)),
        ([2, 4, 6, 8], (2, IncrementPattern.SEQUENTIAL)),
        ([1, 2, 3, 7], (1, IncrementPattern.GAPPED)),
        ([1, 5, 6, 20], (4, IncrementPattern.IRREGULAR)),
        ([5], (1, IncrementPattern.SEQUENTIAL)),
        ([], (1, IncrementPattern.SEQUENTIAL)),
    ])
    def test_patterns(self, numbers, expected):
        assert classify_increment(numbers) == expected


class TestDetectPatterns:
    """Test detect_patterns()."""

    @pytest.fixture
    def detector(self):
        return SeriesDetector()

    def test_witness_series(self, detector):
        groups = detector.detect_patterns(WITNESS_REFERENCES)

        assert len(groups) == 1
        group = groups[0]
        assert group.type == SeriesType.WITNESS
        assert group.series_key == 'witness:CW'
        assert group.size == 3
        assert group.detected_increment == 1
        assert group.increment_pattern == IncrementPattern.SEQUENTIAL

    def test_bare_witness_codes(self, detector):
        groups = detector.detect_patterns(['CW-1', 'CW-2', 'CW-3'])

        assert len(groups) == 1
        assert groups[0].numbers == [1, 2, 3]
        assert groups[0].increment_pattern == IncrementPattern.SEQUENTIAL

    def test_items_sorted_by_number(self, detector):
        groups = detector.detect_patterns(['Exhibit A5-03', 'Exhibit A5-01', 'Exhibit A5-02'])
        assert groups[0].numbers == [1, 2, 3]

    def test_single_items_are_not_series(self, detector):
        """Groups with fewer than two items are discarded."""
        assert detector.detect_patterns(['Exhibit A5-01', 'Exhibit B1-01']) == []

    def test_mixed_batch(self, detector, sample_references):
        groups = detector.detect_patterns(sample_references)
        assert {g.series_key for g in groups} == {'exhibit:A5', 'witness:CW'}


class TestTemplates:
    """Test find_path_pattern() and generate_paths_for_series()."""

    @pytest.fixture
    def detector(self):
        return SeriesDetector()

    @pytest.fixture
    def group(self, detector):
        return detector.detect_patterns(EXHIBIT_REFERENCES)[0]

    def test_template_from_first_match(self, detector, group):
        template = detector.find_path_pattern(
            group, ['exhibits/A5-01.pdf', 'misc/Cover Letter.docx']
        )

        assert template is not None
        assert template.template == 'exhibits/{series}-{number}.pdf'
        assert template.pad_width == 2
        assert template.source_path == 'exhibits/A5-01.pdf'

    def test_no_template_below_threshold(self, detector, group):
        assert detector.find_path_pattern(group, ['misc/Cover Letter.docx']) is None

    def test_no_template_without_number(self, detector, group):
        """A path not carrying the item's number gives no template."""
        assert detector.build_template('exhibits/Intro.pdf', group.first) is None

    def test_generate_paths(self, detector, group):
        pool = ['exhibits/A5-01.pdf', 'exhibits/A5-02.pdf']
        template = detector.find_path_pattern(group, pool)
        suggestions = detector.generate_paths_for_series(
            group, template, pool=pool, available=pool[1:]
        )

        assert [s.path for s in suggestions] == [
            'exhibits/A5-01.pdf', 'exhibits/A5-02.pdf', 'exhibits/A5-03.pdf'
        ]
        assert all(s.confidence == detector.confidence for s in suggestions)
        assert [s.exists for s in suggestions] == [True, True, False]
        assert [s.available for s in suggestions] == [False, True, False]
