# Path: doc_match/tests/unit/test_dictionary_loader.py
"""
Unit Tests for the Document Type Dictionary

Tests YAML loading and classification priority.
"""

import pytest

from doc_match.loaders import (
    DocumentTypeLoader,
    DocumentTypeClassifier,
    DOCUMENT_TYPES_FILE,
)
from doc_match.process.matcher.models.document_type import DocumentTypeDefinition


class TestDocumentTypeLoader:
    """Test DocumentTypeLoader."""

    def test_bundled_dictionary_order(self):
        """Definitions keep file order."""
        type_ids = [d.type_id for d in DocumentTypeLoader().load()]

        assert type_ids[:3] == ['statement', 'exhibit', 'witness']
        assert type_ids[-1] == 'other'

    def test_missing_file_returns_empty(self, temp_dir):
        assert DocumentTypeLoader(temp_dir).load() == []

    def test_invalid_definitions_skipped(self, temp_dir):
        (temp_dir / DOCUMENT_TYPES_FILE).write_text(
            "document_types:\n"
            "  - type_id: exhibit\n"
            "    patterns: ['^exhibit']\n"
            "  - display_name: No Id\n"
            "  - type_id: exhibit\n"
            "    patterns: ['^exh']\n",
            encoding='utf-8',
        )
        definitions = DocumentTypeLoader(temp_dir).load()
        assert [d.type_id for d in definitions] == ['exhibit']

    def test_malformed_yaml_returns_empty(self, temp_dir):
        (temp_dir / DOCUMENT_TYPES_FILE).write_text("document_types: [", encoding='utf-8')
        assert DocumentTypeLoader(temp_dir).load() == []

    def test_cache(self):
        loader = DocumentTypeLoader()
        assert loader.load() is loader.load()


class TestDocumentTypeClassifier:
    """Test DocumentTypeClassifier."""

    @pytest.fixture
    def classifier(self):
        return DocumentTypeClassifier.from_dictionary()

    @pytest.mark.parametrize("text,expected", [
        ('Exhibit A5-01 Claimant Letter', 'exhibit'),
        ('CW-3 Witness Statement of J. Smith', 'witness'),
        ('Statement of Claim', 'statement'),
        ('Procedural Order No. 3', 'order'),
        ('Letter from Claimant to Respondent', 'correspondence'),
        ('Appendix 4 - Chronology', 'appendix'),
    ])
    def test_classify(self, classifier, text, expected):
        assert classifier.classify(text) == expected

    def test_unclassified(self, classifier):
        assert classifier.classify('') is None
        assert classifier.classify('zzz') is None

    def test_invalid_regex_dropped(self):
        classifier = DocumentTypeClassifier([
            DocumentTypeDefinition(type_id='broken', patterns=['(unclosed']),
            DocumentTypeDefinition(type_id='exhibit', patterns=['^exhibit']),
        ])

        assert classifier.type_ids == ['exhibit']
        assert classifier.classify('Exhibit A5-01') == 'exhibit'
