# Path: doc_match/process/matcher/scoring/__init__.py
"""
Scoring Components

- SimilarityScorer: base word/character similarity
- ConfidenceCalculator: confidence bands
- ResultRanker: floor filtering and stable ranking
"""

from .similarity import (
    SimilarityScorer,
    SimilarityScore,
    PreparedReference,
    word_score,
    char_score,
)
from .confidence import ConfidenceCalculator
from .ranker import ResultRanker

__all__ = [
    'SimilarityScorer',
    'SimilarityScore',
    'PreparedReference',
    'word_score',
    'char_score',
    'ConfidenceCalculator',
    'ResultRanker',
]
