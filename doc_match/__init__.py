# Path: doc_match/__init__.py
"""
doc_match - Document Reference Matching

Matches free-text document references (e.g. "Exhibit A5-03 - Claimant
Letter") against file paths in a document set, learning from user
confirmations and rejections along the way.

Layers:
    - loaders: INPUT (document-type dictionary, learning snapshots)
    - process.matcher: PROCESS (scoring, learning, series, ledger)
    - output: OUTPUT (learning-data export)

Example:
    from doc_match import MatchingCoordinator, MatchingSession

    session = MatchingSession(references, paths)
    coordinator = MatchingCoordinator()
    response = coordinator.search(session, "Exhibit A5-02")
"""

from .process.matcher import (
    MatchingCoordinator,
    MatchingSession,
    MatchLedger,
    LearningStore,
    ContextTracker,
    SeriesDetector,
    SimilarityScorer,
    Normalizer,
)
from .process.matcher.models.errors import (
    MatchingError,
    ValidationError,
    ConflictError,
    DataCorruptionError,
)

__version__ = '1.0.0'

__all__ = [
    'MatchingCoordinator',
    'MatchingSession',
    'MatchLedger',
    'LearningStore',
    'ContextTracker',
    'SeriesDetector',
    'SimilarityScorer',
    'Normalizer',
    'MatchingError',
    'ValidationError',
    'ConflictError',
    'DataCorruptionError',
]
