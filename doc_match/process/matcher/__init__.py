# Path: doc_match/process/matcher/__init__.py
"""
Matching Engine - Document Reference Matching

The matching engine is the heart of doc_match. It scores candidate
paths against free-text references, learns from confirmations and
rejections, detects numbered series for bulk matching and keeps
every path assigned to at most one reference.

Core Components:
    - MatchingCoordinator: Main orchestrator
    - MatchingSession / MatchLedger: Caller-owned state and matches
    - SimilarityScorer: Word and character similarity
    - LearningStore: Pattern and term learning, adaptive weights
    - ContextTracker: Folder, type and sequence context
    - SeriesDetector: Series grouping and path templates
    - Enhancers: Ordered score-adjustment pipeline

Example:
    from doc_match.process.matcher import MatchingCoordinator

    coordinator = MatchingCoordinator()
    session = coordinator.create_session(references, paths)
    response = coordinator.search(session, "Exhibit A5-02")
    # response.best.path -> "folder/A5-02-letter.pdf"
"""

from .engine import (
    MatchingCoordinator,
    MatchingSession,
    MatchLedger,
    SearchWorker,
    PendingSearch,
    AutoMatcher,
)
from .learning import LearningStore
from .context import ContextTracker
from .series import SeriesDetector
from .scoring import SimilarityScorer, ConfidenceCalculator, ResultRanker
from .text import Normalizer
from .enhancers import BaseEnhancer, LearningEnhancer, ContextEnhancer
from .models import (
    Match,
    ScoredCandidate,
    SearchResponse,
    Confidence,
    SeriesGroup,
    SeriesSuggestionSet,
    AutoMatchResult,
    ApplyResult,
)

__all__ = [
    'MatchingCoordinator',
    'MatchingSession',
    'MatchLedger',
    'SearchWorker',
    'PendingSearch',
    'AutoMatcher',
    'LearningStore',
    'ContextTracker',
    'SeriesDetector',
    'SimilarityScorer',
    'ConfidenceCalculator',
    'ResultRanker',
    'Normalizer',
    'BaseEnhancer',
    'LearningEnhancer',
    'ContextEnhancer',
    'Match',
    'ScoredCandidate',
    'SearchResponse',
    'Confidence',
    'SeriesGroup',
    'SeriesSuggestionSet',
    'AutoMatchResult',
    'ApplyResult',
]
