# Path: doc_match/process/matcher/models/__init__.py
"""
Matcher Models

Data models for the matching engine:
- Match, ScoredCandidate, SearchResponse: matches and ranked results
- LearningStatistics, ScoringWeights, HistoryEntry: learning state
- SeriesGroup, PathTemplate, SeriesSuggestion: series detection
- Snapshot schema and DocumentTypeDefinition: pydantic validation models
- Errors: exception hierarchy and import reports
"""

from .match import (
    Confidence,
    Match,
    ScoredCandidate,
    SearchResponse,
    AutoMatchProposal,
    AutoMatchResult,
    ApplyResult,
)

from .learning import (
    LearningStatistics,
    ScoringWeights,
    HistoryEntry,
    LearnedScore,
    PatternSuggestion,
    TermSuggestion,
    LearningSnapshot,
)

from .series import (
    SeriesItem,
    SeriesGroup,
    PathTemplate,
    SeriesSuggestion,
    SeriesSuggestionSet,
)

from .document_type import (
    DocumentTypeDefinition,
    DocumentTypeDictionary,
)

from .errors import (
    MatchingError,
    ValidationError,
    ConflictError,
    DataCorruptionError,
    ImportIssue,
    ImportReport,
)

__all__ = [
    # Match
    'Confidence',
    'Match',
    'ScoredCandidate',
    'SearchResponse',
    'AutoMatchProposal',
    'AutoMatchResult',
    'ApplyResult',
    # Learning
    'LearningStatistics',
    'ScoringWeights',
    'HistoryEntry',
    'LearnedScore',
    'PatternSuggestion',
    'TermSuggestion',
    'LearningSnapshot',
    # Series
    'SeriesItem',
    'SeriesGroup',
    'PathTemplate',
    'SeriesSuggestion',
    'SeriesSuggestionSet',
    # Document types
    'DocumentTypeDefinition',
    'DocumentTypeDictionary',
    # Errors
    'MatchingError',
    'ValidationError',
    'ConflictError',
    'DataCorruptionError',
    'ImportIssue',
    'ImportReport',
]
