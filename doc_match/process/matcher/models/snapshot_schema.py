# Path: doc_match/process/matcher/models/snapshot_schema.py
"""
Learning Snapshot Schema

Pydantic models validating individual entries of a learning-data
snapshot. Entries are validated one at a time so a bad entry can be
skipped without rejecting the whole payload.
"""

from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class _SnapshotModel(BaseModel):
    """Shared configuration: accept camelCase keys, ignore extras."""
    model_config = ConfigDict(populate_by_name=True, extra='ignore')


class PatternMappingEntry(_SnapshotModel):
    """
    One reference pattern with its path-pattern usage counts.

    Example entry:
        {"reference": "exhibit a# #", "mappings": [["folder/a# # letter", 3]]}
    """
    reference: str = Field(min_length=1, description="Digit-generalized reference")
    mappings: list[tuple[str, int]] = Field(
        default_factory=list,
        description="Pairs of (path pattern, signed usage count)"
    )


class TermMappingEntry(_SnapshotModel):
    """One term with related terms and their weights."""
    term: str = Field(min_length=1, description="Lexical term")
    mappings: list[tuple[str, float]] = Field(
        default_factory=list,
        description="Pairs of (related term, weight)"
    )


class StatisticsEntry(_SnapshotModel):
    """Aggregate learning counters."""
    total_matches: int = Field(default=0, ge=0, alias='totalMatches')
    successful_matches: int = Field(default=0, ge=0, alias='successfulMatches')
    failed_matches: int = Field(default=0, ge=0, alias='failedMatches')
    average_confidence: float = Field(default=0.0, ge=0.0, le=1.0, alias='averageConfidence')


class WeightsEntry(_SnapshotModel):
    """Scoring weights, each in [0, 1]. Sum is checked by the parser."""
    word: float = Field(ge=0.0, le=1.0)
    character: float = Field(ge=0.0, le=1.0)
    learned: float = Field(ge=0.0, le=1.0)


class HistoryPatterns(_SnapshotModel):
    reference_pattern: str = Field(alias='referencePattern')
    path_pattern: str = Field(alias='pathPattern')


class HistoryRecordEntry(_SnapshotModel):
    """One match-history record."""
    reference: str = Field(min_length=1)
    path: str = Field(min_length=1)
    score: float = Field(ge=0.0, le=1.0)
    confirmed: bool
    timestamp: Optional[str] = None
    patterns: Optional[HistoryPatterns] = None


__all__ = [
    'PatternMappingEntry',
    'TermMappingEntry',
    'StatisticsEntry',
    'WeightsEntry',
    'HistoryPatterns',
    'HistoryRecordEntry',
]
