# Path: doc_match/process/matcher/models/match.py
"""
Match Models

Models representing confirmed matches and ranked search results.
"""

from enum import Enum
from typing import Optional, Any
from dataclasses import dataclass, field
from datetime import datetime, timezone

from ....constants import MatchMethod


def utc_now() -> datetime:
    """Timezone-aware current time."""
    return datetime.now(timezone.utc)


class Confidence(str, Enum):
    """Confidence band of a ranked candidate."""
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"
    NONE = "none"


@dataclass(frozen=True)
class Match:
    """
    A confirmed (reference, path) pairing.

    Immutable once created. Removing a match from the ledger
    releases both the reference and the path.

    Attributes:
        reference: The reference text (natural key)
        path: The matched file path (natural key)
        score: Score at confirmation time, in [0, 1]
        method: How the match was produced (manual, pattern, auto)
        confirmed: Always True for ledger entries
        timestamp: When the match was created
    """
    reference: str
    path: str
    score: float
    method: MatchMethod = MatchMethod.MANUAL
    confirmed: bool = True
    timestamp: datetime = field(default_factory=utc_now)

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            'reference': self.reference,
            'path': self.path,
            'score': self.score,
            'method': self.method.value,
            'confirmed': self.confirmed,
            'timestamp': self.timestamp.isoformat(),
        }


@dataclass
class ScoredCandidate:
    """
    A candidate path with its score breakdown.

    Attributes:
        path: Candidate file path
        index: Position of the path in the session's original path list
        base_score: Blended word/character similarity before enhancement
        score: Final score after all enhancers
        word_score: Word-level sub-score
        char_score: Character-level sub-score
        breakdown: Per-enhancer contributions, keyed by enhancer type
        confidence: Confidence band of the final score
    """
    path: str
    index: int
    base_score: float
    score: float
    word_score: float = 0.0
    char_score: float = 0.0
    breakdown: dict[str, Any] = field(default_factory=dict)
    confidence: Confidence = Confidence.NONE

    @property
    def is_learned(self) -> bool:
        """Check if learning contributed to this score."""
        learning = self.breakdown.get('learning', {})
        return learning.get('learned', 0.0) > 0

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            'path': self.path,
            'index': self.index,
            'base_score': round(self.base_score, 4),
            'score': round(self.score, 4),
            'word_score': round(self.word_score, 4),
            'char_score': round(self.char_score, 4),
            'confidence': self.confidence.value,
            'breakdown': self.breakdown,
        }


@dataclass
class SearchResponse:
    """
    Ranked result of a single search.

    Attributes:
        reference: The searched reference
        request_id: Session sequence number of this search
        results: Ranked candidates, best first
        suggestions: Learned path-pattern suggestions for the reference
        candidate_count: Number of available candidates scored
    """
    reference: str
    request_id: int
    results: list[ScoredCandidate] = field(default_factory=list)
    suggestions: list[Any] = field(default_factory=list)
    candidate_count: int = 0

    @property
    def best(self) -> Optional[ScoredCandidate]:
        """Top ranked candidate, if any."""
        return self.results[0] if self.results else None

    @property
    def paths(self) -> list[str]:
        """Ranked candidate paths."""
        return [r.path for r in self.results]

    def __len__(self) -> int:
        return len(self.results)

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            'reference': self.reference,
            'request_id': self.request_id,
            'candidate_count': self.candidate_count,
            'results': [r.to_dict() for r in self.results],
            'suggestions': [
                s.to_dict() if hasattr(s, 'to_dict') else s
                for s in self.suggestions
            ],
        }


# ==============================================================================
# AUTO-MATCH
# ==============================================================================

@dataclass
class AutoMatchProposal:
    """A proposed (reference, path) pair from an auto-match pass."""
    reference: str
    path: str
    score: float
    confidence: Confidence

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            'reference': self.reference,
            'path': self.path,
            'score': round(self.score, 4),
            'confidence': self.confidence.value,
        }


@dataclass
class AutoMatchResult:
    """
    Outcome of an auto-match pass.

    Attributes:
        threshold: Minimum score used
        proposals: One proposal per matched reference
        unmatched: References with no candidate at or above threshold
    """
    threshold: float
    proposals: list[AutoMatchProposal] = field(default_factory=list)
    unmatched: list[str] = field(default_factory=list)

    def _count(self, band: Confidence) -> int:
        return sum(1 for p in self.proposals if p.confidence == band)

    @property
    def high_confidence(self) -> int:
        return self._count(Confidence.HIGH)

    @property
    def medium_confidence(self) -> int:
        return self._count(Confidence.MEDIUM)

    @property
    def low_confidence(self) -> int:
        return self._count(Confidence.LOW)

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            'threshold': self.threshold,
            'total': len(self.proposals),
            'high_confidence': self.high_confidence,
            'medium_confidence': self.medium_confidence,
            'low_confidence': self.low_confidence,
            'proposals': [p.to_dict() for p in self.proposals],
            'unmatched': list(self.unmatched),
        }


@dataclass
class ApplyResult:
    """
    Outcome of a bulk confirm (auto-match or series apply).

    Attributes:
        applied: Matches created
        skipped: (reference, path, reason) for proposals not applied
    """
    applied: list[Match] = field(default_factory=list)
    skipped: list[tuple[str, str, str]] = field(default_factory=list)

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            'applied': [m.to_dict() for m in self.applied],
            'skipped': [
                {'reference': r, 'path': p, 'reason': reason}
                for r, p, reason in self.skipped
            ],
        }


__all__ = [
    'Confidence',
    'Match',
    'ScoredCandidate',
    'SearchResponse',
    'AutoMatchProposal',
    'AutoMatchResult',
    'ApplyResult',
    'utc_now',
]
