# Path: doc_match/process/matcher/models/learning.py
"""
Learning Models

Models for the adaptive learning state: aggregate statistics,
scoring weights, match history and learned-score breakdowns.

Dictionary forms use the camelCase keys of the learning-data
snapshot format so exports stay readable by older tools.
"""

from typing import Optional, Any
from dataclasses import dataclass, field, replace
from datetime import datetime

from ....constants import (
    DEFAULT_WORD_WEIGHT,
    DEFAULT_CHARACTER_WEIGHT,
    DEFAULT_LEARNED_WEIGHT,
    WEIGHT_TOLERANCE,
)
from .match import utc_now


@dataclass
class LearningStatistics:
    """
    Aggregate counters over every recorded observation.

    Attributes:
        total_matches: Confirmations plus rejections recorded
        successful_matches: Confirmations recorded
        failed_matches: Rejections recorded
        average_confidence: Running mean of recorded scores
    """
    total_matches: int = 0
    successful_matches: int = 0
    failed_matches: int = 0
    average_confidence: float = 0.0

    @property
    def success_rate(self) -> float:
        """Share of observations that were confirmations."""
        return self.successful_matches / (self.total_matches or 1)

    def record(self, score: float, confirmed: bool) -> None:
        """Fold one observation into the counters."""
        self.total_matches += 1
        if confirmed:
            self.successful_matches += 1
        else:
            self.failed_matches += 1
        self.average_confidence = (
            self.average_confidence * (self.total_matches - 1) + score
        ) / self.total_matches

    def copy(self) -> 'LearningStatistics':
        return replace(self)

    def to_dict(self) -> dict:
        """Convert to snapshot dictionary."""
        return {
            'totalMatches': self.total_matches,
            'successfulMatches': self.successful_matches,
            'failedMatches': self.failed_matches,
            'averageConfidence': self.average_confidence,
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'LearningStatistics':
        """Create from snapshot dictionary."""
        return cls(
            total_matches=int(data.get('totalMatches', 0)),
            successful_matches=int(data.get('successfulMatches', 0)),
            failed_matches=int(data.get('failedMatches', 0)),
            average_confidence=float(data.get('averageConfidence', 0.0)),
        )


@dataclass
class ScoringWeights:
    """
    Adaptive scoring weights.

    word + character + learned always equals 1.0. The base
    similarity uses word and character renormalized to their
    own sum; learned is the share given to the learned bonus.
    """
    word: float = DEFAULT_WORD_WEIGHT
    character: float = DEFAULT_CHARACTER_WEIGHT
    learned: float = DEFAULT_LEARNED_WEIGHT

    @property
    def total(self) -> float:
        return self.word + self.character + self.learned

    @property
    def is_balanced(self) -> bool:
        """Check the three weights sum to 1 within tolerance."""
        return abs(self.total - 1.0) <= WEIGHT_TOLERANCE

    @classmethod
    def with_learned(
        cls,
        learned: float,
        word_share: float = DEFAULT_WORD_WEIGHT,
        character_share: float = DEFAULT_CHARACTER_WEIGHT
    ) -> 'ScoringWeights':
        """
        Build weights for a given learned share.

        The remainder is split between word and character in the
        proportion word_share : character_share. Character takes
        whatever is left so the sum is exactly 1.

        Args:
            learned: Learned weight, clamped to [0, 1]
            word_share: Relative word share
            character_share: Relative character share

        Returns:
            Balanced ScoringWeights
        """
        learned = min(1.0, max(0.0, learned))
        remaining = 1.0 - learned
        share_total = word_share + character_share
        if share_total <= 0:
            word_share, character_share = DEFAULT_WORD_WEIGHT, DEFAULT_CHARACTER_WEIGHT
            share_total = word_share + character_share
        word = remaining * word_share / share_total
        character = 1.0 - learned - word
        return cls(word=word, character=character, learned=learned)

    def rebalanced(self) -> 'ScoringWeights':
        """Keep learned, rescale word/character into the remainder."""
        return ScoringWeights.with_learned(self.learned, self.word, self.character)

    def copy(self) -> 'ScoringWeights':
        return replace(self)

    def to_dict(self) -> dict:
        """Convert to snapshot dictionary."""
        return {
            'word': self.word,
            'character': self.character,
            'learned': self.learned,
        }


@dataclass
class HistoryEntry:
    """
    One recorded observation in the bounded match history.

    Attributes:
        reference: Reference text
        path: Path text
        score: Score at the time of recording
        confirmed: True for confirmations, False for rejections
        reference_pattern: Digit-generalized reference
        path_pattern: Digit-generalized path
        timestamp: When it was recorded
    """
    reference: str
    path: str
    score: float
    confirmed: bool
    reference_pattern: str
    path_pattern: str
    timestamp: datetime = field(default_factory=utc_now)

    def to_dict(self) -> dict:
        """Convert to snapshot dictionary."""
        return {
            'reference': self.reference,
            'path': self.path,
            'score': self.score,
            'confirmed': self.confirmed,
            'timestamp': self.timestamp.isoformat(),
            'patterns': {
                'referencePattern': self.reference_pattern,
                'pathPattern': self.path_pattern,
            },
        }


@dataclass
class LearnedScore:
    """
    Result of applying learned bonuses to a base score.

    Attributes:
        score: Final score, clamped to 1
        base: Incoming base score
        pattern: Pattern bonus (before weighting)
        term: Term bonus (before weighting)
        learned: Weighted learned bonus actually added
    """
    score: float
    base: float
    pattern: float = 0.0
    term: float = 0.0
    learned: float = 0.0

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            'base': self.base,
            'pattern': self.pattern,
            'term': self.term,
            'learned': self.learned,
            'final': self.score,
        }


@dataclass
class PatternSuggestion:
    """A learned path pattern for a reference pattern."""
    pattern: str
    usage: int
    confidence: float

    def to_dict(self) -> dict:
        return {
            'pattern': self.pattern,
            'usage': self.usage,
            'confidence': self.confidence,
        }


@dataclass
class TermSuggestion:
    """A term commonly related to a reference's terms."""
    term: str
    confidence: float
    reason: str = "Common mapping for similar references"

    def to_dict(self) -> dict:
        return {
            'type': 'term',
            'term': self.term,
            'confidence': self.confidence,
            'reason': self.reason,
        }


@dataclass
class LearningSnapshot:
    """
    Validated learning data ready to apply to a LearningStore.

    Produced by the snapshot parser; every field is already clean.

    Attributes:
        version: Snapshot format version
        export_date: When the snapshot was exported, if known
        patterns: reference pattern -> {path pattern -> count}
        term_edges: (term, term) sorted pair -> weight in [0, 1]
        statistics: Aggregate counters, if present
        weights: Balanced weights, if present
        history: History entries, or None when the payload had none
    """
    version: str
    export_date: Optional[datetime] = None
    patterns: dict[str, dict[str, int]] = field(default_factory=dict)
    term_edges: dict[tuple[str, str], float] = field(default_factory=dict)
    statistics: Optional[LearningStatistics] = None
    weights: Optional[ScoringWeights] = None
    history: Optional[list[HistoryEntry]] = None

    def summary(self) -> dict[str, Any]:
        """Short description for logging."""
        return {
            'version': self.version,
            'patterns': len(self.patterns),
            'term_edges': len(self.term_edges),
            'history': len(self.history) if self.history is not None else None,
        }


__all__ = [
    'LearningStatistics',
    'ScoringWeights',
    'HistoryEntry',
    'LearnedScore',
    'PatternSuggestion',
    'TermSuggestion',
    'LearningSnapshot',
]
