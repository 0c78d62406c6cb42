# Path: doc_match/process/matcher/context/context_tracker.py
"""
Context Tracker

Adjusts candidate scores using recent confirmed matches.

Session context:
- recent: rolling window of the last confirmed (reference, path) pairs
- current folder: directory of the most recent match
- type folders: document type -> folder occurrence counts
- sequences: base reference -> path numbers seen, in confirmation order

Every bonus is independent and capped at a small fixed weight.
"""

from collections import Counter, deque
from dataclasses import dataclass, field
from typing import Optional, Any, Protocol

from doc_match.core.logger.ipo_logging import get_process_logger

from ....config_loader import DEFAULT_CONTEXT_WINDOW
from ....constants import (
    IncrementPattern,
    FOLDER_SAME_BONUS,
    FOLDER_SUBFOLDER_BONUS,
    TYPE_FOLDER_BONUS,
    SEQUENCE_BONUS,
    HIERARCHY_BONUS_CAP,
    PROXIMITY_BONUS_CAP,
    PROXIMITY_MAX_DEPTH,
)
from ..series.increments import classify_increment
from ..text.normalizer import (
    directory,
    path_segments,
    last_number,
    sequence_base,
    tokenize,
)


class TypeClassifier(Protocol):
    """Anything that maps a reference to a document type id."""

    def classify(self, text: str) -> Optional[str]:
        ...


@dataclass
class SequenceState:
    """Path numbers confirmed for one base reference."""
    numbers: list[int] = field(default_factory=list)

    @property
    def last(self) -> Optional[int]:
        return self.numbers[-1] if self.numbers else None

    @property
    def increment(self) -> tuple[int, IncrementPattern]:
        return classify_increment(self.numbers)

    @property
    def expected_next(self) -> Optional[int]:
        if self.last is None:
            return None
        step, _ = self.increment
        return self.last + step


@dataclass
class ContextBonus:
    """Per-candidate context contributions."""
    folder: float = 0.0
    type_folder: float = 0.0
    sequence: float = 0.0
    hierarchy: float = 0.0
    proximity: float = 0.0

    @property
    def total(self) -> float:
        return self.folder + self.type_folder + self.sequence + self.hierarchy + self.proximity

    def to_dict(self) -> dict[str, float]:
        return {
            'folder': self.folder,
            'type_folder': self.type_folder,
            'sequence': self.sequence,
            'hierarchy': self.hierarchy,
            'proximity': self.proximity,
            'total': self.total,
        }


def _shared_prefix_depth(left: list[str], right: list[str]) -> int:
    depth = 0
    for a, b in zip(left, right):
        if a.lower() != b.lower():
            break
        depth += 1
    return depth


class ContextTracker:
    """
    Rolling session context for contextual reweighting.

    Example:
        tracker = ContextTracker(window=10, classifier=classifier)
        tracker.record("Exhibit A5-01", "exhibits/A5-01.pdf")

        score, bonus = tracker.enhance("Exhibit A5-02", "exhibits/A5-02.pdf", 0.6)
        bonus.folder    # 0.10, same folder as the last match
        bonus.sequence  # 0.15, next number in a sequential run
    """

    def __init__(
        self,
        window: int = DEFAULT_CONTEXT_WINDOW,
        classifier: Optional[TypeClassifier] = None
    ):
        """
        Initialize context tracker.

        Args:
            window: Number of recent matches kept
            classifier: Document-type classifier for type/folder affinity
        """
        self.logger = get_process_logger('matcher.context')
        self.window = max(1, window)
        self.classifier = classifier

        self._recent: deque[tuple[str, str]] = deque(maxlen=self.window)
        self.current_folder: Optional[str] = None
        self._type_folders: dict[str, Counter] = {}
        self._sequences: dict[str, SequenceState] = {}

    # ==========================================================================
    # RECORDING
    # ==========================================================================

    def record(self, reference: str, path: str) -> None:
        """
        Fold a confirmed match into the context.

        Args:
            reference: Confirmed reference
            path: Confirmed path
        """
        folder = directory(path)
        self._recent.append((reference, path))
        self.current_folder = folder

        doc_type = self._classify(reference)
        if doc_type:
            self._type_folders.setdefault(doc_type, Counter())[folder] += 1

        number = last_number(path)
        if number is not None:
            state = self._sequences.setdefault(sequence_base(reference), SequenceState())
            state.numbers.append(number)
            if len(state.numbers) > self.window:
                del state.numbers[0]

        self.logger.debug(
            f"[CONTEXT] folder='{folder}' type={doc_type} number={number}"
        )

    def _classify(self, reference: str) -> Optional[str]:
        if self.classifier is None:
            return None
        return self.classifier.classify(reference)

    # ==========================================================================
    # BONUSES
    # ==========================================================================

    def enhance(self, reference: str, path: str, score: float) -> tuple[float, ContextBonus]:
        """
        Add context bonuses to one candidate's score.

        Args:
            reference: Searched reference
            path: Candidate path
            score: Score before context

        Returns:
            Tuple of (new score clamped to 1, bonus breakdown)
        """
        bonus = ContextBonus(
            folder=self._folder_bonus(path),
            type_folder=self._type_folder_bonus(reference, path),
            sequence=self._sequence_bonus(reference, path),
            hierarchy=self._hierarchy_bonus(reference, path),
            proximity=self._proximity_bonus(path),
        )
        return min(1.0, score + bonus.total), bonus

    def _folder_bonus(self, path: str) -> float:
        """Candidate in, or under, the folder of the last match."""
        if self.current_folder is None:
            return 0.0
        folder = directory(path)
        if folder == self.current_folder:
            return FOLDER_SAME_BONUS
        if self.current_folder and folder.startswith(self.current_folder + '/'):
            return FOLDER_SUBFOLDER_BONUS
        return 0.0

    def _type_folder_bonus(self, reference: str, path: str) -> float:
        """Candidate in a folder historically used for this document type."""
        doc_type = self._classify(reference)
        if not doc_type or doc_type not in self._type_folders:
            return 0.0
        counts = self._type_folders[doc_type]
        total = sum(counts.values())
        if total == 0:
            return 0.0
        return TYPE_FOLDER_BONUS * counts.get(directory(path), 0) / total

    def _sequence_bonus(self, reference: str, path: str) -> float:
        """Candidate continues the numeric run of this base reference."""
        state = self._sequences.get(sequence_base(reference))
        if state is None or state.expected_next is None:
            return 0.0

        candidate_number = last_number(path)
        if candidate_number is None or candidate_number != state.expected_next:
            return 0.0

        reference_number = last_number(reference)
        if reference_number is not None and reference_number != candidate_number:
            return 0.0

        _, pattern = state.increment
        return SEQUENCE_BONUS[pattern]

    def _hierarchy_bonus(self, reference: str, path: str) -> float:
        """
        Reference terms found in the candidate's folders.

        Deeper folders weigh more.
        """
        segments = path_segments(path)
        if not segments:
            return 0.0
        terms = set(tokenize(reference))
        if not terms:
            return 0.0

        weighted = 0.0
        weight_total = 0.0
        for depth, segment in enumerate(segments, start=1):
            weight_total += depth
            if terms.intersection(tokenize(segment)):
                weighted += depth
        return HIERARCHY_BONUS_CAP * weighted / weight_total

    def _proximity_bonus(self, path: str) -> float:
        """Shared folder depth with the closest recently confirmed path."""
        if not self._recent:
            return 0.0
        segments = path_segments(path)
        if not segments:
            return 0.0
        depth = max(
            _shared_prefix_depth(segments, path_segments(recent_path))
            for _, recent_path in self._recent
        )
        return PROXIMITY_BONUS_CAP * min(depth, PROXIMITY_MAX_DEPTH) / PROXIMITY_MAX_DEPTH

    # ==========================================================================
    # STATE
    # ==========================================================================

    @property
    def recent(self) -> list[tuple[str, str]]:
        """Recent (reference, path) pairs, oldest first."""
        return list(self._recent)

    def summary(self) -> dict[str, Any]:
        """Short description of the session context."""
        return {
            'recent_matches': len(self._recent),
            'current_folder': self.current_folder,
            'document_types': {
                doc_type: dict(counts) for doc_type, counts in self._type_folders.items()
            },
            'sequences': {
                base: {
                    'last': state.last,
                    'increment': state.increment[0],
                    'pattern': state.increment[1].value,
                }
                for base, state in self._sequences.items()
            },
        }

    def reset(self) -> None:
        """Forget all session context."""
        self._recent.clear()
        self.current_folder = None
        self._type_folders.clear()
        self._sequences.clear()


__all__ = [
    'ContextTracker',
    'ContextBonus',
    'SequenceState',
    'TypeClassifier',
]
