# Path: doc_match/process/matcher/learning/learning_store.py
"""
Learning Store

Accumulates pattern-level and term-level statistics from confirmed
and rejected matches, and turns them into a bounded learned bonus.

State:
- patterns: reference pattern -> {path pattern -> signed count}
- term edges: undirected weighted edges between terms, in [0, 1]
- history: bounded ring buffer of recent observations
- statistics and adaptive scoring weights

Pattern and term maps grow for the lifetime of the store. reset()
is the only eviction path; only the history is capped.
"""

import math
from collections import deque
from typing import Optional, Any, Iterator

from doc_match.core.logger.ipo_logging import get_process_logger

from ....config_loader import DEFAULT_HISTORY_CAP
from ....constants import (
    DEFAULT_LEARNED_WEIGHT,
    MAX_LEARNED_WEIGHT,
    WEIGHT_UPDATE_MIN_MATCHES,
    WEIGHT_UPDATE_MIN_SUCCESS_RATE,
    WEIGHT_UPDATE_FULL_DATA,
    WEIGHT_UPDATE_SUCCESS_GAIN,
    PATTERN_BONUS_CAP,
    PATTERN_BONUS_FACTOR,
    TERM_BONUS_CAP,
    TERM_CONFIRM_STEP,
    TERM_REJECT_STEP,
    SUGGESTION_LIMIT,
    SUGGESTION_CONFIDENCE_STEP,
    SUGGESTION_CONFIDENCE_CAP,
    TERM_SUGGESTION_LIMIT,
    TERM_SUGGESTION_MIN_WEIGHT,
    TERM_SUGGESTION_CONFIDENCE_CAP,
    TOP_PATTERN_LIMIT,
    TOP_PATTERN_EXAMPLES,
    RECENT_MATCH_LIMIT,
)
from ..models.errors import ValidationError
from ..models.learning import (
    LearningStatistics,
    ScoringWeights,
    HistoryEntry,
    LearnedScore,
    PatternSuggestion,
    TermSuggestion,
    LearningSnapshot,
)
from ..text.normalizer import extract_pattern, tokenize


def _clamp(value: float, low: float = 0.0, high: float = 1.0) -> float:
    return max(low, min(high, value))


class LearningStore:
    """
    Adaptive learning state for one matching session.

    A simple deterministic control loop, not a trained model: the
    same sequence of observations always yields the same state.

    Example:
        store = LearningStore()
        store.record_match("Exhibit A5-01", "folder/A5-01-letter.pdf", 0.82)
        result = store.enhance_score("Exhibit A5-02", "folder/A5-02-letter.pdf", 0.6)
        result.score      # blended score
        result.pattern    # pattern bonus from the confirmed A5-01 match
    """

    def __init__(self, history_cap: int = DEFAULT_HISTORY_CAP):
        """
        Initialize an empty learning store.

        Args:
            history_cap: Maximum history entries kept (FIFO eviction)
        """
        self.logger = get_process_logger('matcher.learning')
        self.history_cap = max(1, history_cap)

        self._patterns: dict[str, dict[str, int]] = {}
        self._adjacency: dict[str, dict[str, float]] = {}
        self._history: deque[HistoryEntry] = deque(maxlen=self.history_cap)
        self.statistics = LearningStatistics()
        self.weights = ScoringWeights()

    # ==========================================================================
    # RECORDING
    # ==========================================================================

    def record_match(
        self,
        reference: str,
        path: str,
        score: float,
        confirmed: bool = True
    ) -> HistoryEntry:
        """
        Record a confirmation or rejection.

        Updates statistics, the (reference pattern, path pattern)
        count, term edges and the history, then re-runs the weight
        control loop.

        Args:
            reference: Reference text
            path: Path text
            score: Score shown when the decision was made
            confirmed: True to confirm, False to reject

        Returns:
            The history entry recorded

        Raises:
            ValidationError: If reference or path is empty
        """
        if not reference or not reference.strip():
            raise ValidationError("Cannot record a match without a reference")
        if not path or not path.strip():
            raise ValidationError("Cannot record a match without a path")

        score = _clamp(float(score))
        self.statistics.record(score, confirmed)

        reference_pattern = extract_pattern(reference)
        path_pattern = extract_pattern(path)

        path_patterns = self._patterns.setdefault(reference_pattern, {})
        path_patterns[path_pattern] = path_patterns.get(path_pattern, 0) + (1 if confirmed else -1)

        self._record_terms(reference, path, confirmed)

        entry = HistoryEntry(
            reference=reference,
            path=path,
            score=score,
            confirmed=confirmed,
            reference_pattern=reference_pattern,
            path_pattern=path_pattern,
        )
        self._history.append(entry)

        self.update_weights()

        self.logger.debug(
            f"[LEARN] {'confirm' if confirmed else 'reject'} "
            f"'{reference_pattern}' -> '{path_pattern}' "
            f"(count={path_patterns[path_pattern]})"
        )
        return entry

    def _record_terms(self, reference: str, path: str, confirmed: bool) -> None:
        """Nudge every (reference term, path term) edge once."""
        step = TERM_CONFIRM_STEP if confirmed else -TERM_REJECT_STEP
        for left, right in self._term_pairs(reference, path):
            self._set_edge(left, right, self.term_weight(left, right) + step)

    def _term_pairs(self, reference: str, path: str) -> set[tuple[str, str]]:
        """Unique undirected term pairs between a reference and a path."""
        path_terms = set(tokenize(path))
        return {
            (a, b) if a <= b else (b, a)
            for a in set(tokenize(reference))
            for b in path_terms
        }

    def _set_edge(self, left: str, right: str, weight: float) -> None:
        weight = _clamp(weight)
        self._adjacency.setdefault(left, {})[right] = weight
        self._adjacency.setdefault(right, {})[left] = weight

    # ==========================================================================
    # LOOKUPS
    # ==========================================================================

    def pattern_count(self, reference_pattern: str, path_pattern: str) -> int:
        """Signed usage count for a pattern pair."""
        return self._patterns.get(reference_pattern, {}).get(path_pattern, 0)

    def term_weight(self, left: str, right: str) -> float:
        """Weight of the undirected edge between two terms."""
        return self._adjacency.get(left, {}).get(right, 0.0)

    def pattern_bonus(self, reference: str, path: str) -> float:
        """
        Bonus from how often this pattern pair was confirmed.

        min(0.15, ln(count + 1) * 0.03); non-positive counts give 0.
        """
        count = self.pattern_count(extract_pattern(reference), extract_pattern(path))
        if count <= 0:
            return 0.0
        return min(PATTERN_BONUS_CAP, math.log(count + 1) * PATTERN_BONUS_FACTOR)

    def term_bonus(self, reference: str, path: str) -> float:
        """Bonus from positive term edges, damped by sqrt of edge count."""
        total = 0.0
        matched = 0
        for left, right in self._term_pairs(reference, path):
            weight = self.term_weight(left, right)
            if weight > 0:
                total += weight
                matched += 1
        if matched == 0:
            return 0.0
        return min(TERM_BONUS_CAP, total / math.sqrt(matched))

    def enhance_score(self, reference: str, path: str, base_score: float) -> LearnedScore:
        """
        Blend a base score with learned bonuses.

        score = base * (1 - learned) + (pattern + term) * learned,
        clamped to 1.

        Args:
            reference: Reference text
            path: Candidate path
            base_score: Base similarity

        Returns:
            LearnedScore with the breakdown
        """
        pattern = self.pattern_bonus(reference, path)
        term = self.term_bonus(reference, path)
        learned_weight = self.weights.learned
        learned_bonus = (pattern + term) * learned_weight
        score = min(1.0, base_score * (1 - learned_weight) + learned_bonus)
        return LearnedScore(
            score=score,
            base=base_score,
            pattern=pattern,
            term=term,
            learned=learned_bonus,
        )

    # ==========================================================================
    # WEIGHT CONTROL LOOP
    # ==========================================================================

    def update_weights(self) -> None:
        """
        Shift weight toward learning once there is enough good data.

        With more than 50 observations and a success rate above 0.8,
        learned rises from 0.2 toward 0.4 in proportion to data
        volume (full at 500) and success margin (full at 100%).
        Word and character share the remainder 70:30.
        """
        stats = self.statistics
        success_rate = stats.success_rate
        if stats.total_matches <= WEIGHT_UPDATE_MIN_MATCHES:
            return
        if success_rate <= WEIGHT_UPDATE_MIN_SUCCESS_RATE:
            return

        data_factor = min(1.0, stats.total_matches / WEIGHT_UPDATE_FULL_DATA)
        success_factor = max(
            0.0, (success_rate - WEIGHT_UPDATE_MIN_SUCCESS_RATE) * WEIGHT_UPDATE_SUCCESS_GAIN
        )
        learned = DEFAULT_LEARNED_WEIGHT + (
            (MAX_LEARNED_WEIGHT - DEFAULT_LEARNED_WEIGHT) * data_factor * success_factor
        )

        previous = self.weights.learned
        self.weights = ScoringWeights.with_learned(learned)
        if abs(previous - learned) > 0.01:
            self.logger.info(
                f"[WEIGHTS] learned weight {previous:.3f} -> {learned:.3f} "
                f"after {stats.total_matches} observations"
            )

    # ==========================================================================
    # SUGGESTIONS
    # ==========================================================================

    def get_suggestions(self, reference: str) -> list[PatternSuggestion]:
        """Top positive path patterns learned for a reference's pattern."""
        path_patterns = self._patterns.get(extract_pattern(reference), {})
        positive = sorted(
            ((pattern, count) for pattern, count in path_patterns.items() if count > 0),
            key=lambda item: -item[1],
        )[:SUGGESTION_LIMIT]
        return [
            PatternSuggestion(
                pattern=pattern,
                usage=count,
                confidence=min(SUGGESTION_CONFIDENCE_CAP, count * SUGGESTION_CONFIDENCE_STEP),
            )
            for pattern, count in positive
        ]

    def get_term_suggestions(self, reference: str) -> list[TermSuggestion]:
        """Terms most strongly related to a reference's terms."""
        related: dict[str, float] = {}
        for term in tokenize(reference):
            for other, weight in self._adjacency.get(term, {}).items():
                if weight > TERM_SUGGESTION_MIN_WEIGHT:
                    related[other] = related.get(other, 0.0) + weight

        ranked = sorted(related.items(), key=lambda item: -item[1])[:TERM_SUGGESTION_LIMIT]
        return [
            TermSuggestion(term=term, confidence=min(TERM_SUGGESTION_CONFIDENCE_CAP, weight))
            for term, weight in ranked
        ]

    def get_top_patterns(self, limit: int = TOP_PATTERN_LIMIT) -> list[dict[str, Any]]:
        """Most confirmed pattern pairs, each with recent examples."""
        pairs = [
            (reference_pattern, path_pattern, count)
            for reference_pattern, path_patterns in self._patterns.items()
            for path_pattern, count in path_patterns.items()
            if count > 0
        ]
        pairs.sort(key=lambda item: -item[2])

        top = []
        for reference_pattern, path_pattern, count in pairs[:limit]:
            examples = [
                {'reference': h.reference, 'path': h.path, 'score': h.score}
                for h in self._history
                if h.confirmed and h.path_pattern == path_pattern
            ][-TOP_PATTERN_EXAMPLES:]
            top.append({
                'reference': reference_pattern,
                'path': path_pattern,
                'count': count,
                'examples': examples,
            })
        return top

    # ==========================================================================
    # VIEWS
    # ==========================================================================

    @property
    def patterns(self) -> dict[str, dict[str, int]]:
        """Copy of the pattern map."""
        return {ref: dict(paths) for ref, paths in self._patterns.items()}

    @property
    def term_edges(self) -> dict[tuple[str, str], float]:
        """Each undirected edge once, keyed by its sorted term pair."""
        return dict(self._iter_edges())

    def _iter_edges(self) -> Iterator[tuple[tuple[str, str], float]]:
        for left, neighbours in self._adjacency.items():
            for right, weight in neighbours.items():
                if left <= right:
                    yield (left, right), weight

    @property
    def history(self) -> list[HistoryEntry]:
        """History entries, oldest first."""
        return list(self._history)

    @property
    def term_edge_count(self) -> int:
        return sum(1 for _ in self._iter_edges())

    def get_statistics(self) -> dict[str, Any]:
        """
        Summary view of the learning state.

        Returns:
            Dictionary with patternsLearned, termMappings,
            totalObservations, matchHistory, statistics,
            currentWeights, topPatterns and recentMatches
        """
        recent = list(self._history)[-RECENT_MATCH_LIMIT:]
        recent.reverse()
        return {
            'patternsLearned': len(self._patterns),
            'termMappings': self.term_edge_count,
            'totalObservations': sum(
                abs(count)
                for path_patterns in self._patterns.values()
                for count in path_patterns.values()
            ),
            'matchHistory': len(self._history),
            'statistics': self.statistics.to_dict(),
            'currentWeights': self.weights.to_dict(),
            'topPatterns': self.get_top_patterns(TOP_PATTERN_LIMIT),
            'recentMatches': [entry.to_dict() for entry in recent],
        }

    # ==========================================================================
    # SNAPSHOTS
    # ==========================================================================

    def apply_snapshot(self, snapshot: LearningSnapshot) -> None:
        """
        Merge a validated snapshot into the store.

        Work happens on a draft copy of the state which replaces the
        live state only once fully built. Patterns are replaced per
        reference pattern, term edges set one by one, statistics and
        weights replaced, history replaced when the snapshot has one.

        Args:
            snapshot: Output of the snapshot parser
        """
        patterns = self.patterns
        adjacency = {term: dict(neighbours) for term, neighbours in self._adjacency.items()}
        statistics = self.statistics.copy()
        weights = self.weights.copy()
        history = deque(self._history, maxlen=self.history_cap)

        for reference_pattern, path_patterns in snapshot.patterns.items():
            patterns[reference_pattern] = dict(path_patterns)

        for (left, right), weight in snapshot.term_edges.items():
            weight = _clamp(weight)
            adjacency.setdefault(left, {})[right] = weight
            adjacency.setdefault(right, {})[left] = weight

        if snapshot.statistics is not None:
            statistics = snapshot.statistics.copy()
        if snapshot.weights is not None:
            weights = snapshot.weights.copy()
        if snapshot.history is not None:
            history = deque(snapshot.history, maxlen=self.history_cap)

        self._patterns = patterns
        self._adjacency = adjacency
        self.statistics = statistics
        self.weights = weights
        self._history = history

        self.logger.info(f"[IMPORT] Applied learning snapshot {snapshot.summary()}")

    def reset(self) -> None:
        """Clear all learned state back to defaults."""
        self._patterns = {}
        self._adjacency = {}
        self._history = deque(maxlen=self.history_cap)
        self.statistics = LearningStatistics()
        self.weights = ScoringWeights()
        self.logger.info("[RESET] Learning state cleared")

    def __repr__(self) -> str:
        return (
            f"LearningStore(patterns={len(self._patterns)}, "
            f"term_edges={self.term_edge_count}, "
            f"history={len(self._history)}, "
            f"learned={self.weights.learned:.3f})"
        )


__all__ = ['LearningStore']
