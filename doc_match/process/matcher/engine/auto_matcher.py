# Path: doc_match/process/matcher/engine/auto_matcher.py
"""
Auto Matcher

Proposes one candidate per unmatched reference in a single pass.

References with longer descriptions go first: they carry more
signal and are less likely to grab a path meant for a shorter one.
A path is never proposed twice.
"""

from typing import Optional, Iterable

from doc_match.core.logger.ipo_logging import get_process_logger

from ....config_loader import DEFAULT_AUTO_MATCH_THRESHOLD
from ..models.learning import ScoringWeights
from ..models.match import AutoMatchProposal, AutoMatchResult
from ..scoring.confidence import ConfidenceCalculator
from ..scoring.similarity import SimilarityScorer
from ..text.normalizer import words


class AutoMatcher:
    """
    Greedy bulk proposer over base similarity.

    Pure: takes snapshots, returns proposals, mutates nothing.

    Example:
        matcher = AutoMatcher()
        result = matcher.propose(unmatched, available, threshold=0.8)
        result.high_confidence  # proposals scoring >= 0.7
    """

    def __init__(
        self,
        scorer: Optional[SimilarityScorer] = None,
        confidence: Optional[ConfidenceCalculator] = None
    ):
        self.logger = get_process_logger('matcher.auto_matcher')
        self.scorer = scorer or SimilarityScorer()
        self.confidence = confidence or ConfidenceCalculator()

    def propose(
        self,
        references: Iterable[str],
        candidates: list[tuple[int, str]],
        threshold: float = DEFAULT_AUTO_MATCH_THRESHOLD,
        weights: Optional[ScoringWeights] = None
    ) -> AutoMatchResult:
        """
        Propose the best available candidate for each reference.

        Args:
            references: Unmatched references
            candidates: Available (index, path) pairs
            threshold: Minimum base score for a proposal
            weights: Current scoring weights

        Returns:
            AutoMatchResult with proposals and unmatched references
        """
        ordered = sorted(references, key=lambda r: -len(words(r)))
        result = AutoMatchResult(threshold=threshold)
        taken: set[str] = set()

        for reference in ordered:
            prepared = self.scorer.prepare(reference)
            best_path: Optional[str] = None
            best_score = 0.0
            for _, path in candidates:
                if path in taken:
                    continue
                score = self.scorer.score_prepared(prepared, path, weights).score
                if score > best_score:
                    best_path, best_score = path, score

            if best_path is None or best_score < threshold:
                result.unmatched.append(reference)
                continue

            taken.add(best_path)
            result.proposals.append(AutoMatchProposal(
                reference=reference,
                path=best_path,
                score=best_score,
                confidence=self.confidence.calculate(best_score),
            ))

        self.logger.info(
            f"[AUTO] {len(result.proposals)} proposals at threshold {threshold} "
            f"(high={result.high_confidence}, medium={result.medium_confidence}, "
            f"low={result.low_confidence}), {len(result.unmatched)} unmatched"
        )
        return result


__all__ = ['AutoMatcher']
