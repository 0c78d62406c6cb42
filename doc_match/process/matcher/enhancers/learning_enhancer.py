# Path: doc_match/process/matcher/enhancers/learning_enhancer.py
"""
Learning Enhancer

Blends learned pattern and term bonuses into candidate scores.
"""

from typing import TYPE_CHECKING

from .base_enhancer import BaseEnhancer
from ..models.match import ScoredCandidate

if TYPE_CHECKING:
    from ..engine.session import MatchingSession


class LearningEnhancer(BaseEnhancer):
    """
    Applies LearningStore.enhance_score() to every candidate.

    The breakdown entry holds base, pattern, term, learned and final.
    """

    @property
    def enhancer_type(self) -> str:
        return 'learning'

    def enhance(
        self,
        session: 'MatchingSession',
        reference: str,
        candidates: list[ScoredCandidate]
    ) -> list[ScoredCandidate]:
        store = session.learning_store
        learned_count = 0
        for candidate in candidates:
            result = store.enhance_score(reference, candidate.path, candidate.score)
            candidate.score = result.score
            candidate.breakdown[self.enhancer_type] = result.to_dict()
            if result.learned > 0:
                learned_count += 1

        if learned_count:
            self.logger.debug(
                f"[LEARNED] {learned_count}/{len(candidates)} candidates "
                f"received a learned bonus for '{reference}'"
            )
        return candidates


__all__ = ['LearningEnhancer']
