# Path: doc_match/process/matcher/enhancers/context_enhancer.py
"""
Context Enhancer

Adds session-context bonuses to candidate scores.
"""

from typing import TYPE_CHECKING

from .base_enhancer import BaseEnhancer
from ..models.match import ScoredCandidate

if TYPE_CHECKING:
    from ..engine.session import MatchingSession


class ContextEnhancer(BaseEnhancer):
    """Applies ContextTracker.enhance() to every candidate."""

    @property
    def enhancer_type(self) -> str:
        return 'context'

    def enhance(
        self,
        session: 'MatchingSession',
        reference: str,
        candidates: list[ScoredCandidate]
    ) -> list[ScoredCandidate]:
        tracker = session.context_tracker
        for candidate in candidates:
            score, bonus = tracker.enhance(reference, candidate.path, candidate.score)
            candidate.score = score
            candidate.breakdown[self.enhancer_type] = bonus.to_dict()
        return candidates


__all__ = ['ContextEnhancer']
