# Path: doc_match/process/matcher/scoring/ranker.py
"""
Result Ranker

Filters and orders scored candidates for a search.
"""

import logging
from typing import Iterable

from ....config_loader import DEFAULT_SCORE_FLOOR, DEFAULT_SEARCH_TOP_K
from ..models.match import ScoredCandidate


class ResultRanker:
    """
    Orders scored candidates.

    Ties are broken by the candidate's position in the original
    path list, so equal scores keep load order.

    Example:
        ranker = ResultRanker(top_k=20, score_floor=0.05)
        kept = ranker.above_floor(candidates)
        ranked = ranker.rank(kept)
    """

    def __init__(
        self,
        top_k: int = DEFAULT_SEARCH_TOP_K,
        score_floor: float = DEFAULT_SCORE_FLOOR
    ):
        """
        Initialize ranker.

        Args:
            top_k: Maximum results returned (0 or less means unlimited)
            score_floor: Base scores at or below this are dropped
        """
        self.logger = logging.getLogger('process.matcher.scoring.ranker')
        self.top_k = top_k
        self.score_floor = score_floor

    def above_floor(self, candidates: Iterable[ScoredCandidate]) -> list[ScoredCandidate]:
        """Drop candidates whose base score does not clear the floor."""
        return [c for c in candidates if c.base_score > self.score_floor]

    def rank(self, candidates: Iterable[ScoredCandidate]) -> list[ScoredCandidate]:
        """
        Sort by final score descending, then by original index.

        Args:
            candidates: Scored candidates

        Returns:
            Top-K candidates, best first
        """
        ordered = sorted(candidates, key=lambda c: (-c.score, c.index))
        if self.top_k > 0:
            ordered = ordered[:self.top_k]
        return ordered


__all__ = ['ResultRanker']
