# Path: doc_match/process/matcher/enhancers/base_enhancer.py
"""
Base Enhancer

Abstract base class for score enhancers.

Enhancers run as an ordered pipeline after base scoring. Each one
reads session state, adjusts candidate scores and records its
contribution in the candidate's breakdown under its own type name.
Adding an enhancement is composition: append an enhancer.
"""

import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from ..models.match import ScoredCandidate

if TYPE_CHECKING:
    from ..engine.session import MatchingSession


class BaseEnhancer(ABC):
    """
    Abstract base class for score enhancers.

    Enhancers:
    - LearningEnhancer: learned pattern/term bonuses
    - ContextEnhancer: folder, type, sequence and proximity bonuses

    Example:
        pipeline = [LearningEnhancer(), ContextEnhancer()]
        for enhancer in pipeline:
            candidates = enhancer.enhance(session, reference, candidates)
    """

    def __init__(self):
        """Initialize enhancer."""
        self.logger = logging.getLogger(f'process.matcher.enhancers.{self.enhancer_type}')

    @property
    @abstractmethod
    def enhancer_type(self) -> str:
        """Return the type name of this enhancer."""
        pass

    @abstractmethod
    def enhance(
        self,
        session: 'MatchingSession',
        reference: str,
        candidates: list[ScoredCandidate]
    ) -> list[ScoredCandidate]:
        """
        Adjust candidate scores.

        Must run on the thread that owns the session. Candidates are
        updated in place and returned.

        Args:
            session: Matching session providing learning/context state
            reference: Searched reference
            candidates: Candidates scored so far

        Returns:
            The same candidates with updated scores and breakdowns
        """
        pass


__all__ = ['BaseEnhancer']
