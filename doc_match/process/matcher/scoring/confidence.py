# Path: doc_match/process/matcher/scoring/confidence.py
"""
Confidence Calculator

Determines the confidence band of a final score.
"""

import logging

from ....constants import CONFIDENCE_HIGH_MIN, CONFIDENCE_MEDIUM_MIN
from ..models.match import Confidence


class ConfidenceCalculator:
    """
    Maps a score in [0, 1] to a confidence band.

    Confidence levels:
    - HIGH: score >= 0.7, usually safe to auto-confirm
    - MEDIUM: score >= 0.4, worth a look
    - LOW: any positive score, manual verification recommended
    - NONE: zero score
    """

    def __init__(
        self,
        high_min: float = CONFIDENCE_HIGH_MIN,
        medium_min: float = CONFIDENCE_MEDIUM_MIN
    ):
        """Initialize confidence calculator."""
        self.logger = logging.getLogger('process.matcher.scoring.confidence')
        self.high_min = high_min
        self.medium_min = medium_min

    def calculate(self, score: float) -> Confidence:
        """
        Calculate confidence level.

        Args:
            score: Final score

        Returns:
            Confidence band
        """
        if score >= self.high_min:
            return Confidence.HIGH
        elif score >= self.medium_min:
            return Confidence.MEDIUM
        elif score > 0:
            return Confidence.LOW
        return Confidence.NONE


__all__ = ['ConfidenceCalculator']
