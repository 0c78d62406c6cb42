# Path: doc_match/process/matcher/scoring/similarity.py
"""
Similarity Scorer

Computes the base similarity in [0, 1] between a reference and a
candidate path from word-level and character-level sub-scores.

The scorer is pure: it reads the weights it is given and never
touches session state, so it can run on a worker thread.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Iterable

from rapidfuzz.distance import Levenshtein

from ....constants import (
    PARTIAL_WORD_CREDIT,
    PARTIAL_WORD_MIN_LENGTH,
    DEFAULT_WORD_WEIGHT,
    DEFAULT_CHARACTER_WEIGHT,
)
from ..models.learning import ScoringWeights
from ..text.normalizer import clean, key_terms, basename


@dataclass(frozen=True)
class SimilarityScore:
    """
    Base similarity with its sub-scores.

    Attributes:
        score: Weighted blend of word and character scores
        word_score: Token overlap score
        char_score: Normalized edit-distance similarity
        variant: Which reference form won ('full' or 'key_terms')
    """
    score: float
    word_score: float = 0.0
    char_score: float = 0.0
    variant: str = 'full'

    @classmethod
    def zero(cls) -> 'SimilarityScore':
        return cls(score=0.0)


@dataclass(frozen=True)
class PreparedReference:
    """Cleaned forms of a reference, computed once per search."""
    text: str
    variants: tuple[tuple[str, str, tuple[str, ...]], ...]

    @property
    def is_empty(self) -> bool:
        return not self.variants


def _is_number(token: str) -> bool:
    return token.isdigit()


def _token_credit(ref_token: str, path_token: str) -> float:
    """Credit for one reference token against one path token."""
    if ref_token == path_token:
        return 1.0
    if _is_number(ref_token) and _is_number(path_token):
        # "1" and "0001" name the same document
        return 1.0 if int(ref_token) == int(path_token) else 0.0
    shorter, longer = sorted((ref_token, path_token), key=len)
    if len(shorter) >= PARTIAL_WORD_MIN_LENGTH and (
        longer.startswith(shorter) or shorter in longer
    ):
        return PARTIAL_WORD_CREDIT
    return 0.0


def word_score(ref_words: Iterable[str], path_words: Iterable[str]) -> float:
    """
    Token overlap between two token lists.

    Each reference token earns its best credit against any path
    token (1 for exact, partial credit for prefix/substring). The
    sum is normalized by the larger token count.
    """
    ref_words = list(ref_words)
    path_words = list(path_words)
    if not ref_words or not path_words:
        return 0.0

    total = 0.0
    for ref_token in ref_words:
        best = 0.0
        for path_token in path_words:
            credit = _token_credit(ref_token, path_token)
            if credit > best:
                best = credit
                if best == 1.0:
                    break
        total += best

    return total / max(len(ref_words), len(path_words))


def char_score(left: str, right: str) -> float:
    """Normalized Levenshtein similarity, 1 - distance / max length."""
    if not left or not right:
        return 0.0
    return Levenshtein.normalized_similarity(left, right)


class SimilarityScorer:
    """
    Scores candidate paths against a reference.

    Two reference forms are tried, the full cleaned text and the
    identifying key terms (A5-01, CW-1, 3+ digit numbers); the
    better of the two is kept. Paths are compared by their cleaned
    file name.

    Example:
        scorer = SimilarityScorer()
        result = scorer.score_detail("Exhibit A5-02", "folder/A5-02-letter.pdf")
        result.score  # ~0.6
    """

    def __init__(self):
        """Initialize similarity scorer."""
        self.logger = logging.getLogger('process.matcher.scoring.similarity')

    def prepare(self, reference: str) -> PreparedReference:
        """
        Compute the cleaned forms of a reference once.

        Args:
            reference: Raw reference text

        Returns:
            PreparedReference with one variant per usable form
        """
        if not reference or not reference.strip():
            return PreparedReference(text=reference or '', variants=())

        variants = []
        full = clean(reference)
        if full:
            variants.append(('full', full, tuple(full.split(' '))))

        codes = key_terms(reference)
        if codes:
            keyed = clean(' '.join(codes))
            if keyed and keyed != full:
                variants.append(('key_terms', keyed, tuple(keyed.split(' '))))

        return PreparedReference(text=reference, variants=tuple(variants))

    def score(
        self,
        reference: str,
        path: str,
        weights: Optional[ScoringWeights] = None
    ) -> float:
        """
        Base similarity between a reference and a path.

        Args:
            reference: Raw reference text
            path: Candidate path
            weights: Current adaptive weights (defaults if None)

        Returns:
            Score in [0, 1]; 0 for empty input
        """
        return self.score_detail(reference, path, weights).score

    def score_detail(
        self,
        reference: str,
        path: str,
        weights: Optional[ScoringWeights] = None
    ) -> SimilarityScore:
        """Base similarity with sub-scores."""
        return self.score_prepared(self.prepare(reference), path, weights)

    def score_prepared(
        self,
        prepared: PreparedReference,
        path: str,
        weights: Optional[ScoringWeights] = None
    ) -> SimilarityScore:
        """
        Score a path against an already prepared reference.

        Args:
            prepared: Result of prepare()
            path: Candidate path
            weights: Current adaptive weights (defaults if None)

        Returns:
            SimilarityScore for the best reference variant
        """
        if prepared.is_empty or not path or not path.strip():
            return SimilarityScore.zero()

        target = clean(basename(path))
        if not target:
            return SimilarityScore.zero()
        target_words = target.split(' ')

        word_weight, char_weight = self._base_weights(weights)

        best = SimilarityScore.zero()
        for variant, text, tokens in prepared.variants:
            if text == target:
                return SimilarityScore(1.0, 1.0, 1.0, variant)
            w_score = word_score(tokens, target_words)
            c_score = char_score(text, target)
            blended = word_weight * w_score + char_weight * c_score
            if blended > best.score:
                best = SimilarityScore(
                    score=min(1.0, blended),
                    word_score=w_score,
                    char_score=c_score,
                    variant=variant,
                )

        return best

    def score_many(
        self,
        reference: str,
        candidates: Iterable[tuple[int, str]],
        weights: Optional[ScoringWeights] = None
    ) -> list[tuple[int, str, SimilarityScore]]:
        """
        Score a batch of (index, path) candidates.

        Pure: safe to call from a worker thread.

        Returns:
            List of (index, path, SimilarityScore) in input order
        """
        prepared = self.prepare(reference)
        results = [
            (index, path, self.score_prepared(prepared, path, weights))
            for index, path in candidates
        ]
        self.logger.debug(
            f"[SCORE] '{reference}' against {len(results)} candidates"
        )
        return results

    def _base_weights(self, weights: Optional[ScoringWeights]) -> tuple[float, float]:
        """Word and character weights renormalized to sum to 1."""
        if weights is None:
            word, character = DEFAULT_WORD_WEIGHT, DEFAULT_CHARACTER_WEIGHT
        else:
            word, character = weights.word, weights.character
        total = word + character
        if total <= 0:
            return 0.5, 0.5
        return word / total, character / total


__all__ = [
    'SimilarityScorer',
    'SimilarityScore',
    'PreparedReference',
    'word_score',
    'char_score',
]
