# Path: doc_match/process/matcher/series/series_detector.py
"""
Series Detector

Finds numbered document series in a batch of references, infers a
path template from the best match of a series' first item, and
generates path suggestions for the remaining items.
"""

import re
from typing import Optional, Iterable

from doc_match.core.logger.ipo_logging import get_process_logger

from ....config_loader import DEFAULT_SERIES_MATCH_THRESHOLD, DEFAULT_SERIES_CONFIDENCE
from ..models.learning import ScoringWeights
from ..models.series import (
    SeriesItem,
    SeriesGroup,
    PathTemplate,
    SeriesSuggestion,
)
from ..scoring.similarity import SimilarityScorer
from ..text.normalizer import basename
from .increments import classify_increment
from .series_patterns import parse_series_item


NUMBER_PLACEHOLDER = '{number}'
SERIES_PLACEHOLDER = '{series}'

_DIGIT_RUN = re.compile(r'\d+')


class SeriesDetector:
    """
    Detects series and generates bulk path suggestions.

    Example:
        detector = SeriesDetector()
        groups = detector.detect_patterns(["CW-1", "CW-2", "CW-3"])
        groups[0].series_key        # 'witness:CW'
        groups[0].detected_increment  # 1

        template = detector.find_path_pattern(groups[0], available_paths)
        if template:
            suggestions = detector.generate_paths_for_series(groups[0], template)
    """

    def __init__(
        self,
        scorer: Optional[SimilarityScorer] = None,
        match_threshold: float = DEFAULT_SERIES_MATCH_THRESHOLD,
        confidence: float = DEFAULT_SERIES_CONFIDENCE
    ):
        """
        Initialize series detector.

        Args:
            scorer: Similarity scorer for template inference
            match_threshold: Minimum score for the first item's match
            confidence: Fixed confidence of generated suggestions
        """
        self.logger = get_process_logger('matcher.series')
        self.scorer = scorer or SimilarityScorer()
        self.match_threshold = match_threshold
        self.confidence = confidence

    # ==========================================================================
    # DETECTION
    # ==========================================================================

    def detect_patterns(self, references: Iterable[str]) -> list[SeriesGroup]:
        """
        Group references into series.

        References sharing a series key are grouped and sorted by
        number. Groups with fewer than two items are not series.

        Args:
            references: Reference texts, usually the unmatched ones

        Returns:
            Series groups in order of first appearance
        """
        buckets: dict[str, tuple] = {}

        for reference in references:
            parsed = parse_series_item(reference)
            if parsed is None:
                continue
            series_type, item = parsed
            key = f"{series_type.value}:{item.series}"
            if key not in buckets:
                buckets[key] = (series_type, item.series, [])
            buckets[key][2].append(item)

        groups = []
        for key, (series_type, series, items) in buckets.items():
            if len(items) < 2:
                continue
            items = sorted(items, key=lambda i: i.number)
            increment, pattern = classify_increment([i.number for i in items])
            groups.append(SeriesGroup(
                type=series_type,
                series_key=key,
                series=series,
                items=items,
                detected_increment=increment,
                increment_pattern=pattern,
            ))

        self.logger.info(
            f"[SERIES] Detected {len(groups)} series "
            f"covering {sum(g.size for g in groups)} references"
        )
        return groups

    # ==========================================================================
    # TEMPLATE INFERENCE
    # ==========================================================================

    def find_path_pattern(
        self,
        group: SeriesGroup,
        candidates: Iterable[str],
        weights: Optional[ScoringWeights] = None
    ) -> Optional[PathTemplate]:
        """
        Infer a path template from the first item's best match.

        Args:
            group: Series group
            candidates: Available candidate paths
            weights: Current scoring weights

        Returns:
            PathTemplate, or None if no candidate clears the threshold
            or the matched path does not carry the item's number
        """
        if not group.items:
            return None

        first = group.first
        prepared = self.scorer.prepare(first.reference)

        best_path: Optional[str] = None
        best_score = 0.0
        for path in candidates:
            score = self.scorer.score_prepared(prepared, path, weights).score
            if score > best_score:
                best_path, best_score = path, score

        if best_path is None or best_score <= self.match_threshold:
            self.logger.debug(
                f"[SERIES] No template for {group.series_key}: "
                f"best score {best_score:.3f}"
            )
            return None

        template = self.build_template(best_path, first, best_score)
        if template is not None:
            self.logger.info(
                f"[SERIES] Template for {group.series_key}: {template.template}"
            )
        return template

    def build_template(
        self,
        path: str,
        item: SeriesItem,
        score: float = 1.0
    ) -> Optional[PathTemplate]:
        """
        Replace an item's number and series code in a path.

        The rightmost digit run in the file name equal to the item's
        number becomes {number}; a leading zero fixes the padding
        width. The series code, where present outside the number,
        becomes {series}.

        Args:
            path: Matched path for the item
            item: Series item the path belongs to
            score: Score of the match

        Returns:
            PathTemplate, or None if the number is not in the file name
        """
        name = basename(path)

        number_run = None
        for run in _DIGIT_RUN.finditer(name):
            if int(run.group(0)) == item.number:
                number_run = run
        if number_run is None:
            return None

        digits = number_run.group(0)
        pad_width = len(digits) if len(digits) > 1 and digits.startswith('0') else 0

        before = name[:number_run.start()]
        after = name[number_run.end():]
        if item.series:
            before = before.replace(item.series, SERIES_PLACEHOLDER)
            after = after.replace(item.series, SERIES_PLACEHOLDER)
        templated_name = before + NUMBER_PLACEHOLDER + after

        folder = path[:len(path) - len(name)]

        return PathTemplate(
            template=folder + templated_name,
            source_path=path,
            source_score=score,
            pad_width=pad_width,
        )

    # ==========================================================================
    # GENERATION
    # ==========================================================================

    def generate_paths_for_series(
        self,
        group: SeriesGroup,
        template: PathTemplate,
        pool: Optional[Iterable[str]] = None,
        available: Optional[Iterable[str]] = None
    ) -> list[SeriesSuggestion]:
        """
        Render a path for every item of a series.

        Args:
            group: Series group
            template: Template from find_path_pattern()
            pool: All candidate paths, to flag generated paths that exist
            available: Unused candidate paths

        Returns:
            One suggestion per item, fixed confidence
        """
        pool_set = set(pool) if pool is not None else set()
        available_set = set(available) if available is not None else set()

        suggestions = []
        for item in group.items:
            path = template.render(item.number, item.series)
            suggestions.append(SeriesSuggestion(
                reference=item.reference,
                path=path,
                confidence=self.confidence,
                exists=path in pool_set,
                available=path in available_set,
            ))

        ready = sum(1 for s in suggestions if s.exists and s.available)
        self.logger.debug(
            f"[SERIES] {group.series_key}: {ready}/{len(suggestions)} "
            f"generated paths exist and are available"
        )
        return suggestions


__all__ = [
    'SeriesDetector',
    'NUMBER_PLACEHOLDER',
    'SERIES_PLACEHOLDER',
]
