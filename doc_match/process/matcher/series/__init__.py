# Path: doc_match/process/matcher/series/__init__.py
"""
Series Detection

- series_patterns: closed set of series shapes in priority order
- series_detector: grouping, template inference, path generation
- increments: increment pattern classification
"""

from .increments import classify_increment
from .series_patterns import SeriesPattern, SERIES_PATTERNS, parse_series_item
from .series_detector import SeriesDetector, NUMBER_PLACEHOLDER, SERIES_PLACEHOLDER

__all__ = [
    'classify_increment',
    'SeriesPattern',
    'SERIES_PATTERNS',
    'parse_series_item',
    'SeriesDetector',
    'NUMBER_PLACEHOLDER',
    'SERIES_PLACEHOLDER',
]
