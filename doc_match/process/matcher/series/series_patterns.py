# Path: doc_match/process/matcher/series/series_patterns.py
"""
Series Patterns

The closed set of series shapes a reference can belong to, tried
in fixed priority order: Exhibit, Appendix, Witness, Document.
Each variant pairs a regular expression with an extraction
function; the first variant that extracts an item wins.
"""

import re
from dataclasses import dataclass
from typing import Callable, Optional

from ....constants import SeriesType
from ..models.series import SeriesItem


def _description(value: Optional[str]) -> Optional[str]:
    value = (value or '').strip()
    return value or None


def _extract_exhibit(match: re.Match, reference: str) -> SeriesItem:
    # "Exhibit A5-03 - Claimant Letter"
    return SeriesItem(
        reference=reference,
        number=int(match.group(2)),
        series=match.group(1).upper(),
        description=_description(match.group(3)),
    )


def _extract_appendix(match: re.Match, reference: str) -> SeriesItem:
    # "Appendix 4 to Statement of Claim - Chronology"
    return SeriesItem(
        reference=reference,
        number=int(match.group(1)),
        series=(match.group(2) or '').strip(),
        description=_description(match.group(3)),
    )


def _extract_witness(match: re.Match, reference: str) -> SeriesItem:
    # "CW-2 - Witness Statement of J. Smith"
    return SeriesItem(
        reference=reference,
        number=int(match.group(2)),
        series=match.group(1).upper(),
        description=_description(match.group(3)),
    )


def _extract_document(match: re.Match, reference: str) -> SeriesItem:
    # "RDCC 0042 - Board Minutes"
    return SeriesItem(
        reference=reference,
        number=int(match.group(2)),
        series=match.group(1),
        description=_description(match.group(3)),
    )


@dataclass(frozen=True)
class SeriesPattern:
    """
    One series shape.

    Attributes:
        series_type: Tag of the shape
        regex: Compiled expression matched against the whole reference
        extract: Builds a SeriesItem from a successful match
    """
    series_type: SeriesType
    regex: re.Pattern
    extract: Callable[[re.Match, str], SeriesItem]

    def parse(self, reference: str) -> Optional[SeriesItem]:
        """Extract an item, or None if the reference has another shape."""
        match = self.regex.match(reference.strip())
        if match is None:
            return None
        return self.extract(match, reference)


SERIES_PATTERNS: tuple[SeriesPattern, ...] = (
    SeriesPattern(
        SeriesType.EXHIBIT,
        re.compile(r'^Exhibit\s+([A-Z]+\d*)-(\d+)(?:\s*[-–]\s*(.+))?$', re.IGNORECASE),
        _extract_exhibit,
    ),
    SeriesPattern(
        SeriesType.APPENDIX,
        re.compile(r'^Appendix\s+(\d+)(?:\s+to\s+(.+?))?(?:\s*[-–]\s*(.+))?$', re.IGNORECASE),
        _extract_appendix,
    ),
    SeriesPattern(
        SeriesType.WITNESS,
        re.compile(r'^([CR]W)-(\d+)\s*(?:[-–]\s*)?(.+)?$', re.IGNORECASE),
        _extract_witness,
    ),
    SeriesPattern(
        SeriesType.DOCUMENT,
        re.compile(r'^([A-Z]+)\s*(\d{4,})(?:\s*[-–]\s*(.+))?$'),
        _extract_document,
    ),
)


def parse_series_item(reference: str) -> Optional[tuple[SeriesType, SeriesItem]]:
    """
    Recognize a reference as a series member.

    Args:
        reference: Reference text

    Returns:
        (series type, item) for the first matching shape, or None
    """
    if not reference or not reference.strip():
        return None
    for pattern in SERIES_PATTERNS:
        item = pattern.parse(reference)
        if item is not None:
            return pattern.series_type, item
    return None


__all__ = [
    'SeriesPattern',
    'SERIES_PATTERNS',
    'parse_series_item',
]
